"""Boundary with the external AST scanner.

The scanner itself (lexer, parser, per-node metric computation) lives
outside this package. What lives here is the contract it is called through:

    ScannerConfiguration  what the scanner is configured with
    MetricSource          what a scanner must implement
    StaticMetricSource    a MetricSource over nodes that were produced earlier
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Protocol, Sequence, Tuple, runtime_checkable

from .config import MeasureSettings
from .exceptions import InvalidPathError, MalformedNodeError
from .index import SourceNode
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Project:
    """The project under analysis, as described by the host.

    Attributes:
        base_dir:       Project root directory.
        source_charset: Encoding of the source files.
        main_files:     Source files to scan.
    """

    base_dir: Path
    source_charset: str = "UTF-8"
    main_files: Tuple[Path, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ScannerConfiguration:
    """Configuration handed to the scanner. Not interpreted by this package."""

    charset: str
    base_dir: str
    defines: Tuple[str, ...] = ()
    include_directories: Tuple[str, ...] = ()


def create_scanner_configuration(project: Project, settings: MeasureSettings) -> ScannerConfiguration:
    """Build the scanner configuration for a project.

    Raises:
        InvalidPathError: If the project base directory does not exist.
    """
    base_dir = Path(project.base_dir)
    if not base_dir.is_dir():
        raise InvalidPathError(base_dir, "project base directory does not exist")

    return ScannerConfiguration(
        charset=project.source_charset,
        base_dir=str(base_dir.resolve()),
        defines=settings.defines,
        include_directories=settings.include_directories,
    )


@runtime_checkable
class MetricSource(Protocol):
    """Anything that turns source files into metric-bearing nodes."""

    def scan(
        self, files: Sequence[Path], configuration: ScannerConfiguration
    ) -> Iterable[SourceNode]:
        ...


class StaticMetricSource:
    """MetricSource over a node collection that already exists.

    Used to feed node dumps written by a separate scanner run, and in tests.
    The files and configuration passed to scan() are ignored.
    """

    def __init__(self, nodes: Iterable[SourceNode]) -> None:
        self._nodes: List[SourceNode] = list(nodes)

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> StaticMetricSource:
        return cls(SourceNode.from_dict(record) for record in records)

    @classmethod
    def from_json(cls, path: Path) -> StaticMetricSource:
        """Load a JSON node dump: a list of node objects, or {"nodes": [...]}."""
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise InvalidPathError(path, "node dump not found")
        except json.JSONDecodeError as e:
            raise MalformedNodeError(f"invalid JSON in {path}: {e}")

        if isinstance(data, dict):
            data = data.get("nodes")
        if not isinstance(data, list):
            raise MalformedNodeError(f"{path} does not contain a node list")

        source = cls.from_records(data)
        logger.debug(f"Loaded {len(source._nodes)} nodes from {path}")
        return source

    def scan(
        self, files: Sequence[Path], configuration: ScannerConfiguration
    ) -> List[SourceNode]:
        return list(self._nodes)
