"""Public API for codemeasure.

measure() wires configuration, logging, the sensor and a sink together.
Callers that embed codemeasure in a larger host can build a MeasureSensor
directly instead.

Example:
    >>> from codemeasure import StaticMetricSource, measure
    >>>
    >>> source = StaticMetricSource.from_json(Path("nodes.json"))
    >>> sink = measure(source, "/path/to/project", verbose=True)
    >>> sink.project_file_complexity().to_data()
    '0=12;5=7;10=3;20=1;30=0;60=0;90=0'
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from .config import load_config
from .logging_config import get_logger, setup_logging
from .scanner import MetricSource, Project
from .sensor import MeasureSensor
from .sink import InMemoryMeasureSink, MeasureSink

logger = get_logger(__name__)


def measure(
    source: MetricSource,
    base_dir: Union[str, Path] = ".",
    files: Iterable[Union[str, Path]] = (),
    sink: Optional[MeasureSink] = None,
    config_file: Optional[Path] = None,
    source_charset: str = "UTF-8",
    **overrides,
) -> MeasureSink:
    """Run one measurement pass and return the sink holding the results.

    Args:
        source: Scanner that produces the metric-bearing nodes
        base_dir: Project root directory
        files: Source files to scan
        sink: Destination for the records (default: a new InMemoryMeasureSink)
        config_file: Optional explicit config file path
        source_charset: Encoding of the source files
        **overrides: Settings overrides (e.g. verbose=True, workers=4, log_file="measure.log")

    Returns:
        The sink the records were saved to.

    Raises:
        CodeMeasureError: If configuration is invalid or the pass fails
    """
    settings = load_config(config_file=config_file, **overrides)
    setup_logging(settings.verbosity, log_file=settings.log_file)
    logger.debug(f"Configuration loaded: {settings.verbosity} mode")

    project = Project(
        base_dir=Path(base_dir),
        source_charset=source_charset,
        main_files=tuple(Path(f) for f in files),
    )
    if sink is None:
        sink = InMemoryMeasureSink()

    MeasureSensor(source, settings).analyse(project, sink)
    return sink
