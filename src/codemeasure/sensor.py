"""MeasureSensor: one complete measurement pass over a project.

    1. Build the scanner configuration from the project and settings
    2. Run the metric source over the project's main files
    3. Index the resulting nodes
    4. Aggregate per-file records
    5. Save every record to the sink

Records are only handed to the sink after all files aggregated cleanly, so a
failing pass never leaves a partial set of measures behind.

Usage:
    from codemeasure import MeasureSensor, InMemoryMeasureSink, Project, load_config

    sensor = MeasureSensor(scanner, load_config())
    sink = InMemoryMeasureSink()
    sensor.analyse(Project(base_dir=Path("."), main_files=files), sink)
"""

from __future__ import annotations

from typing import List, Optional

from .aggregator import MeasureAggregator
from .config import MeasureSettings
from .index import NodeIndex
from .logging_config import get_logger
from .models import MeasureRecord
from .scanner import MetricSource, Project, ScannerConfiguration, create_scanner_configuration
from .sink import MeasureSink

logger = get_logger(__name__)


class MeasureSensor:
    """Runs the scanner and saves per-file measures for a project."""

    def __init__(self, source: MetricSource, settings: Optional[MeasureSettings] = None) -> None:
        self.source = source
        self.settings = settings or MeasureSettings()
        self.aggregator = MeasureAggregator(
            distributions=self.settings.distributions,
            workers=self.settings.effective_workers,
            parallel_threshold=self.settings.parallel_threshold,
        )
        self.index: Optional[NodeIndex] = None

    def analyse(self, project: Project, sink: MeasureSink) -> List[MeasureRecord]:
        """Measure the project and save the records to `sink`.

        Returns:
            The saved records, sorted by file key.

        Raises:
            InvalidPathError: If the project base directory does not exist.
            MalformedIndexError: If the scanned nodes are inconsistent.
            MissingMetricError: If a node lacks a required metric.
        """
        configuration = self.create_configuration(project)
        logger.info(
            f"Scanning {len(project.main_files)} files under {configuration.base_dir}"
        )

        nodes = self.source.scan(list(project.main_files), configuration)
        self.index = NodeIndex.build(nodes)

        records = self.aggregator.aggregate(self.index)
        for record in records:
            sink.save(record)

        logger.info(f"Saved measures for {len(records)} files")
        return records

    def create_configuration(self, project: Project) -> ScannerConfiguration:
        return create_scanner_configuration(project, self.settings)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(source={self.source.__class__.__name__})"
