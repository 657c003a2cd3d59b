"""MeasureAggregator: turns an indexed scan into per-file measure records.

For every file node:
    1. Copy the scalar metrics listed in FILE_MEASURES.
    2. Bucket the complexity of the file's functions.
    3. Bucket the file's own complexity (one value, rolled up later by the sink).

Files are independent, so large passes are spread over a thread pool. The
index is read-only and every builder belongs to one file, so no locking is
needed. Any error aborts the whole pass and nothing is returned.
"""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import List, Optional

from .config import DistributionConfig
from .distribution import RangeDistribution, RangeDistributionBuilder
from .index import NodeIndex, NodeKind, SourceNode
from .logging_config import get_logger
from .metrics import FILE_MEASURES, Measure, Metric
from .models import MeasureRecord

logger = get_logger(__name__)


class MeasureAggregator:
    """Produces one MeasureRecord per file node of an index.

    Args:
        distributions:      Bucket bounds for both distributions.
        workers:            Max parallel workers. 1 disables the pool.
        parallel_threshold: Passes with fewer files than this run sequentially.
    """

    def __init__(
        self,
        distributions: Optional[DistributionConfig] = None,
        workers: int = 1,
        parallel_threshold: int = 10,
    ) -> None:
        self.distributions = distributions or DistributionConfig()
        self.workers = max(1, workers)
        self.parallel_threshold = parallel_threshold

    def aggregate(self, index: NodeIndex) -> List[MeasureRecord]:
        """Build the records for every file in the index.

        Returns:
            Records sorted by file key.

        Raises:
            MissingMetricError: If a file or function lacks a required metric.
        """
        files = sorted(index.by_type(NodeKind.FILE), key=lambda node: node.key)

        if self.workers == 1 or len(files) < self.parallel_threshold:
            records = [self.measure_file(index, node) for node in files]
        else:
            records = self._aggregate_parallel(index, files)
            records.sort(key=lambda record: record.key)

        logger.debug(f"Aggregated measures for {len(records)} files")
        return records

    def _aggregate_parallel(self, index: NodeIndex, files: List[SourceNode]) -> List[MeasureRecord]:
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(self.measure_file, index, node) for node in files]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in pending:
                future.cancel()
            for future in done:
                error = future.exception()
                if error is not None:
                    raise error
            return [future.result() for future in futures]

    def measure_file(self, index: NodeIndex, file_node: SourceNode) -> MeasureRecord:
        """Build the record for a single file node."""
        measures = {measure: file_node.get(metric) for metric, measure in FILE_MEASURES.items()}
        return MeasureRecord(
            key=file_node.key,
            measures=measures,
            function_complexity_distribution=self.function_complexity(index, file_node),
            file_complexity_distribution=self.file_complexity(file_node),
        )

    def function_complexity(self, index: NodeIndex, file_node: SourceNode) -> RangeDistribution:
        builder = RangeDistributionBuilder(
            Measure.FUNCTION_COMPLEXITY_DISTRIBUTION,
            self.distributions.function_bottom_limits,
        )
        for function in index.by_parent_and_type(file_node, NodeKind.FUNCTION):
            builder.add(function.get(Metric.COMPLEXITY))
        return builder.build()

    def file_complexity(self, file_node: SourceNode) -> RangeDistribution:
        builder = RangeDistributionBuilder(
            Measure.FILE_COMPLEXITY_DISTRIBUTION,
            self.distributions.file_bottom_limits,
        )
        builder.add(file_node.get(Metric.COMPLEXITY))
        return builder.build()
