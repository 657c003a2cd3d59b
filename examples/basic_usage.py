#!/usr/bin/env python3
"""
Example: measuring a project from a JSON node dump
"""

import sys
from pathlib import Path

from codemeasure import Measure, StaticMetricSource, measure

base_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(".")
dump = Path(sys.argv[2]) if len(sys.argv) > 2 else base_dir / "nodes.json"

sink = measure(StaticMetricSource.from_json(dump), base_dir)

for record in sink:
    print(
        f"{record.resource_path(base_dir.resolve())}: "
        f"ncloc={record.measures[Measure.NCLOC]:.0f} "
        f"complexity={record.measures[Measure.COMPLEXITY]:.0f} "
        f"functions={record.function_complexity_distribution.to_data()}"
    )

print()
print(f"File complexity across {len(sink)} files: {sink.project_file_complexity().to_data()}")
