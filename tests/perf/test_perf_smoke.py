from __future__ import annotations

import time

import numpy as np

from chartdata.models.dataset import transform_to_dataset
from chartdata.services.render import render_dataset
from chartdata.services.series import get_colorize_group_series_columns

"""Performance smoke test: render a synthetic 10k row result.

The bound is lenient so CI stays stable; it only catches accidental
quadratic behavior in lookups.
"""

ROWS = 10_000


def test_render_throughput():
    rng = np.random.default_rng(42)
    regions = np.array(["east", "west", "north", "south"])
    columns = [
        [f"id{i}", str(regions[i % 4]), float(v), float(r)]
        for i, (v, r) in enumerate(zip(rng.uniform(0, 1e6, ROWS), rng.uniform(0, 1, ROWS)))
    ]
    metas = [{"name": "id"}, {"name": "region"}, {"name": "SUM(amount)"}, {"name": "ratio"}]
    sections = [
        {"type": "group", "rows": [{"colName": "id"}, {"colName": "region"}]},
        {
            "type": "aggregate",
            "rows": [
                {
                    "colName": "amount",
                    "aggregate": "SUM",
                    "format": {
                        "type": "numeric",
                        "numeric": {"decimalPlaces": 2, "unitKey": "thousand", "useThousandSeparator": True},
                    },
                },
                {"colName": "ratio", "format": {"type": "percentage", "percentage": {"decimalPlaces": 1}}},
            ],
        },
    ]

    start = time.perf_counter()
    dataset = transform_to_dataset(columns, metas, sections)
    result = render_dataset(dataset)
    buckets = get_colorize_group_series_columns(dataset, {"colName": "region"})
    elapsed = time.perf_counter() - start

    assert result.rows == ROWS
    assert result.formatted_cells == 2 * ROWS
    assert sum(len(rows) for b in buckets for rows in b.values()) == ROWS
    throughput = ROWS / elapsed
    assert throughput > 1_000, f"render too slow: {throughput:.0f} rows/s"
