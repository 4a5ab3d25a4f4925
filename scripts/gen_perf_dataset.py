#!/usr/bin/env python3
"""Query-result generation script for performance testing.

Generates a synthetic query result (``columns`` / ``metas`` / ``sections``)
with parameterized rows, in the file format read by ``chartdata``:

- ``metas``: one entry per column; aggregated metrics are named ``FUNC(col)``
- ``columns``: one array of cells per row
- ``sections``: field configuration (dimensions + formatted metrics)

Output is YAML for ``.yml``/``.yaml`` paths and JSON otherwise.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
import yaml

REGIONS = ["East", "West", "North", "South", "Central"]
CATEGORIES = ["Electronics", "Clothing", "Books", "Food", "Sports", "Home"]


def generate_synthetic_frame(rows: int, metrics: int, seed: int = 42) -> pd.DataFrame:
    """Generate a result frame with dimension columns and numeric metrics.

    Column names already carry the aggregate (``SUM(amount_1)``) the way a
    query engine returns them.
    """
    rng = np.random.default_rng(seed)
    data: dict[str, Any] = {
        "region": rng.choice(REGIONS, rows).tolist(),
        "category": rng.choice(CATEGORIES, rows).tolist(),
        "order_date": pd.date_range("2023-01-01", periods=rows, freq="h").strftime("%Y%m%d").tolist(),
    }
    for i in range(1, metrics + 1):
        if i % 3 == 1:
            data[f"SUM(amount_{i})"] = np.round(rng.uniform(0.01, 99999.99, rows), 2)
        elif i % 3 == 2:
            data[f"COUNT(order_{i})"] = rng.integers(1, 1000, rows)
        else:
            data[f"AVG(ratio_{i})"] = np.round(rng.uniform(0, 1, rows), 4)
    return pd.DataFrame(data)


def _format_for(col: str) -> dict[str, Any]:
    if col.startswith("SUM("):
        return {
            "type": "currency",
            "currency": {"decimalPlaces": 2, "unitKey": "thousand", "useThousandSeparator": True, "currency": "USD"},
        }
    if col.startswith("AVG("):
        return {"type": "percentage", "percentage": {"decimalPlaces": 1}}
    if col == "order_date":
        return {"type": "date", "date": {"format": "YYYY-MM-DD"}}
    return {"type": "numeric", "numeric": {"decimalPlaces": 0, "useThousandSeparator": True}}


def build_query_result(frame: pd.DataFrame) -> dict[str, Any]:
    dimensions = []
    metrics = []
    for col in frame.columns:
        if "(" in col:
            aggregate, name = col[:-1].split("(", 1)
            metrics.append({"colName": name, "aggregate": aggregate, "format": _format_for(col)})
        else:
            dimensions.append({"colName": col, "format": _format_for(col)} if col == "order_date" else {"colName": col})
    return {
        "metas": [{"name": col} for col in frame.columns],
        # tolist() converts numpy scalars to plain Python values
        "columns": frame.astype(object).to_numpy().tolist(),
        "sections": [
            {"key": "dimension", "type": "group", "required": True, "rows": dimensions},
            {"key": "metrics", "type": "aggregate", "required": True, "rows": metrics},
        ],
    }


def write_query_result(output_path: Path, result: dict[str, Any]) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() in (".yml", ".yaml"):
        text = yaml.safe_dump(result, allow_unicode=True, sort_keys=False)
    else:
        text = json.dumps(result, ensure_ascii=False)
    output_path.write_text(text, encoding="utf-8")
    print(f"Created query result: {output_path}")
    print(f"  Rows: {len(result['columns']):,}")
    print(f"  Columns: {len(result['metas'])}")


def main() -> int:
    """Main CLI interface for dataset generation."""
    parser = argparse.ArgumentParser(
        description="Generate synthetic query results for performance testing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default 50k rows, 6 metrics
  %(prog)s result.json

  # Generate custom size dataset as YAML
  %(prog)s result.yml --rows 10000 --metrics 12 --seed 123
        """
    )
    parser.add_argument("output", type=Path, help="Output file path (.json, .yml or .yaml)")
    parser.add_argument("--rows", type=int, default=50_000, help="Number of rows (default: 50,000)")
    parser.add_argument("--metrics", type=int, default=6, help="Number of metric columns (default: 6)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducible data (default: 42)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be generated without creating files"
    )
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.metrics < 0:
        print("Error: --metrics must not be negative", file=sys.stderr)
        return 1

    print("Dataset generation plan:")
    print(f"  Output file: {args.output}")
    print(f"  Rows: {args.rows:,}")
    print(f"  Columns: {3 + args.metrics}")
    print(f"  Random seed: {args.seed}")

    if args.dry_run:
        print("\n[DRY RUN] Would generate files but not creating them.")
        return 0

    try:
        frame = generate_synthetic_frame(args.rows, args.metrics, args.seed)
        write_query_result(args.output, build_query_result(frame))
    except OSError as e:
        print(f"\nError writing dataset: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
