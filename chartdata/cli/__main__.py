from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from chartdata.config.loader import (
    ConfigError,
    EngineConfig,
    InputError,
    load_engine_config,
    load_query_result,
)
from chartdata.formatting.value_formatter import ValueFormatter
from chartdata.logging.init import log_summary, setup_logging
from chartdata.models.data_section import ChartDataSectionType, as_sections
from chartdata.models.dataset import ChartDataSet, parse_meta_name, transform_to_dataset
from chartdata.models.field import FieldDescriptor
from chartdata.services.render import render_dataset, to_display_frame
from chartdata.services.series import get_colorize_group_series_columns
from chartdata.services.summary import render_summary_line
from chartdata.services.tooltip import get_series_tooltips_polar

"""CLI entrypoint: render a query result file as a formatted table.

Flow:
- Load engine config (optional) and the query result file
- Build the dataset and render every configured field
- Print the table, optional color buckets and tooltips, then the SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="chartdata", description="Render chart query results with field formats")
    p.add_argument("input", type=Path, help="Query result file (YAML or JSON)")
    p.add_argument("--config", type=Path, default=None, help="Engine config YAML")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--limit", type=int, default=None, help="Print at most N rows")
    p.add_argument("--color-field", default=None, help="Group rows by this column, e.g. 'profession' or 'SUM(amount)'")
    p.add_argument("--tooltips", action="store_true", help="Print the tooltip of every printed row")
    return p.parse_args(argv)


def _print_tooltips(
    dataset: ChartDataSet,
    sections: list[dict[str, Any]],
    cfg: EngineConfig,
    formatter: ValueFormatter,
    limit: int | None,
) -> None:
    by_type: dict[ChartDataSectionType, list[FieldDescriptor]] = {t: [] for t in ChartDataSectionType}
    for section in as_sections(sections):
        if section.type in {t.value for t in ChartDataSectionType}:
            by_type[ChartDataSectionType(section.type)].extend(section.rows)
    rows = dataset if limit is None else dataset[:limit]
    for row in rows:
        param = {"data": {"rowData": row.convert_to_case_sensitive_object()}}
        tooltip = get_series_tooltips_polar(
            dataset,
            param,
            by_type[ChartDataSectionType.GROUP],
            by_type[ChartDataSectionType.COLOR],
            by_type[ChartDataSectionType.AGGREGATE],
            by_type[ChartDataSectionType.INFO],
            by_type[ChartDataSectionType.SIZE],
            formatter=formatter,
            separator=cfg.tooltip.separator,
        )
        print(tooltip)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not pick up the test runner's arguments
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    try:
        cfg = load_engine_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    setup_logging("DEBUG" if args.debug else cfg.log_level)
    logger.debug("debug mode enabled")

    try:
        result = load_query_result(args.input)
    except (InputError, ConfigError) as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL

    logger.info(f"Rendering {args.input}")
    formatter = cfg.build_formatter()
    dataset = transform_to_dataset(result.columns, result.metas, result.sections)
    rendered = render_dataset(dataset, formatter)

    frame = to_display_frame(rendered)
    if args.limit is not None:
        frame = frame.head(args.limit)
    if not frame.empty:
        print(frame.to_string(index=False))

    if args.color_field:
        field = parse_meta_name(args.color_field)
        for bucket in get_colorize_group_series_columns(dataset, field, formatter):
            for key, rows in bucket.items():
                logger.info(f"color {key}: {len(rows)} rows")

    if args.tooltips:
        _print_tooltips(dataset, result.sections, cfg, formatter, args.limit)

    log_summary(render_summary_line(rendered)[len("SUMMARY "):])

    if rendered.missing_fields:
        return EXIT_PARTIAL
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
