from __future__ import annotations

from ..models.render_result import RenderResult

"""SUMMARY line rendering for the render CLI.

Format:
SUMMARY rows={rows} columns={columns} fields={fields} formatted_cells={n}
passthrough_cells={n} missing_fields={n}
"""


def render_summary_line(result: RenderResult) -> str:
    """Render a SUMMARY line from a RenderResult.

    Examples:
        >>> result = RenderResult(rows=2, columns=3, fields=2, formatted_cells=4, passthrough_cells=0)
        >>> render_summary_line(result)
        'SUMMARY rows=2 columns=3 fields=2 formatted_cells=4 passthrough_cells=0 missing_fields=0'
    """
    return (
        f"SUMMARY rows={result.rows} "
        f"columns={result.columns} "
        f"fields={result.fields} "
        f"formatted_cells={result.formatted_cells} "
        f"passthrough_cells={result.passthrough_cells} "
        f"missing_fields={len(result.missing_fields)}"
    )
