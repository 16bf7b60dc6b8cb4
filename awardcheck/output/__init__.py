"""Output generation: result tables and exports.

Re-exports key public functions for convenience.
"""

from awardcheck.output.report import (
    render_table,
    results_to_frame,
    write_results,
)

__all__ = [
    "render_table",
    "results_to_frame",
    "write_results",
]
