"""Machine-readable JSON rendering."""

from __future__ import annotations

import json
from pathlib import Path

from gqlvalidate.models.results import QueryInfo, ValidationSummary


def render_json(summary: ValidationSummary) -> str:
    return json.dumps(summary.to_report(), indent=2, ensure_ascii=False)


def render_query_list_json(queries: list[QueryInfo], directory: Path) -> str:
    output = {
        "directory": str(directory),
        "total_files": len(queries),
        "queries": [q.model_dump(exclude_none=True) for q in queries],
    }
    return json.dumps(output, indent=2, ensure_ascii=False)
