"""Remediation prompt assembly."""

from __future__ import annotations

import datetime
import json
from decimal import Decimal
from typing import Any

from fkdoctor.diagnostics.models import DiagnosticContext
from fkdoctor.prompts.loader import PromptLoader

TEMPLATE = "diagnostics/fk_remediation.md"


def _json_default(value: Any) -> Any:
    # Types mysql-connector returns that json cannot encode natively.
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(value: Any) -> str:
    """Pretty-print rows for a human reader, keeping the rows' key order."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=_json_default)


def assemble_prompt(context: DiagnosticContext, loader: PromptLoader | None = None) -> str:
    """Render the fixed remediation template for ``context``."""
    loader = loader or PromptLoader()
    rendered = loader.render(
        TEMPLATE,
        product_name=context.product_name,
        product_version=context.product_version,
        error_message=context.error_message,
        constraint_json=to_json([row.as_row() for row in context.constraint]),
        referencing=context.referencing,
        referenced=context.referenced,
        referencing_structure_json=to_json(context.referencing.structure),
        referenced_structure_json=to_json(context.referenced.structure),
        foreign_keys_json=to_json(context.foreign_keys),
        constraints_json=to_json(context.constraints),
        referencing_sample_json=to_json(context.referencing.sample_rows),
        referenced_sample_json=to_json(context.referenced.sample_rows),
        referencing_indexes_json=to_json(context.referencing.indexes),
        referenced_indexes_json=to_json(context.referenced.indexes),
        database_version=context.database_version,
    )
    return rendered.rstrip("\n")
