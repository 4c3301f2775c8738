"""
Diagnostics Module

Builds the remediation prompt for a failing foreign key constraint.

Usage:
    from fkdoctor.diagnostics import DiagnosticContextBuilder, SchemaInspector

    inspector = SchemaInspector(connector, schema="mautic")
    prompt = await DiagnosticContextBuilder(inspector).generate_prompt(
        error_message, "FK_818C32519EB6921"
    )
"""

from fkdoctor.diagnostics.builder import (
    ConstraintNotFoundError,
    DiagnosticContextBuilder,
    DiagnosticsError,
)
from fkdoctor.diagnostics.escaping import escape_identifier, escape_literal
from fkdoctor.diagnostics.inspector import SchemaInspector
from fkdoctor.diagnostics.models import ConstraintDescriptor, DiagnosticContext, TableFacts
from fkdoctor.diagnostics.prompt import assemble_prompt

__all__ = [
    "ConstraintDescriptor",
    "ConstraintNotFoundError",
    "DiagnosticContext",
    "DiagnosticContextBuilder",
    "DiagnosticsError",
    "SchemaInspector",
    "TableFacts",
    "assemble_prompt",
    "escape_identifier",
    "escape_literal",
]
