"""
Diagnostic Context Builder

Sequences the schema inspector calls for one failing constraint:

1. Look up the constraint; no rows means the name is wrong and the build stops.
2. Take both table names from the first descriptor row.
3. Gather every table-scoped fact concurrently.
4. Hand the aggregate to the prompt assembler.
"""

from __future__ import annotations

import asyncio
import logging

from fkdoctor.diagnostics.inspector import SchemaInspector
from fkdoctor.diagnostics.models import DiagnosticContext, TableFacts
from fkdoctor.diagnostics.prompt import assemble_prompt
from fkdoctor.prompts.loader import PromptLoader

logger = logging.getLogger(__name__)


class DiagnosticsError(Exception):
    """Base exception for diagnosis failures."""

    pass


class ConstraintNotFoundError(DiagnosticsError):
    """The constraint lookup returned no rows."""

    def __init__(self, constraint_name: str):
        self.constraint_name = constraint_name
        super().__init__(f"No information found for constraint: {constraint_name}")


class DiagnosticContextBuilder:
    """Builds the DiagnosticContext and remediation prompt for one constraint."""

    def __init__(self, inspector: SchemaInspector, loader: PromptLoader | None = None) -> None:
        self._inspector = inspector
        self._loader = loader

    async def build(self, error_message: str, constraint_name: str) -> DiagnosticContext:
        """
        Gather every fact about ``constraint_name`` and its two tables.

        Raises:
            ConstraintNotFoundError: If the constraint matches no rows
            QueryError: If any query other than a sample fetch fails
        """
        inspector = self._inspector
        descriptors = await inspector.find_constraint(constraint_name)
        if not descriptors:
            raise ConstraintNotFoundError(constraint_name)

        referencing_table = descriptors[0].referencing_table
        referenced_table = descriptors[0].referenced_table
        logger.info(
            f"Inspecting {referencing_table} -> {referenced_table} for {constraint_name}",
            extra={
                "constraint_name": constraint_name,
                "column_pairs": len(descriptors),
            },
        )

        results = await asyncio.gather(
            inspector.server_version(),
            inspector.describe_table(referencing_table),
            inspector.describe_table(referenced_table),
            inspector.count_rows(referencing_table),
            inspector.count_rows(referenced_table),
            inspector.list_indexes(referencing_table),
            inspector.list_indexes(referenced_table),
            inspector.list_foreign_keys(referencing_table, referenced_table),
            inspector.list_constraints(referencing_table, referenced_table),
            inspector.sample_rows(referencing_table),
            inspector.sample_rows(referenced_table),
            return_exceptions=True,
        )
        # every query has settled before the first failure propagates
        for result in results:
            if isinstance(result, BaseException):
                raise result

        (
            database_version,
            referencing_structure,
            referenced_structure,
            referencing_count,
            referenced_count,
            referencing_indexes,
            referenced_indexes,
            foreign_keys,
            constraints,
            referencing_sample,
            referenced_sample,
        ) = results

        return DiagnosticContext(
            error_message=error_message,
            constraint_name=constraint_name,
            constraint=descriptors,
            referencing=TableFacts(
                name=referencing_table,
                structure=referencing_structure,
                row_count=referencing_count,
                indexes=referencing_indexes,
                sample_rows=referencing_sample,
            ),
            referenced=TableFacts(
                name=referenced_table,
                structure=referenced_structure,
                row_count=referenced_count,
                indexes=referenced_indexes,
                sample_rows=referenced_sample,
            ),
            foreign_keys=foreign_keys,
            constraints=constraints,
            database_version=database_version,
        )

    async def generate_prompt(self, error_message: str, constraint_name: str) -> str:
        """Build the context and render the remediation prompt."""
        context = await self.build(error_message, constraint_name)
        return assemble_prompt(context, self._loader)
