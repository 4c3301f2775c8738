"""Read-only MySQL catalog queries used to diagnose a foreign key failure.

Placeholders in braces take values already passed through
``escape_identifier`` / ``escape_literal``. ``%s`` placeholders are bound by
the driver.
"""

from __future__ import annotations

FIND_CONSTRAINT = (
    "SELECT "
    "kcu.TABLE_NAME AS referencing_table, "
    "kcu.COLUMN_NAME AS referencing_column, "
    "kcu.REFERENCED_TABLE_NAME AS referenced_table, "
    "kcu.REFERENCED_COLUMN_NAME AS referenced_column, "
    "tc.CONSTRAINT_TYPE, "
    "c.DATA_TYPE AS referencing_data_type, "
    "c.CHARACTER_SET_NAME AS referencing_charset, "
    "c.COLLATION_NAME AS referencing_collation, "
    "c.COLUMN_TYPE AS referencing_column_type, "
    "c.IS_NULLABLE AS referencing_is_nullable, "
    "c.COLUMN_KEY AS referencing_key, "
    "c.COLUMN_DEFAULT AS referencing_default, "
    "c.EXTRA AS referencing_extra, "
    "rc.DATA_TYPE AS referenced_data_type, "
    "rc.CHARACTER_SET_NAME AS referenced_charset, "
    "rc.COLLATION_NAME AS referenced_collation, "
    "rc.COLUMN_TYPE AS referenced_column_type, "
    "rc.IS_NULLABLE AS referenced_is_nullable, "
    "rc.COLUMN_KEY AS referenced_key, "
    "rc.COLUMN_DEFAULT AS referenced_default, "
    "rc.EXTRA AS referenced_extra, "
    "rc.TABLE_SCHEMA AS schema_name "
    "FROM INFORMATION_SCHEMA.KEY_COLUMN_USAGE kcu "
    "JOIN INFORMATION_SCHEMA.TABLE_CONSTRAINTS tc "
    "  ON kcu.CONSTRAINT_NAME = tc.CONSTRAINT_NAME "
    " AND kcu.TABLE_SCHEMA = tc.TABLE_SCHEMA "
    "JOIN INFORMATION_SCHEMA.COLUMNS c "
    "  ON kcu.TABLE_SCHEMA = c.TABLE_SCHEMA "
    " AND kcu.TABLE_NAME = c.TABLE_NAME "
    " AND kcu.COLUMN_NAME = c.COLUMN_NAME "
    "JOIN INFORMATION_SCHEMA.COLUMNS rc "
    "  ON kcu.REFERENCED_TABLE_SCHEMA = rc.TABLE_SCHEMA "
    " AND kcu.REFERENCED_TABLE_NAME = rc.TABLE_NAME "
    " AND kcu.REFERENCED_COLUMN_NAME = rc.COLUMN_NAME "
    "WHERE kcu.TABLE_SCHEMA = {schema} "
    "AND tc.CONSTRAINT_TYPE = 'FOREIGN KEY' "
    "AND kcu.CONSTRAINT_NAME = {constraint_name} "
    "ORDER BY kcu.ORDINAL_POSITION"
)

SERVER_VERSION = "SELECT VERSION() AS version"

DESCRIBE_TABLE = "DESCRIBE {table}"

COUNT_ROWS = "SELECT COUNT(*) AS count FROM {table}"

LIST_INDEXES = "SHOW INDEX FROM {table}"

LIST_FOREIGN_KEYS = (
    "SELECT TABLE_NAME, COLUMN_NAME, CONSTRAINT_NAME, "
    "REFERENCED_TABLE_NAME, REFERENCED_COLUMN_NAME "
    "FROM INFORMATION_SCHEMA.KEY_COLUMN_USAGE "
    "WHERE TABLE_SCHEMA = %s "
    "AND REFERENCED_TABLE_NAME IS NOT NULL "
    "AND TABLE_NAME IN (%s, %s)"
)

LIST_CONSTRAINTS = (
    "SELECT TABLE_NAME, CONSTRAINT_NAME, CONSTRAINT_TYPE "
    "FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS "
    "WHERE TABLE_SCHEMA = {schema} "
    "AND TABLE_NAME IN ({table_a}, {table_b})"
)

SAMPLE_ROWS = "SELECT * FROM {table} LIMIT {limit:d}"
