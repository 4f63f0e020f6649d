"""
Schema bootstrap, run once per process start.

Tables are created with `CREATE TABLE IF NOT EXISTS`; afterwards the projects
table is additively patched with columns that older databases lack. Running
this against an initialized database is a no-op, so it is safe on every
restart. Nothing here ever drops or renames a column.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from projects.schemas import PATCHED_COLUMNS
from records.resources import RESOURCES

from . import db

logger = logging.getLogger(__name__)

_PROJECT_TEXT_COLUMNS = (
    "project_title",
    "notes",
    "colleague_name",
    "colleague_phone",
    "colleague_email",
    "colleague_address1",
    "colleague_address2",
    "colleague_address3",
    "your_name",
    "your_phone",
    "your_email",
    "your_address1",
    "your_address2",
    "your_address3",
    "objectives",
    "timeline",
    "primary_audience",
    "secondary_audience",
    "call_action",
    "competition",
    "graphics",
    "photography",
    "multimedia",
    "other_info",
    "client_name",
    "client_comments",
    "approval_date",
    "approval_signature",
)


@dataclass(frozen=True)
class SchemaReport:
    tables: int
    patched: tuple[str, ...]


def base_tables(primary_key_ddl: str) -> list[str]:
    project_columns = ",\n  ".join(f"{name} TEXT" for name in _PROJECT_TEXT_COLUMNS)
    return [
        f"""CREATE TABLE IF NOT EXISTS users (
  id {primary_key_ddl},
  email TEXT UNIQUE,
  password TEXT
)""",
        f"""CREATE TABLE IF NOT EXISTS projects (
  id {primary_key_ddl},
  name TEXT,
  owner_email TEXT,
  colleagues TEXT DEFAULT '[]',
  {project_columns}
)""",
        # Declared for older clients; no endpoint reads or writes it.
        f"""CREATE TABLE IF NOT EXISTS colleagues (
  id {primary_key_ddl},
  project_id INTEGER,
  name TEXT,
  email TEXT,
  FOREIGN KEY(project_id) REFERENCES projects(id)
)""",
    ]


def table_statements(primary_key_ddl: str) -> list[str]:
    statements = base_tables(primary_key_ddl)
    statements.extend(resource.ddl(primary_key_ddl) for resource in RESOURCES)
    return statements


async def init_schema() -> SchemaReport:
    statements = table_statements(db.backend().primary_key_ddl)
    for statement in statements:
        await db.execute(statement)

    patched: list[str] = []
    for column in PATCHED_COLUMNS:
        if await db.add_column("projects", column, "TEXT"):
            patched.append(column)

    report = SchemaReport(tables=len(statements), patched=tuple(patched))
    logger.info("schema_ready tables=%s patched=%s", report.tables, ",".join(report.patched) or "-")
    return report
