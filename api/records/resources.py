"""
Resource descriptors.

A `Resource` says everything the generic repository/router need to know about
one table: its columns, the defaults applied on create, how a list is
ordered, and which column carries the owner email.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

TEXT = "text"
INTEGER = "integer"
FLAG = "flag"

_SQL_TYPES = {TEXT: "TEXT", INTEGER: "INTEGER", FLAG: "INTEGER"}


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _to_flag(value: Any) -> int:
    if isinstance(value, str):
        return 0 if value.strip().lower() in {"", "0", "false", "no", "off"} else 1
    return 1 if value else 0


@dataclass(frozen=True)
class Column:
    name: str
    kind: str = TEXT
    default: Any = None

    @property
    def sql_type(self) -> str:
        return _SQL_TYPES[self.kind]

    @property
    def ddl(self) -> str:
        if self.default is None:
            return f"{self.name} {self.sql_type}"
        if isinstance(self.default, str):
            return f"{self.name} {self.sql_type} DEFAULT '{self.default}'"
        return f"{self.name} {self.sql_type} DEFAULT {self.default}"

    def coerce(self, value: Any) -> Any:
        if self.kind == FLAG:
            return _to_flag(value)
        return value

    def value_for_create(self, value: Any) -> Any:
        # Falsy input falls back to the default (progress 0, empty category).
        if self.default is not None and not value:
            return self.coerce(self.default)
        return self.coerce(value)


@dataclass(frozen=True)
class Resource:
    name: str
    table: str
    label: str
    columns: tuple[Column, ...]
    order_by: str
    descending: bool = False
    owner_column: str = "user_email"
    owner_required: bool = True
    timestamp_column: str | None = "created_date"
    owner_references_users: bool = True
    list_aliases: tuple[str, ...] = ()
    clock: Callable[[], str] = field(default=utc_now_iso, compare=False, repr=False)

    @property
    def mutable_columns(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    @property
    def insert_columns(self) -> tuple[str, ...]:
        cols = (self.owner_column, *self.mutable_columns)
        if self.timestamp_column:
            cols = (*cols, self.timestamp_column)
        return cols

    @property
    def all_columns(self) -> tuple[str, ...]:
        return ("id", *self.insert_columns)

    @property
    def order_clause(self) -> str:
        direction = "DESC" if self.descending else "ASC"
        return f"{self.order_by} {direction}, id {direction}"

    def ddl(self, primary_key_ddl: str) -> str:
        parts = [f"id {primary_key_ddl}", f"{self.owner_column} TEXT"]
        parts.extend(col.ddl for col in self.columns)
        if self.timestamp_column:
            parts.append(f"{self.timestamp_column} TEXT")
        if self.owner_references_users:
            parts.append(f"FOREIGN KEY({self.owner_column}) REFERENCES users(email)")
        body = ",\n  ".join(parts)
        return f"CREATE TABLE IF NOT EXISTS {self.table} (\n  {body}\n)"


@dataclass(frozen=True)
class View:
    """
    External field names for a resource, used by surfaces whose clients expect
    different keys than the table columns. Unmapped columns keep their names.
    """

    renames: dict[str, str]
    list_columns: tuple[str, ...] | None = None

    def to_external(self, row: dict[str, Any], *, columns: tuple[str, ...] | None = None) -> dict[str, Any]:
        keys = columns if columns is not None else tuple(row)
        return {self.renames.get(k, k): row.get(k) for k in keys}

    def external_name(self, column: str) -> str:
        return self.renames.get(column, column)


IDEAS = Resource(
    name="ideas",
    table="ideas",
    label="idea",
    columns=(
        Column("title"),
        Column("content"),
        Column("category", default="general"),
    ),
    order_by="created_date",
    descending=True,
)

NOTES = Resource(
    name="notes",
    table="notes",
    label="note",
    columns=(
        Column("title"),
        Column("content"),
    ),
    order_by="created_date",
    descending=True,
)

CAREER_GOALS = Resource(
    name="career_goals",
    table="career_goals",
    label="career goal",
    columns=(
        Column("title"),
        Column("description"),
        Column("progress", kind=INTEGER, default=0),
        Column("goal_type", default="general"),
        Column("target_date"),
    ),
    order_by="created_date",
    descending=True,
    list_aliases=("career",),
)

FUTURE_WORK = Resource(
    name="future_work",
    table="future_work",
    label="future work",
    columns=(
        Column("title"),
        Column("description"),
        Column("priority", default="medium"),
        Column("timeline"),
    ),
    order_by="created_date",
    descending=True,
    list_aliases=("future",),
)

DEADLINES = Resource(
    name="deadlines",
    table="deadlines",
    label="deadline",
    columns=(
        Column("title"),
        Column("description"),
        Column("due_date"),
        Column("priority", default="medium"),
        Column("status", default="pending"),
    ),
    order_by="due_date",
)

CALENDAR_EVENTS = Resource(
    name="calendar_events",
    table="calendar_events",
    label="event",
    columns=(
        Column("title"),
        Column("description"),
        Column("event_date"),
        Column("start_time"),
        Column("end_time"),
        Column("repeat_weekly", kind=FLAG, default=0),
    ),
    order_by="event_date",
)

MEETINGS = Resource(
    name="meetings",
    table="meetings",
    label="meeting",
    columns=(
        Column("date"),
        Column("description"),
    ),
    order_by="date",
    owner_column="colleague_email",
    owner_required=False,
    timestamp_column=None,
    owner_references_users=False,
)

# The dashboard's calendar talks in short camelCase names.
EVENTS_VIEW = View(
    renames={
        "user_email": "userEmail",
        "event_date": "date",
        "start_time": "start",
        "end_time": "end",
        "repeat_weekly": "repeatWeekly",
    },
    list_columns=("id", "title", "description", "event_date", "start_time", "end_time", "repeat_weekly"),
)

RESOURCES: tuple[Resource, ...] = (
    MEETINGS,
    IDEAS,
    NOTES,
    CAREER_GOALS,
    FUTURE_WORK,
    DEADLINES,
    CALENDAR_EVENTS,
)
