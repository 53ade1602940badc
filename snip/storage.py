"""The local SQLite store: location, schema and connection."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path

DB_FILENAME = "notes.db"

_TEXT = "TEXT"
_REQUIRED = "TEXT NOT NULL"
_INT = "INTEGER"
_REQUIRED_INT = "INTEGER NOT NULL"
_STAMP = "DATETIME DEFAULT CURRENT_TIMESTAMP"
_TIMESTAMPS = (("created_at", _STAMP), ("updated_at", _STAMP))


@dataclass(frozen=True)
class _Table:
    name: str
    columns: tuple[tuple[str, str], ...]
    references: tuple[tuple[str, str], ...] = ()
    primary_key: tuple[str, ...] | None = None

    def ddl(self) -> str:
        parts = []
        if self.primary_key is None:
            parts.append("id INTEGER PRIMARY KEY AUTOINCREMENT")
        parts.extend(f"{name} {kind}" for name, kind in self.columns)
        if self.primary_key:
            parts.append(f"PRIMARY KEY ({', '.join(self.primary_key)})")
        parts.extend(
            f"FOREIGN KEY ({column}) REFERENCES {target}(id) ON DELETE CASCADE"
            for column, target in self.references
        )
        body = ",\n    ".join(parts)
        return f"CREATE TABLE IF NOT EXISTS {self.name} (\n    {body}\n);"


_TABLES = (
    _Table("notes", (("title", _REQUIRED), ("content", _REQUIRED), *_TIMESTAMPS)),
    _Table("tags", (("name", _REQUIRED),)),
    _Table(
        "notes_tags",
        (("note_id", _REQUIRED_INT), ("tag_id", _REQUIRED_INT)),
        references=(("note_id", "notes"), ("tag_id", "tags")),
        primary_key=("note_id", "tag_id"),
    ),
    _Table(
        "projects",
        (
            ("name", _REQUIRED),
            ("description", _TEXT),
            ("status", "TEXT DEFAULT 'active'"),
            *_TIMESTAMPS,
        ),
    ),
    _Table(
        "tasks",
        (
            ("project_id", _REQUIRED_INT),
            ("title", _REQUIRED),
            ("description", _TEXT),
            ("status", "TEXT DEFAULT 'pending'"),
            ("priority", "TEXT DEFAULT 'medium'"),
            ("due_date", "DATETIME"),
            *_TIMESTAMPS,
        ),
        references=(("project_id", "projects"),),
    ),
    _Table(
        "checklists",
        (
            ("task_id", _INT),
            ("project_id", _INT),
            ("title", _REQUIRED),
            ("description", _TEXT),
            *_TIMESTAMPS,
        ),
        references=(("task_id", "tasks"), ("project_id", "projects")),
    ),
    _Table(
        "checklist_items",
        (
            ("checklist_id", _REQUIRED_INT),
            ("title", _REQUIRED),
            ("description", _TEXT),
            ("completed", "INTEGER DEFAULT 0"),
            ("item_order", "INTEGER DEFAULT 0"),
            *_TIMESTAMPS,
        ),
        references=(("checklist_id", "checklists"),),
    ),
    _Table(
        "db_analyses",
        (
            ("title", _REQUIRED),
            ("database_type", _REQUIRED),
            ("analysis_type", _REQUIRED),
            ("connection_config", _REQUIRED),
            ("log_file_path", _TEXT),
            ("output_type", _REQUIRED),
            ("result", _TEXT),
            ("ai_insights", _TEXT),
            ("status", "TEXT DEFAULT 'pending'"),
            ("error_message", _TEXT),
            *_TIMESTAMPS,
        ),
    ),
    _Table(
        "error_knowledge_base",
        (
            ("database_type", _REQUIRED),
            ("error_code", _TEXT),
            ("error_message", _REQUIRED),
            ("error_pattern", _TEXT),
            ("solution", _REQUIRED),
            ("category", _TEXT),
            ("severity", _TEXT),
            *_TIMESTAMPS,
        ),
    ),
)

# (name prefix, table, column) for each single-column index.
_INDEXES = (
    ("notes", "notes", "title"),
    ("notes", "notes", "created_at"),
    ("projects", "projects", "status"),
    ("tasks", "tasks", "project_id"),
    ("tasks", "tasks", "status"),
    ("checklists", "checklists", "task_id"),
    ("checklists", "checklists", "project_id"),
    ("checklist_items", "checklist_items", "checklist_id"),
    ("db_analyses", "db_analyses", "database_type"),
    ("db_analyses", "db_analyses", "analysis_type"),
    ("db_analyses", "db_analyses", "status"),
    ("db_analyses", "db_analyses", "created_at"),
    ("error_kb", "error_knowledge_base", "database_type"),
    ("error_kb", "error_knowledge_base", "error_code"),
)


def _index_ddl(prefix: str, table: str, column: str) -> str:
    return f"CREATE INDEX IF NOT EXISTS idx_{prefix}_{column} ON {table}({column});"


def _full_text_ddl(source: str = "notes") -> list[str]:
    """Statements for the full-text mirror of ``source`` and its sync triggers."""
    fts = f"{source}_fts"
    fields = ("id", "title", "content")
    field_list = ", ".join(fields)
    new_values = ", ".join(f"new.{field}" for field in fields)
    assignments = ", ".join(f"{field} = new.{field}" for field in fields[1:])
    return [
        f"CREATE VIRTUAL TABLE IF NOT EXISTS {fts} USING fts4({field_list});",
        f"INSERT OR IGNORE INTO {fts}({field_list}) SELECT {field_list} FROM {source} "
        f"WHERE id NOT IN (SELECT id FROM {fts});",
        f"CREATE TRIGGER IF NOT EXISTS {fts}_ai AFTER INSERT ON {source} BEGIN "
        f"INSERT INTO {fts}({field_list}) VALUES ({new_values}); END;",
        f"CREATE TRIGGER IF NOT EXISTS {fts}_au AFTER UPDATE ON {source} BEGIN "
        f"UPDATE {fts} SET {assignments} WHERE id = old.id; END;",
        f"CREATE TRIGGER IF NOT EXISTS {fts}_ad AFTER DELETE ON {source} BEGIN "
        f"DELETE FROM {fts} WHERE id = old.id; END;",
    ]


SCHEMA = "\n\n".join(
    [
        *(table.ddl() for table in _TABLES),
        *(_index_ddl(*index) for index in _INDEXES),
        *_full_text_ddl(),
    ]
)


def get_db_path(base_dir: str | Path | None = None) -> Path:
    """Return the database file path, creating its directory.

    ``base_dir`` defaults to ``~/.snip``.
    """
    directory = Path(base_dir) if base_dir is not None else Path.home() / ".snip"
    directory.mkdir(parents=True, exist_ok=True)
    return directory / DB_FILENAME


def ensure_schema(connection: sqlite3.Connection) -> None:
    """Create every table, index, full-text table and trigger that is missing."""
    connection.executescript(SCHEMA)


def connect(path: str | Path | None = None) -> sqlite3.Connection:
    """Open the store at ``path`` (the default location if omitted) with its schema."""
    db_path = Path(path) if path is not None else get_db_path()
    connection = sqlite3.connect(db_path)
    try:
        ensure_schema(connection)
    except sqlite3.Error:
        connection.close()
        raise
    return connection