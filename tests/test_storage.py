import sqlite3

import pytest

from snip.storage import connect, ensure_schema, get_db_path


@pytest.fixture
def conn(tmp_path):
    connection = connect(tmp_path / "store.db")
    yield connection
    connection.close()


def _names(connection, kind):
    rows = connection.execute(
        "SELECT name FROM sqlite_master WHERE type = ?", (kind,)
    ).fetchall()
    return {row[0] for row in rows}


def test_get_db_path_creates_directory(tmp_path):
    base = tmp_path / "nested" / ".snip"
    path = get_db_path(base)
    assert base.is_dir()
    assert path.name == "notes.db"
    assert path.parent == base


def test_connect_creates_all_tables(conn):
    tables = _names(conn, "table")
    expected = {
        "notes",
        "tags",
        "notes_tags",
        "notes_fts",
        "projects",
        "tasks",
        "checklists",
        "checklist_items",
        "db_analyses",
        "error_knowledge_base",
    }
    assert expected <= tables


def test_connect_creates_triggers(conn):
    assert {"notes_fts_ai", "notes_fts_au", "notes_fts_ad"} <= _names(conn, "trigger")


def test_insert_trigger_feeds_full_text_index(conn):
    conn.execute("INSERT INTO notes(title, content) VALUES ('Vacuum', 'run analyze weekly')")
    rows = conn.execute(
        "SELECT title FROM notes_fts WHERE notes_fts MATCH 'analyze'"
    ).fetchall()
    assert rows == [("Vacuum",)]


def test_update_and_delete_triggers(conn):
    cursor = conn.execute("INSERT INTO notes(title, content) VALUES ('a', 'old text')")
    note_id = cursor.lastrowid
    conn.execute("UPDATE notes SET content = 'fresh text' WHERE id = ?", (note_id,))
    assert conn.execute(
        "SELECT count(*) FROM notes_fts WHERE notes_fts MATCH 'fresh'"
    ).fetchone()[0] == 1
    assert conn.execute(
        "SELECT count(*) FROM notes_fts WHERE notes_fts MATCH 'old'"
    ).fetchone()[0] == 0
    conn.execute("DELETE FROM notes WHERE id = ?", (note_id,))
    assert conn.execute("SELECT count(*) FROM notes_fts").fetchone()[0] == 0


def test_defaults_of_projects_and_tasks(conn):
    project_id = conn.execute("INSERT INTO projects(name) VALUES ('p')").lastrowid
    conn.execute("INSERT INTO tasks(project_id, title) VALUES (?, 't')", (project_id,))
    assert conn.execute("SELECT status FROM projects").fetchone() == ("active",)
    assert conn.execute("SELECT status, priority FROM tasks").fetchone() == (
        "pending",
        "medium",
    )


def test_checklist_item_defaults(conn):
    checklist_id = conn.execute("INSERT INTO checklists(title) VALUES ('c')").lastrowid
    conn.execute(
        "INSERT INTO checklist_items(checklist_id, title) VALUES (?, 'i')",
        (checklist_id,),
    )
    assert conn.execute(
        "SELECT completed, item_order FROM checklist_items"
    ).fetchone() == (0, 0)


def test_ensure_schema_is_idempotent(conn):
    conn.execute("INSERT INTO notes(title, content) VALUES ('keep', 'me')")
    conn.commit()
    ensure_schema(conn)
    assert conn.execute("SELECT count(*) FROM notes").fetchone()[0] == 1
    assert conn.execute("SELECT count(*) FROM notes_fts").fetchone()[0] == 1


def test_reopen_keeps_data(tmp_path):
    path = tmp_path / "store.db"
    first = connect(path)
    first.execute("INSERT INTO tags(name) VALUES ('sql')")
    first.commit()
    first.close()
    second = connect(path)
    try:
        assert second.execute("SELECT name FROM tags").fetchall() == [("sql",)]
    finally:
        second.close()


def test_notes_title_is_required(conn):
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("INSERT INTO notes(content) VALUES ('no title')")