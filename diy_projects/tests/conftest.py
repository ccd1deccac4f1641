import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

TABLES = [
    "project_category",
    "step",
    "material",
    "category",
    "project",
    "operation_log",
]


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "projects_test.db"
    # Point the app to this temp DB
    os.environ["DIY_PROJECTS_DB_PATH"] = str(path)
    schema = (_PROJECT_ROOT / "diy_projects" / "sql" / "projects_schema.sql").read_text(encoding="utf-8")
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(schema)
        conn.commit()
    finally:
        conn.close()
    from diy_projects.logs import ensure_log_schema
    ensure_log_schema()
    return str(path)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("DIY_PROJECTS_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in TABLES:
            conn.execute(f"DELETE FROM {t}")
        conn.execute("DELETE FROM sqlite_sequence")
        conn.commit()
    finally:
        conn.close()


@pytest.fixture()
def seed_children(tmp_db_path):
    """Insert a project with two materials, one step and one category; returns the project id."""
    conn = sqlite3.connect(tmp_db_path)
    try:
        cur = conn.execute(
            "INSERT INTO project(project_name, estimated_hours, actual_hours, difficulty, notes) "
            "VALUES('Build a bench', 6, 7.5, 2, 'cedar')"
        )
        pid = cur.lastrowid
        conn.execute("INSERT INTO material(project_id, material_name, num_required, cost) VALUES(?, '2x4 cedar', 4, 8.25)", (pid,))
        conn.execute("INSERT INTO material(project_id, material_name, num_required, cost) VALUES(?, 'deck screws', 30, 0.1)", (pid,))
        conn.execute("INSERT INTO step(project_id, step_text, step_order) VALUES(?, 'Cut the legs', 1)", (pid,))
        cat = conn.execute("INSERT INTO category(category_name) VALUES('Woodworking')").lastrowid
        conn.execute("INSERT INTO project_category(project_id, category_id) VALUES(?, ?)", (pid, cat))
        conn.commit()
    finally:
        conn.close()
    return pid
