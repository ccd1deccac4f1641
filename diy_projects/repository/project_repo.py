from __future__ import annotations

from sqlite3 import Connection, Row

from ..domain.entities import Category, Material, Project, Step

CATEGORY_TABLE = "category"
MATERIAL_TABLE = "material"
PROJECT_TABLE = "project"
PROJECT_CATEGORY_TABLE = "project_category"
STEP_TABLE = "step"


def _to_project(r: Row) -> Project:
    return Project(
        project_id=r["project_id"],
        project_name=r["project_name"],
        estimated_hours=r["estimated_hours"],
        actual_hours=r["actual_hours"],
        difficulty=r["difficulty"],
        notes=r["notes"],
    )


def insert_project(conn: Connection, project: Project) -> int:
    cur = conn.execute(
        f"INSERT INTO {PROJECT_TABLE}(project_name, estimated_hours, actual_hours, difficulty, notes) "
        "VALUES(?,?,?,?,?)",
        (project.project_name, project.estimated_hours, project.actual_hours, project.difficulty, project.notes),
    )
    return int(cur.lastrowid)


def list_projects(conn: Connection) -> list[Project]:
    rows = conn.execute(f"SELECT * FROM {PROJECT_TABLE} ORDER BY project_name").fetchall()
    return [_to_project(r) for r in rows]


def get_project(conn: Connection, project_id: int) -> Project | None:
    row = conn.execute(f"SELECT * FROM {PROJECT_TABLE} WHERE project_id=?", (project_id,)).fetchone()
    return _to_project(row) if row else None


def list_materials_for_project(conn: Connection, project_id: int) -> list[Material]:
    rows = conn.execute(
        f"SELECT * FROM {MATERIAL_TABLE} WHERE project_id=? ORDER BY material_id", (project_id,)
    ).fetchall()
    return [
        Material(r["material_id"], r["project_id"], r["material_name"], r["num_required"], r["cost"])
        for r in rows
    ]


def list_steps_for_project(conn: Connection, project_id: int) -> list[Step]:
    rows = conn.execute(
        f"SELECT * FROM {STEP_TABLE} WHERE project_id=? ORDER BY step_order, step_id", (project_id,)
    ).fetchall()
    return [Step(r["step_id"], r["project_id"], r["step_text"], r["step_order"]) for r in rows]


def list_categories_for_project(conn: Connection, project_id: int) -> list[Category]:
    rows = conn.execute(
        f"SELECT c.* FROM {CATEGORY_TABLE} c "
        f"JOIN {PROJECT_CATEGORY_TABLE} pc USING (category_id) "
        "WHERE pc.project_id=? ORDER BY c.category_name",
        (project_id,),
    ).fetchall()
    return [Category(r["category_id"], r["category_name"]) for r in rows]


def update_project(conn: Connection, project: Project) -> int:
    """Replace every mutable column; returns the affected row count."""
    cur = conn.execute(
        f"UPDATE {PROJECT_TABLE} SET project_name=?, estimated_hours=?, actual_hours=?, difficulty=?, notes=? "
        "WHERE project_id=?",
        (
            project.project_name,
            project.estimated_hours,
            project.actual_hours,
            project.difficulty,
            project.notes,
            project.project_id,
        ),
    )
    return cur.rowcount


def delete_project(conn: Connection, project_id: int) -> int:
    cur = conn.execute(f"DELETE FROM {PROJECT_TABLE} WHERE project_id=?", (project_id,))
    return cur.rowcount
