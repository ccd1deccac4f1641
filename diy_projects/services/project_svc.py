from __future__ import annotations

from dataclasses import asdict

from ..dao import project_dao
from ..domain.entities import Project, ProjectChanges
from ..logs import LogContext
from .utils import DATA_FILE, SCHEMA_FILE, load_sql_file, split_sql_statements


def _snapshot(project: Project | None) -> dict | None:
    """Scalar fields only, for the operation log."""
    if project is None:
        return None
    d = asdict(project)
    for k in ("materials", "steps", "categories"):
        d.pop(k, None)
    return d


def create_and_populate_tables(log: LogContext) -> int:
    """Drop and recreate all project tables, then load the bundled seed data."""
    stmts = split_sql_statements(load_sql_file(SCHEMA_FILE)) + split_sql_statements(load_sql_file(DATA_FILE))
    count = project_dao.execute_batch(stmts)
    log.set_after({"statements": count})
    return count


def add_project(project: Project, log: LogContext) -> Project:
    log.set_payload(_snapshot(project))
    db_project = project_dao.insert_project(project)
    log.set_entity("PROJECT", str(db_project.project_id))
    log.set_after(_snapshot(db_project))
    return db_project


def fetch_all_projects() -> list[Project]:
    return project_dao.fetch_all_projects()


def fetch_project_by_id(project_id: int) -> Project | None:
    return project_dao.fetch_project_by_id(project_id)


def modify_project_details(project_id: int, changes: ProjectChanges, log: LogContext) -> bool:
    """
    Merge `changes` over the stored project and write the whole record back.
    Returns False when the project does not exist.
    """
    log.set_entity("PROJECT", str(project_id))
    log.set_payload(asdict(changes))
    current = project_dao.fetch_project_by_id(project_id)
    if current is None:
        return False
    updated = changes.apply_to(current)
    log.set_before(_snapshot(current))
    ok = project_dao.modify_project_details(updated)
    if ok:
        log.set_after(_snapshot(updated))
    return ok


def delete_project(project_id: int, log: LogContext) -> bool:
    log.set_entity("PROJECT", str(project_id))
    ok = project_dao.delete_project(project_id)
    log.set_after({"deleted": ok})
    return ok
