"""Project data access: one connection-scoped transaction per call.

Failures from the driver surface as DbError (see db.transaction).
"""
from __future__ import annotations

import logging
from typing import Iterable

from ..db import transaction
from ..domain.entities import Project
from ..repository import project_repo

logger = logging.getLogger(__name__)


def execute_batch(statements: Iterable[str], db_path: str | None = None) -> int:
    """Run raw statements in order as one unit; returns how many ran."""
    count = 0
    with transaction(db_path) as conn:
        for sql in statements:
            logger.debug("batch[%d]: %s", count, sql)
            conn.execute(sql)
            count += 1
    return count


def insert_project(project: Project, db_path: str | None = None) -> Project:
    with transaction(db_path) as conn:
        new_id = project_repo.insert_project(conn, project)
    project.project_id = new_id
    logger.debug("inserted project %s", project.project_id)
    return project


def fetch_all_projects(db_path: str | None = None) -> list[Project]:
    with transaction(db_path) as conn:
        return project_repo.list_projects(conn)


def fetch_project_by_id(project_id: int, db_path: str | None = None) -> Project | None:
    with transaction(db_path) as conn:
        project = project_repo.get_project(conn, project_id)
        if project is not None:
            project.materials.extend(project_repo.list_materials_for_project(conn, project_id))
            project.steps.extend(project_repo.list_steps_for_project(conn, project_id))
            project.categories.extend(project_repo.list_categories_for_project(conn, project_id))
        return project


def modify_project_details(project: Project, db_path: str | None = None) -> bool:
    with transaction(db_path) as conn:
        rows = project_repo.update_project(conn, project)
    logger.debug("update project %s: %d row(s)", project.project_id, rows)
    return rows == 1


def delete_project(project_id: int, db_path: str | None = None) -> bool:
    with transaction(db_path) as conn:
        rows = project_repo.delete_project(conn, project_id)
    logger.debug("delete project %s: %d row(s)", project_id, rows)
    return rows == 1
