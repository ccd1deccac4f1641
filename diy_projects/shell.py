"""Interactive menu over the project service.

Input is read a line at a time from an injectable stream so the whole loop
can be driven from tests.
"""
from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterator, Optional, TextIO

from .domain.entities import Project, ProjectChanges
from .domain.hours import round_hours
from .errors import DbError, InputError
from .logs import LogContext
from .services import project_svc

logger = logging.getLogger(__name__)

EXIT_SELECTION = -1

OPERATIONS = [
    "1) Add a project",
    "2) List projects",
    "3) Select a project",
    "4) Update project details",
    "5) Delete a project",
    "6) Create and populate all tables",
]


@dataclass
class Session:
    """Per-shell state: the project the user is working with, if any."""
    current_project: Optional[Project] = None

    def clear(self) -> None:
        self.current_project = None

    def is_current(self, project_id: int) -> bool:
        return self.current_project is not None and self.current_project.project_id == project_id


class ProjectsShell:
    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None, session: Session | None = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.session = session or Session()
        self._actions: dict[int, Callable[[], None]] = {
            1: self.create_project,
            2: self.list_projects,
            3: self.select_project,
            4: self.update_project_details,
            5: self.delete_project,
            6: self.create_tables,
        }

    # ---------- loop ----------

    def process_user_selections(self) -> None:
        done = False
        while not done:
            try:
                selection = self.get_user_selection()
                if selection == EXIT_SELECTION:
                    done = self.exit_menu()
                elif selection in self._actions:
                    self._actions[selection]()
                else:
                    self._print(f"\n{selection} is not a valid selection. Try again.")
            except Exception as e:
                logger.debug("menu action failed", exc_info=True)
                self._print(f"\nError: {e}")

    def get_user_selection(self) -> int:
        self.print_operations()
        value = self.get_int_input("Enter a menu selection")
        return EXIT_SELECTION if value is None else value

    def print_operations(self) -> None:
        self._print("\nThese are the available selections. Press the Enter key to quit:")
        for line in OPERATIONS:
            self._print(f"   {line}")

    def exit_menu(self) -> bool:
        self._print("\nExiting the menu. TTFN!")
        return True

    # ---------- actions ----------

    def create_tables(self) -> None:
        log = LogContext("TABLES_CREATE")
        with _logged(log):
            project_svc.create_and_populate_tables(log)
        self.session.clear()
        self._print("\nTables created and populated!")

    def create_project(self) -> None:
        project = Project(
            project_name=self.get_string_input("Enter the project name"),
            estimated_hours=self.get_decimal_input("Enter the estimated hours"),
            actual_hours=self.get_decimal_input("Enter the actual hours"),
            difficulty=self.get_int_input("Enter the project difficulty (1-5)"),
            notes=self.get_string_input("Enter the project notes"),
        )
        log = LogContext("PROJECT_CREATE")
        with _logged(log):
            db_project = project_svc.add_project(project, log)
        self._print(f"You have successfully created project: {db_project}")

    def list_projects(self) -> None:
        projects = project_svc.fetch_all_projects()
        self._print("\nProjects:")
        for p in projects:
            self._print(f"   {p.project_id}: {p.project_name}")

    def select_project(self) -> None:
        self.list_projects()
        project_id = self.get_int_input("Enter a project ID to select a project")

        # 先清空，查询失败时保持未选中
        self.session.clear()
        if project_id is not None:
            self.session.current_project = project_svc.fetch_project_by_id(project_id)

        if self.session.current_project is None:
            self._print("\nYou are not working with a project.")
        else:
            self._print(f"\nYou are working with project: {self.session.current_project}")

    def update_project_details(self) -> None:
        cur = self.session.current_project
        if cur is None:
            self._print("\nPlease select a project.")
            return

        changes = ProjectChanges(
            project_name=self.get_string_input(f"Enter the project name [{cur.project_name}]"),
            estimated_hours=self.get_decimal_input(f"Enter the estimated hours [{cur.estimated_hours}]"),
            actual_hours=self.get_decimal_input(f"Enter the actual hours [{cur.actual_hours}]"),
            difficulty=self.get_int_input(f"Enter the project difficulty (1-5) [{cur.difficulty}]"),
            notes=self.get_string_input(f"Enter the project notes [{cur.notes}]"),
        )
        log = LogContext("PROJECT_UPDATE")
        with _logged(log):
            ok = project_svc.modify_project_details(cur.project_id, changes, log)
        if not ok:
            self._print(f"\nProject with ID={cur.project_id} does not exist.")

        # 重新加载；项目已被删除时清空选中状态
        self.session.current_project = project_svc.fetch_project_by_id(cur.project_id)
        if ok and self.session.current_project is not None:
            self._print(f"Updated project details: {self.session.current_project}")

    def delete_project(self) -> None:
        self.list_projects()
        project_id = self.get_int_input("Enter the ID of the project to delete")
        if project_id is None:
            return
        log = LogContext("PROJECT_DELETE")
        with _logged(log):
            ok = project_svc.delete_project(project_id, log)
        if not ok:
            self._print(f"\nProject with ID={project_id} does not exist.")
            return
        self._print(f"Project {project_id} was deleted successfully.")
        if self.session.is_current(project_id):
            self.session.clear()

    # ---------- input ----------

    def get_string_input(self, prompt: str) -> Optional[str]:
        """Blank line (or end of input) reads as None."""
        self.stdout.write(f"{prompt}: ")
        self.stdout.flush()
        line = self.stdin.readline()
        value = line.strip()
        return value or None

    def get_int_input(self, prompt: str) -> Optional[int]:
        value = self.get_string_input(prompt)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError as e:
            raise InputError(f"{value} is not a valid number. Try again.") from e

    def get_decimal_input(self, prompt: str) -> Optional[Decimal]:
        value = self.get_string_input(prompt)
        if value is None:
            return None
        try:
            return round_hours(value)
        except InvalidOperation as e:
            raise InputError(f"{value} is not a valid decimal number. Try again.") from e

    # ---------- helpers ----------

    def _print(self, text: str) -> None:
        print(text, file=self.stdout)


@contextmanager
def _logged(log: LogContext) -> Iterator[LogContext]:
    try:
        yield log
    except Exception as e:
        _write_log(log, "ERROR", str(e))
        raise
    _write_log(log, "OK")


def _write_log(log: LogContext, result: str, err: str | None = None) -> None:
    # operation_log 写入失败只记日志，不覆盖操作本身的结果
    try:
        log.write(result, err)
    except DbError:
        logger.warning("could not record %s in operation_log", log.action, exc_info=True)
