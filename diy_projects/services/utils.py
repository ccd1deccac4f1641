from __future__ import annotations

# diy_projects/services/utils.py
import os

SQL_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "sql")
SCHEMA_FILE = "projects_schema.sql"
DATA_FILE = "projects_data.sql"


def load_sql_file(name: str) -> str:
    with open(os.path.join(SQL_DIR, name), "r", encoding="utf-8") as f:
        return f.read()


def strip_sql_comments(content: str) -> str:
    """Drop `--` comments up to end of line. Literals in the bundled scripts never contain `--`."""
    out = []
    for line in content.splitlines():
        pos = line.find("--")
        out.append(line if pos < 0 else line[:pos])
    return "\n".join(out)


def split_sql_statements(content: str) -> list[str]:
    """Split a script on `;` into single statements, collapsing whitespace and dropping blanks."""
    text = strip_sql_comments(content)
    stmts = []
    for part in text.split(";"):
        s = " ".join(part.split())
        if s:
            stmts.append(s)
    return stmts
