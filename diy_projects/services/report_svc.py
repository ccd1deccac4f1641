from __future__ import annotations

import datetime as dt
import os

import pandas as pd

from ..db import get_conn

SUMMARY_SQL = """
SELECT p.project_id, p.project_name, p.estimated_hours, p.actual_hours, p.difficulty,
       (SELECT COUNT(1) FROM material m WHERE m.project_id = p.project_id) AS materials,
       (SELECT COUNT(1) FROM step s WHERE s.project_id = p.project_id) AS steps,
       (SELECT COUNT(1) FROM project_category pc WHERE pc.project_id = p.project_id) AS categories,
       (SELECT SUM(COALESCE(m.num_required, 1) * COALESCE(m.cost, 0)) FROM material m
         WHERE m.project_id = p.project_id) AS material_cost
FROM project p
ORDER BY p.project_name
"""

COLUMNS = [
    "project_id", "project_name", "estimated_hours", "actual_hours", "hours_variance",
    "difficulty", "materials", "steps", "categories", "material_cost",
]


def project_summary(db_path: str | None = None) -> pd.DataFrame:
    """One row per project with child counts and actual-minus-estimated hours."""
    with get_conn(db_path) as conn:
        df = pd.read_sql_query(SUMMARY_SQL, conn)
    for col in ("estimated_hours", "actual_hours", "material_cost"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df["hours_variance"] = (df["actual_hours"] - df["estimated_hours"]).round(2)
    df["material_cost"] = df["material_cost"].fillna(0.0).round(2)
    return df[COLUMNS]


def export_report(out_dir: str, on_date: dt.date | None = None, db_path: str | None = None) -> tuple[pd.DataFrame, str]:
    d = (on_date or dt.date.today()).strftime("%Y%m%d")
    df = project_summary(db_path)
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, f"projects_{d}.csv")
    df.to_csv(path, index=False, encoding="utf-8-sig")
    return df, path
