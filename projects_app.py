#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DIY Projects (SQLite)

Commands:
  shell               Interactive menu: add, list, select, update and delete projects (default)
  init                Drop, create and seed all project tables
  report              Print a per-project summary and export it as CSV
  logs                Show recent entries from the operation log

Notes:
- The database path comes from DIY_PROJECTS_DB_PATH, else config.yaml (db_path), else projects.db in the project root.
- Every menu action is recorded in the `operation_log` table.
"""

import argparse
import os

import pandas as pd

from diy_projects.config import read_config
from diy_projects.logs import LogContext, ensure_log_schema, search_logs, setup_logging
from diy_projects.services import project_svc, report_svc
from diy_projects.shell import ProjectsShell


# ---------------- Commands ----------------

def cmd_shell(args):
    ensure_log_schema()
    ProjectsShell().process_user_selections()


def cmd_init(args):
    ensure_log_schema()
    log = LogContext("TABLES_CREATE", user="cli")
    try:
        count = project_svc.create_and_populate_tables(log)
        log.write("OK")
    except Exception as e:
        log.write("ERROR", str(e))
        raise SystemExit(f"init failed: {e}")
    print(f"Tables created and populated ({count} statements).")


def cmd_report(args):
    df, path = report_svc.export_report(args.out)

    pd.set_option("display.max_rows", 200)
    pd.set_option("display.width", 160)

    print("\n=== Project Summary ===")
    if not df.empty:
        print(df.to_string(index=False))
    else:
        print("(empty)")
    print(f"\nCSV exported to {path}")


def cmd_logs(args):
    ensure_log_schema()
    total, rows = search_logs(args.q, args.action, args.ts_from, args.ts_to, 1, args.size)
    print(f"{total} entries")
    for r in rows:
        line = f"{r['ts']}  {r['action']:<16} {r['result'] or '':<6}"
        if r["entity_type"]:
            line += f" {r['entity_type']}#{r['entity_id']}"
        if r["err_msg"]:
            line += f"  {r['err_msg']}"
        print(line)


# ---------------- Entry ----------------

def main(argv=None):
    parser = argparse.ArgumentParser(description="DIY projects (SQLite)")
    parser.add_argument("--config", default=None, help="path to config.yaml")
    sub = parser.add_subparsers()

    p_shell = sub.add_parser("shell", help="interactive project menu")
    p_shell.set_defaults(func=cmd_shell)

    p_init = sub.add_parser("init", help="create tables and load seed data")
    p_init.set_defaults(func=cmd_init)

    p_rep = sub.add_parser("report", help="export project summary")
    p_rep.add_argument("--out", default=os.path.join(os.getcwd(), "exports"))
    p_rep.set_defaults(func=cmd_report)

    p_logs = sub.add_parser("logs", help="show operation log")
    p_logs.add_argument("--q", required=False, help="substring to match in payload/before/after")
    p_logs.add_argument("--action", required=False, help="e.g. PROJECT_CREATE")
    p_logs.add_argument("--from", dest="ts_from", required=False, help="earliest timestamp, e.g. 2024-01-01")
    p_logs.add_argument("--to", dest="ts_to", required=False, help="latest timestamp (ISO, compared as text)")
    p_logs.add_argument("--size", type=int, default=20)
    p_logs.set_defaults(func=cmd_logs)

    args = parser.parse_args(argv)
    if args.config:
        os.environ["DIY_PROJECTS_CONFIG"] = args.config
    setup_logging(read_config()["log_level"])

    func = getattr(args, "func", cmd_shell)
    func(args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
