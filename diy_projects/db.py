from __future__ import annotations

# diy_projects/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator

from .config import PROJECT_ROOT, is_test_env, read_config
from .domain.hours import round_hours
from .errors import DbError

logger = logging.getLogger(__name__)

# DB 路径解析顺序：
# 1) 环境变量 DIY_PROJECTS_DB_PATH（最高优先级）
# 2) config.yaml 的 test_db_path（当检测到测试环境时）
# 3) config.yaml 的 db_path（生产默认）
# 4) 兜底：项目根 projects.db
_ROOT_DB = os.path.join(PROJECT_ROOT, "projects.db")

# DECIMAL(7,2) 列：写入时转为字符串，读出时统一量化到两位小数
sqlite3.register_adapter(Decimal, str)
sqlite3.register_converter("DECIMAL", lambda b: round_hours(b.decode("ascii")))


def get_db_path(_: str | None = None) -> str:
    env_path = os.environ.get("DIY_PROJECTS_DB_PATH")
    cfg = read_config()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")

    if env_path:
        path = env_path
    elif is_test_env() and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = _ROOT_DB

    # 确保目录存在
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    获取 SQLite 连接。优先使用显式传入的 db_path，否则走 get_db_path()。
    打开 foreign_keys，设置 row_factory 为 Row。
    autocommit 模式（isolation_level=None），事务由 transaction() 显式开启。
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        detect_types=sqlite3.PARSE_DECLTYPES,
        isolation_level=None,
    )
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """One connection, one transaction.

    Commits when the body returns, rolls back on any exception and re-raises it
    as DbError with the underlying exception chained. The connection is closed on
    every path.
    """
    try:
        with get_conn(db_path) as conn:
            conn.execute("BEGIN")
            try:
                yield conn
            except Exception as e:
                logger.info("rolling back transaction", exc_info=True)
                try:
                    conn.rollback()
                except sqlite3.Error:
                    # 回滚失败不能顶替原始异常
                    logger.warning("rollback failed", exc_info=True)
                if isinstance(e, DbError):
                    raise
                raise DbError(f"{type(e).__name__}: {e}") from e
            conn.commit()
    except DbError:
        raise
    except Exception as e:
        raise DbError(f"{type(e).__name__}: {e}") from e
