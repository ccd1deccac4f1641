from __future__ import annotations

# diy_projects/config.py
import os
from typing import Any

import yaml

# 配置来源：
# 1) 显式传入的路径
# 2) 环境变量 DIY_PROJECTS_CONFIG
# 3) 项目根目录下的 config.yaml（不存在时全部使用默认值）
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULTS: dict[str, Any] = {
    "db_path": "",
    "test_db_path": "",
    "log_level": "WARNING",
}


def config_path(path: str | None = None) -> str:
    return path or os.environ.get("DIY_PROJECTS_CONFIG") or os.path.join(PROJECT_ROOT, "config.yaml")


def read_config(path: str | None = None) -> dict[str, Any]:
    """Load config.yaml over DEFAULTS. Blank or non-string values keep the default."""
    cfg_path = config_path(path)
    out = dict(DEFAULTS)
    if not os.path.exists(cfg_path):
        return out
    with open(cfg_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    for k in DEFAULTS:
        v = raw.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)
