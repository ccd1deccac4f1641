from __future__ import annotations

import json
from decimal import Decimal

from diy_projects.logs import LogContext, search_logs


def test_write_and_search_roundtrip():
    log = LogContext("PROJECT_CREATE")
    log.set_entity("PROJECT", "1")
    log.set_payload({"project_name": "Fence", "estimated_hours": Decimal("2.50")})
    log.set_after({"project_id": 1})
    log.write("OK")

    LogContext("PROJECT_DELETE").write("ERROR", "boom")

    total, rows = search_logs(None, None, None, None, 1, 10)
    assert total == 2
    # newest first
    assert rows[0]["action"] == "PROJECT_DELETE"
    assert rows[0]["err_msg"] == "boom"

    created = rows[1]
    assert created["entity_type"] == "PROJECT" and created["entity_id"] == "1"
    assert json.loads(created["payload_json"])["estimated_hours"] == "2.50"
    assert created["latency_ms"] >= 0


def test_search_filters_by_text_and_action():
    a = LogContext("PROJECT_CREATE")
    a.set_payload({"project_name": "Gazebo"})
    a.write()
    b = LogContext("PROJECT_CREATE")
    b.set_payload({"project_name": "Deck"})
    b.write()
    LogContext("PROJECT_UPDATE").write()

    total, rows = search_logs("Gazebo", None, None, None, 1, 10)
    assert total == 1 and "Gazebo" in rows[0]["payload_json"]

    total, _ = search_logs(None, "PROJECT_CREATE", None, None, 1, 10)
    assert total == 2

    total, rows = search_logs(None, None, None, None, 2, 2)
    assert total == 3 and len(rows) == 1


def test_search_filters_by_timestamp_range():
    LogContext("PROJECT_CREATE").write()

    total, _ = search_logs(None, None, "2000-01-01", None, 1, 10)
    assert total == 1
    total, _ = search_logs(None, None, None, "2000-01-01", 1, 10)
    assert total == 0
    total, _ = search_logs(None, None, "2999-01-01", "2999-12-31", 1, 10)
    assert total == 0
