from __future__ import annotations

import json
import logging

from leadhub.core.logging import LogContext, build_log_event
from leadhub.core.logging_config import JsonFormatter


def test_log_event_carries_context_fields():
    context = LogContext(tenant_id="broker-1", user_id="admin-1", import_id="imp-1", source_file="leads.csv")

    payload = build_log_event("import.completed", context, imported_count=3)

    assert payload["event"] == "import.completed"
    assert payload["tenant_id"] == "broker-1"
    assert payload["source_file"] == "leads.csv"
    assert payload["imported_count"] == 3


def test_json_formatter_includes_extra_fields():
    record = logging.makeLogRecord(
        {"name": "leadhub.test", "levelname": "INFO", "msg": "import.started", "event": "import.started", "total_rows": 2}
    )

    line = json.loads(JsonFormatter().format(record))

    assert line["message"] == "import.started"
    assert line["event"] == "import.started"
    assert line["total_rows"] == 2
    assert "msg" not in line
