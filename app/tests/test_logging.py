import json
import logging

from app.core.logging import SERVICE, _json_handler


def test_records_render_as_json_with_extra_fields():
    handler = _json_handler()
    record = logging.LogRecord("app.services.lifecycle", logging.INFO, __file__, 1, "issue approved", None, None)
    record.issue_id = 7

    line = json.loads(handler.format(record))

    assert line["message"] == "issue approved"
    assert line["level"] == "INFO"
    assert line["logger"] == "app.services.lifecycle"
    assert line["service"] == SERVICE
    assert line["issue_id"] == 7
    assert "ts" in line
