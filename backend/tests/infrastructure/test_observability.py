"""Structured Logging — JSON formatter fields and storage-key redaction."""

import json
import logging

from progress_sync.infrastructure.observability import (
    JSONFormatter, redact_storage_key,
)


def _record(**extra):
    record = logging.LogRecord(
        "progress_sync.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "progress_sync.test"
    assert log["message"] == "hello world"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(error_code="NOT_FOUND", operation="fetch", unrelated="x"),
    ))
    assert log["error_code"] == "NOT_FOUND"
    assert log["operation"] == "fetch"
    assert "unrelated" not in log


def test_redact_storage_key_is_stable_and_opaque():
    key = "progress-sync:v1:my-secret-key"
    digest = redact_storage_key(key)
    assert digest == redact_storage_key(key)
    assert len(digest) == 12
    assert "secret" not in digest
    assert digest != redact_storage_key(key + "x")
