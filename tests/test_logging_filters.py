"""Tests for log redaction and request-id correlation."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from clock_api.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    set_request_id,
)


@pytest.fixture
def capture():
    logger = logging.getLogger("test_clock_api_logging")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    yield logger, stream

    logger.handlers.clear()
    clear_request_id()


def test_redis_credentials_are_redacted(capture):
    logger, stream = capture

    logger.info(
        "rate_limit.store_selected",
        extra={"redis_token": "AXy-secret", "redis_url": "rediss://default:pw@host:6379", "store": "redis"},
    )

    output = stream.getvalue()
    assert "AXy-secret" not in output
    assert "default:pw" not in output
    assert "[REDACTED]" in output
    assert '"store": "redis"' in output


def test_nested_sensitive_fields_are_redacted(capture):
    logger, stream = capture

    logger.info(
        "nested_event",
        extra={"headers": {"Authorization": "Bearer abc", "user-agent": "pytest"}},
    )

    output = stream.getvalue()
    assert "Bearer abc" not in output
    assert "pytest" in output


def test_rate_limit_fields_pass_through(capture):
    logger, stream = capture

    logger.info(
        "rate_limit.allowed",
        extra={"key_hash": "abc123", "limit": 10, "remaining": 9, "window_s": 10},
    )

    record = json.loads(stream.getvalue())
    assert record["message"] == "rate_limit.allowed"
    assert record["level"] == "info"
    assert record["limit"] == 10
    assert record["remaining"] == 9
    assert "[REDACTED]" not in stream.getvalue()


def test_request_id_from_context_is_attached(capture):
    logger, stream = capture
    set_request_id("req-42")

    logger.info("http.request")

    assert json.loads(stream.getvalue())["request_id"] == "req-42"


def test_no_request_id_outside_request(capture):
    logger, stream = capture

    logger.info("startup")

    assert "request_id" not in json.loads(stream.getvalue())
