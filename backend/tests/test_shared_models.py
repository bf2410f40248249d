"""Tests for shared model utilities."""

import uuid
from datetime import UTC, datetime, timedelta, timezone

from app.models.shared import (
    CODE_ALPHABET,
    UUIDType,
    as_utc,
    generate_code,
    generate_uuid,
    utc_now,
)


class TestGenerateUuid:
    def test_returns_uuid4(self):
        result = generate_uuid()
        assert isinstance(result, uuid.UUID)
        assert result.version == 4

    def test_returns_unique_values(self):
        results = {generate_uuid() for _ in range(10)}
        assert len(results) == 10


class TestGenerateCode:
    def test_length(self):
        assert len(generate_code(8)) == 8
        assert len(generate_code(12)) == 12

    def test_alphabet(self):
        code = generate_code(64)
        assert set(code) <= set(CODE_ALPHABET)
        assert code == code.upper()


class TestUtcNow:
    def test_returns_utc(self):
        result = utc_now()
        assert result.tzinfo == UTC

    def test_returns_current_time(self):
        before = datetime.now(UTC)
        result = utc_now()
        after = datetime.now(UTC)
        assert before <= result <= after


class TestAsUtc:
    def test_naive_is_treated_as_utc(self):
        result = as_utc(datetime(2026, 1, 1, 8, 30))
        assert result == datetime(2026, 1, 1, 8, 30, tzinfo=UTC)

    def test_other_offset_converted(self):
        plus_two = timezone(timedelta(hours=2))
        result = as_utc(datetime(2026, 1, 1, 10, 0, tzinfo=plus_two))
        assert result == datetime(2026, 1, 1, 8, 0, tzinfo=UTC)
        assert result.tzinfo == UTC


class TestUUIDType:
    def test_process_bind_param(self):
        t = UUIDType()
        val = uuid.uuid4()
        assert t.process_bind_param(None, None) is None
        assert t.process_bind_param(val, None) == str(val)
        assert t.process_bind_param(str(val).upper(), None) == str(val)

    def test_process_result_value(self):
        t = UUIDType()
        val = "12345678-1234-5678-1234-567812345678"
        assert t.process_result_value(None, None) is None
        result = t.process_result_value(val, None)
        assert isinstance(result, uuid.UUID)
        assert str(result) == val
