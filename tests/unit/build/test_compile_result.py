"""
Unit tests for compile result interpretation.

Tests the success, failure and malformed response paths.
"""

import json
from datetime import datetime, timezone

import pytest
from cloudflash.build.compile_result import (
    BinaryInfo,
    CompileFailure,
    CompileSuccess,
    interpret_compile_response,
    parse_timestamp,
)
from cloudflash.build.diagnostics import IssueKind
from cloudflash.build.size_report import SizeReport
from cloudflash.errors import MalformedResponseError, ProtocolMismatchError, ResponseError

SIZE_INFO = "   text\t   data\t    bss\t    dec\t    hex\tfilename\n 101312\t   2152\t   9880\t 113344\t  1bac0\t"


class TestCompileSuccess:
    """Test suite for successful compile responses."""

    def test_success(self):
        """Test a complete success response."""
        body = json.dumps({
            "ok": True,
            "binary_id": "x",
            "binary_url": "y",
            "expires_at": "2020-01-01T00:00:00Z",
            "sizeInfo": "...\n1 2 3 4\n",
        })

        result = interpret_compile_response(body)

        assert isinstance(result, CompileSuccess)
        assert result.success
        assert result.binary == BinaryInfo(
            binary_id="x",
            binary_url="y",
            expires=datetime(2020, 1, 1, tzinfo=timezone.utc),
            size_info=SizeReport(text=1, data=2, bss=3, size=4),
        )

    def test_success_from_bytes(self):
        """Test decoding a raw bytes body."""
        body = json.dumps({
            "ok": True,
            "binary_id": "58cc3bd4e1a4e2b1c8a4b2d3",
            "binary_url": "/v1/binaries/58cc3bd4e1a4e2b1c8a4b2d3",
            "expires_at": "2017-03-18T19:04:52.123Z",
            "sizeInfo": SIZE_INFO,
        }).encode("utf-8")

        result = interpret_compile_response(body)

        assert isinstance(result, CompileSuccess)
        assert result.binary.binary_id == "58cc3bd4e1a4e2b1c8a4b2d3"
        assert result.binary.size_info.size == 113344
        assert result.binary.expires.year == 2017

    def test_ok_as_string(self):
        """Test that a string "true" counts as success."""
        result = interpret_compile_response({
            "ok": "true",
            "binary_id": "x",
            "binary_url": "y",
            "expires_at": "2020-01-01T00:00:00Z",
            "sizeInfo": SIZE_INFO,
        })

        assert isinstance(result, CompileSuccess)

    def test_missing_fields(self):
        """Test that success without binary fields is a protocol mismatch."""
        with pytest.raises(ProtocolMismatchError) as exc_info:
            interpret_compile_response('{"ok": true}')

        assert exc_info.value.body == '{"ok": true}'

    @pytest.mark.parametrize("field,value", [
        ("binary_id", None),
        ("binary_url", 42),
        ("expires_at", "next tuesday"),
        ("sizeInfo", "not a size table"),
    ])
    def test_invalid_field(self, field, value):
        """Test that each required field is validated."""
        payload = {
            "ok": True,
            "binary_id": "x",
            "binary_url": "y",
            "expires_at": "2020-01-01T00:00:00Z",
            "sizeInfo": SIZE_INFO,
        }
        payload[field] = value

        with pytest.raises(ProtocolMismatchError):
            interpret_compile_response(json.dumps(payload))


class TestCompileFailure:
    """Test suite for failed compile responses."""

    def test_failure_with_issue(self):
        """Test a failure carrying one diagnostic."""
        result = interpret_compile_response('{"ok": false, "errors": ["a.c:1:1: error: bad"]}')

        assert isinstance(result, CompileFailure)
        assert not result.success
        assert result.errors == ["a.c:1:1: error: bad"]
        assert len(result.issues) == 1
        assert result.issues[0].kind is IssueKind.ERROR
        assert result.issues[0].message == "bad"
        assert result.output == ""
        assert result.stdout == ""

    def test_failure_keeps_raw_fields(self):
        """Test that output, stdout and raw errors are preserved."""
        errors = [
            "app.ino:5:1: warning: unused\napp.ino:9:3: error: missing ';'\n   ^",
            "linker says no",
        ]
        result = interpret_compile_response(json.dumps({
            "ok": False,
            "output": "Compiler timed out or encountered an error",
            "stdout": "Building core...",
            "errors": errors,
        }))

        assert isinstance(result, CompileFailure)
        assert result.output == "Compiler timed out or encountered an error"
        assert result.stdout == "Building core..."
        assert result.errors == errors
        assert [i.kind for i in result.issues] == [IssueKind.WARNING, IssueKind.ERROR]
        assert result.issues[1].message == "missing ';'\n   ^\nlinker says no"
        assert len(result.error_issues) == 1
        assert len(result.warning_issues) == 1

    def test_failure_without_errors(self):
        """Test that an empty failure report is legitimate."""
        result = interpret_compile_response({"ok": False})

        assert result == CompileFailure(output="", stdout="", errors=[], issues=[])

    def test_mistyped_fields_default_to_empty(self):
        """Test that mistyped failure fields fall back to empty values."""
        result = interpret_compile_response({"ok": False, "errors": "oops", "output": 3, "stdout": None})

        assert isinstance(result, CompileFailure)
        assert result.errors == []
        assert result.output == ""
        assert result.stdout == ""

    def test_ok_null_is_failure(self):
        """Test that a present but non-true ok is a failure."""
        assert isinstance(interpret_compile_response('{"ok": null}'), CompileFailure)


class TestMalformedResponse:
    """Test suite for responses that are not compile results."""

    @pytest.mark.parametrize("body", [
        b"",
        b"<html>Bad Gateway</html>",
        b"[1, 2, 3]",
        b'"ok"',
        b"\xff\xfe",
        '{"errors": ["a.c:1:1: error: bad"]}',
    ])
    def test_malformed(self, body):
        """Test that non-objects and objects without ok are rejected."""
        with pytest.raises(MalformedResponseError):
            interpret_compile_response(body)

    def test_malformed_is_distinct_from_mismatch(self):
        """Test the error hierarchy."""
        assert issubclass(MalformedResponseError, ResponseError)
        assert issubclass(ProtocolMismatchError, ResponseError)
        assert not issubclass(MalformedResponseError, ProtocolMismatchError)


class TestParseTimestamp:
    """Test suite for parse_timestamp."""

    def test_zulu(self):
        assert parse_timestamp("2017-03-18T19:04:52Z") == datetime(2017, 3, 18, 19, 4, 52, tzinfo=timezone.utc)

    def test_fractional_seconds(self):
        parsed = parse_timestamp("2017-03-18T19:04:52.123Z")

        assert parsed is not None
        assert parsed.microsecond == 123000

    def test_offset(self):
        parsed = parse_timestamp("2020-01-01T02:00:00+02:00")

        assert parsed == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_timestamp("2020-01-01T00:00:00").tzinfo is not None

    @pytest.mark.parametrize("value", [None, "", "yesterday", 1577836800])
    def test_invalid(self, value):
        assert parse_timestamp(value) is None
