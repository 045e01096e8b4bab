"""
Compile result interpretation.

The compile endpoint answers every request with a JSON object whose "ok"
field tells success from failure:

    {"ok": true, "binary_id": "...", "binary_url": "...",
     "expires_at": "2017-03-17T19:04:52.123Z", "sizeInfo": "..."}

    {"ok": false, "output": "...", "stdout": "...", "errors": ["..."]}

A failed compile is a normal outcome and is returned as CompileFailure.
Only bodies that do not follow either shape raise.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from ..errors import MalformedResponseError, ProtocolMismatchError
from .diagnostics import BuildIssue, IssueKind, aggregate_issues
from .size_report import SizeReport


@dataclass(frozen=True)
class BinaryInfo:
    """A binary produced by a successful compile.

    Attributes:
        binary_id: Identifier used to download the binary
        binary_url: Server path of the binary
        expires: When the server discards the binary
        size_info: Segment sizes of the binary
    """

    binary_id: str
    binary_url: str
    expires: datetime
    size_info: SizeReport


@dataclass(frozen=True)
class CompileSuccess:
    """The sources compiled."""

    binary: BinaryInfo

    @property
    def success(self) -> bool:
        return True


@dataclass
class CompileFailure:
    """The sources failed to compile.

    Attributes:
        output: Summary message from the server
        stdout: Build tool standard output
        errors: Raw error strings, exactly as received
        issues: Diagnostics parsed out of errors; lines that do not look
            like diagnostics may be folded into messages or dropped, so
            errors remains the authoritative record
    """

    output: str = ""
    stdout: str = ""
    errors: List[str] = field(default_factory=list)
    issues: List[BuildIssue] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return False

    @property
    def error_issues(self) -> List[BuildIssue]:
        return [issue for issue in self.issues if issue.kind is IssueKind.ERROR]

    @property
    def warning_issues(self) -> List[BuildIssue]:
        return [issue for issue in self.issues if issue.kind is IssueKind.WARNING]


BuildResult = Union[CompileSuccess, CompileFailure]


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as sent by the server.

    A trailing "Z" is accepted and naive values are taken as UTC.

    Returns:
        Timezone-aware datetime, or None if value is not a valid timestamp
    """
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _is_true(value: Any) -> bool:
    """Interpret a boolean-ish JSON value."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return False


def _body_text(body: Union[bytes, str, Any]) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        return body
    return json.dumps(body)


def decode_binary_info(payload: dict) -> Optional[BinaryInfo]:
    """Decode the success fields of a compile response.

    Returns:
        BinaryInfo, or None if any required field is missing or invalid
    """
    binary_id = payload.get("binary_id")
    binary_url = payload.get("binary_url")
    if not isinstance(binary_id, str) or not isinstance(binary_url, str):
        return None

    expires = parse_timestamp(payload.get("expires_at"))
    if expires is None:
        return None

    size_info = SizeReport.parse(payload.get("sizeInfo"))
    if size_info is None:
        return None

    return BinaryInfo(
        binary_id=binary_id,
        binary_url=binary_url,
        expires=expires,
        size_info=size_info,
    )


def decode_compile_failure(payload: dict) -> CompileFailure:
    """Decode the failure fields of a compile response.

    Missing or mistyped fields fall back to empty values.
    """
    errors = payload.get("errors")
    if not isinstance(errors, list) or not all(isinstance(e, str) for e in errors):
        errors = []

    output = payload.get("output")
    stdout = payload.get("stdout")

    return CompileFailure(
        output=output if isinstance(output, str) else "",
        stdout=stdout if isinstance(stdout, str) else "",
        errors=list(errors),
        issues=aggregate_issues(errors),
    )


def interpret_compile_response(body: Union[bytes, str, dict]) -> BuildResult:
    """Turn a compile endpoint response into a BuildResult.

    Args:
        body: Raw response body, or an already decoded JSON object

    Returns:
        CompileSuccess or CompileFailure

    Raises:
        MalformedResponseError: If body is not a JSON object with an "ok" field
        ProtocolMismatchError: If the server claims success without a
            complete binary description
    """
    if isinstance(body, dict):
        payload = body
    else:
        try:
            payload = json.loads(body)
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(
                f"Compile response is not valid JSON: {e}", _body_text(body)
            ) from e

    if not isinstance(payload, dict) or "ok" not in payload:
        raise MalformedResponseError(
            "Compile response is not a JSON object with an 'ok' field",
            _body_text(body),
        )

    if _is_true(payload["ok"]):
        binary = decode_binary_info(payload)
        if binary is None:
            text = _body_text(body)
            logging.warning(f"Compile reported success without a usable binary description: {text}")
            raise ProtocolMismatchError(
                f"Compile succeeded but the response is incomplete: {text}", text
            )
        logging.debug(f"Compiled binary {binary.binary_id} ({binary.size_info.size} bytes)")
        return CompileSuccess(binary)

    failure = decode_compile_failure(payload)
    logging.debug(
        f"Compile failed with {len(failure.errors)} error blob(s), {len(failure.issues)} issue(s)"
    )
    return failure
