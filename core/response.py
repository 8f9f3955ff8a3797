# core/response.py

"""
Result objects returned by every `RecordStore` operation.

Store methods never raise for bad input; they return a `Response` whose `error` says what went
wrong and whose `data` carries copies of any records involved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    # no record with the requested id, or a linked record is missing
    NOT_FOUND = "NOT_FOUND"

    # a required field is missing or unusable in a record payload
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # unknown field, untracked record type, or a value the model validators reject
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"

    # the record is valid in isolation but clashes with the store (taken id, duplicate grade)
    VALIDATION_FAILED = "VALIDATION_FAILED"

    INTERNAL_ERROR = "INTERNAL_ERROR"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.MISSING_REQUIRED_FIELD: 400,
    ErrorCode.INVALID_FIELD_VALUE: 400,
    ErrorCode.VALIDATION_FAILED: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}


@dataclass(frozen=True)
class Response:
    """
    Outcome of a store operation.

    Attributes:
        success (bool): Whether the operation succeeded.
        detail (str | None): Human-readable explanation, if any.
        error (ErrorCode | None): Machine-readable failure reason; None on success.
        status_code (int): HTTP-style code, 200 on success, otherwise derived from `error`.
        data (dict): Operation-specific payload, e.g. {"record": ...} or {"records": [...]}.
    """

    success: bool
    detail: str | None = None
    error: ErrorCode | None = None
    status_code: int = 200
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def succeed(cls, detail: str | None = None, data: dict | None = None) -> Response:
        return cls(success=True, detail=detail, data=data or {})

    @classmethod
    def fail(
        cls,
        detail: str,
        error: ErrorCode = ErrorCode.INTERNAL_ERROR,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=error.status_code,
            data=data or {},
        )

    @classmethod
    def not_found(cls, detail: str) -> Response:
        return cls.fail(detail, ErrorCode.NOT_FOUND)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "status_code": self.status_code,
            "error": self.error.value if self.error else None,
            "detail": self.detail,
            "data": self.data,
        }

    def __str__(self) -> str:
        if self.success:
            return f"OK {self.status_code}: {self.detail}" if self.detail else "OK"

        return f"{self.error.value} {self.status_code}: {self.detail}"
