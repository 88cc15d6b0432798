"""Explicit send result for callers that prefer values over exceptions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .enums import ErrorKind
from .errors import PostmarkError


@dataclass(frozen=True, slots=True)
class SendOutcome:
    """Either the decoded API result or the classified error.

    Example:
        >>> ok = SendOutcome.success({"MessageID": "abc"})
        >>> ok.ok, ok.error_kind
        (True, None)
        >>> failed = SendOutcome.failure(PostmarkError("nope"))
        >>> failed.ok, failed.error_kind
        (False, <ErrorKind.UNKNOWN_API: 'unknown_api'>)
    """

    result: Mapping[str, Any] | None = None
    error: PostmarkError | None = None

    @classmethod
    def success(cls, result: Mapping[str, Any]) -> SendOutcome:
        return cls(result=result)

    @classmethod
    def failure(cls, error: PostmarkError) -> SendOutcome:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> ErrorKind | None:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> Mapping[str, Any]:
        """Return the result, or raise the stored error."""
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result


__all__ = ["SendOutcome"]
