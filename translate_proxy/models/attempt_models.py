"""
/**
 * @file translate_proxy/models/attempt_models.py
 * @description 单次上游调用结果（AttemptRecord）与调度结果（TranslationResult）。
 */
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


OUTCOME_SUCCESS = "success"
OUTCOME_HTTP_ERROR = "http_error"
OUTCOME_TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class AttemptRecord:
    url: str
    outcome: str
    text: Optional[str] = None
    status: Optional[int] = None
    body_snippet: Optional[str] = None
    message: Optional[str] = None
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome == OUTCOME_SUCCESS

    @classmethod
    def success(cls, url: str, text: str, elapsed_ms: int = 0) -> "AttemptRecord":
        return cls(url=url, outcome=OUTCOME_SUCCESS, text=text, elapsed_ms=elapsed_ms)

    @classmethod
    def http_error(cls, url: str, status: int, body_snippet: str, elapsed_ms: int = 0) -> "AttemptRecord":
        return cls(url=url, outcome=OUTCOME_HTTP_ERROR, status=status, body_snippet=body_snippet, elapsed_ms=elapsed_ms)

    @classmethod
    def transport_error(cls, url: str, message: str, elapsed_ms: int = 0) -> "AttemptRecord":
        return cls(url=url, outcome=OUTCOME_TRANSPORT_ERROR, message=message, elapsed_ms=elapsed_ms)

    def to_dict(self) -> Dict[str, Any]:
        """Diagnostic view used in the 502 response body."""
        data: Dict[str, Any] = {"url": self.url, "outcome": self.outcome}
        if self.outcome == OUTCOME_HTTP_ERROR:
            data["status"] = self.status
            data["detail"] = self.body_snippet or ""
        elif self.outcome == OUTCOME_TRANSPORT_ERROR:
            data["error"] = self.message or ""
        return data


@dataclass(frozen=True)
class TranslationResult:
    text: str
    cached: bool
    upstream: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"translatedText": self.text, "cached": self.cached}
        if self.upstream:
            body["upstream"] = self.upstream
        return body
