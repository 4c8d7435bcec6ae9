"""
/**
 * @file translate_proxy/services/errors.py
 * @description 翻译代理的错误分类：校验错误、上游 HTTP 错误、上游传输错误、全部后端失败。
 */
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from translate_proxy.models.attempt_models import AttemptRecord


class TranslationError(Exception):
    """Base class for every error raised by the translation core."""


class ValidationError(TranslationError):
    """Inbound request is missing a usable ``q`` text."""

    def __init__(self, message: str = "Missing 'q' text"):
        super().__init__(message)
        self.message = message


class UpstreamHttpError(TranslationError):
    def __init__(self, url: str, status: int, body_snippet: str = ""):
        super().__init__(f"{url} responded with HTTP {status}")
        self.url = url
        self.status = status
        self.body_snippet = body_snippet


class UpstreamTransportError(TranslationError):
    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.message = message


class TotalFailureError(TranslationError):
    """Every configured backend failed; ``attempts`` keeps them in call order."""

    def __init__(self, attempts: List["AttemptRecord"], message: Optional[str] = None):
        super().__init__(message or f"All {len(attempts)} translation backends failed")
        self.attempts = list(attempts)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": "upstream_error", "attempts": [a.to_dict() for a in self.attempts]}
