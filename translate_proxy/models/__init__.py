"""
/**
 * @file translate_proxy/models/__init__.py
 * @description 数据模型导出。
 */
"""

from .attempt_models import (
    OUTCOME_HTTP_ERROR,
    OUTCOME_SUCCESS,
    OUTCOME_TRANSPORT_ERROR,
    AttemptRecord,
    TranslationResult,
)
from .translate_request_model import DEFAULT_SOURCE_LANG, DEFAULT_TARGET_LANG, TranslateRequest, TranslateResponse

__all__ = [
    "AttemptRecord",
    "TranslationResult",
    "TranslateRequest",
    "TranslateResponse",
    "OUTCOME_SUCCESS",
    "OUTCOME_HTTP_ERROR",
    "OUTCOME_TRANSPORT_ERROR",
    "DEFAULT_SOURCE_LANG",
    "DEFAULT_TARGET_LANG",
]
