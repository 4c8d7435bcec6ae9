"""
/**
 * @file translate_proxy/services/__init__.py
 * @description 业务服务层导出。
 */
"""

from .dispatcher_service import TranslationDispatcher
from .errors import TotalFailureError, TranslationError, UpstreamHttpError, UpstreamTransportError, ValidationError
from .translation_cache_service import MAX_ITEMS, TTL_SECONDS, TranslationCache, make_cache_key
from .translation_service import build_dispatcher, get_dispatcher, parse_translate_request, set_dispatcher, translate_text
from .upstream_client_service import DEFAULT_TIMEOUT_MS, UpstreamClient

__all__ = [
    "TranslationCache",
    "make_cache_key",
    "MAX_ITEMS",
    "TTL_SECONDS",
    "UpstreamClient",
    "DEFAULT_TIMEOUT_MS",
    "TranslationDispatcher",
    "build_dispatcher",
    "get_dispatcher",
    "set_dispatcher",
    "parse_translate_request",
    "translate_text",
    "TranslationError",
    "ValidationError",
    "UpstreamHttpError",
    "UpstreamTransportError",
    "TotalFailureError",
]
