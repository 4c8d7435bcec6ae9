"""
/**
 * @file translate_proxy/services/translation_service.py
 * @description 翻译服务入口：校验入参、按配置装配调度器（进程内单例）。
 */
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

from translate_proxy.config import Settings, load_settings
from translate_proxy.models import DEFAULT_SOURCE_LANG, DEFAULT_TARGET_LANG, TranslateRequest, TranslationResult
from translate_proxy.services.dispatcher_service import TranslationDispatcher
from translate_proxy.services.errors import ValidationError
from translate_proxy.services.translation_cache_service import TranslationCache
from translate_proxy.services.upstream_client_service import UpstreamClient
from translate_proxy.utils import is_valid_lang, is_valid_text


logger = logging.getLogger("translate.service")

_DISPATCHER: Optional[TranslationDispatcher] = None
_DISPATCHER_LOCK = threading.Lock()


def build_dispatcher(settings: Settings) -> TranslationDispatcher:
    backends = settings.backends
    if not backends:
        raise ValueError("No valid translation backend configured")
    client = UpstreamClient(api_key=settings.api_key)
    return TranslationDispatcher(backends, client, cache=TranslationCache(), timeout_ms=settings.timeout_ms)


def get_dispatcher() -> TranslationDispatcher:
    global _DISPATCHER
    with _DISPATCHER_LOCK:
        if _DISPATCHER is None:
            _DISPATCHER = build_dispatcher(load_settings())
            logger.info(f"Dispatcher ready with backends: {', '.join(_DISPATCHER.backends)}")
        return _DISPATCHER


def set_dispatcher(dispatcher: Optional[TranslationDispatcher]) -> None:
    global _DISPATCHER
    with _DISPATCHER_LOCK:
        _DISPATCHER = dispatcher


def parse_translate_request(payload: Any) -> TranslateRequest:
    if not isinstance(payload, dict):
        raise ValidationError()
    q = payload.get("q")
    if not is_valid_text(q):
        raise ValidationError()

    source = payload.get("source")
    target = payload.get("target")
    # null and missing both fall back to the defaults
    source = DEFAULT_SOURCE_LANG if source is None else source
    target = DEFAULT_TARGET_LANG if target is None else target
    # Language codes are restricted so a "|" can only appear in the text, the last
    # part of the cache key; the upstream itself would accept any string.
    if not is_valid_lang(source):
        raise ValidationError("Invalid 'source' language")
    if not is_valid_lang(target):
        raise ValidationError("Invalid 'target' language")
    return TranslateRequest(q=q, source=source.strip(), target=target.strip())


def translate_text(payload: Any, dispatcher: Optional[TranslationDispatcher] = None) -> Dict[str, Any]:
    d = dispatcher or get_dispatcher()
    request = parse_translate_request(payload)
    result: TranslationResult = d.translate(request)
    return result.to_response()
