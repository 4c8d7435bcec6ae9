"""
/**
 * @file translate_proxy/services/dispatcher_service.py
 * @description 翻译调度：先查缓存，未命中则按配置顺序逐个尝试后端，首个成功即返回并写入缓存。
 */
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from translate_proxy.models import AttemptRecord, TranslateRequest, TranslationResult
from translate_proxy.services.errors import TotalFailureError, ValidationError
from translate_proxy.services.translation_cache_service import TranslationCache, make_cache_key
from translate_proxy.services.upstream_client_service import DEFAULT_TIMEOUT_MS, UpstreamClient


logger = logging.getLogger("translate.dispatcher")


class TranslationDispatcher:
    """
    Cache-first, ordered-fallback translation.

    Backends are tried one at a time in configured order. The first success is
    cached and returned; failures are recorded and surface only when every
    backend has failed.
    """

    def __init__(
        self,
        backends: Sequence[str],
        client: UpstreamClient,
        cache: Optional[TranslationCache] = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ):
        if not backends:
            raise ValueError("At least one translation backend is required")
        self.backends = tuple(backends)
        self.client = client
        self.cache = cache if cache is not None else TranslationCache()
        self.timeout_ms = timeout_ms

    def translate(self, request: TranslateRequest) -> TranslationResult:
        if not isinstance(request.q, str) or not request.q:
            raise ValidationError()

        key = make_cache_key(request.source, request.target, request.q)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {request.source}->{request.target} ({len(request.q)} chars)")
            return TranslationResult(text=cached, cached=True)

        attempts: List[AttemptRecord] = []
        for url in self.backends:
            attempt = self.client.call(url, request, self.timeout_ms)
            if attempt.ok:
                self.cache.put(key, attempt.text or "")
                if attempts:
                    logger.info(f"Translated via fallback {url} after {len(attempts)} failed attempt(s)")
                return TranslationResult(text=attempt.text or "", cached=False, upstream=url)
            attempts.append(attempt)
            logger.warning(f"Backend attempt failed: {attempt.to_dict()}")

        logger.error(f"All {len(attempts)} translation backends failed")
        raise TotalFailureError(attempts)
