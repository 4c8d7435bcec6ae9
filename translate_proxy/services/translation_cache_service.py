"""
/**
 * @file translate_proxy/services/translation_cache_service.py
 * @description 内存翻译缓存：按插入顺序淘汰（非 LRU），TTL 惰性过期，线程安全。
 */
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Callable, Dict, Optional, Tuple


logger = logging.getLogger("translate.cache")

MAX_ITEMS = 500
TTL_SECONDS = 60 * 60 * 24 * 60  # 60 days

KEY_SEPARATOR = "|"


def make_cache_key(source: str, target: str, text: str) -> str:
    # text goes last so a separator inside it cannot collide with the language codes
    return KEY_SEPARATOR.join((source, target, text))


class TranslationCache:
    def __init__(
        self,
        max_items: int = MAX_ITEMS,
        ttl_seconds: float = TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        if max_items < 1:
            raise ValueError("max_items must be >= 1")
        self.max_items = max_items
        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.time
        # key -> (value, stored_at); order is insertion order
        self._entries: "OrderedDict[str, Tuple[str, float]]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.expirations = 0

    def get(self, key: str) -> Optional[str]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            value, stored_at = entry
            if now - stored_at > self.ttl_seconds:
                del self._entries[key]
                self.expirations += 1
                self.misses += 1
                return None
            self.hits += 1
            return value

    def put(self, key: str, value: str) -> None:
        now = self._clock()
        evicted = None
        with self._lock:
            # re-insert moves the key to the newest position
            self._entries.pop(key, None)
            self._entries[key] = (value, now)
            if len(self._entries) > self.max_items:
                evicted, _ = self._entries.popitem(last=False)
                self.evictions += 1
        if evicted is not None:
            logger.debug(f"Evicted oldest cache entry ({len(evicted)} chars key)")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_items": self.max_items,
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
                "expirations": self.expirations,
            }
