"""
/**
 * @file translate_proxy/config/settings.py
 * @description 配置加载与合并（config.json + config.local.json + 环境变量），进程启动时读取一次。
 */
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from translate_proxy.utils.validators import is_valid_backend_url


logger = logging.getLogger("config_loader")

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(REPO_ROOT, "config.json")
CONFIG_LOCAL_PATH = os.path.join(REPO_ROOT, "config.local.json")
CONFIG_EXAMPLE_PATH = os.path.join(REPO_ROOT, "config.example.json")

DEFAULT_PORT = 8080
DEFAULT_PRIMARY_URL = "https://libretranslate.com/translate"
DEFAULT_TIMEOUT_MS = 8000


def _load_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            value = json.load(f)
            return value if isinstance(value, dict) else {}
    except FileNotFoundError:
        return {}


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def _csv_list(value: Optional[str]) -> List[str]:
    return [s.strip() for s in (value or "").split(",") if s.strip()]


def _int_or(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Settings:
    raw: Dict[str, Any]

    @property
    def backends_section(self) -> Dict[str, Any]:
        value = self.raw.get("backends", {})
        return value if isinstance(value, dict) else {}

    @property
    def server(self) -> Dict[str, Any]:
        value = self.raw.get("server", {})
        return value if isinstance(value, dict) else {}

    @property
    def primary_url(self) -> str:
        env = os.getenv("LT_URL")
        if env:
            return env.strip()
        value = self.backends_section.get("primary")
        if isinstance(value, str) and value.strip():
            return value.strip()
        return DEFAULT_PRIMARY_URL

    @property
    def fallback_urls(self) -> List[str]:
        env = os.getenv("LT_FALLBACK_URLS")
        if env is not None:
            return _csv_list(env)
        value = self.backends_section.get("fallbacks", [])
        if isinstance(value, str):
            return _csv_list(value)
        if isinstance(value, list):
            return [v.strip() for v in value if isinstance(v, str) and v.strip()]
        return []

    @property
    def backends(self) -> Tuple[str, ...]:
        """Primary first, then fallbacks in listed order; invalid and duplicate URLs dropped."""
        ordered: List[str] = []
        for url in [self.primary_url] + self.fallback_urls:
            if not is_valid_backend_url(url):
                logger.warning(f"Ignoring invalid backend URL: {url!r}")
                continue
            if url in ordered:
                continue
            ordered.append(url)
        return tuple(ordered)

    @property
    def api_key(self) -> str:
        env = os.getenv("LT_API_KEY")
        if env is not None:
            return env
        value = self.backends_section.get("api_key")
        return value if isinstance(value, str) else ""

    @property
    def timeout_ms(self) -> int:
        env = os.getenv("LT_TIMEOUT_MS")
        if env:
            return max(_int_or(env, DEFAULT_TIMEOUT_MS), 1)
        return max(_int_or(self.backends_section.get("timeout_ms"), DEFAULT_TIMEOUT_MS), 1)

    @property
    def port(self) -> int:
        return _int_or(os.getenv("PORT") or self.server.get("port"), DEFAULT_PORT)

    @property
    def cors_origins(self) -> List[str]:
        env = os.getenv("CORS_ORIGINS")
        if env:
            return _csv_list(env)
        value = self.server.get("cors_origins")
        if isinstance(value, list) and value:
            return [v for v in value if isinstance(v, str)]
        return ["*"]

    @property
    def log_level(self) -> str:
        value = os.getenv("LOG_LEVEL") or self.server.get("log_level") or "INFO"
        return str(value).upper()


def read_settings(
    base_path: str = CONFIG_PATH,
    local_path: str = CONFIG_LOCAL_PATH,
    example_path: str = CONFIG_EXAMPLE_PATH,
) -> Settings:
    base_cfg = _load_json(base_path)
    if not base_cfg.get("backends") and os.path.exists(example_path):
        base_cfg = _load_json(example_path)
    local_cfg = _load_json(local_path)
    return Settings(raw=_merge_dicts(base_cfg, local_cfg))


_CACHED_SETTINGS: Optional[Settings] = None
_SETTINGS_LOCK = threading.Lock()


def load_settings() -> Settings:
    """
    Get process settings. Read once on first call; the backend list never
    changes afterwards.
    """
    global _CACHED_SETTINGS
    with _SETTINGS_LOCK:
        if _CACHED_SETTINGS is None:
            try:
                _CACHED_SETTINGS = read_settings()
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load config: {e}. Using defaults.")
                _CACHED_SETTINGS = Settings(raw={})
        return _CACHED_SETTINGS
