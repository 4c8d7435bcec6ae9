"""
/**
 * @file translate_proxy/models/translate_request_model.py
 * @description 翻译请求/响应模型（Pydantic）。
 */
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


DEFAULT_SOURCE_LANG = "auto"
DEFAULT_TARGET_LANG = "fr"


class TranslateRequest(BaseModel):
    q: str
    source: str = DEFAULT_SOURCE_LANG
    target: str = DEFAULT_TARGET_LANG


class TranslateResponse(BaseModel):
    translatedText: str
    cached: bool
    upstream: Optional[str] = None
