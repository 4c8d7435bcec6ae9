"""
/**
 * @file translate_proxy/utils/__init__.py
 * @description 工具函数导出。
 */
"""

from .validators import is_valid_backend_url, is_valid_lang, is_valid_text

__all__ = ["is_valid_backend_url", "is_valid_lang", "is_valid_text"]
