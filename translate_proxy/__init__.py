"""
/**
 * @file translate_proxy/__init__.py
 * @description 翻译请求代理：内存缓存 + 多后端顺序回退。
 */
"""

__version__ = "0.1.0"
