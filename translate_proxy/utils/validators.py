import re
from typing import Any, Optional
from urllib.parse import urlparse

LANG_RE = re.compile(r"^[A-Za-z]{2,3}([-_][A-Za-z0-9]{2,8})*$")


def is_valid_backend_url(value: str) -> bool:
    v = (value or "").strip()
    try:
        parsed = urlparse(v)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    except ValueError:
        return False


def is_valid_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def is_valid_lang(value: Optional[str]) -> bool:
    if not isinstance(value, str):
        return False
    v = value.strip()
    return v == "auto" or bool(LANG_RE.fullmatch(v))
