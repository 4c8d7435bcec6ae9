"""
/**
 * @file translate_proxy/services/upstream_client_service.py
 * @description LibreTranslate 兼容后端的单次调用封装：超时、状态码、错误归一化为 AttemptRecord。
 */
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, Optional

import requests

from translate_proxy.models import AttemptRecord, TranslateRequest
from translate_proxy.services.errors import UpstreamHttpError, UpstreamTransportError


logger = logging.getLogger("translate.upstream")

DEFAULT_TIMEOUT_MS = 8000
BODY_SNIPPET_CHARS = 200


class UpstreamClient:
    def __init__(self, api_key: Optional[str] = None, session: Optional[requests.Session] = None):
        self.api_key = api_key or ""
        self._session = session or requests.Session()

    def build_payload(self, request: TranslateRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "q": request.q,
            "source": request.source,
            "target": request.target,
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key
        return payload

    def call(self, url: str, request: TranslateRequest, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> AttemptRecord:
        """
        One request/response exchange with ``url``.
        Never raises for upstream conditions; the outcome is in the returned record.
        """
        start = time.monotonic()
        try:
            text = self._exchange(url, request, timeout_ms)
        except UpstreamHttpError as e:
            return AttemptRecord.http_error(url, e.status, e.body_snippet, elapsed_ms=_elapsed_ms(start))
        except UpstreamTransportError as e:
            return AttemptRecord.transport_error(url, e.message, elapsed_ms=_elapsed_ms(start))
        return AttemptRecord.success(url, text, elapsed_ms=_elapsed_ms(start))

    def _exchange(self, url: str, request: TranslateRequest, timeout_ms: int) -> str:
        """Run the exchange under one deadline; past it the in-flight response is closed."""
        timeout_s = max(timeout_ms, 1) / 1000.0
        state: Dict[str, Any] = {}
        done = threading.Event()

        def run():
            try:
                state["text"] = self._post_and_read(url, request, timeout_ms, state)
            except Exception as e:
                state["error"] = e
            finally:
                done.set()

        worker = threading.Thread(target=run, name="upstream-call", daemon=True)
        worker.start()
        if not done.wait(timeout_s):
            response = state.get("response")
            if response is not None:
                response.close()
            logger.debug(f"Cancelled call to {url} after {timeout_ms} ms")
            raise UpstreamTransportError(url, f"timeout after {timeout_ms} ms")
        if "error" in state:
            raise state["error"]
        return state["text"]

    def _post_and_read(self, url: str, request: TranslateRequest, timeout_ms: int, state: Dict[str, Any]) -> str:
        timeout_s = max(timeout_ms, 1) / 1000.0
        try:
            response = self._session.post(
                url,
                json=self.build_payload(request),
                headers={"Content-Type": "application/json"},
                timeout=(timeout_s, timeout_s),
                stream=True,
            )
        except requests.exceptions.Timeout:
            raise UpstreamTransportError(url, f"timeout after {timeout_ms} ms")
        except requests.exceptions.RequestException as e:
            raise UpstreamTransportError(url, f"{type(e).__name__}: {e}")
        state["response"] = response

        with response:
            if not response.ok:
                try:
                    snippet = (response.text or "")[:BODY_SNIPPET_CHARS]
                except requests.exceptions.RequestException:
                    snippet = ""
                raise UpstreamHttpError(url, response.status_code, snippet)
            try:
                data = response.json()
            except ValueError:
                raise UpstreamTransportError(url, "invalid JSON in upstream response")
            except requests.exceptions.RequestException as e:
                raise UpstreamTransportError(url, f"{type(e).__name__}: {e}")

        # A 2xx without translatedText is an empty translation, not a failure.
        if isinstance(data, dict):
            value = data.get("translatedText")
            if isinstance(value, str):
                return value
        return ""

    def close(self) -> None:
        self._session.close()


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
