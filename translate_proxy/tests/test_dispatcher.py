"""
/**
 * @file translate_proxy/tests/test_dispatcher.py
 * @description 调度器：缓存命中短路、顺序回退、全部失败聚合。
 */
"""

import unittest
from unittest.mock import MagicMock

from translate_proxy.models import AttemptRecord, TranslateRequest
from translate_proxy.services.dispatcher_service import TranslationDispatcher
from translate_proxy.services.errors import TotalFailureError, ValidationError
from translate_proxy.services.translation_cache_service import TranslationCache, make_cache_key
from translate_proxy.services.upstream_client_service import UpstreamClient

A = "http://a.local/translate"
B = "http://b.local/translate"
C = "http://c.local/translate"


def _client(outcomes):
    """outcomes: url -> AttemptRecord returned for that url."""
    client = MagicMock(spec=UpstreamClient)
    client.call.side_effect = lambda url, request, timeout_ms: outcomes[url]
    return client


def _called_urls(client):
    return [c.args[0] for c in client.call.call_args_list]


class TestTranslationDispatcher(unittest.TestCase):
    def setUp(self):
        self.request = TranslateRequest(q="hello", source="en", target="fr")

    def test_primary_success(self):
        client = _client({A: AttemptRecord.success(A, "bonjour"), B: AttemptRecord.success(B, "salut")})
        d = TranslationDispatcher([A, B], client, timeout_ms=1234)

        result = d.translate(self.request)

        self.assertEqual(result.text, "bonjour")
        self.assertFalse(result.cached)
        self.assertEqual(result.upstream, A)
        self.assertEqual(_called_urls(client), [A])
        client.call.assert_called_once_with(A, self.request, 1234)

    def test_cache_hit_never_calls_upstream(self):
        cache = TranslationCache()
        cache.put(make_cache_key("en", "fr", "hello"), "bonjour")
        client = _client({})
        d = TranslationDispatcher([A], client, cache=cache)

        result = d.translate(self.request)

        self.assertEqual(result.to_response(), {"translatedText": "bonjour", "cached": True})
        client.call.assert_not_called()

    def test_fallback_after_transport_error(self):
        client = _client({
            A: AttemptRecord.transport_error(A, "Connection refused"),
            B: AttemptRecord.success(B, "bonjour"),
            C: AttemptRecord.success(C, "never"),
        })
        d = TranslationDispatcher([A, B, C], client)

        with self.assertLogs("translate.dispatcher", "WARNING") as logs:
            result = d.translate(self.request)

        self.assertEqual(result.text, "bonjour")
        self.assertEqual(result.upstream, B)
        self.assertEqual(_called_urls(client), [A, B])
        self.assertEqual(len(logs.records), 1)
        self.assertIn(A, logs.records[0].getMessage())
        self.assertNotIn(C, logs.records[0].getMessage())

    def test_all_fail_aggregates_in_order(self):
        client = _client({
            A: AttemptRecord.http_error(A, 500, "boom a"),
            B: AttemptRecord.http_error(B, 500, "boom b"),
        })
        d = TranslationDispatcher([A, B], client)

        with self.assertRaises(TotalFailureError) as ctx:
            d.translate(self.request)

        attempts = ctx.exception.attempts
        self.assertEqual([a.url for a in attempts], [A, B])
        self.assertEqual([a.status for a in attempts], [500, 500])
        body = ctx.exception.to_dict()
        self.assertEqual(body["error"], "upstream_error")
        self.assertEqual(body["attempts"][1], {"url": B, "outcome": "http_error", "status": 500, "detail": "boom b"})
        self.assertEqual(len(d.cache), 0)

    def test_mixed_failures_keep_detail(self):
        client = _client({
            A: AttemptRecord.transport_error(A, "timeout after 8000 ms"),
            B: AttemptRecord.http_error(B, 429, "slow down"),
        })
        d = TranslationDispatcher([A, B], client)
        with self.assertRaises(TotalFailureError) as ctx:
            d.translate(self.request)
        first, second = ctx.exception.attempts
        self.assertEqual(first.message, "timeout after 8000 ms")
        self.assertEqual((second.status, second.body_snippet), (429, "slow down"))

    def test_second_call_served_from_cache(self):
        client = _client({A: AttemptRecord.success(A, "bonjour")})
        d = TranslationDispatcher([A], client)

        first = d.translate(self.request)
        second = d.translate(TranslateRequest(q="hello", source="en", target="fr"))

        self.assertFalse(first.cached)
        self.assertTrue(second.cached)
        self.assertEqual(first.text, second.text)
        self.assertIsNone(second.upstream)
        self.assertEqual(client.call.call_count, 1)

    def test_target_language_cached_independently(self):
        client = _client({A: AttemptRecord.success(A, "translated")})
        d = TranslationDispatcher([A], client)

        d.translate(self.request)
        other = d.translate(TranslateRequest(q="hello", source="en", target="de"))

        self.assertFalse(other.cached)
        self.assertEqual(client.call.call_count, 2)
        self.assertEqual(len(d.cache), 2)

    def test_empty_upstream_text_is_cached(self):
        client = _client({A: AttemptRecord.success(A, "")})
        d = TranslationDispatcher([A], client)

        self.assertEqual(d.translate(self.request).text, "")
        again = d.translate(self.request)

        self.assertTrue(again.cached)
        self.assertEqual(again.text, "")
        self.assertEqual(client.call.call_count, 1)

    def test_empty_text_rejected_before_backends(self):
        client = _client({})
        d = TranslationDispatcher([A], client)
        with self.assertRaises(ValidationError):
            d.translate(TranslateRequest(q=""))
        client.call.assert_not_called()

    def test_requires_backends(self):
        with self.assertRaises(ValueError):
            TranslationDispatcher([], _client({}))


if __name__ == "__main__":
    unittest.main()
