import unittest
from unittest.mock import MagicMock, patch

from translate_proxy.config import Settings
from translate_proxy.models import TranslationResult
from translate_proxy.services import translation_service
from translate_proxy.services.dispatcher_service import TranslationDispatcher
from translate_proxy.services.errors import ValidationError
from translate_proxy.services.translation_service import build_dispatcher, parse_translate_request, translate_text


class TestParseTranslateRequest(unittest.TestCase):
    def test_defaults(self):
        req = parse_translate_request({"q": "hello"})
        self.assertEqual((req.q, req.source, req.target), ("hello", "auto", "fr"))

    def test_explicit_languages(self):
        req = parse_translate_request({"q": "hello", "source": "en", "target": "pt-BR"})
        self.assertEqual((req.source, req.target), ("en", "pt-BR"))

    def test_null_languages_use_defaults(self):
        req = parse_translate_request({"q": "hello", "source": None, "target": None})
        self.assertEqual((req.source, req.target), ("auto", "fr"))

    def test_rejects_bad_q(self):
        for payload in (None, [], {}, {"q": ""}, {"q": 42}, {"q": ["a"]}):
            with self.subTest(payload=payload):
                with self.assertRaises(ValidationError) as ctx:
                    parse_translate_request(payload)
                self.assertEqual(ctx.exception.message, "Missing 'q' text")

    def test_rejects_bad_language(self):
        with self.assertRaises(ValidationError):
            parse_translate_request({"q": "hello", "target": "fr|en"})
        with self.assertRaises(ValidationError):
            parse_translate_request({"q": "hello", "source": 7})


class TestTranslateText(unittest.TestCase):
    def test_calls_dispatcher(self):
        dispatcher = MagicMock(spec=TranslationDispatcher)
        dispatcher.translate.return_value = TranslationResult(text="bonjour", cached=False, upstream="http://a/translate")

        resp = translate_text({"q": "hello", "source": "en"}, dispatcher=dispatcher)

        self.assertEqual(resp, {"translatedText": "bonjour", "cached": False, "upstream": "http://a/translate"})
        request = dispatcher.translate.call_args.args[0]
        self.assertEqual((request.q, request.source, request.target), ("hello", "en", "fr"))

    def test_validation_happens_before_dispatch(self):
        dispatcher = MagicMock(spec=TranslationDispatcher)
        with self.assertRaises(ValidationError):
            translate_text({"q": ""}, dispatcher=dispatcher)
        dispatcher.translate.assert_not_called()


class TestBuildDispatcher(unittest.TestCase):
    def tearDown(self):
        translation_service.set_dispatcher(None)

    @patch.dict("os.environ", {}, clear=True)
    def test_builds_from_settings(self):
        settings = Settings(raw={"backends": {
            "primary": "http://a/translate",
            "fallbacks": ["http://b/translate"],
            "api_key": "k",
            "timeout_ms": 3000,
        }})
        d = build_dispatcher(settings)
        self.assertEqual(d.backends, ("http://a/translate", "http://b/translate"))
        self.assertEqual(d.timeout_ms, 3000)
        self.assertEqual(d.client.api_key, "k")

    @patch.object(translation_service, "load_settings")
    def test_get_dispatcher_is_built_once(self, mock_load):
        mock_load.return_value = Settings(raw={"backends": {"primary": "http://a/translate"}})
        translation_service.set_dispatcher(None)
        with patch.dict("os.environ", {}, clear=True):
            first = translation_service.get_dispatcher()
            second = translation_service.get_dispatcher()
        self.assertIs(first, second)
        mock_load.assert_called_once()


if __name__ == "__main__":
    unittest.main()
