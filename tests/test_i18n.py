#!/usr/bin/env python3
import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.i18n import I18n, replace_params

LOCALES = PROJECT_ROOT / "src" / "locales"


class ReplaceParamsTests(unittest.TestCase):
    def test_known_and_unknown(self):
        self.assertEqual(replace_params("{count} games in {cat}", {"count": 3}), "3 games in {cat}")
        self.assertEqual(replace_params("{count}", None), "{count}")


class DetectLanguageTests(unittest.TestCase):
    def setUp(self):
        self.i18n = I18n(LOCALES)

    def test_order(self):
        self.assertEqual(self.i18n.detect_language("ja", "zh", "ko-KR"), "ja")
        self.assertEqual(self.i18n.detect_language("xx", "zh", "ko-KR"), "zh")
        self.assertEqual(self.i18n.detect_language(None, None, "ko-KR,ko;q=0.9,en;q=0.8"), "ko")
        self.assertEqual(self.i18n.detect_language(None, None, "fr-FR"), "en")
        self.assertEqual(self.i18n.detect_language(), "en")

    def test_validity(self):
        self.assertTrue(I18n.is_valid_language("zh"))
        self.assertFalse(I18n.is_valid_language("de"))
        self.assertEqual(I18n.supported_languages(), ["en", "zh", "ja", "ko"])


class TranslateTests(unittest.TestCase):
    def setUp(self):
        self.i18n = I18n(LOCALES)

    def test_lookup_and_params(self):
        self.assertEqual(self.i18n.t("games.playNow"), "Play Now")
        self.assertEqual(self.i18n.t("common.gamesCount", {"count": 5}, lang="zh"), "共 5 款游戏")

    def test_missing_segment_uses_fallback_language(self):
        self.assertEqual(self.i18n.t("common.addGame", lang="ja"), "Add Game")

    def test_missing_key_returns_key(self):
        with self.assertLogs("core.i18n.translator", level="WARNING"):
            self.assertEqual(self.i18n.t("nope.nothing"), "nope.nothing")

    def test_non_string_returns_key(self):
        with self.assertLogs("core.i18n.translator", level="WARNING"):
            self.assertEqual(self.i18n.t("common"), "common")

    def test_switch_language(self):
        self.assertFalse(self.i18n.switch_language("en"))
        self.assertFalse(self.i18n.switch_language("de"))
        self.assertTrue(self.i18n.switch_language("ko"))
        self.assertEqual(self.i18n.current_lang, "ko")
        self.assertEqual(self.i18n.t("sort.newest"), "최신순")


class FallbackTableTests(unittest.TestCase):
    def test_missing_locale_dir_uses_builtin(self):
        with tempfile.TemporaryDirectory() as tmp:
            i18n = I18n(Path(tmp))
            with self.assertLogs("core.i18n.translator", level="WARNING"):
                self.assertEqual(i18n.t("common.search", lang="zh"), "搜索")
            self.assertEqual(i18n.t("navigation.home", lang="ja"), "Home")

    def test_malformed_locale(self):
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "en.json").write_text("[1, 2]", encoding="utf-8")
            i18n = I18n(Path(tmp))
            with self.assertLogs("core.i18n.translator", level="WARNING"):
                self.assertEqual(i18n.t("common.play"), "Play")


if __name__ == "__main__":
    unittest.main()
