#!/usr/bin/env python3
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

from fastapi.middleware.gzip import GZipMiddleware
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from apps.gamesite.app import create_app
from apps.gamesite.catalog_store import CatalogStore
from apps.gamesite.settings import GameSiteSettings
from core.config import ConfigLoader

DATA_DIR = PROJECT_ROOT / "src" / "data"
LOCALES = PROJECT_ROOT / "src" / "locales"

SUBMISSION = {
    "title": "Pixel Jump",
    "category": "arcade",
    "description": "Jump over pixels.",
    "imageUrl": "https://example.com/p.png",
    "gameUrl": "https://example.com/p.html",
    "developer": "Tiny Studio",
    "rating": 4.5,
}


class GameSiteApiTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        app = create_app(
            DATA_DIR / "games.json",
            categories_path=DATA_DIR / "categories.json",
            locales_dir=LOCALES,
            static_dir=Path(self._tmp.name),
            site_name="PlayHTML5 Test",
        )
        self.client = TestClient(app)

    def tearDown(self):
        self._tmp.cleanup()

    def test_healthz(self):
        response = self.client.get("/healthz")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"ok": True})

    def test_index_page(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn('<html lang="en">', response.text)
        self.assertIn("PlayHTML5 Test", response.text)
        self.assertIn("2048 Classic", response.text)

    def test_index_language_prefix(self):
        response = self.client.get("/zh/")
        self.assertEqual(response.status_code, 200)
        self.assertIn('<html lang="zh">', response.text)
        self.assertIn("经典2048", response.text)
        self.assertEqual(self.client.get("/de/").status_code, 404)

    def test_meta(self):
        body = self.client.get("/api/v1/meta").json()
        self.assertEqual(body["catalog"]["games"], 5)
        self.assertFalse(body["catalog"]["fallback_games"])
        self.assertEqual([x["code"] for x in body["languages"]], ["en", "zh", "ja", "ko"])

    def test_games_filter_search_sort(self):
        body = self.client.get("/api/v1/games", params={"category": "puzzle"}).json()
        self.assertEqual([g["id"] for g in body["games"]], [1001])
        body = self.client.get("/api/v1/games", params={"q": "neon"}).json()
        self.assertEqual(body["count"], 1)
        self.assertEqual(body["games"][0]["title"], "Neon Racer")
        body = self.client.get("/api/v1/games", params={"sort": "newest"}).json()
        self.assertEqual([g["id"] for g in body["games"]], [1002, 1001, 1005, 1003, 1004])
        body = self.client.get("/api/v1/games", params={"limit": 2}).json()
        self.assertEqual(body["count"], 2)

    def test_game_detail(self):
        body = self.client.get("/api/v1/games/1001", params={"lang": "ja"}).json()
        self.assertEqual(body["game"]["title"], "2048 クラシック")
        self.assertLessEqual(len(body["related"]), 3)
        self.assertEqual(self.client.get("/api/v1/games/9999").status_code, 404)

    def test_fragments(self):
        card = self.client.get("/api/v1/games/1002/card")
        self.assertEqual(card.status_code, 200)
        self.assertIn('data-game-id="1002"', card.text)
        modal = self.client.get("/api/v1/games/1002/modal")
        self.assertIn('id="modalGameTitle"', modal.text)
        self.assertIn("Action", modal.text)
        empty = self.client.get("/api/v1/grid", params={"q": "zzzz"})
        self.assertIn("No games found", empty.text)

    def test_add_game(self):
        bad = self.client.post("/api/v1/games", json={"title": "Only title", "rating": 7})
        self.assertEqual(bad.status_code, 422)
        self.assertFalse(bad.json()["ok"])
        self.assertIn("Rating must be between 1 and 5.", bad.json()["errors"])

        ok = self.client.post("/api/v1/games", json=SUBMISSION)
        self.assertEqual(ok.status_code, 201)
        new_id = ok.json()["game"]["id"]
        self.assertEqual(new_id, 1006)
        self.assertEqual(self.client.get(f"/api/v1/games/{new_id}").status_code, 200)
        self.assertEqual(self.client.get("/api/v1/meta").json()["catalog"]["games"], 6)

    def test_add_game_rejects_non_numeric_rating(self):
        bad = self.client.post("/api/v1/games", json=dict(SUBMISSION, rating="abc"))
        self.assertEqual(bad.status_code, 422)
        self.assertFalse(bad.json()["ok"])
        self.assertEqual(bad.json()["errors"], ["Rating must be between 1 and 5."])

        ok = self.client.post("/api/v1/games", json=dict(SUBMISSION, rating="4.5"))
        self.assertEqual(ok.status_code, 201)
        self.assertEqual(ok.json()["game"]["rating"], 4.5)

    def test_index_keeps_marker_like_titles(self):
        ok = self.client.post("/api/v1/games", json=dict(SUBMISSION, title="__PH_POPULAR_GRID__"))
        self.assertEqual(ok.status_code, 201)
        text = self.client.get("/").text
        self.assertIn("__PH_POPULAR_GRID__", text)
        self.assertEqual(text.count('data-game-id="1006"'), 1)

    def test_categories(self):
        response = self.client.get("/api/v1/categories", params={"lang": "zh"})
        self.assertEqual(response.status_code, 200)
        self.assertIn("max-age", response.headers.get("cache-control", ""))
        rows = {c["id"]: c["label"] for c in response.json()["categories"]}
        self.assertEqual(len(rows), 12)
        self.assertEqual(rows["puzzle"], "益智")

    def test_popular_featured_stats(self):
        self.assertEqual([g["id"] for g in self.client.get("/api/v1/popular").json()["games"]], [1001])
        self.assertEqual([g["id"] for g in self.client.get("/api/v1/featured").json()["games"]], [1002])
        stats = self.client.get("/api/v1/stats").json()
        self.assertEqual(stats["totalGames"], 5)

    def test_i18n_tables(self):
        body = self.client.get("/api/v1/i18n/zh").json()
        self.assertEqual(body["translations"]["common"]["search"], "搜索")
        self.assertEqual(self.client.get("/api/v1/i18n/de").status_code, 404)

    def test_language_cookie(self):
        response = self.client.post("/api/v1/language/ko")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.cookies.get("preferred-language"), "ko")
        self.assertEqual(self.client.post("/api/v1/language/xx").status_code, 404)

    def test_language_resolution(self):
        client = TestClient(self.client.app)
        client.cookies.set("preferred-language", "ja")
        self.assertEqual(client.get("/api/v1/games").json()["lang"], "ja")
        self.assertEqual(client.get("/api/v1/games", params={"lang": "zh"}).json()["lang"], "zh")
        fresh = TestClient(self.client.app)
        body = fresh.get("/api/v1/games", headers={"Accept-Language": "ko-KR,ko;q=0.9"}).json()
        self.assertEqual(body["lang"], "ko")


class FallbackCatalogTests(unittest.TestCase):
    def test_missing_files_serve_builtin_catalog(self):
        with tempfile.TemporaryDirectory() as tmp:
            app = create_app(
                Path(tmp) / "missing-games.json",
                categories_path=Path(tmp) / "missing-categories.json",
                locales_dir=LOCALES,
                static_dir=Path(tmp),
            )
            client = TestClient(app)
            meta = client.get("/api/v1/meta").json()["catalog"]
            self.assertTrue(meta["fallback_games"])
            self.assertEqual(meta["games"], 10)
            self.assertEqual(meta["categories"], 11)

    def test_auto_reload_drops_cache_headers(self):
        with tempfile.TemporaryDirectory() as tmp:
            app = create_app(
                DATA_DIR / "games.json",
                categories_path=DATA_DIR / "categories.json",
                locales_dir=LOCALES,
                static_dir=Path(tmp),
                auto_reload_catalog=True,
            )
            response = TestClient(app).get("/api/v1/categories")
            self.assertNotIn("cache-control", response.headers)


def _games_doc(count: int) -> str:
    return json.dumps({"games": [{"id": i, "title": f"Game {i}", "category": ["action"]} for i in range(1, count + 1)]})


class CatalogStoreTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.games_path = root / "games.json"
        self.games_path.write_text(_games_doc(2), encoding="utf-8")
        self.categories_path = root / "categories.json"
        self.categories_path.write_text("{broken", encoding="utf-8")

    def tearDown(self):
        self._tmp.cleanup()

    def test_broken_categories_do_not_block_games(self):
        with self.assertLogs("core.catalog", level="WARNING"):
            store = CatalogStore(self.games_path, self.categories_path)
        meta = store.meta()
        self.assertFalse(meta["fallback_games"])
        self.assertTrue(meta["fallback_categories"])
        self.assertEqual(meta["games"], 2)
        self.assertEqual(meta["categories"], 11)
        self.assertEqual(meta["category_counts"], {"action": 2})

    def test_reload_on_mtime_change(self):
        store = CatalogStore(self.games_path, self.categories_path)
        self.assertFalse(store.load())

        self.games_path.write_text(_games_doc(3), encoding="utf-8")
        stamp = self.games_path.stat().st_mtime + 10
        os.utime(self.games_path, (stamp, stamp))
        self.assertTrue(store.load())
        self.assertEqual(len(store.games()), 3)
        self.assertFalse(store.load())
        self.assertTrue(store.load(force=True))


class ServerSettingsTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        ini = self.root / "settings.ini"
        ini.write_text(
            "[PATHS]\nSRC_DIR = {src}\n\n[SERVER]\nROOT_PATH = play/\n"
            "CORS_ALLOW_ORIGINS = https://a.example, https://b.example\nGZIP_MINIMUM_SIZE = 0\n".format(src=self.root),
            encoding="utf-8",
        )
        self.settings = GameSiteSettings.from_config(ConfigLoader(ini))

    def tearDown(self):
        self._tmp.cleanup()

    def test_from_config_reads_server_section(self):
        self.assertEqual(self.settings.root_path, "/play")
        self.assertEqual(self.settings.cors_allow_origins, ["https://a.example", "https://b.example"])
        self.assertEqual(self.settings.gzip_minimum_size, 0)
        self.assertEqual(self.settings.games_path, self.root / "data" / "games.json")

    def test_create_app_uses_settings(self):
        app = create_app(locales_dir=LOCALES, static_dir=self.root, settings=self.settings)
        self.assertEqual(app.root_path, "/play")
        self.assertNotIn(GZipMiddleware, [m.cls for m in app.user_middleware])
        response = TestClient(app).get("/healthz", headers={"Origin": "https://b.example"})
        self.assertEqual(response.headers.get("access-control-allow-origin"), "https://b.example")
        # games file is missing under the temp SRC_DIR
        self.assertTrue(app.state.store.meta()["fallback_games"])

    def test_arguments_override_settings(self):
        app = create_app(
            locales_dir=LOCALES,
            static_dir=self.root,
            settings=self.settings,
            root_path="",
            cors_allow_origins=[],
            gzip_minimum_size=500,
        )
        self.assertEqual(app.root_path, "")
        self.assertIn(GZipMiddleware, [m.cls for m in app.user_middleware])
        response = TestClient(app).get("/healthz", headers={"Origin": "https://b.example"})
        self.assertNotIn("access-control-allow-origin", response.headers)


if __name__ == "__main__":
    unittest.main()
