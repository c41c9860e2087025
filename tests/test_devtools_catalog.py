#!/usr/bin/env python3
import json
import os
import sys
import tempfile
import unittest
from datetime import date
from pathlib import Path

from PIL import Image

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.catalog import read_games
from devtools import auto_generate_games, build_cache, image_optimize, upload_game, watch_sync


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class AutoGenerateTests(unittest.TestCase):
    def test_parse_categories_from_filename(self):
        parse = auto_generate_games.parse_categories_from_filename
        self.assertEqual(parse("action_new_neon_racer.html"), ["action", "new"])
        self.assertEqual(parse("Puzzle_2048.html"), ["puzzle"])
        self.assertEqual(parse("racer_action.html"), ["other"])
        self.assertEqual(parse("card.v2.html"), ["card"])

    def test_find_image(self):
        files = ["puzzle-2048.webp", "other.jpg"]
        self.assertEqual(auto_generate_games.find_image("puzzle_2048", files), "puzzle-2048.webp")
        self.assertIsNone(auto_generate_games.find_image("puzzle", files))

    def test_generate_games(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("arcade_snake.html", "puzzle_2048.html", "nocover.html"):
                _write(root / "games" / name, "<html></html>")
            _write(root / "images" / "arcade_snake.jpg", "x")
            _write(root / "images" / "puzzle-2048.webp", "x")

            games = auto_generate_games.generate_games(root / "games", root / "images", today=date(2024, 5, 1))
            self.assertEqual([g["id"] for g in games], [1001, 1002])
            snake = games[0]
            self.assertEqual(snake["title"]["en"], "ARCADE_SNAKE Game")
            self.assertEqual(snake["title"]["zh"], "ARCADE_SNAKE 小游戏")
            self.assertEqual(snake["category"], ["arcade"])
            self.assertEqual(snake["image"], "/images/games/arcade_snake.jpg")
            self.assertEqual(snake["url"], "/games/arcade_snake.html")
            self.assertEqual(snake["published"], "2024-05-01")
            self.assertEqual(snake["rating"], 4.8)
            self.assertEqual(snake["plays"], "0+")

    def test_run_writes_games_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root / "games" / "card_solitaire.html", "<html></html>")
            _write(root / "images" / "card-solitaire.webp", "x")
            out = root / "data" / "games.json"
            self.assertEqual(auto_generate_games.run(root / "games", root / "images", out), 0)
            doc = json.loads(out.read_text(encoding="utf-8"))
            self.assertEqual(len(doc["games"]), 1)
            self.assertIn("generated", doc["meta"])
            self.assertEqual(read_games(out)[0].category, ["card"])
            self.assertEqual(auto_generate_games.run(root / "missing", root / "images", out), 2)


class ImageOptimizeTests(unittest.TestCase):
    def test_parse_meta_and_alt(self):
        self.assertEqual(
            image_optimize.parse_meta("puzzle-2048-game.webp"),
            {"category": "puzzle", "name": "2048", "keyword": "2048 game"},
        )
        self.assertEqual(image_optimize.parse_meta("solo.jpg"), {"category": "solo", "name": "solo", "keyword": "solo"})
        self.assertEqual(
            image_optimize.alt_text("puzzle-2048-game"),
            "puzzle 2048 html5 game, 2048 game online play, free puzzle game",
        )

    def test_safe_name(self):
        self.assertEqual(image_optimize.safe_name("Big Cover!!"), "big-cover-")
        self.assertEqual(image_optimize.safe_name("Neon_Racer 2"), "neon-racer-2")

    def test_optimize_dir(self):
        with tempfile.TemporaryDirectory() as tmp:
            d = Path(tmp)
            Image.new("RGBA", (1600, 1200), (200, 10, 10, 128)).save(d / "Puzzle 2048 Game.png")
            Image.new("RGB", (100, 50), (0, 0, 255)).save(d / "tiny.png")
            (d / "broken.png").write_bytes(b"not an image")

            res = image_optimize.optimize_dir(d)

            self.assertEqual(sorted(res["optimized"]), ["Puzzle 2048 Game.png", "tiny.png"])
            self.assertEqual(res["failed"], ["broken.png"])
            self.assertFalse((d / "Puzzle 2048 Game.png").exists())
            self.assertTrue((d / "broken.png").exists())
            with Image.open(d / "puzzle-2048-game.jpg") as im:
                self.assertEqual(im.size, (800, 600))
                self.assertEqual(im.mode, "RGB")
            with Image.open(d / "tiny.webp") as im:
                self.assertEqual(im.size, (100, 50))

            alt = json.loads((d / image_optimize.ALT_FILE).read_text(encoding="utf-8"))
            self.assertEqual(
                alt["puzzle-2048-game.webp"],
                "puzzle 2048 html5 game, 2048 game online play, free puzzle game",
            )
            self.assertIn("tiny.jpg", alt)


class UploadGameTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.uploader = upload_game.GameUploader(self.root)
        self.uploader.init()

    def tearDown(self):
        self._tmp.cleanup()

    def test_sanitize_file_name(self):
        self.assertEqual(upload_game.sanitize_file_name("  Super Fighter 2!! "), "super-fighter-2")
        self.assertEqual(upload_game.sanitize_file_name("--A__B--"), "a-b")

    def test_upload_with_template_and_placeholder(self):
        ok = self.uploader.upload_game(
            {"title": "Space Run", "description": "Run <fast>", "category": "Action", "externalUrl": "https://x.example/g"},
            today=date(2024, 2, 3),
        )
        self.assertTrue(ok)
        games = self.uploader.list_games()
        self.assertEqual(len(games), 1)
        g = games[0]
        self.assertEqual(g.id, 1)
        self.assertEqual(g.url, "/games/space-run.html")
        self.assertEqual(g.image, "https://picsum.photos/seed/space-run/400/300")
        self.assertEqual(g.rating, 4.0)
        self.assertEqual(g.developer, "Unknown")
        self.assertEqual(g.category, ["action"])
        page = (self.root / "public" / "games" / "space-run.html").read_text(encoding="utf-8")
        self.assertIn('src="https://x.example/g"', page)
        self.assertIn("Run &lt;fast&gt;", page)

    def test_upload_copies_files_and_backs_up(self):
        self.uploader.upload_game({"title": "First", "description": "d", "category": "puzzle"})
        game_file = _write(self.root / "in" / "game.html", "<html>mine</html>")
        image_file = _write(self.root / "in" / "cover.webp", "img")
        ok = self.uploader.upload_game(
            {"title": "Second Game", "description": "d", "category": "card", "rating": "4.6",
             "developer": "Me", "gameFilePath": str(game_file), "imageFilePath": str(image_file)}
        )
        self.assertTrue(ok)
        games = self.uploader.list_games()
        self.assertEqual([g.id for g in games], [2, 1])
        self.assertEqual(games[0].image, "/images/games/second-game.webp")
        self.assertEqual(games[0].rating, 4.6)
        self.assertEqual(games[0].developer, "Me")
        self.assertEqual((self.root / "public" / "games" / "second-game.html").read_text(encoding="utf-8"), "<html>mine</html>")
        self.assertTrue((self.root / "public" / "images" / "games" / "second-game.webp").exists())
        self.assertEqual(len(list((self.root / "backups").glob("games-*.json"))), 1)

    def test_upload_fails_on_broken_data_file(self):
        _write(self.uploader.data_file, "{broken")
        with self.assertLogs("devtools.upload_game", level="ERROR"):
            self.assertFalse(self.uploader.upload_game({"title": "X", "description": "d", "category": "card"}))

    def test_batch_and_delete(self):
        results = self.uploader.batch_upload(
            [{"title": "One", "description": "d", "category": "card"}, {"title": "", "description": "d"}]
        )
        self.assertEqual([r["success"] for r in results], [True, False])
        game_file = self.root / "public" / "games" / "one.html"
        self.assertTrue(game_file.exists())
        self.assertTrue(self.uploader.delete_game(1))
        self.assertFalse(game_file.exists())
        self.assertEqual(self.uploader.list_games(), [])
        self.assertFalse(self.uploader.delete_game(1))


class BuildCacheTests(unittest.TestCase):
    def test_snapshot_diff(self):
        with tempfile.TemporaryDirectory() as tmp:
            d = Path(tmp)
            a = _write(d / "a.json", "1")
            _write(d / "sub" / "b.js", "2")
            old = build_cache.snapshot(d)
            self.assertEqual(sorted(old), ["a.json", "sub/b.js"])

            a.write_text("changed", encoding="utf-8")
            (d / "sub" / "b.js").unlink()
            _write(d / "c.json", "3")
            new = build_cache.snapshot(d)
            self.assertEqual(
                build_cache.diff_snapshots(old, new),
                [("change", "a.json"), ("add", "c.json"), ("unlink", "sub/b.js")],
            )

    def test_dir_sig(self):
        with tempfile.TemporaryDirectory() as tmp:
            d = Path(tmp)
            _write(d / "a.html", "1")
            _write(d / "b.txt", "22")
            sig = build_cache.dir_sig(d, suffixes=[".html"], label="games")
            self.assertTrue(sig["exists"])
            self.assertEqual(sig["count"], 1)
            self.assertFalse(build_cache.dir_sig(d / "nope")["exists"])


class WatchSyncTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.rules = tuple(r for r in watch_sync.WATCH_RULES if r.dest)
        self.watcher = watch_sync.WatchSync(self.root, rules=self.rules)

    def tearDown(self):
        self._tmp.cleanup()

    def test_initial_scan_copies_everything(self):
        _write(self.root / "src" / "data" / "games.json", "{}")
        _write(self.root / "src" / "assets" / "js" / "i18n.js", "//")
        events = self.watcher.scan()
        self.assertEqual(len(events), 2)
        self.assertTrue((self.root / "public" / "data" / "games.json").exists())
        self.assertTrue((self.root / "public" / "js" / "i18n.js").exists())

    def test_change_and_unlink(self):
        src = _write(self.root / "src" / "data" / "games.json", "{}")
        self.watcher.scan()
        self.watcher.prime()
        src.write_text('{"games": []}', encoding="utf-8")
        os.utime(src, ns=(src.stat().st_mtime_ns + 10_000_000,) * 2)
        self.watcher.scan()
        dst = self.root / "public" / "data" / "games.json"
        self.assertEqual(dst.read_text(encoding="utf-8"), '{"games": []}')

        src.unlink()
        self.assertEqual(self.watcher.scan(), [("src/data", "unlink", "games.json")])
        self.assertFalse(dst.exists())

    def test_images_rule_optimizes_then_regenerates(self):
        watcher = watch_sync.WatchSync(self.root)
        _write(self.root / "public" / "games" / "arcade_snake.html", "<html></html>")
        (self.root / "public" / "images" / "games").mkdir(parents=True)
        Image.new("RGB", (40, 30)).save(self.root / "public" / "images" / "games" / "Arcade_Snake.png")
        watcher.scan()
        images = self.root / "public" / "images" / "games"
        self.assertTrue((images / "arcade-snake.webp").exists())
        doc = json.loads((self.root / "public" / "data" / "games.json").read_text(encoding="utf-8"))
        self.assertEqual(doc["games"][0]["image"], "/images/games/arcade-snake.jpg")
        self.assertEqual(watcher.scan(), [])


if __name__ == "__main__":
    unittest.main()
