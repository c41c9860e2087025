# -*- coding: utf-8 -*-
from __future__ import annotations

import re
from html import escape
from typing import Iterable, List, Optional, Sequence

from core.catalog import Category, Game
from core.i18n import LANGUAGES, I18n

# NOTE:
# - Keep HTML/JS as a normal triple-quoted string.
# - Do NOT use Python f-strings here: the template contains many `{}` (CSS/JS).
# - Markers are substituted in one pass, so rendered values are never rescanned.

_INDEX_TEMPLATE = r"""<!doctype html>
<html lang="__PH_LANG__">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <meta name="app-root" content="__PH_APP_ROOT__" />
  <title>__PH_TITLE__</title>
  <meta name="description" content="__PH_DESCRIPTION__" />
  <style>
    :root {
      --bg: #f5f7fb;
      --panel: #ffffff;
      --text: #1f2933;
      --muted: #6b7280;
      --border: #e5e7eb;
      --accent: #4f46e5;
      --ok: #16a34a;
      --warn: #f59e0b;
    }
    html, body {
      margin: 0; padding: 0;
      background: var(--bg);
      color: var(--text);
      font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial;
    }
    a { color: var(--accent); text-decoration: none; }
    .topbar {
      position: sticky; top: 0; z-index: 10;
      display: flex; gap: 12px; align-items: center;
      padding: 10px 16px;
      border-bottom: 1px solid var(--border);
      background: rgba(255,255,255,0.95);
    }
    .topbar h1 { font-size: 16px; margin: 0; color: var(--accent); }
    .search { flex: 1; display: flex; gap: 8px; }
    .search input { flex: 1; padding: 6px 10px; border: 1px solid var(--border); border-radius: 8px; }
    .language-option { border: 1px solid var(--border); background: none; border-radius: 999px; padding: 2px 8px; cursor: pointer; }
    .language-option.active { border-color: var(--accent); color: var(--accent); }
    .categories { display: flex; flex-wrap: wrap; gap: 6px; padding: 12px 16px; }
    .category-btn { border: 1px solid var(--border); background: var(--panel); border-radius: 999px; padding: 4px 12px; cursor: pointer; }
    .category-btn.category-active { border-color: var(--accent); color: var(--accent); }
    section { padding: 0 16px 16px; }
    .game-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); gap: 14px; }
    .game-card { background: var(--panel); border-radius: 12px; overflow: hidden; box-shadow: 0 1px 3px rgba(0,0,0,.08); cursor: pointer; }
    .game-card .thumb { position: relative; height: 150px; background: #e5e7eb; }
    .game-card img { width: 100%; height: 100%; object-fit: cover; }
    .badge { position: absolute; top: 8px; left: 8px; padding: 2px 8px; border-radius: 999px; color: #fff; font-size: 12px; }
    .badge.new { background: var(--ok); }
    .badge.popular { background: var(--warn); }
    .game-card .body { padding: 10px 12px; }
    .game-card h4 { margin: 0 0 4px; }
    .game-card p { margin: 0 0 8px; color: var(--muted); font-size: 13px; }
    .game-card .row { display: flex; justify-content: space-between; align-items: center; font-size: 13px; }
    .empty { grid-column: 1 / -1; text-align: center; padding: 40px 0; color: var(--muted); }
    .modal { position: fixed; inset: 0; background: rgba(0,0,0,.45); display: none; align-items: center; justify-content: center; }
    .modal.open { display: flex; }
    .modal .panel { background: var(--panel); border-radius: 12px; max-width: 640px; width: 92%; padding: 16px; }
    .recommendations { display: grid; grid-template-columns: repeat(3, 1fr); gap: 8px; }
  </style>
</head>
<body>
  <div class="topbar">
    <h1>__PH_SITE_NAME__</h1>
    <div class="search">
      <input id="searchInput" type="text" placeholder="__PH_SEARCH_PLACEHOLDER__" />
      <select id="sortSelect">__PH_SORT_OPTIONS__</select>
    </div>
    <div id="languageSwitcher">__PH_LANGUAGE_SWITCHER__</div>
  </div>

  <div class="categories">__PH_CATEGORY_BUTTONS__</div>

  <section id="games">
    <div id="gameGrid" class="game-grid">__PH_GAME_GRID__</div>
  </section>

  <section id="featured">
    <h2>__PH_FEATURED_TITLE__</h2>
    <div class="game-grid">__PH_FEATURED_GRID__</div>
  </section>

  <section id="popular">
    <h2>__PH_POPULAR_TITLE__</h2>
    <div class="game-grid">__PH_POPULAR_GRID__</div>
  </section>

  <div id="gameModal" class="modal"><div class="panel" id="gameModalBody"></div></div>

  <script>
  (function () {
    const root = document.querySelector('meta[name="app-root"]').content || '';
    const lang = document.documentElement.lang || 'en';
    const state = { category: 'all', q: '', sort: 'recommended' };
    const grid = document.getElementById('gameGrid');
    const modal = document.getElementById('gameModal');

    async function refresh() {
      const params = new URLSearchParams({ category: state.category, q: state.q, sort: state.sort, lang: lang });
      const res = await fetch(root + '/api/v1/grid?' + params.toString());
      if (res.ok) grid.innerHTML = await res.text();
    }

    async function openModal(id) {
      const res = await fetch(root + '/api/v1/games/' + id + '/modal?lang=' + encodeURIComponent(lang));
      if (!res.ok) return;
      document.getElementById('gameModalBody').innerHTML = await res.text();
      modal.classList.add('open');
    }

    document.querySelectorAll('.category-btn').forEach(function (btn) {
      btn.addEventListener('click', function () {
        state.category = btn.getAttribute('data-category');
        document.querySelectorAll('.category-btn').forEach(function (b) {
          b.classList.toggle('category-active', b === btn);
        });
        refresh();
      });
    });

    let timer = null;
    document.getElementById('searchInput').addEventListener('input', function (e) {
      clearTimeout(timer);
      timer = setTimeout(function () { state.q = e.target.value; refresh(); }, 300);
    });
    document.getElementById('sortSelect').addEventListener('change', function (e) {
      state.sort = e.target.value; refresh();
    });

    document.addEventListener('click', function (e) {
      const play = e.target.closest('[data-play-url]');
      if (play) { e.stopPropagation(); window.open(play.getAttribute('data-play-url'), '_blank'); return; }
      const card = e.target.closest('[data-game-id]');
      if (card) { openModal(card.getAttribute('data-game-id')); return; }
      if (e.target === modal) modal.classList.remove('open');
    });

    document.querySelectorAll('.language-option').forEach(function (btn) {
      btn.addEventListener('click', async function () {
        const code = btn.getAttribute('data-lang');
        await fetch(root + '/api/v1/language/' + code, { method: 'POST' });
        const url = new URL(window.location);
        url.searchParams.set('lang', code);
        window.location = url.toString();
      });
    });
  })();
  </script>
</body>
</html>
"""

_MARKER_RE = re.compile(r"__PH_[A-Z_]+__")

SORT_OPTIONS = ("recommended", "newest", "mostPlayed", "topRated")


def _esc(s: object) -> str:
    return escape(str(s or ""), quote=True)


def _badge(game: Game, i18n: I18n, lang: str) -> str:
    if game.has_category("new"):
        return f'<span class="badge new">{_esc(i18n.t("games.new", lang=lang))}</span>'
    if game.has_category("popular"):
        return f'<span class="badge popular">{_esc(i18n.t("games.popular", lang=lang))}</span>'
    return ""


def render_game_card(game: Game, i18n: I18n, lang: str) -> str:
    title = game.title_for(lang)
    desc = game.description_for(lang)
    return (
        f'<div class="game-card game-card-hover" data-game-id="{game.id}">'
        f'<div class="thumb">'
        f'<img src="{_esc(game.image)}" alt="{_esc(title)}" loading="lazy" data-play-url="{_esc(game.url)}">'
        f"{_badge(game, i18n, lang)}"
        f"</div>"
        f'<div class="body">'
        f"<h4>{_esc(title)}</h4>"
        f"<p>{_esc(desc)}</p>"
        f'<div class="row"><span>★ {game.rating:g}</span>'
        f'<button type="button" data-play-url="{_esc(game.url)}">{_esc(i18n.t("games.playNow", lang=lang))} →</button>'
        f"</div></div></div>"
    )


def render_game_grid(games: Sequence[Game], i18n: I18n, lang: str) -> str:
    if not games:
        return (
            '<div class="empty">'
            f'<h3>{_esc(i18n.t("games.noGames", lang=lang))}</h3>'
            f'<p>{_esc(i18n.t("games.noGamesDesc", lang=lang))}</p>'
            "</div>"
        )
    return "".join(render_game_card(g, i18n, lang) for g in games)


def render_recommendations(related: Iterable[Game], i18n: I18n, lang: str) -> str:
    out: List[str] = []
    for g in related:
        title = g.title_for(lang)
        out.append(
            f'<div class="recommendation" data-game-id="{g.id}">'
            f'<img src="{_esc(g.image)}" alt="{_esc(title)}">'
            f"<div>{_esc(title)}</div>"
            f'<button type="button" data-play-url="{_esc(g.url)}">{_esc(i18n.t("games.playNow", lang=lang))}</button>'
            f"</div>"
        )
    return "".join(out)


def render_game_modal(game: Game, related: Sequence[Game], i18n: I18n, lang: str) -> str:
    """Detail view: title, description, image, first category, related games."""
    title = game.title_for(lang)
    first = game.category[0] if game.category else ""
    return (
        f'<h3 id="modalGameTitle">{_esc(title)}</h3>'
        f'<span id="modalGameCategory" class="badge-inline">{_esc(first[:1].upper() + first[1:])}</span>'
        f'<img id="modalGameImage" src="{_esc(game.image)}" alt="{_esc(title)}" data-play-url="{_esc(game.url)}">'
        f'<p id="modalGameDescription">{_esc(game.description_for(lang))}</p>'
        f'<button id="modalPlayBtn" type="button" data-play-url="{_esc(game.url)}">{_esc(i18n.t("games.playNow", lang=lang))}</button>'
        f'<h4>{_esc(i18n.t("games.related", lang=lang))}</h4>'
        f'<div id="recommendationGrid" class="recommendations">{render_recommendations(related, i18n, lang)}</div>'
    )


def render_language_switcher(current_lang: str) -> str:
    return "".join(
        f'<button type="button" class="language-option{" active" if x["code"] == current_lang else ""}" '
        f'data-lang="{x["code"]}"><span class="flag">{x["flag"]}</span> '
        f'<span class="name">{_esc(x["name"])}</span></button>'
        for x in LANGUAGES
    )


def render_category_buttons(categories: Sequence[Category], lang: str, active: str = "all") -> str:
    return "".join(
        f'<button type="button" class="category-btn{" category-active" if c.id == active else ""}" '
        f'data-category="{_esc(c.id)}">{_esc(c.name_for(lang))}</button>'
        for c in categories
    )


def render_sort_options(i18n: I18n, lang: str) -> str:
    return "".join(
        f'<option value="{key}">{_esc(i18n.t("sort." + key, lang=lang))}</option>' for key in SORT_OPTIONS
    )


def render_index_html(
    *,
    i18n: I18n,
    lang: str,
    games: Sequence[Game],
    categories: Sequence[Category],
    featured: Sequence[Game],
    popular: Sequence[Game],
    site_name: str = "PlayHTML5",
    app_root: str = "",
) -> str:
    """Render the listing page (language resolved by the caller)."""
    replacements = {
        "__PH_LANG__": _esc(lang),
        "__PH_APP_ROOT__": _esc(app_root),
        "__PH_TITLE__": _esc(i18n.t("meta.title", lang=lang)),
        "__PH_DESCRIPTION__": _esc(i18n.t("meta.description", lang=lang)),
        "__PH_SITE_NAME__": _esc(site_name),
        "__PH_SEARCH_PLACEHOLDER__": _esc(i18n.t("common.searchPlaceholder", lang=lang)),
        "__PH_SORT_OPTIONS__": render_sort_options(i18n, lang),
        "__PH_LANGUAGE_SWITCHER__": render_language_switcher(lang),
        "__PH_CATEGORY_BUTTONS__": render_category_buttons(categories, lang),
        "__PH_GAME_GRID__": render_game_grid(games, i18n, lang),
        "__PH_FEATURED_TITLE__": _esc(i18n.t("games.featuredGames", lang=lang)),
        "__PH_FEATURED_GRID__": render_game_grid(featured, i18n, lang),
        "__PH_POPULAR_TITLE__": _esc(i18n.t("games.mostPopular", lang=lang)),
        "__PH_POPULAR_GRID__": render_game_grid(popular, i18n, lang),
    }
    return _MARKER_RE.sub(lambda m: replacements.get(m.group(0), m.group(0)), _INDEX_TEMPLATE)
