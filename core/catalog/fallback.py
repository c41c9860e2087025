# -*- coding: utf-8 -*-
"""Built-in catalog used when data files cannot be read."""

from __future__ import annotations

from typing import Any, Dict, List


def _game(gid, en_title, zh_title, en_desc, zh_desc, category, seed, slug, rating, plays, developer, published):
    return {
        "id": gid,
        "title": {"en": en_title, "zh": zh_title},
        "description": {"en": en_desc, "zh": zh_desc},
        "category": [category],
        "image": f"https://picsum.photos/seed/{seed}/400/300",
        "url": f"https://example.com/play-{slug}",
        "rating": rating,
        "plays": plays,
        "developer": developer,
        "published": published,
        "regions": ["global"],
    }


FALLBACK_GAMES: List[Dict[str, Any]] = [
    _game(1, "Super Fighter", "超级战士",
          "Epic fighting game with amazing graphics and smooth controls.",
          "史诗级格斗游戏，拥有惊人的图形和流畅的控制。",
          "action", "action1", "super-fighter", 4.7, "1.2M", "Game Studio", "2023-06-15"),
    _game(2, "Brain Teaser", "脑筋急转弯",
          "Challenge your mind with this addictive puzzle game.",
          "用这个令人上瘾的益智游戏挑战你的思维。",
          "puzzle", "puzzle1", "brain-teaser", 4.8, "890K", "Puzzle Labs", "2023-05-20"),
    _game(3, "Empire Builder", "帝国建设者",
          "Build your empire and conquer the world in this strategic game.",
          "在这个策略游戏中建立你的帝国并征服世界。",
          "strategy", "strategy1", "empire-builder", 4.6, "650K", "Strategy Games", "2023-04-10"),
    _game(4, "Mystery Quest", "神秘探险",
          "Embark on an epic adventure filled with mysteries and treasures.",
          "踏上充满谜题和宝藏的史诗冒险之旅。",
          "adventure", "adventure1", "mystery-quest", 4.9, "1.5M", "Adventure Studio", "2023-03-18"),
    _game(5, "Retro Blaster", "复古爆破手",
          "Classic arcade shooting game with modern graphics.",
          "经典街机射击游戏，配以现代画面。",
          "arcade", "arcade1", "retro-blaster", 4.5, "700K", "Arcade Inc.", "2023-02-25"),
    _game(6, "Magic Cards", "魔法卡牌",
          "Collect and battle with magical cards in this exciting card game.",
          "收集并对战魔法卡牌，体验刺激卡牌游戏。",
          "card", "card1", "magic-cards", 4.4, "500K", "Card Masters", "2023-01-30"),
    _game(7, "Soccer Pro", "足球高手",
          "Experience the thrill of professional soccer in this realistic sports game.",
          "在这款真实的体育游戏中体验职业足球的激情。",
          "sports", "sports1", "soccer-pro", 4.3, "1.1M", "Sports Studio", "2023-01-10"),
    _game(8, "Math Adventure", "数学冒险",
          "Learn math while having fun in this educational adventure game.",
          "在这款教育冒险游戏中边玩边学数学。",
          "educational", "educational1", "math-adventure", 4.2, "300K", "Edu Games", "2022-12-20"),
    _game(9, "Cyber Runner", "赛博跑者",
          "Brand new cyberpunk running game with stunning visuals.",
          "全新赛博朋克风格跑酷游戏，画面炫酷。",
          "new", "new1", "cyber-runner", 4.8, "900K", "Future Games", "2024-06-01"),
    _game(10, "Dragon Quest", "龙之探险",
          "The most popular RPG game with millions of players worldwide.",
          "全球数百万玩家最受欢迎的RPG游戏。",
          "popular", "popular1", "dragon-quest", 4.9, "2.3M", "RPG Studio", "2023-07-15"),
]


FALLBACK_CATEGORIES: List[Dict[str, Any]] = [
    {"id": "all", "name": {"en": "All Games", "zh": "所有游戏"}, "color": "primary"},
    {"id": "new", "name": {"en": "New", "zh": "新游戏"}, "color": "success"},
    {"id": "popular", "name": {"en": "Popular", "zh": "热门"}, "color": "warning"},
    {"id": "puzzle", "name": {"en": "Puzzle", "zh": "益智"}, "color": "success"},
    {"id": "action", "name": {"en": "Action", "zh": "动作"}, "color": "danger"},
    {"id": "arcade", "name": {"en": "Arcade", "zh": "街机"}, "color": "secondary"},
    {"id": "strategy", "name": {"en": "Strategy", "zh": "策略"}, "color": "primary"},
    {"id": "adventure", "name": {"en": "Adventure", "zh": "冒险"}, "color": "warning"},
    {"id": "card", "name": {"en": "Card", "zh": "卡牌"}, "color": "dark"},
    {"id": "sports", "name": {"en": "Sports", "zh": "体育"}, "color": "success"},
    {"id": "educational", "name": {"en": "Educational", "zh": "教育"}, "color": "primary"},
]
