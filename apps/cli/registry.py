#!/usr/bin/env python3
"""PlayHTML5 tool registry."""

TOOLS = [
    # --- CLI (apps/cli) ---
    {
        "file": "dash.py",
        "alias": "dash",
        "desc": "Project dashboard: versions, catalog, tools",
        "usage": "playhtml5 dash",
        "type": "CLI",
        "folder": "apps/cli/commands"
    },

    # --- devtools/ ---
    {
        "file": "serve_site.py",
        "alias": "serve",
        "desc": "Run the listing server (FastAPI + Uvicorn)",
        "usage": "playhtml5 serve [--host 0.0.0.0 --port 8080] [--reload-catalog] [--no-open]",
        "type": "Dev",
        "folder": "devtools"
    },
    {
        "file": "build_site.py",
        "alias": "build",
        "desc": "Build the static multi-language site into dist/",
        "usage": "playhtml5 build [--dist DIR] [--site-url URL]",
        "type": "Dev",
        "folder": "devtools"
    },
    {
        "file": "generate_seo_files.py",
        "alias": "seo",
        "desc": "Sitemap, robots.txt, structured data and SEO report",
        "usage": "playhtml5 seo [--site-url URL] [--out DIR]",
        "type": "Dev",
        "folder": "devtools"
    },
    {
        "file": "auto_generate_games.py",
        "alias": "gen",
        "desc": "Generate games.json from public/games + images",
        "usage": "playhtml5 gen [--games-dir DIR] [--images-dir DIR] [--out PATH]",
        "type": "Dev",
        "folder": "devtools"
    },
    {
        "file": "image_optimize.py",
        "alias": "img",
        "desc": "Resize covers to webp/jpg and write alt texts",
        "usage": "playhtml5 img [--images-dir DIR]",
        "type": "Dev",
        "folder": "devtools"
    },
    {
        "file": "seo_batch_fix.py",
        "alias": "seofix",
        "desc": "Insert missing SEO tags into HTML pages",
        "usage": "playhtml5 seofix [--root DIR] [--site-url URL]",
        "type": "Dev",
        "folder": "devtools"
    },
    {
        "file": "upload_game.py",
        "alias": "upload",
        "desc": "Upload / list / delete catalog games",
        "usage": "playhtml5 upload <upload|batch|list|delete> ...",
        "type": "Dev",
        "folder": "devtools"
    },
    {
        "file": "watch_sync.py",
        "alias": "watch",
        "desc": "Sync src/ into public/ and regenerate on changes",
        "usage": "playhtml5 watch [--interval 1.0] [--once]",
        "type": "Dev",
        "folder": "devtools"
    },
]

def get_tools():
    return TOOLS
