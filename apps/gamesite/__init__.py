# -*- coding: utf-8 -*-
"""PlayHTML5 game listing service package.

- Backend: FastAPI (ASGI)
- Data: src/data/games.json + src/data/categories.json (built-in fallback)
- UI: server-rendered listing page with a small inline script (served by backend)
"""

__all__ = ["__version__"]
__version__ = "0.3.0"
