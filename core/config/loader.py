import configparser
import os
from pathlib import Path
from typing import List, Optional


class ConfigLoader:
    def __init__(self, config_path: Optional[Path] = None):
        # 自动定位项目根目录 (core/config/*)
        self.project_root = Path(__file__).resolve().parents[2]
        env_path = os.environ.get("PLAYHTML5_CONFIG")
        if config_path is not None:
            self.config_path = Path(config_path)
        elif env_path:
            self.config_path = Path(os.path.expanduser(env_path))
        else:
            self.config_path = self.project_root / "conf" / "settings.ini"

        self.config = configparser.ConfigParser()
        if not self.config_path.exists():
            raise FileNotFoundError(f"❌ 配置文件丢失: {self.config_path}")

        self.config.read(self.config_path, encoding="utf-8")

    def get(self, section, key, fallback=None):
        """获取配置值并自动展开用户路径 (~)"""
        val = self.config.get(section, key, fallback=fallback)
        if val and "~" in val:
            return os.path.expanduser(val)
        return val

    def path(self, key: str) -> Path:
        """Resolve a [PATHS] entry against the project root."""
        raw = self.get("PATHS", key) or ""
        p = Path(raw)
        return p if p.is_absolute() else (self.project_root / p)

    def site_url(self) -> str:
        url = os.environ.get("PLAYHTML5_SITE_URL") or self.get("SITE", "URL", "") or ""
        return url.rstrip("/")

    def languages(self) -> List[str]:
        raw = self.get("I18N", "LANGUAGES", "en") or "en"
        return [x.strip().lower() for x in raw.split(",") if x.strip()]

    def fallback_language(self) -> str:
        return (self.get("I18N", "FALLBACK", "en") or "en").strip().lower()


# 单例模式：直接导出的实例
site_config = ConfigLoader()

# === 测试代码 ===
if __name__ == "__main__":
    print(f"Project Root: {site_config.project_root}")
    print(f"Site URL: {site_config.site_url()}")
    print(f"Languages: {site_config.languages()}")
