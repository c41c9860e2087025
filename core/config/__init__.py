from core.config.loader import ConfigLoader, site_config

__all__ = ["ConfigLoader", "site_config"]
