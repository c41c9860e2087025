from core.i18n.translator import (
    DEFAULT_LANG,
    LANGUAGES,
    SUPPORTED_LANGUAGES,
    I18n,
    fallback_table,
    replace_params,
)

__all__ = [
    "DEFAULT_LANG",
    "LANGUAGES",
    "SUPPORTED_LANGUAGES",
    "I18n",
    "fallback_table",
    "replace_params",
]
