"""Message lookup for the TUI and the CLI."""

import os
from typing import Dict, List, Optional

from config import get_user_lang
from interface.constants import LANG_PACK

BASE_LANG = "en"


def _build_catalog(pack: Dict[str, Dict[str, str]]) -> Dict[str, Dict[str, str]]:
    """One complete table per language; untranslated keys fall through to English."""
    base = pack[BASE_LANG]
    return {lang: {**base, **messages} for lang, messages in pack.items()}


CATALOG = _build_catalog(LANG_PACK)


def available_languages() -> List[str]:
    return sorted(CATALOG)


def effective_lang(preferred: Optional[str] = None) -> str:
    """``ADDAE_LANG`` first, English under pytest, then ``preferred`` or the stored choice."""
    forced = os.getenv("ADDAE_LANG")
    if forced in CATALOG:
        return forced
    if os.getenv("PYTEST_CURRENT_TEST"):
        return BASE_LANG
    chosen = preferred or get_user_lang()
    return chosen if chosen in CATALOG else BASE_LANG


def translate(key: str, lang: Optional[str] = None, **kwargs) -> str:
    template = CATALOG[effective_lang(lang)].get(key, key)
    if not kwargs:
        return template
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return template


__all__ = ["BASE_LANG", "CATALOG", "available_languages", "effective_lang", "translate"]
