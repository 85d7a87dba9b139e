# src/fxsync/shared/language.py
"""
Language Management - Localized Status Messages

Holds the translation tables for the messages the sync service publishes
on its error stream.

Files that USE this module:
- fxsync.application.sync_service (formats published error messages)

Files that this module USES:
- None
"""
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Language constants
LANG_ENGLISH = "en"
LANG_GERMAN = "de"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    LANG_ENGLISH: {
        "error": "error: {message}",
        "error_no_data": "no data available",
        "error_api_error": "API error",
    },
    LANG_GERMAN: {
        "error": "Fehler: {message}",
        "error_no_data": "keine Daten verfügbar",
        "error_api_error": "API-Fehler",
    },
}


def translate(key: str, lang: str = LANG_ENGLISH, **kwargs: Any) -> str:
    """
    Translate a message key with optional parameters.

    Args:
        key: Translation key
        lang: Language code; unknown languages fall back to English
        **kwargs: Parameters to format into translation

    Returns:
        Translated and formatted string, or key if translation not found
    """
    if lang not in TRANSLATIONS:
        logger.warning("Language '%s' not in TRANSLATIONS, using English fallback", lang)
    lang_dict = TRANSLATIONS.get(lang, TRANSLATIONS[LANG_ENGLISH])
    template = lang_dict.get(key, TRANSLATIONS[LANG_ENGLISH].get(key, key))
    try:
        return template.format(**kwargs)
    except KeyError as e:
        logger.warning("Missing parameter in translation '%s': %s", key, e)
        return template
