"""Resolve changelog language identifiers to English language names."""

from __future__ import annotations

import pycountry

from tagbump.exceptions import InvalidLanguageError

# Names this short are only matched with their exact spelling ("E", "Ga")
_MIN_LOOSE_NAME_LENGTH = 4


def _lookup_code(value: str):
    if len(value) == 2:
        return pycountry.languages.get(alpha_2=value)
    if len(value) == 3:
        return pycountry.languages.get(alpha_3=value)
    return None


def _lookup_name(value: str):
    language = pycountry.languages.get(name=value)
    if language is None:
        return None
    if len(value) < _MIN_LOOSE_NAME_LENGTH and language.name != value:
        return None
    return language


def resolve_language(text: str) -> str:
    """Resolve a language name or ISO 639 code to its English name.

    Two-letter input is looked up as an ISO 639-1 code (``zh``) and
    three-letter input as an ISO 639-3 code (``zho``) before names are
    tried. English names (``Chinese``) match case-insensitively.

    Raises:
        InvalidLanguageError: If nothing matches
    """
    value = text.strip()
    if value:
        language = _lookup_code(value) or _lookup_name(value)
        if language is not None:
            return language.name

    raise InvalidLanguageError(
        f"Unknown language '{text}'. Use an English name (e.g. Chinese), "
        "ISO 639-1 code (e.g. zh), or ISO 639-3 code (e.g. zho)."
    )
