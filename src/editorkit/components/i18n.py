"""Translation catalogs used as the ``i18n`` component.

Design decisions / assumptions:
 - A default locale (``"en"``) always exists and is consulted as fallback.
 - Missing key after fallback returns the key itself (easy to spot during
   audits) rather than raising.
 - Plural helper expects two keys: singular_key, plural_key. Language-specific
   plural rules are out of scope.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = ["Translator", "DEFAULT_LOCALE"]

DEFAULT_LOCALE = "en"

_DEFAULT_CATALOG = {
    "dialog.yes": "Yes",
    "dialog.no": "No",
    "file.unsaved.title": "Unsaved Changes for {name}",
    "file.unsaved.body": "Changes have not been saved. Exit?",
    "files.count.one": "{n} file",
    "files.count.other": "{n} files",
}


class Translator:
    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        self._locale = locale
        self._catalogs: Dict[str, Dict[str, str]] = {DEFAULT_LOCALE: dict(_DEFAULT_CATALOG)}

    def register_catalog(self, locale: str, catalog: Dict[str, str]) -> None:
        """Register or extend a catalog for a locale (last registration wins)."""
        self._catalogs.setdefault(locale, {}).update(catalog)

    def set_locale(self, locale: str) -> None:
        self._locale = locale

    def get_locale(self) -> str:
        return self._locale

    def _lookup(self, locale: str, key: str) -> Optional[str]:
        return self._catalogs.get(locale, {}).get(key)

    def translate(self, key: str, **variables: Any) -> str:
        """Translate a key using the current locale with fallback.

        Missing interpolation variables raise ``KeyError``.
        """
        text = self._lookup(self._locale, key)
        if text is None and self._locale != DEFAULT_LOCALE:
            text = self._lookup(DEFAULT_LOCALE, key)
        if text is None:
            text = key
        if "{" in text and "}" in text:
            try:
                return text.format(**variables)
            except KeyError as e:
                raise KeyError(
                    f"Missing interpolation variable {e.args[0]!r} for key '{key}'"
                ) from e
        return text

    t = translate

    def translate_plural(self, singular_key: str, plural_key: str, n: int, **variables: Any) -> str:
        chosen = singular_key if n == 1 else plural_key
        variables.setdefault("n", n)
        return self.translate(chosen, **variables)

    def get_language_data(self) -> Dict[str, str]:
        """Default catalog overlaid with the current locale's entries."""
        data = dict(self._catalogs.get(DEFAULT_LOCALE, {}))
        if self._locale != DEFAULT_LOCALE:
            data.update(self._catalogs.get(self._locale, {}))
        return data
