"""In-memory store of fetched translations keyed by locale."""

from __future__ import annotations

from typing import Any, Mapping

from txnative.models import TranslationEntry


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class TranslationCache:
    """Locale -> key -> entry mapping.

    A locale only appears once a complete payload was stored for it. Writes
    build a fresh per-locale dict and swap it in with one assignment, so a
    reader never observes a half-written key set.
    """

    def __init__(self) -> None:
        self._translations: dict[str, dict[str, Any]] = {}

    def has(self, locale: str) -> bool:
        return locale in self._translations

    def locales(self) -> list[str]:
        return list(self._translations)

    def get(self, key: str, locale: str) -> str | Any:
        """Return the translated string or ``MISSING`` when no entry exists.

        An existing entry without a translation yields ``""``.
        """

        table = self._translations.get(locale)
        if table is None or key not in table:
            return MISSING
        return TranslationEntry.from_raw(table[key]).string

    def get_entry(self, key: str, locale: str) -> TranslationEntry | None:
        table = self._translations.get(locale)
        if table is None or key not in table:
            return None
        return TranslationEntry.from_raw(table[key])

    def get_translations(self, locale: str) -> dict[str, Any]:
        return dict(self._translations.get(locale, {}))

    def update(self, locale: str, translations: Mapping[str, Any]) -> None:
        merged = dict(self._translations.get(locale, {}))
        merged.update(translations)
        self._translations[locale] = merged

    def clear(self, locale: str | None = None) -> None:
        if locale is None:
            self._translations = {}
        else:
            self._translations.pop(locale, None)


__all__ = ["MISSING", "TranslationCache"]
