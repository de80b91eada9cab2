"""Placeholder interpolation and fallbacks for missing translations."""

from __future__ import annotations

import re
from typing import Any, Mapping, Protocol

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

_PSEUDO_TABLE = str.maketrans(
    "AaBCcDdEeFGgHhIiJjKkLlNnOoRrSsTtUuWwYyZz",
    "ÅåßÇçÐđÉéƑĜĝĤĥÎîĴĵĶķĹĺÑñÖöŔŕŠšŢţÜüŴŵÝýŽž",
)


def public_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop control parameters such as ``_key`` and ``_context``."""

    if not params:
        return {}
    return {name: value for name, value in params.items() if not name.startswith("_")}


def interpolate(text: str, params: Mapping[str, Any] | None = None) -> str:
    """Replace ``{name}`` placeholders; unknown names are left untouched."""

    values = public_params(params)
    if not values:
        return text

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            return match.group(0)
        return str(values[name])

    return _PLACEHOLDER.sub(_replace, text)


class MissingPolicy(Protocol):
    def handle(self, source: str, locale: str) -> str: ...


class SourceStringPolicy:
    """Show the source text when no translation is available."""

    def handle(self, source: str, locale: str) -> str:
        return source


class PseudoTranslationPolicy:
    """Accent every letter so untranslated text stands out during QA."""

    def handle(self, source: str, locale: str) -> str:
        parts = _PLACEHOLDER.split(source)
        # split() alternates literal text and placeholder names.
        return "".join(
            part.translate(_PSEUDO_TABLE) if index % 2 == 0 else f"{{{part}}}"
            for index, part in enumerate(parts)
        )


__all__ = [
    "MissingPolicy",
    "PseudoTranslationPolicy",
    "SourceStringPolicy",
    "interpolate",
    "public_params",
]
