"""Runtime client for translations served by the content delivery service."""

from __future__ import annotations

from typing import Any, Mapping

from txnative.cache import MISSING, TranslationCache
from txnative.config import TxSettings, get_settings
from txnative.exceptions import (
    NetworkError,
    PollTimeoutError,
    RemoteError,
    ShapeError,
    TxNativeError,
)
from txnative.keys import generate_key
from txnative.models import Language, TranslationEntry
from txnative.native import SOURCE_LOCALE, TxNative
from txnative.render import PseudoTranslationPolicy, SourceStringPolicy

tx = TxNative()


def t(source: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> str:
    """Translate ``source`` with the default client."""

    return tx.translate(source, params, **kwargs)


__all__ = [
    "Language",
    "MISSING",
    "NetworkError",
    "PollTimeoutError",
    "PseudoTranslationPolicy",
    "RemoteError",
    "SOURCE_LOCALE",
    "ShapeError",
    "SourceStringPolicy",
    "TranslationCache",
    "TranslationEntry",
    "TxNative",
    "TxNativeError",
    "TxSettings",
    "generate_key",
    "get_settings",
    "t",
    "tx",
]
