"""In-process event hooks for fetch and locale lifecycle notifications.

Handlers register per event name and receive a single payload dict. A failing
handler is logged and skipped so listeners never break a fetch.
"""

from __future__ import annotations

from typing import Any, Callable

from txnative.logging import logger

FETCHING_TRANSLATIONS = "FETCHING_TRANSLATIONS"
TRANSLATIONS_FETCHED = "TRANSLATIONS_FETCHED"
TRANSLATIONS_FETCH_FAILED = "TRANSLATIONS_FETCH_FAILED"
FETCHING_LOCALES = "FETCHING_LOCALES"
LOCALES_FETCHED = "LOCALES_FETCHED"
LOCALE_CHANGED = "LOCALE_CHANGED"

EventHandler = Callable[[dict[str, Any]], Any]


class EventDispatcher:
    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def on(self, event_type: str, handler: EventHandler) -> EventHandler:
        self._handlers.setdefault(event_type, []).append(handler)
        return handler

    def off(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers_for(self, event_type: str) -> list[EventHandler]:
        return list(self._handlers.get(event_type, []))

    def emit(self, event_type: str, payload: dict[str, Any] | None = None) -> None:
        for handler in self.handlers_for(event_type):
            try:
                handler(dict(payload or {}))
            except Exception:
                logger.exception(
                    "event_handler_failed",
                    event_type=event_type,
                    handler=getattr(handler, "__name__", repr(handler)),
                )


__all__ = [
    "EventDispatcher",
    "EventHandler",
    "FETCHING_LOCALES",
    "FETCHING_TRANSLATIONS",
    "LOCALES_FETCHED",
    "LOCALE_CHANGED",
    "TRANSLATIONS_FETCHED",
    "TRANSLATIONS_FETCH_FAILED",
]
