"""Runtime translation client: active locale, cache-or-fetch and lookups."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

import httpx

from txnative import events
from txnative.cache import TranslationCache
from txnative.config import TxSettings, get_settings
from txnative.events import EventDispatcher, EventHandler
from txnative.keys import generate_key
from txnative.logging import logger
from txnative.models import Language
from txnative.render import MissingPolicy, SourceStringPolicy, interpolate
from txnative.services.cds import CDSClient

SOURCE_LOCALE = ""


class TxNative:
    """Owns the configuration, cache and current locale of one client.

    Locale switches are serialized: concurrent ``set_current_locale`` calls
    run one after the other in arrival order, so the last call to succeed
    decides the active locale.
    """

    def __init__(
        self,
        settings: TxSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        cache: TranslationCache | None = None,
        missing_policy: MissingPolicy | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.cache = cache or TranslationCache()
        self.missing_policy: MissingPolicy = missing_policy or SourceStringPolicy()
        self.events = EventDispatcher()
        self._cds = CDSClient(self.settings, http_client=http_client)
        self._current_locale = SOURCE_LOCALE
        self._languages: list[Language] | None = None
        self._locale_lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    async def __aenter__(self) -> "TxNative":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client owned by this instance, if any."""

        await self._cds.aclose()

    def init(self, *, missing_policy: MissingPolicy | None = None, **config: Any) -> None:
        """Reconfigure the client in place.

        Accepts any :class:`TxSettings` field; omitted fields keep their
        current value.
        """

        if config:
            self.settings = self.settings.with_overrides(**config)
            self._cds.settings = self.settings
        if missing_policy is not None:
            self.missing_policy = missing_policy
        logger.debug(
            "tx_configured",
            cds_host=self.settings.cds_host,
            has_token=bool(self.settings.token_value),
            fetch_timeout=self.settings.fetch_timeout,
            fetch_interval=self.settings.fetch_interval,
            filter_tags=self.settings.filter_tags,
        )

    # Events -----------------------------------------------------------------

    def on_event(self, event_type: str, handler: EventHandler) -> EventHandler:
        return self.events.on(event_type, handler)

    def off_event(self, event_type: str, handler: EventHandler) -> None:
        self.events.off(event_type, handler)

    # Languages ----------------------------------------------------------------

    async def get_languages(self, *, refresh: bool = False) -> list[Language]:
        if self._languages is not None and not refresh:
            return list(self._languages)
        if not self.settings.token_value:
            return []

        self.events.emit(events.FETCHING_LOCALES)
        languages = await self._cds.fetch_languages()
        self._languages = languages
        logger.info("locales_fetched", count=len(languages))
        self.events.emit(
            events.LOCALES_FETCHED,
            {"locales": [language.code for language in languages]},
        )
        return list(languages)

    async def get_locales(self, *, refresh: bool = False) -> list[str]:
        languages = await self.get_languages(refresh=refresh)
        return [language.code for language in languages]

    # Locale state -------------------------------------------------------------

    def get_current_locale(self) -> str:
        return self._current_locale

    @property
    def current_locale(self) -> str:
        return self._current_locale

    async def fetch_translations(self, locale: str) -> None:
        if self.cache.has(locale):
            return

        self.events.emit(events.FETCHING_TRANSLATIONS, {"locale": locale})
        try:
            data = await self._cds.fetch_content(locale, self.settings.filter_tags)
        except Exception as exc:
            logger.warning(
                "translations_fetch_failed",
                locale=locale,
                error_type=exc.__class__.__name__,
                error=str(exc),
            )
            self.events.emit(
                events.TRANSLATIONS_FETCH_FAILED,
                {"locale": locale, "error": exc},
            )
            raise

        self.cache.update(locale, data)
        logger.info("translations_fetched", locale=locale, count=len(data))
        self.events.emit(events.TRANSLATIONS_FETCHED, {"locale": locale})

    async def set_current_locale(self, locale: str) -> None:
        async with self._get_locale_lock():
            # Checked under the lock so earlier pending switches apply first.
            if locale == self._current_locale:
                return
            if locale != SOURCE_LOCALE:
                await self.fetch_translations(locale)
            previous = self._current_locale
            self._current_locale = locale

        logger.info("locale_changed", locale=locale, previous=previous)
        self.events.emit(events.LOCALE_CHANGED, {"locale": locale, "previous": previous})

    def _get_locale_lock(self) -> asyncio.Lock:
        # asyncio.Lock binds to the loop it first waits on; keep one per loop.
        loop = asyncio.get_running_loop()
        if self._locale_lock is None or self._lock_loop is not loop:
            self._locale_lock = asyncio.Lock()
            self._lock_loop = loop
        return self._locale_lock

    # Lookups ------------------------------------------------------------------

    def translate(
        self,
        source: str,
        params: Mapping[str, Any] | None = None,
        *,
        key: str | None = None,
        context: str | None = None,
    ) -> str:
        """Return the translation of ``source`` for the current locale.

        Falls back to the missing policy (the source text by default) when the
        cache has no entry or only an empty one. Never raises.
        """

        params = params or {}
        try:
            lookup_key = (
                key
                or params.get("_key")
                or generate_key(source, context or params.get("_context"))
            )
            locale = self._current_locale
            if locale == SOURCE_LOCALE:
                translation = source
            else:
                translation = self.cache.get(lookup_key, locale)
                if not translation:
                    translation = self.missing_policy.handle(source, locale)
        except Exception:
            logger.exception("translate_failed", source=source)
            return source

        try:
            return interpolate(translation, params)
        except Exception:
            logger.exception("translate_render_failed", source=source)
            return translation

    def t(self, source: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> str:
        return self.translate(source, params, **kwargs)


__all__ = ["SOURCE_LOCALE", "TxNative"]
