"""Read operations against the content delivery service (CDS)."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from txnative.config import TxSettings
from txnative.exceptions import NetworkError, ShapeError
from txnative.logging import logger
from txnative.models import Language
from txnative.utils.polling import STATUS_OK, poll_with_deadline

LANGUAGES_TIMEOUT_MESSAGE = "Get locales timeout"
CONTENT_TIMEOUT_MESSAGE = "Fetch translations timeout"


def _has_data_list(body: Any) -> bool:
    return isinstance(body, dict) and isinstance(body.get("data"), list)


def _has_data_mapping(body: Any) -> bool:
    return isinstance(body, dict) and isinstance(body.get("data"), dict)


class CDSClient:
    """Fetch language lists and per-locale content from the CDS."""

    def __init__(
        self,
        settings: TxSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self._client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> "CDSClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""

        if self._owns_client and self._client is not None:
            client, self._client = self._client, None
            await client.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        # Owned clients are opened on first use and reopened after aclose().
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def fetch_languages(self) -> list[Language]:
        if not self.settings.token_value:
            logger.debug("cds_languages_skipped", reason="missing_token")
            return []

        body = await poll_with_deadline(
            lambda: self._get("/languages"),
            validate=_has_data_list,
            timeout_ms=self.settings.fetch_timeout,
            interval_ms=self.settings.fetch_interval,
            logger=logger,
            operation_name="get_languages",
            timeout_message=LANGUAGES_TIMEOUT_MESSAGE,
        )
        try:
            return [Language.model_validate(item) for item in body["data"]]
        except ValidationError as exc:
            raise ShapeError(f"get_languages: malformed language entry: {exc}") from exc

    async def fetch_content(
        self, locale: str, filter_tags: str | None = None
    ) -> dict[str, Any]:
        params = {"filter[tags]": filter_tags} if filter_tags else None
        body = await poll_with_deadline(
            lambda: self._get(f"/content/{quote(locale, safe='')}", params=params),
            validate=_has_data_mapping,
            timeout_ms=self.settings.fetch_timeout,
            interval_ms=self.settings.fetch_interval,
            logger=logger,
            operation_name="fetch_translations",
            timeout_message=CONTENT_TIMEOUT_MESSAGE,
        )
        return body["data"]

    async def _get(
        self, path: str, params: dict[str, str] | None = None
    ) -> tuple[int, Any]:
        url = f"{self.settings.cds_host}{path}"
        if params:
            # Keep brackets and commas readable, as the CDS documents them.
            query = "&".join(
                f"{quote(name, safe='[]')}={quote(value, safe=',')}"
                for name, value in params.items()
            )
            url = f"{url}?{query}"
        try:
            response = await self._get_client().get(url, headers=self._headers())
        except httpx.RequestError as exc:
            raise NetworkError(f"CDS request failed: {exc}") from exc

        if response.status_code != STATUS_OK:
            return response.status_code, response.text
        try:
            return response.status_code, response.json()
        except ValueError:
            return response.status_code, None

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json; charset=utf-8",
            "Accept-version": "v2",
        }
        token = self.settings.token_value
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers


__all__ = [
    "CDSClient",
    "CONTENT_TIMEOUT_MESSAGE",
    "LANGUAGES_TIMEOUT_MESSAGE",
]
