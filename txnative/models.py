"""Pydantic models for CDS payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class Language(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str
    name: str = ""
    localized_name: str = ""
    rtl: bool = False


class TranslationEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    string: str = ""
    meta: dict[str, Any] | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> "TranslationEntry":
        """Build an entry from a cached value (plain string or CDS mapping)."""

        if isinstance(raw, str):
            return cls(string=raw)
        if isinstance(raw, dict):
            string = raw.get("string")
            meta = raw.get("meta")
            return cls(
                string=string if isinstance(string, str) else "",
                meta=meta if isinstance(meta, dict) else None,
            )
        return cls()


__all__ = ["Language", "TranslationEntry"]
