"""
app/schemas/listing_feed.py

Wire schemas for listing feed page responses.

Field names are matched case-insensitively against the feed's aliases, so
``objects``, ``OBJECTS`` and ``Objects`` all populate the same field.
Unknown fields are ignored.

An absent or null agent name stays None. It is grouped apart from an empty
name when ranking.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _FeedModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _match_field_names(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        lookup: dict[str, str] = {}
        for name, field in cls.model_fields.items():
            lookup[name.lower()] = name
            if field.alias:
                lookup[field.alias.lower()] = field.alias
        return {lookup.get(str(key).lower(), key): value for key, value in data.items()}


class ListingRecord(_FeedModel):
    """
    One listing as published by the feed.
    """

    id: str = Field(default="", alias="Id")
    agent_id: int = Field(default=0, alias="MakelaarId")
    agent_name: str | None = Field(default=None, alias="MakelaarNaam")
    address: str = Field(default="", alias="Adres")
    city: str = Field(default="", alias="Woonplaats")
    price: int | None = Field(default=None, alias="Koopprijs")
    has_garden: bool = Field(default=False, alias="HasTuin")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("agent_id", mode="before")
    @classmethod
    def _missing_agent_id(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("address", "city", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("has_garden", mode="before")
    @classmethod
    def _null_flag(cls, value: Any) -> Any:
        return False if value is None else value


class PagingInfo(_FeedModel):
    """
    Pagination block of a feed page.
    """

    total_pages: int = Field(default=0, ge=0, alias="AantalPaginas")
    current_page: int = Field(default=1, alias="HuidigePagina")
    next_url: str | None = Field(default=None, alias="VolgendeUrl")
    previous_url: str | None = Field(default=None, alias="VorigeUrl")


class ListingPage(_FeedModel):
    """
    One decoded feed response.

    ``total_objects`` is informational; pagination is driven by
    ``paging.total_pages``.
    """

    objects: tuple[ListingRecord, ...] = Field(default=(), alias="Objects")
    paging: PagingInfo = Field(default_factory=PagingInfo, alias="Paging")
    total_objects: int = Field(default=0, alias="TotaalAantalObjecten")

    @field_validator("objects", mode="before")
    @classmethod
    def _null_objects(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("paging", mode="before")
    @classmethod
    def _null_paging(cls, value: Any) -> Any:
        return {} if value is None else value
