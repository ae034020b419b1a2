"""
Application service: validate untrusted ForensicRecord payloads.

The ownership collaborator is an LLM reading scraped pages, so its JSON is
treated as hostile input:
  - the reply may be wrapped in a markdown code fence, or not be JSON at all;
  - it may be an error object carrying none of the record's fields;
  - any field may be missing, null, or of the wrong type;
  - individual list items may be unusable while their siblings are fine.

Lenient pydantic models coerce what can be coerced and drop list items that
cannot be salvaged. A payload that cannot be read as a record becomes a
FALLBACK_DEFAULT result wrapping an empty but structurally valid record.
"""

import logging
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator

from src.application.services.payload_coercion import (
    LenientModel,
    coerce_bool,
    coerce_number,
    coerce_optional_str,
    decode_reply,
    string_list,
    validate_items,
)
from src.domain.entities.ownership import (
    Director,
    ForensicEntity,
    ForensicRecord,
    Shareholder,
    Subsidiary,
)
from src.domain.entities.payload import PayloadResult

logger = logging.getLogger(__name__)

DEGRADED_SOURCE_FLAG = "Ownership data source degraded"

_RECORD_LISTS = ("shareholders", "subsidiaries", "directors")


class _EntityModel(LenientModel):
    name: Optional[str] = None
    stock_code: Optional[str] = Field(default=None, alias="stockCode")
    market_cap: Optional[str] = Field(default=None, alias="marketCap")
    is_listed: bool = Field(default=False, alias="isListed")
    country: str = "Malaysia"

    @field_validator("name", "stock_code", "market_cap", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        return coerce_optional_str(value)

    @field_validator("is_listed", mode="before")
    @classmethod
    def _listed(cls, value: Any) -> bool:
        return coerce_bool(value)

    @field_validator("country", mode="before")
    @classmethod
    def _country(cls, value: Any) -> str:
        return coerce_optional_str(value) or "Malaysia"


class _ShareholderModel(LenientModel):
    name: str
    percentage: float = 0.0
    type: str = "Unknown"
    is_listed: bool = Field(default=False, alias="isListed")
    stock_code: Optional[str] = Field(default=None, alias="stockCode")

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        text = coerce_optional_str(value)
        if text is None:
            raise ValueError("name is required")
        return text

    @field_validator("percentage", mode="before")
    @classmethod
    def _percentage(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value: Any) -> str:
        return coerce_optional_str(value) or "Unknown"

    @field_validator("is_listed", mode="before")
    @classmethod
    def _listed(cls, value: Any) -> bool:
        return coerce_bool(value)

    @field_validator("stock_code", mode="before")
    @classmethod
    def _code(cls, value: Any) -> Optional[str]:
        return coerce_optional_str(value)


class _SubsidiaryModel(_ShareholderModel):
    pass


class _DirectorModel(LenientModel):
    name: str
    position: str = ""
    other_directorships: list[str] = Field(default_factory=list, alias="otherDirectorships")

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        text = coerce_optional_str(value)
        if text is None:
            raise ValueError("name is required")
        return text

    @field_validator("position", mode="before")
    @classmethod
    def _position(cls, value: Any) -> str:
        return coerce_optional_str(value) or ""

    @field_validator("other_directorships", mode="before")
    @classmethod
    def _others(cls, value: Any) -> list[str]:
        return string_list(value)


def default_forensic_record(entity: str, risk_flags: Optional[list[str]] = None) -> ForensicRecord:
    return ForensicRecord(
        entity=ForensicEntity(name=entity),
        risk_flags=list(risk_flags or []),
    )


def _has_record_fields(payload: dict) -> bool:
    return isinstance(payload.get("entity"), dict) or any(
        isinstance(payload.get(key), list) for key in _RECORD_LISTS
    )


def parse_forensic_payload(payload: Any, entity: str) -> PayloadResult[ForensicRecord]:
    """Turn a raw collaborator payload into a PayloadResult[ForensicRecord].

    A JSON object is PARSED only if it carries an ``entity`` object or at
    least one of the shareholder / subsidiary / director lists; anything
    else (an ``{"error": ...}`` reply included) falls back.

    Args:
        payload: Decoded JSON (dict) or the raw reply text.
        entity:  The entity that was asked for; used when the payload omits it.
    """
    document, reason = decode_reply(payload)
    if document is not None and not _has_record_fields(document):
        reason = "Reply carries no ownership fields"
        if document.get("error"):
            reason = f"{reason} (error: {str(document['error'])[:200]})"
    if reason is not None:
        logger.warning("Unusable forensic payload for %r: %s", entity, reason)
        return PayloadResult.fallback(default_forensic_record(entity), reason)

    raw_entity = document.get("entity")
    try:
        entity_model = _EntityModel.model_validate(raw_entity if isinstance(raw_entity, dict) else {})
    except ValidationError as exc:
        logger.warning("Malformed forensic entity for %r: %s", entity, exc)
        entity_model = _EntityModel()

    shareholders = validate_items(_ShareholderModel, document.get("shareholders"), "shareholders")
    subsidiaries = validate_items(_SubsidiaryModel, document.get("subsidiaries"), "subsidiaries")
    directors = validate_items(_DirectorModel, document.get("directors"), "directors")

    record = ForensicRecord(
        entity=ForensicEntity(
            name=entity_model.name or entity,
            stock_code=entity_model.stock_code,
            is_listed=entity_model.is_listed,
            country=entity_model.country,
            market_cap=entity_model.market_cap,
        ),
        shareholders=[
            Shareholder(
                name=s.name,
                percentage=s.percentage,
                type=s.type,
                is_listed=s.is_listed,
                stock_code=s.stock_code,
            )
            for s in shareholders
        ],
        subsidiaries=[
            Subsidiary(
                name=s.name,
                percentage=s.percentage,
                is_listed=s.is_listed,
                stock_code=s.stock_code,
            )
            for s in subsidiaries
        ],
        directors=[
            Director(
                name=d.name,
                position=d.position,
                other_directorships=d.other_directorships,
            )
            for d in directors
        ],
        risk_flags=string_list(document.get("riskFlags", document.get("risk_flags"))),
        sources=string_list(document.get("sources")),
    )
    return PayloadResult.parsed(record)
