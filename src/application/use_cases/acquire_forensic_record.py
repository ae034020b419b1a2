"""
Use-case: obtain a ForensicRecord for an entity from the ownership collaborator.

The collaborator is slow and unreliable, so acquisition is bounded by an
explicit timeout. A timeout or source failure never propagates: the caller gets
a FALLBACK_DEFAULT result whose record carries a risk flag naming the
degradation, so a degraded record is never mistaken for a verified one.
"""

import asyncio
import logging

from src.application.services.forensic_payload import (
    DEGRADED_SOURCE_FLAG,
    default_forensic_record,
    parse_forensic_payload,
)
from src.domain.entities.ownership import ForensicRecord
from src.domain.entities.payload import PayloadResult
from src.domain.errors import OwnershipSourceError
from src.domain.ports.ownership_source_port import IOwnershipSource

logger = logging.getLogger(__name__)


class AcquireForensicRecordUseCase:
    TIMEOUT_SECONDS: float = 15.0

    def __init__(self, source: IOwnershipSource, timeout_seconds: float = TIMEOUT_SECONDS) -> None:
        self._source = source
        self._timeout_seconds = timeout_seconds

    async def execute(self, entity: str) -> PayloadResult[ForensicRecord]:
        if not entity or not entity.strip():
            raise ValueError("entity must be a non-empty string")
        entity = entity.strip()

        try:
            payload = await asyncio.wait_for(
                self._source.fetch_forensic_payload(entity),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            reason = f"timed out after {self._timeout_seconds:g}s"
            return self._degraded(entity, reason)
        except OwnershipSourceError as exc:
            return self._degraded(entity, str(exc))

        result = parse_forensic_payload(payload, entity)
        if result.is_fallback:
            flag = f"{DEGRADED_SOURCE_FLAG}: unreadable payload"
            record = result.value
            return PayloadResult.fallback(
                ForensicRecord(
                    entity=record.entity,
                    risk_flags=[*record.risk_flags, flag],
                ),
                result.reason or flag,
            )
        return result

    def _degraded(self, entity: str, reason: str) -> PayloadResult[ForensicRecord]:
        logger.warning("Ownership source degraded for %r: %s", entity, reason)
        flag = f"{DEGRADED_SOURCE_FLAG}: {reason}"
        return PayloadResult.fallback(default_forensic_record(entity, [flag]), reason)
