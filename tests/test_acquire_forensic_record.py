import asyncio

import pytest

from src.application.services.forensic_payload import DEGRADED_SOURCE_FLAG
from src.application.use_cases.acquire_forensic_record import AcquireForensicRecordUseCase
from src.application.use_cases.build_ownership_graph import BuildOwnershipGraphUseCase
from src.domain.entities.ownership import GraphFilter, NodeKind
from src.domain.entities.payload import PayloadStatus
from src.domain.errors import OwnershipSourceError
from tests.fakes import FakeOwnershipSource

PAYLOAD = {
    "entity": {"name": "Acme Berhad"},
    "shareholders": [
        {"name": "Holdco", "percentage": 40, "type": "Corporate"},
        {"name": "Fund", "percentage": 25, "type": "Institutional"},
        {"name": "Founder", "percentage": 10, "type": "Individual"},
    ],
    "subsidiaries": [{"name": "Acme Tech", "percentage": 100}],
    "directors": [{"name": "A", "position": "Chairman"}],
}


def test_valid_payload_is_parsed():
    use_case = AcquireForensicRecordUseCase(FakeOwnershipSource(payload=PAYLOAD))

    result = asyncio.run(use_case.execute("Acme"))

    assert result.status is PayloadStatus.PARSED
    assert len(result.value.shareholders) == 3


def test_timeout_degrades_with_risk_flag():
    use_case = AcquireForensicRecordUseCase(
        FakeOwnershipSource(payload=PAYLOAD, delay=1.0), timeout_seconds=0.01
    )

    result = asyncio.run(use_case.execute("Acme"))

    assert result.is_fallback
    assert "timed out" in result.reason
    assert result.value.entity.name == "Acme"
    assert result.value.shareholders == []
    assert result.value.risk_flags[0].startswith(DEGRADED_SOURCE_FLAG)


def test_source_error_degrades_with_risk_flag():
    use_case = AcquireForensicRecordUseCase(
        FakeOwnershipSource(error=OwnershipSourceError("search failed"))
    )

    result = asyncio.run(use_case.execute("Acme"))

    assert result.is_fallback
    assert result.value.risk_flags == [f"{DEGRADED_SOURCE_FLAG}: search failed"]


def test_unreadable_payload_is_flagged():
    use_case = AcquireForensicRecordUseCase(FakeOwnershipSource(payload="sorry, no data"))

    result = asyncio.run(use_case.execute("Acme"))

    assert result.is_fallback
    assert result.value.risk_flags == [f"{DEGRADED_SOURCE_FLAG}: unreadable payload"]


def test_blank_entity_is_rejected():
    use_case = AcquireForensicRecordUseCase(FakeOwnershipSource(payload=PAYLOAD))

    with pytest.raises(ValueError):
        asyncio.run(use_case.execute("   "))


def test_graph_use_case_applies_filter():
    use_case = BuildOwnershipGraphUseCase(
        AcquireForensicRecordUseCase(FakeOwnershipSource(payload=PAYLOAD))
    )

    view = asyncio.run(use_case.execute("Acme", GraphFilter.SHAREHOLDERS))

    assert view.record.status is PayloadStatus.PARSED
    assert len(view.graph.nodes) == 4
    assert len(view.graph.edges) == 3


def test_degraded_record_still_renders_centre_node():
    use_case = BuildOwnershipGraphUseCase(
        AcquireForensicRecordUseCase(FakeOwnershipSource(error=OwnershipSourceError("down")))
    )

    view = asyncio.run(use_case.execute("Acme"))

    assert view.record.is_fallback
    assert [n.kind for n in view.graph.nodes] == [NodeKind.CENTER]


def test_error_shaped_reply_is_flagged_not_verified():
    use_case = AcquireForensicRecordUseCase(FakeOwnershipSource(payload={"error": "rate limited"}))

    result = asyncio.run(use_case.execute("Acme"))

    assert result.status is PayloadStatus.FALLBACK_DEFAULT
    assert result.value.risk_flags == [f"{DEGRADED_SOURCE_FLAG}: unreadable payload"]
