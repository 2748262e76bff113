"""Tests for RollRulesService."""

from __future__ import annotations

import pytest

from rollctl.domain.limits import RollLimits
from rollctl.domain.models import CreateRollDTO, UpdateRollDTO
from rollctl.domain.types import RollStatus
from rollctl.services.rolls import RollRulesService
from rollctl.services.telemetry import enable_telemetry
from tests.conftest import make_roll


@pytest.fixture
def service() -> RollRulesService:
    return RollRulesService()


def _create(**overrides: object) -> CreateRollDTO:
    data: dict[str, object] = {"barcode": "NEW-1", "length_meters": 25, "catalog_id": "C1"}
    data.update(overrides)
    return CreateRollDTO.model_validate(data)


class TestValidateCreate:
    def test_accepts_new_barcode(self, service: RollRulesService) -> None:
        result = service.validate_create(_create(), [make_roll(barcode="B1")])
        assert result.ok
        assert result.op == "check_create"
        assert result.data == {"barcode": "NEW-1", "status": "in_stock"}

    def test_keeps_requested_status(self, service: RollRulesService) -> None:
        result = service.validate_create(_create(status="reserved"), [])
        assert result.data["status"] == "reserved"

    def test_length_rejected_before_barcode(self, service: RollRulesService) -> None:
        records = [make_roll(barcode="ab")]
        result = service.validate_create(_create(length_meters=1001, barcode="ab"), records)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "LENGTH_TOO_LARGE"
        assert result.error.detail == {"limit": 1000, "provided": 1001}

    def test_barcode_conflict(self, service: RollRulesService) -> None:
        records = [make_roll("r-7", barcode="NEW-1", status=RollStatus.RESERVED)]
        result = service.validate_create(_create(), records)
        assert result.error is not None
        assert result.error.code == "BARCODE_CONFLICT"
        assert result.error.detail["holder_id"] == "r-7"
        assert result.error.detail["holder_status"] == "reserved"

    def test_barcode_reused_after_sale(self, service: RollRulesService) -> None:
        records = [make_roll("r-7", barcode="NEW-1", status=RollStatus.SOLD)]
        assert service.validate_create(_create(), records).ok

    def test_configured_limit(self) -> None:
        service = RollRulesService(RollLimits(max_length_meters=2000))
        assert service.limits.max_length_meters == 2000
        assert service.validate_create(_create(length_meters=1500), []).ok


class TestValidateUpdate:
    def test_sold_roll_location_change(self, service: RollRulesService) -> None:
        sold = make_roll(status=RollStatus.SOLD, location="A")
        result = service.validate_update(sold, UpdateRollDTO(location="B"), [sold])
        assert result.ok
        assert result.data == {"id": "r-1", "fields_changed": ["location"], "status": "sold"}

    def test_sold_roll_length_change(self, service: RollRulesService) -> None:
        sold = make_roll(status=RollStatus.SOLD, location="A")
        result = service.validate_update(sold, UpdateRollDTO(length_meters=5), [sold])
        assert result.error is not None
        assert result.error.code == "LOCKED_RECORD"
        assert result.error.detail == {
            "invalid_fields": ["length_meters"],
            "allowed_fields": ["location"],
        }

    def test_empty_patch_warns(self, service: RollRulesService) -> None:
        result = service.validate_update(make_roll(), UpdateRollDTO(), [])
        assert result.ok
        assert result.warnings == ["Empty patch: nothing to change"]

    def test_own_barcode_is_not_a_conflict(self, service: RollRulesService) -> None:
        roll = make_roll("r-1", barcode="BAR-1")
        assert service.validate_update(roll, UpdateRollDTO(barcode="BAR-1"), [roll]).ok

    def test_barcode_taken_by_other_roll(self, service: RollRulesService) -> None:
        roll = make_roll("r-1", barcode="BAR-1")
        other = make_roll("r-2", barcode="BAR-2", status=RollStatus.RESERVED)
        result = service.validate_update(roll, UpdateRollDTO(barcode="BAR-2"), [roll, other])
        assert result.error is not None
        assert result.error.code == "BARCODE_CONFLICT"
        assert result.error.detail["holder_id"] == "r-2"

    def test_transition_reports_new_status(self, service: RollRulesService) -> None:
        result = service.validate_update(
            make_roll(), UpdateRollDTO(status=RollStatus.RESERVED), []
        )
        assert result.data["status"] == "reserved"

    def test_invalid_transition(self, service: RollRulesService) -> None:
        sold = make_roll(status=RollStatus.SOLD)
        result = service.validate_update(sold, UpdateRollDTO(status=RollStatus.IN_STOCK), [])
        assert result.error is not None
        assert result.error.code == "INVALID_TRANSITION"
        assert result.error.detail["allowed"] == []


class TestValidateDelete:
    @pytest.mark.parametrize("status", list(RollStatus))
    def test_always_accepted(self, service: RollRulesService, status: RollStatus) -> None:
        result = service.validate_delete(make_roll(status=status))
        assert result.ok
        assert result.op == "check_delete"


class TestReads:
    def test_transitions(self, service: RollRulesService) -> None:
        result = service.transitions(RollStatus.RESERVED)
        assert result.data == {
            "status": "reserved",
            "allowed": ["in_stock", "sold"],
            "terminal": False,
        }

    def test_transitions_terminal(self, service: RollRulesService) -> None:
        result = service.transitions(RollStatus.SOLD)
        assert result.data["allowed"] == []
        assert result.data["terminal"] is True

    def test_stats(self, service: RollRulesService) -> None:
        result = service.stats(
            [
                make_roll("1", catalog_id="C1"),
                make_roll("2", status=RollStatus.SOLD, catalog_id="C1"),
                make_roll("3", catalog_id="C2"),
            ]
        )
        assert result.op == "stats"
        assert result.data == {
            "total": 3,
            "by_status": {"in_stock": 2, "reserved": 0, "sold": 1},
            "by_catalog": {"C1": 2, "C2": 1},
        }


class TestTelemetry:
    def test_no_meta_when_disabled(self, service: RollRulesService) -> None:
        assert service.validate_create(_create(), []).meta is None

    def test_span_tree_when_enabled(self, service: RollRulesService) -> None:
        enable_telemetry()
        result = service.validate_create(_create(), [make_roll()])
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert telemetry["name"] == "RollRulesService.validate_create"
        children = telemetry["children"]
        assert [c["name"] for c in children] == ["fields", "barcode"]
        assert children[1]["annotations"] == {"candidates": 1}

    def test_rejection_stops_pipeline(self, service: RollRulesService) -> None:
        enable_telemetry()
        result = service.validate_create(_create(length_meters=0), [])
        assert result.meta is not None
        assert [c["name"] for c in result.meta["telemetry"]["children"]] == ["fields"]
