from __future__ import annotations

from pathlib import Path

import pytest

from sheet_series.models.config_models import LimitsConfig, PipelineConfig
from sheet_series.models.dataset import DatasetState, PipelineStatus
from sheet_series.models.workbook import SheetGrid, WorkbookData
from sheet_series.services.coordinator import (
    CandidateRejectedError,
    NoActiveDatasetError,
    PipelineCoordinator,
)
from sheet_series.services.notifications import (
    TOPIC_VALIDATED,
    TOPIC_VALIDATION_FAILED,
    ValidatedEvent,
    ValidationFailedEvent,
)
from sheet_series.services.validator import EmptyWorkbookError


@pytest.fixture()
def workbooks(workbook_factory) -> dict[bytes, WorkbookData]:
    return {
        b"good": workbook_factory(
            {
                "Morning": [(10, "09:00"), (20, "09:00"), (30, "08:30")],
                "Junk": [("x", "y")],
                "Evening": [("1,5", "7:00 PM")],
            }
        ),
        b"other": workbook_factory({"Only": [(1, "01:00")]}),
        b"bad": workbook_factory({"A": [("x", "y")], "B": [(None, "nope")]}),
        b"empty": WorkbookData(),
    }


@pytest.fixture()
def coordinator(workbooks) -> PipelineCoordinator:
    def decode(content: bytes, na_strings=None) -> WorkbookData:
        return workbooks[content]

    return PipelineCoordinator(decoder=decode)


def test_starts_empty(coordinator):
    assert coordinator.status is PipelineStatus.EMPTY
    assert coordinator.state.active is None


def test_process_before_submit_fails(coordinator):
    with pytest.raises(NoActiveDatasetError):
        coordinator.process()


def test_successful_submit_commits(coordinator):
    report = coordinator.submit(b"good", "good.xlsx")
    assert report.passed is True
    assert coordinator.status is PipelineStatus.COMMITTED
    active = coordinator.state.active
    assert active.name == "good.xlsx"
    assert active.content == b"good"
    assert active.passing_sheets == ("Morning", "Evening")
    assert active.report is report
    assert active.committed_at is not None


def test_failed_submit_keeps_previous_dataset(coordinator):
    coordinator.submit(b"good", "good.xlsx")
    before = coordinator.state.active
    report = coordinator.submit(b"bad", "bad.xlsx")
    assert report.passed is False
    assert coordinator.state.active is before
    assert coordinator.status is PipelineStatus.COMMITTED


def test_failed_submit_from_empty_stays_empty(coordinator):
    coordinator.submit(b"bad", "bad.xlsx")
    assert coordinator.status is PipelineStatus.EMPTY


def test_new_successful_submit_replaces_dataset(coordinator):
    coordinator.submit(b"good", "good.xlsx")
    coordinator.submit(b"other", "other.xlsx")
    assert coordinator.state.active.name == "other.xlsx"
    assert coordinator.state.active.passing_sheets == ("Only",)


def test_empty_workbook_propagates_and_keeps_state(coordinator):
    coordinator.submit(b"good", "good.xlsx")
    with pytest.raises(EmptyWorkbookError):
        coordinator.submit(b"empty", "empty.xlsx")
    assert coordinator.state.active.name == "good.xlsx"


def test_notifications(coordinator):
    received: list[tuple[str, object]] = []
    coordinator.notifier.subscribe(TOPIC_VALIDATED, lambda e: received.append((TOPIC_VALIDATED, e)))
    coordinator.notifier.subscribe(TOPIC_VALIDATION_FAILED, lambda e: received.append((TOPIC_VALIDATION_FAILED, e)))

    coordinator.submit(b"good", "good.xlsx")
    bad_report = coordinator.submit(b"bad", "bad.xlsx")

    assert received[0] == (TOPIC_VALIDATED, ValidatedEvent("good.xlsx", ("Morning", "Evening")))
    topic, event = received[1]
    assert topic == TOPIC_VALIDATION_FAILED
    assert isinstance(event, ValidationFailedEvent)
    assert event.report is bad_report
    assert len(received) == 2


def test_process_extracts_committed_sheets(coordinator):
    coordinator.submit(b"good", "good.xlsx")
    result = coordinator.process()
    assert [c.sheet_name for c in result.series] == ["Morning", "Evening"]
    morning = result.series[0]
    assert morning.title == "MORNING"
    assert morning.labels == ("08:30", "09:00", "09:00")
    assert morning.values == (30, 10, 20)
    assert result.series[1].labels == ("19:00",)
    assert result.warnings == ()


def test_process_skips_sheet_that_became_empty(workbook_factory):
    calls = {"n": 0}
    full = workbook_factory({"A": [(1, "01:00")], "B": [(2, "02:00")]})
    degraded = WorkbookData(sheets=(full.sheets[0], SheetGrid(name="B")))

    def decode(content: bytes, na_strings=None) -> WorkbookData:
        calls["n"] += 1
        return full if calls["n"] == 1 else degraded

    coordinator = PipelineCoordinator(decoder=decode)
    coordinator.submit(b"x", "x.xlsx")
    result = coordinator.process()
    assert [c.sheet_name for c in result.series] == ["A"]
    assert len(result.warnings) == 1
    assert "'B'" in result.warnings[0]


def test_process_skips_missing_sheet(workbook_factory):
    calls = {"n": 0}
    full = workbook_factory({"A": [(1, "01:00")], "B": [(2, "02:00")]})
    shrunk = WorkbookData(sheets=(full.sheets[0],))

    def decode(content: bytes, na_strings=None) -> WorkbookData:
        calls["n"] += 1
        return full if calls["n"] == 1 else shrunk

    coordinator = PipelineCoordinator(decoder=decode)
    coordinator.submit(b"x", "x.xlsx")
    result = coordinator.process()
    assert [c.sheet_name for c in result.series] == ["A"]
    assert "not found" in result.warnings[0]


@pytest.mark.parametrize("prepare", ["none", "good", "bad"])
def test_reset_always_returns_to_empty(coordinator, prepare):
    if prepare != "none":
        coordinator.submit(prepare.encode(), f"{prepare}.xlsx")
    coordinator.reset()
    assert coordinator.status is PipelineStatus.EMPTY
    with pytest.raises(NoActiveDatasetError):
        coordinator.process()


def test_injected_state_is_shared(workbooks):
    state = DatasetState()
    first = PipelineCoordinator(state=state, decoder=lambda c, na_strings=None: workbooks[c])
    second = PipelineCoordinator(state=state, decoder=lambda c, na_strings=None: workbooks[c])
    first.submit(b"good", "good.xlsx")
    assert second.status is PipelineStatus.COMMITTED
    second.reset()
    assert first.status is PipelineStatus.EMPTY


class TestSubmitFile:
    def test_rejects_extension(self, coordinator, temp_workdir: Path):
        path = temp_workdir / "data" / "notes.csv"
        path.write_text("a,b")
        with pytest.raises(CandidateRejectedError, match="file type not allowed"):
            coordinator.submit_file(path)

    def test_extension_is_case_insensitive(self, workbooks, temp_workdir: Path):
        path = temp_workdir / "data" / "GOOD.XLSX"
        path.write_bytes(b"good")
        coordinator = PipelineCoordinator(decoder=lambda c, na_strings=None: workbooks[c])
        assert coordinator.submit_file(path).passed is True
        assert coordinator.state.active.name == "GOOD.XLSX"

    def test_rejects_oversized_file(self, workbooks, temp_workdir: Path):
        path = temp_workdir / "data" / "big.xlsx"
        path.write_bytes(b"0" * 2048)
        cfg = PipelineConfig(limits=LimitsConfig(max_file_size_mb=0.001))
        coordinator = PipelineCoordinator(config=cfg, decoder=lambda c, na_strings=None: workbooks[c])
        with pytest.raises(CandidateRejectedError, match="exceeds maximum size"):
            coordinator.submit_file(path)

    def test_missing_file(self, coordinator, temp_workdir: Path):
        with pytest.raises(CandidateRejectedError):
            coordinator.submit_file(temp_workdir / "data" / "missing.xlsx")


def test_last_candidate_tracks_latest_submit(coordinator, workbooks):
    assert coordinator.last_candidate is None
    coordinator.submit(b"good", "good.xlsx")
    assert coordinator.last_candidate is workbooks[b"good"]
    coordinator.submit(b"bad", "bad.xlsx")
    assert coordinator.last_candidate is workbooks[b"bad"]


def test_last_candidate_cleared_when_decoding_fails(coordinator):
    coordinator.submit(b"good", "good.xlsx")
    with pytest.raises(KeyError):
        coordinator.submit(b"unknown", "unknown.xlsx")
    assert coordinator.last_candidate is None
