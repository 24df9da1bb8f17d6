"""Tests for job-category selection and wage-set loading."""

import logging

import pytest

from tests.helpers import ScriptedLookup
from wagemap.lookup.exceptions import UnknownJobCategoryError, WageDataUnavailableError
from wagemap.session.loader import WageDataLoader
from wagemap.session.models import EMPTY_SNAPSHOT, LoadState

DEVELOPER_ROWS = [
    {"area": 12345, "areaName": "Metro Alpha, CA", "level1": 40, "level2": 50, "level3": 60, "level4": 70},
    {"area": 20000, "areaName": "Birmingham-Hoover, AL", "level1": 30, "level2": 40, "level3": 50, "level4": 60},
]
NURSE_ROWS = [
    {"area": 12345, "areaName": "Metro Alpha, CA", "level1": 30, "level2": 35, "level3": 40, "level4": 45},
]


@pytest.fixture
def lookup():
    return ScriptedLookup(
        {
            "15-1252": DEVELOPER_ROWS,
            "29-1141": NURSE_ROWS,
            "11-1021": WageDataUnavailableError("upstream timed out"),
        }
    )


@pytest.fixture
def loader(lookup):
    return WageDataLoader(lookup)


class TestInitialState:
    """Tests for a fresh loader."""

    def test_idle(self, loader):
        assert loader.state == LoadState.IDLE
        assert loader.snapshot is EMPTY_SNAPSHOT
        assert loader.active_soc is None
        assert loader.generation == 0
        assert loader.last_error is None
        assert not loader.is_loading


class TestLoad:
    """Tests for synchronous loading through the lookup service."""

    def test_load_success(self, loader, lookup):
        snapshot = loader.load("15-1252")

        assert loader.state == LoadState.READY
        assert snapshot is loader.snapshot
        assert snapshot.soc_code == "15-1252"
        assert snapshot.generation == 1
        assert snapshot.has_data
        assert set(snapshot.by_area) == {12345, 20000}
        assert snapshot.loaded_at is not None
        assert lookup.calls == ["15-1252"]

    def test_reselect_replaces_snapshot(self, loader):
        first = loader.load("15-1252")
        second = loader.load("29-1141")

        assert second is not first
        assert second.generation == 2
        assert set(second.by_area) == {12345}
        assert second.by_area[12345].tier1 == 30

    def test_load_failure_shows_no_data(self, loader, caplog):
        loader.load("15-1252")

        with caplog.at_level(logging.ERROR):
            snapshot = loader.load("11-1021")

        assert loader.state == LoadState.ERROR
        assert isinstance(loader.last_error, WageDataUnavailableError)
        assert snapshot.soc_code == "11-1021"
        assert not snapshot.has_data
        assert len(snapshot.by_area) == 0
        assert any(getattr(r, "event", None) == "loader.fetch.failed" for r in caplog.records)

    def test_unknown_category_is_an_error_state(self, loader):
        loader.load("99-9999")

        assert loader.state == LoadState.ERROR
        assert isinstance(loader.last_error, UnknownJobCategoryError)

    def test_success_clears_previous_error(self, loader):
        loader.load("11-1021")
        loader.load("15-1252")

        assert loader.state == LoadState.READY
        assert loader.last_error is None

    def test_unexpected_errors_propagate(self):
        loader = WageDataLoader(ScriptedLookup({"15-1252": RuntimeError("bug")}))

        with pytest.raises(RuntimeError, match="bug"):
            loader.load("15-1252")


class TestTickets:
    """Tests for last-request-wins ordering of overlapping fetches."""

    def test_stale_response_is_discarded(self, loader, lookup, caplog):
        first = loader.begin("15-1252")
        second = loader.begin("29-1141")

        with caplog.at_level(logging.INFO):
            applied = loader.complete(first, lookup.fetch_wages("15-1252"))

        assert applied is False
        assert loader.state == LoadState.LOADING
        assert loader.active_soc == "29-1141"
        assert any(getattr(r, "event", None) == "loader.fetch.discarded" for r in caplog.records)

        assert loader.complete(second, lookup.fetch_wages("29-1141")) is True
        assert loader.snapshot.soc_code == "29-1141"

    def test_out_of_order_completion_keeps_newest(self, loader, lookup):
        first = loader.begin("15-1252")
        second = loader.begin("29-1141")

        loader.complete(second, lookup.fetch_wages("29-1141"))
        loader.complete(first, lookup.fetch_wages("15-1252"))

        assert loader.snapshot.soc_code == "29-1141"
        assert loader.state == LoadState.READY

    def test_stale_failure_is_ignored(self, loader, lookup):
        first = loader.begin("11-1021")
        second = loader.begin("15-1252")
        loader.complete(second, lookup.fetch_wages("15-1252"))

        assert loader.fail(first, WageDataUnavailableError("late")) is False
        assert loader.state == LoadState.READY
        assert loader.last_error is None

    def test_previous_snapshot_visible_while_loading(self, loader):
        loaded = loader.load("15-1252")

        loader.begin("29-1141")

        assert loader.is_loading
        assert loader.snapshot is loaded

    def test_clear_supersedes_pending_fetch(self, loader, lookup):
        ticket = loader.begin("15-1252")

        loader.clear()

        assert loader.complete(ticket, lookup.fetch_wages("15-1252")) is False
        assert loader.state == LoadState.IDLE
        assert loader.active_soc is None
        assert not loader.snapshot.has_data
        assert loader.snapshot.generation == loader.generation == 2


class TestListeners:
    """Tests for change notification."""

    def test_listener_sees_every_transition(self, loader):
        events = []
        loader.add_listener(lambda snapshot, state: events.append((snapshot.soc_code, state)))

        loader.load("15-1252")
        loader.clear()

        assert events == [
            (None, LoadState.LOADING),
            ("15-1252", LoadState.READY),
            (None, LoadState.IDLE),
        ]

    def test_discarded_response_does_not_notify(self, loader, lookup):
        first = loader.begin("15-1252")
        loader.begin("29-1141")
        events = []
        loader.add_listener(lambda snapshot, state: events.append(state))

        loader.complete(first, lookup.fetch_wages("15-1252"))

        assert events == []

    def test_remove_listener(self, loader):
        events = []
        remove = loader.add_listener(lambda snapshot, state: events.append(state))

        remove()
        remove()
        loader.load("15-1252")

        assert events == []
