"""Tests for CalculatorSession — selection changes and derived quote."""

from __future__ import annotations

import threading
import time

import pytest

from somos.engine import PricingEngine
from somos.exceptions import InvalidSelectionError
from somos.factory import create_session
from somos.models.enums import Frequency, PropertyType, Theme
from somos.models.quote import PriceQuote
from somos.models.selection import Selection
from somos.session import CalculatorSession
from somos.theme import THEME_KEY, MemoryThemeStore, RecordingSurface


@pytest.fixture()
def engine() -> PricingEngine:
    return PricingEngine()


@pytest.fixture()
def session(engine: PricingEngine) -> CalculatorSession:
    return create_session(engine=engine)


def _assert_in_sync(session: CalculatorSession, engine: PricingEngine) -> None:
    assert session.quote == engine.quote(session.selection)


# ---------------------------------------------------------------------------
# Initial state
# ---------------------------------------------------------------------------


class TestInitialState:
    def test_default_selection(self, session: CalculatorSession) -> None:
        assert session.selection == Selection()

    def test_default_quote(self, session: CalculatorSession) -> None:
        assert session.quote.base_price == pytest.approx(185.94)
        assert session.quote.final_price == pytest.approx(185.94)
        assert session.quote.savings == 0

    def test_starting_selection(self, engine: PricingEngine) -> None:
        sess = create_session(engine=engine)
        custom = CalculatorSession(engine, sess.theme, Selection(size_tier=3, floor=2))
        assert custom.quote.floor_charge == pytest.approx(30.0)
        _assert_in_sync(custom, engine)


# ---------------------------------------------------------------------------
# Selection changes
# ---------------------------------------------------------------------------


class TestSelectionChanges:
    def test_select_size(self, session: CalculatorSession, engine: PricingEngine) -> None:
        quote = session.select_size(2)
        assert quote.base_price == pytest.approx(267.7536)
        _assert_in_sync(session, engine)

    def test_select_floor_clamps(self, session: CalculatorSession) -> None:
        session.select_floor(9)
        assert session.selection.floor == 4
        assert session.quote.floor_charge == pytest.approx(90.0)

    def test_elevator_removes_floor_charge(self, session: CalculatorSession) -> None:
        session.select_floor(3)
        assert session.quote.floor_charge == pytest.approx(60.0)
        session.set_elevator(True)
        assert session.quote.floor_charge == 0
        assert session.selection.floor == 3

    def test_select_frequency_accepts_string(self, session: CalculatorSession) -> None:
        session.select_frequency("biweekly")
        assert session.selection.frequency == Frequency.BIWEEKLY
        assert session.quote.final_price == pytest.approx(185.94 * 0.85)

    def test_property_type_keeps_price(self, session: CalculatorSession) -> None:
        before = session.quote
        session.select_property_type(PropertyType.HOUSE)
        assert session.selection.property_type == PropertyType.HOUSE
        assert session.quote == before

    def test_update_several_fields(self, session: CalculatorSession) -> None:
        quote = session.update(size_tier=2, floor=3, frequency=Frequency.WEEKLY)
        assert quote.final_price == pytest.approx(262.20288)
        assert quote.savings == pytest.approx(65.55072)

    def test_quote_in_sync_after_every_change(
        self, session: CalculatorSession, engine: PricingEngine
    ) -> None:
        session.select_size(5)
        _assert_in_sync(session, engine)
        session.select_floor(2)
        _assert_in_sync(session, engine)
        session.select_frequency(Frequency.MOVE_IN_OUT)
        _assert_in_sync(session, engine)
        session.set_elevator(True)
        _assert_in_sync(session, engine)
        session.select_property_type("townhouse")
        _assert_in_sync(session, engine)

    def test_selection_copy_is_detached(self, session: CalculatorSession) -> None:
        copy = session.selection
        copy.size_tier = 5
        assert session.selection.size_tier == 0


# ---------------------------------------------------------------------------
# Invalid changes
# ---------------------------------------------------------------------------


class TestInvalidChanges:
    @pytest.mark.parametrize(
        "changes",
        [
            {"size_tier": 6},
            {"size_tier": -1},
            {"floor": 0},
            {"frequency": "daily"},
            {"property_type": "castle"},
        ],
    )
    def test_rejected_and_state_kept(
        self, session: CalculatorSession, changes: dict[str, object]
    ) -> None:
        session.update(size_tier=1, floor=2)
        before_selection = session.selection
        before_quote = session.quote

        with pytest.raises(InvalidSelectionError):
            session.update(**changes)

        assert session.selection == before_selection
        assert session.quote == before_quote

    def test_unknown_field(self, session: CalculatorSession) -> None:
        with pytest.raises(InvalidSelectionError, match="bedrooms"):
            session.update(bedrooms=3)


# ---------------------------------------------------------------------------
# Theme and snapshot
# ---------------------------------------------------------------------------


class TestSessionTheme:
    def test_initialize_and_toggle(self, engine: PricingEngine) -> None:
        store = MemoryThemeStore()
        surface = RecordingSurface()
        session = create_session(store=store, surface=surface, engine=engine)

        assert session.initialize_theme(prefers_dark=True) == Theme.DARK
        assert session.is_dark_mode

        assert session.toggle_theme() == Theme.LIGHT
        assert not session.is_dark_mode
        assert store.get(THEME_KEY) == "light"
        assert surface.document_classes == []

    def test_theme_does_not_touch_quote(self, session: CalculatorSession) -> None:
        before = session.quote
        session.initialize_theme(prefers_dark=False)
        session.toggle_theme()
        assert session.quote == before


class TestSnapshot:
    def test_snapshot_keys(self, session: CalculatorSession) -> None:
        snapshot = session.snapshot()
        assert set(snapshot) == {"selection", "quote", "display", "theme", "is_dark_mode"}

    def test_snapshot_is_json_ready(self, session: CalculatorSession) -> None:
        session.update(frequency="weekly", property_type="house")
        snapshot = session.snapshot()
        assert snapshot["selection"]["frequency"] == "weekly"
        assert snapshot["selection"]["property_type"] == "house"
        assert snapshot["quote"]["frequency"] == "weekly"
        assert snapshot["display"]["recurring"]["price"] == "$148.75"
        assert snapshot["theme"] == "light"


# ---------------------------------------------------------------------------
# Overlapping changes
# ---------------------------------------------------------------------------


class _SlowEngine(PricingEngine):
    """Engine that takes long enough to price for two changes to overlap."""

    def quote(self, selection: Selection) -> PriceQuote:
        time.sleep(0.2)
        return super().quote(selection)


class TestOverlappingChanges:
    def test_both_changes_applied(self) -> None:
        session = create_session(engine=_SlowEngine())

        size_change = threading.Thread(target=session.select_size, args=(2,))
        floor_change = threading.Thread(target=session.select_floor, args=(3,))
        size_change.start()
        time.sleep(0.05)
        floor_change.start()
        size_change.join()
        floor_change.join()

        selection = session.selection
        assert (selection.size_tier, selection.floor) == (2, 3)
        assert session.quote == PricingEngine().quote(selection)

    def test_theme_toggles_not_lost(self) -> None:
        session = create_session()
        session.initialize_theme(prefers_dark=False)

        threads = [threading.Thread(target=session.toggle_theme) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert session.is_dark_mode
