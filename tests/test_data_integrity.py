import pytest
import sys
from datetime import date, datetime
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from shift_board.main import ShiftBoardApp
from shift_board.entity_store import EntityStore, ValidationError
from shift_board.models import Role, TimeOffStatus, TradeStatus, Shift, ShiftTradeRequest


@pytest.fixture
def app(tmp_path):
    """Application with one record of every kind, a decided request and an accepted trade."""
    app = ShiftBoardApp(export_dir=tmp_path)
    s1 = app.catalog.create_shift("bob", date(2024, 1, 1), "9-5", "Cook", "Kitchen")
    app.catalog.create_shift("alice", datetime(2024, 1, 2, 8, 0), "8-4", "Host", "Front")
    app.availability.submit("Bob", {"monday": "all day", "sunday": "off"})
    req = app.time_off.request("alice", date(2024, 2, 1), date(2024, 2, 3))
    app.time_off.request("bob", date(2024, 2, 5), date(2024, 2, 5))
    app.time_off.decide(req.id, TimeOffStatus.DENIED, Role.MANAGER)
    trade = app.trades.offer_trade("bob", s1)
    app.trades.accept_trade(trade.id, "carol")
    return app


def test_export_then_import_restores_every_section(app):
    """
    Why this is important: durable storage can be added later by saving the
    exported rows. Anything lost in the round trip (ids, statuses, the cover
    employee) would silently corrupt the restored session.
    """
    rows = app.store.export_rows()

    restored = EntityStore()
    restored.import_rows(rows)

    assert restored.export_rows() == rows
    assert restored.shifts == app.store.shifts
    assert restored.availability == app.store.availability
    assert restored.time_off == app.store.time_off
    assert restored.trades == app.store.trades
    assert restored.counts() == {"shifts": 2, "availability": 1, "time_off": 2, "trades": 1}


def test_rows_carry_ids_and_statuses(app):
    rows = app.store.export_rows()

    shift_row = rows["shifts"][0]
    assert shift_row[1:] == ("carol", date(2024, 1, 1), "9-5", "Cook", "Kitchen")

    statuses = [row[-1] for row in rows["time_off"]]
    assert statuses == ["Denied", "Pending"]

    trade_row = rows["trades"][0]
    assert trade_row[1] == "bob"
    assert trade_row[-2:] == ("Accepted", "carol")


def test_dict_round_trip_keeps_datetimes():
    shift = Shift("s1", "alice", datetime(2024, 1, 2, 8, 0), "8-4", "Host", "Front")
    trade = ShiftTradeRequest("t1", "alice", shift, TradeStatus.ACCEPTED, "bob")
    assert ShiftTradeRequest.from_dict(trade.to_dict()) == trade


def test_import_replaces_only_given_sections(app):
    restored = EntityStore()
    restored.import_rows(app.store.export_rows())
    restored.import_rows({"trades": []})

    assert restored.trades == {}
    assert len(restored.shifts) == 2


@pytest.mark.parametrize(
    "rows",
    [
        {"unknown": []},
        {"shifts": [("only-an-id",)]},
        {"time_off": [("r1", "bob", "2024-01-01", "2024-01-02", "Maybe")]},
        {"shifts": [], "trades": [("t1", "bob")]},
    ],
)
def test_import_rejects_malformed_rows(rows):
    store = EntityStore()
    with pytest.raises(ValidationError):
        store.import_rows(rows)
    assert store.counts() == {"shifts": 0, "availability": 0, "time_off": 0, "trades": 0}


def test_failed_import_leaves_every_section_untouched(app):
    """
    Why this is important: a restore that fails part way must not leave the
    session half replaced. A valid section listed before a malformed one
    would otherwise wipe the live shifts and keep the old time-off records.
    """
    before = app.store.export_rows()
    rows = {
        "shifts": [],
        "availability": [],
        "time_off": [("r1", "bob", "2024-01-01", "2024-01-02", "Maybe")],
    }

    with pytest.raises(ValidationError):
        app.store.import_rows(rows)

    assert app.store.export_rows() == before
    assert len(app.store.shifts) == 2
