import pytest
import sys
from datetime import date
from pathlib import Path
import tempfile
import os

import pandas as pd

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from shift_board.entity_store import EntityStore
from shift_board.catalog import ShiftCatalog
from shift_board.availability import AvailabilityRegistry
from shift_board.time_off import TimeOffWorkflow
from shift_board.trades import ShiftTradeWorkflow
from shift_board.reporting import ExportManager


@pytest.fixture
def store():
    """Store seeded with a week of shifts, availability, a request and a trade."""
    store = EntityStore()
    catalog = ShiftCatalog(store)
    s1 = catalog.create_shift("Alice", date(2025, 8, 4), "9-5", "Cashier", "Front & Back")
    catalog.create_shift("bob", date(2025, 8, 4), "5-11", "Cook", "<Kitchen>")
    catalog.create_shift("bob", date(2025, 8, 6), "9-5", "Cook", "Kitchen")
    AvailabilityRegistry(store).submit("Alice", {"monday": "9-5", "friday": "any"})
    TimeOffWorkflow(store).request("bob", date(2025, 8, 11), date(2025, 8, 12))
    ShiftTradeWorkflow(store).offer_trade("alice", s1)
    return store


@pytest.fixture
def export_manager(store):
    """Fixture for an ExportManager instance."""
    return ExportManager(store)


def test_pdf_export_basic(export_manager):
    """Test PDF export works on valid seeded data."""
    with tempfile.NamedTemporaryFile(suffix=".pdf", delete=False) as tmpfile:
        output_path = tmpfile.name
    success = export_manager.export_week(date(2025, 8, 6), "pdf", output_path, current_user="alice")
    assert success
    assert os.path.exists(output_path)
    assert os.path.getsize(output_path) > 200
    os.unlink(output_path)


def test_pdf_export_empty_week(export_manager):
    """A week without shifts still produces a document."""
    with tempfile.NamedTemporaryFile(suffix=".pdf", delete=False) as tmpfile:
        output_path = tmpfile.name
    success = export_manager.export_week(date(2020, 1, 1), "pdf", output_path)
    assert success
    assert os.path.exists(output_path)
    os.unlink(output_path)


def test_pdf_export_bad_path(export_manager):
    """Test PDF export failure if path is unwritable (should not throw, just return False)."""
    result = export_manager.export_week(
        date(2025, 8, 6), "pdf", "/not_a_dir/this_file_should_fail.pdf"
    )
    assert result is False


def test_excel_export_has_every_sheet(export_manager):
    """
    Why this is important: the workbook is the manager's offline copy of the
    session, so each entity table has to be present.
    """
    with tempfile.NamedTemporaryFile(suffix=".xlsx", delete=False) as tmpfile:
        output_path = tmpfile.name

    success = export_manager.export_week(date(2025, 8, 6), "excel", output_path)

    assert success
    sheets = pd.read_excel(output_path, sheet_name=None, engine="openpyxl")
    assert list(sheets) == ["Week", "Shifts", "Availability", "TimeOff", "Trades"]
    assert len(sheets["Shifts"]) == 3
    assert len(sheets["Trades"]) == 1
    os.unlink(output_path)


def test_csv_export_lists_week_rows(export_manager):
    with tempfile.NamedTemporaryFile(suffix=".csv", delete=False) as tmpfile:
        output_path = tmpfile.name

    success = export_manager.export_week(date(2025, 8, 6), "csv", output_path)

    assert success
    df = pd.read_csv(output_path, keep_default_na=False)
    # 3 shifts plus one empty row for each of the 5 days without shifts
    assert len(df) == 8
    assert df["Date"].iloc[0] == "2025-08-03"
    assert list(df[df["Date"] == "2025-08-04"]["Employee"]) == ["Alice", "bob"]
    os.unlink(output_path)


def test_unsupported_format(export_manager):
    with pytest.raises(ValueError):
        export_manager.export_week(date(2025, 8, 6), "docx", "out.docx")


def test_batch_export(export_manager, tmp_path):
    results = export_manager.batch_export(date(2025, 8, 6), str(tmp_path / "out"))
    assert results == {"pdf": True, "excel": True, "csv": True}
    suffixes = sorted(p.suffix for p in (tmp_path / "out").iterdir())
    assert suffixes == [".csv", ".pdf", ".xlsx"]
