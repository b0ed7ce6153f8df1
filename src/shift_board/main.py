"""
Main Entry Point for Shift Board

Composes the entity store with every workflow and provides the primary
application entry point with error handling and logging.
"""

import sys
import logging
import traceback
from dataclasses import dataclass
from datetime import datetime, date
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from shift_board.availability import AvailabilityRegistry
from shift_board.calendar_view import CalendarAggregator
from shift_board.catalog import ShiftCatalog
from shift_board.config import LOG_DIR, LOG_LEVEL, LOG_FORMAT, LOG_FILE_PREFIX, EXPORT_DIR, DEFAULT_EXPORT_FORMATS
from shift_board.entity_store import EntityStore, ShiftBoardError
from shift_board.reporting import ExportManager
from shift_board.time_off import TimeOffWorkflow
from shift_board.trades import ShiftTradeWorkflow


def setup_logging(log_dir: Path = LOG_DIR, level: str = LOG_LEVEL):
    """Setup application logging"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"{LOG_FILE_PREFIX}_{datetime.now().strftime('%Y%m%d')}.log"

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)
        ]
    )

    return logging.getLogger(__name__)


def handle_exception(exc_type, exc_value, exc_traceback):
    """Global exception handler"""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    logger = logging.getLogger(__name__)
    logger.error(
        "Uncaught exception",
        exc_info=(exc_type, exc_value, exc_traceback)
    )


@dataclass
class ActionResult:
    """Outcome of a user action, ready for the display layer"""
    success: bool
    value: Any = None
    message: str = ""
    error: Optional[ShiftBoardError] = None


class ShiftBoardApp:
    """Main application class"""

    def __init__(self, export_dir: Optional[Path] = None):
        self.logger = logging.getLogger(__name__)
        self.export_dir = Path(export_dir) if export_dir else EXPORT_DIR

        self.store = EntityStore()
        self.catalog = ShiftCatalog(self.store)
        self.availability = AvailabilityRegistry(self.store)
        self.time_off = TimeOffWorkflow(self.store)
        self.trades = ShiftTradeWorkflow(self.store)
        self.calendar = CalendarAggregator(self.catalog)
        self.export_manager = ExportManager(self.store)

    def perform(self, action: Callable, *args, **kwargs) -> ActionResult:
        """
        Run a workflow operation and report its outcome.

        Domain errors become a failed result carrying the error and a
        message; anything else is logged and re-raised.
        """
        name = getattr(action, "__name__", repr(action))
        try:
            value = action(*args, **kwargs)
        except ShiftBoardError as e:
            self.logger.warning(f"{name} rejected: {type(e).__name__}: {e}")
            return ActionResult(success=False, message=str(e), error=e)
        except Exception as e:
            self.logger.error(f"{name} failed: {e}")
            self.logger.error(traceback.format_exc())
            raise
        return ActionResult(success=True, value=value)

    def summary(self) -> Dict[str, int]:
        return self.store.counts()

    def export_current_week(self, reference: Optional[date] = None, formats=None) -> Dict[str, bool]:
        """Export the week around `reference` (default: today)"""
        reference = reference or date.today()
        results = self.export_manager.batch_export(reference, str(self.export_dir), formats)
        for format_type, ok in results.items():
            if ok:
                self.logger.info(f"Exported {format_type} roster to {self.export_dir}")
            else:
                self.logger.error(f"Failed to export {format_type} roster")
        return results

    def run(self) -> bool:
        """Run the application and export this week's roster"""
        try:
            self.logger.info(f"Session started with {self.summary()}")
            results = self.export_current_week(formats=DEFAULT_EXPORT_FORMATS)
            return all(results.values())

        except Exception as e:
            self.logger.error(f"Application error: {e}")
            self.logger.error(traceback.format_exc())
            return False


def main():
    """Main entry point"""
    sys.excepthook = handle_exception

    logger = setup_logging()
    logger.info("=" * 50)
    logger.info("Starting Shift Board")
    logger.info("=" * 50)

    app = ShiftBoardApp()
    success = app.run()

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
