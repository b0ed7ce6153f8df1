"""
Reporting and Export Module for Shift Board

Handles PDF, Excel, and CSV export of the weekly roster together with
availability, time-off and trade overviews.
"""

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, PageBreak
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from datetime import datetime, date
from pathlib import Path
from typing import Dict, List, Optional
from xml.sax.saxutils import escape
import logging

from .availability import AvailabilityRegistry
from .calendar_view import CalendarAggregator, CalendarDay
from .catalog import ShiftCatalog
from .config import DEFAULT_EXPORT_FORMATS, EXPORT_EXTENSIONS
from .entity_store import EntityStore
from .models import WEEKDAYS, DateLike, calendar_day


logger = logging.getLogger(__name__)

WEEK_COLUMNS = ['Date', 'Day', 'Employee', 'Time', 'Position', 'Section']
SHIFT_COLUMNS = ['ID', 'Employee', 'Date', 'Time', 'Position', 'Section']
AVAILABILITY_COLUMNS = ['Employee'] + [day.capitalize() for day in WEEKDAYS]
TIME_OFF_COLUMNS = ['ID', 'Employee', 'Start', 'End', 'Status']
TRADE_COLUMNS = ['ID', 'Offered_By', 'Shift_ID', 'Shift_Date', 'Shift_Time', 'Status', 'Covered_By']


class ReportGenerator:
    """Main class for generating reports and exports"""

    def __init__(self, store: EntityStore):
        self.store = store
        self.catalog = ShiftCatalog(store)
        self.availability = AvailabilityRegistry(store)
        self.calendar = CalendarAggregator(self.catalog)
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom report styles"""
        self.styles.add(ParagraphStyle(
            name='CustomTitle',
            parent=self.styles['Heading1'],
            fontSize=18,
            spaceAfter=30,
            alignment=1  # Center alignment
        ))

        self.styles.add(ParagraphStyle(
            name='CustomHeading',
            parent=self.styles['Heading2'],
            fontSize=14,
            spaceAfter=12
        ))

    def export_week_pdf(self, reference: DateLike, output_path: str,
                        current_user: Optional[str] = None) -> bool:
        """Export the week containing `reference` to PDF"""
        try:
            doc = SimpleDocTemplate(
                output_path,
                pagesize=landscape(A4),
                rightMargin=0.5*inch,
                leftMargin=0.5*inch,
                topMargin=0.5*inch,
                bottomMargin=0.5*inch
            )

            week = self.calendar.week(reference, current_user)
            story = []

            title_text = f"Shift Roster - Week of {week[0].day.strftime('%B %d, %Y')}"
            story.append(Paragraph(title_text, self.styles['CustomTitle']))
            story.append(Spacer(1, 20))

            story.append(self._create_week_table(week))

            story.append(Spacer(1, 20))
            story.append(self._create_legend())

            story.append(PageBreak())
            story.append(Paragraph("Employee Availability", self.styles['CustomHeading']))
            story.append(self._create_availability_table())

            doc.build(story)
            return True

        except Exception as e:
            logger.error(f"Error creating PDF: {e}", exc_info=True)
            return False

    def _create_week_table(self, week: List[CalendarDay]) -> Table:
        """Create the 7-column roster table for PDF"""
        header = [f"{d.label}\n{d.summary}" for d in week]
        cells = [self._format_day_cell(d) for d in week]

        table = Table([header, cells], colWidths=[1.5*inch]*7)
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 10),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 12),
            ('BACKGROUND', (0, 1), (-1, -1), colors.beige),
            ('GRID', (0, 0), (-1, -1), 1, colors.black),
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ]))
        return table

    def _format_day_cell(self, day: CalendarDay) -> Paragraph:
        """Format one day's shifts; the current user's shifts are bold"""
        if not day.shifts:
            return Paragraph("---", self.styles['Normal'])

        own_ids = {s.id for s in day.own_shifts}
        lines = []
        for shift in day.shifts:
            name = escape(shift.employee_name)
            if shift.id in own_ids:
                name = f"<b>{name}</b>"
            lines.append(
                f"{escape(shift.time)}<br/>{name} • {escape(shift.position)} • {escape(shift.section)}"
            )
        return Paragraph("<br/><br/>".join(lines), self.styles['Normal'])

    def _create_legend(self) -> Table:
        """Create legend for PDF"""
        legend_data = [
            ['Legend'],
            ['Bold  Shift belongs to the current user'],
            ['---   No shifts scheduled'],
        ]

        legend_table = Table(legend_data, colWidths=[3*inch])
        legend_table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('GRID', (0, 0), (-1, -1), 1, colors.black),
        ]))
        return legend_table

    def _create_availability_table(self) -> Table:
        df = self._create_availability_dataframe()
        data = [AVAILABILITY_COLUMNS] + df.values.tolist()
        table = Table(data)
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('GRID', (0, 0), (-1, -1), 1, colors.black),
        ]))
        return table

    def export_week_excel(self, reference: DateLike, output_path: str) -> bool:
        """Export the week plus every entity table to Excel"""
        try:
            with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
                self._create_week_dataframe(reference).to_excel(writer, sheet_name='Week', index=False)
                self._create_shifts_dataframe().to_excel(writer, sheet_name='Shifts', index=False)
                self._create_availability_dataframe().to_excel(writer, sheet_name='Availability', index=False)
                self._create_time_off_dataframe().to_excel(writer, sheet_name='TimeOff', index=False)
                self._create_trades_dataframe().to_excel(writer, sheet_name='Trades', index=False)

                self._format_excel_worksheets(writer)

            return True

        except Exception as e:
            logger.error(f"Error exporting to Excel: {e}", exc_info=True)
            return False

    def _create_week_dataframe(self, reference: DateLike) -> pd.DataFrame:
        """One row per shift in the week, days without shifts get an empty row"""
        data = []
        for day in self.calendar.week(reference):
            base = {'Date': day.day.isoformat(), 'Day': day.day.strftime("%A")}
            if not day.shifts:
                data.append(dict(base, Employee='', Time='', Position='', Section=''))
            for shift in day.shifts:
                data.append(dict(
                    base,
                    Employee=shift.employee_name,
                    Time=shift.time,
                    Position=shift.position,
                    Section=shift.section,
                ))
        return pd.DataFrame(data, columns=WEEK_COLUMNS)

    def _create_shifts_dataframe(self) -> pd.DataFrame:
        data = [
            {
                'ID': s.id,
                'Employee': s.employee_name,
                'Date': calendar_day(s.date).isoformat(),
                'Time': s.time,
                'Position': s.position,
                'Section': s.section,
            }
            for s in self.catalog.all_shifts()
        ]
        return pd.DataFrame(data, columns=SHIFT_COLUMNS)

    def _create_availability_dataframe(self) -> pd.DataFrame:
        data = []
        for name, record in self.availability.list():
            row = {'Employee': name}
            row.update({day.capitalize(): label for day, label in record.days.items()})
            data.append(row)
        return pd.DataFrame(data, columns=AVAILABILITY_COLUMNS)

    def _create_time_off_dataframe(self) -> pd.DataFrame:
        data = [
            {
                'ID': r.id,
                'Employee': r.employee_name,
                'Start': r.start_date.isoformat(),
                'End': r.end_date.isoformat(),
                'Status': r.status.value,
            }
            for r in self.store.snapshot("time_off")
        ]
        return pd.DataFrame(data, columns=TIME_OFF_COLUMNS)

    def _create_trades_dataframe(self) -> pd.DataFrame:
        data = [
            {
                'ID': t.id,
                'Offered_By': t.employee_name,
                'Shift_ID': t.shift.id,
                'Shift_Date': calendar_day(t.shift.date).isoformat(),
                'Shift_Time': t.shift.time,
                'Status': t.status.value,
                'Covered_By': t.cover_employee or '',
            }
            for t in self.store.snapshot("trades")
        ]
        return pd.DataFrame(data, columns=TRADE_COLUMNS)

    def _format_excel_worksheets(self, writer):
        """Header styling and column widths for every sheet"""
        from openpyxl.styles import PatternFill, Font

        header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        header_font = Font(color="FFFFFF", bold=True)

        for worksheet in writer.sheets.values():
            for cell in worksheet[1]:
                cell.fill = header_fill
                cell.font = header_font

            for column in worksheet.columns:
                max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
                worksheet.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)

    def export_week_csv(self, reference: DateLike, output_path: str) -> bool:
        """Export the week to CSV format"""
        try:
            self._create_week_dataframe(reference).to_csv(output_path, index=False)
            return True

        except Exception as e:
            logger.error(f"Error exporting to CSV: {e}", exc_info=True)
            return False


class ExportManager:
    """Manager class for handling all export operations"""

    def __init__(self, store: EntityStore):
        self.store = store
        self.report_generator = ReportGenerator(store)

    def export_week(self, reference: DateLike, format_type: str, output_path: str,
                    current_user: Optional[str] = None) -> bool:
        """Export the week containing `reference` in the specified format"""
        if format_type.lower() == 'pdf':
            return self.report_generator.export_week_pdf(reference, output_path, current_user)
        elif format_type.lower() == 'excel':
            return self.report_generator.export_week_excel(reference, output_path)
        elif format_type.lower() == 'csv':
            return self.report_generator.export_week_csv(reference, output_path)
        else:
            raise ValueError(f"Unsupported format: {format_type}")

    def get_default_filename(self, reference: DateLike, format_type: str) -> str:
        """Generate default filename for export"""
        week_start: date = CalendarAggregator.window(reference)[0]
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        extension = EXPORT_EXTENSIONS.get(format_type.lower(), format_type.lower())

        return f"shift_roster_week_{week_start.isoformat()}_{timestamp}.{extension}"

    def batch_export(self, reference: DateLike, output_dir: str,
                     formats: List[str] = None) -> Dict[str, bool]:
        """Export the week in multiple formats"""
        if formats is None:
            formats = DEFAULT_EXPORT_FORMATS

        results = {}
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        for format_type in formats:
            filename = self.get_default_filename(reference, format_type)
            file_path = output_path / filename

            try:
                results[format_type] = self.export_week(reference, format_type, str(file_path))
            except Exception as e:
                logger.error(f"Error exporting {format_type}: {e}", exc_info=True)
                results[format_type] = False

        return results
