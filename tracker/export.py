import logging
import os
from datetime import datetime

import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import PatternFill, Alignment, Font, Border, Side

from tracker.constants import RECORDS_FOLDER, STATUS_SCHEME
from tracker.exceptions import ValidationError
from tracker.logic import classify_status, compute_statistics

logger = logging.getLogger(__name__)

COLUMNS = ["Subject", "Attended", "Missed", "Total", "Attendance %", "Status"]

STATUS_FILLS = {
    "Safe": "C6EFCE",
    "Caution": "FFEB9C",
    "Danger": "FFC7CE",
}


def build_report_rows(subjects, scheme=STATUS_SCHEME):
    rows = []
    for subject in subjects:
        rows.append([
            subject.name,
            subject.attended,
            subject.missed,
            subject.total,
            round(subject.percentage, 1),
            classify_status(subject.percentage, scheme).label,
        ])
    return rows


def export_report(subjects, scheme=STATUS_SCHEME, folder=RECORDS_FOLDER, today=None):
    if not subjects:
        raise ValidationError("No subjects to export")

    today = today or datetime.now().strftime("%Y-%m-%d")
    os.makedirs(folder, exist_ok=True)
    file_path = os.path.join(folder, f"attendance_{today}.xlsx")

    df = pd.DataFrame(build_report_rows(subjects, scheme), columns=COLUMNS)
    df.to_excel(file_path, index=False, engine="openpyxl")

    wb = load_workbook(file_path)
    ws = wb.active
    ws.title = "Attendance"

    header_fill = PatternFill("solid", start_color="D3D3D3")
    header_font = Font(bold=True, size=12)
    data_font = Font(size=11)

    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)

    for col_idx in range(1, len(COLUMNS) + 1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = border

    for row in ws.iter_rows(min_row=2, max_row=ws.max_row, min_col=1, max_col=len(COLUMNS)):
        for cell in row:
            cell.font = data_font
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = border
        status_cell = row[-1]
        if status_cell.value in STATUS_FILLS:
            status_cell.fill = PatternFill("solid", start_color=STATUS_FILLS[status_cell.value])

    stats = compute_statistics(subjects)
    summary_row = ws.max_row + 2
    ws.cell(row=summary_row, column=1, value="Overall").font = header_font
    ws.cell(row=summary_row, column=2, value=stats.total_attended)
    ws.cell(row=summary_row, column=3, value=stats.total_missed)
    ws.cell(row=summary_row, column=4, value=stats.total_sessions)
    ws.cell(row=summary_row, column=5, value=stats.overall_display)

    ws.column_dimensions["A"].width = 25
    for letter in "BCDEF":
        ws.column_dimensions[letter].width = 14

    wb.save(file_path)
    logger.info("Exported %d subjects to %s", len(subjects), file_path)
    return file_path
