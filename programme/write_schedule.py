"""
Write planned schedules to an Excel workbook for printing / sharing.
One sheet per schedule; a WARNINGS sheet is added when the validator raised
non-fatal messages.
"""

from pathlib import Path
from typing import List, Optional

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from .models import AssessmentTimeSlot, RotationSchedule

HEADER_FONT = Font(bold=True, size=11, name="Arial")
HEADER_FILL = PatternFill(start_color="F8FAFC", end_color="F8FAFC", fill_type="solid")
CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)

# Group colours (ARGB)
GROUP_COLORS = {
    "A": "FF86EFAC", "B": "FF7DD3FC", "C": "FFFDBA74", "D": "FFFEF08A",
}
PHASE_COLORS = {1: "FFE2E8F0", 2: "FFC4B5FD"}


def _header(ws, labels: List[str]) -> None:
    for col, label in enumerate(labels, 1):
        cell = ws.cell(1, col, label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        ws.column_dimensions[get_column_letter(col)].width = max(14, len(label) + 4)


def _new_sheet(wb, title: str):
    if wb.active is not None and wb.active.max_row == 1 and wb.active.max_column == 1 \
            and wb.active["A1"].value is None:
        ws = wb.active
        ws.title = title
        return ws
    return wb.create_sheet(title)


def rotation_sheet(wb, schedule: RotationSchedule, title: str = "Rotation") -> None:
    ws = _new_sheet(wb, title)
    _header(ws, ["Round", "Time"] + list(schedule.sub_activities))
    for row, rnd in enumerate(schedule.rounds, 2):
        ws.cell(row, 1, rnd.index).alignment = CENTER
        ws.cell(row, 2, rnd.time_window).alignment = CENTER
        for col, name in enumerate(schedule.sub_activities, 3):
            session = rnd.session_for(name)
            cell = ws.cell(row, col, session.label if session else "")
            cell.alignment = CENTER
            if session and len(session.groups) == 1 and session.groups[0] in GROUP_COLORS:
                color = GROUP_COLORS[session.groups[0]]
                cell.fill = PatternFill(start_color=color, end_color=color, fill_type="solid")


def assessment_sheet(wb, slots: List[AssessmentTimeSlot], title: str = "Assessment") -> None:
    ws = _new_sheet(wb, title)
    station_names = [s.station_name for s in slots[0].stations] if slots else []
    _header(ws, ["Slot", "Time", "Phase"] + station_names + ["Concurrent activity"])
    for row, slot in enumerate(slots, 2):
        ws.cell(row, 1, slot.slot_index).alignment = CENTER
        ws.cell(row, 2, slot.time_window).alignment = CENTER
        phase = ws.cell(row, 3, "Lead/Assist" if slot.phase == 1 else "Assessed/Observe")
        phase.fill = PatternFill(start_color=PHASE_COLORS[slot.phase],
                                 end_color=PHASE_COLORS[slot.phase], fill_type="solid")
        for col, station in enumerate(slot.stations, 4):
            text = " / ".join(f"{c.candidate_number} ({c.role.value})"
                              for c in station.candidate_assignments)
            ws.cell(row, col, text).alignment = CENTER
        concurrent = slot.concurrent_activity
        ws.cell(row, 4 + len(slot.stations),
                f"{concurrent.name}: candidates {concurrent.candidate_range}").alignment = CENTER


def warnings_sheet(wb, messages: List[str]) -> None:
    if "WARNINGS" in wb.sheetnames:
        del wb["WARNINGS"]
    ws = wb.create_sheet("WARNINGS")
    ws.cell(1, 1, "Warning").font = HEADER_FONT
    ws.column_dimensions["A"].width = 100
    for i, msg in enumerate(messages, 2):
        ws.cell(i, 1, msg)


def write_rotation_workbook(schedule: RotationSchedule, output_path: str, title: str = "Rotation",
                            warnings: Optional[List[str]] = None) -> str:
    wb = openpyxl.Workbook()
    rotation_sheet(wb, schedule, title)
    if warnings:
        warnings_sheet(wb, warnings)
    output = Path(output_path)
    wb.save(output)
    return str(output)


def write_assessment_workbook(slots: List[AssessmentTimeSlot], output_path: str,
                              title: str = "Assessment", warnings: Optional[List[str]] = None) -> str:
    wb = openpyxl.Workbook()
    assessment_sheet(wb, slots, title)
    if warnings:
        warnings_sheet(wb, warnings)
    output = Path(output_path)
    wb.save(output)
    return str(output)
