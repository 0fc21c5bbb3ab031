"""
DailyEntry 篩選與預覽
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .models import DEFAULT_TICKET_PREFIX, GENERAL_WORK, DailyEntry
from .report_parser import parse_report


class SelectionStatus(str, Enum):
    """選取結果狀態"""
    OK = "ok"
    EMPTY_RESULT = "empty_result"   # report 中沒有任何有效記錄
    RANGE_EMPTY = "range_empty"     # 有記錄，但都不在日期範圍內


@dataclass
class Selection:
    """解析並篩選後的結果"""
    status: SelectionStatus
    entries: list[DailyEntry] = field(default_factory=list)
    total_parsed: int = 0

    @property
    def has_entries(self) -> bool:
        return self.status == SelectionStatus.OK


def filter_by_date_range(
    entries: Iterable[DailyEntry],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> list[DailyEntry]:
    """
    篩選日期範圍內的記錄 (兩端皆含)

    YYYY-MM-DD 字串的字典序即為時間順序；任一邊界為空時回傳全部記錄。
    """
    if not start_date or not end_date:
        return list(entries)
    return [e for e in entries if start_date <= e.date <= end_date]


def select_entries(
    text: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    ticket_prefix: str = DEFAULT_TICKET_PREFIX,
) -> Selection:
    """解析 report 並篩選日期範圍，區分「沒有記錄」與「範圍內沒有記錄」"""
    parsed = parse_report(text, ticket_prefix)
    if not parsed:
        return Selection(status=SelectionStatus.EMPTY_RESULT)

    selected = filter_by_date_range(parsed, start_date, end_date)
    if not selected:
        return Selection(status=SelectionStatus.RANGE_EMPTY, total_parsed=len(parsed))
    return Selection(status=SelectionStatus.OK, entries=selected, total_parsed=len(parsed))


def render_preview(entries: Iterable[DailyEntry]) -> str:
    """產生預覽文字"""
    blocks = []
    for entry in entries:
        lines = [f"{entry.date}: {entry.hours}h - {entry.description or GENERAL_WORK}"]
        lines.extend(f"  - {subtask}" for subtask in entry.subtasks)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def build_comment(entry: DailyEntry) -> str:
    """eHour 備註欄內容: 描述 + 縮排子任務"""
    lines = [entry.description or GENERAL_WORK]
    lines.extend(f"  - {subtask}" for subtask in entry.subtasks)
    return "\n".join(lines)


def to_timesheet_payload(entries: Iterable[DailyEntry], last_parsed: int) -> dict:
    """交給頁面自動填寫的資料格式"""
    return {
        "timesheetData": [
            {**entry.to_dict(), "comment": build_comment(entry)} for entry in entries
        ],
        "lastParsed": last_parsed,
    }
