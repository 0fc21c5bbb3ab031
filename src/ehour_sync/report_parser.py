"""
Daily report 解析

解析 `formatter` 產生 (或使用者手動編輯) 的 report 文字為 DailyEntry 列表。
無法辨識的行一律略過；輸出順序與輸入中出現的順序相同，不保證依日期排序。
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from .models import DEFAULT_TICKET_PREFIX, DailyEntry

logger = logging.getLogger(__name__)

DATE_HEADER_RE = re.compile(r"^##\s*(\d{4}-\d{2}-\d{2})")
HOURS_LINE_RE = re.compile(r"^\[(\d+)\]\s*(.+)")
SUBTASK_LINE_RE = re.compile(r"^\s*-\s*(.+)")


@dataclass
class _OpenEntry:
    """解析中的單日記錄"""
    date: str
    hours: int = 0
    description: str = ""
    subtasks: list[str] = field(default_factory=list)

    def close(self, ticket_prefix: str) -> DailyEntry:
        return DailyEntry(
            date=self.date,
            hours=self.hours,
            description=self.description,
            subtasks=list(self.subtasks),
            ticket_prefix=ticket_prefix,
        )


class ReportParser:
    """Daily report 解析器"""

    def __init__(self, ticket_prefix: str = DEFAULT_TICKET_PREFIX):
        self.ticket_prefix = ticket_prefix
        self.continuation_re = re.compile(rf"^({re.escape(ticket_prefix)}-\d+)\s+(.+)")

    def parse(self, text: str) -> list[DailyEntry]:
        entries: list[DailyEntry] = []
        current: Optional[_OpenEntry] = None
        ignored = 0

        for raw_line in text.splitlines():
            line = raw_line.strip()

            date_match = DATE_HEADER_RE.match(line)
            if date_match:
                if current:
                    entries.append(current.close(self.ticket_prefix))
                current = _OpenEntry(date=date_match.group(1))
                continue

            if current is None:
                if line:
                    ignored += 1
                continue

            hours_match = HOURS_LINE_RE.match(line)
            if hours_match:
                current.hours = int(hours_match.group(1))
                current.description = hours_match.group(2)
                continue

            subtask_match = SUBTASK_LINE_RE.match(raw_line)
            if subtask_match:
                current.subtasks.append(subtask_match.group(1).strip())
                continue

            continuation_match = self.continuation_re.match(line)
            if continuation_match:
                ticket_id, rest = continuation_match.groups()
                current.subtasks.append(f"{ticket_id}: {rest}")
                continue

            if line:
                ignored += 1

        if current:
            entries.append(current.close(self.ticket_prefix))

        if ignored:
            logger.debug(f"Ignored {ignored} unrecognized report lines")
        return entries


def parse_report(text: str, ticket_prefix: str = DEFAULT_TICKET_PREFIX) -> list[DailyEntry]:
    """解析 daily report 文字"""
    return ReportParser(ticket_prefix).parse(text)
