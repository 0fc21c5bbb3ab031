"""
資料模型

- CommitLine: 單行 commit 記錄 (日期 + 訊息)
- TicketGroup: 單日單 ticket 的標題與子任務
- DayGroups: 單日的分組結果
- DailyEntry: 單日工時記錄，交給 eHour 自動填寫
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache

DEFAULT_TICKET_PREFIX = "MKIS"
DEFAULT_HOURS = 8
GENERAL_WORK = "General work"


@lru_cache(maxsize=None)
def ticket_pattern(prefix: str = DEFAULT_TICKET_PREFIX) -> re.Pattern:
    """Ticket ID 的 regex (不含錨點)"""
    return re.compile(rf"{re.escape(prefix)}-\d+")


def find_ticket_ids(text: str, prefix: str = DEFAULT_TICKET_PREFIX) -> list[str]:
    """找出文字中所有 ticket ID，依出現順序"""
    return ticket_pattern(prefix).findall(text)


@dataclass(frozen=True)
class CommitLine:
    """一行 git log 記錄"""
    date: str       # YYYY-MM-DD
    message: str


@dataclass
class TicketGroup:
    """單日單 ticket 的彙整結果"""
    ticket_id: str
    main_title: str = ""
    subtasks: list[str] = field(default_factory=list)


@dataclass
class DayGroups:
    """單日的分組結果"""
    date: str
    tickets: dict[str, TicketGroup] = field(default_factory=dict)  # 依收集順序
    non_ticket_commits: list[str] = field(default_factory=list)

    @property
    def rendering_order(self) -> list[str]:
        """輸出報告用的 ticket 順序 (字典序)"""
        return sorted(self.tickets)


@dataclass
class DailyEntry:
    """單日工時記錄"""
    date: str
    hours: int = DEFAULT_HOURS
    description: str = ""
    subtasks: list[str] = field(default_factory=list)
    ticket_prefix: str = field(default=DEFAULT_TICKET_PREFIX, repr=False, compare=False)

    @property
    def tasks(self) -> list[str]:
        """描述中出現的 ticket ID (由描述推導，不可單獨設定)"""
        return find_ticket_ids(self.description, self.ticket_prefix)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "hours": self.hours,
            "tasks": self.tasks,
            "description": self.description,
            "subtasks": list(self.subtasks),
        }
