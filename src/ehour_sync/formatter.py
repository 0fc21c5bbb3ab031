"""
Daily report 輸出

將分組後的 git log 轉為可手動編輯的 daily report 文字:

    ## 2025-07-01
    [8] MKIS-100: Add login
      - validate fields
    MKIS-101 Update profile page
      - fix avatar upload

此轉換會捨棄 merge commit 與原始格式，不可逆。
"""

import re
from typing import Mapping

from .classifier import FeatureNamePredicate, default_classifier
from .grouper import group_git_log
from .models import DEFAULT_HOURS, DEFAULT_TICKET_PREFIX, GENERAL_WORK, DayGroups

REPORT_HEADER_RE = re.compile(r"^[ \t]*##\s*(\d{4}-\d{2}-\d{2})", re.MULTILINE)


def format_day(day: DayGroups, hours: int = DEFAULT_HOURS) -> list[str]:
    """輸出單日區塊 (含結尾空行)"""
    lines = [f"## {day.date}"]
    ticket_ids = day.rendering_order

    if ticket_ids:
        first = day.tickets[ticket_ids[0]]
        lines.append(f"[{hours}] {first.ticket_id}: {first.main_title}")
        lines.extend(f"  - {subtask}" for subtask in first.subtasks)

        for ticket_id in ticket_ids[1:]:
            group = day.tickets[ticket_id]
            lines.append(f"{ticket_id} {group.main_title}")
            lines.extend(f"  - {subtask}" for subtask in group.subtasks)

        # 非 ticket commit 原樣附在所有 ticket 之後
        lines.extend(day.non_ticket_commits)
    else:
        lines.append(f"[{hours}] {GENERAL_WORK}")
        lines.extend(f"  - {commit}" for commit in day.non_ticket_commits)

    lines.append("")
    return lines


def format_report(days: Mapping[str, DayGroups], hours: int = DEFAULT_HOURS) -> str:
    """依日期排序輸出整份 report"""
    output = []
    for date in sorted(days):
        output.extend(format_day(days[date], hours))
    return "\n".join(output)


def reformat_git_log(
    text: str,
    ticket_prefix: str = DEFAULT_TICKET_PREFIX,
    hours: int = DEFAULT_HOURS,
    is_feature_name: FeatureNamePredicate = default_classifier,
) -> str:
    """git log 文字 → daily report 文字；沒有任何 commit 時回傳空字串"""
    return format_report(group_git_log(text, ticket_prefix, is_feature_name), hours)


def is_canonical_report(text: str) -> bool:
    """是否已是 daily report 格式 (含 `## DATE` 標題)"""
    return REPORT_HEADER_RE.search(text) is not None


def ensure_canonical(
    text: str,
    ticket_prefix: str = DEFAULT_TICKET_PREFIX,
    hours: int = DEFAULT_HOURS,
    is_feature_name: FeatureNamePredicate = default_classifier,
) -> str:
    """已是 report 格式則原樣回傳，否則視為 git log 重新格式化"""
    if is_canonical_report(text):
        return text
    return reformat_git_log(text, ticket_prefix, hours, is_feature_name)
