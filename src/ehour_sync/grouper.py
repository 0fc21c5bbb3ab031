"""
Ticket 分組

將同一天的 commit 訊息依 ticket 分組，每個 ticket 彙整出一個主標題與子任務。

範例:
    MKIS-100 Add login - validate fields
    MKIS-100 Add login - fix redirect
    → MKIS-100: "Add login"，子任務 ["validate fields", "fix redirect"]
"""

import re
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from .classifier import FeatureNamePredicate, default_classifier
from .git_log import bucket_by_date, read_commit_lines
from .models import DEFAULT_TICKET_PREFIX, DayGroups, TicketGroup

PART_SEPARATOR = " - "

# ticket ID 後面的分隔字元 (冒號、破折號、空白)
_LEADING_SEPARATORS = re.compile(r"^[:\-\s]+")


@dataclass(frozen=True)
class TicketState:
    """單一 ticket 在 fold 過程中的狀態"""
    ticket_id: str
    title: Optional[str] = None
    title_has_feature: bool = False
    subtasks: tuple[str, ...] = ()
    title_parts: frozenset[str] = frozenset()   # 已併入標題的片段 (小寫)

    def to_group(self) -> TicketGroup:
        return TicketGroup(
            ticket_id=self.ticket_id,
            main_title=self.title or "",
            subtasks=list(self.subtasks),
        )


def leading_ticket_re(prefix: str = DEFAULT_TICKET_PREFIX) -> re.Pattern:
    return re.compile(rf"^({re.escape(prefix)}-\d+)")


def split_ticket(message: str, prefix: str = DEFAULT_TICKET_PREFIX) -> Optional[tuple[str, str]]:
    """拆出開頭的 ticket ID 與描述；非 ticket commit 回傳 None"""
    match = leading_ticket_re(prefix).match(message)
    if not match:
        return None
    ticket_id = match.group(1)
    description = _LEADING_SEPARATORS.sub("", message[match.end():])
    return ticket_id, description


def _clean_title(text: str) -> str:
    return re.sub(r"^:\s*", "", text.strip())


def _clean_subtask(text: str) -> str:
    return re.sub(r";$", "", text.strip()).strip()


def _prefer_candidate(state: TicketState, candidate: str, has_feature: bool) -> bool:
    """有功能名稱的標題優先，同狀態則取較長者"""
    if state.title is None:
        return True
    if has_feature != state.title_has_feature:
        return has_feature
    return len(candidate) > len(state.title)


def absorb_description(
    state: TicketState,
    description: str,
    is_feature_name: FeatureNamePredicate = default_classifier,
) -> TicketState:
    """將一則描述併入 ticket 狀態，回傳新的狀態"""
    if PART_SEPARATOR not in description:
        plain = _clean_title(description)
        if state.title is None or len(state.title) < len(plain):
            return replace(state, title=plain, title_has_feature=False)
        return state

    parts = description.split(PART_SEPARATOR)
    candidate = _clean_title(parts[0])
    title_parts = state.title_parts
    has_feature = False
    subtask_start = 1

    if len(parts) > 1 and is_feature_name(parts[1]):
        feature = parts[1].strip()
        candidate = f"{candidate}{PART_SEPARATOR}{feature}"
        title_parts = title_parts | {feature.lower()}
        has_feature = True
        subtask_start = 2

    if _prefer_candidate(state, candidate, has_feature):
        state = replace(state, title=candidate, title_has_feature=has_feature)
    state = replace(state, title_parts=title_parts)

    subtasks = list(state.subtasks)
    for part in parts[subtask_start:]:
        subtask = _clean_subtask(part)
        if not subtask or subtask in subtasks or subtask.lower() in title_parts:
            continue
        subtasks.append(subtask)

    return replace(state, subtasks=tuple(subtasks))


def group_messages(
    date: str,
    messages: Iterable[str],
    ticket_prefix: str = DEFAULT_TICKET_PREFIX,
    is_feature_name: FeatureNamePredicate = default_classifier,
) -> DayGroups:
    """單日 commit 訊息分組"""
    states: dict[str, TicketState] = {}
    non_ticket_commits = []

    for message in messages:
        split = split_ticket(message, ticket_prefix)
        if split is None:
            non_ticket_commits.append(message)
            continue
        ticket_id, description = split
        state = states.get(ticket_id) or TicketState(ticket_id=ticket_id)
        states[ticket_id] = absorb_description(state, description, is_feature_name)

    return DayGroups(
        date=date,
        tickets={ticket_id: state.to_group() for ticket_id, state in states.items()},
        non_ticket_commits=non_ticket_commits,
    )


def group_git_log(
    text: str,
    ticket_prefix: str = DEFAULT_TICKET_PREFIX,
    is_feature_name: FeatureNamePredicate = default_classifier,
) -> dict[str, DayGroups]:
    """解析整份 git log 並按日期分組 (依日期首次出現順序)"""
    by_date = bucket_by_date(read_commit_lines(text))
    return {
        date: group_messages(date, messages, ticket_prefix, is_feature_name)
        for date, messages in by_date.items()
    }
