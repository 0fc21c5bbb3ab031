"""eHour Sync - Turn git commit logs into eHour timesheet entries."""

__version__ = "0.1.0"

from .classifier import FeatureNameClassifier
from .config import Config
from .entries import (
    Selection,
    SelectionStatus,
    build_comment,
    filter_by_date_range,
    render_preview,
    select_entries,
)
from .formatter import ensure_canonical, format_report, reformat_git_log
from .git_log import bucket_by_date, collect_git_log, extract_commit_lines, read_commit_lines
from .grouper import group_git_log, group_messages
from .models import CommitLine, DailyEntry, DayGroups, TicketGroup
from .report_parser import ReportParser, parse_report

__all__ = [
    "FeatureNameClassifier",
    "Config",
    "Selection",
    "SelectionStatus",
    "build_comment",
    "filter_by_date_range",
    "render_preview",
    "select_entries",
    "ensure_canonical",
    "format_report",
    "reformat_git_log",
    "collect_git_log",
    "read_commit_lines",
    "extract_commit_lines",
    "bucket_by_date",
    "group_git_log",
    "group_messages",
    "CommitLine",
    "DailyEntry",
    "DayGroups",
    "TicketGroup",
    "ReportParser",
    "parse_report",
]
