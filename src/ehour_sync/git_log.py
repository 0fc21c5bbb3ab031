"""
Git log 擷取

輸入格式為每行 `YYYY-MM-DD: commit 訊息`，可由下列指令產生:

    git log --date=short --pretty=format:"%ad: %s"
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .models import CommitLine

logger = logging.getLogger(__name__)

COMMIT_LINE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2}):\s*(.+)$")
MERGE_COMMIT_RE = re.compile(r"^Merge (branch|remote-tracking branch)", re.IGNORECASE)

GIT_LOG_FORMAT = "%ad: %s"


class GitLogError(RuntimeError):
    """git log 執行失敗"""


def is_merge_commit(message: str) -> bool:
    return MERGE_COMMIT_RE.match(message) is not None


def read_commit_lines(text: str) -> Iterator[CommitLine]:
    """
    逐行比對 `DATE: 訊息`，略過格式不符的行；merge commit 仍會保留

    行首不可有空白，行尾空白會被忽略。
    """
    skipped = 0
    for line in text.splitlines():
        match = COMMIT_LINE_RE.match(line.rstrip())
        if match:
            yield CommitLine(date=match.group(1), message=match.group(2))
        elif line.strip():
            skipped += 1
    if skipped:
        logger.debug(f"Skipped {skipped} unrecognized lines")


def extract_commit_lines(text: str) -> list[CommitLine]:
    """解析 git log 文字，略過格式不符的行與 merge commit"""
    return [c for c in read_commit_lines(text) if not is_merge_commit(c.message)]


def bucket_by_date(commits: Iterable[CommitLine]) -> dict[str, list[str]]:
    """
    按日期分組，保留原始順序 (日期尚未排序)

    只有 merge commit 的日期仍會保留 (訊息列表為空)，
    輸出 report 時會成為 General work。
    """
    by_date: dict[str, list[str]] = {}
    merges = 0
    for commit in commits:
        messages = by_date.setdefault(commit.date, [])
        if is_merge_commit(commit.message):
            merges += 1
            continue
        messages.append(commit.message)
    if merges:
        logger.debug(f"Dropped {merges} merge commits")
    return by_date


def collect_git_log(
    repo_path: str | Path = ".",
    since: Optional[str] = None,
    until: Optional[str] = None,
    author: Optional[str] = None,
) -> str:
    """
    從本地 git repo 取得 `DATE: 訊息` 格式的 log

    Args:
        repo_path: repo 路徑
        since: 開始日期 (YYYY-MM-DD，含)
        until: 結束日期 (YYYY-MM-DD，含)
        author: 作者篩選 (git --author 語法)

    Returns:
        每行一筆 commit 的文字，新到舊
    """
    cmd = ["git", "log", "--date=short", f"--pretty=format:{GIT_LOG_FORMAT}"]
    if since:
        cmd.append(f"--since={since} 00:00")
    if until:
        cmd.append(f"--until={until} 23:59:59")
    if author:
        cmd.append(f"--author={author}")

    logger.debug(f"Running {' '.join(cmd)} in {repo_path}")
    try:
        result = subprocess.run(
            cmd,
            cwd=str(repo_path),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError as e:
        raise GitLogError(f"git executable not found: {e}") from e

    if result.returncode != 0:
        raise GitLogError(result.stderr.strip() or "git log failed")
    return result.stdout
