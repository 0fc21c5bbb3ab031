#!/usr/bin/env python3
"""
eHour Sync CLI

將 git log 轉為 daily report，預覽並匯出給 eHour 自動填寫使用
使用 Typer + Rich 提供互動介面
"""

import json
import logging
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from .config import CONFIG_FILE, Config
from .entries import Selection, SelectionStatus, render_preview, select_entries, to_timesheet_payload
from .formatter import ensure_canonical, reformat_git_log
from .git_log import GitLogError, collect_git_log

app = typer.Typer(
    name="ehour",
    help="將 git log 轉為 eHour 工時記錄",
    no_args_is_help=True,
)
console = Console()


def get_month_range(reference_date: Optional[str] = None) -> tuple[str, str]:
    """獲取指定日期所在月份的範圍 (1 日到月底)"""
    if reference_date:
        ref = datetime.strptime(reference_date, '%Y-%m-%d')
    else:
        ref = datetime.now()
    first_day = ref.replace(day=1)
    next_month = (first_day + timedelta(days=32)).replace(day=1)
    last_day = next_month - timedelta(days=1)
    return first_day.strftime('%Y-%m-%d'), last_day.strftime('%Y-%m-%d')


def resolve_range(from_date: Optional[str], to_date: Optional[str]) -> tuple[str, str]:
    """補齊日期範圍，預設為本月"""
    month_start, month_end = get_month_range()
    start = from_date or month_start
    end = to_date or month_end
    for value in (start, end):
        try:
            datetime.strptime(value, '%Y-%m-%d')
        except ValueError:
            console.print(f"[red]無效的日期: {value} (格式 YYYY-MM-DD)[/red]")
            raise typer.Exit(code=1)
    return start, end


def read_text(path: Path) -> str:
    if not path.exists():
        console.print(f"[red]找不到檔案: {path}[/red]")
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8")


def load_selection(config: Config, report: Path, start: str, end: str) -> Selection:
    """讀取 report (或原始 git log) 並篩選日期範圍，沒有資料時結束"""
    text = ensure_canonical(
        read_text(report),
        ticket_prefix=config.ticket_prefix,
        hours=config.default_hours,
        is_feature_name=config.get_classifier(),
    )
    selection = select_entries(text, start, end, config.ticket_prefix)

    if not selection.has_entries:
        if selection.status == SelectionStatus.EMPTY_RESULT:
            console.print("[yellow]report 中沒有有效的記錄[/yellow]")
        else:
            console.print(f"[yellow]{start} ~ {end} 範圍內沒有記錄[/yellow] "
                          f"[dim](共解析 {selection.total_parsed} 筆)[/dim]")
        raise typer.Exit(code=1)
    return selection


def display_entries_table(selection: Selection):
    """以表格顯示每日記錄"""
    table = Table(title="📋 工時記錄")
    table.add_column("日期", style="green")
    table.add_column("時數", style="magenta", justify="right")
    table.add_column("Tickets", style="cyan")
    table.add_column("描述", max_width=50)
    table.add_column("子任務", style="dim", justify="right")

    for entry in selection.entries:
        table.add_row(
            entry.date,
            f"{entry.hours}h",
            ", ".join(entry.tasks) or "-",
            escape(entry.description or "General work"),
            str(len(entry.subtasks)),
        )

    console.print(table)
    total_hours = sum(e.hours for e in selection.entries)
    console.print(f"\n[bold]共 {len(selection.entries)} 筆[/bold] "
                  f"[dim]({total_hours}h，解析 {selection.total_parsed} 筆)[/dim]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="顯示除錯訊息"),
):
    """eHour Sync - git log → daily report → eHour"""
    if verbose or Config.load().debug_mode:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def reformat(
    input_file: Path = typer.Argument(..., help="git log 檔案 (每行 YYYY-MM-DD: 訊息)"),
    output_file: Optional[Path] = typer.Argument(None, help="輸出檔案，預設為 <輸入>_reformatted.txt"),
):
    """將 git log 轉為 daily report"""
    config = Config.load()
    text = read_text(input_file)

    report = reformat_git_log(
        text,
        ticket_prefix=config.ticket_prefix,
        hours=config.default_hours,
        is_feature_name=config.get_classifier(),
    )
    if not report:
        console.print("[yellow]沒有找到任何 commit 記錄[/yellow]")
        raise typer.Exit(code=1)

    if output_file is None:
        output_file = input_file.with_name(f"{input_file.stem}_reformatted.txt")
    output_file.write_text(report, encoding="utf-8")
    console.print(f"[green]✓ Reformatted git log saved to {output_file}[/green]")


@app.command()
def collect(
    repo: Path = typer.Option(Path("."), "--repo", "-r", help="git repo 路徑"),
    from_date: Optional[str] = typer.Option(None, "--from", help="開始日期，預設本月 1 日"),
    to_date: Optional[str] = typer.Option(None, "--to", help="結束日期，預設本月底"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="只取此作者的 commit"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="輸出檔案，未指定則印出"),
    raw: bool = typer.Option(False, "--raw", help="輸出原始 git log，不轉換格式"),
):
    """從 git repo 取得 commit 並產生 daily report"""
    config = Config.load()
    start, end = resolve_range(from_date, to_date)

    try:
        log_text = collect_git_log(repo, since=start, until=end, author=author)
    except GitLogError as e:
        console.print(f"[red]✗ git log 失敗: {e}[/red]")
        raise typer.Exit(code=1)

    text = log_text if raw else reformat_git_log(
        log_text,
        ticket_prefix=config.ticket_prefix,
        hours=config.default_hours,
        is_feature_name=config.get_classifier(),
    )
    if not text.strip():
        console.print(f"[yellow]{start} ~ {end} 沒有 commit 記錄[/yellow]")
        raise typer.Exit(code=1)

    if output:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]✓ 已儲存到 {output}[/green]")
    else:
        console.print(text, markup=False, highlight=False)


@app.command()
def preview(
    report: Path = typer.Argument(..., help="daily report 檔案 (或原始 git log)"),
    from_date: Optional[str] = typer.Option(None, "--from", help="開始日期，預設本月 1 日"),
    to_date: Optional[str] = typer.Option(None, "--to", help="結束日期，預設本月底"),
    table: bool = typer.Option(False, "--table", "-t", help="以表格顯示"),
):
    """預覽日期範圍內的工時記錄"""
    config = Config.load()
    start, end = resolve_range(from_date, to_date)
    selection = load_selection(config, report, start, end)

    if table:
        display_entries_table(selection)
        return

    console.print(Panel(
        Text(render_preview(selection.entries)),
        title=f"{start} ~ {end}",
        expand=False,
    ))
    console.print(f"[green]✓ Parsed {len(selection.entries)} entries successfully![/green]")


@app.command()
def export(
    report: Path = typer.Argument(..., help="daily report 檔案 (或原始 git log)"),
    from_date: Optional[str] = typer.Option(None, "--from", help="開始日期，預設本月 1 日"),
    to_date: Optional[str] = typer.Option(None, "--to", help="結束日期，預設本月底"),
    output: Path = typer.Option(Path("timesheet.json"), "--output", "-o", help="輸出 JSON 檔案"),
):
    """匯出工時記錄 JSON，供 eHour 頁面自動填寫"""
    config = Config.load()
    start, end = resolve_range(from_date, to_date)
    selection = load_selection(config, report, start, end)

    payload = to_timesheet_payload(selection.entries, last_parsed=int(time.time() * 1000))
    payload["settings"] = {
        "defaultProject": config.default_project,
        "autoSubmit": config.auto_submit,
    }
    with open(output, 'w', encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    console.print(f"[green]✓ 已匯出 {len(selection.entries)} 筆記錄到 {output}[/green]")


@app.command()
def setup():
    """互動式設定"""
    config = Config.load()

    console.print(Panel.fit("[bold]eHour Sync 設定[/bold]", title="⚙️"))

    config.ticket_prefix = Prompt.ask("Ticket 前綴", default=config.ticket_prefix).strip()
    config.default_hours = IntPrompt.ask("每日預設工時", default=config.default_hours)
    config.default_project = Prompt.ask("eHour 預設專案", default=config.default_project)
    config.auto_submit = Confirm.ask("填寫後自動儲存?", default=config.auto_submit)
    config.debug_mode = Confirm.ask("顯示除錯訊息?", default=config.debug_mode)

    if Confirm.ask("編輯動作動詞列表?", default=False):
        verbs = Prompt.ask("動詞 (以逗號分隔)", default=", ".join(config.action_verbs))
        config.action_verbs = [v.strip().lower() for v in verbs.split(",") if v.strip()]

    if config.default_hours < 0:
        console.print("[red]工時不可為負數[/red]")
        raise typer.Exit(code=1)

    config.save()
    console.print(f"[green]✓ 設定已儲存到 {CONFIG_FILE}[/green]")


@app.command("config")
def show_config():
    """顯示目前設定"""
    config = Config.load()

    table = Table(title="eHour Sync 設定", show_header=False)
    table.add_column("項目", style="cyan")
    table.add_column("值")
    table.add_row("Ticket 前綴", config.ticket_prefix)
    table.add_row("每日預設工時", str(config.default_hours))
    table.add_row("預設專案", config.default_project or "[dim]未設定[/dim]")
    table.add_row("自動儲存", "✓" if config.auto_submit else "✗")
    table.add_row("除錯模式", "✓" if config.debug_mode else "✗")
    table.add_row("動作動詞", ", ".join(config.action_verbs))
    console.print(table)
    console.print(f"[dim]{CONFIG_FILE}[/dim]")


if __name__ == "__main__":
    app()
