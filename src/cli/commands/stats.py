"""Statistics commands: stats, chart, calendar."""

from datetime import date

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, require_session
from journal.advice import mood_emoji
from journal.stats import calendar_month, compute_stats, entries_on_day, monthly_averages

console = Console()

BAR_WIDTH = 5  # cells per mood point


def _bar(value: float | None) -> str:
    if value is None:
        return "[dim]·[/]"
    cells = round(value * BAR_WIDTH)
    style = "red" if value < 2.5 else "yellow" if value < 3.5 else "green"
    return f"[{style}]{'█' * cells}[/]"


@click.command()
def stats():
    """Show total entries, average mood, and current streak."""
    c = get_components()
    session = require_session(c)

    s = compute_stats(c["store"].get_user_entries(session.user_id))
    table = Table(show_header=False, box=None)
    table.add_column(style="bold")
    table.add_column(justify="right")
    table.add_row("Total entries", str(s["total_entries"]))
    table.add_row("Average mood", str(s["average_mood"]))
    table.add_row("Current streak", f"{s['streak']} day{'s' if s['streak'] != 1 else ''}")
    console.print(table)


@click.command()
@click.option("-m", "--months", type=click.IntRange(1, 120), help="Months to show")
def chart(months: int):
    """Average mood per month (empty months shown as gaps)."""
    c = get_components()
    session = require_session(c)

    months = months or c["config_model"].stats.months_back
    data = monthly_averages(c["store"].get_user_entries(session.user_id), date.today(), months)

    table = Table(show_header=True, title="Monthly average mood")
    table.add_column("Month", style="cyan")
    table.add_column("Avg", justify="right")
    table.add_column("")
    for label, value in zip(data["labels"], data["values"]):
        table.add_row(label, "-" if value is None else f"{value:.2f}", _bar(value))
    console.print(table)


@click.command()
@click.option("--year", type=int, help="Year (defaults to session cursor)")
@click.option("--month", type=click.IntRange(1, 12), help="Month (defaults to session cursor)")
@click.option("--prev", "step", flag_value=-1, help="Move cursor back one month")
@click.option("--next", "step", flag_value=1, help="Move cursor forward one month")
@click.option("-d", "--day", type=click.DateTime(formats=["%Y-%m-%d"]), help="Select a day and list its entries")
@click.option("--clear-day", is_flag=True, help="Clear the selected day")
def calendar(year: int, month: int, step: int, day, clear_day: bool):
    """Month calendar with markers on days that have entries."""
    c = get_components()
    session = require_session(c)

    if year or month:
        session.calendar_year = year or session.calendar_year
        session.calendar_month = month or session.calendar_month
    if step == -1:
        session.prev_month()
    elif step == 1:
        session.next_month()
    if clear_day:
        session.clear_selection()
    if day:
        session.select_date(day.date())
    c["session_file"].save(session)

    entries = c["store"].get_user_entries(session.user_id)
    cal = calendar_month(entries, session.calendar_year, session.calendar_month)
    today = date.today()

    table = Table(title=cal.title, show_lines=False)
    for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"):
        table.add_column(name, justify="center")

    for week in cal.weeks():
        cells = []
        for d in week:
            text = str(d.day)
            if d.has_entries:
                text += " [magenta]●[/]"
            if not d.in_month:
                text = f"[dim]{text}[/]"
            if d.date == session.selected_date:
                text = f"[reverse]{text}[/]"
            elif d.date == today:
                text = f"[bold underline]{text}[/]"
            cells.append(text)
        table.add_row(*cells)
    console.print(table)

    if session.selected_date:
        picked = entries_on_day(entries, session.selected_date)
        console.print(f"\n[bold]{session.selected_date:%A, %B %d, %Y}[/]")
        if not picked:
            console.print("[dim]No entries. New entries will be filed under this day.[/]")
        for e in picked:
            console.print(f"{mood_emoji(e.mood)} [dim]{e.created_at:%H:%M}[/] {e.text}")
