"""Entry commands: write, history, clear."""

import sys
from datetime import date, datetime

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.utils import get_components, get_scorer, require_session
from journal.advice import get_mood_advice, mood_band, mood_emoji
from journal.stats import backdated_timestamp, sort_entries
from shared_types import MOOD_MAX, MOOD_MIN

console = Console()

BAND_STYLE = {"bad": "red", "neutral": "yellow", "good": "green"}


def print_mood(score: int, analysis: str | None = None, source: str | None = None) -> None:
    """Emoji + score line, optional analysis, then the advice panel."""
    style = BAND_STYLE[mood_band(score)]
    line = f"{mood_emoji(score)}  [bold {style}]Mood: {score}/5[/]"
    if source:
        line += f" [dim]({source})[/]"
    console.print(line)
    if analysis:
        console.print(analysis)
    advice = get_mood_advice(score)
    console.print(Panel("\n".join(advice.messages), title=advice.title, border_style=style))


@click.command()
@click.argument("text", required=False)
@click.option("-m", "--mood", type=click.IntRange(MOOD_MIN, MOOD_MAX), help="Mood score (skips scoring)")
@click.option("-d", "--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), help="File under this day (noon)")
@click.option("--yes", "-y", is_flag=True, help="Save without confirmation")
def write(text: str, mood: int, day: datetime, yes: bool):
    """Write an entry. Opens editor if no text provided."""
    c = get_components()
    session = require_session(c)

    target_day = day.date() if day else session.selected_date
    if target_day and target_day > date.today():
        console.print("[red]Error:[/] Entries cannot be dated in the future")
        sys.exit(1)

    if not text:
        text = click.edit("")
        if not text or not text.strip():
            console.print("[yellow]No content provided, cancelled.[/]")
            return
    text = text.strip()

    if mood is None:
        with console.status("Analyzing mood..."):
            analysis = get_scorer(c, session.user_id).score(text)
        mood = analysis.mood_score
        print_mood(mood, analysis.analysis, analysis.source)
    else:
        print_mood(mood)

    if not yes and not click.confirm("Save this entry?", default=True):
        console.print("[yellow]Not saved.[/]")
        return

    if day:
        created_at = backdated_timestamp(day.date())
    else:
        created_at = session.entry_timestamp()

    try:
        c["store"].add_entry(session.user_id, mood, text, created_at=created_at)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)
    console.print(f"[green]Saved[/] entry for {created_at:%Y-%m-%d}")


@click.command()
@click.option("--order", type=click.Choice(["asc", "desc"]), help="Sort order (defaults to session's)")
@click.option("--toggle", is_flag=True, help="Flip and remember the session sort order")
@click.option("-n", "--limit", default=20, help="Max entries to show")
def history(order: str, toggle: bool, limit: int):
    """List your entries."""
    c = get_components()
    session = require_session(c)

    if toggle:
        session.toggle_sort()
        c["session_file"].save(session)
    order = order or session.sort_order

    entries = sort_entries(c["store"].get_user_entries(session.user_id), order)
    if not entries:
        console.print("[yellow]No entries yet. Run 'moodlog write' to add one.[/]")
        return

    label = "newest first" if order == "desc" else "oldest first"
    table = Table(show_header=True, title=f"Entries ({label})")
    table.add_column("Date", style="cyan")
    table.add_column("Mood", justify="center")
    table.add_column("Entry")

    for e in entries[:limit]:
        preview = e.text.replace("\n", " ")
        if len(preview) > 60:
            preview = preview[:57] + "..."
        table.add_row(f"{e.created_at:%Y-%m-%d %H:%M}", f"{mood_emoji(e.mood)} {e.mood}", preview)

    console.print(table)
    if len(entries) > limit:
        console.print(f"[dim]{len(entries) - limit} more not shown (use -n)[/]")


@click.command()
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def clear(yes: bool):
    """Delete ALL of your entries. Cannot be undone."""
    c = get_components()
    session = require_session(c)

    if not yes and not click.confirm("Delete all your entries? This cannot be undone"):
        return

    deleted = c["store"].delete_all_entries(session.user_id)
    console.print(f"[green]Deleted[/] {deleted} entries")
