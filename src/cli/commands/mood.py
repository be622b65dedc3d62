"""Mood scoring commands (nothing is saved)."""

import sys

import click
from rich.console import Console

from cli.commands.entries import print_mood
from cli.utils import get_components, get_scorer, require_session
from journal.stats import today_entries

console = Console()


@click.command()
@click.argument("text")
def analyze(text: str):
    """Score TEXT without saving it."""
    c = get_components(wait_ready=False)
    session = require_session(c)

    try:
        with console.status("Analyzing mood..."):
            analysis = get_scorer(c, session.user_id).score(text)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)
    print_mood(analysis.mood_score, analysis.analysis, analysis.source)
    if analysis.emotions:
        console.print(f"[dim]Emotions: {', '.join(analysis.emotions)}[/]")


@click.command()
def today():
    """Score today's entries combined."""
    c = get_components()
    session = require_session(c)

    todays = today_entries(c["store"].get_user_entries(session.user_id))
    if not todays:
        console.print("[yellow]No entries today.[/]")
        return

    with console.status(f"Analyzing {len(todays)} entries..."):
        analysis = get_scorer(c, session.user_id).analyze_today(todays)
    if analysis is None:
        console.print("[yellow]No entries today.[/]")
        return
    console.print(f"[bold]Today[/] [dim]({len(todays)} entries)[/]")
    print_mood(analysis.mood_score, analysis.analysis, analysis.source)
