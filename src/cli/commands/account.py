"""Account commands: signup, login, logout, whoami."""

import sys

import click
from rich.console import Console

from cli.utils import get_components

console = Console()


@click.command()
@click.option("--name", prompt=True, help="Display name")
@click.option("--email", prompt=True, help="Email address")
@click.password_option("--password", help="Password (min 6 chars)")
def signup(name: str, email: str, password: str):
    """Create an account and log in."""
    from web.auth import AccountError, create_account
    from web.user_store import DuplicateEmailError

    c = get_components(wait_ready=False)
    try:
        user = create_account(name, email, password, db_path=c["paths"]["users_db"])
    except (AccountError, DuplicateEmailError) as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)

    session = c["session_file"].load()
    session.login(user)
    c["session_file"].save(session)
    console.print(f"[green]Account created.[/] Welcome, {user['name']}!")


@click.command()
@click.option("--email", prompt=True, help="Email address")
@click.option("--password", prompt=True, hide_input=True, help="Password")
def login(email: str, password: str):
    """Log in with email and password."""
    from web.auth import authenticate

    c = get_components(wait_ready=False)
    user = authenticate(email, password, db_path=c["paths"]["users_db"])
    if not user:
        console.print("[red]Error:[/] Invalid email or password")
        sys.exit(1)

    session = c["session_file"].load()
    session.login(user)
    c["session_file"].save(session)
    console.print(f"[green]Logged in as[/] {user['name']} ({user['email']})")


@click.command()
def logout():
    """Log out and drop all session view state."""
    c = get_components(wait_ready=False)
    c["session_file"].clear()
    console.print("[green]Logged out.[/]")


@click.command()
def whoami():
    """Show the logged-in user."""
    c = get_components(wait_ready=False)
    session = c["session_file"].load()
    if not session.is_authenticated:
        console.print("[yellow]Not logged in.[/]")
        return
    console.print(f"{session.user.get('name')} ({session.user.get('email')})")
