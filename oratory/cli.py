"""
oratory.cli - Typer CLI entry point.

Provides all subcommands for analyzing speech delivery and managing
stored sessions.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from oratory import __version__
from oratory.config import OratoryConfig, load_config
from oratory.exceptions import (
    DependencyError,
    InvalidInputError,
    MalformedResponseError,
    NotFoundError,
)
from oratory.logging import configure_logging
from oratory.store import SessionStore
from oratory.utils import format_duration, get_score_style, truncate
from oratory.workspace import Workspace, find_workspace_dir

app = typer.Typer(
    name="oratory",
    help="Speech delivery analysis toolkit.\n\n"
    "Transcribes recordings and reports on pacing, filler words, pauses and "
    "clarity with actionable feedback.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"oratory {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Oratory - speech delivery analysis toolkit."""
    configure_logging(verbose)


def require_workspace() -> tuple[Workspace, OratoryConfig]:
    workspace_dir = find_workspace_dir()
    if not workspace_dir:
        console.print("[red]Error: Not in an Oratory workspace[/red]")
        console.print("[dim]Run 'oratory init' first or cd into a workspace directory[/dim]")
        raise typer.Exit(1)

    workspace = Workspace(workspace_dir)
    try:
        config = load_config(workspace_dir)
    except ValueError as e:
        console.print(f"[red]Error: Invalid configuration: {e}[/red]")
        raise typer.Exit(1)
    return workspace, config


def fail(message: str, hint: str | None = None) -> NoReturn:
    console.print(f"[red]Error: {message}[/red]")
    if hint:
        console.print(f"[dim]{hint}[/dim]")
    raise typer.Exit(1)


def print_key_metrics(metrics: dict[str, Any], quality_score: float | None) -> None:
    table = Table(title="Key Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Duration", format_duration(metrics.get("duration_seconds", 0)))
    table.add_row("Words", str(metrics.get("total_words", 0)))
    table.add_row("Words per minute", f"{metrics.get('words_per_minute', 0):.1f}")
    table.add_row("Filler words", f"{metrics.get('filler_percentage', 0):.2f}%")
    table.add_row("Time in pauses", f"{metrics.get('pause_percentage', 0):.2f}%")
    table.add_row("Confidence", f"{metrics.get('average_confidence', 0) * 100:.0f}%")
    if quality_score is not None:
        style = get_score_style(quality_score)
        table.add_row("Quality score", f"[{style}]{quality_score:.2f}[/{style}]")

    console.print(table)


def print_fillers(statistics: dict[str, Any]) -> None:
    top = statistics.get("top_fillers", [])
    if not top:
        console.print("[dim]No filler words detected[/dim]")
        return

    table = Table(title="Most Common Fillers")
    table.add_column("Filler", style="cyan")
    table.add_column("Count", style="green", justify="right")
    table.add_column("% of words", justify="right")
    for filler in top:
        table.add_row(filler["form"], str(filler["count"]), f"{filler['percentage']:.2f}")
    console.print(table)


def print_feedback(feedback: dict[str, Any]) -> None:
    for item in feedback.get("positive", []):
        console.print(f"[green]✓ {item['dimension']}:[/green] {item['message']}")
        console.print(f"  [dim]{item['suggestion']}[/dim]")
    for item in feedback.get("improvements", []):
        console.print(f"[yellow]✗ {item['dimension']}:[/yellow] {item['message']}")
        console.print(f"  [dim]{item['suggestion']}[/dim]")


# Workspace


@app.command("init")
def init_workspace(
    name: str = typer.Argument(..., help="Workspace name"),
    language: str = typer.Option("en", "--language", "-l", help="Default language: en or es"),
    path: str = typer.Option(".", "--path", "-d", help="Directory to create workspace in"),
) -> None:
    """Create a new Oratory workspace with configuration and a session store."""
    from oratory.validation import validate_language

    workspace_path = Path(path) / name

    if workspace_path.exists():
        fail(f"Directory '{workspace_path}' already exists")

    try:
        validate_language(language)
    except InvalidInputError as e:
        fail(str(e))

    workspace = Workspace(workspace_path)
    workspace.create(language=language)

    console.print(f"[green]✓[/green] Created workspace '{name}'")
    console.print(f"[dim]  {workspace_path}[/dim]")
    console.print("\nNext steps:")
    console.print(f"  cd {name}")
    console.print("  export DEEPGRAM_API_KEY=<your key>")
    console.print("  oratory transcribe <audio_file> --user <user_id>")


# Analysis


@app.command("analyze")
def analyze_response(
    response_file: Path = typer.Argument(..., help="Saved speech-to-text JSON response"),
    language: str = typer.Option("en", "--language", "-l", help="Language: en or es"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write analysis JSON"),
    parallel: bool = typer.Option(
        False, "--parallel", help="Run pause and filler analysis concurrently"
    ),
) -> None:
    """Analyze a saved transcription response without calling the provider."""
    from oratory.analyze.engine import analyze_transcription
    from oratory.io import read_json, write_json
    from oratory.transcribe.normalize import normalize_response

    thresholds = None
    workspace_dir = find_workspace_dir()
    if workspace_dir:
        try:
            thresholds = load_config(workspace_dir).feedback
        except ValueError as e:
            fail(f"Invalid configuration: {e}")

    try:
        payload = read_json(response_file)
    except FileNotFoundError:
        fail(f"File not found: {response_file}")
    except json.JSONDecodeError as e:
        fail(f"Invalid JSON in {response_file}: {e}")

    try:
        record = normalize_response(payload, language)
    except (InvalidInputError, MalformedResponseError) as e:
        fail(str(e))

    analysis = analyze_transcription(record, thresholds, parallel=parallel)
    data = analysis.to_dict()

    console.print(f"[cyan]Transcript:[/cyan] {truncate(record.transcript, 200)}\n")
    print_key_metrics(data["key_metrics"], data["quality_score"])
    print_fillers(data["filler_details"])
    console.print()
    print_feedback(data["feedback"])

    if output:
        write_json(output, data)
        console.print(f"\n[green]✓[/green] Analysis written to {output}")


@app.command("transcribe")
def transcribe_audio(
    audio_file: Path = typer.Argument(..., help="Audio file to analyze"),
    user: str = typer.Option(..., "--user", "-u", help="Owner of the session"),
    language: str | None = typer.Option(
        None, "--language", "-l", help="Language: en or es (workspace default if not set)"
    ),
    mime_type: str | None = typer.Option(
        None, "--mime-type", "-m", help="Audio MIME type (guessed from extension if not set)"
    ),
    parallel: bool = typer.Option(
        False, "--parallel", help="Run pause and filler analysis concurrently"
    ),
) -> None:
    """Transcribe a recording, analyze the delivery and store the session."""
    from oratory.sessions import SessionService
    from oratory.transcribe.engine import create_transcriber_from_config
    from oratory.validation import guess_mime_type

    workspace, config = require_workspace()

    if not audio_file.is_file():
        fail(f"File not found: {audio_file}")

    try:
        mime = mime_type or guess_mime_type(audio_file)
        transcriber = create_transcriber_from_config(config)
    except InvalidInputError as e:
        fail(str(e))
    except DependencyError as e:
        fail(str(e), e.hint)

    service = SessionService(transcriber, SessionStore(workspace.sessions_dir), config)

    console.print(f"[cyan]Transcribing {audio_file.name}...[/cyan]\n")

    try:
        result = service.create_session(
            audio_file.read_bytes(),
            mime,
            user_id=user,
            language=language,
            parallel=parallel,
        )
    except (InvalidInputError, MalformedResponseError) as e:
        fail(str(e))
    except DependencyError as e:
        fail(str(e), e.hint)
    finally:
        transcriber.close()

    console.print(f"[cyan]Transcript:[/cyan] {truncate(result['transcript'], 200)}\n")
    print_key_metrics(result["quality"], result["quality_score"])
    console.print()
    print_feedback(result["feedback"])
    console.print(f"\n[green]✓[/green] Saved session {result['session_id']}")


# Sessions


@app.command("sessions")
def list_sessions(
    user: str = typer.Option(..., "--user", "-u", help="Owner of the sessions"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum sessions to list"),
) -> None:
    """List a user's past sessions, newest first."""
    from oratory.sessions import SessionService

    workspace, config = require_workspace()
    service = SessionService(None, SessionStore(workspace.sessions_dir), config)

    try:
        sessions = service.list_sessions(user, limit)
    except DependencyError as e:
        fail(str(e), e.hint)

    if not sessions:
        console.print("[yellow]No sessions found.[/yellow]")
        return

    table = Table(title=f"Sessions for {user}")
    table.add_column("Session", style="cyan")
    table.add_column("Created")
    table.add_column("Lang")
    table.add_column("WPM", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Transcript", style="dim")

    for session in sessions:
        summary = session.get("quality_summary", {})
        score = summary.get("quality_score")
        score_text = "-"
        if score is not None:
            style = get_score_style(score)
            score_text = f"[{style}]{score:.1f}[/{style}]"
        table.add_row(
            session["session_id"],
            session.get("created_at", "")[:19].replace("T", " "),
            session.get("language") or "-",
            f"{summary.get('wpm', 0):.0f}",
            score_text,
            truncate(session.get("transcript", ""), 40),
        )

    console.print(table)


@app.command("show")
def show_session(
    session_id: str = typer.Argument(..., help="Session ID"),
    user: str = typer.Option(..., "--user", "-u", help="Owner of the session"),
) -> None:
    """Show the stored analysis of one session."""
    from oratory.sessions import SessionService

    workspace, config = require_workspace()
    service = SessionService(None, SessionStore(workspace.sessions_dir), config)

    try:
        session = service.get_session(session_id, user)
    except NotFoundError:
        fail("Session not found")
    except DependencyError as e:
        fail(str(e), e.hint)

    transcription = session["transcription"]
    quality = session["analysis"].get("quality") or {}
    fillers = session["analysis"].get("fillers") or {}

    console.print(f"[cyan]Session:[/cyan] {session_id} ({transcription.get('language')})")
    console.print(f"[cyan]Transcript:[/cyan] {transcription.get('transcript', '')}\n")

    if quality:
        print_key_metrics(quality.get("key_metrics", {}), quality.get("quality_score"))
    if fillers:
        print_fillers(fillers.get("statistics", {}))
    if quality:
        console.print()
        print_feedback(quality.get("feedback", {}))


@app.command("delete")
def delete_session(
    session_id: str = typer.Argument(..., help="Session ID"),
    user: str = typer.Option(..., "--user", "-u", help="Owner of the session"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a session and all of its analysis."""
    from oratory.sessions import SessionService

    workspace, config = require_workspace()
    service = SessionService(None, SessionStore(workspace.sessions_dir), config)

    if not yes and not typer.confirm(f"Delete session {session_id}?"):
        raise typer.Exit(0)

    try:
        service.delete_session(session_id, user)
    except NotFoundError:
        fail("Session not found")
    except DependencyError as e:
        fail(str(e), e.hint)

    console.print(f"[green]✓[/green] Deleted session {session_id}")


# Reference


@app.command("fillers")
def show_fillers(
    language: str = typer.Option("en", "--language", "-l", help="Language: en or es"),
) -> None:
    """Show the filler words and phrases detected for a language."""
    from oratory.analyze.fillers import FILLER_LEXICONS, get_lexicon

    if language not in FILLER_LEXICONS:
        console.print(f"[yellow]No lexicon for '{language}', showing English[/yellow]")

    lexicon = get_lexicon(language)

    table = Table(title=f"Filler Lexicon ({language})")
    table.add_column("Type", style="cyan")
    table.add_column("Entries")
    table.add_row("Words", ", ".join(sorted(lexicon.unigrams)))
    table.add_row("Phrases", ", ".join(sorted(lexicon.bigrams)))
    console.print(table)


@app.command("doctor")
def run_doctor() -> None:
    """Check configuration, API credentials and session store access."""
    from oratory.validation import check_api_key, check_store_writable

    console.print("[cyan]Running preflight checks...[/cyan]\n")

    table = Table(title="Environment Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Details")

    all_passed = True

    workspace_dir = find_workspace_dir()
    config = OratoryConfig()
    if workspace_dir:
        try:
            config = load_config(workspace_dir)
            table.add_row("Config", "✓ Valid", str(config.config_path))
        except ValueError as e:
            table.add_row("Config", "✗ Invalid", str(e))
            all_passed = False
    else:
        table.add_row("Config", "—", "Not in a workspace (using defaults)")

    try:
        key = check_api_key(config.deepgram_api_key_env)
        table.add_row("Deepgram key", "✓ Set", f"{key['env_var']} ({key['masked']})")
    except DependencyError as e:
        table.add_row("Deepgram key", "✗ Missing", e.hint or e.message)
        all_passed = False

    if workspace_dir:
        try:
            store = check_store_writable(Workspace(workspace_dir).sessions_dir)
            table.add_row("Session store", "✓ Writable", f"{store['sessions']} session(s)")
        except DependencyError as e:
            table.add_row("Session store", "✗ Error", e.message)
            all_passed = False

    console.print(table)

    if all_passed:
        console.print("\n[green]✓ All checks passed[/green]")
    else:
        console.print("\n[yellow]⚠ Some checks failed[/yellow]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
