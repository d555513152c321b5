"""Command-line interface for Mock Interview."""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from mock_interview.config import settings
from mock_interview.core.errors import InterviewError
from mock_interview.interview.analyzer import analyze as analyze_response
from mock_interview.interview.service import InterviewService
from mock_interview.utils.logging import configure_logging

app = typer.Typer(
    name="mock-interview",
    help="Mock Interview - heuristic scoring for interview practice",
    add_completion=False,
)
console = Console()


@app.callback()
def setup(
    log_level: str = typer.Option("WARNING", help="Log level for structured logs"),
) -> None:
    configure_logging(log_level)


@app.command()
def analyze(
    answer: str = typer.Argument(..., help="Answer text to score"),
    question: str = typer.Option("", "--question", "-q", help="Question the answer responds to"),
    category: str = typer.Option("communication", "--category", "-c", help="Question category"),
    session_type: Optional[str] = typer.Option(None, "--session-type", "-t", help="Interview session type"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw analysis as JSON"),
) -> None:
    """Score a single answer."""
    result = analyze_response(answer, question, category, session_type)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    table = Table(title="Answer Analysis")
    table.add_column("Dimension", style="cyan")
    table.add_column("Score", style="green", justify="right")

    table.add_row("Overall", f"{result.score:.1f}")
    table.add_row("Completeness", f"{result.completeness:.1f}")
    table.add_row("Clarity", f"{result.clarity:.1f}")
    table.add_row("Relevance", f"{result.relevance:.1f}")
    table.add_row("Confidence", f"{result.confidence:.1f}")
    table.add_row("Structure", f"{result.structure_score:.1f}")
    table.add_row("Sentiment", f"{result.sentiment_score:+.1f}")

    console.print(table)
    if result.keyword_matches:
        console.print(f"Matched keywords: {', '.join(result.keyword_matches)}")
    for insight in result.insights:
        console.print(f"• {insight}")


@app.command()
def practice(
    session_type: str = typer.Option("behavioral", "--type", "-t", help="Interview session type"),
    difficulty: str = typer.Option(settings.default_difficulty, "--difficulty", "-d", help="Question difficulty"),
    count: int = typer.Option(settings.default_question_count, "--count", "-n", help="Number of questions"),
    role: Optional[str] = typer.Option(None, "--role", "-r", help="Target role"),
    hints: bool = typer.Option(False, "--hints", help="Show question tips"),
) -> None:
    """Run an interactive practice interview against the built-in question bank."""
    config = {
        "session_type": session_type,
        "difficulty": difficulty,
        "question_count": count,
        "target_role": role,
        "show_hints": hints,
    }
    try:
        asyncio.run(_practice(config))
    except InterviewError as e:
        console.print(f"[red]❌ {e.message}[/red] ({e.code})")
        raise typer.Exit(code=1)


async def _practice(config: dict) -> None:
    service = InterviewService()
    started = await service.start_interview("cli-user", config)
    session_id = started["session_id"]
    console.print(Panel(f"{started['title']} ({started['difficulty']})", title="🎯 Mock Interview"))

    while True:
        step = await service.get_next_question(session_id)
        question = step["question"]
        if question is None:
            break

        progress = step["progress"]
        console.print(f"\n[bold]Question {progress['answered'] + 1}/{progress['total']}[/bold]")
        console.print(question["question"])
        if question.get("tip"):
            console.print(f"[dim]Tip: {question['tip']}[/dim]")

        answer = typer.prompt("Your answer", default="", show_default=False)
        result = await service.submit_answer(session_id, question["question_id"], answer)
        console.print(f"Score: [green]{result['score']}/10[/green]")
        for insight in result["insights"]:
            console.print(f"  • {insight}")

    completed = await service.complete_interview(session_id)
    feedback = completed["feedback"]

    console.print(Panel(feedback["overall"], title=f"Overall score: {completed['overall_score']}%"))

    table = Table(title="Feedback")
    table.add_column("Dimension", style="cyan")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Feedback")
    for key, label in (
        ("communication", "Communication"),
        ("technical_accuracy", "Technical accuracy"),
        ("confidence", "Confidence"),
        ("problem_solving", "Problem solving"),
    ):
        table.add_row(label, str(feedback[key]["score"]), feedback[key]["feedback"])
    console.print(table)

    console.print("\n[bold]Next steps[/bold]")
    for step in feedback["next_steps"]:
        console.print(f"• {step}")


@app.command()
def config() -> None:
    """Show current configuration."""
    table = Table(title="Mock Interview Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Log Level", settings.log_level)
    table.add_row("Max Retries", str(settings.max_retries))
    table.add_row("Default Difficulty", settings.default_difficulty)
    table.add_row(
        "Question Count",
        f"{settings.default_question_count} ({settings.min_question_count}-{settings.max_question_count})",
    )
    table.add_row("Time Limit (min)", str(settings.default_time_limit_minutes))
    table.add_row("Idle Timeout (min)", str(settings.session_idle_timeout_minutes))
    table.add_row("History Page Limit", str(settings.history_page_limit))

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from mock_interview import __version__
    console.print(f"Mock Interview v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
