"""
learnhub: Developer CLI for the scheduling engines.

Replays exported student data through the engines so their decisions can
be inspected from a terminal.

Commands:
- learnhub replay   - Feed an answer log through the difficulty engine
- learnhub queue    - Preview the next vocabulary review batch
- learnhub stats    - Show vocabulary study statistics
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from config import get_settings
from learnhub.adaptive import (
    create_initial_state,
    difficulty_label,
    record_answer,
    should_level_down,
    should_level_up,
)
from learnhub.core import PerformanceRecord, SchedulerError, VocabularyProgress
from learnhub.vocabulary import compute_study_stats, interval_label, quality_from_response, select_due_words

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="learnhub",
    help="learnhub: inspect difficulty adaptation and vocabulary scheduling",
    no_args_is_help=True,
)
console = Console()


# =============================================================================
# Loading Helpers
# =============================================================================


def _load_items(path: Path, key: str) -> list[dict[str, Any]]:
    """Load a JSON list, either bare or wrapped under `key`."""
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    items = data if isinstance(data, list) else data.get(key, [])
    logger.debug(f"Loaded {len(items)} {key} from {path}")
    return items


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(code=1)


def _load_progress(path: Path) -> list[VocabularyProgress]:
    try:
        return [VocabularyProgress.from_dict(item) for item in _load_items(path, "progress")]
    except (OSError, json.JSONDecodeError, KeyError, ValueError) as e:
        _fail(f"Could not read progress from {path}: {e}")


# =============================================================================
# Commands
# =============================================================================


@app.command()
def replay(
    answers_file: Path = typer.Argument(..., help="JSON list of performance records"),
    start_level: Optional[int] = typer.Option(None, "--start-level", "-s", help="Starting difficulty (1-5)"),
) -> None:
    """Replay an answer log through the difficulty engine."""
    settings = get_settings()

    try:
        records = [PerformanceRecord.from_dict(item) for item in _load_items(answers_file, "answers")]
    except (OSError, json.JSONDecodeError, KeyError, ValueError) as e:
        _fail(f"Could not read answers from {answers_file}: {e}")

    state = create_initial_state(start_level if start_level is not None else settings.default_start_level)

    table = Table(title=f"Replay from {difficulty_label(state.current_difficulty)}")
    table.add_column("#", justify="right")
    table.add_column("Content")
    table.add_column("Result")
    table.add_column("Quality", justify="right")
    table.add_column("Streak")
    table.add_column("Recommended")
    table.add_column("Hint")
    table.add_column("Gate")
    table.add_column("Encouragement")

    for index, record in enumerate(records, start=1):
        try:
            state = record_answer(state, record)
        except SchedulerError as e:
            _fail(f"Answer {index}: {e}")

        streak = (
            f"[green]+{state.consecutive_correct}[/green]"
            if state.consecutive_correct
            else f"[red]-{state.consecutive_incorrect}[/red]"
        )
        gate = "up" if should_level_up(state) else "down" if should_level_down(state) else ""
        quality = quality_from_response(record.correct, record.response_time_ms, settings.expected_response_ms)
        table.add_row(
            str(index),
            record.content_id,
            "[bold green]correct[/bold green]" if record.correct else "[bold red]incorrect[/bold red]",
            str(quality),
            streak,
            f"{state.recommended_difficulty} {difficulty_label(state.recommended_difficulty)}",
            "yes" if state.show_hint else "",
            gate,
            state.encouragement or "",
        )

    console.print(table)
    rate = state.success_rate
    console.print(
        f"\nWindow: {state.window_length} answers, "
        f"success rate {'n/a' if rate is None else f'{rate:.0%}'}"
    )


@app.command()
def queue(
    progress_file: Path = typer.Argument(..., help="JSON list of vocabulary progress records"),
    max_words: Optional[int] = typer.Option(None, "--max-words", "-n", help="Batch size"),
) -> None:
    """Preview the next vocabulary review batch."""
    settings = get_settings()
    progress = _load_progress(progress_file)
    if max_words is None:
        max_words = settings.review_batch_size
    batch = select_due_words(progress, max_words=max_words)

    if not batch:
        console.print("[dim]Nothing to review.[/dim]")
        return

    table = Table(title="Review Queue")
    table.add_column("Word")
    table.add_column("Status")
    table.add_column("Ease", justify="right")
    table.add_column("Interval")
    table.add_column("Due")

    for item in batch:
        color = item.status.color
        table.add_row(
            item.word_id,
            f"[{color}]{item.status.display_name}[/{color}]",
            f"{item.ease_factor:.2f}",
            interval_label(item.interval),
            item.next_review_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@app.command()
def stats(
    progress_file: Path = typer.Argument(..., help="JSON list of vocabulary progress records"),
) -> None:
    """Show vocabulary study statistics."""
    result = compute_study_stats(_load_progress(progress_file))

    table = Table(title="Study Stats", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Total words", str(result.total_words))
    table.add_row("[blue]New[/blue]", str(result.new_words))
    table.add_row("[yellow]Learning[/yellow]", str(result.learning_words))
    table.add_row("[cyan]Review[/cyan]", str(result.review_words))
    table.add_row("[green]Mastered[/green]", str(result.mastered_words))
    table.add_row("Due today", str(result.due_today))
    table.add_row("Studied today", str(result.studied_today))
    table.add_row("Accuracy today", f"{result.accuracy_today}%")

    console.print(table)


# =============================================================================
# Entry Point
# =============================================================================

def main() -> None:
    """CLI entry point."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=get_settings().log_level,
        format="<level>{message}</level>",
    )

    app()


if __name__ == "__main__":
    main()
