"""vindicate CLI: study sessions, queue inspection, settings and ratings."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from vindicate.application.config import resolve_config
from vindicate.domain.errors import VindicateError
from vindicate.domain.models import DirectionMode, Grade
from vindicate.domain.ratings import Demographic, Difficulty, VindicateCategory
from vindicate.interface._common import _resolve_with_overrides, describe_due

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="vindicate: spaced-repetition flashcards for clinical differentials.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

settings_app = typer.Typer(help="Show or change flashcard scheduling settings.")
app.add_typer(settings_app, name="settings")

config_app = typer.Typer(help="Manage vindicate configuration.")
app.add_typer(config_app, name="config")

ratings_app = typer.Typer(help="Per-presentation difficulty ratings.", no_args_is_help=True)
app.add_typer(ratings_app, name="ratings")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

GRADE_KEYS = {
    "1": Grade.AGAIN,
    "2": Grade.HARD,
    "3": Grade.GOOD,
    "4": Grade.EASY,
    "again": Grade.AGAIN,
    "hard": Grade.HARD,
    "good": Grade.GOOD,
    "easy": Grade.EASY,
}

# Shared option types
UserOpt = Annotated[str | None, typer.Option(help="Learner identity used to namespace progress.")]
DeckOpt = Annotated[Path | None, typer.Option("--deck", help="YAML deck file.")]
StorageOpt = Annotated[str | None, typer.Option(help="Storage backend: file, memory.")]


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for vindicate."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose >= 2:
        logging.getLogger().setLevel(logging.DEBUG)
    elif verbose == 1:
        logging.getLogger().setLevel(logging.INFO)


def _service(user, deck, storage, seed=None):
    from vindicate.application.factory import get_flashcard_service

    config = _resolve_with_overrides(user=user, deck_path=deck, storage=storage, seed=seed)
    return get_flashcard_service(config)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def study(
    mode: Annotated[
        DirectionMode, typer.Option(help="Card front: presentation or differential.")
    ] = DirectionMode.PRESENTATION,
    category: Annotated[str, typer.Option(help="Category filter, or 'All'.")] = "All",
    shuffle_all: Annotated[
        bool,
        typer.Option("--shuffle-all", help="Practice every card in random order, ignoring due dates."),
    ] = False,
    seed: Annotated[int | None, typer.Option(help="Seed for reproducible card order.")] = None,
    user: UserOpt = None,
    deck: DeckOpt = None,
    storage: StorageOpt = None,
):
    """[bold green]Study[/bold green] the cards that are due, grading each one."""
    from vindicate.application.session import ReviewSession

    try:
        service = _service(user, deck, storage, seed)
        catalog = service.build_catalog(mode, category)
        if shuffle_all:
            queue = service.shuffle_all(catalog)
        else:
            result = service.plan_queue(catalog)
            queue = result.queue
            typer.echo(f"Due: {result.due_count}  New: {result.new_accepted}/{result.new_available}")
    except VindicateError as e:
        typer.secho(str(e), fg="red")
        raise typer.Exit(1)

    if not queue:
        typer.secho("Nothing due right now. Come back later or use --shuffle-all.", fg="green")
        return

    session = ReviewSession(service, queue)
    while not session.is_finished:
        card = session.current
        typer.echo("")
        typer.secho(
            f"[{session.total - session.remaining + 1}/{session.total}] {card.front}", bold=True
        )
        typer.prompt("Press Enter to reveal", default="", show_default=False)
        for term in card.back:
            typer.echo(f"  - {term}")

        answer = typer.prompt("Grade (1=again 2=hard 3=good 4=easy, q=quit)").strip().lower()
        if answer in ("q", "quit"):
            break
        grade = GRADE_KEYS.get(answer)
        if grade is None:
            typer.secho(f"Unknown grade {answer!r}, card shown again.", fg="yellow")
            continue

        now = service.now()
        progress = session.grade(card.id, grade, now)
        typer.echo(f"  next review in {describe_due(progress, now)}")

    typer.secho(f"\nGraded {len(session.graded)} of {session.total} cards.", fg="green")


@app.command("queue")
def queue_cmd(
    mode: Annotated[
        DirectionMode, typer.Option(help="Card front: presentation or differential.")
    ] = DirectionMode.PRESENTATION,
    category: Annotated[str, typer.Option(help="Category filter, or 'All'.")] = "All",
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
    seed: Annotated[int | None, typer.Option(help="Seed for reproducible card order.")] = None,
    user: UserOpt = None,
    deck: DeckOpt = None,
    storage: StorageOpt = None,
):
    """Show the review queue that a study session would start with."""
    try:
        service = _service(user, deck, storage, seed)
        catalog = service.build_catalog(mode, category)
        result = service.plan_queue(catalog)
    except VindicateError as e:
        typer.secho(str(e), fg="red")
        raise typer.Exit(1)

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "catalog": len(catalog),
                    "due": result.due_count,
                    "new_available": result.new_available,
                    "new_accepted": result.new_accepted,
                    "scheduled_later": len(result.scheduled_later),
                    "queue": [card.id for card in result.queue],
                },
                indent=2,
            )
        )
        return

    typer.echo(f"Catalog: {len(catalog)}  Due: {result.due_count}")
    typer.echo(f"New: {result.new_accepted} of {result.new_available} available")
    typer.echo(f"Scheduled later: {len(result.scheduled_later)}")
    if result.is_empty:
        typer.secho("Nothing due.", fg="green")
    for card in result.queue:
        typer.echo(f"  {card.front}")


@app.command()
def categories(deck: DeckOpt = None):
    """List the categories available for --category."""
    try:
        service = _service(None, deck, "memory")
        for name in service.categories():
            typer.echo(name)
    except VindicateError as e:
        typer.secho(str(e), fg="red")
        raise typer.Exit(1)


@app.command()
def purge(
    user: UserOpt = None,
    deck: DeckOpt = None,
    storage: StorageOpt = None,
):
    """Remove stored progress for cards that no longer exist in the deck."""
    try:
        service = _service(user, deck, storage)
        keep = [
            card.id
            for mode in DirectionMode
            for card in service.build_catalog(mode)
        ]
    except VindicateError as e:
        typer.secho(str(e), fg="red")
        raise typer.Exit(1)

    removed = service.progress.purge(keep)
    typer.echo(f"Removed {removed} orphaned progress entries.")


@app.command()
def serve(
    port: Annotated[int, typer.Option(help="Port to bind the server to.")] = 8787,
    host: Annotated[str, typer.Option(help="Host to bind the server to.")] = "127.0.0.1",
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """Run the HTTP API for UI drivers."""
    import uvicorn

    uvicorn.run("vindicate.server:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Settings subgroup
# ---------------------------------------------------------------------------


@settings_app.command("show")
def settings_show(user: UserOpt = None, storage: StorageOpt = None):
    """Display the stored flashcard settings."""
    service = _service(user, None, storage)
    typer.echo(json.dumps(service.settings().model_dump(by_alias=True), indent=2))


@settings_app.command("set")
def settings_set(
    again_minutes: Annotated[int | None, typer.Option(help="Delay after 'again' (minutes).")] = None,
    good_days: Annotated[int | None, typer.Option(help="'Good' interval for new cards (days).")] = None,
    easy_days: Annotated[int | None, typer.Option(help="'Easy' interval for new cards (days).")] = None,
    new_cards_per_day: Annotated[int | None, typer.Option(help="Daily new card limit.")] = None,
    user: UserOpt = None,
    storage: StorageOpt = None,
):
    """Change one or more flashcard settings."""
    from vindicate.application.settings import FlashcardSettings

    service = _service(user, None, storage)
    current = service.settings().model_dump()
    changes = {
        "again_minutes": again_minutes,
        "good_days": good_days,
        "easy_days": easy_days,
        "new_cards_per_day": new_cards_per_day,
    }
    current.update({k: v for k, v in changes.items() if v is not None})
    updated = FlashcardSettings(**current)
    service.save_settings(updated)
    typer.echo(json.dumps(updated.model_dump(by_alias=True), indent=2))


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


# ---------------------------------------------------------------------------
# Ratings subgroup
# ---------------------------------------------------------------------------


@ratings_app.command("record")
def ratings_record(
    demographic: Annotated[Demographic, typer.Argument(help="Patient population.")],
    presentation: Annotated[str, typer.Argument(help="Presentation name.")],
    category: Annotated[VindicateCategory, typer.Argument(help="VINDICATE category.")],
    difficulty: Annotated[Difficulty, typer.Argument(help="Easy, Medium or Hard.")],
    user: UserOpt = None,
    storage: StorageOpt = None,
):
    """Record how hard a presentation's category felt."""
    from vindicate.application.factory import get_ratings_store

    store = get_ratings_store(_resolve_with_overrides(user=user, storage=storage))
    store.record(demographic, presentation, category, difficulty)
    typer.echo(f"Rated {presentation} / {category.value} ({demographic.value}): {difficulty.value}")


@ratings_app.command("list")
def ratings_list(
    difficulty: Annotated[
        Difficulty | None, typer.Option(help="Only show items with this rating.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
    user: UserOpt = None,
    storage: StorageOpt = None,
):
    """List rated presentations, optionally for a single difficulty."""
    from vindicate.application.factory import get_ratings_store

    store = get_ratings_store(_resolve_with_overrides(user=user, storage=storage))
    items = store.rated_items(difficulty)

    if json_output:
        typer.echo(
            json.dumps(
                [
                    {
                        "demographic": i.demographic.value,
                        "presentation": i.presentation,
                        "category": i.category.value,
                        "difficulty": i.difficulty.value,
                    }
                    for i in items
                ],
                indent=2,
            )
        )
        return

    if not items:
        typer.secho("No ratings yet.", fg="yellow")
        return
    for i in items:
        typer.echo(
            f"{i.presentation}  [{i.category.value}]  {i.demographic.value}: {i.difficulty.value}"
        )
