"""Command-line interface for Mood Radio."""

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .analysis.explanation import enrich_analysis
from .analysis.image_analyzer import SeededImageAnalyzer
from .analysis.mood_classifier import analyze_text
from .catalog.client import SpotifyCatalogClient
from .config import (
    config,
    get_spotify_access_token,
    get_spotify_client_credentials,
    setup_logging,
)
from .core.exceptions import AuthRequired, MoodRadioError
from .core.models import Recommendation
from .recommend.recommender import MoodRecommender
from .recommend.stations import StationLoader

console = Console()

T = TypeVar("T")


def build_client() -> SpotifyCatalogClient:
    """Create a catalog client from the configured credentials."""
    return SpotifyCatalogClient(
        access_token=get_spotify_access_token(),
        client_credentials=get_spotify_client_credentials(),
        market=config.market,
        limit=config.search_limit,
        timeout=config.timeout,
    )


def run_with_recommender(action: Callable[[MoodRecommender], Awaitable[T]]) -> Optional[T]:
    """Run an async action against a fresh recommender, reporting failures.

    Returns:
        The action's result, or None if it failed (the error is printed).
    """

    async def _run() -> T:
        async with build_client() as client:
            return await action(MoodRecommender(client))

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task("Talking to Spotify...", total=None)
            return asyncio.run(_run())
    except AuthRequired as e:
        console.print(f"[red]{e}[/red]")
        if e.login_url:
            console.print(f"Log in at: {e.login_url}", soft_wrap=True)
        return None
    except MoodRadioError as e:
        console.print(f"[red]Error: {e}[/red]")
        return None


def print_recommendations(recommendations: list[Recommendation], title: str) -> None:
    """Render recommendations as a table."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Artist")
    table.add_column("Album", style="dim")
    table.add_column("Link", style="blue")

    for i, rec in enumerate(recommendations, 1):
        table.add_row(str(i), rec.title, rec.artist, rec.album, rec.spotify_url)
    console.print(table)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Mood Radio - song recommendations from moods, scenarios and images."""
    setup_logging(verbose=verbose)


# ============================================================================
# Analysis Commands
# ============================================================================


@cli.command("analyze")
@click.argument("text")
def analyze(text: str):
    """Show how a prompt is classified, without contacting Spotify."""
    analysis = enrich_analysis(analyze_text(text), text)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Input type", analysis.input_type.value)
    table.add_row("Primary mood", analysis.primary_mood)
    table.add_row("Secondary moods", ", ".join(analysis.secondary_moods) or "-")
    table.add_row("Keywords", ", ".join(analysis.keywords) or "-")
    table.add_row("Themes", ", ".join(analysis.themes) or "-")
    table.add_row("Confidence", f"{analysis.confidence:.2f}")

    if analysis.scenario is not None:
        for field, value in analysis.scenario.model_dump(mode="json").items():
            if value is not None:
                table.add_row(f"  {field}", str(value))

    console.print(table)
    console.print(Panel(analysis.explanation or "", title="Why these tracks"))


# ============================================================================
# Recommendation Commands
# ============================================================================


@cli.command("recommend")
@click.argument("text")
@click.option("--limit", "-n", type=int, default=None, help="Number of tracks to show")
def recommend(text: str, limit: Optional[int]):
    """Recommend tracks for a mood or scenario description."""
    limit = limit or config.prompt_limit
    recommendations = run_with_recommender(
        lambda recommender: recommender.get_recommendations_from_text(text)
    )
    if recommendations is None:
        return

    shown = recommendations[:limit]
    print_recommendations(shown, title=f"Recommendations for: {text}")
    if shown:
        console.print(f"\n[dim]{shown[0].description}[/dim]")


@cli.command("image")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def image(path: str):
    """Recommend tracks matching an image."""
    payload = Path(path).read_bytes()
    analysis = SeededImageAnalyzer().analyze(payload)
    console.print(Panel(analysis.description, title=f"Image mood: {analysis.mood}"))

    recommendations = run_with_recommender(
        lambda recommender: recommender.get_recommendations_from_image(payload)
    )
    if recommendations is None:
        return

    print_recommendations(recommendations, title=f"Tracks for {Path(path).name}")
    if recommendations:
        console.print(f"\n[dim]{recommendations[0].description}[/dim]")


@cli.command("search")
@click.argument("text")
def search(text: str):
    """Search the catalog with a formatted version of the text."""
    tracks = run_with_recommender(lambda recommender: recommender.search_catalog(text))
    if tracks is None:
        return
    if not tracks:
        console.print("[yellow]No tracks found[/yellow]")
        return

    table = Table(title=f"Search: {text}", show_header=True, header_style="bold")
    table.add_column("Title", style="cyan")
    table.add_column("Artist")
    table.add_column("Album", style="dim")
    for track in tracks:
        table.add_row(track.name, track.artist, track.album)
    console.print(table)


@cli.command("stations")
def stations():
    """Load every radio station."""
    loaded = run_with_recommender(lambda recommender: StationLoader(recommender).load_all())
    if loaded is None:
        return

    for station in loaded:
        if station.ok:
            print_recommendations(station.recommendations, title=station.title)
        else:
            console.print(f"[yellow]{station.title}: {station.error}[/yellow]")


@cli.command("login-url")
def login_url():
    """Print the Spotify authorization URL."""
    client = SpotifyCatalogClient(client_credentials=get_spotify_client_credentials())
    console.print(client.login_url(), soft_wrap=True)
    asyncio.run(client.aclose())


if __name__ == "__main__":
    cli()
