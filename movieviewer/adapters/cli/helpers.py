"""
Utilitaires partages pour les commandes CLI de MovieViewer.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- open_state : prepare AppState selon la connectivite demandee
- movies_table / favorites_table : rendu Rich des listes
"""

from contextlib import contextmanager
from functools import wraps
from typing import Optional

from loguru import logger as loguru_logger
from rich.console import Console
from rich.table import Table

from movieviewer.container import Container
from movieviewer.core.entities.media import Movie
from movieviewer.core.entities.user import FavoriteMovie
from movieviewer.state.app_state import AppState

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("movieviewer")
    try:
        yield
    finally:
        loguru_logger.enable("movieviewer")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    AppState et SyncRepository sont fermes a la fin de la commande
    (taches annulees, mises en cache terminees, client HTTP ferme).

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            state = container.app_state()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.app_state().aclose()
                await container.sync_repository().close()
        return wrapper
    return decorator


async def open_state(container: Container, offline: bool) -> AppState:
    """
    Retourne l'AppState du container avec la connectivite demandee.

    Sans cle API configuree, le mode hors-ligne est force.
    """
    config = container.config()
    state = container.app_state()
    if offline or not config.tmdb_enabled:
        if not config.tmdb_enabled:
            console.print("[yellow]Cle API TMDB absente : cache local uniquement.[/yellow]")
        task = state.set_offline(True)
        if task is not None:
            await task
    return state


def _format_rating(value: Optional[float]) -> str:
    return f"{value:.1f}" if value is not None else "-"


def movies_table(movies: list[Movie], title: str) -> Table:
    """Table Rich d'une liste de films."""
    table = Table(title=title)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Titre", style="bold")
    table.add_column("Annee", justify="center")
    table.add_column("Note", justify="right")
    table.add_column("Genres")

    for movie in movies:
        table.add_row(
            str(movie.id),
            movie.title,
            str(movie.year or "-"),
            _format_rating(movie.vote_average),
            ", ".join(genre.name for genre in movie.genres),
        )
    return table


def favorites_table(favorites: list[FavoriteMovie], title: str) -> Table:
    """Table Rich des favoris (instantanes)."""
    return movies_table([favorite.to_movie() for favorite in favorites], title)
