"""
Commandes CLI de MovieViewer.

Chaque commande Typer est synchrone et delegue a une implementation async
(asyncio.run) qui pilote AppState, comme le ferait une interface graphique :
intention, attente de la tache, puis lecture des Observable.
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.panel import Panel

from movieviewer.adapters.cli.helpers import (
    console,
    favorites_table,
    movies_table,
    open_state,
    suppress_loguru,
    with_container,
)
from movieviewer.core.ports.api_clients import MovieCategory
from movieviewer.state.app_state import AppState
from movieviewer.utils.constants import POSTER_SIZE_DETAIL

OfflineOption = Annotated[
    bool, typer.Option("--offline", help="Consulter uniquement le cache local")
]
PasswordOption = Annotated[
    str, typer.Option("--password", "-p", prompt=True, hide_input=True, help="Mot de passe")
]


def _print_error(state: AppState) -> bool:
    """Affiche l'erreur courante de l'etat ; retourne True s'il y en a une."""
    if state.error.value:
        console.print(f"[red]{state.error.value}[/red]")
        return True
    return False


def _cache_notice(state: AppState) -> None:
    page = state.movies_page.value
    if page is not None and page.from_cache:
        console.print("[yellow]Mode hors-ligne : resultats du cache local.[/yellow]")


# ------------------- Listes et recherche ------------------- #


def movies(
    category: Annotated[
        MovieCategory, typer.Argument(help="Liste a afficher")
    ] = MovieCategory.POPULAR,
    page: Annotated[Optional[int], typer.Option("--page", min=1, help="Numero de page")] = None,
    offline: OfflineOption = False,
) -> None:
    """Affiche une liste de films TMDB (populaires, mieux notes, ...)."""
    asyncio.run(_movies_async(category, page, offline))


@with_container()
async def _movies_async(
    container, category: MovieCategory, page: Optional[int], offline: bool
) -> None:
    state = await open_state(container, offline)
    await state.load_category(category, page)

    with suppress_loguru():
        if _print_error(state):
            raise typer.Exit(code=1)
        _cache_notice(state)
        current = state.movies_page.value
        title = f"{category.value} (page {current.page}/{current.total_pages})" if current else category.value
        console.print(movies_table(state.movies.value, title))


def search(
    query: Annotated[str, typer.Argument(help="Titre recherche")],
    offline: OfflineOption = False,
) -> None:
    """Recherche des films par titre (sous-chaine du cache hors-ligne)."""
    asyncio.run(_search_async(query, offline))


@with_container()
async def _search_async(container, query: str, offline: bool) -> None:
    state = await open_state(container, offline)
    await state.search(query)

    with suppress_loguru():
        if _print_error(state):
            raise typer.Exit(code=1)
        _cache_notice(state)
        if not state.movies.value:
            console.print(f"[yellow]Aucun film trouve pour '{query}'.[/yellow]")
            return
        console.print(movies_table(state.movies.value, f"Recherche : {query}"))


# ------------------- Detail ------------------- #


def detail(
    movie_id: Annotated[int, typer.Argument(help="ID TMDB du film")],
    offline: OfflineOption = False,
) -> None:
    """Affiche le detail d'un film, ses critiques et des films similaires."""
    asyncio.run(_detail_async(movie_id, offline))


@with_container()
async def _detail_async(container, movie_id: int, offline: bool) -> None:
    state = await open_state(container, offline)
    await state.open_movie(movie_id)

    with suppress_loguru():
        movie = state.movie_detail.value
        if movie is None:
            if not _print_error(state):
                console.print(f"[red]Film {movie_id} introuvable.[/red]")
            raise typer.Exit(code=1)

        lines = [
            f"[bold]{movie.title}[/bold] ({movie.year or '?'})",
            f"Note : {movie.vote_average if movie.vote_average is not None else '-'}"
            f" ({movie.vote_count or 0} votes)",
            f"Genres : {', '.join(g.name for g in movie.genres) or '-'}",
            f"Duree : {movie.runtime or '-'} min",
        ]
        if movie.revenue:
            lines.append(f"Recettes : {movie.revenue:,} $")
        url = movie.poster_url(POSTER_SIZE_DETAIL)
        if url:
            lines.append(f"Poster : {url}")
        if movie.overview:
            lines.append("")
            lines.append(movie.overview)
        console.print(Panel("\n".join(lines), title=f"Film {movie.id}"))

        for review in state.reviews.value[:3]:
            excerpt = review.content if len(review.content) <= 300 else review.content[:300] + "..."
            console.print(Panel(excerpt, title=f"Critique de {review.author}"))

        if state.similar_movies.value:
            console.print(movies_table(state.similar_movies.value[:10], "Films similaires"))


# ------------------- Comptes et favoris ------------------- #


def register(
    user_id: Annotated[str, typer.Option("--user-id", prompt=True, help="Identifiant")],
    preferred_name: Annotated[
        str, typer.Option("--name", prompt="Nom affiche", help="Nom affiche")
    ],
    password: Annotated[
        str,
        typer.Option(prompt=True, hide_input=True, help="Mot de passe"),
    ],
    confirm_password: Annotated[
        str,
        typer.Option(
            "--confirm-password",
            prompt="Confirmation",
            hide_input=True,
            help="Confirmation du mot de passe",
        ),
    ],
) -> None:
    """Cree un compte local."""
    asyncio.run(_register_async(user_id, password, confirm_password, preferred_name))


@with_container()
async def _register_async(
    container, user_id: str, password: str, confirm_password: str, preferred_name: str
) -> None:
    state = container.app_state()
    check = state.check_registration(user_id, password, confirm_password, preferred_name)
    if not check.is_valid:
        with suppress_loguru():
            for message in check.field_errors.values():
                console.print(f"[red]{message}[/red]")
            for requirement in check.unmet_password_requirements:
                console.print(f"[red]- {requirement}[/red]")
        raise typer.Exit(code=1)

    ok = await state.register(user_id, password, preferred_name)
    with suppress_loguru():
        if not ok:
            console.print(f"[red]{state.login_error.value}[/red]")
            raise typer.Exit(code=1)
        console.print(f"[green]Compte cree :[/green] {user_id}")


async def _login(state: AppState, user_id: str, password: str) -> None:
    if not await state.login(user_id, password):
        with suppress_loguru():
            console.print(f"[red]{state.login_error.value}[/red]")
        raise typer.Exit(code=1)


def favorites(
    user_id: Annotated[str, typer.Argument(help="Identifiant")],
    password: PasswordOption,
) -> None:
    """Liste les films favoris d'un utilisateur."""
    asyncio.run(_favorites_async(user_id, password))


@with_container()
async def _favorites_async(container, user_id: str, password: str) -> None:
    state = container.app_state()
    await _login(state, user_id, password)

    with suppress_loguru():
        if _print_error(state):
            raise typer.Exit(code=1)
        if not state.favorites.value:
            console.print("[yellow]Aucun film favori.[/yellow]")
            return
        name = state.current_user.value.preferred_name
        console.print(favorites_table(state.favorites.value, f"Favoris de {name}"))


def favorite_add(
    user_id: Annotated[str, typer.Argument(help="Identifiant")],
    movie_id: Annotated[int, typer.Argument(help="ID TMDB du film")],
    password: PasswordOption,
) -> None:
    """Ajoute un film aux favoris."""
    asyncio.run(_favorite_add_async(user_id, movie_id, password))


@with_container()
async def _favorite_add_async(container, user_id: str, movie_id: int, password: str) -> None:
    state = container.app_state()
    await _login(state, user_id, password)
    if not container.config().tmdb_enabled:
        await state.set_offline(True)

    await state.load_detail(movie_id)
    movie = state.movie_detail.value
    if movie is None:
        with suppress_loguru():
            if not _print_error(state):
                console.print(f"[red]Film {movie_id} introuvable.[/red]")
        raise typer.Exit(code=1)

    ok = await state.add_favorite(movie)
    with suppress_loguru():
        if not ok:
            _print_error(state)
            raise typer.Exit(code=1)
        console.print(f"[green]Ajoute aux favoris :[/green] {movie.title}")


def favorite_remove(
    user_id: Annotated[str, typer.Argument(help="Identifiant")],
    movie_id: Annotated[int, typer.Argument(help="ID TMDB du film")],
    password: PasswordOption,
) -> None:
    """Retire un film des favoris."""
    asyncio.run(_favorite_remove_async(user_id, movie_id, password))


@with_container()
async def _favorite_remove_async(
    container, user_id: str, movie_id: int, password: str
) -> None:
    state = container.app_state()
    await _login(state, user_id, password)

    ok = await state.remove_favorite(movie_id)
    with suppress_loguru():
        if not ok:
            _print_error(state)
            raise typer.Exit(code=1)
        console.print(f"[green]Favori retire :[/green] {movie_id}")
