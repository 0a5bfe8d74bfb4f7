"""
Client TMDB pour les listes, details, critiques et recherches de films.

Implemente l'interface IMovieAPIClient pour TMDB (The Movie Database).
La cle API partagee est passee en parametre api_key sur chaque requete.

Usage:
    client = TMDBClient(api_key="your_key")
    page = await client.fetch_popular()
    movie = await client.fetch_detail(27205)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from movieviewer.adapters.api.http import request_json
from movieviewer.core.entities.media import Genre, Movie, MoviePage, Review
from movieviewer.core.errors import NotFound, RemoteFailure
from movieviewer.core.ports.api_clients import IMovieAPIClient, MovieCategory
from movieviewer.utils.constants import TMDB_GENRE_MAPPING


class TMDBClient(IMovieAPIClient):
    """
    Client API TMDB.

    Implemente IMovieAPIClient avec:
    - Listes paginees (populaires, mieux notes, a l'affiche, a venir)
    - Detail complet d'un film (genres, duree, recettes)
    - Critiques, films similaires et recherche par titre

    Ne fait ni cache ni retry : les erreurs sont traduites en
    NetworkFailure / RemoteFailure et remontent a l'appelant.

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: str,
        base_url: str = TMDB_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB v3
            base_url: URL de base (surchargeable pour les tests)
            timeout: Timeout des requetes en secondes
        """
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Returns:
            httpx.AsyncClient configure pour l'API TMDB
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Accept": "application/json"},
                params={"api_key": self._api_key},
                timeout=self._timeout,
            )
        return self._client

    async def _get(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        logger.debug(f"TMDB GET {url}", params=params)
        return await request_json(self._get_client(), "GET", url, params=params or {})

    async def fetch_category(
        self, category: MovieCategory, page: Optional[int] = None
    ) -> MoviePage:
        """
        Recupere une page d'une liste TMDB.

        Args:
            category: Liste a recuperer (segment d'URL sous /movie/)
            page: Numero de page, omis pour laisser TMDB renvoyer la page 1

        Returns:
            MoviePage avec les metadonnees de pagination
        """
        data = await self._get(f"/movie/{category.value}", _page_params(page))
        return _parse_page(data)

    async def fetch_detail(self, movie_id: int) -> Movie:
        """
        Recupere le detail complet d'un film.

        Args:
            movie_id: ID TMDB du film

        Returns:
            Movie avec les champs de detail remplis

        Raises:
            RemoteFailure: Statut d'erreur ou payload invalide
            NotFound: Le film n'existe pas (HTTP 404)
        """
        try:
            data = await self._get(f"/movie/{movie_id}")
        except RemoteFailure as e:
            if e.status_code == 404:
                raise NotFound(f"Movie {movie_id} not found") from e
            raise
        return _parse_movie(data)

    async def fetch_reviews(self, movie_id: int) -> list[Review]:
        """
        Recupere les critiques d'un film (premiere page uniquement).

        Args:
            movie_id: ID TMDB du film

        Returns:
            Liste de Review (vide si aucune critique)
        """
        data = await self._get(f"/movie/{movie_id}/reviews")
        if not isinstance(data, dict):
            raise RemoteFailure("Malformed reviews payload")
        results = data.get("results") or []
        if not isinstance(results, list):
            raise RemoteFailure("Malformed reviews payload")
        return [_parse_review(item) for item in results]

    async def search(self, query: str, page: Optional[int] = None) -> MoviePage:
        """
        Recherche des films par titre.

        Args:
            query: Texte recherche
            page: Numero de page optionnel

        Returns:
            MoviePage des resultats (vide si aucun resultat)
        """
        params = {"query": query, **_page_params(page)}
        data = await self._get("/search/movie", params)
        return _parse_page(data)

    async def fetch_similar(
        self, movie_id: int, page: Optional[int] = None
    ) -> MoviePage:
        """
        Recupere les films similaires a un film.

        Args:
            movie_id: ID TMDB du film de reference
            page: Numero de page optionnel
        """
        data = await self._get(f"/movie/{movie_id}/similar", _page_params(page))
        return _parse_page(data)

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


def _page_params(page: Optional[int]) -> dict[str, Any]:
    return {"page": page} if page is not None else {}


def _parse_page(data: Any) -> MoviePage:
    """Convertit l'enveloppe {page, results, total_pages, total_results}."""
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise RemoteFailure("Malformed movie list payload")

    results = tuple(_parse_movie(item) for item in data["results"])
    return MoviePage(
        page=data.get("page") or 1,
        results=results,
        total_pages=data.get("total_pages") or 1,
        total_results=data.get("total_results") or len(results),
    )


def _parse_movie(item: Any) -> Movie:
    """
    Convertit un objet film TMDB (liste ou detail) en Movie.

    Les listes ne renvoient que genre_ids : les noms sont reconstruits
    depuis TMDB_GENRE_MAPPING. Le detail renvoie genres [{id, name}].
    """
    if not isinstance(item, dict) or "id" not in item:
        raise RemoteFailure("Malformed movie payload")

    try:
        movie_id = int(item["id"])
        genres = _parse_genres(item)
    except (KeyError, TypeError, ValueError) as e:
        raise RemoteFailure(f"Malformed movie payload (id {item['id']!r})") from e

    return Movie(
        id=movie_id,
        title=item.get("title") or item.get("original_title") or "",
        overview=item.get("overview"),
        poster_path=item.get("poster_path"),
        # TMDB renvoie "" pour les dates inconnues
        release_date=item.get("release_date") or None,
        vote_average=item.get("vote_average"),
        adult=item.get("adult"),
        genres=genres,
        original_language=item.get("original_language"),
        runtime=item.get("runtime"),
        vote_count=item.get("vote_count"),
        revenue=item.get("revenue"),
    )


def _parse_genres(item: dict[str, Any]) -> tuple[Genre, ...]:
    if item.get("genres"):
        return tuple(
            Genre(id=int(g["id"]), name=g.get("name") or TMDB_GENRE_MAPPING.get(g["id"], "Unknown"))
            for g in item["genres"]
        )
    return tuple(
        Genre(id=int(gid), name=TMDB_GENRE_MAPPING.get(gid, "Unknown"))
        for gid in item.get("genre_ids") or []
    )


def _parse_review(item: Any) -> Review:
    if not isinstance(item, dict) or "id" not in item:
        raise RemoteFailure("Malformed review payload")
    return Review(
        id=str(item["id"]),
        author=item.get("author") or "",
        content=item.get("content") or "",
        created_at=item.get("created_at"),
    )
