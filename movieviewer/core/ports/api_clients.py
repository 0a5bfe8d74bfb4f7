"""
Interfaces ports pour le client API de métadonnées films.

Interface abstraite (port) définissant le contrat du service distant.
L'implémentation concrète (TMDBClient) vit dans adapters/api/.

Toutes les opérations sont asynchrones et peuvent lever NetworkFailure
(transport) ou RemoteFailure (statut non 2xx, payload illisible).
Le client ne fait ni retry ni cache : c'est le rôle de SyncRepository.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from movieviewer.core.entities.media import Movie, MoviePage, Review


class MovieCategory(str, Enum):
    """Listes paginées exposées par l'API (segment d'URL sous /movie/)."""

    POPULAR = "popular"
    TOP_RATED = "top_rated"
    NOW_PLAYING = "now_playing"
    UPCOMING = "upcoming"


class IMovieAPIClient(ABC):
    """
    Interface du client distant de métadonnées films.

    Une opération par endpoint consommé.
    """

    @abstractmethod
    async def fetch_category(
        self, category: MovieCategory, page: Optional[int] = None
    ) -> MoviePage:
        """
        Récupère une page d'une liste (populaires, mieux notés, etc.).

        Args :
            category : Liste à récupérer
            page : Numéro de page (1 par défaut côté API)
        """
        ...

    async def fetch_popular(self, page: Optional[int] = None) -> MoviePage:
        """Films populaires."""
        return await self.fetch_category(MovieCategory.POPULAR, page)

    async def fetch_top_rated(self, page: Optional[int] = None) -> MoviePage:
        """Films les mieux notés."""
        return await self.fetch_category(MovieCategory.TOP_RATED, page)

    async def fetch_now_playing(self, page: Optional[int] = None) -> MoviePage:
        """Films actuellement à l'affiche."""
        return await self.fetch_category(MovieCategory.NOW_PLAYING, page)

    async def fetch_upcoming(self, page: Optional[int] = None) -> MoviePage:
        """Films à venir."""
        return await self.fetch_category(MovieCategory.UPCOMING, page)

    @abstractmethod
    async def fetch_detail(self, movie_id: int) -> Movie:
        """Récupère le détail complet d'un film (genres, durée, recettes...)."""
        ...

    @abstractmethod
    async def fetch_reviews(self, movie_id: int) -> list[Review]:
        """Récupère les critiques d'un film."""
        ...

    @abstractmethod
    async def search(self, query: str, page: Optional[int] = None) -> MoviePage:
        """Recherche des films par titre."""
        ...

    @abstractmethod
    async def fetch_similar(
        self, movie_id: int, page: Optional[int] = None
    ) -> MoviePage:
        """Récupère les films similaires à un film donné."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libère les ressources réseau."""
        ...
