"""
Interfaces ports pour le stockage local.

Interfaces abstraites (ports) définissant les contrats pour la persistance
des trois types d'enregistrements : utilisateurs, films en cache, favoris.
Les implémentations (adaptateurs) utilisent SQLite via SQLModel.

Toutes les écritures sont des upserts par clé primaire. Les opérations sont
synchrones ; SyncRepository les exécute dans un pool de threads.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from movieviewer.core.entities.media import Movie
from movieviewer.core.entities.user import FavoriteMovie, User


class IUserRepository(ABC):
    """
    Interface de stockage des comptes utilisateurs.
    """

    @abstractmethod
    def get(self, user_id: str) -> Optional[User]:
        """Récupère un utilisateur par son identifiant."""
        ...

    @abstractmethod
    def save(self, user: User) -> User:
        """Sauvegarde un utilisateur (insertion ou remplacement)."""
        ...

    @abstractmethod
    def exists(self, user_id: str) -> bool:
        """Vérifie si un identifiant est déjà enregistré."""
        ...


class IMovieCacheRepository(ABC):
    """
    Interface du cache local des films.

    Les lignes sont indexées par l'ID TMDB et remplacées en bloc à chaque
    nouvelle récupération (pas de fusion champ par champ).
    """

    @abstractmethod
    def save_all(self, movies: list[Movie]) -> None:
        """Insère ou remplace chaque film par son ID."""
        ...

    @abstractmethod
    def get_by_id(self, movie_id: int) -> Optional[Movie]:
        """Récupère un film en cache par son ID TMDB."""
        ...

    @abstractmethod
    def list_all(self) -> list[Movie]:
        """Liste tous les films en cache."""
        ...

    @abstractmethod
    def find_by_title_substring(self, pattern: str) -> list[Movie]:
        """Recherche les films dont le titre contient pattern (insensible à la casse)."""
        ...


class IFavoriteRepository(ABC):
    """
    Interface de stockage des films favoris.

    Clé composite (user_id, movie_id) ; pas de suppression en cascade.
    """

    @abstractmethod
    def save(self, favorite: FavoriteMovie) -> FavoriteMovie:
        """Insère ou remplace le favori pour sa paire (user_id, movie_id)."""
        ...

    @abstractmethod
    def delete(self, user_id: str, movie_id: int) -> bool:
        """Supprime un favori. Retourne True si une ligne a été supprimée."""
        ...

    @abstractmethod
    def exists(self, user_id: str, movie_id: int) -> bool:
        """Vérifie si le film est dans les favoris de l'utilisateur."""
        ...

    @abstractmethod
    def find_by_user(self, user_id: str) -> list[FavoriteMovie]:
        """Liste les favoris d'un utilisateur, dans l'ordre d'insertion."""
        ...


@dataclass(frozen=True)
class LocalStore:
    """
    Stockage local complet, construit une seule fois et injecté.

    Regroupe les trois repositories indépendants.
    """

    users: IUserRepository
    movies: IMovieCacheRepository
    favorites: IFavoriteRepository
