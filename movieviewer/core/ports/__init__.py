"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance locale
- IUserRepository : Comptes utilisateurs
- IMovieCacheRepository : Cache des films pour le mode hors-ligne
- IFavoriteRepository : Films favoris par utilisateur
- LocalStore : Regroupement des trois repositories

Ports client API : Contrat du service distant
- IMovieAPIClient : Endpoints TMDB consommés
- MovieCategory : Listes paginées disponibles
"""

from movieviewer.core.ports.api_clients import IMovieAPIClient, MovieCategory
from movieviewer.core.ports.repositories import (
    IFavoriteRepository,
    IMovieCacheRepository,
    IUserRepository,
    LocalStore,
)

__all__ = [
    # Repositories
    "IUserRepository",
    "IMovieCacheRepository",
    "IFavoriteRepository",
    "LocalStore",
    # Client API
    "IMovieAPIClient",
    "MovieCategory",
]
