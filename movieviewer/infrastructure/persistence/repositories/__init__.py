"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans movieviewer/core/ports/repositories.py, utilisant SQLModel pour
la persistance SQLite.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit l'engine SQLAlchemy via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from sqlalchemy import Engine

from movieviewer.core.ports.repositories import LocalStore
from movieviewer.infrastructure.persistence.repositories.favorite_repository import (
    SQLModelFavoriteRepository,
)
from movieviewer.infrastructure.persistence.repositories.movie_cache_repository import (
    SQLModelMovieCacheRepository,
)
from movieviewer.infrastructure.persistence.repositories.user_repository import (
    SQLModelUserRepository,
)


def build_local_store(engine: Engine) -> LocalStore:
    """Construit le LocalStore SQLModel complet sur un engine initialise."""
    return LocalStore(
        users=SQLModelUserRepository(engine),
        movies=SQLModelMovieCacheRepository(engine),
        favorites=SQLModelFavoriteRepository(engine),
    )


__all__ = [
    "SQLModelUserRepository",
    "SQLModelMovieCacheRepository",
    "SQLModelFavoriteRepository",
    "build_local_store",
]
