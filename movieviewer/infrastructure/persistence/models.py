"""
Modeles SQLModel pour la base de donnees MovieViewer.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- users: Comptes utilisateurs
- movies: Cache des films recuperes depuis TMDB
- favorite_movies: Favoris par utilisateur avec instantane du film

Le champ genres_json stocke la liste des genres [{id, name}] serialisee en
JSON. Les favoris ne referencent pas la table movies (pas de cle etrangere) :
ils portent leur propre copie des champs d'affichage.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from movieviewer.core.entities.media import Genre

# Champs d'affichage communs aux tables movies et favorite_movies
MOVIE_DISPLAY_FIELDS = (
    "title",
    "overview",
    "poster_path",
    "release_date",
    "vote_average",
    "adult",
    "genres_json",
    "original_language",
    "runtime",
    "vote_count",
    "revenue",
)


def utcnow() -> datetime:
    """Horodatage UTC avec fuseau (les colonnes sont declarees timezone=True)."""
    return datetime.now(timezone.utc)



def encode_genres(genres: tuple[Genre, ...]) -> str | None:
    """Serialise les genres en JSON ([{"id": 28, "name": "Action"}])."""
    if not genres:
        return None
    return json.dumps([{"id": g.id, "name": g.name} for g in genres])


def decode_genres(genres_json: str | None) -> tuple[Genre, ...]:
    """Deserialise les genres depuis leur forme JSON."""
    if not genres_json:
        return ()
    return tuple(Genre(id=g["id"], name=g["name"]) for g in json.loads(genres_json))


class UserModel(SQLModel, table=True):
    """
    Modele representant un compte utilisateur.

    Le mot de passe est stocke tel quel (voir DESIGN.md).
    """

    __tablename__ = "users"

    user_id: str = Field(primary_key=True)
    password: str
    preferred_name: str
    created_at: datetime | None = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class MovieModel(SQLModel, table=True):
    """
    Modele representant un film en cache.

    La cle primaire est l'ID TMDB ; une nouvelle recuperation remplace la
    ligne entiere.
    """

    __tablename__ = "movies"

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    title: str = Field(index=True)
    overview: str | None = None
    poster_path: str | None = None
    release_date: str | None = None
    vote_average: float | None = None  # Note moyenne TMDB (0-10)
    adult: bool | None = None
    genres_json: str | None = None  # JSON: [{"id": 28, "name": "Action"}]
    original_language: str | None = None
    runtime: int | None = None  # Minutes
    vote_count: int | None = None
    revenue: int | None = None  # USD
    cached_at: datetime | None = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    @property
    def genres(self) -> tuple[Genre, ...]:
        """Retourne les genres deserialises."""
        return decode_genres(self.genres_json)


class FavoriteMovieModel(SQLModel, table=True):
    """
    Modele representant un film favori d'un utilisateur.

    Unicite sur (user_id, movie_id). L'id auto-incremente conserve l'ordre
    d'insertion, y compris apres un upsert.
    """

    __tablename__ = "favorite_movies"
    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_favorite_movies_user_movie"),
    )

    id: int | None = Field(default=None, primary_key=True)
    movie_id: int = Field(index=True)
    user_id: str = Field(index=True)
    title: str
    overview: str | None = None
    poster_path: str | None = None
    release_date: str | None = None
    vote_average: float | None = None
    adult: bool | None = None
    genres_json: str | None = None
    original_language: str | None = None
    runtime: int | None = None
    vote_count: int | None = None
    revenue: int | None = None
    created_at: datetime | None = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    @property
    def genres(self) -> tuple[Genre, ...]:
        """Retourne les genres deserialises."""
        return decode_genres(self.genres_json)
