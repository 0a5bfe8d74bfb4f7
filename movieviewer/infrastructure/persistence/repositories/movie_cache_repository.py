"""
Implementation SQLModel du cache local des films.

Implemente l'interface IMovieCacheRepository. Les ecritures sont des upserts
SQLite (INSERT ... ON CONFLICT(id) DO UPDATE) : mettre en cache deux fois la
meme liste laisse exactement une ligne par ID, avec les dernieres valeurs.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import Engine
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session, select

from movieviewer.core.entities.media import Movie
from movieviewer.core.ports.repositories import IMovieCacheRepository
from movieviewer.infrastructure.persistence.models import (
    MOVIE_DISPLAY_FIELDS,
    MovieModel,
    encode_genres,
    utcnow,
)

# Lignes par instruction INSERT (limite de variables SQLite)
_BATCH_SIZE = 50


def _escape_like(pattern: str) -> str:
    """Echappe les jokers LIKE pour une recherche de sous-chaine litterale."""
    return pattern.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLModelMovieCacheRepository(IMovieCacheRepository):
    """
    Repository SQLModel pour le cache des films.

    Implemente IMovieCacheRepository avec conversion bidirectionnelle
    entre l'entite Movie (domaine) et MovieModel (persistance).
    """

    def __init__(self, engine: Engine) -> None:
        """
        Initialise le repository avec l'engine partage.

        Args :
            engine : Engine SQLAlchemy initialise
        """
        self._engine = engine

    def _to_entity(self, model: MovieModel) -> Movie:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele MovieModel depuis la DB

        Retourne :
            L'entite Movie correspondante
        """
        return Movie(
            id=model.id,
            title=model.title,
            overview=model.overview,
            poster_path=model.poster_path,
            release_date=model.release_date,
            vote_average=model.vote_average,
            adult=model.adult,
            genres=model.genres,
            original_language=model.original_language,
            runtime=model.runtime,
            vote_count=model.vote_count,
            revenue=model.revenue,
        )

    def _to_row(self, entity: Movie, cached_at: datetime) -> dict[str, Any]:
        """Convertit une entite en ligne complete pour l'upsert."""
        return {
            "id": entity.id,
            "title": entity.title,
            "overview": entity.overview,
            "poster_path": entity.poster_path,
            "release_date": entity.release_date,
            "vote_average": entity.vote_average,
            "adult": entity.adult,
            "genres_json": encode_genres(entity.genres),
            "original_language": entity.original_language,
            "runtime": entity.runtime,
            "vote_count": entity.vote_count,
            "revenue": entity.revenue,
            "cached_at": cached_at,
        }

    def save_all(self, movies: list[Movie]) -> None:
        """Insere ou remplace chaque film par son ID."""
        if not movies:
            return

        cached_at = utcnow()
        # Un meme ID present deux fois dans la liste : la derniere occurrence gagne
        rows = list({m.id: self._to_row(m, cached_at) for m in movies}.values())

        with Session(self._engine) as session:
            connection = session.connection()
            for start in range(0, len(rows), _BATCH_SIZE):
                statement = sqlite_insert(MovieModel).values(rows[start:start + _BATCH_SIZE])
                statement = statement.on_conflict_do_update(
                    index_elements=["id"],
                    set_={
                        name: statement.excluded[name]
                        for name in (*MOVIE_DISPLAY_FIELDS, "cached_at")
                    },
                )
                connection.execute(statement)
            session.commit()

    def get_by_id(self, movie_id: int) -> Optional[Movie]:
        """Recupere un film en cache par son ID TMDB."""
        with Session(self._engine) as session:
            model = session.get(MovieModel, movie_id)
            if model:
                return self._to_entity(model)
            return None

    def list_all(self) -> list[Movie]:
        """Liste tous les films en cache."""
        with Session(self._engine) as session:
            models = session.exec(select(MovieModel).order_by(MovieModel.id)).all()
            return [self._to_entity(model) for model in models]

    def find_by_title_substring(self, pattern: str) -> list[Movie]:
        """Recherche les films dont le titre contient pattern (insensible a la casse)."""
        statement = (
            select(MovieModel)
            .where(MovieModel.title.ilike(f"%{_escape_like(pattern)}%", escape="\\"))
            .order_by(MovieModel.id)
        )
        with Session(self._engine) as session:
            models = session.exec(statement).all()
            return [self._to_entity(model) for model in models]
