"""
Implementation SQLModel du repository des favoris.

Implemente l'interface IFavoriteRepository. La paire (user_id, movie_id)
est unique : re-ajouter un favori remplace son instantane au lieu de creer
un doublon.
"""

from sqlalchemy import Engine, delete
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session, select

from movieviewer.core.entities.user import FavoriteMovie
from movieviewer.core.ports.repositories import IFavoriteRepository
from movieviewer.infrastructure.persistence.models import (
    MOVIE_DISPLAY_FIELDS,
    FavoriteMovieModel,
    encode_genres,
    utcnow,
)


class SQLModelFavoriteRepository(IFavoriteRepository):
    """
    Repository SQLModel pour les films favoris.
    """

    def __init__(self, engine: Engine) -> None:
        """
        Initialise le repository avec l'engine partage.

        Args :
            engine : Engine SQLAlchemy initialise
        """
        self._engine = engine

    def _to_entity(self, model: FavoriteMovieModel) -> FavoriteMovie:
        return FavoriteMovie(
            movie_id=model.movie_id,
            user_id=model.user_id,
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

    def save(self, favorite: FavoriteMovie) -> FavoriteMovie:
        """Insere ou remplace le favori pour sa paire (user_id, movie_id)."""
        row = {
            "movie_id": favorite.movie_id,
            "user_id": favorite.user_id,
            "title": favorite.title,
            "overview": favorite.overview,
            "poster_path": favorite.poster_path,
            "release_date": favorite.release_date,
            "vote_average": favorite.vote_average,
            "adult": favorite.adult,
            "genres_json": encode_genres(favorite.genres),
            "original_language": favorite.original_language,
            "runtime": favorite.runtime,
            "vote_count": favorite.vote_count,
            "revenue": favorite.revenue,
            "created_at": utcnow(),
        }
        statement = sqlite_insert(FavoriteMovieModel).values(row)
        statement = statement.on_conflict_do_update(
            index_elements=["user_id", "movie_id"],
            set_={name: statement.excluded[name] for name in MOVIE_DISPLAY_FIELDS},
        )
        with Session(self._engine) as session:
            session.connection().execute(statement)
            session.commit()
        return favorite

    def delete(self, user_id: str, movie_id: int) -> bool:
        """Supprime un favori. Retourne True si une ligne a ete supprimee."""
        statement = delete(FavoriteMovieModel).where(
            FavoriteMovieModel.user_id == user_id,
            FavoriteMovieModel.movie_id == movie_id,
        )
        with Session(self._engine) as session:
            result = session.connection().execute(statement)
            session.commit()
            return result.rowcount > 0

    def exists(self, user_id: str, movie_id: int) -> bool:
        """Verifie si le film est dans les favoris de l'utilisateur."""
        statement = select(FavoriteMovieModel.id).where(
            FavoriteMovieModel.user_id == user_id,
            FavoriteMovieModel.movie_id == movie_id,
        )
        with Session(self._engine) as session:
            return session.exec(statement).first() is not None

    def find_by_user(self, user_id: str) -> list[FavoriteMovie]:
        """Liste les favoris d'un utilisateur, dans l'ordre d'insertion."""
        statement = (
            select(FavoriteMovieModel)
            .where(FavoriteMovieModel.user_id == user_id)
            .order_by(FavoriteMovieModel.id)
        )
        with Session(self._engine) as session:
            models = session.exec(statement).all()
            return [self._to_entity(model) for model in models]
