"""
Tests pour les modeles SQLModel et l'initialisation de la base.

Verifie la serialisation JSON des genres, les valeurs par defaut des
modeles et la creation de l'engine (fichier ou memoire).
"""

from datetime import timezone
from pathlib import Path

from sqlalchemy import inspect
from sqlalchemy.pool import StaticPool

from movieviewer.core.entities.media import Genre
from movieviewer.infrastructure.persistence.database import create_db_engine, init_db
from movieviewer.infrastructure.persistence.models import (
    FavoriteMovieModel,
    MovieModel,
    decode_genres,
    encode_genres,
)


class TestGenresJson:
    """Tests de la forme JSON des genres."""

    def test_encode_decode(self):
        genres = (Genre(28, "Action"), Genre(878, "Science Fiction"))

        encoded = encode_genres(genres)

        assert encoded == '[{"id": 28, "name": "Action"}, {"id": 878, "name": "Science Fiction"}]'
        assert decode_genres(encoded) == genres

    def test_empty_genres_stored_as_null(self):
        assert encode_genres(()) is None
        assert decode_genres(None) == ()
        assert decode_genres("") == ()


class TestMovieModel:
    """Tests pour MovieModel."""

    def test_optional_fields_nullable(self):
        model = MovieModel(id=1, title="Test Movie")

        assert model.overview is None
        assert model.vote_average is None
        assert model.genres == ()
        assert model.cached_at is not None
        assert model.cached_at.tzinfo is timezone.utc

    def test_genres_property(self):
        model = MovieModel(id=1, title="Heat", genres_json='[{"id": 80, "name": "Crime"}]')

        assert model.genres == (Genre(80, "Crime"),)


class TestFavoriteMovieModel:
    """Tests pour FavoriteMovieModel."""

    def test_defaults(self):
        model = FavoriteMovieModel(movie_id=27205, user_id="bob", title="Inception")

        assert model.id is None
        assert model.created_at is not None
        assert model.created_at.tzinfo is timezone.utc
        assert model.genres == ()


class TestDatabase:
    """Tests de create_db_engine et init_db."""

    def test_file_engine_creates_parent_dir(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "dir" / "movies.db"

        engine = create_db_engine(f"sqlite:///{db_path}")
        init_db(engine)

        assert db_path.parent.is_dir()
        assert set(inspect(engine).get_table_names()) >= {
            "users",
            "movies",
            "favorite_movies",
        }
        engine.dispose()

    def test_memory_engine_uses_static_pool(self):
        engine = create_db_engine("sqlite://")

        assert isinstance(engine.pool, StaticPool)
        init_db(engine)
        assert "movies" in inspect(engine).get_table_names()
        engine.dispose()

    def test_unique_constraint_on_favorites(self, engine):
        constraints = inspect(engine).get_unique_constraints("favorite_movies")

        assert any(
            set(c["column_names"]) == {"user_id", "movie_id"} for c in constraints
        )

    def test_init_db_returns_engine(self, tmp_path: Path):
        engine = create_db_engine(f"sqlite:///{tmp_path / 'x.db'}")

        assert init_db(engine) is engine
        engine.dispose()
