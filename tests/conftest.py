"""
Fixtures pytest partagees pour les tests MovieViewer.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Engine SQLite sur fichier temporaire et LocalStore initialise
- Mock de IMovieAPIClient
- Films d'exemple
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from movieviewer.config import Settings
from movieviewer.core.entities.media import Genre, Movie, MoviePage
from movieviewer.core.ports.api_clients import IMovieAPIClient
from movieviewer.core.ports.repositories import LocalStore
from movieviewer.infrastructure.persistence import build_local_store, create_db_engine, init_db


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test isoles dans tmp_path."""
    return Settings(
        tmdb_api_key="test_api_key",
        database_url=f"sqlite:///{tmp_path / 'movieviewer.db'}",
        log_file=tmp_path / "logs" / "movieviewer.log",
        log_level="DEBUG",
    )


@pytest.fixture
def engine(tmp_path: Path):
    """Engine SQLite sur un fichier temporaire, tables creees."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'store.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine) -> LocalStore:
    """LocalStore SQLModel complet."""
    return build_local_store(engine)


@pytest.fixture
def mock_api_client() -> AsyncMock:
    """
    Mock de IMovieAPIClient.

    Les valeurs de retour doivent etre configurees dans chaque test.
    """
    return AsyncMock(spec=IMovieAPIClient)


@pytest.fixture
def inception() -> Movie:
    return Movie(
        id=27205,
        title="Inception",
        overview="Cobb, a skilled thief who commits corporate espionage...",
        poster_path="/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
        release_date="2010-07-15",
        vote_average=8.4,
        adult=False,
        genres=(Genre(28, "Action"), Genre(878, "Science Fiction")),
        original_language="en",
        runtime=148,
        vote_count=35000,
        revenue=825532764,
    )


@pytest.fixture
def interstellar() -> Movie:
    return Movie(
        id=157336,
        title="Interstellar",
        release_date="2014-11-05",
        vote_average=8.4,
        genres=(Genre(12, "Adventure"), Genre(18, "Drama")),
    )


@pytest.fixture
def popular_page(inception: Movie, interstellar: Movie) -> MoviePage:
    """Page de films populaires telle que renvoyee par le client."""
    return MoviePage(
        page=1,
        results=(inception, interstellar),
        total_pages=500,
        total_results=10000,
    )
