"""
Module de persistance SQLite pour MovieViewer.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Creation de l'engine SQLite et initialisation des tables
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Implementations des ports de stockage local

Usage:
    engine = init_db(create_db_engine("sqlite:///movieviewer.db"))
    store = build_local_store(engine)
    store.movies.save_all(movies)
"""

from movieviewer.infrastructure.persistence.database import create_db_engine, init_db
from movieviewer.infrastructure.persistence.models import (
    FavoriteMovieModel,
    MovieModel,
    UserModel,
)
from movieviewer.infrastructure.persistence.repositories import build_local_store

__all__ = [
    "create_db_engine",
    "init_db",
    "build_local_store",
    "UserModel",
    "MovieModel",
    "FavoriteMovieModel",
]
