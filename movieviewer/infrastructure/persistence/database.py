"""
Configuration de la base de donnees SQLite pour MovieViewer.

Ce module fournit :
- Creation de l'engine SQLite, utilisable depuis plusieurs threads
- Fonction d'initialisation des tables

L'engine est construit une seule fois au demarrage (par le container) puis
injecte dans les repositories ; aucun engine global n'est conserve ici.
"""

from pathlib import Path

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine


def create_db_engine(database_url: str) -> Engine:
    """
    Cree l'engine SQLAlchemy pour l'URL donnee.

    Cree le repertoire parent pour les fichiers SQLite. Une base en memoire
    partage une connexion unique (StaticPool), sinon chaque thread du pool
    de stockage verrait une base vide.

    Args:
        database_url: URL SQLAlchemy (ex: "sqlite:///movieviewer.db")

    Returns:
        Engine configure pour un acces multi-thread
    """
    if database_url.startswith("sqlite:///") and not database_url.startswith(
        "sqlite:///:memory:"
    ):
        db_path = Path(database_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    kwargs = {}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool

    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
        **kwargs,
    )


def init_db(engine: Engine) -> Engine:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans
    SQLModel.metadata, puis cree les tables manquantes.

    Doit etre appelee une fois au demarrage de l'application.

    Returns:
        L'engine initialise (pour usage comme Resource du container)
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from movieviewer.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.debug("Base de donnees initialisee", url=str(engine.url))
    return engine
