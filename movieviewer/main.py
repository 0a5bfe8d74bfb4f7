"""
Point d'entrée CLI de MovieViewer.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

import typer
from loguru import logger

from .adapters.cli.commands import (
    detail,
    favorite_add,
    favorite_remove,
    favorites,
    movies,
    register,
    search,
)
from .config import Settings
from .container import Container
from .logging_config import configure_logging

__version__ = "0.1.0"

app = typer.Typer(
    name="movieviewer",
    help="Consultation de films TMDB avec cache hors-ligne et favoris",
)
container = Container()

# Monter les commandes depuis commands.py
app.command()(movies)
app.command()(search)
app.command()(detail)
app.command()(register)
app.command()(favorites)
app.command(name="favorite-add")(favorite_add)
app.command(name="favorite-remove")(favorite_remove)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration MovieViewer")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"URL TMDB : {config.tmdb_base_url}")
    typer.echo(f"Démarrage hors-ligne : {'oui' if config.start_offline else 'non'}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"MovieViewer v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Démarrage de MovieViewer", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
