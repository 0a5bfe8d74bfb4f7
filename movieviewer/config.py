"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe
MOVIEVIEWER_, et peut optionnellement être fournie via un fichier .env.

La clé API TMDB est optionnelle : sans elle, seul le cache local est consultable.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de movieviewer/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MOVIEVIEWER_.
    Exemple : MOVIEVIEWER_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVIEVIEWER_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API TMDB (clé partagée passée en paramètre api_key sur chaque requête)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3")
    request_timeout: float = Field(default=30.0, gt=0)

    # Base de données locale (utilisateurs, cache films, favoris)
    database_url: str = Field(default="sqlite:///movieviewer.db")
    store_workers: int = Field(default=4, ge=1)

    # Connectivité initiale (la détection réseau est externe et poussée ensuite)
    start_offline: bool = Field(default=False)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/movieviewer.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)
