"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe
CINEFORM_, et peut optionnellement etre fournie via un fichier .env.

La cle TMDB est optionnelle : l'auto-remplissage et le calendrier des episodes
a venir sont desactives si elle n'est pas fournie.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe CINEFORM_.
    Exemple : CINEFORM_UPCOMING_WINDOW_DAYS=14
    """

    model_config = SettingsConfigDict(
        env_prefix="CINEFORM_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Store documentaire
    database_url: str = Field(default="sqlite:///cineform.db")

    # TMDB (cle v3 ou jeton v4)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_language: str = Field(default="pt-BR")
    cache_dir: Path = Field(default=Path(".cache/api"))

    # Episodes a venir
    upcoming_window_days: int = Field(default=30, ge=1)
    upcoming_candidate_limit: int = Field(default=20, ge=1, le=100)

    # Logging (fichier + stderr)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cineform.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Verifie si l'API TMDB est configuree."""
        return bool(self.tmdb_api_key)
