"""
Configuration Management

Centralized configuration using Pydantic Settings.

Sources, highest priority first:
1. Keyword arguments
2. Environment variables (and ``.env``)
3. YAML settings file: ``$WOPI_PROOF_SETTINGS`` or ``<CONFIG_DIR>/wopi_proof.yaml``
"""
import os
from pathlib import Path
from typing import Optional, Tuple, Type

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from wopi_proof.core.paths import CONFIG_DIR, SETTINGS_FILENAME, default_proof_key_path, get_config_path


def settings_file() -> Optional[Path]:
    """Locate the YAML settings file, if any."""
    env_path = os.getenv("WOPI_PROOF_SETTINGS")
    if env_path:
        return Path(env_path)
    return get_config_path(SETTINGS_FILENAME)


class Settings(BaseSettings):
    """Application settings loaded from environment variables and YAML."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================
    # Proof Key Configuration
    # ============================================================
    config_dir: Path = Field(CONFIG_DIR, description="Directory holding the proof key and settings")
    proof_key_path: Optional[Path] = Field(
        None,
        description="RSA private key file (defaults to <config_dir>/proof_key)",
    )
    proof_headers_enabled: bool = Field(
        True,
        description="Emit X-WOPI-Proof headers when a key is available",
    )

    # ============================================================
    # API Configuration
    # ============================================================
    api_host: str = Field("127.0.0.1", description="API server bind address")
    api_port: int = Field(8000, description="API server port")

    # ============================================================
    # Logging Configuration
    # ============================================================
    log_level: str = Field("INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        "%(prefix)s %(levelname)s %(name)s: %(message)s",
        description="Log format string; %(prefix)s is pid,thread,elapsed",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=settings_file()),
            file_secret_settings,
        )

    @property
    def resolved_proof_key_path(self) -> Path:
        """Proof key location after applying the default."""
        return self.proof_key_path or default_proof_key_path(self.config_dir)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton).

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings
