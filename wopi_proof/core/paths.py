"""
Centralized path configuration for wopi-proof.

Supports:
- Local config: ./config/
- External overlay: CONFIG_DIR=/path/to/private/config

Usage:
    from wopi_proof.core.paths import CONFIG_DIR, get_config_path

    settings_path = get_config_path("wopi_proof.yaml")
"""
import os
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# From wopi_proof/core/paths.py -> wopi_proof/core -> wopi_proof -> repo root
_REPO_ROOT = Path(__file__).parent.parent.parent
_DEFAULT_CONFIG_DIR = _REPO_ROOT / "config"

CONFIG_DIR = Path(os.getenv("CONFIG_DIR", str(_DEFAULT_CONFIG_DIR)))

PROOF_KEY_FILENAME = "proof_key"
SETTINGS_FILENAME = "wopi_proof.yaml"


def get_config_path(filename: str, required: bool = False) -> Optional[Path]:
    """
    Resolve a config file in CONFIG_DIR, falling back to the default config dir.

    Args:
        filename: Config filename (e.g., "wopi_proof.yaml")
        required: If True, raise FileNotFoundError when not found

    Returns:
        Path to config file, or None if not found and not required

    Raises:
        FileNotFoundError: If required=True and file not found
    """
    candidates = [CONFIG_DIR / filename]
    if CONFIG_DIR != _DEFAULT_CONFIG_DIR:
        candidates.append(_DEFAULT_CONFIG_DIR / filename)

    for path in candidates:
        if path.exists():
            logger.debug(f"Config '{filename}' resolved to: {path}")
            return path

    if required:
        searched = [str(c) for c in candidates]
        raise FileNotFoundError(
            f"Required config file '{filename}' not found.\n"
            f"Searched: {searched}"
        )

    logger.debug(f"Config '{filename}' not found (optional)")
    return None


def default_proof_key_path(config_dir: Optional[Path] = None) -> Path:
    """Default location of the proof key: ``<config_dir>/proof_key``."""
    return Path(config_dir or CONFIG_DIR) / PROOF_KEY_FILENAME


def is_using_external_config() -> bool:
    """Check if using external CONFIG_DIR."""
    return CONFIG_DIR != _DEFAULT_CONFIG_DIR
