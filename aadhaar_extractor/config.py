"""
Centralized configuration management.

Configuration is loaded from:
1. Environment variables
2. .env file (if present)
3. Default values

Usage:
    from aadhaar_extractor.config import Config
    config = Config()
    print(config.extraction.context_window)  # 150 unless CONTEXT_WINDOW is set
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError


def _load_dotenv(dotenv_path: Optional[Path] = None) -> None:
    """
    Minimal .env loader (no external dependency).

    Supports KEY=VALUE, ignores blank lines and comments (#).
    Does not override existing environment variables.
    """
    if dotenv_path is None:
        dotenv_path = Path(__file__).resolve().parent.parent / ".env"

    if not dotenv_path.exists() or not dotenv_path.is_file():
        return

    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if not key:
            continue
        # Only set if not already in environment
        if os.getenv(key) in (None, ""):
            os.environ[key] = value


# Load .env on module import
_load_dotenv()


def _get_bool_env(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(key, "").strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


def _get_int_env(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.getenv(key, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: Optional[float] = None) -> Optional[float]:
    """Get float from environment variable."""
    value = os.getenv(key, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass
class ExtractionConfig:
    """
    Tunables for layout reconstruction and field extraction.

    The context window and line threshold were tuned empirically against
    UIDAI e-Aadhaar letters; both are exposed so other layouts can be tried
    without code changes.
    """
    # Characters inspected before/after each ID candidate occurrence
    context_window: int = field(default_factory=lambda: _get_int_env("CONTEXT_WINDOW", 150))

    # Max vertical distance (PDF units) between fragments on the same line
    line_threshold: float = field(
        default_factory=lambda: _get_float_env("LINE_THRESHOLD", 8.0)
    )

    # Documents with fewer extracted characters are treated as empty
    min_text_chars: int = field(default_factory=lambda: _get_int_env("MIN_TEXT_CHARS", 10))

    # DOB search span after a gender keyword
    dob_context_chars: int = field(default_factory=lambda: _get_int_env("DOB_CONTEXT_CHARS", 50))

    # Lines after the "To" marker searched for the addressee name
    name_search_lines: int = field(default_factory=lambda: _get_int_env("NAME_SEARCH_LINES", 4))

    # Accepted birth year range (inclusive)
    min_birth_year: int = field(default_factory=lambda: _get_int_env("MIN_BIRTH_YEAR", 1900))
    max_birth_year: int = field(default_factory=lambda: _get_int_env("MAX_BIRTH_YEAR", 2025))

    # Run the loose fallback tier when the primary tiers are incomplete
    fallback_enabled: bool = field(default_factory=lambda: _get_bool_env("FALLBACK_ENABLED", True))

    def validate(self) -> None:
        """Raise ConfigurationError for values that cannot work."""
        if self.context_window <= 0:
            raise ConfigurationError("CONTEXT_WINDOW must be positive", config_key="CONTEXT_WINDOW")
        if self.line_threshold <= 0:
            raise ConfigurationError("LINE_THRESHOLD must be positive", config_key="LINE_THRESHOLD")
        if self.min_text_chars < 0:
            raise ConfigurationError("MIN_TEXT_CHARS must not be negative", config_key="MIN_TEXT_CHARS")
        if self.name_search_lines <= 0:
            raise ConfigurationError("NAME_SEARCH_LINES must be positive", config_key="NAME_SEARCH_LINES")
        if self.min_birth_year > self.max_birth_year:
            raise ConfigurationError(
                "MIN_BIRTH_YEAR must not exceed MAX_BIRTH_YEAR",
                config_key="MIN_BIRTH_YEAR",
            )


@dataclass
class Config:
    """
    Main application configuration.

    All settings are loaded from environment variables with sensible defaults.
    Set DEBUG=1 in environment to enable debug mode.
    """

    # Base directory (project root)
    base_dir: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    logs_dir: Path = field(default=None)

    # Debug mode (verbose logging of stages, candidates and timings)
    debug: bool = field(default_factory=lambda: _get_bool_env("DEBUG", False))

    # File logging is opt-in; the extractor itself never touches the filesystem
    log_to_file: bool = field(default_factory=lambda: _get_bool_env("LOG_TO_FILE", False))

    # Sub-configurations
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)

    def __post_init__(self):
        """Resolve paths after initialization.

        Extraction values are checked by ``ExtractionConfig.validate()`` where
        they are consumed (orchestrator and strategy construction), not here.
        """
        if self.logs_dir is None:
            self.logs_dir = self.base_dir / os.getenv("LOG_DIR", "logs")


# Global config instance (lazily initialized)
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
