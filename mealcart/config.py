"""Configuration management for mealcart."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .models import MealcartError


class ConfigError(MealcartError):
    """Raised when a configuration value can't be used."""


TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def load_dotenv(dotenv_path: Optional[Path] = None) -> Optional[Path]:
    """Copy KEY=value lines from a .env file into os.environ.

    Existing environment variables win. Without an explicit path the
    current directory, the project root and the package directory are
    tried in that order. Returns the file used, if any.
    """
    if dotenv_path is None:
        cwd = Path.cwd() / ".env"
        project_root = Path(__file__).parent.parent / ".env"
        package_dir = Path(__file__).parent / ".env"

        for path in [cwd, project_root, package_dir]:
            if path.exists():
                dotenv_path = path
                break

    if not dotenv_path or not Path(dotenv_path).exists():
        return None

    with open(dotenv_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                os.environ.setdefault(key.strip(), value.strip().strip("\"'"))

    return Path(dotenv_path)


def parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


@dataclass
class Config:
    """Main application configuration."""
    recipes_path: Path
    plans_path: Path

    pantry_path: Optional[Path] = None
    exclude_pantry: bool = True
    log_level: str = "WARNING"
    duplicate_threshold: float = 0.7

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "Config":
        """Load configuration from a .env file and environment variables."""
        load_dotenv(Path(dotenv_path) if dotenv_path else None)

        recipes_path = Path(os.environ.get(
            "MEALCART_RECIPES_PATH",
            Path.home() / "Documents/recipes",
        )).expanduser()
        plans_path = Path(os.environ.get(
            "MEALCART_PLANS_PATH",
            Path.home() / ".mealcart/plans",
        )).expanduser()
        pantry_path = os.environ.get("MEALCART_PANTRY_PATH")

        exclude_pantry = parse_bool(
            os.environ.get("MEALCART_EXCLUDE_PANTRY", "true"), "MEALCART_EXCLUDE_PANTRY",
        )

        threshold = os.environ.get("MEALCART_DUPLICATE_THRESHOLD", "0.7")
        try:
            duplicate_threshold = float(threshold)
        except ValueError:
            raise ConfigError(f"MEALCART_DUPLICATE_THRESHOLD must be a number, got {threshold!r}") from None

        log_level = os.environ.get("MEALCART_LOG_LEVEL", "WARNING").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"Unknown log level: {log_level}")

        return cls(
            recipes_path=recipes_path,
            plans_path=plans_path,
            pantry_path=Path(pantry_path).expanduser() if pantry_path else None,
            exclude_pantry=exclude_pantry,
            log_level=log_level,
            duplicate_threshold=duplicate_threshold,
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.recipes_path.exists():
            errors.append(f"Recipes path does not exist: {self.recipes_path}")

        if self.pantry_path and not self.pantry_path.exists():
            errors.append(f"Pantry file does not exist: {self.pantry_path}")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")

        if not 0 <= self.duplicate_threshold <= 1:
            errors.append("Duplicate threshold must be between 0 and 1")

        # Plans path doesn't need to exist - the store creates it

        return errors
