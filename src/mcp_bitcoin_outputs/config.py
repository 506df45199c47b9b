"""Configuration loading and management."""

from dataclasses import dataclass
from pathlib import Path

try:
    import tomli
except ImportError:  # pragma: no cover
    import tomllib as tomli  # Python 3.11+

from mcp_bitcoin_outputs.envelope import MAX_INSCRIPTION_SIZE


# Standard config locations, first match wins
CONFIG_PATHS = [
    Path("mcp-bitcoin-outputs.toml"),
    Path.home() / ".config" / "mcp-bitcoin-outputs" / "config.toml",
]


@dataclass
class Config:
    """Server configuration."""

    # Inscription settings
    max_inscription_size: int = MAX_INSCRIPTION_SIZE

    # Logging settings
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.max_inscription_size <= 0:
            raise ValueError(f"max_inscription_size must be positive, got {self.max_inscription_size}")
        # A configured cap can only be stricter than the protocol limit.
        self.max_inscription_size = min(self.max_inscription_size, MAX_INSCRIPTION_SIZE)
        self.log_level = self.log_level.upper()


DEFAULT_CONFIG = Config()


def load_config(path: Path) -> Config:
    """Load configuration from TOML file.

    Args:
        path: Path to config file

    Returns:
        Loaded configuration, merged with defaults
    """
    if not path.exists():
        return Config()

    with open(path, "rb") as f:
        data = tomli.load(f)

    inscription = data.get("inscription", {})
    logging_section = data.get("logging", {})

    max_size = inscription.get("max_size", MAX_INSCRIPTION_SIZE)
    if isinstance(max_size, bool) or not isinstance(max_size, int):
        raise ValueError(f"inscription.max_size must be an integer, got {max_size!r}")

    level = logging_section.get("level", "WARNING")
    if not isinstance(level, str):
        raise ValueError(f"logging.level must be a string, got {level!r}")

    return Config(
        max_inscription_size=max_size,
        log_level=level,
    )


def find_config() -> Config:
    """Load the first config file found in the standard locations."""
    for path in CONFIG_PATHS:
        if path.exists():
            return load_config(path)
    return Config()
