"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel

from unoflip.logging import GameLogConfig


class GameConfig(BaseModel):
    """Game configuration."""

    min_players: int = 2
    max_players: int = 4
    hand_size: int = 7
    match_threshold: int = 500  # Score that wins the match
    seed: int | None = None  # Seed for the deck shuffle (None = random)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class Config(BaseModel):
    """Root configuration."""

    game: GameConfig = GameConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
