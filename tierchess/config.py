# tierchess/config.py
import logging
import os
import tomllib
from dataclasses import dataclass, field

from tierchess.difficulty import tier_for


def _default_progress_path() -> str:
    return os.path.join(os.path.expanduser("~"), ".tierchess", "progress.json")


@dataclass
class EngineConfig:
    default_tier: str = "beginner"
    think_delay_ms: int = 600  # pause before the engine replies, lets the UI draw the last move
    max_workers: int = 1


@dataclass
class ProgressConfig:
    storage_path: str = field(default_factory=_default_progress_path)
    storage_key: str = "chess_unlocked_level"


@dataclass
class UIConfig:
    app_name: str = "TierChess"
    engine_author: str = "TierChess developers"
    player_color: str = "white"
    api_port: int = 8000


@dataclass
class Config:
    engine: EngineConfig = field(default_factory=EngineConfig)
    progress: ProgressConfig = field(default_factory=ProgressConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("engine", "progress", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        cfg.validate()
        return cfg

    def validate(self):
        """Reject settings the engine cannot run with."""
        tier_for(self.engine.default_tier)
        if self.engine.think_delay_ms < 0:
            raise ValueError("engine.think_delay_ms must be >= 0")
        if self.engine.max_workers < 1:
            raise ValueError("engine.max_workers must be >= 1")
        if self.ui.player_color not in ("white", "black"):
            raise ValueError("ui.player_color must be 'white' or 'black'")


def load_config() -> Config:
    cfg = Config.load_from_toml(os.environ.get("TIERCHESS_CONFIG_TOML", "config.toml"))
    # env overrides for quick experiments
    tier = os.environ.get("TIERCHESS_TIER")
    if tier:
        cfg.engine.default_tier = tier_for(tier).name
    level = os.environ.get("TIERCHESS_LOG_LEVEL")
    if level:
        cfg.log_level = level
    return cfg


def setup_logging(level: str = None):
    """Configure stderr logging for the front ends. The engine core never logs."""
    logging.basicConfig(
        level=(level or CONFIG.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# single globally importable config instance
CONFIG = load_config()
