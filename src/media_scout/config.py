"""Configuration models, built once from the hydra config tree."""

import logging
from pathlib import Path
from typing import Optional

from hydra import compose, initialize_config_module
from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel, Field


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 MediaScout/0.1"
)


class ExtractorSettings(BaseModel):
    """Endpoints and timeouts for the acquisition paths."""

    render_service_url: Optional[str] = Field(None, description="Render service endpoint; unset disables that path")
    render_service_timeout_ms: int = Field(default=60000, ge=1, description="Render service call timeout")
    static_fetch_timeout: float = Field(default=15, gt=0, description="Static page fetch timeout in seconds")
    probe_timeout: float = Field(default=8, gt=0, description="Size probe timeout in seconds")
    user_agent: str = Field(default=DEFAULT_USER_AGENT)

    class Config:
        frozen = True

    @property
    def render_service_timeout(self) -> float:
        """Render service timeout in seconds."""
        return self.render_service_timeout_ms / 1000


class ServerSettings(BaseModel):
    host: str = "localhost"
    port: int = Field(default=8080, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class EventSettings(BaseModel):
    sink: str = Field(default="log", pattern="^(log|jsonl)$")
    jsonl_path: Path = Path("./data/events.jsonl")


class LoggingSettings(BaseModel):
    level: str = "INFO"
    rich: bool = True


class Settings(BaseModel):
    extractor: ExtractorSettings = Field(default_factory=ExtractorSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    events: EventSettings = Field(default_factory=EventSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_config(cls, cfg: DictConfig) -> "Settings":
        """Build settings from a resolved hydra/omegaconf tree."""
        data = OmegaConf.to_container(cfg, resolve=True)
        return cls(**{key: data[key] for key in ("extractor", "server", "events", "logging") if key in data})


def load_config(overrides: Optional[list[str]] = None) -> DictConfig:
    """Compose the packaged config outside of a ``@hydra.main`` entry point."""
    with initialize_config_module(config_module="media_scout.conf", version_base=None):
        return compose(config_name="config", overrides=overrides or [])


def load_settings(overrides: Optional[list[str]] = None) -> Settings:
    """
    Load settings from the packaged config.

    Args:
        overrides: hydra-style overrides, e.g. ``["extractor.probe_timeout=2"]``
    """
    return Settings.from_config(load_config(overrides))


def setup_logging(settings: LoggingSettings) -> None:
    """
    Install the root log handler for an entry point.

    Replaces any handlers already on the root logger, such as the ones
    ``@hydra.main`` installs before the entry point body runs.
    """
    level = getattr(logging, settings.level.upper(), logging.INFO)
    if settings.rich:
        from rich.logging import RichHandler

        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True)],
            force=True,
        )
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,
        )
