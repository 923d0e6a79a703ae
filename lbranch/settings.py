"""Credential resolution and the cached team selection."""

import logging
import os
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from lbranch.errors import ConfigError
from lbranch.models import TeamConfig

logger = logging.getLogger(__name__)


def _config_dir() -> Path:
    """Return ~/.config/lbranch, respecting XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / "lbranch"


CONFIG_PATH = _config_dir() / "config"

_MISSING_KEY_MESSAGE = (
    "LINEAR_API_KEY not found.\n"
    "   Set it as an environment variable: export LINEAR_API_KEY=lin_api_xxxxx\n"
    "   Or add it to your repo's .env file: LINEAR_API_KEY=lin_api_xxxxx\n"
    "   Generate one at: Linear > Settings > API > Personal API Keys"
)


class LbranchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    linear_api_key: SecretStr | None = None


def load_settings(git_root: Path | None) -> LbranchSettings:
    """Resolve the Linear API key.

    Precedence (highest to lowest):
    1. LINEAR_API_KEY env var
    2. LINEAR_API_KEY in .env at the git repository root
    """
    env_file = git_root / ".env" if git_root else None
    settings = LbranchSettings(_env_file=env_file)  # type: ignore[call-arg]
    if not settings.linear_api_key or not settings.linear_api_key.get_secret_value():
        raise ConfigError(_MISSING_KEY_MESSAGE)
    return settings


class TeamConfigStore:
    """JSON cache of the selected team. Unreadable files count as a miss."""

    def __init__(self, path: Path = CONFIG_PATH) -> None:
        self.path = path

    def load(self) -> TeamConfig | None:
        if not self.path.exists():
            return None
        try:
            return TeamConfig.model_validate_json(self.path.read_text())
        except (OSError, ValueError) as exc:
            logger.debug("Ignoring unreadable team config %s: %s", self.path, exc)
            return None

    def save(self, config: TeamConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(config.model_dump_json(indent=2, by_alias=True))
        logger.debug("Saved team config to %s", self.path)
