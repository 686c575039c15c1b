"""
Typed configuration domain objects.

Immutable, Pydantic-validated settings handed to the file hydration
transformer when it is installed:
- FilesPluginOptions  (what callers may override)
- DeploymentConfig    (the resolved settings every hydrated file closes over)
"""

import logging
from typing import Callable, Literal, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, field_validator

from .config import Settings

logger = logging.getLogger(__name__)

DEFAULT_API_ROOT = "https://api.telegram.org"

Environment = Literal["prod", "test"]

# (root, token, path, environment) -> URL of the file contents
FileUrlBuilder = Callable[[str, str, str, str], Union[str, httpx.URL]]


def default_build_file_url(root: str, token: str, path: str, env: str) -> str:
    """Default Bot API file URL: ``{root}/file/bot{token}/[test/]{path}``."""
    prefix = "test/" if env == "test" else ""
    return f"{root}/file/bot{token}/{prefix}{path}"


class FilesPluginOptions(BaseModel):
    """Optional overrides, mainly useful with a self-hosted Bot API server.

    ``environment="test"`` targets Telegram's separate test infrastructure,
    which needs its own bot created through the test @BotFather.
    """

    model_config = ConfigDict(frozen=True)

    api_root: Optional[str] = None
    environment: Optional[Environment] = None
    build_file_url: Optional[FileUrlBuilder] = None


class DeploymentConfig(BaseModel):
    """Everything needed to turn a ``file_path`` into a fetchable location."""

    model_config = ConfigDict(frozen=True)

    token: str
    api_root: str = DEFAULT_API_ROOT
    environment: Environment = "prod"
    build_file_url: FileUrlBuilder = default_build_file_url

    @field_validator("api_root")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v:
            raise ValueError("api_root must not be empty")
        return v.rstrip("/")

    def file_url(self, path: str) -> str:
        """Build the download URL for a server-relative ``file_path``."""
        link = self.build_file_url(self.api_root, self.token, path, self.environment)
        return str(link)

    @classmethod
    def from_options(
        cls, token: str, options: Optional[FilesPluginOptions] = None
    ) -> "DeploymentConfig":
        """Merge plugin options over the defaults."""
        options = options or FilesPluginOptions()
        return cls(
            token=token,
            api_root=options.api_root or DEFAULT_API_ROOT,
            environment=options.environment or "prod",
            build_file_url=options.build_file_url or default_build_file_url,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DeploymentConfig":
        """Build the runtime config from environment-backed settings."""
        logger.debug(
            f"Deployment config from settings: root={settings.telegram_api_root}, "
            f"environment={settings.telegram_environment}"
        )
        return cls(
            token=settings.telegram_bot_token,
            api_root=settings.telegram_api_root,
            environment=settings.telegram_environment,
        )
