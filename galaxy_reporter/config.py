import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from galaxy_reporter.enumerations import Defaults, NumericLimits
from galaxy_reporter.exceptions import ConfigurationError


class GalaxyConfig(BaseModel):
    """Connection settings for a single reporter run."""

    galaxy_url: str = Field(default=Defaults.GALAXY_URL.value, title="Galaxy URL")
    api_key: Optional[str] = Field(default=None, title="API Key")
    timeout: float = Field(default=float(NumericLimits.TIMEOUT), gt=0, title="Timeout")

    model_config = ConfigDict(frozen=True)

    @field_validator("galaxy_url")
    @classmethod
    def check_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Galaxy URL must start with http:// or https://, got '{value}'")
        return value

    @field_validator("api_key")
    @classmethod
    def blank_key_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @property
    def authenticated(self) -> bool:
        return self.api_key is not None

    @classmethod
    def from_sources(
        cls,
        galaxy_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "GalaxyConfig":
        """
        Build a configuration from explicit values. Only the URL falls back to the
        GALAXY_URL environment variable (a .env file is honoured); the API key
        is taken from the caller alone.

        Raises:
            ConfigurationError: If the merged values are invalid.
        """
        load_dotenv()

        values = {
            "galaxy_url": galaxy_url or os.getenv("GALAXY_URL") or Defaults.GALAXY_URL.value,
            "api_key": api_key,
        }
        if timeout is not None:
            values["timeout"] = timeout

        try:
            return cls(**values)
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise ConfigurationError(messages) from e
