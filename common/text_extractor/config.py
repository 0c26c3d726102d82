"""
Process-wide configuration.

Settings are read once at process entry (``Settings.from_env``) and passed to
the extraction client explicitly. A ``.env`` file in the working directory is
honored through python-dotenv.
"""
from dataclasses import dataclass

from dotenv import load_dotenv

from .errors import ConfigurationError
from .utils import get_env

DEFAULT_MODEL = "pixtral-12b-2409"


@dataclass(frozen=True)
class Settings:
    api_key: str
    model: str = DEFAULT_MODEL
    log_level: str = "INFO"

    def __post_init__(self):
        if not self.api_key:
            raise ConfigurationError("MISSING MISTRAL_API_KEY! Set it in the environment or .env file")

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from environment variables (MISTRAL_API_KEY, MISTRAL_MODEL, LOG_LEVEL)."""
        if dotenv:
            load_dotenv()
        return cls(
            api_key=get_env("MISTRAL_API_KEY", ""),
            model=get_env("MISTRAL_MODEL", DEFAULT_MODEL),
            log_level=get_env("LOG_LEVEL", "INFO").upper(),
        )
