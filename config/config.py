import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://kagi.com/api/v0"
DEFAULT_TIMEOUT_SECONDS = 60.0


class Config:
    """Configuration for the kagi CLI, resolved once and injected into the command."""

    def __init__(
        self,
        kagi_api_key: str = "",
        cache_dir: str = "",
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.KAGI_API_KEY = kagi_api_key
        self.CACHE_DIR = cache_dir
        self.API_BASE_URL = api_base_url.rstrip("/")
        self.TIMEOUT_SECONDS = timeout_seconds

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Config":
        """
        Build configuration from environment variables.

        When no mapping is given, a .env file in the working directory is loaded
        first (without overriding variables already set) and os.environ is used.

        Args:
            environ: Explicit environment mapping, mainly for tests

        Returns:
            Config: Populated configuration
        """
        if environ is None:
            env_path = Path.cwd() / ".env"
            if env_path.exists():
                load_dotenv(dotenv_path=env_path)
            environ = os.environ

        return cls(
            kagi_api_key=environ.get("KAGI_API_KEY", "").strip(),
            cache_dir=environ.get("KAGI_CACHE_DIR", "").strip(),
            api_base_url=environ.get("KAGI_API_BASE_URL", "").strip() or DEFAULT_API_BASE_URL,
            timeout_seconds=_parse_timeout(environ.get("KAGI_TIMEOUT_SECONDS")),
        )

    def __repr__(self) -> str:
        # Never echo the credential itself
        key_state = "set" if self.KAGI_API_KEY else "unset"
        return (
            f"Config(KAGI_API_KEY=<{key_state}>, CACHE_DIR={self.CACHE_DIR!r}, "
            f"API_BASE_URL={self.API_BASE_URL!r}, TIMEOUT_SECONDS={self.TIMEOUT_SECONDS})"
        )


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_TIMEOUT_SECONDS
