"""
Service configuration.

Read once from the process environment (and a local .env in development)
when the application starts.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .errors import ConfigurationError

# Load .env only if it exists (dev/local)
load_dotenv()

DEFAULT_ROOT_API_BASE_URL = "https://sandbox.uk.rootplatform.com/v1/insurance"
DEFAULT_MAX_BODY_BYTES = 25 * 1024 * 1024  # 5 x 4MB images after base64 inflation


class Settings(BaseModel):
    """Settings shared by every request. Never mutated after startup."""
    root_api_base_url: str = Field(default=DEFAULT_ROOT_API_BASE_URL)
    root_api_key: str = Field(..., min_length=1, repr=False)
    root_api_timeout: Optional[float] = Field(default=None, gt=0)
    max_body_bytes: int = Field(default=DEFAULT_MAX_BODY_BYTES, gt=0)
    log_level: str = Field(default="INFO")

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Raises:
            ConfigurationError: If ROOT_API_KEY is not set
        """
        api_key = os.getenv("ROOT_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError("ROOT_API_KEY not set in env.")

        timeout = os.getenv("ROOT_API_TIMEOUT")

        return cls(
            root_api_base_url=os.getenv("ROOT_API_BASE_URL") or DEFAULT_ROOT_API_BASE_URL,
            root_api_key=api_key,
            root_api_timeout=float(timeout) if timeout else None,
            max_body_bytes=int(os.getenv("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
