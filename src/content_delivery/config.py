"""
Configuration management for the SDK.
"""

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StackConfig(BaseSettings):
    """Connection and logging settings shared by every builder of a stack.

    Values can be passed directly or picked up from ``CONTENT_DELIVERY_*``
    environment variables (and a local ``.env`` file).
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CONTENT_DELIVERY_")

    api_key: Optional[str] = None
    delivery_token: Optional[str] = None
    environment: Optional[str] = None
    branch: Optional[str] = None

    scheme: str = Field("https://", description="URL scheme, e.g. https://")
    host: str = Field("cdn.contentstack.io", description="Delivery API host")
    version: str = Field("v3", description="API version path segment")
    timeout_seconds: float = Field(30, gt=0, description="Per-request timeout")
    max_workers: int = Field(4, ge=1, description="Transport worker threads")
    http_proxy: Optional[str] = None

    debug: bool = False
    log_level: str = "INFO"

    @field_validator("scheme")
    @classmethod
    def validate_scheme(cls, v):
        if not v.endswith("://"):
            v = v.rstrip(":/") + "://"
        return v

    @property
    def base_url(self) -> str:
        return f"{self.scheme}{self.host.strip('/')}"

    def setup_logging(self) -> None:
        """Configure logging for the SDK."""
        level_name = "DEBUG" if self.debug else self.log_level.upper()
        level = getattr(logging, level_name, logging.INFO)

        logger = logging.getLogger("content_delivery")
        logger.setLevel(level)

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(f"content_delivery.{name}")
