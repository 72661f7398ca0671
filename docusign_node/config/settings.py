"""
Runtime settings for the DocuSign node.

Values are loaded from ``DOCUSIGN_*`` environment variables, falling back to
defaults suitable for a single workflow worker.
"""

import os
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator  # type: ignore

from docusign_node.config.constants.docusign import (
    DEFAULT_PAGE_SIZE,
    Environment,
    Region,
)


class NodeSettings(BaseModel):
    """Settings shared by every DocuSign node execution."""

    environment: Environment = Field(default=Environment.DEMO, description="Default DocuSign environment")
    region: Region = Field(default=Region.NA, description="Default production region")
    timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, description="Items requested per page when returning all")
    rate_limit_per_second: Optional[float] = Field(
        default=None, description="Maximum requests per second, unlimited when unset"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("page_size must be a positive integer")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def from_env(cls) -> "NodeSettings":
        """
        Load settings from environment variables.

        Returns:
            NodeSettings instance with values from environment
        """
        rate_limit = os.getenv("DOCUSIGN_RATE_LIMIT_PER_SECOND")
        return cls(
            environment=Environment(os.getenv("DOCUSIGN_ENVIRONMENT", "demo")),
            region=Region(os.getenv("DOCUSIGN_REGION", "na")),
            timeout=float(os.getenv("DOCUSIGN_TIMEOUT", "30")),
            page_size=int(os.getenv("DOCUSIGN_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))),
            rate_limit_per_second=float(rate_limit) if rate_limit else None,
            log_level=os.getenv("DOCUSIGN_LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


@lru_cache()
def get_settings() -> NodeSettings:
    """Get cached node settings."""
    return NodeSettings.from_env()
