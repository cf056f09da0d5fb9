"""
Configuration for the Shirokuma SDK.

Uses pydantic-settings for environment variable loading.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class SessionSettings(BaseSettings):
    """Session configuration loaded from environment."""

    # Node connection
    endpoint: str = Field(
        default="http://localhost:2020/graphql",
        description="GraphQL endpoint of the node",
    )
    request_timeout: float = Field(default=30.0, description="Request timeout seconds")
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra HTTP headers sent with every request",
    )

    # Default schema (can be overridden per call)
    schema_id: str | None = Field(default=None, description="Default schema id")

    model_config = {"env_prefix": "SHIROKUMA_"}
