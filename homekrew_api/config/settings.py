"""Pydantic Settings for the API client.

All environment variables use the HOMEKREW_ prefix.
Example: HOMEKREW_BASE_URL=http://192.168.0.179:8000, HOMEKREW_TIMEOUT_SECONDS=10
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """API client configuration validated from environment variables."""

    # Backend
    base_url: str = "https://api.homekrew.in"
    api_prefix: str = "/api/v1"

    # Transport
    timeout_seconds: float = Field(default=30.0, gt=0)
    device_id: str | None = None  # Sent as X-Device-ID when set

    # Credentials
    credential_store_path: str = "~/.homekrew/credentials.json"
    send_empty_bearer: bool = True  # Attach "Authorization: Bearer" with no token

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True

    model_config = {"env_prefix": "HOMEKREW_"}
