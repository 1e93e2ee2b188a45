"""Configuration contracts."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://api.apito.io/graphql"
DEFAULT_TIMEOUT = 30.0


class ApitoConfig(BaseModel):
    model_config = {"frozen": True}

    base_url: str
    api_key: str = ""
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    tenant_id: str | None = None
    """Tenant sent with every call that does not pass its own ``tenant_id``."""

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        url = value.strip()
        if not url.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return url

    @field_validator("tenant_id")
    @classmethod
    def blank_tenant_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()
