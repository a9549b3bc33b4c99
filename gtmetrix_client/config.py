"""Configuration for the GTmetrix client."""

from pydantic import BaseModel, Field, SecretStr, field_validator


class GTmetrixConfig(BaseModel):
    """Configuration for a GTmetrix test session."""

    username: str
    api_key: SecretStr
    api_base_url: str = "https://gtmetrix.com/api/0.1/"
    poll_interval: float = Field(default=1.0, gt=0)
    timeout: float = Field(default=300.0, gt=0)
    request_timeout: float = Field(default=30.0, gt=0)
    # Raise DecodeError on malformed poll responses instead of returning an
    # empty snapshot
    strict_decode: bool = False

    @field_validator("api_base_url")
    @classmethod
    def ensure_trailing_slash(cls, value: str) -> str:
        """Request paths are resolved relative to the base URL path."""
        return value if value.endswith("/") else f"{value}/"
