"""
Interface to configuration as persisted in .yaml file.
"""
from __future__ import annotations

from logging import Logger
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..core import DEFAULT_MAX_BATCH_SIZE, ApiClient, Session, TenantContext
from .yaml_model import BaseYamlModel

__all__ = [
    "Config",
    "InstanceConfig",
]


class Config(BaseYamlModel):
    """
    Encapsulates configuration for use in tools.
    """

    instances: dict[str, InstanceConfig]
    """
    Mapping of instance names to configs.
    """


class InstanceConfig(BaseModel):
    """
    Encapsulates info for a catalog tenant.
    """

    api_url: str
    tenant_id: str = Field(min_length=1)
    tenant_identifier: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    language: str = "en"
    max_batch_size: int = Field(default=DEFAULT_MAX_BATCH_SIZE, ge=1)

    @field_validator("api_url", mode="before")
    def validate_api_url(cls, value: Any) -> Any:
        if not isinstance(value, str):
            # let pydantic handle type error
            return value

        if not value.startswith(("http://", "https://")):
            raise ValueError(f"not an http(s) url: '{value}'")

        return value

    @property
    def tenant(self) -> TenantContext:
        return TenantContext(
            tenant_id=self.tenant_id, tenant_identifier=self.tenant_identifier
        )

    def create_session(
        self,
        *,
        logger: Logger,
        language: str | None = None,
        max_batch_size: int | None = None,
    ) -> Session:
        """
        Get session from this instance's fields, optionally overriding
        language and batch size.
        """
        client = ApiClient(self.api_url, headers=self.headers, logger=logger)

        return Session(
            client,
            self.tenant,
            language=language or self.language,
            max_batch_size=max_batch_size or self.max_batch_size,
            logger=logger,
        )
