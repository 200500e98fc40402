"""
Configuration management for the OVIM governance service.

Settings are read from ``OVIM_``-prefixed environment variables and an
optional ``.env`` file.
"""
from typing import Optional, Dict, Any
from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import VDCPhase


class GovernanceSettings(BaseSettings):
    """Settings for the governance engine and its HTTP surface."""

    model_config = SettingsConfigDict(
        env_prefix="OVIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Core Application Settings
    app_name: str = Field(default="ovim-governance")
    app_version: str = Field(default="0.1.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8443)
    # Admission webhooks must be served over TLS
    tls_cert_file: Optional[str] = Field(default=None)
    tls_key_file: Optional[str] = Field(default=None)

    # Storage backend: "memory" or "postgres"
    storage_backend: str = Field(default="memory")
    database_url: Optional[str] = Field(default=None)
    database_schema: str = Field(default="public")
    db_pool_min_size: int = Field(default=2)
    db_pool_max_size: int = Field(default=10)
    db_command_timeout: float = Field(default=10.0)
    database_auto_migrate: bool = Field(default=False)

    # Redis dashboard cache (optional)
    redis_url: Optional[str] = Field(default=None)
    utilization_cache_ttl_seconds: int = Field(default=30)

    # Kubernetes API access for namespace lookups
    kube_api_url: str = Field(default="https://kubernetes.default.svc")
    kube_token_path: str = Field(default="/var/run/secrets/kubernetes.io/serviceaccount/token")
    kube_ca_path: Optional[str] = Field(default="/var/run/secrets/kubernetes.io/serviceaccount/ca.crt")
    admission_lookup_timeout_seconds: float = Field(default=2.0)
    # "kube" queries the API server; "memory" is for local runs without a cluster
    namespace_lookup_backend: str = Field(default="kube")

    # Governance behaviour
    active_vdc_phase: str = Field(default=VDCPhase.ACTIVE.value)
    zone_sync_auto_create: bool = Field(default=True)

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Only known backends may be selected."""
        backend = v.lower()
        if backend not in ("memory", "postgres"):
            raise ValueError(f"Unsupported storage backend: {v}")
        return backend

    @field_validator("namespace_lookup_backend")
    @classmethod
    def validate_namespace_lookup_backend(cls, v: str) -> str:
        backend = v.lower()
        if backend not in ("kube", "memory"):
            raise ValueError(f"Unsupported namespace lookup backend: {v}")
        return backend

    @field_validator("admission_lookup_timeout_seconds")
    @classmethod
    def validate_lookup_timeout(cls, v: float) -> float:
        """Admission lookups must stay within the orchestration API's webhook timeout."""
        if v <= 0 or v > 10:
            raise ValueError("admission_lookup_timeout_seconds must be in (0, 10]")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def get_database_config(self) -> Dict[str, Any]:
        """Pool configuration passed to the database manager."""
        return {
            "min_size": self.db_pool_min_size,
            "max_size": self.db_pool_max_size,
            "command_timeout": self.db_command_timeout,
        }


@lru_cache()
def get_settings() -> GovernanceSettings:
    """Get cached settings instance."""
    return GovernanceSettings()
