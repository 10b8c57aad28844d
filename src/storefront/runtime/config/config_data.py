"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./storefront.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )
    create_tables: bool = Field(
        default=True, description="Create missing tables when the app starts"
    )

    @computed_field
    @property
    def password(self) -> str | None:
        """Get the database password from the URL, a secrets file or an env var.

        The URL wins when it carries a password. Otherwise the mounted secrets
        file is read, then the named environment variable.
        """
        from sqlalchemy.engine import make_url

        url_obj = make_url(self.url)
        if url_obj.password:
            return url_obj.password

        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e

        if self.password_env_var:
            import os

            password = os.getenv(self.password_env_var)
            if password is None:
                raise ValueError(
                    f"Environment variable {self.password_env_var} not set"
                )
            return password

        return None

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with password if provided."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if base_url.password or base_url.get_backend_name() == "sqlite":
            return self.url

        resolved_password = self.password
        if resolved_password:
            logger.debug("Using resolved password for database {}", base_url.database)
            # render_as_string keeps the password instead of masking it
            return base_url.set(password=resolved_password).render_as_string(
                hide_password=False
            )
        return self.url


class StorageConfig(BaseModel):
    """Locations of product assets.

    The private root holds downloadable files and is only reachable through the
    admin download route. The public root holds preview images and is served
    as static files under ``public_url_prefix``.
    """

    private_dir: str = Field(
        default="products", description="Directory for downloadable product files"
    )
    public_dir: str = Field(
        default="public/products", description="Directory for public product images"
    )
    public_url_prefix: str = Field(
        default="/products", description="URL path under which public images are served"
    )

    @property
    def private_root(self) -> Path:
        return Path(self.private_dir)

    @property
    def public_root(self) -> Path:
        return Path(self.public_dir)


class AdminConfig(BaseModel):
    """Credentials guarding the /admin routes."""

    username: str = Field(default="admin", description="Admin username")
    hashed_password: str = Field(
        default="",
        description="Base64 encoded SHA-512 digest of the admin password",
    )


class CacheConfig(BaseModel):
    """Storefront page cache configuration."""

    enabled: bool = Field(default=True, description="Cache rendered storefront pages")
    max_entries: int = Field(default=64, description="Maximum cached pages")
    ttl_seconds: int = Field(default=300, description="Time to live of a cached page")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="Product asset storage"
    )
    admin: AdminConfig = Field(
        default_factory=AdminConfig, description="Admin area credentials"
    )
    cache: CacheConfig = Field(
        default_factory=CacheConfig, description="Storefront page cache"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
