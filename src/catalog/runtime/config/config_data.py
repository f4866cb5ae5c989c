"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5000"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])
    expose_headers: list[str] = Field(
        default=["X-Total-Count", "X-Request-ID"],
        description="Response headers readable by browser clients",
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(
        default="plain", description="Log file format"
    )
    file: str | None = Field(default=None, description="Log file path (optional)")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./catalog.db",
        description="Database connection URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing the database password",
    )
    create_tables: bool = Field(
        default=True, description="Create missing tables on application startup"
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the connection string, injecting the password if configured."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if base_url.password or not self.password_env_var:
            return self.url

        password = os.getenv(self.password_env_var)
        if not password:
            logger.warning(
                "Environment variable {} is not set; connecting without a password",
                self.password_env_var,
            )
            return self.url

        return base_url.set(password=password).render_as_string(hide_password=False)


class PaginationConfig(BaseModel):
    """Defaults applied to list endpoints."""

    default_limit: int = Field(default=10, ge=1, description="Page size when none is given")
    max_limit: int = Field(default=100, ge=1, description="Largest accepted page size")


class CatalogConfig(BaseModel):
    """Catalog behaviour configuration."""

    store_backend: Literal["database", "memory"] = Field(
        default="database", description="Which book store backs the /books routes"
    )
    seed_memory_store: bool = Field(
        default=True, description="Load the sample books into the in-memory store"
    )
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=5000, description="Application port")
    title: str = Field(default="Book Management API", description="OpenAPI title")
    version: str = Field(default="1.0.0", description="OpenAPI version")
    docs_url: str | None = Field(
        default="/api-docs", description="Interactive documentation path"
    )
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

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog configuration"
    )
