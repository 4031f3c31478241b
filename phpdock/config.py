"""phpdock configuration.

Centralised, typed configuration for the generator. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.

The defaults reproduce the classic two-container layout: an ``nginx:alpine``
webserver in front of a ``php-fpm`` backend built from a local Dockerfile.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


DEFAULT_SYSTEM_PACKAGES: list[str] = [
    "build-essential",
    "libpng-dev",
    "libjpeg62-turbo-dev",
    "libfreetype6-dev",
    "locales",
    "zip",
    "jpegoptim",
    "optipng",
    "pngquant",
    "gifsicle",
    "vim",
    "unzip",
    "git",
    "curl",
    "libzip-dev",
    "libonig-dev",
]

DEFAULT_PHP_EXTENSIONS: list[str] = ["pdo_mysql", "mbstring", "zip", "exif", "pcntl"]


class ImageConfig(BaseModel):
    """Container images and the build recipe of the PHP backend."""

    webserver_image: str = Field(default="nginx:alpine")
    php_base_image: str = Field(default="php:8.2-fpm")
    system_packages: list[str] = Field(default_factory=lambda: list(DEFAULT_SYSTEM_PACKAGES))
    php_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PHP_EXTENSIONS),
        description="Extensions installed in the backend image for every application",
    )
    user: str = Field(default="www")
    group: str = Field(default="www")
    uid: int = Field(default=1000, ge=1)
    gid: int = Field(default=1000, ge=1)


class ContainerConfig(BaseModel):
    """Service naming, restart policy and networking of the compose manifest."""

    webserver_name: str = Field(default="nginx")
    backend_name: str = Field(default="php")
    restart_policy: str = Field(default="unless-stopped")
    network_name: str = Field(default="app-network")
    network_driver: str = Field(default="bridge")
    fpm_port: int = Field(default=9000, ge=1, le=65535)

    @property
    def upstream(self) -> str:
        """FastCGI upstream the proxy forwards ``*.php`` requests to."""
        return f"{self.backend_name}:{self.fpm_port}"


class RuntimeConfig(BaseModel):
    """PHP ini overrides written to ``php/local.ini``."""

    upload_max_filesize: str = Field(default="40M", pattern=r"^\d+[KMG]?$")
    post_max_size: str = Field(default="40M", pattern=r"^\d+[KMG]?$")


class Config(BaseModel):
    """Global phpdock configuration.

    Instances are typically created once by the CLI entry point and then
    passed to ``ScaffoldGenerator`` and ``compose``.
    """

    output_dir: Path = Field(default=Path("."))
    overwrite: bool = Field(default=False)
    seed_index: bool = Field(default=False)
    images: ImageConfig = Field(default_factory=ImageConfig)
    containers: ContainerConfig = Field(default_factory=ContainerConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

    # Layout of the generated tree, relative to the output directory.
    compose_file: str = Field(default="docker-compose.yml")
    proxy_config_dir: str = Field(default="nginx/conf.d")
    php_dir: str = Field(default="php")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def proxy_config_file(self) -> str:
        """Relative path of the generated Nginx site configuration."""
        return f"{self.proxy_config_dir}/default.conf"

    @property
    def dockerfile(self) -> str:
        """Relative path of the generated backend Dockerfile."""
        return f"{self.php_dir}/Dockerfile"

    @property
    def ini_file(self) -> str:
        """Relative path of the generated PHP ini overrides."""
        return f"{self.php_dir}/local.ini"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            PHPDOCK_OUTPUT_DIR, PHPDOCK_OVERWRITE, PHPDOCK_SEED_INDEX,
            PHPDOCK_WEBSERVER_IMAGE, PHPDOCK_PHP_IMAGE, PHPDOCK_PHP_EXTENSIONS,
            PHPDOCK_NETWORK, PHPDOCK_UPLOAD_MAX_FILESIZE, PHPDOCK_POST_MAX_SIZE.
        """
        image_kwargs: dict[str, Any] = {}
        if os.environ.get("PHPDOCK_WEBSERVER_IMAGE"):
            image_kwargs["webserver_image"] = os.environ["PHPDOCK_WEBSERVER_IMAGE"]
        if os.environ.get("PHPDOCK_PHP_IMAGE"):
            image_kwargs["php_base_image"] = os.environ["PHPDOCK_PHP_IMAGE"]
        if os.environ.get("PHPDOCK_PHP_EXTENSIONS"):
            image_kwargs["php_extensions"] = [
                e.strip() for e in os.environ["PHPDOCK_PHP_EXTENSIONS"].split(",") if e.strip()
            ]

        container_kwargs: dict[str, Any] = {}
        if os.environ.get("PHPDOCK_NETWORK"):
            container_kwargs["network_name"] = os.environ["PHPDOCK_NETWORK"]

        runtime_kwargs: dict[str, Any] = {}
        if os.environ.get("PHPDOCK_UPLOAD_MAX_FILESIZE"):
            runtime_kwargs["upload_max_filesize"] = os.environ["PHPDOCK_UPLOAD_MAX_FILESIZE"]
        if os.environ.get("PHPDOCK_POST_MAX_SIZE"):
            runtime_kwargs["post_max_size"] = os.environ["PHPDOCK_POST_MAX_SIZE"]

        return cls(
            output_dir=Path(os.environ.get("PHPDOCK_OUTPUT_DIR", ".")),
            overwrite=_env_flag("PHPDOCK_OVERWRITE"),
            seed_index=_env_flag("PHPDOCK_SEED_INDEX"),
            images=ImageConfig(**image_kwargs),
            containers=ContainerConfig(**container_kwargs),
            runtime=RuntimeConfig(**runtime_kwargs),
        )


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")
