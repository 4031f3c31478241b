"""Pydantic v2 model for the applications phpdock scaffolds.

An ``ApplicationDescriptor`` is the caller-supplied record describing one PHP
application: where its code lives on the host, which port Nginx serves it on,
and which document root inside the source tree is public.
"""

from __future__ import annotations

import re

from pydantic import AliasChoices, BaseModel, Field, field_validator

from phpdock.utils import normalize_relative


CONTAINER_WEB_ROOT = "/var/www/html"

_EXTENSION_NAME = re.compile(r"^[A-Za-z0-9_]+$")


class ApplicationDescriptor(BaseModel):
    """One PHP application to serve from the shared webserver/backend pair."""

    name: str = Field(
        ...,
        min_length=1,
        pattern=r"^[A-Za-z0-9][A-Za-z0-9._-]*$",
        description="Unique identifier, also the directory name inside the containers",
    )
    listen_port: int = Field(
        ...,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("listen_port", "listenPort", "port"),
        description="Port Nginx listens on for this application",
    )
    source_path: str = Field(
        ...,
        validation_alias=AliasChoices("source_path", "sourcePath", "path"),
        description="Host path of the application source, relative to the output directory",
    )
    document_root: str = Field(
        default="",
        validation_alias=AliasChoices("document_root", "documentRoot", "docroot"),
        description="Public directory relative to source_path (empty means the source root)",
    )
    php_extensions: set[str] = Field(
        default_factory=set,
        validation_alias=AliasChoices("php_extensions", "phpExtensions", "extensions"),
        description="Extra PHP extensions this application needs",
    )

    @field_validator("php_extensions")
    @classmethod
    def _check_extension_names(cls, value: set[str]) -> set[str]:
        bad = sorted(ext for ext in value if not _EXTENSION_NAME.match(ext))
        if bad:
            raise ValueError(f"invalid PHP extension name(s): {', '.join(bad)}")
        return value

    @property
    def container_path(self) -> str:
        """Mount point of the source tree inside both containers."""
        return f"{CONTAINER_WEB_ROOT}/{self.name}"

    @property
    def container_root(self) -> str:
        """Document root as seen by Nginx inside the webserver container."""
        docroot = normalize_relative(self.document_root)
        if docroot == ".":
            return self.container_path
        return f"{self.container_path}/{docroot}"

    @property
    def host_path(self) -> str:
        """Source path as written in a compose bind mount (``./`` prefixed)."""
        source = normalize_relative(self.source_path)
        if source == ".":
            return "./"
        return f"./{source}"

    @property
    def public_path(self) -> str:
        """Relative path of the document root on the host."""
        source = normalize_relative(self.source_path)
        docroot = normalize_relative(self.document_root)
        if docroot == ".":
            return source
        if source == ".":
            return docroot
        return f"{source}/{docroot}"

    def sorted_extensions(self) -> list[str]:
        """Return ``php_extensions`` in a stable order."""
        return sorted(self.php_extensions)
