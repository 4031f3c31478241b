"""Merge application descriptors into one proxy config and one compose manifest.

Whatever the number of applications, the result is the two-container layout:
a single Nginx ``webserver`` service holding one server block per application
and a single PHP-FPM ``backend`` service. Every application's source tree is
mounted into both containers at the same path so ``SCRIPT_FILENAME`` resolves
identically on each side of the FastCGI hop.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from phpdock.config import Config
from phpdock.descriptors import ApplicationDescriptor, validate_descriptors


# ---------------------------------------------------------------------------
# Proxy configuration
# ---------------------------------------------------------------------------


class ServerBlock(BaseModel):
    """One Nginx ``server { ... }`` block."""

    name: str
    listen: int
    root: str
    index: list[str] = Field(default_factory=lambda: ["index.php", "index.html"])
    error_log: str = "/var/log/nginx/error.log"
    access_log: str = "/var/log/nginx/access.log"
    upstream: str = "php:9000"


class ProxyConfig(BaseModel):
    """Ordered server blocks, one per application, in input order."""

    server_blocks: list[ServerBlock] = Field(default_factory=list)

    @property
    def ports(self) -> list[int]:
        return [block.listen for block in self.server_blocks]


# ---------------------------------------------------------------------------
# Compose manifest
# ---------------------------------------------------------------------------


class NetworkDefinition(BaseModel):
    name: str
    driver: str = "bridge"


class BuildDefinition(BaseModel):
    context: str
    dockerfile: str = "Dockerfile"


class ServiceDefinition(BaseModel):
    """A compose service; exactly one of ``image`` and ``build`` is set."""

    name: str
    container_name: str
    image: str | None = None
    build: BuildDefinition | None = None
    restart: str = "unless-stopped"
    working_dir: str | None = None
    ports: list[str] = Field(default_factory=list)
    volumes: list[str] = Field(default_factory=list)
    networks: list[str] = Field(default_factory=list)


class ComposeManifest(BaseModel):
    """Network plus the ``webserver`` and ``backend`` services."""

    network: NetworkDefinition
    webserver: ServiceDefinition
    backend: ServiceDefinition
    php_extensions: list[str] = Field(default_factory=list)

    @property
    def services(self) -> list[ServiceDefinition]:
        return [self.webserver, self.backend]


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def compose(
    descriptors: Sequence[ApplicationDescriptor],
    config: Config | None = None,
) -> tuple[ProxyConfig, ComposeManifest]:
    """Compose the proxy configuration and compose manifest for *descriptors*.

    The descriptor set is validated again here, so calling ``compose`` on an
    invalid set raises the same error ``validate_descriptors`` would.

    Args:
        descriptors: Applications to serve, in the order their server blocks,
            ports and volumes should appear.
        config: Generator configuration. Defaults to ``Config()``.

    Returns:
        A ``(ProxyConfig, ComposeManifest)`` tuple.
    """
    validate_descriptors(descriptors)
    config = config or Config()
    containers = config.containers

    server_blocks = [
        ServerBlock(
            name=d.name,
            listen=d.listen_port,
            root=d.container_root,
            upstream=containers.upstream,
        )
        for d in descriptors
    ]

    app_volumes = [f"{d.host_path}:{d.container_path}" for d in descriptors]
    ports = _unique(f"{d.listen_port}:{d.listen_port}" for d in descriptors)

    webserver = ServiceDefinition(
        name="webserver",
        container_name=containers.webserver_name,
        image=config.images.webserver_image,
        restart=containers.restart_policy,
        ports=ports,
        volumes=_unique(
            [*app_volumes, f"./{config.proxy_config_dir}:/etc/nginx/conf.d"]
        ),
        networks=[containers.network_name],
    )
    backend = ServiceDefinition(
        name="backend",
        container_name=containers.backend_name,
        build=BuildDefinition(context=f"./{config.php_dir}"),
        restart=containers.restart_policy,
        working_dir="/var/www",
        volumes=_unique(
            [*app_volumes, f"./{config.ini_file}:/usr/local/etc/php/conf.d/local.ini"]
        ),
        networks=[containers.network_name],
    )

    extensions = list(config.images.php_extensions)
    for d in descriptors:
        extensions.extend(d.sorted_extensions())

    manifest = ComposeManifest(
        network=NetworkDefinition(
            name=containers.network_name, driver=containers.network_driver
        ),
        webserver=webserver,
        backend=backend,
        php_extensions=_unique(extensions),
    )
    return ProxyConfig(server_blocks=server_blocks), manifest


def _unique(items) -> list[str]:
    """De-duplicate while keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
