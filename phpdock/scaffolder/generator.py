"""Main scaffolding orchestrator.

Takes a list of ``ApplicationDescriptor`` values and produces the Nginx +
PHP-FPM + Docker Compose development environment for them:

- ``docker-compose.yml`` with the ``webserver`` and ``backend`` services
- ``nginx/conf.d/default.conf`` with one server block per application
- ``php/Dockerfile`` and ``php/local.ini`` for the backend image
- optionally a ``phpinfo()`` ``index.php`` in each document root
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from phpdock.config import Config
from phpdock.descriptors import ApplicationDescriptor

from .composer import ComposeManifest, ProxyConfig, compose
from .templates import TemplateKind, TemplateRenderer
from .writer import Artifact, ArtifactWriter, WriteReport


class ScaffoldGenerator:
    """Validates, composes, renders and writes one generation run.

    Rendering happens entirely in memory before the writer is called, so
    validation and template errors never leave partial output behind.
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self.renderer = TemplateRenderer()
        self.writer = ArtifactWriter()

    # -- Public API --------------------------------------------------------

    def build_artifacts(self, descriptors: Sequence[ApplicationDescriptor]) -> list[Artifact]:
        """Render every artifact for *descriptors* without touching the disk.

        Raises:
            DescriptorValidationError: The descriptor set is invalid.
            MissingFieldError: A template placeholder had no value.
        """
        proxy, manifest = compose(descriptors, self.config)

        artifacts = [
            Artifact(
                path=self.config.compose_file,
                content=self.renderer.render(TemplateKind.COMPOSE_MANIFEST, manifest),
            ),
            Artifact(
                path=self.config.proxy_config_file,
                content=self.renderer.render(TemplateKind.PROXY_SERVER_BLOCK, proxy),
            ),
            Artifact(
                path=self.config.dockerfile,
                content=self.renderer.render(
                    TemplateKind.IMAGE_BUILD_RECIPE, self._recipe_context(manifest)
                ),
            ),
            Artifact(
                path=self.config.ini_file,
                content=self.renderer.render(TemplateKind.RUNTIME_CONFIG, self.config.runtime),
            ),
        ]

        if self.config.seed_index:
            for descriptor in descriptors:
                artifacts.append(
                    Artifact(
                        path=_seed_index_path(descriptor),
                        content=self.renderer.render(
                            TemplateKind.SEED_INDEX,
                            {"name": descriptor.name, "listen_port": descriptor.listen_port},
                        ),
                    )
                )

        return artifacts

    async def generate(
        self,
        descriptors: Sequence[ApplicationDescriptor],
        target_dir: str | Path | None = None,
        overwrite: bool | None = None,
    ) -> WriteReport:
        """Generate and write all artifacts.

        Args:
            descriptors: Applications to scaffold.
            target_dir: Output directory. Defaults to ``config.output_dir``.
            overwrite: Replace existing files. Defaults to ``config.overwrite``.

        Returns:
            The writer's report of written files.
        """
        artifacts = self.build_artifacts(descriptors)
        return await self.writer.write(
            Path(target_dir) if target_dir is not None else self.config.output_dir,
            artifacts,
            overwrite=self.config.overwrite if overwrite is None else overwrite,
        )

    def compose(
        self, descriptors: Sequence[ApplicationDescriptor]
    ) -> tuple[ProxyConfig, ComposeManifest]:
        """Compose with this generator's configuration."""
        return compose(descriptors, self.config)

    # -- Context building --------------------------------------------------

    def _recipe_context(self, manifest: ComposeManifest) -> dict[str, Any]:
        images = self.config.images
        return {
            "base_image": images.php_base_image,
            "system_packages": images.system_packages,
            "php_extensions": manifest.php_extensions,
            "user": images.user,
            "group": images.group,
            "uid": images.uid,
            "gid": images.gid,
            "fpm_port": self.config.containers.fpm_port,
        }


def _seed_index_path(descriptor: ApplicationDescriptor) -> str:
    public = descriptor.public_path
    if public == ".":
        return "index.php"
    return f"{public}/index.php"
