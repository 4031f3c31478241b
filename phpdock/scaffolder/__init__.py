"""phpdock scaffolder -- composes and renders the development environment.

This module takes a list of ``ApplicationDescriptor`` values and renders the
Nginx, PHP-FPM and Docker Compose files that serve them.

Quick usage::

    from phpdock.descriptors import ApplicationDescriptor
    from phpdock.scaffolder import ScaffoldGenerator

    apps = [
        ApplicationDescriptor(name="app1", listen_port=8080, source_path="src/app1"),
        ApplicationDescriptor(name="app2", listen_port=8081, source_path="src/app2"),
    ]
    report = await ScaffoldGenerator().generate(apps, "/tmp/devenv")
"""

from phpdock.scaffolder.composer import (
    ComposeManifest,
    ProxyConfig,
    ServerBlock,
    ServiceDefinition,
    compose,
)
from phpdock.scaffolder.generator import ScaffoldGenerator
from phpdock.scaffolder.templates import TemplateKind, TemplateRenderer
from phpdock.scaffolder.writer import Artifact, ArtifactWriter, WriteReport

__all__ = [
    "Artifact",
    "ArtifactWriter",
    "ComposeManifest",
    "ProxyConfig",
    "ScaffoldGenerator",
    "ServerBlock",
    "ServiceDefinition",
    "TemplateKind",
    "TemplateRenderer",
    "WriteReport",
    "compose",
]
