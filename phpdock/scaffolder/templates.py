"""Jinja2 template rendering for the generated artifacts.

Provides the ``TemplateRenderer`` class which loads Jinja2 templates from the
``phpdock/scaffolder/templates/`` directory and renders them against composed
data.  Rendering is strict: a placeholder without a value raises
``MissingFieldError`` instead of silently producing an empty string.
"""

from __future__ import annotations

import json
import re
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, UndefinedError
from pydantic import BaseModel

from phpdock.errors import MissingFieldError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateKind(str, Enum):
    """Artifact kinds the template library can render."""
    PROXY_SERVER_BLOCK = "ProxyServerBlock"
    IMAGE_BUILD_RECIPE = "ImageBuildRecipe"
    RUNTIME_CONFIG = "RuntimeConfig"
    COMPOSE_MANIFEST = "ComposeManifest"
    SEED_INDEX = "SeedIndex"


# TemplateKind -> template path relative to the template directory
TEMPLATE_FILES: dict[TemplateKind, str] = {
    TemplateKind.PROXY_SERVER_BLOCK: "nginx/default.conf.j2",
    TemplateKind.IMAGE_BUILD_RECIPE: "php/Dockerfile.j2",
    TemplateKind.RUNTIME_CONFIG: "php/local.ini.j2",
    TemplateKind.COMPOSE_MANIFEST: "docker-compose.yml.j2",
    TemplateKind.SEED_INDEX: "index.php.j2",
}


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for the generated artifacts.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  ``render`` takes a ``TemplateKind`` and a mapping
    (or pydantic model) whose keys become template variables.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["yaml_quote"] = yaml_quote
        self.env.filters["nginx_quote"] = nginx_quote

    def render(self, kind: TemplateKind | str, data: BaseModel | dict[str, Any]) -> str:
        """Render the template for *kind* against *data*.

        Args:
            kind: Which artifact to render.
            data: Template variables, either a mapping or a pydantic model
                (dumped with ``model_dump``; properties are not included).

        Returns:
            The rendered artifact content.

        Raises:
            MissingFieldError: A placeholder has no corresponding value.
        """
        kind = TemplateKind(kind)
        context = data.model_dump() if isinstance(data, BaseModel) else dict(data)
        return self.render_template(TEMPLATE_FILES[kind], context, label=kind.value)

    def render_template(
        self,
        template_path: str,
        context: dict[str, Any],
        *,
        label: str | None = None,
    ) -> str:
        """Render a template file by path relative to the template directory."""
        template = self.env.get_template(template_path)
        try:
            return template.render(**context)
        except UndefinedError as exc:
            raise MissingFieldError(label or template_path, _undefined_name(exc)) from exc

    def list_templates(self) -> list[str]:
        """Return a sorted list of all ``.j2`` template paths."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in self.template_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

_NGINX_BARE = re.compile(r"^[A-Za-z0-9_./:@=+-]+$")


def yaml_quote(value: Any) -> str:
    """Render *value* as a double-quoted YAML scalar.

    JSON string syntax is a subset of YAML double-quoted scalars, so
    ``json.dumps`` gives correct escaping for quotes, backslashes and
    non-printable characters.
    """
    return json.dumps(str(value), ensure_ascii=False)


def nginx_quote(value: Any) -> str:
    """Render *value* as an Nginx directive argument.

    Plain tokens are emitted as-is; anything with whitespace, quotes,
    semicolons or braces is wrapped in double quotes with ``\\`` and ``"``
    escaped.
    """
    text = str(value)
    if _NGINX_BARE.match(text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

_UNDEFINED_PATTERNS = (
    re.compile(r"'([^']+)' is undefined"),
    re.compile(r"has no attribute '([^']+)'"),
    re.compile(r"has no element '?([^']+?)'?$"),
)


def _undefined_name(exc: UndefinedError) -> str:
    """Extract the missing variable name from a Jinja2 ``UndefinedError``."""
    message = str(exc)
    for pattern in _UNDEFINED_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1)
    return message
