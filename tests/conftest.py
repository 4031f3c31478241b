"""Shared pytest fixtures for the phpdock test suite.

Provides reusable fixtures for:
- Descriptor sets matching the one- and two-application layouts
- Default and customised generator configuration
- Descriptor files in JSON and YAML
"""

from __future__ import annotations

import json
import os
import textwrap
from pathlib import Path

import pytest

from phpdock.config import Config
from phpdock.descriptors import ApplicationDescriptor
from phpdock.scaffolder import ScaffoldGenerator


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

@pytest.fixture
def two_apps() -> list[ApplicationDescriptor]:
    """Two applications in per-app subdirectories on 8080 and 8081."""
    return [
        ApplicationDescriptor(name="app1", listen_port=8080, source_path="src/app1"),
        ApplicationDescriptor(name="app2", listen_port=8081, source_path="src/app2"),
    ]


@pytest.fixture
def single_app() -> list[ApplicationDescriptor]:
    """A single application whose source is the output directory itself."""
    return [ApplicationDescriptor(name="app", listen_port=8082, source_path=".")]


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Default configuration writing into a temporary directory."""
    return Config(output_dir=tmp_path / "devenv")


@pytest.fixture
def generator(config: Config) -> ScaffoldGenerator:
    return ScaffoldGenerator(config)


@pytest.fixture(autouse=True)
def _clean_phpdock_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PHPDOCK_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("PHPDOCK_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Descriptor files
# ---------------------------------------------------------------------------

@pytest.fixture
def apps_json(tmp_path: Path) -> Path:
    """JSON descriptor file using the camelCase field names."""
    path = tmp_path / "apps.json"
    path.write_text(
        json.dumps(
            [
                {"name": "app1", "listenPort": 8080, "sourcePath": "src/app1"},
                {
                    "name": "app2",
                    "listenPort": 8081,
                    "sourcePath": "src/app2",
                    "documentRoot": "public",
                    "phpExtensions": ["intl"],
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def apps_yaml(tmp_path: Path) -> Path:
    """YAML descriptor file with an ``applications`` key."""
    path = tmp_path / "apps.yaml"
    path.write_text(
        textwrap.dedent("""\
            applications:
              - name: app1
                port: 8080
                path: src/app1
              - name: app2
                port: 8081
                path: src/app2
                docroot: public
        """),
        encoding="utf-8",
    )
    return path
