"""Unit tests for ApplicationDescriptor (phpdock.descriptors.models).

Tests cover:
- Field aliases (snake_case, camelCase, short forms)
- Port range and name pattern validation
- Derived container/host paths
- Extension name validation and ordering
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from phpdock.descriptors import CONTAINER_WEB_ROOT, ApplicationDescriptor


pytestmark = pytest.mark.unit


class TestFields:
    def test_snake_case_names(self):
        d = ApplicationDescriptor(name="app1", listen_port=8080, source_path="src/app1")
        assert d.name == "app1"
        assert d.listen_port == 8080
        assert d.source_path == "src/app1"
        assert d.document_root == ""
        assert d.php_extensions == set()

    def test_camel_case_aliases(self):
        d = ApplicationDescriptor.model_validate(
            {
                "name": "app1",
                "listenPort": 8080,
                "sourcePath": "src/app1",
                "documentRoot": "public",
                "phpExtensions": ["gd"],
            }
        )
        assert d.listen_port == 8080
        assert d.document_root == "public"
        assert d.php_extensions == {"gd"}

    def test_short_aliases(self):
        d = ApplicationDescriptor.model_validate({"name": "a", "port": 1, "path": "."})
        assert d.listen_port == 1
        assert d.source_path == "."

    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_port_out_of_range_rejected(self, port):
        with pytest.raises(ValidationError):
            ApplicationDescriptor(name="app", listen_port=port, source_path=".")

    @pytest.mark.parametrize("port", [1, 65535])
    def test_port_bounds_accepted(self, port):
        d = ApplicationDescriptor(name="app", listen_port=port, source_path=".")
        assert d.listen_port == port

    @pytest.mark.parametrize("name", ["", "-app", "my app", "app/1", "a$b"])
    def test_bad_names_rejected(self, name):
        with pytest.raises(ValidationError):
            ApplicationDescriptor(name=name, listen_port=8080, source_path=".")

    def test_extension_names_validated(self):
        with pytest.raises(ValidationError):
            ApplicationDescriptor(
                name="app", listen_port=8080, source_path=".", php_extensions={"gd; rm -rf /"}
            )

    def test_sorted_extensions(self):
        d = ApplicationDescriptor(
            name="app", listen_port=8080, source_path=".", php_extensions={"zip", "gd", "intl"}
        )
        assert d.sorted_extensions() == ["gd", "intl", "zip"]


class TestDerivedPaths:
    def test_container_path(self):
        d = ApplicationDescriptor(name="app1", listen_port=8080, source_path="src/app1")
        assert d.container_path == f"{CONTAINER_WEB_ROOT}/app1"
        assert d.container_path == "/var/www/html/app1"

    def test_container_root_defaults_to_container_path(self):
        d = ApplicationDescriptor(name="app1", listen_port=8080, source_path="src/app1")
        assert d.container_root == "/var/www/html/app1"

    def test_container_root_with_document_root(self):
        d = ApplicationDescriptor(
            name="shop", listen_port=8080, source_path="src/shop", document_root="public/"
        )
        assert d.container_root == "/var/www/html/shop/public"

    def test_dot_document_root_is_source_root(self):
        d = ApplicationDescriptor(
            name="app", listen_port=8080, source_path="src", document_root="."
        )
        assert d.container_root == "/var/www/html/app"

    def test_host_path_for_dot(self):
        d = ApplicationDescriptor(name="app", listen_port=8082, source_path=".")
        assert d.host_path == "./"

    def test_host_path_is_normalised(self):
        d = ApplicationDescriptor(name="app", listen_port=8082, source_path="./src//app/")
        assert d.host_path == "./src/app"

    def test_public_path(self):
        d = ApplicationDescriptor(
            name="shop", listen_port=8080, source_path="src/shop", document_root="public"
        )
        assert d.public_path == "src/shop/public"

    def test_public_path_for_dot_source(self):
        d = ApplicationDescriptor(
            name="app", listen_port=8080, source_path=".", document_root="web"
        )
        assert d.public_path == "web"
