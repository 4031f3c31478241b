"""Build application descriptors from files and command-line flags."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from phpdock.errors import DescriptorValidationError
from phpdock.utils import load_data_file

from .models import ApplicationDescriptor


def descriptor_from_record(record: dict[str, Any]) -> ApplicationDescriptor:
    """Validate one raw mapping into an ``ApplicationDescriptor``.

    Pydantic field errors are re-raised as ``DescriptorValidationError`` so
    callers only deal with the phpdock error hierarchy.
    """
    if not isinstance(record, dict):
        raise DescriptorValidationError(
            f"Application entry must be a mapping, got {type(record).__name__}"
        )
    try:
        return ApplicationDescriptor.model_validate(record)
    except ValidationError as exc:
        label = record.get("name", "<unnamed>")
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'entry'}: {err['msg']}"
            for err in exc.errors()
        )
        raise DescriptorValidationError(
            f"Invalid application '{label}': {problems}"
        ) from exc


def load_descriptors(path: str | Path) -> list[ApplicationDescriptor]:
    """Load descriptors from a JSON or YAML file.

    The document is either a list of application mappings or a mapping with
    an ``applications`` key holding that list.
    """
    try:
        data = load_data_file(path)
    except FileNotFoundError as exc:
        raise DescriptorValidationError(f"Descriptor file not found: {path}") from exc
    except (ValueError, yaml.YAMLError) as exc:
        raise DescriptorValidationError(f"Cannot parse {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("applications", data.get("apps"))
    if not isinstance(data, list):
        raise DescriptorValidationError(
            f"{path} must contain a list of applications or an 'applications' list"
        )
    return [descriptor_from_record(item) for item in data]


def parse_app_flag(value: str) -> ApplicationDescriptor:
    """Parse a ``--app`` flag of the form ``name:port:path[:docroot][@ext,...]``.

    Examples::

        parse_app_flag("app1:8080:src/app1")
        parse_app_flag("shop:8081:src/shop:public@intl,gd")
    """
    spec, _, extensions = value.partition("@")
    parts = spec.split(":")
    if len(parts) not in (3, 4):
        raise DescriptorValidationError(
            f"Invalid --app value {value!r}: expected name:port:path[:docroot][@ext,...]"
        )
    record: dict[str, Any] = {
        "name": parts[0],
        "listen_port": parts[1],
        "source_path": parts[2],
    }
    if len(parts) == 4:
        record["document_root"] = parts[3]
    if extensions:
        record["php_extensions"] = [e.strip() for e in extensions.split(",") if e.strip()]
    return descriptor_from_record(record)
