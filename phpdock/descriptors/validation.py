"""Validation of a whole descriptor set.

Field-level rules (port range, name pattern) live on the model itself; the
checks here need to see every descriptor at once or inspect paths in ways a
single field validator cannot report with the right error category.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from phpdock.errors import (
    DuplicateNameError,
    DuplicatePortError,
    EmptyDescriptorListError,
    InvalidPathError,
)
from phpdock.utils import path_segments

from .models import ApplicationDescriptor

# ':' splits compose volume specs and '$' starts an Nginx variable; neither
# can be escaped in the generated files.
_FORBIDDEN_PATH_CHARS = re.compile(r"[:$\x00-\x1f\x7f]")


def check_relative_path(path: str, *, allow_empty: bool = False) -> None:
    """Raise ``InvalidPathError`` unless *path* is a safe relative path."""
    if not path or not path.strip():
        if allow_empty:
            return
        raise InvalidPathError(path, "path must not be empty")
    if path.startswith(("/", "\\")):
        raise InvalidPathError(path, "path must be relative")
    if ".." in path_segments(path):
        raise InvalidPathError(path, "path must not contain '..' segments")
    match = _FORBIDDEN_PATH_CHARS.search(path)
    if match:
        raise InvalidPathError(path, f"unsupported character {match.group()!r}")


def validate_descriptors(descriptors: Sequence[ApplicationDescriptor]) -> None:
    """Validate a descriptor set, raising on the first problem found.

    The whole set is scanned for repeated ports first, then for repeated
    names, then each descriptor's paths are checked in input order.  A
    repeated port is therefore always reported as ``DuplicatePortError``
    whatever else is wrong with the set.

    Raises:
        EmptyDescriptorListError: No descriptors were given.
        DuplicatePortError: A listen port is used twice.
        DuplicateNameError: A name is used twice.
        InvalidPathError: A source path is empty, absolute, contains ``..``
            or an unsupported character (same for a non-empty document root).
    """
    if not descriptors:
        raise EmptyDescriptorListError()

    ports: dict[int, str] = {}
    for descriptor in descriptors:
        if descriptor.listen_port in ports:
            raise DuplicatePortError(
                descriptor.listen_port, ports[descriptor.listen_port], descriptor.name
            )
        ports[descriptor.listen_port] = descriptor.name

    names: set[str] = set()
    for descriptor in descriptors:
        if descriptor.name in names:
            raise DuplicateNameError(descriptor.name)
        names.add(descriptor.name)

    for descriptor in descriptors:
        check_relative_path(descriptor.source_path)
        check_relative_path(descriptor.document_root, allow_empty=True)
