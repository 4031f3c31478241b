"""Exception hierarchy for phpdock.

Every error carries a short ``code`` string so callers (and the CLI) can
report the failure category without matching on class names.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from phpdock.scaffolder.writer import WriteReport


class ScaffoldError(Exception):
    """Base class for every failure raised by the generator."""

    code: str = "ScaffoldError"


# ---------------------------------------------------------------------------
# Descriptor validation
# ---------------------------------------------------------------------------


class DescriptorValidationError(ScaffoldError):
    """Raised when the application descriptor set is not usable."""

    code = "InvalidField"


class DuplicatePortError(DescriptorValidationError):
    """Two descriptors share the same listen port."""

    code = "DuplicatePort"

    def __init__(self, port: int, first: str, second: str) -> None:
        self.port = port
        self.first = first
        self.second = second
        super().__init__(
            f"Port {port} is used by both '{first}' and '{second}'"
        )


class DuplicateNameError(DescriptorValidationError):
    """Two descriptors share the same name."""

    code = "DuplicateName"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Application name '{name}' is declared more than once")


class InvalidPathError(DescriptorValidationError):
    """A path is empty, absolute, escapes its base, or has unusable characters."""

    code = "InvalidPath"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path {path!r}: {reason}")


class EmptyDescriptorListError(DescriptorValidationError):
    """No application descriptors were supplied."""

    code = "Empty"

    def __init__(self) -> None:
        super().__init__("At least one application descriptor is required")


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class TemplateError(ScaffoldError):
    """Raised when a template cannot be rendered."""

    code = "TemplateError"


class MissingFieldError(TemplateError):
    """A template placeholder has no corresponding value in the data."""

    code = "MissingField"

    def __init__(self, kind: str, field: str) -> None:
        self.kind = kind
        self.field = field
        super().__init__(f"Template {kind} requires field '{field}'")


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------


class ArtifactIOError(ScaffoldError):
    """Raised when artifacts cannot be written to the target directory."""

    code = "IOError"


class ArtifactExistsError(ArtifactIOError):
    """Target files already exist and overwriting was not requested."""

    code = "ArtifactExists"

    def __init__(self, paths: list[str]) -> None:
        self.paths = paths
        super().__init__(
            "Refusing to overwrite existing files: " + ", ".join(paths)
        )


class PartialWriteError(ArtifactIOError):
    """Some artifacts were written, others failed during the write phase."""

    def __init__(self, report: "WriteReport") -> None:
        self.report = report
        failed = ", ".join(f"{path} ({reason})" for path, reason in report.failed.items())
        super().__init__(
            f"{len(report.failed)} of {len(report.written) + len(report.failed)} "
            f"artifacts failed to write: {failed}"
        )
