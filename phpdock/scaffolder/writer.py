"""Write rendered artifacts to the target directory.

The writer works in two phases.  The precheck validates every destination and,
unless overwriting was requested, refuses the whole batch if any destination
already exists, so a rejected batch writes nothing.  The write phase then
writes files one at a time; a failure on one file is recorded and the batch
continues, and files already written stay on disk.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

from phpdock.errors import ArtifactExistsError, InvalidPathError, PartialWriteError


class Artifact(BaseModel):
    """A generated file: a path relative to the target directory and its content."""

    path: str
    content: str


class WriteReport(BaseModel):
    """Outcome of one ``ArtifactWriter.write`` batch."""

    target_dir: Path
    written: list[str] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class ArtifactWriter:
    """Writes artifact batches with all-or-nothing existence checks."""

    async def write(
        self,
        target_dir: str | Path,
        artifacts: Sequence[Artifact],
        overwrite: bool = False,
    ) -> WriteReport:
        """Write *artifacts* under *target_dir*.

        Args:
            target_dir: Root directory of the generated tree; created if missing.
            artifacts: Files to write, in order.
            overwrite: Replace files that already exist.

        Returns:
            A ``WriteReport`` listing every written path.

        Raises:
            InvalidPathError: An artifact path is absolute, leaves
                *target_dir*, or names the same destination as an earlier
                artifact.  Nothing has been written.
            ArtifactExistsError: *overwrite* is false and at least one
                destination exists (a symlink counts, dangling or not).
                Nothing has been written.
            PartialWriteError: One or more files failed during the write
                phase; ``exc.report`` says which succeeded and which failed.
        """
        target = Path(target_dir)
        planned = [(artifact, _destination(target, artifact.path)) for artifact in artifacts]

        seen: set[Path] = set()
        for artifact, dest in planned:
            if dest in seen:
                raise InvalidPathError(
                    artifact.path, "artifact path appears more than once in the batch"
                )
            seen.add(dest)

        if not overwrite:
            # A dangling symlink reports exists() == False but would still be followed.
            existing = [
                artifact.path for artifact, dest in planned if dest.exists() or dest.is_symlink()
            ]
            if existing:
                raise ArtifactExistsError(existing)

        report = WriteReport(target_dir=target)
        for artifact, dest in planned:
            try:
                await asyncio.to_thread(_write_file, dest, artifact.content)
            except OSError as exc:
                report.failed[artifact.path] = exc.strerror or str(exc)
            else:
                report.written.append(artifact.path)

        if report.failed:
            raise PartialWriteError(report)
        return report


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _destination(target: Path, relative: str) -> Path:
    rel = PurePosixPath(relative.replace("\\", "/"))
    if not relative or rel.is_absolute() or ".." in rel.parts:
        raise InvalidPathError(relative, "artifact path must stay inside the target directory")
    return target.joinpath(*rel.parts)


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as fh:
        fh.write(content)
