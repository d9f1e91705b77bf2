"""Resolution of `!INLINE` path arguments to concrete files."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, List

from .errors import InternalError, UsageError
from .fs import find_files
from .logging import get_logger
from .models import RepoContext

FileFinder = Callable[..., List[Path]]


class PathResolver:
    """Maps an inline spec to an absolute file path.

    Specs starting with ``/`` are anchored at the repository root, bare file
    names are searched for across the repo base, and anything else is taken
    relative to the directory of the file containing the directive.
    """

    def __init__(
        self,
        context: RepoContext,
        *,
        default_extension: str = ".md",
        exclude_paths: Iterable[str] = (),
        finder: FileFinder = find_files,
    ) -> None:
        self.context = context
        self.default_extension = default_extension
        self.exclude_paths = list(exclude_paths)
        self._finder = finder
        self.logger = get_logger("paths")

    def resolve(self, spec: str, context_file: Path) -> Path:
        if not spec:
            raise InternalError("Cannot resolve an empty inline path")

        # Dotfiles such as `.babelrc` have no suffix but are complete names.
        name = PurePosixPath(spec).name
        if not PurePosixPath(spec).suffix and not name.startswith("."):
            spec += self.default_extension

        base_dir = Path(context_file).parent
        if "/" not in spec:
            candidate = self._find_unique(spec)
            base_dir = self.context.repo_base
        elif spec.startswith("/"):
            base_dir = self.context.repo_root
            candidate = Path(os.path.normpath(base_dir / spec.lstrip("/")))
        else:
            candidate = Path(os.path.normpath(base_dir / spec))

        if not candidate.is_file():
            raise UsageError(
                f"Can't find `{spec}`. Resolved to `{candidate}` from `{base_dir}`."
            )
        self._ensure_within_repo(spec, candidate)
        self.logger.debug("Resolved inline spec %s to %s", spec, candidate)
        return candidate

    def _find_unique(self, spec: str) -> Path:
        pattern = f"*{spec}"
        found = self._finder(pattern, self.context.repo_base, exclude_paths=self.exclude_paths)
        if len(found) != 1:
            listing = ", ".join(str(path) for path in found) or "no files"
            raise UsageError(
                f"Inline spec `{spec}` must match exactly one `{pattern}` file under "
                f"`{self.context.repo_base}`, found {listing}."
            )
        return Path(found[0])

    def _ensure_within_repo(self, spec: str, path: Path) -> None:
        roots = {self.context.repo_root, self.context.repo_base}
        if not any(_is_within(path, root) for root in roots):
            raise UsageError(
                f"Inline spec `{spec}` resolves to `{path}`, outside the repository "
                f"`{self.context.repo_root}`."
            )


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
    except ValueError:
        return False
    return True


__all__ = ["PathResolver"]
