"""Package manifest and repository root resolution."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

from .errors import UsageError
from .fs import find_nearest_ancestor
from .logging import get_logger
from .models import PackageInfo, RepoContext

MANIFEST_FILENAME = "package.json"
VCS_MARKER = ".git"

logger = get_logger("manifests")


def _load_manifest(manifest_path: Path) -> PackageInfo:
    try:
        payload = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise UsageError(f"Can't read `{manifest_path}`: {exc}") from exc
    if not isinstance(payload, dict):
        raise UsageError(f"`{manifest_path}` must contain a JSON object")

    name = payload.get("name")
    return PackageInfo(
        name=name if isinstance(name, str) and name else None,
        private=payload.get("private") is True,
        absolute_path=manifest_path.parent,
        workspaces=_workspace_globs(payload.get("workspaces")),
    )


def _workspace_globs(value: Any) -> List[str]:
    # Yarn accepts either a list of globs or `{"packages": [...]}`.
    if isinstance(value, dict):
        value = value.get("packages")
    if isinstance(value, list):
        return [str(item) for item in value if isinstance(item, str)]
    return []


def get_package_info(directory: Path) -> Optional[PackageInfo]:
    """Return the manifest of the nearest package at or above `directory`."""
    manifest_path = find_nearest_ancestor(MANIFEST_FILENAME, directory)
    if manifest_path is None:
        return None
    return _load_manifest(manifest_path)


def get_monorepo_info(directory: Path) -> Optional[PackageInfo]:
    """Return the nearest manifest at or above `directory` that declares workspaces."""
    current: Optional[Path] = Path(directory)
    while current is not None:
        manifest_path = find_nearest_ancestor(MANIFEST_FILENAME, current)
        if manifest_path is None:
            return None
        info = _load_manifest(manifest_path)
        if info.is_monorepo:
            return info
        parent = manifest_path.parent.parent
        current = parent if parent != manifest_path.parent else None
    return None


def get_git_root(directory: Path) -> Optional[Path]:
    marker = find_nearest_ancestor(VCS_MARKER, directory)
    return marker.parent if marker is not None else None


def resolve_repo_context(directory: Path) -> Optional[RepoContext]:
    """Resolve package, monorepo and version-control roots for `directory`.

    Returns None when neither a package nor a monorepo manifest governs the
    directory. The monorepo root, when present, is the base for discovery and
    menu links; the package manifest supplies the name used for import
    rewriting.
    """
    package_info = get_package_info(directory)
    monorepo_info = get_monorepo_info(directory)
    governing = monorepo_info if monorepo_info is not None else package_info
    if governing is None:
        return None

    repo_base = governing.absolute_path
    repo_root = get_git_root(directory)
    if repo_root is None:
        logger.warning(
            "No %s directory found above %s; using %s as repository root",
            VCS_MARKER,
            directory,
            repo_base,
        )
        repo_root = repo_base

    logger.debug(
        "Resolved repo context: root=%s base=%s package=%s monorepo=%s",
        repo_root,
        repo_base,
        package_info.name if package_info else None,
        monorepo_info.name if monorepo_info else None,
    )
    return RepoContext(
        repo_root=repo_root,
        repo_base=repo_base,
        package_info=package_info,
        monorepo_info=monorepo_info,
    )


__all__ = [
    "MANIFEST_FILENAME",
    "get_git_root",
    "get_monorepo_info",
    "get_package_info",
    "resolve_repo_context",
]
