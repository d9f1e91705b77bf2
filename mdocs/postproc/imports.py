"""Rewrite package-root imports in inlined code to the published package name."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

from ..errors import InternalError
from ..models import PackageInfo


class PackagePathRewriter:
    """Replaces `require('<rel>')` and `from '<rel>'` with the package name.

    `<rel>` is the relative path from the inlined file's directory to the
    package root, so examples read as a consumer of the published package
    would write them. Only exact matches are rewritten.
    """

    def rewrite(self, content: str, file_path: Path, package_info: Optional[PackageInfo]) -> str:
        if package_info is None or package_info.private or not package_info.name:
            return content

        try:
            rel_path = os.path.relpath(package_info.absolute_path, Path(file_path).parent)
        except ValueError as exc:
            raise InternalError(
                f"Could not compute a path from `{file_path}` to `{package_info.absolute_path}`"
            ) from exc
        rel_path = Path(rel_path).as_posix()

        name = package_info.name
        target = re.escape(rel_path)
        require_pattern = re.compile(r"require\((['\"])" + target + r"\1\)")
        import_pattern = re.compile(r" from (['\"])" + target + r"\1")

        content = require_pattern.sub(lambda m: f"require({m.group(1)}{name}{m.group(1)})", content)
        content = import_pattern.sub(lambda m: f" from {m.group(1)}{name}{m.group(1)}", content)
        return content


__all__ = ["PackagePathRewriter"]
