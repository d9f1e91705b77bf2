"""Template discovery and metadata extraction."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .directives import METADATA_TOKENS, parse_directives, require_text
from .errors import InternalError, UsageError
from .fs import find_files, read_file
from .manifests import get_package_info
from .menu import titlize
from .models import Directive, DirectiveArgument, Template

TEMPLATE_EXT = ".template.md"
OUTPUT_EXT = ".md"
TEMPLATE_PATTERN = f"*{TEMPLATE_EXT}"


class TemplateDiscovery:
    """Finds `*.template.md` files below a base directory and reads their metadata."""

    def __init__(
        self,
        repo_base: Path,
        *,
        exclude_paths: Iterable[str] = (),
        reader: Callable[[Path], str] = read_file,
    ) -> None:
        self.repo_base = Path(repo_base)
        self.exclude_paths = list(exclude_paths)
        self._read = reader

    def find_paths(self) -> List[Path]:
        return find_files(TEMPLATE_PATTERN, self.repo_base, exclude_paths=self.exclude_paths)

    def discover(self) -> List[Template]:
        templates = [self.load(path) for path in self.find_paths()]
        if not templates:
            raise UsageError(f"Can't find any `{self.repo_base / TEMPLATE_PATTERN}` file.")
        self._check_unique_outputs(templates)
        return templates

    def load(self, template_path: Path) -> Template:
        if not template_path.name.endswith(TEMPLATE_EXT):
            raise InternalError(f"`{template_path}` is not a `{TEMPLATE_EXT}` file")

        package_info = get_package_info(template_path.parent)
        if package_info is None:
            raise InternalError(f"No package manifest governs `{template_path}`")

        parsed = parse_directives(self._read(template_path), METADATA_TOKENS)
        directives = parsed.directives

        output_filename = self._text(directives, "OUTPUT", template_path)
        dist_path = self._dist_path(template_path, output_filename)
        filename_base = template_path.name.split(".")[0]
        menu_title = self._text(directives, "MENU_TITLE", template_path) or titlize(filename_base)

        return Template(
            template_path=template_path,
            content=parsed.body,
            dist_path=dist_path,
            dist_path_md_relative=self.md_relative(dist_path),
            template_path_md_relative=self.md_relative(template_path),
            filename_base=filename_base,
            menu_title=menu_title,
            package_info=package_info,
            menu_order=self._number(directives, "MENU_ORDER", template_path) or 0,
            menu_link=self._text(directives, "MENU_LINK", template_path),
            menu_skip=bool(directives.get("MENU_SKIP")),
            menu_section=self._text(directives, "MENU_SECTION", template_path),
            menu_indent=self._number(directives, "MENU_INDENT", template_path),
            output_filename=output_filename,
        )

    @staticmethod
    def _check_unique_outputs(templates: Sequence[Template]) -> None:
        owners: Dict[Path, Path] = {}
        for template in templates:
            earlier = owners.setdefault(template.dist_path, template.template_path)
            if earlier != template.template_path:
                raise UsageError(
                    f"`{earlier}` and `{template.template_path}` both write "
                    f"`{template.dist_path}`; set a distinct `!OUTPUT` for one of them."
                )

    def md_relative(self, path: Path) -> str:
        """Return `path` as a `/`-prefixed POSIX path relative to the repo base."""
        try:
            relative = path.relative_to(self.repo_base)
        except ValueError as exc:
            raise InternalError(f"`{path}` is not below `{self.repo_base}`") from exc
        return "/" + relative.as_posix()

    @staticmethod
    def _dist_path(template_path: Path, output_filename: Optional[str]) -> Path:
        if output_filename:
            return Path(os.path.normpath(template_path.parent / output_filename))
        return template_path.with_name(template_path.name[: -len(TEMPLATE_EXT)] + OUTPUT_EXT)

    @staticmethod
    def _text(directives: dict[str, DirectiveArgument], token: str, source: Path) -> Optional[str]:
        argument = directives.get(token)
        if argument is None:
            return None
        return require_text(Directive(name=token, argument=argument), source)

    @classmethod
    def _number(
        cls, directives: dict[str, DirectiveArgument], token: str, source: Path
    ) -> Optional[int]:
        text = cls._text(directives, token, source)
        if text is None:
            return None
        try:
            return int(text.strip())
        except ValueError as exc:
            raise UsageError(f"`!{token}` expects an integer in `{source}`, got {text!r}") from exc


__all__ = ["OUTPUT_EXT", "TEMPLATE_EXT", "TEMPLATE_PATTERN", "TemplateDiscovery"]
