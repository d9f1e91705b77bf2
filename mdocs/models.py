"""Core data models shared across mdocs components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

# A directive argument is its text, or True for a bare flag such as `!MENU_SKIP`.
DirectiveArgument = Union[str, bool]


@dataclass(frozen=True)
class PackageInfo:
    """Manifest metadata for the nearest enclosing package (or workspace root)."""

    name: Optional[str]
    private: bool
    absolute_path: Path
    workspaces: List[str] = field(default_factory=list)

    @property
    def is_monorepo(self) -> bool:
        return bool(self.workspaces)


@dataclass(frozen=True)
class RepoContext:
    """Roots every path computation in a run is anchored on."""

    repo_root: Path
    repo_base: Path
    package_info: Optional[PackageInfo]
    monorepo_info: Optional[PackageInfo]


@dataclass(frozen=True)
class Directive:
    """A single directive line parsed from template text."""

    name: str
    argument: DirectiveArgument


@dataclass
class ParsedContent:
    """Directives pulled out of a template and the body that remains."""

    directives: Dict[str, DirectiveArgument]
    body: str


@dataclass(frozen=True)
class InlineCommand:
    """Arguments of an `!INLINE` line split into positional inputs and flags."""

    inputs: List[str]
    options: Dict[str, bool]

    @property
    def spec(self) -> Optional[str]:
        return self.inputs[0] if self.inputs else None

    def has_flag(self, flag: str) -> bool:
        return bool(self.options.get(flag))


@dataclass
class Template:
    """A discovered `*.template.md` file moving through the pipeline."""

    template_path: Path
    content: str
    dist_path: Path
    dist_path_md_relative: str
    template_path_md_relative: str
    filename_base: str
    menu_title: str
    package_info: PackageInfo
    menu_order: int = 0
    menu_link: Optional[str] = None
    menu_skip: bool = False
    menu_section: Optional[str] = None
    menu_indent: Optional[int] = None
    output_filename: Optional[str] = None


__all__ = [
    "Directive",
    "DirectiveArgument",
    "InlineCommand",
    "PackageInfo",
    "ParsedContent",
    "RepoContext",
    "Template",
]
