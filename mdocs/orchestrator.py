"""Pipeline orchestration: discover templates, expand them and write the results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Sequence

from .config import MdocsConfig, load_config
from .discovery import TEMPLATE_PATTERN, TemplateDiscovery
from .errors import UsageError
from .fs import find_files, write_file
from .inline import InlineExpander
from .logging import get_logger
from .manifests import MANIFEST_FILENAME, resolve_repo_context
from .menu import MenuBuilder
from .models import RepoContext, Template
from .paths import PathResolver
from .postproc.edit_note import EditNoteWrapper
from .postproc.imports import PackagePathRewriter
from .variables import apply_variables


@dataclass
class RunOutcome:
    """Files written by a completed run."""

    repo_base: Path
    written: List[Path]


class Orchestrator:
    """Coordinates the template pipeline for one directory.

    Each template runs through menu substitution, variables, inline expansion
    (with import rewriting) and the edit note before it is written. Templates
    are processed one at a time; the first error aborts the run.
    """

    def __init__(
        self,
        *,
        writer: Callable[[Path, str], None] = write_file,
        rewriter: PackagePathRewriter | None = None,
    ) -> None:
        self._write = writer
        self.rewriter = rewriter or PackagePathRewriter()
        self.logger = get_logger("orchestrator")

    def run(self, path: str | Path) -> RunOutcome:
        directory = Path(path).expanduser().resolve()
        if not directory.is_dir():
            raise UsageError(f"Directory not found: {directory}")
        self.logger.info("Starting mdocs run for %s", directory)

        context = resolve_repo_context(directory)
        if context is None:
            raise self._missing_manifest_error(directory)

        config = load_config(context.repo_base)
        discovery = TemplateDiscovery(context.repo_base, exclude_paths=config.exclude_paths)
        templates = discovery.discover()
        self.logger.info("Found %d template(s) under %s", len(templates), context.repo_base)

        menu_builder = MenuBuilder(link_suffix=config.menu.link_suffix)
        expander = self._build_expander(context, config)
        edit_note = EditNoteWrapper(repeat=config.edit_note.repeat)

        written: List[Path] = []
        for template in templates:
            self.render(template, templates, menu_builder, expander, edit_note)
            self._write(template.dist_path, template.content)
            self.logger.info("Wrote %s", template.dist_path)
            written.append(template.dist_path)
        return RunOutcome(repo_base=context.repo_base, written=written)

    def render(
        self,
        template: Template,
        templates: Sequence[Template],
        menu_builder: MenuBuilder,
        expander: InlineExpander,
        edit_note: EditNoteWrapper,
    ) -> str:
        """Run every content transform on `template`, returning its final text."""
        menu_builder.apply(template, templates)
        template.content = apply_variables(template.content)
        template.content = expander.expand(
            template.content,
            template.template_path,
            template.package_info,
        )
        template.content = edit_note.wrap(template.content, template.template_path_md_relative)
        return template.content

    def _build_expander(self, context: RepoContext, config: MdocsConfig) -> InlineExpander:
        resolver = PathResolver(
            context,
            default_extension=config.inline.default_extension,
            exclude_paths=config.exclude_paths,
        )
        return InlineExpander(
            resolver,
            rewriter=self.rewriter,
            comment_prefix=config.inline.comment_prefix,
        )

    def _missing_manifest_error(self, directory: Path) -> UsageError:
        if not find_files(TEMPLATE_PATTERN, directory):
            return UsageError(f"Can't find any `{directory / TEMPLATE_PATTERN}` file.")
        return UsageError(
            f"Can't find a `{MANIFEST_FILENAME}` at or above `{directory}`; "
            "templates must live inside a package or a monorepo."
        )


__all__ = ["Orchestrator", "RunOutcome"]
