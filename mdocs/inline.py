"""Recursive `!INLINE` expansion."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from .directives import parse_command_line
from .errors import UsageError
from .fs import read_file
from .logging import get_logger
from .models import PackageInfo
from .paths import PathResolver
from .postproc.imports import PackagePathRewriter

INLINE_TOKEN = "!INLINE"
HIDE_SOURCE_PATH_MARKER = "!HIDE-SOURCE-PATH"
HIDE_SOURCE_PATH_FLAG = "--hide-source-path"
ARGUMENTS_TOKEN = "!ARGUMENTS"

_ARGUMENT_PATTERN = re.compile(r"!ARGUMENT-(\d+)")


def is_inline_line(line: str) -> bool:
    return line == INLINE_TOKEN or line.startswith(INLINE_TOKEN + " ")


def substitute_arguments(text: str, inputs: Sequence[str]) -> str:
    """Fill `!ARGUMENT-<n>` and `!ARGUMENTS` placeholders from the inline inputs.

    Input 0 is the inline path itself; `!ARGUMENTS` joins the inputs after it.
    Placeholders with no matching input are left untouched.
    """

    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        return inputs[index] if index < len(inputs) else match.group(0)

    text = _ARGUMENT_PATTERN.sub(_replace, text)
    return text.replace(ARGUMENTS_TOKEN, " ".join(inputs[1:]))


def strip_hide_marker(text: str) -> Tuple[str, bool]:
    lines = text.split("\n")
    kept = [line for line in lines if line != HIDE_SOURCE_PATH_MARKER]
    return "\n".join(kept), len(kept) != len(lines)


class InlineExpander:
    """Replaces `!INLINE <path> [args...] [--hide-source-path]` lines with file contents.

    Nested inlines resolve relative to the file that contains them. The chain
    of files being expanded is threaded through the recursion so a file that
    (transitively) inlines itself is rejected instead of recursing forever.
    """

    def __init__(
        self,
        resolver: PathResolver,
        *,
        rewriter: PackagePathRewriter | None = None,
        comment_prefix: str = "// ",
        reader: Callable[[Path], str] = read_file,
    ) -> None:
        self.resolver = resolver
        self.rewriter = rewriter or PackagePathRewriter()
        self.comment_prefix = comment_prefix
        self._read = reader
        self.logger = get_logger("inline")

    def expand(
        self,
        content: str,
        context_file: Path,
        package_info: Optional[PackageInfo],
        *,
        chain: Sequence[Path] = (),
    ) -> str:
        context_file = Path(context_file)
        active = tuple(chain) or (context_file,)

        lines = content.split("\n")
        last_index = len(lines) - 1
        output: List[str] = []
        for index, line in enumerate(lines):
            if not is_inline_line(line):
                output.append(line)
                if index != last_index:
                    output.append("\n")
                continue
            output.append(self._inline(line, context_file, package_info, active))
        return "".join(output)

    def _inline(
        self,
        line: str,
        context_file: Path,
        package_info: Optional[PackageInfo],
        chain: Tuple[Path, ...],
    ) -> str:
        _, command = parse_command_line(line)
        spec = command.spec
        if spec is None:
            raise UsageError(f"`{INLINE_TOKEN}` requires a file path (in `{context_file}`): {line!r}")

        file_path = self.resolver.resolve(spec, context_file)
        if file_path in chain:
            cycle = " -> ".join(str(path) for path in (*chain, file_path))
            raise UsageError(f"Inline cycle detected: {cycle}")
        self.logger.debug("Inlining %s into %s", file_path, context_file)

        text = self._read(file_path).rstrip("\n")
        text = substitute_arguments(text, command.inputs)
        text, marker_found = strip_hide_marker(text)
        text = self.expand(text, file_path, package_info, chain=(*chain, file_path))
        text = self.rewriter.rewrite(text, file_path, package_info) + "\n"

        if marker_found or command.has_flag(HIDE_SOURCE_PATH_FLAG):
            return text
        return f"{self.comment_prefix}{spec}\n\n{text}"


__all__ = [
    "HIDE_SOURCE_PATH_FLAG",
    "HIDE_SOURCE_PATH_MARKER",
    "InlineExpander",
    "is_inline_line",
    "strip_hide_marker",
    "substitute_arguments",
]
