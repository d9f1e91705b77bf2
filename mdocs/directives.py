"""Line-anchored directive parsing for template text."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import InternalError, UsageError
from .models import Directive, DirectiveArgument, InlineCommand, ParsedContent

DIRECTIVE_PREFIX = "!"

# Singleton directives collected from each template before any other transform.
METADATA_TOKENS: Tuple[str, ...] = (
    "OUTPUT",
    "MENU_INDENT",
    "MENU_ORDER",
    "MENU_LINK",
    "MENU_SKIP",
    "MENU_SECTION",
    "MENU_TITLE",
)


@lru_cache(maxsize=None)
def _occurrence_pattern(token: str) -> re.Pattern[str]:
    # `!MENU` must not match `!MENU_ORDER`, nor `!VAR` match `!VAR|LINK`.
    return re.compile(re.escape(DIRECTIVE_PREFIX + token) + r"(?![\w|-])")


def _directive_argument(line: str, token: str) -> Optional[DirectiveArgument]:
    """Return the argument when `line` is a `token` directive line, else None."""
    prefix = DIRECTIVE_PREFIX + token
    if line == prefix:
        return True
    if line.startswith(prefix + " "):
        return line[len(prefix) + 1 :] or True
    return None


def _scan(lines: Sequence[str], tokens: Sequence[str]) -> List[Tuple[int, Directive]]:
    found: List[Tuple[int, Directive]] = []
    seen: Dict[str, int] = {}
    for index, line in enumerate(lines):
        for token in tokens:
            argument = _directive_argument(line, token)
            if argument is not None:
                if token in seen:
                    raise InternalError(
                        f"`{DIRECTIVE_PREFIX}{token}` appears more than once "
                        f"(lines {seen[token] + 1} and {index + 1})"
                    )
                seen[token] = index
                found.append((index, Directive(name=token, argument=argument)))
                break
        else:
            for token in tokens:
                if _occurrence_pattern(token).search(line):
                    raise InternalError(
                        f"`{DIRECTIVE_PREFIX}{token}` must stand alone at the start of a line, "
                        f"found on line {index + 1}: {line!r}"
                    )
    return found


def parse_directives(content: str, tokens: Sequence[str] = METADATA_TOKENS) -> ParsedContent:
    """Split `content` into its singleton directives and the remaining body."""
    lines = content.split("\n")
    found = _scan(lines, tokens)
    consumed = {index for index, _ in found}
    return ParsedContent(
        directives={directive.name: directive.argument for _, directive in found},
        body="\n".join(line for index, line in enumerate(lines) if index not in consumed),
    )


def extract_directive(token: str, content: str) -> Tuple[Optional[DirectiveArgument], str]:
    """Remove the `token` directive line from `content` and return its argument.

    The argument is None when the directive is absent and True for a bare flag.
    """
    parsed = parse_directives(content, (token,))
    return parsed.directives.get(token), parsed.body


def replace_directive(
    token: str, content: str, replacement: str, *, bare: bool = False
) -> Tuple[bool, str]:
    """Replace the `token` directive line in place; report whether one was present.

    With `bare`, the line must be exactly the token; any argument is rejected.
    """
    lines = content.split("\n")
    found = _scan(lines, (token,))
    if not found:
        return False, content
    index, _ = found[0]
    if bare and lines[index] != DIRECTIVE_PREFIX + token:
        raise InternalError(
            f"`{DIRECTIVE_PREFIX}{token}` takes no argument, found on line {index + 1}: "
            f"{lines[index]!r}"
        )
    lines[index] = replacement
    return True, "\n".join(lines)


def require_text(directive: Directive, source: object) -> str:
    """Return the directive argument, rejecting bare flags for argument-taking tokens."""
    if directive.argument is True or not str(directive.argument).strip():
        raise UsageError(
            f"`{DIRECTIVE_PREFIX}{directive.name}` requires an argument (in `{source}`)"
        )
    return str(directive.argument)


def parse_command_line(line: str) -> Tuple[str, InlineCommand]:
    """Split a directive line into its command word, positional inputs and `--` flags."""
    words = line.split()
    if not words:
        raise InternalError("Cannot parse an empty directive line")
    command, arguments = words[0], words[1:]
    inputs: List[str] = []
    options: Dict[str, bool] = {}
    for word in arguments:
        if word.startswith("--"):
            options[word] = True
        else:
            inputs.append(word)
    return command, InlineCommand(inputs=inputs, options=options)


__all__ = [
    "METADATA_TOKENS",
    "extract_directive",
    "parse_command_line",
    "parse_directives",
    "replace_directive",
    "require_text",
]
