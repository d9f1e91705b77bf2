"""`!VAR` declarations and references."""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

from .errors import UsageError

VAR_TOKEN = "!VAR"

# Characters GitHub drops when turning a heading into an anchor.
_SLUG_STRIP = re.compile(r"[`~!@#$%^&*()+=<>?,./:;\"'|{}\[\]\\–—]")
_SLUG_STRIP_CJK = re.compile(r"[　。？！，、；：“”【】（）〔〕［］﹃﹄‘’﹁﹂—…－～《》〈〉「」]")


def github_slug(value: str) -> str:
    slug = value.lower().replace(" ", "-")
    slug = _SLUG_STRIP.sub("", slug)
    return _SLUG_STRIP_CJK.sub("", slug)


def collect_variables(content: str) -> Tuple[Dict[str, str], str]:
    """Remove `!VAR <name> <value...>` lines, returning the declarations and the body."""
    variables: Dict[str, str] = {}
    body: List[str] = []
    for line in content.split("\n"):
        if not line.startswith(VAR_TOKEN + " "):
            body.append(line)
            continue
        words = line.split(" ")[1:]
        name, value = words[0], " ".join(words[1:])
        if not name:
            raise UsageError(f"`{VAR_TOKEN}` declaration is missing a variable name: {line!r}")
        variables[name] = value
    return variables, "\n".join(body)


def apply_variables(content: str) -> str:
    """Expand `!VAR`, `!VAR|LINK` and `!VAR|ANCHOR` references to declared values."""
    variables, content = collect_variables(content)
    for name, value in variables.items():
        anchor = "#" + github_slug(value)
        content = _substitute(content, f"{VAR_TOKEN} {name}", value)
        content = _substitute(content, f"{VAR_TOKEN}|LINK {name}", f"<a href={anchor}>{value}</a>")
        content = _substitute(content, f"{VAR_TOKEN}|ANCHOR {name}", anchor)
    return content


def _substitute(content: str, reference: str, replacement: str) -> str:
    pattern = re.compile(re.escape(reference) + r"\b")
    return pattern.sub(lambda _match: replacement, content)


__all__ = ["apply_variables", "collect_variables", "github_slug"]
