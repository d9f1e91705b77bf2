"""Navigation menu generation across all discovered templates."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .directives import replace_directive
from .logging import get_logger
from .models import Template

MENU_TOKEN = "MENU"
ENTRY_SEPARATOR = " &nbsp; | &nbsp; "
SECTION_SEPARATOR = " | "
INDENT_UNIT = "&nbsp; "

logger = get_logger("menu")


def titlize(filename_base: str) -> str:
    """Derive a menu title from a file name: `getting-started` -> `Getting Started`."""
    words = filename_base.split("-")
    return " ".join(word if len(word) <= 3 else word[0].upper() + word[1:] for word in words)


class MenuBuilder:
    """Builds the centered, grouped link bar that replaces a `!MENU` line."""

    def __init__(self, *, link_suffix: str = "#readme") -> None:
        self.link_suffix = link_suffix

    def build(self, current: Template, templates: Sequence[Template]) -> str:
        ordered = sorted(templates, key=lambda template: template.menu_order)

        lines: List[str] = []
        previous_section: Optional[str] = None
        for template in ordered:
            if template.menu_skip:
                continue
            link = self._link(template, is_current=template is current)
            section = template.menu_section
            if not section:
                lines.append(link)
            elif section != previous_section or not lines:
                lines.append(f"{section}: {link}")
            else:
                lines[-1] += SECTION_SEPARATOR + link
            previous_section = section

        if current.menu_indent:
            prefix = INDENT_UNIT * current.menu_indent
            lines = [prefix + line for line in lines]

        return "<p align='center'>" + ENTRY_SEPARATOR.join(lines) + "</p>"

    def apply(self, current: Template, templates: Sequence[Template]) -> None:
        """Substitute the template's `!MENU` line, if it has one."""
        if "!" + MENU_TOKEN not in current.content:
            return
        menu_text = self.build(current, templates)
        replaced, content = replace_directive(
            MENU_TOKEN, current.content, menu_text, bare=True
        )
        if replaced:
            logger.debug("Rendered menu for %s", current.template_path)
            current.content = content

    def _link(self, template: Template, *, is_current: bool) -> str:
        url = template.menu_link or template.dist_path_md_relative
        title = template.menu_title
        if is_current:
            title = f"<b>{title}</b>"
        return f'<a href="{url}{self.link_suffix}">{title}</a>'


__all__ = ["MenuBuilder", "titlize"]
