"""Generated-file banners that discourage editing computed output."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EditNoteWrapper:
    """Wraps expanded content with a "do not edit" comment at top and bottom."""

    repeat: int = 5
    padding_lines: int = 5

    def note(self, source_path: str) -> str:
        padding = "\n" * self.padding_lines
        block = "\n".join(
            [
                padding,
                "    WARNING, READ THIS.",
                "    This is a computed file. Do not edit.",
                f"    Edit `{source_path}` instead.",
                padding,
            ]
        )
        return "\n".join(["<!---", *([block] * self.repeat), "-->"])

    def wrap(self, content: str, source_path: str) -> str:
        note = self.note(source_path)
        return "\n".join([note, content, note, ""])


__all__ = ["EditNoteWrapper"]
