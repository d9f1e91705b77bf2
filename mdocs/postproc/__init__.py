"""Post-processing applied to expanded template content."""

from .edit_note import EditNoteWrapper
from .imports import PackagePathRewriter

__all__ = ["EditNoteWrapper", "PackagePathRewriter"]
