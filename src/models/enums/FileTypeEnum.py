"""File type enumeration."""
import os
from enum import Enum

from core.exceptions import UnsupportedFormatError


class FileTypeEnum(str, Enum):
    """Resume formats the extractor understands."""

    PDF = "pdf"
    DOC = "doc"
    DOCX = "docx"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @classmethod
    def from_path(cls, file_path: str) -> "FileTypeEnum":
        """Resolve the file type from the (case-insensitive) extension."""
        ext = os.path.splitext(file_path)[1].lower().lstrip(".")
        try:
            return cls(ext)
        except ValueError:
            raise UnsupportedFormatError(f"Unsupported file type: .{ext}") from None

    @classmethod
    def get_extensions(cls) -> list:
        """Get list of supported extensions, dot included."""
        return [member.extension for member in cls]
