"""Export format definitions."""

import enum


class ExportFormat(str, enum.Enum):
    """Supported export formats with their file extension, MIME type and button label."""

    SRT = "srt"
    ASS = "ass"
    TXT = "txt"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def media_type(self) -> str:
        if self is ExportFormat.CSV:
            return "text/csv"
        return "text/plain"

    @property
    def label(self) -> str:
        return f"导出 {self.value.upper()}"
