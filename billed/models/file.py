from __future__ import annotations

from pydantic import BaseModel

ALLOWED_FILE_TYPES = {"image/jpeg", "image/png", "image/webp"}


class SelectedFile(BaseModel):
    name: str
    mime_type: str = ""
    data: bytes = b""

    @property
    def normalized_mime_type(self) -> str:
        """'Image/PNG; charset=binary' -> 'image/png'"""
        return self.mime_type.split(";", 1)[0].strip().lower()

    @property
    def is_allowed_type(self) -> bool:
        return self.normalized_mime_type in ALLOWED_FILE_TYPES
