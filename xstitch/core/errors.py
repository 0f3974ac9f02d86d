from __future__ import annotations

from typing import Any, Dict, Optional


class PatternError(Exception):
    """Base class for failures that abort a pattern-generation run."""

    def to_dict(self) -> Dict[str, Any]:
        return {"error": type(self).__name__, "message": str(self)}


class ImageLoadError(PatternError):
    """The source image bytes could not be decoded."""


class ConfigurationError(PatternError):
    """Grid size, colour limit or palette name is not acceptable."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.field:
            data["field"] = self.field
        return data


__all__ = ["PatternError", "ImageLoadError", "ConfigurationError"]
