"""
Exception types raised by the subtitle processing engine.

Every diagnostic carries enough context (document, block, plugin, parameter)
for the caller to present a precise message.
"""

from typing import Optional


class SubtitleEditorError(Exception):
    """Base class for all engine errors."""

    def __init__(self, message: str, document: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.document = document

    def __str__(self) -> str:
        if self.document:
            return f"{self.document}: {self.message}"
        return self.message


class FormatError(SubtitleEditorError):
    """Raised when a timestamp or subtitle block is malformed."""

    def __init__(self, message: str, block: Optional[int] = None,
                 line: Optional[int] = None, document: Optional[str] = None):
        super().__init__(message, document)
        self.block = block
        self.line = line

    def __str__(self) -> str:
        location = []
        if self.block is not None:
            location.append(f"block {self.block}")
        if self.line is not None:
            location.append(f"line {self.line}")
        text = super().__str__()
        return f"{text} ({', '.join(location)})" if location else text


class EncodingError(SubtitleEditorError):
    """Raised when bytes cannot be decoded or text cannot be encoded."""

    def __init__(self, message: str, encoding: Optional[str] = None,
                 position: Optional[int] = None, document: Optional[str] = None):
        super().__init__(message, document)
        self.encoding = encoding
        self.position = position


class ConfigError(SubtitleEditorError):
    """Raised when a plugin parameter value is outside its declared bounds."""

    def __init__(self, message: str, plugin_id: Optional[str] = None,
                 key: Optional[str] = None):
        super().__init__(message)
        self.plugin_id = plugin_id
        self.key = key
