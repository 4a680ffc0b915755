"""
Request and response parts exchanged with the model clients.

A part is either an ImagePart (raw bytes + MIME type) or a TextPart. Model
clients translate these to and from their wire formats, so nothing above the
client layer sees provider-specific shapes.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class ImagePart:
    data: bytes = field(repr=False)
    mime_type: str = "image/png"

    def __repr__(self) -> str:
        return f"ImagePart(mime_type={self.mime_type!r}, {len(self.data)} bytes)"


@dataclass(frozen=True)
class TextPart:
    text: str


Part = Union[ImagePart, TextPart]


@dataclass(frozen=True)
class Candidate:
    """One candidate result from the model: an ordered sequence of parts."""

    parts: tuple[Part, ...] = ()


@dataclass(frozen=True)
class ModelResponse:
    """Model client response: zero or more candidates."""

    candidates: tuple[Candidate, ...] = ()
    model_used: str = ""

    def first_image_part(self) -> ImagePart | None:
        """
        Return the first inline image of the first candidate, scanning parts in
        order. Any later image parts are ignored.
        """
        if not self.candidates:
            return None
        for part in self.candidates[0].parts:
            if isinstance(part, ImagePart) and part.data:
                return part
        return None

    def text(self) -> str:
        """Concatenated text parts of the first candidate (for diagnostics)."""
        if not self.candidates:
            return ""
        return " ".join(p.text for p in self.candidates[0].parts if isinstance(p, TextPart))
