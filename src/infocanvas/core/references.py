"""
Reference image handling for infocanvas.

Reference images are style and content guides sent along with every request.
The set is ordered and holds at most MAX_REFERENCE_IMAGES images. Presets are
named, immutable snapshots of the set that can be applied back wholesale.

Uploads are not decoded or validated here; the only check is the count cap.
"""

import base64
import binascii
from dataclasses import dataclass, field
from pathlib import Path

from infocanvas.logging_config import get_logger
from infocanvas.utils.exceptions import (
    CapacityExceededError,
    EmptyNameError,
    IndexOutOfRangeError,
    ValidationError,
)

logger = get_logger(__name__)

MAX_REFERENCE_IMAGES = 3
DEFAULT_MIME_TYPE = "image/png"

_SUFFIX_MIME_TYPES = {
    "PNG": "image/png",
    "JPG": "image/jpeg",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
    "HEIC": "image/heic",
    "HEIF": "image/heif",
    "GIF": "image/gif",
}


@dataclass(frozen=True)
class ReferenceImage:
    """Encoded image payload; equal when bytes and MIME type are equal."""

    data: bytes = field(repr=False)
    mime_type: str = DEFAULT_MIME_TYPE

    def __repr__(self) -> str:
        return f"ReferenceImage(mime_type={self.mime_type!r}, {len(self.data)} bytes)"


@dataclass(frozen=True)
class Preset:
    """Named snapshot of a reference set."""

    name: str
    images: tuple[ReferenceImage, ...] = ()


def same_images(a: tuple[ReferenceImage, ...], b: tuple[ReferenceImage, ...]) -> bool:
    """True when both sequences hold equal images in the same order."""
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


class ReferenceSet:
    """Ordered, bounded collection of reference images plus saved presets."""

    def __init__(self, limit: int = MAX_REFERENCE_IMAGES) -> None:
        self.limit = limit
        self._images: list[ReferenceImage] = []
        self._presets: list[Preset] = []

    @property
    def images(self) -> tuple[ReferenceImage, ...]:
        return tuple(self._images)

    @property
    def presets(self) -> tuple[Preset, ...]:
        return tuple(self._presets)

    @property
    def count(self) -> int:
        return len(self._images)

    @property
    def remaining(self) -> int:
        """Free slots left before the cap."""
        return self.limit - len(self._images)

    def __len__(self) -> int:
        return len(self._images)

    def add(self, image: ReferenceImage) -> None:
        """
        Append a reference image.

        Raises:
            CapacityExceededError: If the set already holds `limit` images
        """
        if len(self._images) >= self.limit:
            raise CapacityExceededError(self.limit)
        self._images.append(image)
        logger.debug("Added reference image count=%d", len(self._images))

    def remove(self, index: int) -> ReferenceImage:
        """
        Remove and return the image at index.

        Raises:
            IndexOutOfRangeError: If index does not address an image
        """
        if not 0 <= index < len(self._images):
            raise IndexOutOfRangeError(index, len(self._images))
        removed = self._images.pop(index)
        logger.debug("Removed reference image index=%d count=%d", index, len(self._images))
        return removed

    def clear(self) -> None:
        self._images.clear()

    def save_preset(self, name: str) -> Preset:
        """
        Snapshot the current images under name and append it to the presets.

        Raises:
            EmptyNameError: If name is blank
        """
        if not name or not name.strip():
            raise EmptyNameError()
        preset = Preset(name=name, images=tuple(self._images))
        self._presets.append(preset)
        logger.info("Saved preset name=%r images=%d", name, len(preset.images))
        return preset

    def apply_preset(self, preset: Preset) -> None:
        """Replace the whole set with the preset's images."""
        self._images = list(preset.images)
        logger.info("Applied preset name=%r images=%d", preset.name, len(self._images))

    def is_preset_active(self, preset: Preset) -> bool:
        """True when the live set matches the preset image for image."""
        return same_images(tuple(self._images), preset.images)


def _infer_mime_from_magic(data: bytes) -> str | None:
    """Infer MIME type from magic bytes, or None if unknown."""
    if len(data) < 12:
        return None
    if data[:8] == b"\x89PNG\r\n\x1a\n":
        return "image/png"
    if data[:2] == b"\xff\xd8":
        return "image/jpeg"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    if data[4:12] in (b"ftypheic", b"ftypheix", b"ftypmif1"):
        return "image/heic"
    return None


def _normalize_mime(hint: str | None) -> str | None:
    """Turn 'PNG', 'jpg' or 'image/jpeg' into a MIME type; None if unknown."""
    if not hint:
        return None
    s = hint.strip()
    if s.lower().startswith("image/"):
        return s.lower()
    return _SUFFIX_MIME_TYPES.get(s.upper().lstrip("."))


def _parse_data_url(data_url: str) -> tuple[bytes, str | None]:
    """
    Split a data URL (data:image/xxx;base64,yyy) into bytes and MIME type.

    Raises:
        ValidationError: If the URL is not base64 data or does not decode
    """
    data_url = data_url.strip()
    idx = data_url.find(";base64,")
    if not data_url.startswith("data:") or idx == -1:
        raise ValidationError("Data URL missing ;base64, part", field="image")
    try:
        payload = base64.b64decode(data_url[idx + 8 :], validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Invalid base64 in data URL: {e}", field="image") from e
    return payload, _normalize_mime(data_url[5:idx])


def load_reference_image(
    source: str | Path | bytes,
    format_hint: str | None = None,
) -> ReferenceImage:
    """
    Build a ReferenceImage from a file path, raw bytes or a data URL.

    The MIME type comes from format_hint, the data URL, the magic bytes or the
    file suffix, in that order, and defaults to image/png.

    Raises:
        ValidationError: If the payload is empty or the data URL is malformed
        FileNotFoundError: If a path source does not exist
    """
    mime = _normalize_mime(format_hint)
    if isinstance(source, bytes):
        data = source
    elif isinstance(source, str) and source.strip().startswith("data:"):
        data, url_mime = _parse_data_url(source)
        mime = mime or url_mime
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Image file not found: {path}")
        data = path.read_bytes()
        mime = mime or _infer_mime_from_magic(data) or _normalize_mime(path.suffix)

    if not data:
        raise ValidationError("Image data is empty", field="image")

    mime = mime or _infer_mime_from_magic(data) or DEFAULT_MIME_TYPE
    logger.debug("Loaded reference image mime_type=%s size=%d", mime, len(data))
    return ReferenceImage(data=data, mime_type=mime)
