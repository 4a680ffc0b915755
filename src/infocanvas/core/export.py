"""
Export of generated artifacts to PNG files.
"""

import io
from pathlib import Path

from PIL import Image

from infocanvas.core.history import GeneratedArtifact
from infocanvas.logging_config import get_logger
from infocanvas.utils.exceptions import ImageProcessingError

logger = get_logger(__name__)


def export_filename(artifact: GeneratedArtifact) -> str:
    """File name for an exported artifact, derived from its id only."""
    return f"infographic-{artifact.id}.png"


def to_png_bytes(payload: bytes, mime_type: str = "image/png") -> bytes:
    """
    Return payload as PNG bytes, re-encoding other formats with Pillow.

    Raises:
        ImageProcessingError: If the payload cannot be decoded
    """
    if mime_type == "image/png" and payload[:8] == b"\x89PNG\r\n\x1a\n":
        return payload
    try:
        with Image.open(io.BytesIO(payload)) as image:
            image.load()
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            return buffer.getvalue()
    except Exception as e:
        raise ImageProcessingError(f"Failed to convert image to PNG: {str(e)}") from e


def export_artifact(artifact: GeneratedArtifact, directory: str | Path = ".") -> Path:
    """
    Write artifact as a PNG file into directory.

    Returns:
        Path of the written file

    Raises:
        ImageProcessingError: If the payload cannot be converted or written
    """
    out_dir = Path(directory)
    out_path = out_dir / export_filename(artifact)
    data = to_png_bytes(artifact.payload, artifact.mime_type)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(data)
    except OSError as e:
        raise ImageProcessingError(
            f"Failed to write image: {str(e)}", image_path=str(out_path)
        ) from e
    logger.info("Exported artifact id=%s path=%s", artifact.id, out_path)
    return out_path
