"""
infocanvas - iterative infographic generation and editing

A Python package for generating a canvas image from a prompt and refining it
with follow-up edit instructions, optionally guided by up to three reference
images and a rectangular region of the canvas.

Library usage:
- CanvasStudio is the entry point: one studio owns one session (history,
  references, presets, aspect ratio) and its selection and zoom state.
- Generation is async: ``await studio.generate(prompt)`` and
  ``await studio.edit(instruction)``. Only one generation runs at a time.
- Configuration can be passed per studio (CanvasStudio(config=...)) or via the
  shared config: use get_config() / set_config().
- Logging: control verbosity with set_verbosity(0|1|2) or
  configure_logging(verbose_level, quiet).
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("infocanvas")
except PackageNotFoundError:
    # Package is not installed (e.g., running from source in development)
    __version__ = "0.0.0.dev"

from infocanvas.core.composer import GenerationRequest, validate_prompt
from infocanvas.core.config import Config, get_config, set_config
from infocanvas.core.export import export_artifact, export_filename
from infocanvas.core.history import GeneratedArtifact, History
from infocanvas.core.references import (
    MAX_REFERENCE_IMAGES,
    Preset,
    ReferenceImage,
    ReferenceSet,
    load_reference_image,
)
from infocanvas.core.selection import RegionSelector, SelectionRegion
from infocanvas.core.session import Session
from infocanvas.core.studio import CanvasStudio
from infocanvas.core.viewport import ASPECT_RATIOS, CanvasDimensions, ZoomController
from infocanvas.logging_config import configure_logging, set_verbosity
from infocanvas.utils.exceptions import (
    APIError,
    CapacityExceededError,
    ConfigurationError,
    EmptyNameError,
    GenerationInProgressError,
    ImageProcessingError,
    IndexOutOfRangeError,
    InfocanvasError,
    NetworkError,
    NoImageInResponseError,
    RequestTimeoutError,
    TransportError,
    ValidationError,
)

__all__ = [
    "APIError",
    "ASPECT_RATIOS",
    "CanvasDimensions",
    "CanvasStudio",
    "CapacityExceededError",
    "Config",
    "ConfigurationError",
    "EmptyNameError",
    "GeneratedArtifact",
    "GenerationInProgressError",
    "GenerationRequest",
    "History",
    "ImageProcessingError",
    "IndexOutOfRangeError",
    "InfocanvasError",
    "MAX_REFERENCE_IMAGES",
    "NetworkError",
    "NoImageInResponseError",
    "Preset",
    "ReferenceImage",
    "ReferenceSet",
    "RegionSelector",
    "RequestTimeoutError",
    "SelectionRegion",
    "Session",
    "TransportError",
    "ValidationError",
    "ZoomController",
    "configure_logging",
    "export_artifact",
    "export_filename",
    "get_config",
    "load_reference_image",
    "set_config",
    "set_verbosity",
    "validate_prompt",
]
