"""
Canvas geometry and zoom for infocanvas.

Each aspect ratio maps to a fixed base display size in pixels. The zoom factor
scales that base size on screen; manual zoom steps and auto-fit write the same
zoom value.
"""

from dataclasses import dataclass
from typing import Literal

from infocanvas.logging_config import get_logger

logger = get_logger(__name__)

AspectRatio = Literal["1:1", "4:5", "16:9", "9:16"]

ASPECT_RATIOS: tuple[str, ...] = ("9:16", "1:1", "16:9", "4:5")
DEFAULT_ASPECT_RATIO: AspectRatio = "9:16"

MIN_ZOOM = 0.1
MAX_ZOOM = 4.0
ZOOM_STEP = 0.1
INITIAL_ZOOM = 0.75

# Space kept free around the canvas when fitting it into the container
FIT_MARGIN_WIDTH = 60
FIT_MARGIN_HEIGHT = 120
FIT_SCALE = 0.9


@dataclass(frozen=True)
class CanvasDimensions:
    """Base display size of the canvas plus the nominal output size shown to users."""

    width: int
    height: int
    label_width: int  # display text only, never used for geometry
    label_height: int

    @property
    def label(self) -> str:
        """Human-readable output size, e.g. '1080 x 1920 px'."""
        return f"{self.label_width} x {self.label_height} px"


CANVAS_DIMENSIONS: dict[str, CanvasDimensions] = {
    "1:1": CanvasDimensions(500, 500, 1080, 1080),
    "16:9": CanvasDimensions(640, 360, 1920, 1080),
    "4:5": CanvasDimensions(400, 500, 1080, 1350),
    "9:16": CanvasDimensions(360, 640, 1080, 1920),
}


def dimensions_for(ratio: str) -> CanvasDimensions:
    """Return the canvas dimensions for an aspect ratio; unknown ratios use 9:16."""
    return CANVAS_DIMENSIONS.get(ratio, CANVAS_DIMENSIONS[DEFAULT_ASPECT_RATIO])


def clamp_zoom(value: float) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, value))


def compute_fit_zoom(
    container_width: float,
    container_height: float,
    base_width: float,
    base_height: float,
) -> float | None:
    """
    Zoom that fits a base_width x base_height canvas into a container.

    Returns:
        The fit zoom (at least MIN_ZOOM), or None when the container leaves no
        room once the margins are taken off.
    """
    available_width = container_width - FIT_MARGIN_WIDTH
    available_height = container_height - FIT_MARGIN_HEIGHT
    if available_width <= 0 or available_height <= 0:
        return None
    fit = min(available_width / base_width, available_height / base_height) * FIT_SCALE
    return max(MIN_ZOOM, fit)


class ZoomController:
    """Holds the canvas zoom factor, always within [MIN_ZOOM, MAX_ZOOM]."""

    def __init__(self, zoom: float = INITIAL_ZOOM) -> None:
        self._zoom = clamp_zoom(zoom)

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def zoom_percent(self) -> int:
        """Zoom as a whole percentage for display."""
        return round(self._zoom * 100)

    def zoom_in(self) -> float:
        self._zoom = min(self._zoom + ZOOM_STEP, MAX_ZOOM)
        return self._zoom

    def zoom_out(self) -> float:
        self._zoom = max(self._zoom - ZOOM_STEP, MIN_ZOOM)
        return self._zoom

    def auto_fit(
        self,
        container_width: float,
        container_height: float,
        base_width: float,
        base_height: float,
    ) -> float:
        """
        Overwrite the zoom with the fit zoom for the given container and canvas.

        A container too small to hold the margins leaves the zoom unchanged.
        The stored zoom never exceeds MAX_ZOOM, even for very large containers.

        Returns:
            The current zoom after fitting
        """
        fit = compute_fit_zoom(container_width, container_height, base_width, base_height)
        if fit is None:
            logger.debug(
                "Auto-fit skipped container=%sx%s (no room after margins)",
                container_width,
                container_height,
            )
            return self._zoom
        self._zoom = clamp_zoom(fit)
        logger.debug(
            "Auto-fit zoom=%.3f container=%sx%s canvas=%sx%s",
            self._zoom,
            container_width,
            container_height,
            base_width,
            base_height,
        )
        return self._zoom
