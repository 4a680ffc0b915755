"""
Region selection on the canvas.

The selection box lives in percentage space (0-100 on both axes, relative to the
canvas base dimensions), so it is independent of zoom. Dragging converts pointer
pixel deltas to percentages through the current zoom: at higher zoom the same
pixel delta moves the box less. Width and height are fixed once the region is
created; dragging only translates it, and the box always stays fully inside
the canvas.
"""

import math
from dataclasses import dataclass, replace

from infocanvas.logging_config import get_logger

logger = get_logger(__name__)

Point = tuple[float, float]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class SelectionRegion:
    """Rectangle in percent of the canvas: 0 <= x <= 100 - w, 0 <= y <= 100 - h."""

    x: float
    y: float
    w: float
    h: float

    def __post_init__(self) -> None:
        if not (0 < self.w <= 100 and 0 < self.h <= 100):
            raise ValueError(f"Region size must be within (0, 100], got {self.w}x{self.h}")
        if not (0 <= self.x <= 100 - self.w and 0 <= self.y <= 100 - self.h):
            raise ValueError(
                f"Region ({self.x}, {self.y}, {self.w}, {self.h}) extends outside the canvas"
            )

    @classmethod
    def clamped(cls, x: float, y: float, w: float, h: float) -> "SelectionRegion":
        """Build a region, pulling the position back inside the canvas if needed."""
        w = min(w, 100)
        h = min(h, 100)
        return cls(x=_clamp(x, 0, 100 - w), y=_clamp(y, 0, 100 - h), w=w, h=h)

    def moved_to(self, x: float, y: float) -> "SelectionRegion":
        """Same size at a new position, clamped inside the canvas."""
        return replace(self, x=_clamp(x, 0, 100 - self.w), y=_clamp(y, 0, 100 - self.h))

    def format_instruction_fragment(self) -> str:
        """Render the region as the prefix of an edit instruction."""
        return (
            f"In the selected region (x:{_round_half_up(self.x)}% "
            f"y:{_round_half_up(self.y)}%): "
        )


DEFAULT_REGION = SelectionRegion(x=20, y=20, w=60, h=20)


class RegionSelector:
    """
    Selection box state: visibility, current region and pointer drag.

    Pointer positions are screen pixels. end_drag() must be wired to a pointer
    release anywhere in the interaction surface, not only on the box itself,
    or a release outside the box leaves the drag running.
    """

    def __init__(self, region: SelectionRegion = DEFAULT_REGION) -> None:
        self.visible = False
        self.region = region
        self.dragging = False
        self._drag_start_pointer: Point = (0.0, 0.0)
        self._drag_start_position: Point = (region.x, region.y)

    def show(self, region: SelectionRegion | None = None) -> None:
        """Make the box visible, optionally replacing the region."""
        if region is not None:
            self.region = region
        self.visible = True

    def hide(self) -> None:
        self.visible = False
        self.dragging = False

    def toggle_visible(self, has_active_artifact: bool) -> bool:
        """
        Toggle the selection box. Without an active artifact there is nothing to
        select on, so the call does nothing.

        Returns:
            The visibility after the call
        """
        if not has_active_artifact:
            return self.visible
        if self.visible:
            self.hide()
        else:
            self.visible = True
        return self.visible

    def begin_drag(self, pointer: Point) -> bool:
        """
        Start dragging the box from a pointer position.

        Returns:
            False (and does nothing) when the box is hidden
        """
        if not self.visible:
            return False
        self._drag_start_pointer = pointer
        self._drag_start_position = (self.region.x, self.region.y)
        self.dragging = True
        logger.debug("Selection drag started at x=%s y=%s", self.region.x, self.region.y)
        return True

    def update_drag(
        self,
        pointer: Point,
        base_width: float,
        base_height: float,
        zoom: float,
    ) -> SelectionRegion:
        """
        Move the box to follow the pointer.

        The pixel delta from the drag start is divided by the on-screen canvas
        size (base dimension x zoom) per axis to get a percentage delta. The
        result is clamped so the box never leaves the canvas.
        """
        if not self.dragging:
            return self.region
        dx = pointer[0] - self._drag_start_pointer[0]
        dy = pointer[1] - self._drag_start_pointer[1]
        dx_percent = dx / (base_width * zoom) * 100
        dy_percent = dy / (base_height * zoom) * 100
        start_x, start_y = self._drag_start_position
        self.region = self.region.moved_to(start_x + dx_percent, start_y + dy_percent)
        return self.region

    def end_drag(self) -> None:
        if self.dragging:
            logger.debug("Selection drag ended at x=%s y=%s", self.region.x, self.region.y)
        self.dragging = False

    def active_region(self) -> SelectionRegion | None:
        """The region to apply to an edit, or None when the box is hidden."""
        return self.region if self.visible else None

    def format_instruction_fragment(self) -> str:
        """Instruction prefix for the current region; empty when the box is hidden."""
        if not self.visible:
            return ""
        return self.region.format_instruction_fragment()
