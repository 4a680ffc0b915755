"""
CanvasStudio: the controller of one canvas editing session.

The studio owns a Session plus the interaction state around it (region
selection and zoom) and exposes the user-level operations. It also applies the
rules that couple the components:

- when the active artifact changes, the aspect ratio follows it (Session), the
  selection box is hidden, and the zoom is re-fitted to the new canvas size;
- an edit uses the selection region only while the box is visible, and
  submitting an edit hides the box.
"""

from pathlib import Path

from infocanvas.core.composer import compose_edit_request, compose_generation_request
from infocanvas.core.config import Config, get_config
from infocanvas.core.export import export_artifact
from infocanvas.core.history import GeneratedArtifact
from infocanvas.core.orchestrator import GenerationOrchestrator
from infocanvas.core.providers.base import ModelClient
from infocanvas.core.references import Preset, ReferenceImage
from infocanvas.core.selection import Point, RegionSelector, SelectionRegion
from infocanvas.core.session import Session
from infocanvas.core.viewport import (
    ASPECT_RATIOS,
    CanvasDimensions,
    ZoomController,
    dimensions_for,
)
from infocanvas.logging_config import get_logger
from infocanvas.utils.exceptions import ValidationError

logger = get_logger(__name__)


class CanvasStudio:
    """One canvas session with its selection, zoom and generation flow."""

    def __init__(
        self,
        config: Config | None = None,
        client: ModelClient | None = None,
        session: Session | None = None,
    ) -> None:
        self.config = config or get_config()
        self.session = session or Session(aspect_ratio=self.config.default_aspect_ratio)
        self.selector = RegionSelector()
        self.viewport = ZoomController()
        self.orchestrator = GenerationOrchestrator(self.session, self.config, client)
        self._container: tuple[float, float] | None = None
        self.session.add_active_listener(self._on_active_changed)

    # -- state -------------------------------------------------------------

    @property
    def active_artifact(self) -> GeneratedArtifact | None:
        return self.session.active_artifact

    @property
    def history(self) -> tuple[GeneratedArtifact, ...]:
        return self.session.history.entries

    @property
    def busy(self) -> bool:
        return self.session.busy

    @property
    def aspect_ratio(self) -> str:
        return self.session.aspect_ratio

    @property
    def dimensions(self) -> CanvasDimensions:
        return dimensions_for(self.session.aspect_ratio)

    @property
    def zoom(self) -> float:
        return self.viewport.zoom

    def _on_active_changed(self, artifact: GeneratedArtifact | None) -> None:
        self.selector.hide()
        self._refit()

    # -- format and viewport -----------------------------------------------

    def set_aspect_ratio(self, ratio: str) -> None:
        """
        Change the canvas aspect ratio used for the next generation.

        Raises:
            ValidationError: If ratio is not supported
        """
        if ratio not in ASPECT_RATIOS:
            raise ValidationError(
                f"Unsupported aspect ratio: {ratio}. Supported: {', '.join(ASPECT_RATIOS)}",
                field="aspect_ratio",
            )
        if ratio == self.session.aspect_ratio:
            return
        self.session.aspect_ratio = ratio
        self._refit()

    def set_container_size(self, width: float, height: float) -> float:
        """Record the viewport container size and fit the canvas into it."""
        self._container = (width, height)
        return self._refit()

    def _refit(self) -> float:
        if self._container is None:
            return self.viewport.zoom
        dims = self.dimensions
        return self.viewport.auto_fit(
            self._container[0], self._container[1], dims.width, dims.height
        )

    def zoom_in(self) -> float:
        return self.viewport.zoom_in()

    def zoom_out(self) -> float:
        return self.viewport.zoom_out()

    # -- references and presets ----------------------------------------------

    def add_reference(self, image: ReferenceImage) -> None:
        self.session.references.add(image)

    def remove_reference(self, index: int) -> ReferenceImage:
        return self.session.references.remove(index)

    def save_preset(self, name: str) -> Preset:
        return self.session.references.save_preset(name)

    def apply_preset(self, preset: Preset) -> None:
        self.session.references.apply_preset(preset)

    def is_preset_active(self, preset: Preset) -> bool:
        return self.session.references.is_preset_active(preset)

    # -- region selection ----------------------------------------------------

    def toggle_selection(self) -> bool:
        return self.selector.toggle_visible(self.active_artifact is not None)

    def show_selection(self, region: SelectionRegion | None = None) -> None:
        """Show the selection box, e.g. at a region given on the command line."""
        if self.active_artifact is None:
            raise ValidationError("No active image to select a region on.", field="region")
        self.selector.show(region)

    def begin_drag(self, pointer: Point) -> bool:
        return self.selector.begin_drag(pointer)

    def drag_to(self, pointer: Point) -> SelectionRegion:
        dims = self.dimensions
        return self.selector.update_drag(pointer, dims.width, dims.height, self.viewport.zoom)

    def end_drag(self) -> None:
        self.selector.end_drag()

    # -- history -------------------------------------------------------------

    def select(self, artifact_id: str | None) -> GeneratedArtifact | None:
        """Select a history entry and return the resulting active artifact."""
        self.session.select(artifact_id)
        return self.active_artifact

    # -- generation ----------------------------------------------------------

    async def generate(self, prompt: str) -> GeneratedArtifact:
        """Generate a new infographic about prompt."""
        request = compose_generation_request(
            prompt,
            self.session.references.images,
            self.session.aspect_ratio,
            self.config.image_size,
        )
        return await self.orchestrator.invoke(request)

    async def edit(self, edit_prompt: str) -> GeneratedArtifact:
        """
        Edit the active artifact, limited to the selection region when the box
        is visible.

        Raises:
            ValidationError: If there is no active artifact or edit_prompt is blank
        """
        source = self.active_artifact
        if source is None:
            raise ValidationError(
                "No active image to edit. Generate one first.", field="active_artifact"
            )
        request = compose_edit_request(
            edit_prompt,
            source,
            self.session.references.images,
            self.session.aspect_ratio,
            region=self.selector.active_region(),
            image_size=self.config.image_size,
        )
        # a rejected edit leaves the selection box as it was
        self.orchestrator.ensure_ready()
        self.selector.hide()
        return await self.orchestrator.invoke(request)

    # -- export --------------------------------------------------------------

    def export(self, directory: str | Path = ".") -> Path:
        """
        Write the active artifact as a PNG into directory.

        Raises:
            ValidationError: If there is no active artifact
        """
        artifact = self.active_artifact
        if artifact is None:
            raise ValidationError("Nothing to export yet.", field="active_artifact")
        return export_artifact(artifact, directory)
