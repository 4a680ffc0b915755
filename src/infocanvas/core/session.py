"""
Session state for infocanvas.

A Session is the single owner of everything a canvas editing session
accumulates: history and selection, reference images and presets, the
current aspect ratio and the busy flag. Nothing here is process-global; one
controller owns one Session.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from infocanvas.core.history import GeneratedArtifact, History
from infocanvas.core.references import ReferenceSet
from infocanvas.core.viewport import DEFAULT_ASPECT_RATIO
from infocanvas.logging_config import get_logger

logger = get_logger(__name__)

ActiveListener = Callable[[GeneratedArtifact | None], None]


@dataclass
class Session:
    """Mutable state of one canvas session."""

    history: History = field(default_factory=History)
    references: ReferenceSet = field(default_factory=ReferenceSet)
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    busy: bool = False
    _active_id: str | None = field(default=None, repr=False)
    _listeners: list[ActiveListener] = field(default_factory=list, repr=False)

    @property
    def active_artifact(self) -> GeneratedArtifact | None:
        return self.history.active

    @property
    def selected_id(self) -> str | None:
        return self.history.selected_id

    def add_active_listener(self, listener: ActiveListener) -> None:
        """Call listener whenever the active artifact changes identity."""
        self._listeners.append(listener)

    def select(self, artifact_id: str | None) -> bool:
        """Select a history entry. Returns True if the active artifact changed."""
        self.history.select(artifact_id)
        return self.sync_active()

    def commit(self, artifact: GeneratedArtifact) -> bool:
        """Prepend a new artifact and select it. Returns True if the active artifact changed."""
        self.history.add(artifact)
        self.history.select(artifact.id)
        logger.info(
            "Committed artifact id=%s ratio=%s history=%d",
            artifact.id,
            artifact.ratio,
            len(self.history),
        )
        return self.sync_active()

    def sync_active(self) -> bool:
        """
        Re-derive the active artifact and react if its identity changed: the
        aspect ratio follows the active artifact and listeners are notified.
        """
        active = self.history.active
        active_id = active.id if active is not None else None
        if active_id == self._active_id:
            return False
        self._active_id = active_id
        if active is not None:
            self.aspect_ratio = active.ratio
        for listener in list(self._listeners):
            listener(active)
        return True
