"""
Generation history and active artifact resolution.

History is append-only with the newest artifact first. Nothing is ever removed
or changed, and there is no size cap. The active artifact is derived on every
read from the entries and the selected id:

    selected entry  ->  else newest entry  ->  else None
"""

import time
import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field

PROMPT_SUMMARY_MAX = 30


def summarize_prompt(text: str, limit: int = PROMPT_SUMMARY_MAX) -> str:
    """Cut text to limit characters, adding '...' when anything was cut."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def new_artifact_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class GeneratedArtifact:
    """A generated image with the metadata needed to show and re-edit it."""

    id: str
    payload: bytes = field(repr=False)
    prompt_summary: str
    ratio: str
    created_at: float = field(default_factory=time.time)
    mime_type: str = "image/png"


class History:
    """Append-only record of generated artifacts plus a nullable selection."""

    def __init__(self) -> None:
        self._entries: list[GeneratedArtifact] = []
        self.selected_id: str | None = None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[GeneratedArtifact]:
        return iter(tuple(self._entries))

    @property
    def entries(self) -> tuple[GeneratedArtifact, ...]:
        """All artifacts, newest first."""
        return tuple(self._entries)

    def add(self, artifact: GeneratedArtifact) -> None:
        """Put an artifact at the front of the history."""
        self._entries.insert(0, artifact)

    def select(self, artifact_id: str | None) -> None:
        """Select an artifact by id. Unknown ids are stored as-is; see active."""
        self.selected_id = artifact_id

    def get(self, artifact_id: str | None) -> GeneratedArtifact | None:
        if artifact_id is None:
            return None
        return next((a for a in self._entries if a.id == artifact_id), None)

    @property
    def active(self) -> GeneratedArtifact | None:
        """The selected artifact, else the newest, else None."""
        selected = self.get(self.selected_id)
        if selected is not None:
            return selected
        return self._entries[0] if self._entries else None
