"""
Request composition for infocanvas.

A request is an ordered list of parts:

1. when editing, the image being edited (the edit target);
2. one image per reference image, in set order (style guides, not targets);
3. exactly one text part with the instruction.

The model tells the edit target and the references apart only through the
instruction text. The selection region travels as a structured field and is
rendered into the instruction here.
"""

from dataclasses import dataclass

from infocanvas.core.config import DEFAULT_IMAGE_SIZE
from infocanvas.core.history import GeneratedArtifact
from infocanvas.core.parts import ImagePart, Part, TextPart
from infocanvas.core.prompts_loader import require_prompt
from infocanvas.core.references import ReferenceImage
from infocanvas.core.selection import SelectionRegion
from infocanvas.utils.exceptions import ValidationError


@dataclass(frozen=True)
class GenerationRequest:
    """Everything a model client needs for one call."""

    parts: tuple[Part, ...]
    aspect_ratio: str
    image_size: str = DEFAULT_IMAGE_SIZE
    region: SelectionRegion | None = None

    @property
    def instruction(self) -> str:
        """The text part of the request."""
        return next(p.text for p in self.parts if isinstance(p, TextPart))

    @property
    def image_count(self) -> int:
        return sum(1 for p in self.parts if isinstance(p, ImagePart))


def validate_prompt(prompt: str, field: str = "prompt") -> None:
    """
    Reject empty or whitespace-only prompts.

    Raises:
        ValidationError: If prompt is blank
    """
    if not prompt or not prompt.strip():
        raise ValidationError("Prompt cannot be empty", field=field)


def build_generation_instruction(prompt: str, reference_count: int) -> str:
    text = require_prompt("generation", "template").format(prompt=prompt)
    if reference_count > 0:
        text += require_prompt("generation", "references_note").format(count=reference_count)
    return text


def build_edit_instruction(
    edit_prompt: str,
    reference_count: int,
    region: SelectionRegion | None = None,
) -> str:
    if region is not None:
        text = require_prompt("edit", "region_template").format(
            fragment=region.format_instruction_fragment(), edit=edit_prompt
        )
    else:
        text = require_prompt("edit", "template").format(edit=edit_prompt)
    if reference_count > 0:
        text += require_prompt("edit", "references_note")
    return text


def _reference_parts(references: tuple[ReferenceImage, ...]) -> list[Part]:
    return [ImagePart(data=ref.data, mime_type=ref.mime_type) for ref in references]


def compose_generation_request(
    prompt: str,
    references: tuple[ReferenceImage, ...],
    aspect_ratio: str,
    image_size: str = DEFAULT_IMAGE_SIZE,
) -> GenerationRequest:
    """
    Compose a request for a new infographic about prompt.

    Raises:
        ValidationError: If prompt is blank
    """
    validate_prompt(prompt)
    parts = _reference_parts(references)
    parts.append(TextPart(build_generation_instruction(prompt, len(references))))
    return GenerationRequest(parts=tuple(parts), aspect_ratio=aspect_ratio, image_size=image_size)


def compose_edit_request(
    edit_prompt: str,
    source: GeneratedArtifact,
    references: tuple[ReferenceImage, ...],
    aspect_ratio: str,
    region: SelectionRegion | None = None,
    image_size: str = DEFAULT_IMAGE_SIZE,
) -> GenerationRequest:
    """
    Compose a request that edits source, optionally limited to region.

    Raises:
        ValidationError: If edit_prompt is blank
    """
    validate_prompt(edit_prompt, field="edit_prompt")
    parts: list[Part] = [ImagePart(data=source.payload, mime_type=source.mime_type)]
    parts.extend(_reference_parts(references))
    parts.append(TextPart(build_edit_instruction(edit_prompt, len(references), region)))
    return GenerationRequest(
        parts=tuple(parts),
        aspect_ratio=aspect_ratio,
        image_size=image_size,
        region=region,
    )
