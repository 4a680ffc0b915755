"""
Load instruction templates from the bundled prompts.yaml file.

Templates are defined in src/infocanvas/prompts.yaml and loaded once per
process. The structure is validated with a pydantic schema so a broken file
fails loudly at first use instead of producing odd instructions.
"""

import importlib.resources
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from infocanvas.utils.exceptions import ConfigurationError

# Module-level cache for parsed prompts
_prompts_data: dict[str, Any] | None = None


class GenerationPrompts(BaseModel):
    """Templates for generating a new infographic."""

    template: str = Field(..., min_length=1, description="Must contain {prompt}")
    references_note: str = Field(..., min_length=1, description="Must contain {count}")


class EditPrompts(BaseModel):
    """Templates for editing the active artifact."""

    template: str = Field(..., min_length=1, description="Must contain {edit}")
    region_template: str = Field(
        ..., min_length=1, description="Must contain {fragment} and {edit}"
    )
    references_note: str = Field(..., min_length=1)


class PromptsSchema(BaseModel):
    """Schema for prompts.yaml."""

    model_config = {"extra": "allow"}

    generation: GenerationPrompts
    edit: EditPrompts


_REQUIRED_PLACEHOLDERS = {
    ("generation", "template"): ("{prompt}",),
    ("generation", "references_note"): ("{count}",),
    ("edit", "template"): ("{edit}",),
    ("edit", "region_template"): ("{fragment}", "{edit}"),
}


def _load_prompts() -> dict[str, Any]:
    """Load and parse prompts.yaml from the package. Cached after first call.

    Returns:
        Dictionary of prompt data.

    Raises:
        ConfigurationError: If YAML is missing, malformed, or fails validation.
    """
    global _prompts_data
    if _prompts_data is not None:
        return _prompts_data

    try:
        with (
            importlib.resources.files("infocanvas")
            .joinpath("prompts.yaml")
            .open(encoding="utf-8") as f
        ):
            raw = f.read()
    except FileNotFoundError as e:
        raise ConfigurationError(
            "prompts.yaml not found. This file is required and should be bundled with the package."
        ) from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse prompts.yaml: {e}. Check YAML syntax and formatting."
        ) from e

    if data is None:
        raise ConfigurationError(
            "prompts.yaml is empty. Expected 'generation' and 'edit' sections."
        )

    try:
        PromptsSchema(**data)
    except ValidationError as e:
        errors = "\n".join(
            f"  - {'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(
            f"Invalid prompts.yaml structure:\n{errors}\n"
            "Expected 'generation' and 'edit' sections with their templates."
        ) from e

    for (section, key), placeholders in _REQUIRED_PLACEHOLDERS.items():
        value = data[section][key]
        missing = [p for p in placeholders if p not in value]
        if missing:
            raise ConfigurationError(
                f"{section}.{key} in prompts.yaml must contain {', '.join(missing)}."
            )

    _prompts_data = data
    return _prompts_data


def get_prompt(key: str, subkey: str | None = None) -> str | None:
    """
    Get a prompt string from prompts.yaml.

    Args:
        key: Top-level key (e.g. "generation").
        subkey: Optional subkey (e.g. "template") for nested value.

    Returns:
        The prompt string, or None if not found.
    """
    data = _load_prompts()
    value = data.get(key)
    if value is None:
        return None
    if subkey is not None:
        value = value.get(subkey) if isinstance(value, dict) else None
    return value if isinstance(value, str) else None


def require_prompt(key: str, subkey: str) -> str:
    """
    Like get_prompt, but a missing template is a configuration error.

    Raises:
        ConfigurationError: If the template is not defined.
    """
    value = get_prompt(key, subkey)
    if not value:
        raise ConfigurationError(f"{key}.{subkey} not found in prompts.yaml. This key is required.")
    return value
