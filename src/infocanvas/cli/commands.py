"""
Click command definitions for the infocanvas CLI.

This module contains the Click command group and its commands
(generate, formats).
"""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

import click

from infocanvas import (
    ASPECT_RATIOS,
    CanvasStudio,
    Config,
    GeneratedArtifact,
    SelectionRegion,
    ValidationError,
    __version__,
    load_reference_image,
)
from infocanvas.cli import progress
from infocanvas.cli.handlers import run_with_error_handling
from infocanvas.cli.utils import parse_region
from infocanvas.core.config import IMAGE_SIZES, KNOWN_PROVIDERS
from infocanvas.core.references import MAX_REFERENCE_IMAGES
from infocanvas.logging_config import configure_logging, get_verbosity_from_env


@click.group(
    help=f"""Generate and iteratively edit infographics with image models.

\b
Version: {__version__}
"""
)
@click.version_option(version=__version__, package_name="infocanvas")
@click.pass_context
def cli(ctx: click.Context) -> None:
    ctx.color = True


def _region_option(value: str | None) -> SelectionRegion | None:
    if value is None:
        return None
    try:
        return SelectionRegion.clamped(*parse_region(value))
    except click.BadParameter as e:
        raise ValidationError(f"Invalid region: {e.message}", field="region") from e
    except ValueError as e:
        raise ValidationError(str(e), field="region") from e


@cli.command()
@click.option("--prompt", "-p", required=True, help="Topic of the infographic.")
@click.option(
    "--ratio",
    type=click.Choice(list(ASPECT_RATIOS)),
    default=None,
    help="Aspect ratio (default from config, 9:16).",
)
@click.option(
    "--reference",
    "-r",
    "references",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help=f"Reference image used as style guide (repeatable, max {MAX_REFERENCE_IMAGES}).",
)
@click.option(
    "--edit",
    "-e",
    "edits",
    multiple=True,
    help="Edit instruction applied to the result (repeatable, applied in order).",
)
@click.option(
    "--region",
    default=None,
    help="Limit edits to a region given in percent of the canvas: X,Y,W,H.",
)
@click.option(
    "--out",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory for the exported PNG.",
)
@click.option(
    "--provider",
    type=click.Choice(list(KNOWN_PROVIDERS), case_sensitive=False),
    default=None,
    help="Model provider (default from config: gemini).",
)
@click.option("--model", "-m", help="Image model id (default depends on provider).")
@click.option(
    "--image-size",
    type=click.Choice(list(IMAGE_SIZES)),
    default=None,
    help="Output size hint (default 1K).",
)
@click.option("--api-key", help="API key for the provider (overrides the environment).")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Minimize progress messages; only print result path or errors.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase verbosity: -v also show instructions, -vv show API detail.",
)
@click.option(
    "--debug-api",
    is_flag=True,
    help="Log request and response parts (image data truncated) for debugging.",
)
def generate(
    prompt: str,
    ratio: str | None,
    references: tuple[Path, ...],
    edits: tuple[str, ...],
    region: str | None,
    out: Path,
    provider: str | None,
    model: str | None,
    image_size: str | None,
    api_key: str | None,
    quiet: bool,
    verbose_count: int,
    debug_api: bool,
) -> None:
    """Generate an infographic, apply optional edits and export the result."""
    verbose_level = min(verbose_count, 2) if verbose_count > 0 else get_verbosity_from_env()
    configure_logging(verbose_level=verbose_level, quiet=quiet)

    def do_generate() -> None:
        # 1. Config (CLI options override environment)
        config = Config.from_env()
        if provider is not None:
            config.provider = provider.lower()
        if model:
            config.image_model = model
        if image_size is not None:
            config.image_size = image_size
        if api_key is not None:
            config.set_api_key(api_key)
        if debug_api:
            config.debug_api = True
        config.validate()

        # 2. Session setup
        studio = CanvasStudio(config=config)
        if ratio is not None:
            studio.set_aspect_ratio(ratio)
        for path in references:
            studio.add_reference(load_reference_image(path))
        selection = _region_option(region)
        if selection is not None and not edits and not quiet:
            progress.print_warning("--region only applies to --edit instructions; ignoring it.")
        model_used = config.model_for()

        def run_step(
            action: str,
            step: Callable[[], Awaitable[GeneratedArtifact]],
            with_region: bool = False,
        ) -> GeneratedArtifact:
            if quiet:
                return asyncio.run(step())
            with progress.generation_progress(
                action,
                model=model_used,
                reference_count=len(references),
                region=with_region,
            ):
                return asyncio.run(step())

        # 3. Generate, then edit in order
        run_step("Generating", lambda: studio.generate(prompt))
        for i, instruction in enumerate(edits, start=1):
            if selection is not None:
                studio.show_selection(selection)
            run_step(
                f"Editing ({i}/{len(edits)})",
                lambda: studio.edit(instruction),
                with_region=selection is not None,
            )

        # 4. Export
        out_path = studio.export(out)
        if not quiet:
            progress.print_session_result(studio, out_path, model_used)
        click.echo(str(out_path))

    run_with_error_handling(do_generate, quiet=quiet)


@cli.command()
def formats() -> None:
    """List supported aspect ratios with canvas and output sizes."""
    progress.print_formats()


def main() -> None:
    """Entry point for the infocanvas console script."""
    cli()


__all__ = ["cli", "main", "generate", "formats"]
