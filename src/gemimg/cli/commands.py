"""
Click command definitions for the gemimg CLI.

This module contains the Click command group and all CLI commands
(generate, edit, compose, models, login).
"""

import json
import time
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import asdict
from pathlib import Path
from typing import Any

import click

from gemimg import (
    ASPECT_RATIOS,
    IMAGE_SIZES,
    MAX_REFERENCE_IMAGES,
    OUTPUT_MIME_TYPES,
    Config,
    ConfigurationError,
    GeneratedImageData,
    GeneratedImageResult,
    GenerationOptions,
    ImageGenClient,
    __version__,
    create_client,
)
from gemimg.cli import progress
from gemimg.cli.handlers import run_with_error_handling
from gemimg.cli.utils import default_output_path
from gemimg.logging_config import configure_logging, get_verbosity_from_env

LOGIN_HELP = (
    "Set GEMINI_API_KEY via environment. "
    "Optional: GEMINI_IMAGE_MODEL (default gemini-3-pro-image-preview)."
)


def _common_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that talks to the API."""
    options = [
        click.option(
            "--api-key",
            envvar="GEMINI_API_KEY",
            help="Gemini API key (overrides GEMINI_API_KEY environment variable).",
        ),
        click.option(
            "--quiet",
            "-q",
            is_flag=True,
            help="Minimize progress messages; only print result path or errors.",
        ),
        click.option(
            "--verbose",
            "-v",
            "verbose_count",
            count=True,
            help="Increase verbosity: -v also show prompts, -vv show request detail.",
        ),
        click.option(
            "--debug-api",
            is_flag=True,
            help=(
                "Log raw API request/response bodies (image data truncated) "
                "and show tracebacks for unexpected errors."
            ),
        ),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def _generation_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Options mapped onto GenerationOptions."""
    options = [
        click.option("--prompt", "-p", required=True, help="Text instruction for the model."),
        click.option("--out", "-o", type=click.Path(path_type=Path), help="Output file path."),
        click.option("--model", "-m", help="Gemini image model ID (default from config)."),
        click.option("--aspect-ratio", type=click.Choice(ASPECT_RATIOS), help="Aspect ratio."),
        click.option("--image-size", type=click.Choice(IMAGE_SIZES), help="Output image size."),
        click.option("--no-text", is_flag=True, help="Request the image only, without text."),
        click.option("--search", is_flag=True, help="Enable Google Search grounding."),
        click.option(
            "--mime-type", type=click.Choice(OUTPUT_MIME_TYPES), help="Output image MIME type."
        ),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def _setup_logging(quiet: bool, verbose_count: int, debug_api: bool = False) -> None:
    # CLI flags override GEMIMG_VERBOSITY
    verbose_level = min(verbose_count, 2) if verbose_count > 0 else get_verbosity_from_env()
    configure_logging(verbose_level=verbose_level, quiet=quiet, debug_api=debug_api)


def _make_client(api_key: str | None, debug_api: bool) -> ImageGenClient:
    config = Config.from_env()
    if api_key is not None:
        config.set_api_key(api_key)
    if debug_api:
        config.debug_api = True
    return create_client(config)


def _options_from_flags(
    model: str | None,
    aspect_ratio: str | None,
    image_size: str | None,
    no_text: bool,
    search: bool,
    mime_type: str | None,
    input_mime_type: str | None = None,
) -> GenerationOptions:
    return GenerationOptions(
        model=model,
        aspect_ratio=aspect_ratio,
        image_size=image_size,
        include_text=not no_text,
        enable_search_grounding=search,
        mime_type=mime_type,
        input_mime_type=input_mime_type,
    )


def _progress(
    quiet: bool, action: str, model: str, reference_count: int = 0
) -> AbstractContextManager[None]:
    if quiet:
        return nullcontext()
    return progress.generation_progress(action, model=model, reference_count=reference_count)


def _save_to_default_path(data: GeneratedImageData) -> GeneratedImageResult:
    # Extension follows the MIME type the server returned
    out_path = Path(default_output_path(data.mime_type))
    out_path.write_bytes(data.image_bytes)
    return GeneratedImageResult(
        output_path=str(out_path),
        mime_type=data.mime_type,
        model=data.model,
        prompt=data.prompt,
        text_response=data.text_response,
    )


def _report(
    result: GeneratedImageResult, elapsed: float, quiet: bool, reference_count: int = 0
) -> None:
    if not quiet:
        progress.print_success_result(result, elapsed, reference_count)
    # Path always goes to stdout for scriptability
    click.echo(result.output_path)


@click.group(
    help=f"""Gemini image generation: generate, edit and compose images.

\b
Version: {__version__}
"""
)
@click.version_option(version=__version__, package_name="gemimg")
@click.pass_context
def cli(ctx: click.Context) -> None:
    ctx.color = True


@cli.command()
@_generation_options
@_common_options
def generate(
    prompt: str,
    out: Path | None,
    model: str | None,
    aspect_ratio: str | None,
    image_size: str | None,
    no_text: bool,
    search: bool,
    mime_type: str | None,
    api_key: str | None,
    quiet: bool,
    verbose_count: int,
    debug_api: bool,
) -> None:
    """Generate an image from a text prompt."""
    _setup_logging(quiet, verbose_count, debug_api)

    def do_generate() -> None:
        client = _make_client(api_key, debug_api)
        options = _options_from_flags(model, aspect_ratio, image_size, no_text, search, mime_type)

        start = time.time()
        with _progress(quiet, "Generating image", model or client.model):
            if out is not None:
                result = client.generate_image(prompt, out, options)
            else:
                result = _save_to_default_path(client.generate_image_data(prompt, options))
        _report(result, time.time() - start, quiet)

    run_with_error_handling(do_generate, quiet=quiet, debug=debug_api)


@cli.command()
@click.option(
    "--input",
    "-i",
    "input_path",
    required=True,
    type=click.Path(path_type=Path),
    help="Image to edit.",
)
@click.option("--input-mime-type", help="MIME type of the input image (default: detected).")
@_generation_options
@_common_options
def edit(
    input_path: Path,
    input_mime_type: str | None,
    prompt: str,
    out: Path | None,
    model: str | None,
    aspect_ratio: str | None,
    image_size: str | None,
    no_text: bool,
    search: bool,
    mime_type: str | None,
    api_key: str | None,
    quiet: bool,
    verbose_count: int,
    debug_api: bool,
) -> None:
    """Edit an existing image with a text instruction."""
    _setup_logging(quiet, verbose_count, debug_api)

    def do_edit() -> None:
        client = _make_client(api_key, debug_api)
        options = _options_from_flags(
            model, aspect_ratio, image_size, no_text, search, mime_type, input_mime_type
        )

        start = time.time()
        with _progress(quiet, "Editing image", model or client.model, 1):
            if out is not None:
                result = client.edit_image(input_path, prompt, out, options)
            else:
                result = _save_to_default_path(
                    client.edit_image_data(input_path, prompt, options)
                )
        _report(result, time.time() - start, quiet, reference_count=1)

    run_with_error_handling(do_edit, quiet=quiet, debug=debug_api)


@cli.command()
@click.option(
    "--reference",
    "-r",
    "references",
    multiple=True,
    required=True,
    type=click.Path(path_type=Path),
    help=f"Reference image (repeat up to {MAX_REFERENCE_IMAGES} times; order is kept).",
)
@click.option("--input-mime-type", help="MIME type for all references (default: detected).")
@_generation_options
@_common_options
def compose(
    references: tuple[Path, ...],
    input_mime_type: str | None,
    prompt: str,
    out: Path | None,
    model: str | None,
    aspect_ratio: str | None,
    image_size: str | None,
    no_text: bool,
    search: bool,
    mime_type: str | None,
    api_key: str | None,
    quiet: bool,
    verbose_count: int,
    debug_api: bool,
) -> None:
    """Create an image from reference images plus a text instruction."""
    _setup_logging(quiet, verbose_count, debug_api)

    def do_compose() -> None:
        client = _make_client(api_key, debug_api)
        options = _options_from_flags(
            model, aspect_ratio, image_size, no_text, search, mime_type, input_mime_type
        )

        start = time.time()
        with _progress(quiet, "Composing image", model or client.model, len(references)):
            if out is not None:
                result = client.generate_from_references(list(references), prompt, out, options)
            else:
                result = _save_to_default_path(
                    client.generate_from_references_data(list(references), prompt, options)
                )
        _report(result, time.time() - start, quiet, reference_count=len(references))

    run_with_error_handling(do_compose, quiet=quiet, debug=debug_api)


@cli.command()
@click.option("--page-size", type=click.IntRange(min=1), help="Maximum models to fetch.")
@click.option("--image-only", is_flag=True, help="Only list image-related models.")
@click.option("--json", "as_json", is_flag=True, help="Print models as JSON to stdout.")
@_common_options
def models(
    page_size: int | None,
    image_only: bool,
    as_json: bool,
    api_key: str | None,
    quiet: bool,
    verbose_count: int,
    debug_api: bool,
) -> None:
    """List Gemini models available to the API key (first page only)."""
    _setup_logging(quiet, verbose_count, debug_api)

    def do_models() -> None:
        client = _make_client(api_key, debug_api)
        found = client.list_models(page_size=page_size, image_only=image_only)
        if as_json:
            click.echo(json.dumps([asdict(m) for m in found], indent=2))
            return
        if not found:
            if not quiet:
                progress.print_warning("No models found.")
            return
        if quiet:
            for m in found:
                click.echo(m.name)
        else:
            progress.print_models(found)

    run_with_error_handling(do_models, quiet=quiet, debug=debug_api)


@cli.command()
def login() -> None:
    """Explain how to provide credentials (the API only accepts static keys)."""

    def do_login() -> None:
        raise ConfigurationError(LOGIN_HELP)

    run_with_error_handling(do_login)


def main() -> None:
    """Entry point for the gemimg console script."""
    cli()


__all__ = ["cli", "main", "generate", "edit", "compose", "models", "login"]
