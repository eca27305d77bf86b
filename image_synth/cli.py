"""Thin CLI wrapper for image_synth.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from image_synth import __version__
from image_synth.config import get_settings, print_settings_json

app = typer.Typer(
    name="imagesynth",
    help="Image Synth - combine several images and a prompt into a new image",
    no_args_is_help=True,
)
console = Console()

# Suffixes for writing the generated image when --output has none
_SUFFIXES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"image-synth version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Image Synth - combine several images and a prompt into a new image."""


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(print_settings_json(settings))
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Remote service:[/bold]")
        console.print(f"  API key:             {settings.masked_api_key() or '(not set)'}")
        console.print(f"  Model:               {settings.model}")
        console.print()
        console.print("[bold]Operational:[/bold]")
        console.print(f"  Log level:           {settings.log_level}")
        console.print()
        console.print("[bold]Web server:[/bold]")
        console.print(f"  Host:                {settings.host}")
        console.print(f"  Port:                {settings.port}")


def _output_path(output: Path, mime_type: str) -> Path:
    """Add a suffix matching the image type when the path has none."""
    if output.suffix:
        return output
    return output.with_suffix(_SUFFIXES.get(mime_type, ".bin"))


@app.command()
def synthesize(
    images: Annotated[
        list[Path],
        typer.Argument(help="Source image files, in the order the prompt refers to"),
    ],
    prompt: Annotated[
        str,
        typer.Option("--prompt", "-p", help="What to make from the images"),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Where to write the generated image"),
    ] = Path("synthesized"),
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Synthesize a new image from local images and a prompt."""
    from image_synth.errors import MissingCredentialError
    from image_synth.intake import ImageIntake, LocalImageFile
    from image_synth.log import configure_logging
    from image_synth.synthesis import SynthesisClient, SynthesisSession

    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        client = SynthesisClient.from_settings(settings)
    except MissingCredentialError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from None

    with ImageIntake() as intake:
        intake.add(LocalImageFile(path) for path in images)
        session = SynthesisSession(client, intake)
        result = asyncio.run(session.submit(prompt))

    if result is None:
        if json_output:
            console.print(json.dumps({"error": session.error}, indent=2))
        else:
            console.print(f"[red]{session.error}[/red]")
        raise typer.Exit(code=1)

    written: Path | None = None
    decoded = result.image_bytes()
    if decoded is not None:
        mime_type, data = decoded
        written = _output_path(output, mime_type)
        try:
            written.write_bytes(data)
        except OSError as e:
            message = f"Could not write {written}: {e.strerror or e}"
            if json_output:
                console.print(json.dumps({"error": message}, indent=2))
            else:
                console.print(f"[red]{message}[/red]")
            raise typer.Exit(code=1) from None

    if json_output:
        payload = {
            "image_path": str(written) if written else None,
            "text": result.text,
        }
        console.print(json.dumps(payload, indent=2))
        return

    if written:
        console.print(f"[green]Wrote image to {written}[/green]")
    if result.text:
        console.print(result.text)


@app.command()
def serve(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Bind address"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", help="Port to listen on"),
    ] = None,
) -> None:
    """Run the web GUI and HTTP API."""
    import uvicorn

    from image_synth.log import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "web.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    app()
