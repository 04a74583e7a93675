"""cardpack CLI application with Typer."""

import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from cardpack import __version__
from cardpack.bootstrap import bootstrap_application
from cardpack.card.models import (
    OperationError,
    PackOptions,
    UnpackOptions,
    ValidationLevel,
    ValidationOptions,
    ValidationReport,
)
from cardpack.config import get_settings, set_settings
from cardpack.errors import CardPackError
from cardpack.utils.ids import generate_card_id

app = typer.Typer(
    name="cardpack",
    help="Pack, unpack, and validate card archives",
    add_completion=True,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"cardpack version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log progress at INFO level"),
    ] = False,
) -> None:
    """cardpack - card archive packer."""
    settings = get_settings()
    if verbose:
        settings.log_level = "INFO"
    set_settings(settings)
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _print_report(report: ValidationReport) -> None:
    for check in report.checks:
        if check.passed:
            typer.secho(f"  ✓ {check.name}", fg=typer.colors.GREEN)
            continue
        color = typer.colors.RED if check.severity == "error" else typer.colors.YELLOW
        suffix = f" - {check.message}" if check.message else ""
        typer.secho(f"  ✗ [{check.severity}] {check.name}{suffix}", fg=color)
    typer.echo(f"Errors: {report.error_count}  Warnings: {report.warning_count}")


def _exit_with_error(error: OperationError | None, fallback: str) -> NoReturn:
    message = f"Error [{error.code}]: {error.message}" if error is not None else fallback
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("pack")
def pack(
    source: Annotated[Path, typer.Argument(help="Card project directory")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Archive path (defaults to <source><ext>)"),
    ] = None,
    checksum: Annotated[
        bool,
        typer.Option("--checksum", help="Compute and embed an integrity checksum"),
    ] = False,
    validate: Annotated[
        bool | None,
        typer.Option(
            "--validate/--no-validate",
            help="Validate structure before packing (default: CARDPACK_VALIDATE_ON_PACK)",
        ),
    ] = None,
    include_hidden: Annotated[
        bool | None,
        typer.Option(
            "--include-hidden/--exclude-hidden",
            help="Include dot-files other than .card (default: CARDPACK_INCLUDE_HIDDEN)",
        ),
    ] = None,
) -> None:
    """Pack a card project directory into a card archive."""
    container = bootstrap_application()
    service = container.packer_service
    source_dir = source.expanduser()
    target = (
        output.expanduser()
        if output is not None
        else source_dir.parent / f"{source_dir.name}{container.settings.archive_extension}"
    )

    defaults = service.default_pack_options()
    result = service.pack(
        source_dir,
        target,
        PackOptions(
            validate=defaults.validate_structure if validate is None else validate,
            checksum=checksum,
            include_hidden=defaults.include_hidden if include_hidden is None else include_hidden,
        ),
    )

    if not result.success:
        _exit_with_error(result.error, f"Error: failed to pack {source_dir}")

    for warning in result.warnings:
        typer.secho(f"Warning: {warning}", fg=typer.colors.YELLOW)
    typer.secho(
        f"Packed {result.file_count} files into {result.output_path} ({result.file_size} bytes)",
        fg=typer.colors.GREEN,
    )
    if result.checksum:
        typer.echo(f"Checksum: {result.checksum}")


@app.command("unpack")
def unpack(
    archive: Annotated[Path, typer.Argument(help="Card archive to extract")],
    target: Annotated[Path, typer.Argument(help="Destination directory")],
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Replace the destination if it exists"),
    ] = False,
    validate: Annotated[
        bool | None,
        typer.Option(
            "--validate/--no-validate",
            help="Validate the extracted project (default: CARDPACK_VALIDATE_ON_UNPACK)",
        ),
    ] = None,
) -> None:
    """Unpack a card archive into a directory."""
    container = bootstrap_application()
    should_validate = container.settings.validate_on_unpack if validate is None else validate
    result = container.packer_service.unpack(
        archive.expanduser(),
        target.expanduser(),
        UnpackOptions(overwrite=overwrite, validate=should_validate),
    )

    if not result.success:
        _exit_with_error(result.error, f"Error: failed to unpack {archive}")

    for warning in result.warnings:
        typer.secho(f"Warning: {warning}", fg=typer.colors.YELLOW)
    typer.secho(
        f"Unpacked {result.file_count} files into {result.output_dir}",
        fg=typer.colors.GREEN,
    )

    if result.validation is not None and not result.validation.valid:
        typer.secho("Extracted card failed validation:", fg=typer.colors.YELLOW)
        _print_report(result.validation)


@app.command("validate")
def validate(
    path: Annotated[Path, typer.Argument(help="Card project directory or card archive")],
    level: Annotated[
        str,
        typer.Option("--level", help="directory, file, reference, or full"),
    ] = "full",
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output the report as JSON"),
    ] = False,
) -> None:
    """Validate a card project or archive."""
    if level not in ("directory", "file", "reference", "full"):
        raise typer.BadParameter("Level must be directory, file, reference, or full.")

    container = bootstrap_application()
    chosen: ValidationLevel = level  # type: ignore[assignment]
    report = container.packer_service.validate(
        path.expanduser(), ValidationOptions(level=chosen)
    )

    if json_output:
        typer.echo(report.model_dump_json(indent=2))
    else:
        status = "valid" if report.valid else "invalid"
        color = typer.colors.GREEN if report.valid else typer.colors.RED
        typer.secho(f"{path}: {status}", fg=color)
        _print_report(report)

    if not report.valid:
        raise typer.Exit(code=1)


@app.command("info")
def info(
    archive: Annotated[Path, typer.Argument(help="Card archive")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output metadata as JSON"),
    ] = False,
) -> None:
    """Show card metadata and standards compatibility."""
    container = bootstrap_application()
    service = container.packer_service
    try:
        metadata = service.get_metadata(archive.expanduser())
    except CardPackError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if json_output:
        typer.echo(metadata.model_dump_json(indent=2, exclude_none=True))
        return

    typer.echo(f"Card ID:   {metadata.card_id}")
    typer.echo(f"Name:      {metadata.name}")
    typer.echo(f"Standards: {metadata.standards_version or '-'}")
    if metadata.file_info is not None:
        typer.echo(f"Files:     {metadata.file_info.file_count}")
        if metadata.file_info.checksum:
            typer.echo(f"Checksum:  {metadata.file_info.checksum}")

    compatibility = service.check_compatibility(
        metadata.standards_version or "", container.settings.standards_version
    )
    if not compatibility.compatible:
        typer.secho(f"Incompatible: {compatibility.reason}", fg=typer.colors.RED)
    elif compatibility.reason:
        typer.secho(f"Warning: {compatibility.reason}", fg=typer.colors.YELLOW)


@app.command("compat")
def compat(
    card_version: Annotated[str, typer.Argument(help="Card standards version")],
    system_version: Annotated[
        str | None,
        typer.Argument(help="System standards version (defaults to configured)"),
    ] = None,
) -> None:
    """Check whether a card standards version is supported."""
    container = bootstrap_application()
    result = container.packer_service.check_compatibility(
        card_version, system_version or container.settings.standards_version
    )
    if result.compatible:
        typer.secho("compatible", fg=typer.colors.GREEN)
        if result.reason:
            typer.secho(f"Warning: {result.reason}", fg=typer.colors.YELLOW)
        return

    typer.secho(f"incompatible: {result.reason}", fg=typer.colors.RED)
    raise typer.Exit(code=1)


@app.command("new-id")
def new_id() -> None:
    """Print a fresh 10-character card id."""
    typer.echo(generate_card_id())


if __name__ == "__main__":
    app()
