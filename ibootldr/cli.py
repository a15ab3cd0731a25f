#!/usr/bin/env python3
"""
ibootldr - iBoot Firmware Loader

CLI interface using Click for command-line interaction.
"""

import json
import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel

from ibootldr import __version__
from ibootldr.utils.logging import console


def _parse_address(ctx, param, value):
    """Click callback accepting non-negative decimal or 0x-prefixed integers."""
    if value is None:
        return None
    try:
        number = int(value, 0)
    except ValueError:
        raise click.BadParameter(f"not an integer: {value}")
    if number < 0:
        raise click.BadParameter(f"must not be negative: {value}")
    return number


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True, help="Increase verbosity")
@click.option("-c", "--config", "config_path", type=click.Path(), default=None,
              help="Path to config file")
@click.pass_context
def cli(ctx, verbose, config_path):
    """ibootldr - iBoot Firmware Loader"""
    from ibootldr.utils.config import Config

    ctx.ensure_object(dict)

    try:
        config = Config.load(config_path)
    except (ValueError, TypeError) as e:
        raise click.ClickException(f"invalid configuration: {e}")

    # -v on the command line wins over the configured level
    verbosity = verbose or config.verbose
    ctx.obj["verbose"] = verbosity
    ctx.obj["config"] = config

    # Setup logging
    from ibootldr.utils.logging import setup_logging
    setup_logging(verbosity=verbosity)


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def detect(ctx, files, json_output):
    """Check whether files are iBoot-family images."""
    from ibootldr.core.image import RawImage
    from ibootldr.loader.detector import detect_tag

    results = []
    for path in files:
        tag = detect_tag(RawImage.from_path(path))
        results.append({
            "file": str(path),
            "supported": tag is not None,
            "tag": tag.value if tag else None,
        })

    if json_output:
        console.print_json(json.dumps(results, indent=2))
        return

    table = Table(title="Format Detection")
    table.add_column("File", style="cyan")
    table.add_column("Tag", style="tag")
    table.add_column("Supported")

    for result in results:
        table.add_row(
            escape(Path(result["file"]).name),
            result["tag"] or "-",
            "[green]yes[/green]" if result["supported"] else "[red]no[/red]",
        )

    console.print(table)


@cli.command()
@click.argument("firmware", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("-b", "--base", "base_address", default=None, callback=_parse_address,
              help="Use a fixed base address instead of the header field")
@click.option("--force", is_flag=True, help="Skip the format tag check")
@click.option("-o", "--output", default=None, help="Save layout JSON to this directory")
@click.option("--save", is_flag=True, help="Save layout JSON to the configured output directory")
@click.pass_context
def info(ctx, firmware, json_output, base_address, force, output, save):
    """Resolve version, base address, and memory layout."""
    from dataclasses import replace

    from ibootldr.core.errors import IBootError
    from ibootldr.core.image import RawImage
    from ibootldr.loader.loader import load_image
    from ibootldr.loader.sink import RecordingSink, apply_layout

    loader_config = ctx.obj["config"].loader
    if base_address is not None:
        loader_config = replace(loader_config, base_address_override=base_address)
    if force:
        loader_config = replace(loader_config, assume_supported=True)

    image = RawImage.from_path(firmware)

    try:
        layout = load_image(image, loader_config)
    except IBootError as e:
        console.print(f"[error]Error: {escape(str(e))}[/error]")
        sys.exit(1)

    sink = RecordingSink()
    apply_layout(layout, sink)

    results = {"file": str(firmware), "sha256": image.sha256, **layout.to_dict()}

    if json_output:
        console.print_json(json.dumps(results, indent=2))
    else:
        console.print(
            f"[tag]{escape(layout.tag or 'untagged')}[/tag] at [address]0x{layout.base_address:x}[/address]"
        )
        console.print(Panel(escape(layout.summary()), title=escape(Path(firmware).name)))

        table = Table(title="Memory Map")
        table.add_column("Region", style="cyan")
        table.add_column("Start", style="address")
        table.add_column("End", style="address")
        table.add_column("Perms")
        table.add_column("Semantics", style="yellow")

        for region in sink.regions:
            table.add_row(
                region.name,
                f"0x{region.start:x}",
                f"0x{region.end:x}",
                str(region.flags),
                region.semantics.value,
            )

        console.print(table)

    if output is None and save:
        output = ctx.obj["config"].output_dir

    if output:
        Path(output).mkdir(parents=True, exist_ok=True)
        output_file = Path(output) / f"{Path(firmware).name}_layout.json"

        with open(output_file, "w") as f:
            json.dump(results, f, indent=2)

        console.print(f"\n[success]Layout saved to {escape(str(output_file))}[/success]")


@cli.command()
@click.argument("firmware", type=click.Path(exists=True, dir_okay=False))
@click.option("--offset", default="0x200", callback=_parse_address, help="Start offset")
@click.option("--length", default="0x200", callback=_parse_address, help="Number of bytes")
@click.pass_context
def hexdump(ctx, firmware, offset, length):
    """Dump header bytes (tag, version, and base address fields)."""
    from ibootldr.core.image import RawImage
    from ibootldr.utils.helpers import hexdump as format_hexdump

    image = RawImage.from_path(firmware)
    # Slicing clamps at end of file
    data = image.data[offset:offset + length]

    if not data:
        console.print(f"[yellow]No data at offset 0x{offset:x}[/yellow]")
        return

    console.print(escape(format_hexdump(data, offset=offset)), highlight=False)


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
