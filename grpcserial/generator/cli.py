"""Command-line interfaces: the protoc plugin entry point and developer tools."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest
from google.protobuf.descriptor_pb2 import FileDescriptorSet
from rich.console import Console
from rich.table import Table

from grpcserial.generator.driver import EmissionMode
from grpcserial.generator.host import generate
from grpcserial.generator.loader import DescriptorIndex
from grpcserial.generator.options import GeneratorOptions
from grpcserial.generator.packages import go_package_name, import_path

err_console = Console(stderr=True)


def _read_descriptor_set(input_file: str) -> FileDescriptorSet:
    return FileDescriptorSet.FromString(Path(input_file).read_bytes())


def plugin_main() -> int:
    """Run as protoc-gen-grpcserial: request on stdin, response on stdout."""
    if sys.stdin.isatty():
        err_console.print(
            "[red]protoc-gen-grpcserial is a protoc plugin, it is not intended for direct use.[/red]"
        )
        err_console.print()
        err_console.print("Usage:")
        err_console.print("  protoc --grpcserial_out=plugins=grpcserial:./gen your_file.proto")
        return 1

    request = CodeGeneratorRequest.FromString(sys.stdin.buffer.read())
    response = generate(request)
    sys.stdout.buffer.write(response.SerializeToString())
    return 0


@click.group()
def cli() -> None:
    """grpcserial stub generator."""


@cli.command()
@click.option(
    "--input",
    "-i",
    "input_file",
    required=True,
    help="FileDescriptorSet (protoc --include_imports --include_source_info -o ...)",
)
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option(
    "--file",
    "-f",
    "files",
    multiple=True,
    help="Proto file to generate (repeatable, default: every file in the set)",
)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in EmissionMode]),
    default=EmissionMode.ANNOTATED.value,
    show_default=True,
    help="How stubs are emitted",
)
@click.option("--import-prefix", default="", help="Prefix added to every generated import path")
def gen(input_file: str, output_path: str, files: tuple[str, ...], mode: str, import_prefix: str) -> None:
    """Generate stubs from a descriptor set, as protoc would."""
    descriptor_set = _read_descriptor_set(input_file)
    options = GeneratorOptions(mode=EmissionMode(mode), import_prefix=import_prefix)

    request = CodeGeneratorRequest(parameter=options.to_parameter())
    request.proto_file.extend(descriptor_set.file)
    request.file_to_generate.extend(files or [f.name for f in descriptor_set.file])

    response = generate(request)
    if response.error:
        err_console.print(f"[red]error:[/red] {response.error}")
        sys.exit(1)

    out_dir = Path(output_path)
    for generated in response.file:
        target = out_dir / generated.name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.content, encoding="utf-8")
        print(f"Generated {target}")


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="FileDescriptorSet to inspect")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, output_json: bool) -> None:
    """Display services, methods and resolved Go packages."""
    index = DescriptorIndex.from_files(_read_descriptor_set(input_file).file)

    if output_json:
        _output_json(index)
    else:
        _output_plain(index)


def _output_json(index: DescriptorIndex) -> None:
    data = []
    for file in index.files.values():
        package, explicit = go_package_name(file)
        entry = file.to_dict()
        entry["go"] = {
            "package": package,
            "explicit": explicit,
            "import_path": import_path(file),
        }
        data.append(entry)
    print(json.dumps(data, indent=2))


def _streaming(client: bool, server: bool) -> str:
    if client and server:
        return "bidi"
    if client:
        return "client"
    if server:
        return "server"
    return ""


def _output_plain(index: DescriptorIndex) -> None:
    console = Console()

    for file in index.files.values():
        if not file.services:
            continue
        package, explicit = go_package_name(file)
        console.print(f"[bold cyan]{file.name}[/bold cyan]")
        console.print(
            f"  [dim]Go package[/dim] {package} "
            f"[dim]({'go_package' if explicit else 'derived'}, import {import_path(file)})[/dim]"
        )

        table = Table(show_header=True, box=None, padding=(0, 2, 0, 2))
        table.add_column("Service", style="white")
        table.add_column("Method", style="white")
        table.add_column("Input", style="yellow")
        table.add_column("Output", style="yellow")
        table.add_column("Streaming", style="dim")

        for service in file.services:
            for method in service.methods:
                table.add_row(
                    service.full_name,
                    method.name,
                    method.input_type.lstrip("."),
                    method.output_type.lstrip("."),
                    _streaming(method.client_streaming, method.server_streaming),
                )

        console.print(table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
