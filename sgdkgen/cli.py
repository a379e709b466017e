"""
sgdkgen CLI - Command-line interface for SGDK project generation

Usage:
    sgdkgen <project_name> [project_directory]
    sgdkgen my_game ~/marsdev --build
    sgdkgen my_game --dry-run
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.tree import Tree

from sgdkgen.config import GeneratorConfig, ProjectDescriptor, validate_project_name
from sgdkgen.errors import GeneratorError
from sgdkgen.generator import GenerationResult, ProjectGenerator
from sgdkgen.log import setup_logging
from sgdkgen.runner import build_project, launch_emulator

app = typer.Typer(
    name="sgdkgen",
    help="Create a new SGDK/Marsdev Sega Genesis project",
    add_completion=False,
    context_settings={
        "help_option_names": ["-h", "--help"],
        # "-game" must reach project_name and fail validation, not click
        "ignore_unknown_options": True,
    },
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        from sgdkgen import __version__
        rprint(f"sgdkgen {__version__}")
        raise typer.Exit()


@app.command()
def create(
    project_name: Optional[str] = typer.Argument(
        None,
        help="Name of the new project",
        show_default=False,
    ),
    project_directory: Path = typer.Argument(
        Path("."),
        help="Directory where to create the project (defaults to current directory)",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="sgdkgen.yaml with toolchain paths, emulator and template dir",
    ),
    template_dir: Optional[Path] = typer.Option(
        None,
        "--template-dir", "-t",
        help="Directory holding boot/sega.s and boot/rom_head.c "
             "(defaults to <project_directory>/test_program)",
    ),
    sgdk_path: Optional[str] = typer.Option(
        None, "--sgdk-path", help="SGDK location relative to the project",
    ),
    marsdev_path: Optional[str] = typer.Option(
        None, "--marsdev-path", help="Marsdev toolchain location relative to the project",
    ),
    emulator: Optional[str] = typer.Option(
        None, "--emulator", help="Emulator command used by `make run`",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be generated without writing files",
    ),
    build: bool = typer.Option(False, "--build", help="Run make after generating"),
    run: bool = typer.Option(False, "--run", help="Build, then open the ROM in the emulator"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version",
    ),
) -> None:
    """Create a new SGDK/Marsdev project with the standard layout and Makefile."""
    setup_logging(verbose)

    if project_name is None:
        _show_usage()
        raise typer.Exit(1)

    try:
        validate_project_name(project_name)

        config = GeneratorConfig.from_file(config_file) if config_file else GeneratorConfig()
        config = config.override(
            template_dir=template_dir,
            sgdk_path=sgdk_path,
            marsdev_path=marsdev_path,
            emulator=emulator,
        )
        descriptor = ProjectDescriptor.create(project_name, project_directory)
        generator = ProjectGenerator(config)

        if dry_run:
            rprint(f"\n[yellow]Dry run - would create: {escape(str(descriptor.project_path))}[/yellow]\n")
            _show_preview(generator.plan(descriptor))
            return

        result = generator.generate(descriptor)
        rprint(f"[green]✓[/green] Project '[bold]{project_name}[/bold]' created successfully!")
        _show_next_steps(result)

        if build or run:
            build_result = build_project(result.project_path)
            if not build_result.success:
                rprint(f"[red]✗[/red] make {build_result.target} failed (exit {build_result.returncode})")
                if build_result.stderr:
                    console.print(build_result.stderr, markup=False, highlight=False)
                raise typer.Exit(1)
            rprint(f"[green]✓[/green] ROM built: {escape(str(build_result.rom_path))}")

            if run:
                launch_emulator(build_result.rom_path, config.emulator)

    except GeneratorError as e:
        rprint(f"[red]✗[/red] {escape(str(e))}")
        if e.hint:
            rprint(f"  {escape(e.hint)}")
        raise typer.Exit(1)


def _show_usage() -> None:
    """Usage text for a bare invocation."""
    usage = """[bold]Usage:[/bold] sgdkgen <project_name> \\[project_directory]

Creates a new SGDK/Marsdev project with proper structure and configuration.

[bold]Examples:[/bold]
  sgdkgen my_game                    # Creates my_game/ in current directory
  sgdkgen my_game ~/projects/        # Creates my_game/ in ~/projects/

Run [cyan]sgdkgen --help[/cyan] for all options."""
    rprint(usage)


def _build_tree(result: GenerationResult) -> Tree:
    tree = Tree(f"[bold]{escape(result.project_path.name)}/[/bold]")

    dirs = {name: tree.add(f"[blue]{name}/[/blue]") for name in result.directories if name != "."}
    for f in result.files:
        parent, _, leaf = f.path.rpartition("/")
        (dirs[parent] if parent else tree).add(escape(leaf))
    for asset in result.assets:
        dirs["boot"].add(escape(asset.rpartition("/")[2]))
    for missing in result.missing_assets:
        dirs["boot"].add(f"[yellow]{escape(missing.rpartition('/')[2])} (missing)[/yellow]")

    return tree


def _show_preview(result: GenerationResult) -> None:
    """Show what would be generated."""
    rprint(_build_tree(result))
    for warning in result.warnings:
        rprint(f"[yellow]![/yellow] {escape(warning)}")


def _show_next_steps(result: GenerationResult) -> None:
    """Show next steps."""
    rprint(_build_tree(result))

    steps = f"""
[bold]Next:[/bold]
  cd {escape(str(result.project_path))}
  make          # Build the ROM
  make test     # Test the build
"""
    if result.missing_assets:
        steps += "\n[yellow]Copy manually:[/yellow] " + escape(", ".join(result.missing_assets)) + "\n"

    rprint(Panel(steps, title="Done"))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
