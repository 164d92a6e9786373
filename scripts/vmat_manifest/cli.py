"""
Command-line interface for the VMAT manifest pipeline.
"""

import sys
import os
import importlib.metadata
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn

from . import __version__
from .config import PipelineConfig, ENV_PREFIX
from .errors import PipelineError
from .pipeline import ManifestPipeline, PipelineRunner, PipelineResult
from .status import StatusEvent, StatusSink

# Initialize typer app and rich console
app = typer.Typer(
    name="vmat-manifest",
    help="VMAT manifest builder - find materials with color textures and write path manifests",
    add_completion=False,
    rich_markup_mode="rich",
    epilog="""
[bold]Examples:[/bold]
  [cyan]vmat-manifest process D:/content/addon[/cyan]               Build manifests for a content folder
  [cyan]vmat-manifest process . --workers 1[/cyan]                  Check companion files sequentially
  [cyan]vmat-manifest config --env-vars[/cyan]                      List environment overrides
    """
)
console = Console()


@app.command()
def process(
    root: Path = typer.Argument(..., help="Directory to scan for .vmat files"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Threads used for existence checks"),
):
    """Scan a directory and write the PNG, JPG and material manifests."""
    config = _load_config(config_file)
    if workers is not None:
        config.existence_workers = workers

    errors = config.validate()
    if errors:
        for error in errors:
            console.print(f"[red]✗[/red] {error}")
        raise typer.Exit(1)

    root = root.resolve()
    if not root.is_dir():
        console.print(f"[red]Directory not found:[/red] {root}")
        raise typer.Exit(1)

    console.print(f"[bold blue]Processing {root}...[/bold blue]")

    sink = StatusSink()
    pipeline = ManifestPipeline(config, sink)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.percentage:>3.0f}%"),
        console=console,
    ) as progress:
        task = progress.add_task("Starting...", total=100)

        def on_status(event: StatusEvent):
            progress.update(task, completed=event.percent, description=event.message)

        sink.subscribe(on_status)

        with PipelineRunner(pipeline) as runner:
            future = runner.start(root)
            try:
                result = future.result()
            except PipelineError as e:
                progress.stop()
                console.print(f"[red]Error:[/red] {e}")
                raise typer.Exit(1)

    _display_result(result)


@app.command()
def config(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    validate: bool = typer.Option(False, "--validate", help="Validate configuration"),
    env_vars: bool = typer.Option(False, "--env-vars", help="Show available environment variables")
):
    """Manage pipeline configuration."""
    if env_vars:
        _display_env_vars()
        return

    cfg = _load_config(config_file)

    if show:
        _display_config(cfg)

    if validate:
        errors = cfg.validate()
        if errors:
            console.print("[red]Configuration errors:[/red]")
            for error in errors:
                console.print(f"  [red]✗[/red] {error}")
            raise typer.Exit(1)
        console.print("[green]✓ Configuration is valid[/green]")

    if not show and not validate:
        console.print("Use --show to display configuration, --validate to check it, or --env-vars to see environment variables.")


@app.command()
def version():
    """Show version information."""
    console.print("[bold]VMAT Manifest Pipeline[/bold]")
    console.print(f"Version: {__version__}")
    console.print("Python: " + sys.version.split()[0])

    deps_status = []
    for name, module_name in (("Typer", "typer"), ("Rich", "rich")):
        try:
            deps_status.append((name, importlib.metadata.version(module_name), "✓"))
        except importlib.metadata.PackageNotFoundError:
            deps_status.append((name, "Not installed", "✗"))

    console.print("\n[bold]Dependencies:[/bold]")
    table = Table(show_header=False)
    table.add_column("Status", width=3)
    table.add_column("Package", style="cyan")
    table.add_column("Version", style="green")

    for name, dep_version, status in deps_status:
        color = "green" if status == "✓" else "red"
        table.add_row(f"[{color}]{status}[/{color}]", name, dep_version)

    console.print(table)


def _load_config(config_file: Optional[Path]) -> PipelineConfig:
    """Load configuration from file or use defaults with environment variable support."""
    config = None

    try:
        if config_file:
            if not config_file.exists():
                console.print(f"[red]Configuration file not found:[/red] {config_file}")
                raise typer.Exit(1)
            config = PipelineConfig.from_file(config_file)
            console.print(f"[dim]Using configuration: {config_file}[/dim]")
        else:
            # Try to find default config files
            for config_path in (Path("vmat_manifest.toml"), Path("vmat_manifest.json")):
                if config_path.exists():
                    console.print(f"[dim]Using configuration: {config_path}[/dim]")
                    config = PipelineConfig.from_file(config_path)
                    break

        if config is None:
            console.print("[dim]Using default configuration[/dim]")
            config = PipelineConfig()

        config = PipelineConfig._apply_env_overrides(config)
    except (ValueError, TypeError) as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)

    env_vars_used = [key for key in os.environ if key.startswith(ENV_PREFIX)]
    if env_vars_used:
        console.print(f"[dim]Environment overrides applied: {len(env_vars_used)} variables[/dim]")

    return config


def _display_result(result: PipelineResult) -> None:
    """Display run summary."""
    table = Table(title="Manifest Summary", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("VMAT files", str(len(result.descriptors)))
    table.add_row("Valid PNG files", str(len(result.valid_companions)))
    table.add_row("Final materials", str(len(result.identifiers)))
    table.add_row("Duration", f"{result.duration:.2f}s")
    console.print(table)

    if result.manifests is None:
        console.print("[yellow]No VMAT files found, no manifests written.[/yellow]")
        return

    for path in result.manifests.as_list():
        console.print(f"[green]✓[/green] Saved: {path}")


def _display_config(config: PipelineConfig) -> None:
    """Display configuration in a formatted table."""
    table = Table(title="VMAT Manifest Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Descriptor Extension", config.descriptor_extension)
    table.add_row("Companion Token", config.companion_token)
    table.add_row("Alternate Extension", config.alternate_extension)
    table.add_row("Marker Segment", config.marker_segment)
    table.add_row("PNG Manifest", config.png_manifest_name)
    table.add_row("JPG Manifest", config.jpg_manifest_name)
    table.add_row("Identifier Manifest", config.identifier_manifest_name)
    table.add_row("Existence Workers", str(config.existence_workers))
    table.add_row("Log Level", config.log_level)

    console.print(table)


def _display_env_vars() -> None:
    """Display available environment variables for configuration."""
    table = Table(title="VMAT Manifest Environment Variables")
    table.add_column("Environment Variable", style="cyan")
    table.add_column("Default", style="green")

    defaults = PipelineConfig()
    for var_name in PipelineConfig.env_var_names():
        field_name = var_name[len(ENV_PREFIX):].lower()
        table.add_row(var_name, str(getattr(defaults, field_name)))

    console.print(table)
    console.print("\n[dim]Set these environment variables to override configuration file settings.[/dim]")
    console.print(f"[dim]Example: export {ENV_PREFIX}EXISTENCE_WORKERS=1[/dim]")


if __name__ == "__main__":
    app()
