"""Command-line interface for the localization automation."""

import click
from pathlib import Path
from typing import Optional, Tuple
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import config
from .errors import AutomationError
from .logging_setup import configure_logging
from .models.steps import parse_step_names
from .orchestrator import LocalizeCommand, LocalizeOptions
from .execution.runner import RunSummary
from .source_control.perforce import PerforceClient
from .templates import run_export_templates

console = Console()


def _split_names(value: Optional[str]) -> list:
    """Split a comma-separated option into trimmed names."""
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def _check_config() -> None:
    errors = config.validate()
    if errors:
        console.print("[red]Configuration errors:[/red]")
        for error in errors:
            console.print(f"  - {error}")
        raise click.Abort()


def _create_source_control() -> Optional[PerforceClient]:
    if not config.p4_enabled:
        return None
    return PerforceClient.from_config(config)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Localization automation: gather, import, export and compile text."""
    configure_logging(verbose=verbose, console=Console(stderr=True))


@cli.command()
@click.option(
    "--project-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Root path of the project to gather for (defaults to LOCALIZE_LOCAL_ROOT)"
)
@click.option(
    "--project-directory", "-d",
    required=True,
    help="Sub-path to the project to gather for (relative to --project-root)"
)
@click.option(
    "--project-name", "-p",
    default="",
    help="Name of the project to gather for (should match its .uproject file)"
)
@click.option(
    "--projects",
    default=None,
    help="Comma-separated list of localization projects to gather text from"
)
@click.option(
    "--localization-branch",
    default="",
    help="Suffix to use when uploading the new data to the localization provider"
)
@click.option(
    "--provider",
    "provider_name",
    default="",
    help="Localization provider to download from and upload to (e.g. FileShare)"
)
@click.option(
    "--steps",
    default=None,
    help="Comma-separated list of steps to perform "
         "[Download, Gather, Import, Export, Compile, GenerateReports, Upload] (default is all)"
)
@click.option(
    "--include-plugins",
    is_flag=True,
    help="Include plugins from within the project directory"
)
@click.option(
    "--plugin",
    "plugins",
    multiple=True,
    help="Only gather this plugin (repeatable, requires --include-plugins)"
)
@click.option(
    "--exclude-plugin",
    "excluded_plugins",
    multiple=True,
    help="Plugin to leave out of the gather (repeatable)"
)
@click.option(
    "--include-platforms",
    is_flag=True,
    help="Include platforms from within the project directory"
)
@click.option(
    "--extra-args",
    default="",
    help="Additional arguments to pass to the commandlet"
)
@click.option(
    "--parallel",
    is_flag=True,
    help="Run the commandlets in parallel rather than in sequence"
)
def localize(
    project_root: Optional[Path],
    project_directory: str,
    project_name: str,
    projects: Optional[str],
    localization_branch: str,
    provider_name: str,
    steps: Optional[str],
    include_plugins: bool,
    plugins: Tuple[str, ...],
    excluded_plugins: Tuple[str, ...],
    include_platforms: bool,
    extra_args: str,
    parallel: bool,
):
    """Update the localization data of a project, its platforms and plugins."""
    _check_config()

    try:
        options = LocalizeOptions(
            project_root=project_root,
            project_directory=project_directory,
            project_name=project_name,
            localization_project_names=_split_names(projects),
            localization_branch=localization_branch,
            provider_name=provider_name,
            steps=parse_step_names(steps),
            include_plugins=include_plugins,
            plugins_to_include=list(plugins) if include_plugins else [],
            plugins_to_exclude=list(excluded_plugins) if include_plugins else [],
            include_platforms=include_platforms,
            additional_arguments=extra_args,
            parallel=parallel,
        )
        summary = LocalizeCommand(options, source_control=_create_source_control()).run()
    except AutomationError as e:
        raise click.ClickException(str(e)) from e

    _print_summary(summary)


@cli.command("export-templates")
@click.option(
    "--project-name", "-p",
    required=True,
    help="Name of the project to export templates for"
)
@click.option(
    "--only-loc",
    is_flag=True,
    help="Only submit generated loc files, do not submit any other generated file"
)
@click.option(
    "--no-robomerge",
    is_flag=True,
    help="Do not include the robomerge markup in the changelist description"
)
@click.option(
    "--commandlet",
    default=None,
    help="Commandlet to run instead of ExportTemplatesCommandlet"
)
def export_templates(project_name: str, only_loc: bool, no_robomerge: bool, commandlet: Optional[str]):
    """Export backend templates and submit the generated files."""
    _check_config()

    try:
        submitted = run_export_templates(
            project_name,
            _create_source_control(),
            only_loc=only_loc,
            no_robomerge=no_robomerge,
            commandlet_override=commandlet,
        )
    except AutomationError as e:
        raise click.ClickException(str(e)) from e

    if submitted:
        console.print(f"[green]Submitted changelist {submitted}[/green]")
    else:
        console.print("[yellow]Nothing submitted[/yellow]")


def _print_summary(summary: RunSummary):
    """Print localization run statistics."""
    table = Table(title="Localization Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Commandlets run", str(summary.launched))
    table.add_row("Succeeded", f"[green]{summary.succeeded}[/green]")
    table.add_row("Failed", f"[red]{summary.failed}[/red]" if summary.failed else "0")
    table.add_row("Projects with nothing to run", str(summary.skipped))
    table.add_row("Uploads skipped", str(summary.uploads_skipped))
    table.add_row("Header-only files reverted", str(summary.files_reverted))
    table.add_row(
        "Submitted changelist",
        str(summary.submitted_changelist) if summary.submitted_changelist else "[dim]none[/dim]",
    )
    table.add_row("Duration", f"{summary.duration_seconds:.1f}s")

    console.print(table)


if __name__ == "__main__":
    cli()
