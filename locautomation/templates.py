"""Exports backend templates and submits the generated files."""

import logging
from pathlib import Path
from typing import Optional

from .config import Config, config as default_config
from .errors import AutomationError
from .execution.commandlet import build_commandlet_command
from .execution.process import Launcher
from .execution.runner import CommandletRunner
from .reconciliation.changelist import ChangelistManager
from .source_control.base import SourceControl

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_COMMANDLET = "ExportTemplatesCommandlet"
GENERATED_LOC_FILE = "GeneratedLoc.json"
ROBOMERGE_MARKUP = "#robomerge[ALL] #DisregardExcludedAuthors"


def get_game_backend_folder(project_file: Path) -> Path:
    """Get the folder templates are generated in."""
    return Path(project_file).parent / "Content" / "Backend"


def build_templates_description(source_changelist: str, only_loc: bool, no_robomerge: bool) -> str:
    """Get the changelist description for a template export."""
    description = f"RunExportTemplates Updated mcp templates using CL {source_changelist or 'latest'}"
    if only_loc:
        description += " [OnlyLoc]"
    if not no_robomerge:
        description += "\n" + ROBOMERGE_MARKUP
    return description


def run_export_templates(
    project_name: str,
    source_control: Optional[SourceControl],
    only_loc: bool = False,
    no_robomerge: bool = False,
    commandlet_override: Optional[str] = None,
    config: Optional[Config] = None,
    launcher: Optional[Launcher] = None,
) -> Optional[int]:
    """
    Export templates for a project and submit them in one changelist.

    Args:
        project_name: Name of the project (matches its folder and .uproject file)
        source_control: Version control backend; required
        only_loc: Only submit the generated localization file
        no_robomerge: Leave the robomerge markup out of the description
        commandlet_override: Commandlet to run instead of the default
        config: Application configuration (global config if not provided)
        launcher: Starts the commandlet process

    Returns:
        Submitted changelist number, or None when nothing was submitted

    Raises:
        AutomationError: If the backend folder is missing, source control is
            unavailable or the commandlet fails
    """
    config = config or default_config
    if not project_name or not project_name.strip():
        raise AutomationError("No project name defined!")

    project_file = config.local_root / project_name / f"{project_name}.uproject"
    folder = get_game_backend_folder(project_file)
    if not folder.is_dir():
        raise AutomationError(f"Game backend folder not found: {folder}")
    if source_control is None:
        raise AutomationError("Exporting templates requires source control to be enabled")

    folder_pattern = folder.as_posix() + "/..."

    # Files that are not at head may already have been updated by an earlier export
    files_to_sync = source_control.preview_sync(folder_pattern)
    if files_to_sync:
        logger.info(
            "Some files in folder %s are not latest, which means that these files might have "
            "already been updated by an earlier exporting job. Skip this one.",
            folder,
        )
        return None

    changelist = ChangelistManager(source_control, config.p4_branch)
    changelist.create(build_templates_description(config.source_changelist, only_loc, no_robomerge))
    changelist.edit(folder_pattern)

    commandlet = commandlet_override if commandlet_override and commandlet_override.strip() else DEFAULT_TEMPLATES_COMMANDLET
    editor_arguments = ["-SCCProvider=None", "-Unattended"]
    if config.is_build_machine:
        editor_arguments.append("-BuildMachine")

    runner = CommandletRunner(config.editor_path, editor_arguments, launcher=launcher)
    command = build_commandlet_command(
        config.editor_path,
        commandlet,
        editor_arguments,
        project_file=project_file,
        extra_arguments=["-GenerateLoc"],
    )
    process = runner.launch(project_name, command)
    try:
        exit_code = process.wait()
    finally:
        process.dispose()

    if exit_code != 0:
        changelist.abandon()
        raise AutomationError(f"{commandlet} failed with exit code {exit_code}")

    changelist.mark_populated()
    changelist.reconcile([])

    if only_loc:
        # Revert everything except the generated localization file
        for entry in sorted(folder.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                changelist.revert(entry.as_posix() + "/...")
            elif entry.name != GENERATED_LOC_FILE:
                changelist.revert(entry.as_posix())

    # An empty changelist is deleted by the submit
    return changelist.submit(config.allow_submit)
