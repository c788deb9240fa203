"""Builds command lines for the localization commandlet."""

import shlex
from pathlib import Path
from typing import List, Optional, Sequence

PASSWORD_ARGUMENT = "-P4Passwd="


def build_editor_arguments(
    p4_enabled: bool,
    p4_port: str = "",
    p4_user: str = "",
    p4_client: str = "",
    p4_token: str = "",
    pending_changelist: Optional[int] = None,
    build_machine: bool = False,
    parallel: bool = False,
    additional_arguments: str = "",
) -> List[str]:
    """
    Build the editor arguments shared by every commandlet run.

    Args:
        p4_enabled: Let the editor check files out through Perforce
        p4_port: Perforce server address
        p4_user: Perforce user name
        p4_client: Perforce workspace name
        p4_token: Authentication ticket for the editor
        pending_changelist: Changelist the editor should open files in
        build_machine: Running on a build machine
        parallel: Several commandlets will run at the same time
        additional_arguments: Extra arguments, split like a shell would

    Returns:
        List of editor arguments
    """
    if p4_enabled:
        arguments = [
            "-SCCProvider=Perforce",
            f"-P4Port={p4_port}",
            f"-P4User={p4_user}",
            f"-P4Client={p4_client}",
            f"{PASSWORD_ARGUMENT}{p4_token}",
            f"-P4Changelist={pending_changelist or 0}",
            "-EnableSCC",
            "-DisableSCCSubmit",
        ]
    else:
        arguments = ["-SCCProvider=None"]

    if build_machine:
        arguments.append("-BuildMachine")
    arguments += ["-Unattended", "-LogLocalizationConflicts"]
    if parallel:
        arguments.append("-multiprocess")
    if additional_arguments:
        arguments += shlex.split(additional_arguments)

    return arguments


def build_commandlet_command(
    editor_exe: Path,
    commandlet: str,
    editor_arguments: Sequence[str],
    project_file: Optional[Path] = None,
    config_files: Sequence[Path] = (),
    extra_arguments: Sequence[str] = (),
) -> List[str]:
    """
    Build the full command line for one commandlet run.

    Args:
        editor_exe: Editor executable
        commandlet: Commandlet name passed to -run=
        editor_arguments: Common editor arguments
        project_file: Optional .uproject file
        config_files: Config files joined into a single -config= argument
        extra_arguments: Commandlet specific arguments

    Returns:
        Argument list suitable for subprocess
    """
    command = [str(editor_exe)]
    if project_file:
        command.append(str(project_file))
    command.append(f"-run={commandlet}")
    if config_files:
        command.append("-config=" + ";".join(str(path) for path in config_files))
    command += list(extra_arguments)
    command += list(editor_arguments)
    return command


def mask_command(command: Sequence[str]) -> str:
    """Render a command for logging with the Perforce password hidden."""
    masked = []
    for argument in command:
        if argument.startswith(PASSWORD_ARGUMENT) and len(argument) > len(PASSWORD_ARGUMENT):
            argument = PASSWORD_ARGUMENT + "****"
        masked.append(argument)
    return shlex.join(masked)
