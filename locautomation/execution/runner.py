"""Runs the localization commandlet for every project of every task."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from ..models.batch import LocalizationTask
from ..models.steps import LocalizationStep
from .commandlet import build_commandlet_command, mask_command
from .process import CommandletProcess, Launcher, popen_launcher

logger = logging.getLogger(__name__)

GATHER_TEXT_COMMANDLET = "GatherText"


@dataclass
class RunSummary:
    """Statistics for a localization run."""

    launched: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    uploads_skipped: int = 0
    files_reverted: int = 0
    submitted_changelist: Optional[int] = None
    duration_seconds: float = 0.0


class CommandletRunner:
    """
    Launches commandlets and collects their results.

    Running is a two-phase protocol: ``launch_all`` fills every task's process
    slots, then ``wait_for_all`` joins every launched process in task/project
    order. In sequential mode each process is also waited on as soon as it is
    launched; in parallel mode nothing is waited on until ``wait_for_all``.
    """

    def __init__(
        self,
        editor_exe: Path,
        editor_arguments: Sequence[str],
        parallel: bool = False,
        launcher: Optional[Launcher] = None,
        commandlet: str = GATHER_TEXT_COMMANDLET,
    ):
        """
        Initialize the runner.

        Args:
            editor_exe: Editor executable to run
            editor_arguments: Common editor arguments for every run
            parallel: Launch every process before waiting on any of them
            launcher: Starts a process from an argument list (subprocess.Popen by default)
            commandlet: Commandlet to run
        """
        self.editor_exe = editor_exe
        self.editor_arguments = list(editor_arguments)
        self.parallel = parallel
        self.launcher = launcher or popen_launcher
        self.commandlet = commandlet

    def launch(self, project_name: str, command: List[str]) -> CommandletProcess:
        """Launch a single commandlet, waiting for it unless running in parallel."""
        logger.info("Running localization commandlet for '%s': %s", project_name, mask_command(command))
        process = CommandletProcess(project_name, self.launcher(command))
        if not self.parallel:
            process.wait()
        return process

    def launch_all(
        self,
        tasks: Iterable[LocalizationTask],
        requested_steps: Iterable[LocalizationStep],
        project_file_for: Optional[Callable[[LocalizationTask], Optional[Path]]] = None,
        summary: Optional[RunSummary] = None,
    ) -> RunSummary:
        """
        Launch a commandlet per project that has config files for the requested steps.

        Every project gets a slot in ``task.process_results``; the slot is None
        when the project has nothing to run.

        Args:
            tasks: Tasks in processing order
            requested_steps: Steps to pass config files for
            project_file_for: Gives the .uproject file for a task, if any
            summary: Summary to update (a new one if not provided)

        Returns:
            The updated RunSummary
        """
        summary = summary or RunSummary()
        requested_steps = set(requested_steps)

        for task in tasks:
            project_file = project_file_for(task) if project_file_for else None
            task.process_results = []

            for project_info in task.project_infos:
                config_files = project_info.get_config_files(requested_steps)
                if not config_files:
                    logger.debug("No steps to run for '%s'", project_info.project_name)
                    task.process_results.append(None)
                    summary.skipped += 1
                    continue

                command = build_commandlet_command(
                    self.editor_exe,
                    self.commandlet,
                    self.editor_arguments,
                    project_file=project_file,
                    config_files=config_files,
                )
                task.process_results.append(self.launch(project_info.project_name, command))
                summary.launched += 1

        return summary

    def wait_for_all(self, tasks: Iterable[LocalizationTask], summary: Optional[RunSummary] = None) -> RunSummary:
        """
        Wait for every launched commandlet and report its exit code.

        Runs for sequential execution too, so the exit state is always logged.
        A non-zero exit code is reported but does not stop the run.
        """
        summary = summary or RunSummary()

        for task in tasks:
            for project_info, process in zip(task.project_infos, task.process_results):
                if process is None:
                    continue

                exit_code = process.wait()
                process.dispose()

                if exit_code == 0:
                    logger.info(
                        "The localization commandlet for '%s' exited with code 0.",
                        project_info.project_name,
                    )
                    summary.succeeded += 1
                else:
                    logger.warning(
                        "The localization commandlet for '%s' exited with code %s which likely indicates a crash.",
                        project_info.project_name,
                        exit_code,
                    )
                    summary.failed += 1

        return summary
