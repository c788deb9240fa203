"""Runs a complete localization pass over every discovered batch."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Set

from .config import Config, config as default_config
from .discovery.batches import DiscoveryOptions, discover_batches
from .errors import ProviderError
from .execution.commandlet import build_editor_arguments
from .execution.process import Launcher
from .execution.runner import CommandletRunner, RunSummary
from .models.batch import LocalizationBatch, LocalizationTask
from .models.steps import PUBLIC_STEPS, LocalizationStep, with_implicit_steps
from .providers import get_localization_provider
from .providers.base import LocalizationProvider, LocalizationProviderArgs
from .reconciliation.changelist import ChangelistManager
from .reconciliation.po_hashes import FileHashes, find_unchanged_files, get_po_file_hashes
from .resolution.project_resolver import ProjectResolver
from .source_control.base import SourceControl

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str, LocalizationProviderArgs], Optional[LocalizationProvider]]


@dataclass
class LocalizeOptions:
    """Options for a localization run."""

    project_directory: str
    project_root: Optional[Path] = None
    project_name: str = ""
    localization_project_names: List[str] = field(default_factory=list)
    localization_branch: str = ""
    provider_name: str = ""
    steps: Set[LocalizationStep] = field(default_factory=lambda: set(PUBLIC_STEPS))
    include_plugins: bool = False
    plugins_to_include: List[str] = field(default_factory=list)
    plugins_to_exclude: List[str] = field(default_factory=list)
    include_platforms: bool = False
    additional_arguments: str = ""
    parallel: bool = False


class LocalizeCommand:
    """
    Gathers, imports, exports and compiles text for a set of localization batches.

    Stages run strictly in order: discovery, project resolution, initial
    hashing, download, commandlet runs, upload, then changelist
    reconciliation and submit.
    """

    def __init__(
        self,
        options: LocalizeOptions,
        config: Optional[Config] = None,
        source_control: Optional[SourceControl] = None,
        launcher: Optional[Launcher] = None,
        provider_factory: Optional[ProviderFactory] = None,
        resolver: Optional[ProjectResolver] = None,
    ):
        """
        Initialize the command.

        Args:
            options: What to localize
            config: Application configuration (global config if not provided)
            source_control: Version control backend; None runs without a changelist
            launcher: Starts commandlet processes (subprocess.Popen by default)
            provider_factory: Creates localization providers by name
            resolver: Resolves project steps and settings
        """
        self.options = options
        self.config = config or default_config
        self.source_control = source_control
        self.launcher = launcher
        self.provider_factory = provider_factory or get_localization_provider
        self.resolver = resolver or ProjectResolver()
        self.project_root = Path(options.project_root or self.config.local_root)
        self.requested_steps = with_implicit_steps(options.steps)
        self.changelist: Optional[ChangelistManager] = None

    def run(self) -> RunSummary:
        """
        Run the localization pass.

        Returns:
            RunSummary with counts for the run
        """
        start_time = time.monotonic()
        summary = RunSummary()

        batches = discover_batches(DiscoveryOptions(
            project_root=self.project_root,
            project_directory=self.options.project_directory,
            project_name=self.options.project_name,
            localization_project_names=self.options.localization_project_names,
            include_platforms=self.options.include_platforms,
            include_plugins=self.options.include_plugins,
            plugins_to_include=self.options.plugins_to_include,
            plugins_to_exclude=self.options.plugins_to_exclude,
        ))

        # Create a single changelist to use for all changes
        if self.source_control is not None:
            self.changelist = ChangelistManager(self.source_control, self.config.p4_branch)
            self.changelist.create(self.build_changelist_description())

        tasks: List[LocalizationTask] = []
        try:
            tasks = self.prepare_tasks(batches)

            # Hash the current PO files on disk so we can work out whether they actually change
            initial_hashes: Optional[FileHashes] = None
            if self.changelist is not None:
                initial_hashes = get_po_file_hashes(batches, self.project_root)

            if LocalizationStep.DOWNLOAD in self.requested_steps:
                self.download(tasks)

            runner = self.create_runner()
            runner.launch_all(tasks, self.requested_steps, self.get_project_file, summary)
            runner.wait_for_all(tasks, summary)

            if LocalizationStep.UPLOAD in self.requested_steps:
                self.upload(tasks, summary)

            # Clean-up the changelist so it only contains the changed files, then submit it
            if self.changelist is not None:
                self.changelist.mark_populated()
                current_hashes = get_po_file_hashes(batches, self.project_root)
                files_to_revert = find_unchanged_files(initial_hashes, current_hashes)
                summary.files_reverted = self.changelist.reconcile(files_to_revert)
                summary.submitted_changelist = self.changelist.submit(self.config.allow_submit)
        finally:
            for task in tasks:
                task.dispose_processes()
            if self.changelist is not None:
                self.changelist.abandon()

        summary.duration_seconds = time.monotonic() - start_time
        logger.info("Localize command finished in %.2f seconds", summary.duration_seconds)
        return summary

    def build_changelist_description(self) -> str:
        """Get the description of the pending changelist."""
        lines = [f"Localization Automation using CL {self.config.source_changelist or 'latest'}"]
        lines += self.config.changelist_tags
        return "\n".join(lines)

    def prepare_tasks(self, batches: List[LocalizationBatch]) -> List[LocalizationTask]:
        """
        Create a task per batch and resolve its projects.

        Raises:
            AutomationError: If a project's configuration is incomplete
        """
        pending_changelist = self.changelist.changelist if self.changelist else None

        tasks = []
        for batch in batches:
            task = LocalizationTask.from_batch(batch, self.project_root)
            task.provider = self.provider_factory(
                self.options.provider_name,
                LocalizationProviderArgs(
                    root_working_directory=task.root_working_directory,
                    root_target_directory=task.root_target_directory,
                    remote_filename_prefix=batch.remote_filename_prefix,
                    branch_suffix=self.options.localization_branch,
                    source_control=self.source_control,
                    pending_changelist=pending_changelist,
                    file_share_root=self.config.file_share_root,
                ),
            )
            tasks.append(task)

            # Make sure the localization configs and content are up-to-date to avoid errors later on
            if self.changelist is not None:
                self.changelist.sync_batch(batch)

            for project_name in batch.project_names:
                task.project_infos.append(
                    self.resolver.resolve(task.root_target_directory, project_name, self.requested_steps)
                )

        return tasks

    def get_project_file(self, task: LocalizationTask) -> Optional[Path]:
        """Get the .uproject file passed to the commandlet, if a project name was given."""
        if not self.options.project_name:
            return None
        return task.root_working_directory / f"{self.options.project_name}.uproject"

    def create_runner(self) -> CommandletRunner:
        """Create the commandlet runner with the common editor arguments."""
        p4_enabled = self.source_control is not None
        editor_arguments = build_editor_arguments(
            p4_enabled=p4_enabled,
            p4_port=self.config.p4_port,
            p4_user=self.config.p4_user,
            p4_client=self.config.p4_client,
            p4_token=self.source_control.get_authentication_token() if p4_enabled else "",
            pending_changelist=self.changelist.changelist if self.changelist else None,
            build_machine=self.config.is_build_machine,
            parallel=self.options.parallel,
            additional_arguments=self.options.additional_arguments,
        )
        return CommandletRunner(
            self.config.editor_path,
            editor_arguments,
            parallel=self.options.parallel,
            launcher=self.launcher,
        )

    def download(self, tasks: List[LocalizationTask]) -> None:
        """Download the latest translations from the localization provider."""
        for task in tasks:
            if task.provider is None:
                continue
            for project_info in task.project_infos:
                try:
                    task.provider.download_project(project_info.project_name, project_info.import_info)
                except ProviderError as e:
                    logger.warning(
                        "Failed to download '%s' from the localization provider: %s",
                        project_info.project_name,
                        e,
                    )

    def upload(self, tasks: List[LocalizationTask], summary: RunSummary) -> None:
        """Upload the latest sources of every project whose commandlet succeeded."""
        for task in tasks:
            if task.provider is None:
                continue
            for project_info, process in zip(task.project_infos, task.process_results):
                if process is None:
                    logger.warning(
                        "Skipping upload to the localization provider for '%s' as no commandlet was run for it.",
                        project_info.project_name,
                    )
                    summary.uploads_skipped += 1
                    continue
                if not process.succeeded:
                    logger.warning(
                        "Skipping upload to the localization provider for '%s' due to an earlier commandlet failure.",
                        project_info.project_name,
                    )
                    summary.uploads_skipped += 1
                    continue

                # Export may have changed the split platform paths
                project_info.export_info.calculate_split_platform_paths(task.root_target_directory)
                try:
                    task.provider.upload_project(project_info.project_name, project_info.export_info)
                except ProviderError as e:
                    logger.warning(
                        "Failed to upload '%s' to the localization provider: %s",
                        project_info.project_name,
                        e,
                    )
                    summary.uploads_skipped += 1
