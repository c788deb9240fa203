"""Discovers the localization batches to process."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from ..models.batch import LocalizationBatch
from ..resolution.project_resolver import get_config_directory
from .plugins import PluginType, read_plugins_from_directory

logger = logging.getLogger(__name__)

# Modular config suffixes stripped to recover the localization target name
CONFIG_FILE_SUFFIXES = (
    "_Gather",
    "_Import",
    "_Export",
    "_Compile",
    "_GenerateReports",
)


def strip_config_suffixes(name: str) -> str:
    """Remove every trailing modular step suffix from a config file base name."""
    stripped = True
    while stripped:
        stripped = False
        for suffix in CONFIG_FILE_SUFFIXES:
            if name.endswith(suffix) and len(name) > len(suffix):
                name = name[: -len(suffix)]
                stripped = True
    return name


def get_localization_targets_from_directory(config_directory: Path) -> List[str]:
    """
    List the localization targets that have configs in a directory.

    Args:
        config_directory: A "Config/Localization" directory

    Returns:
        De-duplicated target names in file name order
    """
    config_directory = Path(config_directory)
    if not config_directory.is_dir():
        return []

    targets = []
    for config_file in sorted(config_directory.iterdir(), key=lambda p: p.name):
        if not config_file.is_file():
            continue
        target = strip_config_suffixes(config_file.stem)
        if target not in targets:
            targets.append(target)
    return targets


def to_root_relative(path: Path, project_root: Path) -> str:
    """Express a path relative to the project root using forward slashes."""
    # Forward slashes as these paths are also used as depot paths
    return os.path.relpath(path, project_root).replace("\\", "/")


@dataclass
class DiscoveryOptions:
    """What to include when discovering batches."""
    project_root: Path
    project_directory: str
    project_name: str = ""
    localization_project_names: List[str] = field(default_factory=list)
    include_platforms: bool = False
    include_plugins: bool = False
    plugins_to_include: List[str] = field(default_factory=list)
    plugins_to_exclude: List[str] = field(default_factory=list)


def discover_batches(options: DiscoveryOptions) -> List[LocalizationBatch]:
    """
    Build the ordered list of batches to process.

    The static batch comes first, then one batch per platform, then one per plugin.

    Args:
        options: Discovery options

    Returns:
        List of LocalizationBatch in processing order
    """
    batches = []
    project_root = Path(options.project_root)
    project_directory = options.project_directory

    # Add the static set of localization projects as a batch
    if options.localization_project_names:
        batches.append(LocalizationBatch(
            project_directory=project_directory,
            target_directory=project_directory,
            remote_filename_prefix="",
            project_names=tuple(options.localization_project_names),
        ))

    if options.include_platforms:
        batches.extend(_discover_platform_batches(project_root, project_directory))

    if options.include_plugins:
        batches.extend(_discover_plugin_batches(
            project_root,
            project_directory,
            options.project_name,
            options.plugins_to_include,
            options.plugins_to_exclude,
        ))

    logger.info("Found %d localization batch(es)", len(batches))
    return batches


def _discover_platform_batches(project_root: Path, project_directory: str) -> List[LocalizationBatch]:
    batches = []
    platforms_root = project_root / project_directory / "Platforms"
    if not platforms_root.is_dir():
        return batches

    for platform_directory in sorted(platforms_root.iterdir(), key=lambda p: p.name):
        if not platform_directory.is_dir():
            continue

        target_names = get_localization_targets_from_directory(get_config_directory(platform_directory))
        if not target_names:
            continue

        logger.debug("Platform '%s' has localization targets: %s", platform_directory.name, ", ".join(target_names))
        batches.append(LocalizationBatch(
            project_directory=project_directory,
            target_directory=to_root_relative(platform_directory, project_root),
            remote_filename_prefix="",
            project_names=tuple(target_names),
        ))

    return batches


def _discover_plugin_batches(
    project_root: Path,
    project_directory: str,
    project_name: str,
    plugins_to_include: Iterable[str],
    plugins_to_exclude: Iterable[str],
) -> List[LocalizationBatch]:
    include = set(plugins_to_include)
    exclude = set(plugins_to_exclude)
    plugin_type = PluginType.PROJECT if project_name else PluginType.ENGINE

    batches = []
    available_plugin_names = set()
    for plugin in read_plugins_from_directory(project_root / project_directory, "Plugins", plugin_type):
        available_plugin_names.add(plugin.name)

        should_include = (not include or plugin.name in include) and plugin.name not in exclude
        if not should_include or not plugin.localization_targets:
            continue

        # The plugin name disambiguates its files on the localization provider
        batches.append(LocalizationBatch(
            project_directory=project_directory,
            target_directory=to_root_relative(plugin.directory, project_root),
            remote_filename_prefix=plugin.name,
            project_names=tuple(plugin.localization_targets),
        ))

    missing = find_missing_plugins(plugins_to_include, available_plugin_names)
    for name in missing:
        logger.warning("The plugin '%s' specified by --plugin wasn't found and will be skipped.", name)
    if missing:
        logger.warning("%d requested plugin(s) were not found", len(missing))

    return batches


def find_missing_plugins(requested: Optional[Iterable[str]], available: Iterable[str]) -> List[str]:
    """Get the requested plugin names that are not available."""
    available = set(available)
    return [name for name in requested or [] if name not in available]
