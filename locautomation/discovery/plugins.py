"""Reads plugin descriptors (.uplugin) from disk."""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

PLUGIN_DESCRIPTOR_SUFFIX = ".uplugin"


class PluginType(str, Enum):
    """Where a plugin was loaded from."""
    ENGINE = "engine"
    PROJECT = "project"


@dataclass
class PluginInfo:
    """A plugin and the localization targets its descriptor declares."""
    name: str
    directory: Path
    plugin_type: PluginType
    localization_targets: List[str] = field(default_factory=list)


def read_plugin_descriptor(descriptor_path: Path, plugin_type: PluginType) -> PluginInfo:
    """
    Read a single .uplugin descriptor.

    Args:
        descriptor_path: Path to the .uplugin file
        plugin_type: Type to record for the plugin

    Returns:
        PluginInfo named after the descriptor file
    """
    with open(descriptor_path, "r", encoding="utf-8-sig") as f:
        data = json.load(f)

    targets = []
    for target in data.get("LocalizationTargets") or []:
        name = target.get("Name") if isinstance(target, dict) else None
        if name:
            targets.append(name)

    return PluginInfo(
        name=descriptor_path.stem,
        directory=descriptor_path.parent,
        plugin_type=plugin_type,
        localization_targets=targets,
    )


def read_plugins_from_directory(root_directory: Path, sub_directory: str, plugin_type: PluginType) -> List[PluginInfo]:
    """
    Find every plugin under "<root_directory>/<sub_directory>".

    A directory containing a descriptor is a plugin and is not searched further.
    Directories are visited in name order.

    Args:
        root_directory: Directory to search from
        sub_directory: Name of the plugins folder (usually "Plugins")
        plugin_type: Type to record for each plugin found

    Returns:
        List of PluginInfo in enumeration order
    """
    plugins_directory = Path(root_directory) / sub_directory
    if not plugins_directory.is_dir():
        return []

    plugins = []
    pending = [plugins_directory]
    while pending:
        directory = pending.pop(0)
        entries = sorted(directory.iterdir(), key=lambda p: p.name)

        descriptors = [p for p in entries if p.is_file() and p.suffix == PLUGIN_DESCRIPTOR_SUFFIX]
        if descriptors:
            for descriptor in descriptors:
                try:
                    plugins.append(read_plugin_descriptor(descriptor, plugin_type))
                except (OSError, ValueError) as e:
                    logger.warning("Failed to read plugin descriptor '%s': %s", descriptor, e)
            continue

        # Depth-first, keeping name order among siblings
        pending[0:0] = [p for p in entries if p.is_dir()]

    return plugins
