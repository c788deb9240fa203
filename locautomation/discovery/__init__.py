"""Discovery of localization batches (static, platform and plugin)."""

from .batches import (
    CONFIG_FILE_SUFFIXES,
    DiscoveryOptions,
    discover_batches,
    get_localization_targets_from_directory,
    strip_config_suffixes,
)
from .plugins import PluginInfo, PluginType, read_plugins_from_directory

__all__ = [
    "CONFIG_FILE_SUFFIXES",
    "DiscoveryOptions",
    "discover_batches",
    "get_localization_targets_from_directory",
    "strip_config_suffixes",
    "PluginInfo",
    "PluginType",
    "read_plugins_from_directory",
]
