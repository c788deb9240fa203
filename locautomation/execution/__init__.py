"""Commandlet execution."""

from .commandlet import build_commandlet_command, build_editor_arguments, mask_command
from .process import CommandletProcess, Launcher, popen_launcher
from .runner import GATHER_TEXT_COMMANDLET, CommandletRunner, RunSummary

__all__ = [
    "build_commandlet_command",
    "build_editor_arguments",
    "mask_command",
    "CommandletProcess",
    "Launcher",
    "popen_launcher",
    "GATHER_TEXT_COMMANDLET",
    "CommandletRunner",
    "RunSummary",
]
