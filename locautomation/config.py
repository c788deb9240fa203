"""Configuration management for the localization automation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List
from dotenv import load_dotenv

load_dotenv()

TRUTHY_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY_VALUES


def _env_list(name: str) -> List[str]:
    value = os.getenv(name, "")
    return [item.strip() for item in value.split(";") if item.strip()]


@dataclass
class Config:
    """Application configuration."""

    # Paths
    local_root: Path = field(
        default_factory=lambda: Path(os.getenv("LOCALIZE_LOCAL_ROOT", os.getcwd()))
    )
    editor_exe: str = field(
        default_factory=lambda: os.getenv(
            "LOCALIZE_EDITOR_EXE", "Engine/Binaries/Win64/UE4Editor-Cmd.exe"
        )
    )
    intermediate_dir: str = field(
        default_factory=lambda: os.getenv("LOCALIZE_INTERMEDIATE_DIR", "Engine/Intermediate")
    )
    is_build_machine: bool = field(default_factory=lambda: _env_flag("IsBuildMachine"))

    # Perforce settings
    p4_enabled: bool = field(default_factory=lambda: _env_flag("P4_ENABLED"))
    p4_port: str = field(default_factory=lambda: os.getenv("P4PORT", ""))
    p4_user: str = field(default_factory=lambda: os.getenv("P4USER", ""))
    p4_client: str = field(default_factory=lambda: os.getenv("P4CLIENT", ""))
    p4_password: str = field(default_factory=lambda: os.getenv("P4PASSWD", ""))
    p4_ticket: str = field(default_factory=lambda: os.getenv("P4TICKET", ""))
    p4_branch: str = field(default_factory=lambda: os.getenv("P4_BRANCH", ""))
    source_changelist: str = field(default_factory=lambda: os.getenv("P4_CL", ""))

    # Changelist settings
    allow_submit: bool = field(default_factory=lambda: _env_flag("LOCALIZE_ALLOW_SUBMIT", "1"))
    changelist_tags: List[str] = field(default_factory=lambda: _env_list("LOCALIZE_CL_TAGS"))

    # Localization provider settings
    file_share_root: str = field(default_factory=lambda: os.getenv("LOCALIZE_FILE_SHARE_ROOT", ""))

    @property
    def editor_path(self) -> Path:
        """Get the absolute path of the editor commandlet executable."""
        path = Path(self.editor_exe)
        return path if path.is_absolute() else self.local_root / path

    @property
    def intermediate_path(self) -> Path:
        """Get the absolute path of the intermediate directory."""
        path = Path(self.intermediate_dir)
        return path if path.is_absolute() else self.local_root / path

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []
        if self.p4_enabled:
            if not self.p4_port:
                errors.append("P4PORT is not set")
            if not self.p4_user:
                errors.append("P4USER is not set")
            if not self.p4_client:
                errors.append("P4CLIENT is not set")
            if not self.p4_branch:
                errors.append("P4_BRANCH is not set")
        return errors


# Global config instance
config = Config()
