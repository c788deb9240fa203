"""Fakes and file builders shared by the tests."""

from pathlib import Path
from typing import Dict, List, Optional


from locautomation.source_control.base import SourceControl

SETTINGS_TEMPLATE = """[CommonSettings]
SourcePath=%LOCPROJECTROOT%Content/Localization/{project}
DestinationPath=%LOCPROJECTROOT%Content/Localization/{project}
ManifestName={project}.manifest
ArchiveName={project}.archive
PortableObjectName={project}.po
NativeCulture=en
+CulturesToGenerate=en
+CulturesToGenerate=fr
+CulturesToGenerate=de
"""


class FakeSourceControl(SourceControl):
    """In-memory version control backend that records every call."""

    def __init__(self, preview_files: Optional[List[str]] = None, submit_result: Optional[int] = 200):
        self.calls: List[tuple] = []
        self.preview_files = preview_files or []
        self.submit_result = submit_result
        self.next_change = 100

    def create_change(self, description: str) -> int:
        self.calls.append(("create_change", description))
        return self.next_change

    def sync(self, path_pattern: str) -> None:
        self.calls.append(("sync", path_pattern))

    def preview_sync(self, path_pattern: str) -> List[str]:
        self.calls.append(("preview_sync", path_pattern))
        return list(self.preview_files)

    def edit(self, change: int, path_pattern: str) -> None:
        self.calls.append(("edit", change, path_pattern))

    def revert(self, change: int, path_pattern: str) -> None:
        self.calls.append(("revert", change, path_pattern))

    def revert_by_file_list(self, file_list) -> None:
        self.calls.append(("revert_by_file_list", list(file_list)))

    def revert_unchanged(self, change: int) -> None:
        self.calls.append(("revert_unchanged", change))

    def submit(self, change: int) -> Optional[int]:
        self.calls.append(("submit", change))
        return self.submit_result

    def get_authentication_token(self) -> str:
        return "secret-ticket"

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


class FakeProcess:
    """Stand-in for subprocess.Popen that exits with a fixed code."""

    def __init__(self, exit_code: int = 0):
        self.exit_code = exit_code
        self.returncode: Optional[int] = None
        self.wait_count = 0

    def wait(self) -> int:
        self.wait_count += 1
        self.returncode = self.exit_code
        return self.exit_code


class FakeLauncher:
    """Records launched commands and hands out FakeProcess objects."""

    def __init__(self, exit_codes: Optional[Dict[str, int]] = None, on_launch=None):
        self.exit_codes = exit_codes or {}
        self.on_launch = on_launch
        self.commands: List[List[str]] = []
        self.processes: List[FakeProcess] = []

    def __call__(self, args: List[str]) -> FakeProcess:
        self.commands.append(list(args))
        exit_code = 0
        for needle, code in self.exit_codes.items():
            if any(needle in arg for arg in args):
                exit_code = code
        process = FakeProcess(exit_code)
        self.processes.append(process)
        if self.on_launch is not None:
            self.on_launch(args)
        return process


def write_settings_config(path: Path, project: str, extra: str = "") -> Path:
    """Write a localization config with a complete [CommonSettings] section."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SETTINGS_TEMPLATE.format(project=project) + extra, encoding="utf-8")
    return path


def write_modular_configs(target_directory: Path, project: str, steps) -> None:
    """Write "<project>_<Step>.ini" files for the given step names."""
    config_directory = target_directory / "Config" / "Localization"
    for step in steps:
        write_settings_config(config_directory / f"{project}_{step}.ini", project)


def write_po(path: Path, header: str, body: str) -> Path:
    """Write a portable object file with a header block and a body."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{header}\n\n{body}\n", encoding="utf-8")
    return path


