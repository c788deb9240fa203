"""Handles for launched commandlet processes."""

import subprocess
from typing import Callable, List, Optional, Protocol


class ProcessHandle(Protocol):
    """The subset of subprocess.Popen the runner relies on."""

    returncode: Optional[int]

    def wait(self) -> int: ...


# Starts a process from an argument list without waiting for it
Launcher = Callable[[List[str]], ProcessHandle]


def popen_launcher(args: List[str]) -> ProcessHandle:
    """Launch a process that writes straight to our stdout/stderr."""
    return subprocess.Popen(args)


class CommandletProcess:
    """A launched commandlet together with the project it was run for."""

    def __init__(self, project_name: str, handle: ProcessHandle):
        self.project_name = project_name
        self._handle: Optional[ProcessHandle] = handle
        self._exit_code: Optional[int] = None

    @property
    def exit_code(self) -> Optional[int]:
        """Exit code, or None while the process has not been waited on."""
        return self._exit_code

    @property
    def succeeded(self) -> bool:
        return self._exit_code == 0

    def wait(self) -> int:
        """Block until the process exits and return its exit code."""
        if self._exit_code is None and self._handle is not None:
            self._exit_code = self._handle.wait()
        return self._exit_code

    def dispose(self) -> None:
        """
        Release the process handle.

        Running processes are not killed; there is no cancellation.
        """
        handle, self._handle = self._handle, None
        if handle is None:
            return
        if self._exit_code is None and handle.returncode is not None:
            self._exit_code = handle.returncode
        for stream in (getattr(handle, "stdout", None), getattr(handle, "stderr", None)):
            if stream is not None:
                stream.close()
