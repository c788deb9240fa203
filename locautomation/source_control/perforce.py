"""Perforce backend driving the p4 command-line client."""

import logging
import re
import subprocess
import tempfile
import uuid
from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import SourceControlError
from .base import SourceControl

logger = logging.getLogger(__name__)

CHANGE_CREATED_PATTERN = re.compile(r"Change (\d+) created")
CHANGE_SUBMITTED_PATTERN = re.compile(r"Change (\d+) submitted|renamed change (\d+) and submitted")
NO_FILES_TO_SUBMIT = "No files to submit"


class PerforceClient(SourceControl):
    """Client for a Perforce server using the p4 executable."""

    def __init__(
        self,
        port: str,
        user: str,
        client: str,
        password: str = "",
        ticket: str = "",
        p4_exe: str = "p4",
        intermediate_dir: Optional[Path] = None,
    ):
        """
        Initialize the Perforce client.

        Args:
            port: Server address (P4PORT)
            user: Perforce user name
            client: Workspace name
            password: Password used to obtain a ticket when no ticket is given
            ticket: Existing login ticket
            p4_exe: p4 executable to run
            intermediate_dir: Directory for temporary argument files (system temp dir if not provided)
        """
        self.port = port
        self.user = user
        self.client = client
        self.password = password
        self.ticket = ticket
        self.p4_exe = p4_exe
        self.intermediate_dir = Path(intermediate_dir) if intermediate_dir else Path(tempfile.gettempdir())

    @classmethod
    def from_config(cls, config) -> "PerforceClient":
        """Create a client from the application configuration."""
        return cls(
            port=config.p4_port,
            user=config.p4_user,
            client=config.p4_client,
            password=config.p4_password,
            ticket=config.p4_ticket,
            intermediate_dir=config.intermediate_path,
        )

    def create_change(self, description: str) -> int:
        description_lines = "\n".join(f"\t{line}" for line in description.splitlines())
        form = f"Change:\tnew\n\nClient:\t{self.client}\n\nDescription:\n{description_lines}\n"

        output = self._run(["change", "-i"], stdin=form)
        match = CHANGE_CREATED_PATTERN.search(output)
        if not match:
            raise SourceControlError("change -i", 0, f"Unexpected output: {output}")

        change = int(match.group(1))
        logger.info("Created pending changelist %d", change)
        return change

    def sync(self, path_pattern: str) -> None:
        self._run(["sync", path_pattern], allow_warnings=True)

    def preview_sync(self, path_pattern: str) -> List[str]:
        output = self._run(["sync", "-n", path_pattern], allow_warnings=True)
        files = []
        for line in output.splitlines():
            # "//depot/path#3 - updating c:\ws\path"
            if " - " in line and line.startswith("//"):
                files.append(line.split("#", 1)[0])
        return files

    def edit(self, change: int, path_pattern: str) -> None:
        self._run(["edit", "-c", str(change), path_pattern], allow_warnings=True)

    def revert(self, change: int, path_pattern: str) -> None:
        self._run(["revert", "-c", str(change), path_pattern], allow_warnings=True)

    def revert_by_file_list(self, file_list: Sequence[str]) -> None:
        if not file_list:
            return

        # Pass the files through an arguments file to avoid command-line length limits
        self.intermediate_dir.mkdir(parents=True, exist_ok=True)
        args_file = self.intermediate_dir / f"LocalizationP4RevertArgs-{uuid.uuid4()}.txt"
        args_file.write_text("\n".join(file_list) + "\n", encoding="utf-8")
        try:
            self._run(["-x", str(args_file), "revert"], allow_warnings=True)
        finally:
            args_file.unlink(missing_ok=True)

    def revert_unchanged(self, change: int) -> None:
        self._run(["revert", "-a", "-c", str(change)], allow_warnings=True)

    def submit(self, change: int) -> Optional[int]:
        try:
            output = self._run(["submit", "-c", str(change)])
        except SourceControlError as e:
            if NO_FILES_TO_SUBMIT not in e.output:
                raise
            # Nothing left after the reverts; delete the empty change
            logger.info("Changelist %d is empty, deleting it instead of submitting", change)
            self._run(["change", "-d", str(change)])
            return None

        match = CHANGE_SUBMITTED_PATTERN.search(output)
        if not match:
            raise SourceControlError("submit", 0, f"Unexpected output: {output}")

        submitted = int(match.group(1) or match.group(2))
        logger.info("Submitted changelist %d", submitted)
        return submitted

    def get_authentication_token(self) -> str:
        if self.ticket:
            return self.ticket
        if not self.password:
            return ""
        output = self._run(["login", "-p"], stdin=self.password + "\n")
        # The ticket is the last line of output
        lines = [line.strip() for line in output.splitlines() if line.strip()]
        self.ticket = lines[-1] if lines else ""
        return self.ticket

    def _run(
        self,
        args: List[str],
        stdin: Optional[str] = None,
        allow_warnings: bool = False,
    ) -> str:
        """
        Run a p4 command.

        Args:
            args: Command and its arguments
            stdin: Text to feed to the command
            allow_warnings: Treat "file(s) up-to-date" style messages on stderr as success

        Returns:
            Combined stdout of the command
        """
        command = [self.p4_exe, "-p", self.port, "-u", self.user, "-c", self.client]
        if self.ticket and args[:1] != ["login"]:
            command += ["-P", self.ticket]
        command += args

        display = " ".join(args)
        logger.debug("Running p4 %s", display)

        result = subprocess.run(
            command,
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
        )

        if result.returncode != 0:
            raise SourceControlError(display, result.returncode, result.stderr or result.stdout)

        if result.stderr.strip():
            if allow_warnings:
                logger.debug("p4 %s: %s", display, result.stderr.strip())
            else:
                logger.warning("p4 %s: %s", display, result.stderr.strip())

        return result.stdout
