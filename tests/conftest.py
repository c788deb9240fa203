"""Common pytest configuration."""

from pathlib import Path

import pytest

from locautomation.config import Config
from tests.helpers import FakeLauncher, FakeSourceControl


@pytest.fixture
def fake_source_control() -> FakeSourceControl:
    return FakeSourceControl()


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Configuration rooted in a temporary directory with Perforce settings filled in."""
    return Config(
        local_root=tmp_path,
        editor_exe="Engine/Binaries/Win64/UE4Editor-Cmd.exe",
        intermediate_dir="Engine/Intermediate",
        is_build_machine=False,
        p4_enabled=False,
        p4_port="perforce:1666",
        p4_user="buildbot",
        p4_client="buildbot-ws",
        p4_password="",
        p4_ticket="",
        p4_branch="//depot/Main",
        source_changelist="12345",
        allow_submit=True,
        changelist_tags=[],
        file_share_root="",
    )
