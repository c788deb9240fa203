"""Unit tests for the template export run."""

import pytest

from locautomation.errors import AutomationError
from locautomation.templates import build_templates_description, run_export_templates
from tests.helpers import FakeLauncher, FakeSourceControl


@pytest.fixture
def backend(tmp_path):
    folder = tmp_path / "Game" / "Content" / "Backend"
    (folder / "Sub").mkdir(parents=True)
    (folder / "GeneratedLoc.json").write_text("{}", encoding="utf-8")
    (folder / "Other.json").write_text("{}", encoding="utf-8")
    return folder


def test_description() -> None:
    assert build_templates_description("123", only_loc=False, no_robomerge=True) == (
        "RunExportTemplates Updated mcp templates using CL 123"
    )
    assert build_templates_description("", only_loc=True, no_robomerge=False) == (
        "RunExportTemplates Updated mcp templates using CL latest [OnlyLoc]\n"
        "#robomerge[ALL] #DisregardExcludedAuthors"
    )


def test_export_and_submit(backend, test_config, fake_source_control) -> None:
    launcher = FakeLauncher()

    submitted = run_export_templates(
        "Game", fake_source_control, no_robomerge=True, config=test_config, launcher=launcher
    )

    assert submitted == 200
    assert fake_source_control.call_names() == [
        "preview_sync", "create_change", "edit", "revert_unchanged", "submit",
    ]
    assert fake_source_control.calls[2] == ("edit", 100, backend.as_posix() + "/...")
    (command,) = launcher.commands
    assert command[1] == str(test_config.local_root / "Game" / "Game.uproject")
    assert command[2] == "-run=ExportTemplatesCommandlet"
    assert "-GenerateLoc" in command


def test_only_loc_reverts_other_files(backend, test_config, fake_source_control) -> None:
    run_export_templates("Game", fake_source_control, only_loc=True, config=test_config, launcher=FakeLauncher())

    reverts = [call[2] for call in fake_source_control.calls if call[0] == "revert"]
    assert reverts == [(backend / "Other.json").as_posix(), (backend / "Sub").as_posix() + "/..."]


def test_commandlet_override(backend, test_config, fake_source_control) -> None:
    launcher = FakeLauncher()

    run_export_templates(
        "Game", fake_source_control, commandlet_override="MyExport", config=test_config, launcher=launcher
    )

    assert "-run=MyExport" in launcher.commands[0]


def test_skipped_when_files_are_not_at_head(backend, test_config) -> None:
    source_control = FakeSourceControl(preview_files=["//depot/Main/Game/Content/Backend/Other.json"])
    launcher = FakeLauncher()

    assert run_export_templates("Game", source_control, config=test_config, launcher=launcher) is None

    assert source_control.call_names() == ["preview_sync"]
    assert launcher.commands == []


def test_commandlet_failure(backend, test_config, fake_source_control) -> None:
    launcher = FakeLauncher(exit_codes={"ExportTemplatesCommandlet": 1})

    with pytest.raises(AutomationError, match="exit code 1"):
        run_export_templates("Game", fake_source_control, config=test_config, launcher=launcher)

    assert "submit" not in fake_source_control.call_names()


@pytest.mark.parametrize("project_name", ["", "   "])
def test_project_name_required(test_config, fake_source_control, project_name) -> None:
    with pytest.raises(AutomationError, match="No project name defined"):
        run_export_templates(project_name, fake_source_control, config=test_config)


def test_missing_backend_folder(test_config, fake_source_control) -> None:
    with pytest.raises(AutomationError, match="backend folder not found"):
        run_export_templates("Game", fake_source_control, config=test_config)


def test_source_control_required(backend, test_config) -> None:
    with pytest.raises(AutomationError, match="requires source control"):
        run_export_templates("Game", None, config=test_config)
