"""Unit tests for launching and joining commandlet processes."""

import logging
from pathlib import Path

import pytest

from locautomation.execution.process import CommandletProcess
from locautomation.execution.runner import CommandletRunner, RunSummary
from locautomation.models.batch import LocalizationBatch, LocalizationTask
from locautomation.models.project_info import ProjectInfo, ProjectStepInfo
from locautomation.models.steps import LocalizationStep, with_implicit_steps
from locautomation.resolution.project_resolver import ProjectResolver
from tests.helpers import FakeLauncher, FakeProcess, write_modular_configs

EDITOR = Path("/ue/Editor-Cmd")


def _task(tmp_path: Path, *project_infos: ProjectInfo) -> LocalizationTask:
    batch = LocalizationBatch("Game", "Game", "", tuple(info.project_name for info in project_infos))
    task = LocalizationTask.from_batch(batch, tmp_path)
    task.project_infos = list(project_infos)
    return task


def _modular(name: str, *steps: LocalizationStep) -> ProjectInfo:
    return ProjectInfo(
        project_name=name,
        steps=[ProjectStepInfo(step, Path(f"/cfg/{name}_{step.value}.ini")) for step in steps],
    )


class TestCommandletProcess:
    """Tests for process handles."""

    def test_wait_caches_exit_code(self) -> None:
        handle = FakeProcess(3)
        process = CommandletProcess("Game", handle)

        assert process.wait() == 3
        assert process.wait() == 3
        assert handle.wait_count == 1
        assert not process.succeeded

    def test_dispose_keeps_exit_code(self) -> None:
        process = CommandletProcess("Game", FakeProcess(0))
        process.wait()
        process.dispose()
        process.dispose()

        assert process.exit_code == 0
        assert process.succeeded

    def test_dispose_without_wait_does_not_block(self) -> None:
        handle = FakeProcess(0)
        process = CommandletProcess("Game", handle)
        process.dispose()

        assert handle.wait_count == 0
        assert process.exit_code is None


class TestLaunchAll:
    """Tests for launching a commandlet per project."""

    def test_one_slot_per_project(self, tmp_path) -> None:
        launcher = FakeLauncher()
        runner = CommandletRunner(EDITOR, ["-Unattended"], launcher=launcher)
        task = _task(
            tmp_path,
            _modular("First", LocalizationStep.GATHER),
            _modular("Empty", LocalizationStep.GENERATE_REPORTS),
            _modular("Last", LocalizationStep.COMPILE),
        )

        summary = runner.launch_all([task], with_implicit_steps({LocalizationStep.GATHER, LocalizationStep.COMPILE}))

        assert len(task.process_results) == 3
        assert task.process_results[0].project_name == "First"
        assert task.process_results[1] is None
        assert task.process_results[2].project_name == "Last"
        assert summary.launched == 2
        assert summary.skipped == 1

    def test_config_files_in_step_order(self, tmp_path) -> None:
        launcher = FakeLauncher()
        runner = CommandletRunner(EDITOR, [], launcher=launcher)
        task = _task(tmp_path, _modular("Game", LocalizationStep.GATHER, LocalizationStep.EXPORT, LocalizationStep.COMPILE))

        runner.launch_all([task], with_implicit_steps({LocalizationStep.COMPILE, LocalizationStep.EXPORT, LocalizationStep.GATHER}))

        assert launcher.commands == [[
            str(EDITOR),
            "-run=GatherText",
            "-config=/cfg/Game_Gather.ini;/cfg/Game_Export.ini;/cfg/Game_Compile.ini",
        ]]

    def test_project_file_is_passed(self, tmp_path) -> None:
        launcher = FakeLauncher()
        runner = CommandletRunner(EDITOR, [], launcher=launcher)
        task = _task(tmp_path, _modular("Game", LocalizationStep.COMPILE))

        runner.launch_all([task], {LocalizationStep.COMPILE}, lambda t: t.root_working_directory / "Game.uproject")

        assert launcher.commands[0][1] == str(tmp_path / "Game" / "Game.uproject")

    def test_sequential_waits_on_launch(self, tmp_path) -> None:
        launched = []
        launcher = FakeLauncher(on_launch=lambda args: launched.append([p.wait_count for p in launcher.processes]))
        runner = CommandletRunner(EDITOR, [], launcher=launcher)
        task = _task(tmp_path, _modular("A", LocalizationStep.COMPILE), _modular("B", LocalizationStep.COMPILE))

        runner.launch_all([task], {LocalizationStep.COMPILE})

        # When B starts, A has already been waited on
        assert launched == [[0], [1, 0]]
        assert all(process.wait_count == 1 for process in launcher.processes)

    def test_parallel_does_not_wait(self, tmp_path) -> None:
        launcher = FakeLauncher()
        runner = CommandletRunner(EDITOR, [], parallel=True, launcher=launcher)
        task = _task(tmp_path, _modular("A", LocalizationStep.COMPILE), _modular("B", LocalizationStep.COMPILE))

        runner.launch_all([task], {LocalizationStep.COMPILE})

        assert [process.wait_count for process in launcher.processes] == [0, 0]

        summary = runner.wait_for_all([task])

        assert [process.wait_count for process in launcher.processes] == [1, 1]
        assert summary.succeeded == 2

    def test_password_is_masked_in_log(self, tmp_path, caplog) -> None:
        runner = CommandletRunner(EDITOR, ["-P4Passwd=topsecret"], launcher=FakeLauncher())
        task = _task(tmp_path, _modular("Game", LocalizationStep.COMPILE))

        with caplog.at_level(logging.INFO):
            runner.launch_all([task], {LocalizationStep.COMPILE})

        assert "topsecret" not in caplog.text
        assert "-P4Passwd=****" in caplog.text


class TestWaitForAll:
    """Tests for joining processes and reporting exit codes."""

    def test_exit_codes_are_reported(self, tmp_path, caplog) -> None:
        launcher = FakeLauncher(exit_codes={"Broken_Compile": 1})
        runner = CommandletRunner(EDITOR, [], parallel=True, launcher=launcher)
        task = _task(tmp_path, _modular("Broken", LocalizationStep.COMPILE), _modular("Fine", LocalizationStep.COMPILE))
        summary = RunSummary()

        with caplog.at_level(logging.INFO):
            runner.launch_all([task], {LocalizationStep.COMPILE}, summary=summary)
            runner.wait_for_all([task], summary)

        assert "The localization commandlet for 'Broken' exited with code 1 which likely indicates a crash." in caplog.text
        assert "The localization commandlet for 'Fine' exited with code 0." in caplog.text
        assert summary.failed == 1
        assert summary.succeeded == 1
        assert [process.exit_code for process in task.process_results] == [1, 0]

    def test_absent_slots_are_skipped(self, tmp_path) -> None:
        task = _task(tmp_path, _modular("Game", LocalizationStep.COMPILE))
        task.process_results = [None]

        summary = CommandletRunner(EDITOR, [], launcher=FakeLauncher()).wait_for_all([task])

        assert summary == RunSummary()


def test_upload_only_runs_export_config(tmp_path, caplog) -> None:
    write_modular_configs(tmp_path / "Game", "P1", ("Gather", "Import", "Export", "Compile"))
    requested = with_implicit_steps({LocalizationStep.UPLOAD})
    task = _task(tmp_path, ProjectResolver().resolve(tmp_path / "Game", "P1", requested))
    launcher = FakeLauncher()
    runner = CommandletRunner(EDITOR, [], launcher=launcher)

    with caplog.at_level(logging.INFO):
        runner.launch_all([task], requested)
        runner.wait_for_all([task])

    assert len(launcher.commands) == 1
    config_argument = [arg for arg in launcher.commands[0] if arg.startswith("-config=")]
    assert config_argument == ["-config=" + str(tmp_path / "Game/Config/Localization/P1_Export.ini")]
    assert "The localization commandlet for 'P1' exited with code 0." in caplog.text


@pytest.mark.parametrize("parallel", [False, True])
def test_results_match_project_order(tmp_path, parallel) -> None:
    launcher = FakeLauncher(exit_codes={"B_Compile": 7})
    runner = CommandletRunner(EDITOR, [], parallel=parallel, launcher=launcher)
    first = _task(tmp_path, _modular("A", LocalizationStep.COMPILE))
    second = _task(tmp_path, _modular("B", LocalizationStep.COMPILE), _modular("C", LocalizationStep.COMPILE))

    runner.launch_all([first, second], {LocalizationStep.COMPILE})
    runner.wait_for_all([first, second])

    assert [p.exit_code for p in first.process_results + second.process_results] == [0, 7, 0]


def test_gather_only_runs_gather_config(tmp_path) -> None:
    write_modular_configs(tmp_path / "Game", "P1", ("Gather", "Import", "Export", "Compile"))
    requested = with_implicit_steps({LocalizationStep.GATHER})
    task = _task(tmp_path, ProjectResolver().resolve(tmp_path / "Game", "P1", requested))
    launcher = FakeLauncher()

    CommandletRunner(EDITOR, [], launcher=launcher).launch_all([task], requested)

    (command,) = launcher.commands
    config_argument = [arg for arg in command if arg.startswith("-config=")]
    assert config_argument == ["-config=" + str(tmp_path / "Game/Config/Localization/P1_Gather.ini")]


def test_download_only_launches_nothing(tmp_path) -> None:
    write_modular_configs(tmp_path / "Game", "P1", ("Gather", "Import", "Export", "Compile"))
    requested = with_implicit_steps({LocalizationStep.DOWNLOAD})
    project = ProjectResolver().resolve(tmp_path / "Game", "P1", requested)
    task = _task(tmp_path, project)
    launcher = FakeLauncher()

    summary = CommandletRunner(EDITOR, [], launcher=launcher).launch_all([task], requested)

    # The import settings are still loaded for the download itself
    assert project.import_info is not None
    assert launcher.commands == []
    assert task.process_results == [None]
    assert summary.skipped == 1
