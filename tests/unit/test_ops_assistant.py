"""Unit tests for functions defined in src/ops_assistant.py."""

import os
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from configuration import AppConfig
from ops_assistant import create_argument_parser, main


def test_create_argument_parser() -> None:
    """Test for create_argument_parser function."""
    args = create_argument_parser().parse_args([])
    assert args.config_file == "ops-assistant.yaml"
    assert args.verbose is False
    assert args.dump_configuration is False

    args = create_argument_parser().parse_args(["-v", "-d", "-c", "custom.yaml"])
    assert args.config_file == "custom.yaml"
    assert args.verbose is True
    assert args.dump_configuration is True


def _write_config(path: Path) -> Path:
    config_file = path / "ops-assistant.yaml"
    config_file.write_text("name: foo\ncache:\n  type: noop\n", encoding="utf-8")
    return config_file


def test_main_starts_service(
    mocker: MockerFixture, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The service is started with the loaded configuration."""
    monkeypatch.delenv("OPS_ASSISTANT_CONFIG_PATH", raising=False)
    config_file = _write_config(tmp_path)
    mocker.patch("sys.argv", ["ops-assistant", "-c", str(config_file)])
    start = mocker.patch("ops_assistant.start_uvicorn")

    main()

    start.assert_called_once_with(AppConfig().service_configuration, verbose=False)
    assert os.environ["OPS_ASSISTANT_CONFIG_PATH"] == str(config_file)


def test_main_dumps_configuration(
    mocker: MockerFixture, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """With -d the configuration is dumped and the service is not started."""
    config_file = _write_config(tmp_path)
    monkeypatch.chdir(tmp_path)
    mocker.patch("sys.argv", ["ops-assistant", "-d", "-c", str(config_file)])
    start = mocker.patch("ops_assistant.start_uvicorn")

    main()

    start.assert_not_called()
    assert '"name": "foo"' in (tmp_path / "configuration.json").read_text(
        encoding="utf-8"
    )
