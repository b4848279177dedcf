import logging

import pytest

from clispec.__main__ import get_root_parser, main

CONFIG = """
program: sync
description: Synchronize a file.
options:
  - option: path
    arg_name: file
    required: true
  - radio:
      options:
        - option: fast
          flag: true
        - option: slow
          flag: true
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "sync.yaml"
    path.write_text(CONFIG, encoding="UTF-8")
    return path


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_root_parser():
    args = get_root_parser().parse_args(["--log-mode", "json", "-v", "sync.yaml"])

    assert str(args.config) == "sync.yaml"
    assert args.log_mode == "json"
    assert args.verbose is True
    assert args.args == []


def test_main_accepts_valid_command_line(config_path, capsys):
    code = main(["--log-mode", "cli", str(config_path), "--", "-path", "a.txt", "-fast"])

    captured = capsys.readouterr()
    assert code == 0
    assert "a.txt" in captured.out
    assert "-fast" in captured.out


def test_main_rejects_invalid_command_line(config_path, capsys):
    code = main(["--log-mode", "cli", str(config_path), "--", "-path", "a", "-fast", "-slow"])

    captured = capsys.readouterr()
    assert code == 1
    assert "too_many_choices" in captured.out
    assert "usage:" in captured.out


def test_main_renders_help(config_path, capsys):
    code = main(["--log-mode", "cli", str(config_path), "--", "-h"])

    captured = capsys.readouterr()
    assert code == 0
    assert "Synchronize a file." in captured.out


def test_main_missing_config(tmp_path, capsys):
    code = main(["--log-mode", "cli", str(tmp_path / "missing.yaml")])

    assert code == 2
    assert "Could not load" in capsys.readouterr().out


def test_main_invalid_log_mode(config_path):
    with pytest.raises(SystemExit):
        main(["--log-mode", "xml", str(config_path)])


@pytest.mark.parametrize(
    "content, message",
    [
        ("options:\n  - radio:\n      options:\n        - option: a\n", "at least 2 choices"),
        ("options:\n  - option: a\n  - option: a\n", "registered more than once"),
        ("options:\n  - group: [a, b]\n", "must be a dictionary"),
    ],
)
def test_main_rejects_invalid_specification(tmp_path, capsys, content, message):
    path = tmp_path / "broken.yaml"
    path.write_text(content, encoding="UTF-8")

    code = main(["--log-mode", "cli", str(path)])

    output = capsys.readouterr().out
    assert code == 2
    assert "Could not load" in output
    assert message in " ".join(output.split())
