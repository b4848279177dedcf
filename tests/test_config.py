import sys
from pathlib import Path
from types import ModuleType

import pytest
from pydantic import ValidationError

from clispec.config import SpecificationConfig, convert_option, loader
from clispec.exceptions import (
    MissingRequiredChoiceError,
    TooManyChoicesError,
    ValidationFailedError,
)

YAML_CONFIG = """
program: sync
description: Synchronize a file.
footer: Bye.
examples:
  - usage: -path a.txt -fast
    description: Fast sync.
options:
  - option: path
    arg_name: file
    required: true
    type: path
    setter: clispec_test_settings.record
  - option: count
    type: int
    range: [1, 5]
    setter: clispec_test_settings:record
  - option: mode
    choices: [copy, move]
  - radio:
      required: true
      options:
        - option: fast
          flag: true
        - option: slow
          flag: true
"""

TOML_CONFIG = """
program = "tool"

[[options]]
option = "name"
required = true

[[options]]
[options.at_least_one_of]
required = true
options = [
  { option = "a", flag = true },
  { option = "b", flag = true },
]
"""


@pytest.fixture
def recorded(monkeypatch):
    values = []
    module = ModuleType("clispec_test_settings")
    module.record = values.append
    monkeypatch.setitem(sys.modules, "clispec_test_settings", module)
    return values


def write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="UTF-8")
    return path


def test_yaml_loader(tmp_path, recorded):
    spec = loader(write(tmp_path, "spec.yaml", YAML_CONFIG))

    cli = spec.parse(["-path", "a.txt", "-count", "3", "-fast"])

    assert recorded == [Path("a.txt"), 3]
    assert cli.has_option("fast")
    assert spec.program == "sync"
    assert spec.help_text == "Synchronize a file."
    assert spec.help_epilog == "Bye."
    assert [example.usage for example in spec.examples] == ["-path a.txt -fast"]


def test_yaml_loader_enforces_rules(tmp_path, recorded):
    spec = loader(write(tmp_path, "spec.yml", YAML_CONFIG))

    with pytest.raises(ValidationFailedError, match="between 1 and 5"):
        spec.parse(["-path", "a", "-count", "9", "-slow"])
    with pytest.raises(ValidationFailedError, match="Choices"):
        spec.parse(["-path", "a", "-mode", "delete", "-slow"])
    with pytest.raises(TooManyChoicesError):
        spec.parse(["-path", "a", "-fast", "-slow"])
    with pytest.raises(MissingRequiredChoiceError):
        spec.parse(["-path", "a"])
    assert recorded == []


def test_toml_loader(tmp_path):
    spec = loader(write(tmp_path, "spec.toml", TOML_CONFIG))

    cli = spec.parse(["-name", "x", "-a", "-b"])

    assert cli.as_dict() == {"name": "x", "a": None, "b": None}
    assert spec.get_usage() == "tool -name , { -a | -b }+"


def test_loader_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader(tmp_path / "missing.yaml")


def test_loader_unsupported_format(tmp_path):
    with pytest.raises(ValueError, match="Unsupported config format"):
        loader(write(tmp_path, "spec.json", "{}"))


def test_loader_rejects_non_mapping(tmp_path):
    with pytest.raises(ValueError, match="must contain a dictionary"):
        loader(write(tmp_path, "spec.yaml", "- just\n- a list\n"))


def test_loader_rejects_empty_options(tmp_path):
    with pytest.raises(ValidationError):
        loader(write(tmp_path, "spec.yaml", "program: x\noptions: []\n"))


def test_convert_option_rejects_ambiguous_entry():
    with pytest.raises(ValueError, match="exactly one of"):
        convert_option({"radio": {"options": []}, "group": {"options": []}})


def test_convert_option_rejects_bad_name():
    with pytest.raises(ValidationError):
        convert_option({"option": "-dash"})


def test_convert_option_rejects_inverted_range():
    with pytest.raises(ValidationError):
        convert_option({"option": "n", "range": [5, 1]})


def test_unknown_setter_path():
    with pytest.raises(ImportError):
        convert_option({"option": "n", "setter": "clispec.cli.no_such_setter"})


def test_specification_config_model():
    config = SpecificationConfig(
        program="tool",
        options=[{"group": {"required": True, "options": [{"option": "a", "required": True}]}}],
    )

    spec = config.to_specification()

    assert spec.get_usage() == "tool (-a )"


def test_convert_option_rejects_non_mapping_composite():
    with pytest.raises(ValueError, match="'radio' entry must be a dictionary"):
        convert_option({"radio": ["a", "b"]})
