from datetime import datetime

import pytest
from rich.console import Console

from clispec import (
    CliSpecification,
    CliValidator,
    ConversionFailedError,
    ErrorKind,
    HelpSignal,
    InvalidSpecificationError,
    MissingRequiredChoiceError,
    MissingRequiredGroupError,
    ParseFailedError,
    TooManyChoicesError,
    ValidationFailedError,
    at_least_one_of,
    group,
    option,
    radio,
)


def test_required_group_with_optional_member():
    values = []
    spec = CliSpecification.create(
        group(
            option("foo", arg_name="n", required=True).set_to_int(values.append),
            option("bar"),
        ).set_required(True),
        program="tool",
    )

    cli = spec.parse(["-foo", "123"])

    assert values == [123]
    assert cli.has_option("foo")
    assert not cli.has_option("bar")


def test_radio_rejects_two_choices():
    spec = CliSpecification.create(
        radio(option("foo"), option("bar")).set_required(True), program="tool"
    )

    with pytest.raises(TooManyChoicesError) as excinfo:
        spec.parse(["-foo", "x", "-bar", "y"])

    assert excinfo.value.kind is ErrorKind.TOO_MANY_CHOICES
    assert str(excinfo.value) == (
        "Radio option must only select at most 1 choice but found [(foo), (bar)]"
    )


def test_required_radio_without_choice():
    spec = CliSpecification.create(
        radio(option("foo"), option("bar")).set_required(True), program="tool"
    )

    with pytest.raises(MissingRequiredChoiceError, match=r"\[ -foo \| -bar \]"):
        spec.parse([])


def test_group_with_nested_required_radio():
    spec = CliSpecification.create(
        group(
            option("foo", required=True),
            radio(option("bar"), option("baz")).set_required(True),
        ).set_required(True),
        program="tool",
    )

    cli = spec.parse(["-foo", "1", "-bar", "z"])

    assert cli.get_option_value("bar") == "z"


def test_at_least_one_of_accepts_several_choices():
    spec = CliSpecification.create(
        at_least_one_of(option("a"), option("b")).set_required(True), program="tool"
    )

    cli = spec.parse(["-a", "1", "-b", "2"])

    assert cli.as_dict() == {"a": "1", "b": "2"}


def test_missing_top_level_required_option_fails_at_parse():
    spec = CliSpecification.create(option("foo", required=True), program="tool")

    with pytest.raises(ParseFailedError, match="-foo"):
        spec.parse([])


def test_unknown_flag_fails_at_parse():
    spec = CliSpecification.create(option("foo"), program="tool")

    with pytest.raises(ParseFailedError) as excinfo:
        spec.parse(["-nope"])

    assert excinfo.value.kind is ErrorKind.PARSE_FAILED


def test_optional_group_with_required_members_accepts_partial_members():
    spec = CliSpecification.create(
        group(option("a", required=True), option("b", required=True)),
        option("c"),
        program="tool",
    )

    assert spec.parse([]).as_dict() == {}
    assert spec.parse(["-a", "1"]).as_dict() == {"a": "1"}


def test_required_group_inside_radio_reports_missing_members():
    spec = CliSpecification.create(
        radio(
            group(option("a", required=True), option("b", required=True)).set_required(
                True
            ),
            option("c"),
        ),
        program="tool",
    )

    with pytest.raises(MissingRequiredGroupError) as excinfo:
        spec.parse(["-a", "1"])

    assert str(excinfo.value) == "required group was not found require ( -b )"
    assert excinfo.value.missing == ["-b"]


def test_sub_group_counts_as_one_radio_choice():
    spec = CliSpecification.create(
        radio(group(option("a"), option("b")), option("c")).set_required(True),
        program="tool",
    )

    assert spec.parse(["-a", "1", "-b", "2"]).as_dict() == {"a": "1", "b": "2"}
    with pytest.raises(TooManyChoicesError, match=r"\[\(\(a\)\), \(c\)\]"):
        spec.parse(["-a", "1", "-c", "3"])


def test_nested_radio():
    spec = CliSpecification.create(
        radio(
            radio(option("a", is_flag=True), option("b", is_flag=True)),
            option("c", is_flag=True),
        ).set_required(True),
        program="tool",
    )

    assert spec.parse(["-b"]).has_option("b")
    with pytest.raises(TooManyChoicesError):
        spec.parse(["-a", "-b"])


def test_callbacks_fire_in_tree_order():
    fired = []
    spec = CliSpecification.create(
        option("first").setter(lambda value: fired.append(("first", value))),
        group(
            option("second", is_flag=True).setter(lambda value: fired.append(("second", value)))
        ),
        program="tool",
    )

    spec.parse(["-second", "-first", "x"])

    assert fired == [("first", "x"), ("second", None)]


def test_conversion_failure_fires_no_callback():
    fired = []
    spec = CliSpecification.create(
        option("n").set_to_int(fired.append),
        option("m").set_to_int(fired.append),
        program="tool",
    )

    with pytest.raises(ConversionFailedError, match="-m"):
        spec.parse(["-n", "1", "-m", "x"])

    assert fired == []


def test_setter_validator_rejection():
    spec = CliSpecification.create(
        option("n").set_to_int(lambda value: None, lambda value: value > 0),
        program="tool",
    )

    with pytest.raises(ValidationFailedError) as excinfo:
        spec.parse(["-n", "0"])

    assert str(excinfo.value) == "-n: setter did not pass validation test"


def test_consumer_exception_becomes_validation_failure():
    def consumer(value):
        raise ValueError("bad value")

    spec = CliSpecification.create(option("n").setter(consumer), program="tool")

    with pytest.raises(ValidationFailedError, match="bad value"):
        spec.parse(["-n", "1"])


def test_specification_validator_runs_before_callbacks():
    fired = []
    spec = CliSpecification.create(
        option("a").setter(fired.append),
        option("b").setter(fired.append),
        program="tool",
    ).add_validation(
        lambda cli: not (cli.has_option("a") and cli.has_option("b")),
        "-a and -b conflict",
    )

    with pytest.raises(ValidationFailedError, match="-a and -b conflict"):
        spec.parse(["-a", "1", "-b", "2"])
    assert fired == []

    spec.parse(["-a", "1"])
    assert fired == ["1"]


def test_structural_checks_run_before_node_validators():
    spec = CliSpecification.create(
        radio(option("a"), option("b"))
        .set_required(True)
        .add_validation(lambda cli: False, "never reached"),
        program="tool",
    )

    with pytest.raises(TooManyChoicesError):
        spec.parse(["-a", "1", "-b", "2"])


def test_parse_string_and_query():
    values = []
    spec = CliSpecification.create(
        option("foo").set_to_int(values.append),
        option("verbose", is_flag=True),
        program="tool",
    )

    spec.parse("-foo 1 -verbose")
    spec.parse_query("foo=2&verbose")
    cli = spec.parse_url("https://example.com/run?foo=3")

    assert values == [1, 2, 3]
    assert not cli.has_option("verbose")


def test_help_raises_signal():
    spec = CliSpecification.create(option("foo", required=True), program="tool")

    with pytest.raises(HelpSignal):
        spec.parse(["-h"])


def test_parse_is_repeatable():
    spec = CliSpecification.create(
        radio(option("a"), option("b")).set_required(True), program="tool"
    )

    assert spec.parse(["-a", "1"]).as_dict() == {"a": "1"}
    assert spec.parse(["-b", "2"]).as_dict() == {"b": "2"}


def test_usage():
    spec = CliSpecification.create(
        option("path", arg_name="file", required=True),
        radio(option("fast", is_flag=True), option("slow", is_flag=True)).set_required(
            True
        ),
        option("v", is_flag=True),
        program="sync",
    )

    assert spec.get_usage() == "sync -path <file> , [ -fast | -slow ] [ -v ]"


def test_usage_of_at_least_one_of():
    spec = CliSpecification.create(
        at_least_one_of(option("a", arg_name="x"), option("b", is_flag=True)).set_required(
            True
        ),
        program="tool",
    )

    assert spec.get_usage_fragment() == "{ -a <x> | -b }+"


def test_flag_descriptions():
    spec = CliSpecification.create(
        option("path", long_name="path", arg_name="file", description="Input file."),
        option("v", long_name="verbose", is_flag=True, description="Chatty."),
        program="tool",
    )

    assert spec.get_flag_descriptions() == [
        ("-path, --path <file>", "Input file."),
        ("-v, --verbose", "Chatty."),
    ]


def test_render_help():
    spec = CliSpecification.create(
        option("path", arg_name="file", required=True, description="Input file."),
        program="sync",
        help_text="Synchronize a file.",
        help_epilog="See the manual.",
        examples=[("-path a.txt", "Sync a.txt.")],
    )
    console = Console(record=True, width=100, color_system=None)

    spec.render_help(console)

    text = console.export_text()
    assert "usage: sync -path <file>" in text
    assert "Synchronize a file." in text
    assert "Input file." in text
    assert "-h, --help" in text
    assert "Sync a.txt." in text
    assert "See the manual." in text


def test_examples_are_deduplicated():
    spec = CliSpecification.create(option("a"), program="tool")

    spec.add_example("-a 1", "one").add_example("-a 1", "again")

    assert [example.description for example in spec.examples] == ["one"]
    with pytest.raises(InvalidSpecificationError):
        spec.add_examples([("-a 2",)])


def test_duplicate_flag_names_are_rejected():
    with pytest.raises(InvalidSpecificationError, match="-a"):
        CliSpecification.create(option("a"), group(option("a")), program="tool")


def test_reused_builder_is_rejected():
    shared = option("a")
    with pytest.raises(InvalidSpecificationError):
        CliSpecification.create(shared, radio(shared, option("b")), program="tool")


def test_specification_needs_an_option():
    with pytest.raises(InvalidSpecificationError):
        CliSpecification.create(program="tool")


def test_repr():
    spec = CliSpecification.create(option("a", required=True), option("b"), program="tool")

    assert repr(spec) == (
        "CliSpecification(program='tool', flags=2, required=1, validators=0)"
    )


def test_typed_setters_and_tree_walk():
    received = {}
    spec = CliSpecification.create(
        option("ratio").set_to_float(lambda value: received.update(ratio=value)),
        radio(
            option("when").set_to(datetime, lambda value: received.update(when=value)),
            option("dry", is_flag=True).set_to(bool, lambda value: received.update(dry=value)),
        ),
        program="tool",
    ).add_validator(
        CliValidator(lambda cli: not cli.has_option("dry") or "ratio" not in cli, "no")
    )

    spec.parse(["-ratio", "0.5", "-when", "2024-03-01"])

    assert received == {"ratio": 0.5, "when": datetime(2024, 3, 1)}
    assert [leaf.name for leaf in spec.root.iter_leaves()] == ["ratio", "when", "dry"]
    with pytest.raises(ValidationFailedError, match="no"):
        spec.parse(["-ratio", "1", "-dry"])


def test_flag_descriptions_follow_tree_order():
    spec = CliSpecification.create(
        radio(option("b", description="Bee."), group(option("a"), option("c"))),
        option("z", is_flag=True),
        program="tool",
    )

    assert [tokens for tokens, _ in spec.get_flag_descriptions()] == [
        "-b",
        "-a",
        "-c",
        "-z",
    ]
