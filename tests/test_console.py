from workflowgen.errors import InvalidKeyError
from workflowgen.ui.console import Console, get_console, set_console


def test_print_error_renders_details_as_key_value_lines(capsys):
    Console().print_error(
        "Invalid workflow model",
        "'MY KEY' is not a valid environment variable name",
        details={"mapping": "with"},
        suggestion="Rename the key.",
    )

    err = capsys.readouterr().err
    assert "ERROR: Invalid workflow model\n" in err
    assert "  mapping: with\n" in err
    assert err.endswith("\nRename the key.\n")


def test_print_exception_shows_error_kind(capsys):
    Console().print_exception(InvalidKeyError("MY KEY", mapping="env"))

    err = capsys.readouterr().err
    assert err == "Error [invalid_key]: 'MY KEY' is not a valid environment variable name\n"


def test_print_exception_plain_error(capsys):
    Console().print_exception(ValueError("boom"))
    assert capsys.readouterr().err == "Error: boom\n"


def test_print_debug_only_in_debug_mode(capsys):
    Console().print_debug("hidden")
    Console(debug=True).print_debug("shown")

    assert capsys.readouterr().err == "[workflowgen] shown\n"


def test_set_console_returns_previous():
    mine = Console(debug=True)
    previous = set_console(mine)
    try:
        assert get_console() is mine
    finally:
        set_console(previous)
    assert get_console() is previous
