"""End-to-end checks of the command-line entry point."""

import shutil

from conftest import FIXTURES, fixture_text, run_cli


def test_list_operations():
    result = run_cli("--list-operations")
    assert result.returncode == 0
    for name in ["when", "maybe_when", "when_or_null", "map_with_values", "getters"]:
        assert name in result.stdout
    assert "WhenMethod" in result.stdout


def test_default_output_is_the_extension():
    result = run_cli(str(FIXTURES / "status.dart"))
    assert result.returncode == 0
    assert "extension StatusX on Status {" in result.stdout
    assert "bool get isPendingReview => this == Status.pendingReview;" in result.stdout


def test_selected_operations():
    result = run_cli(str(FIXTURES / "status.dart"), "-g", "when", "-g", "is")
    assert result.returncode == 0
    assert "extension StatusWhenMethod on Status {" in result.stdout
    assert "extension StatusGetters on Status {" in result.stdout
    assert "StatusX" not in result.stdout


def test_enum_filter_and_suffix():
    result = run_cli(
        str(FIXTURES / "enhanced.dart"), "--enum", "Color", "--extension-suffix", "Ext"
    )
    assert result.returncode == 0
    assert "extension ColorExt on Color {" in result.stdout
    assert "OrderState" not in result.stdout


def test_list_enums():
    result = run_cli(str(FIXTURES / "enhanced.dart"), "--list-enums")
    assert result.returncode == 0
    assert "OrderState" in result.stdout
    assert "created, sent, shipped, delivered" in result.stdout
    assert "red, green, blue" in result.stdout


def test_line_selects_enum():
    result = run_cli(str(FIXTURES / "enhanced.dart"), "--line", "21", "-g", "getters")
    assert result.returncode == 0
    assert "extension ColorGetters on Color {" in result.stdout
    assert "OrderState" not in result.stdout


def test_line_without_enum():
    result = run_cli(str(FIXTURES / "enhanced.dart"), "--line", "1")
    assert result.returncode == 2


def test_no_enum_exit_code():
    result = run_cli(str(FIXTURES / "no_enum.dart"))
    assert result.returncode == 2
    assert "No enum declarations found" in result.stdout


def test_unknown_operation():
    result = run_cli(str(FIXTURES / "status.dart"), "-g", "whenever")
    assert result.returncode == 1
    assert "Unknown operation" in result.stdout


def test_missing_file(tmp_path):
    result = run_cli(str(tmp_path / "missing.dart"))
    assert result.returncode == 1
    assert "Failed to load input" in result.stdout


def test_missing_input():
    result = run_cli()
    assert result.returncode == 1


def test_stdin():
    result = run_cli("--stdin", "-g", "map", input_text="enum Mode { on, off }\n")
    assert result.returncode == 0
    assert "extension ModeMapMethod on Mode {" in result.stdout


def test_output_file(tmp_path):
    target = tmp_path / "generated.dart"
    result = run_cli(str(FIXTURES / "status.dart"), "-g", "when", "-o", str(target))
    assert result.returncode == 0
    assert target.read_text(encoding="utf-8").startswith(
        "extension StatusWhenMethod on Status {"
    )


def test_write_is_idempotent(tmp_path):
    path = tmp_path / "status.dart"
    shutil.copy(FIXTURES / "status.dart", path)

    first = run_cli(str(path), "--all", "--write")
    assert first.returncode == 0
    written = path.read_text(encoding="utf-8")
    assert written != fixture_text("status.dart")
    assert written.count("extension StatusWhenMethod on Status") == 1
    assert "void main()" in written

    second = run_cli(str(path), "--all", "--write")
    assert second.returncode == 0
    assert "already up to date" in second.stdout
    assert path.read_text(encoding="utf-8") == written


def test_write_from_stdin_prints_document():
    result = run_cli(
        "--stdin", "--write", "-g", "getters", input_text="enum Mode { on, off }\n"
    )
    assert result.returncode == 0
    assert result.stdout.startswith("enum Mode { on, off }\n\nextension ModeGetters")
