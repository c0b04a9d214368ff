"""
Tests for the typer CLI, run in-process with CliRunner.
"""

import json

import pytest
from typer.testing import CliRunner

from marc import __version__
from marc.cli.main import app
from marc.core import repository

runner = CliRunner()


@pytest.fixture
def marc(store_path):
    """Invoke marc against the temporary store."""
    def invoke(*args, input=None):
        return runner.invoke(app, ["--file", str(store_path), *args], input=input)
    return invoke


def raw_log(marc, *args):
    result = marc("log", "--raw", *args)
    assert result.exit_code == 0, result.output
    return result.output.splitlines()


def test_spec_example(marc):
    assert marc("add", "buy milk", "--tag", "errand").exit_code == 0
    assert marc("add", "write report").exit_code == 0

    assert raw_log(marc, "--tag", "errand") == ["1: [ ] buy milk #errand"]
    assert raw_log(marc) == ["1: [ ] buy milk #errand", "2: [ ] write report"]


def test_add_several_and_short_tag(marc):
    result = marc("add", "-t", "home", "dishes", "laundry")
    assert result.exit_code == 0
    assert "Added" in result.output

    assert raw_log(marc) == ["1: [ ] dishes #home", "2: [ ] laundry #home"]


def test_add_reads_piped_stdin(marc):
    result = marc("add", "--tag", "inbox", input="first\n\n  second  \n")
    assert result.exit_code == 0, result.output

    assert raw_log(marc) == ["1: [ ] first #inbox", "2: [ ] second #inbox"]


def test_add_nothing_fails(marc):
    result = marc("add", input="")
    assert result.exit_code == 1
    assert "Nothing to add" in result.output


def test_add_json(marc):
    result = marc("add", "buy milk", "--json")
    data = json.loads(result.output)
    assert data[0]["position"] == 1
    assert data[0]["content"] == "buy milk"


def test_log_done_filters(marc):
    marc("add", "a", "b", "c")
    assert marc("done", "2").exit_code == 0

    assert raw_log(marc, "--done") == ["2: [x] b"]
    assert raw_log(marc, "--no-done") == ["1: [ ] a", "3: [ ] c"]
    assert raw_log(marc, "-u") == ["1: [ ] a", "3: [ ] c"]


def test_log_table_output(marc):
    marc("add", "buy milk")
    result = marc("log")
    assert result.exit_code == 0
    assert "buy milk" in result.output
    assert "Total: 1 todo(s), 1 open" in result.output


def test_log_empty(marc):
    result = marc("log")
    assert result.exit_code == 0
    assert "No todos found" in result.output


def test_log_json(marc):
    marc("add", "a", "--tag", "t")
    data = json.loads(marc("log", "--json").output)
    assert data == [{
        "position": 1,
        "content": "a",
        "done": False,
        "tag": "t",
        "created_at": data[0]["created_at"],
        "completed_at": None,
    }]


def test_done_then_rm_done(marc):
    marc("add", "a", "b", "c")
    assert marc("done", "b").exit_code == 0

    result = marc("rm", "--done")
    assert result.exit_code == 0
    assert "Removed: b" in result.output
    assert raw_log(marc) == ["1: [ ] a", "2: [ ] c"]


def test_rm_done_noop(marc, store_path):
    marc("add", "a")
    before = store_path.read_bytes()

    result = marc("rm", "--done")
    assert result.exit_code == 0
    assert "No done todos" in result.output
    assert store_path.read_bytes() == before


def test_rm_selectors(marc):
    marc("add", "a", "b", "c")
    assert marc("rm", "1,3").exit_code == 0
    assert raw_log(marc) == ["1: [ ] b"]


@pytest.mark.parametrize("args", [["rm"], ["rm", "1", "--done"]])
def test_rm_argument_errors(marc, args):
    marc("add", "a")
    result = marc(*args)
    assert result.exit_code == 1
    assert "Error" in result.output


def test_unknown_selector_fails(marc):
    marc("add", "a")
    result = marc("done", "7")
    assert result.exit_code == 1
    assert "Todo '7' not found" in result.output


def test_ambiguous_selector_fails(marc):
    marc("add", "buy milk", "buy eggs")
    result = marc("rm", "buy")
    assert result.exit_code == 1
    assert "matches several todos" in result.output
    assert len(raw_log(marc)) == 2


def test_undone(marc):
    marc("add", "a")
    marc("done", "1")
    assert marc("undone", "1").exit_code == 0
    assert raw_log(marc) == ["1: [ ] a"]


def test_show(marc):
    marc("add", "buy milk", "-t", "errand")
    result = marc("show", "milk")
    assert result.exit_code == 0
    assert "buy milk" in result.output
    assert "errand" in result.output

    data = json.loads(marc("show", "1", "--json").output)
    assert data["content"] == "buy milk"


def test_edit_one_shot(marc):
    marc("add", "buy milk", "-t", "errand")

    assert marc("edit", "1", "--text", "buy oat milk").exit_code == 0
    assert raw_log(marc) == ["1: [ ] buy oat milk #errand"]

    assert marc("edit", "oat", "--untag").exit_code == 0
    assert raw_log(marc) == ["1: [ ] buy oat milk"]


def test_edit_options_need_selector(marc):
    result = marc("edit", "--text", "x")
    assert result.exit_code == 1


def test_edit_interactive_drop(marc):
    marc("add", "a", "b")
    result = marc("edit", input="drop 1\nexit\n")
    assert result.exit_code == 0, result.output
    assert "Dropped: a" in result.output
    assert raw_log(marc) == ["1: [ ] b"]


def test_tag_create_list_prune(marc, store_path):
    marc("add", "a", "-t", "work")
    assert marc("tag", "--create", "later").exit_code == 0

    lines = marc("tag", "--raw").output.splitlines()
    assert lines == ["later 0/0", "work 1/1"]

    result = marc("tag", "--prune")
    assert "Pruned tag: later" in result.output
    assert repository.load(store_path).tags == []


def test_tag_options_are_exclusive(marc):
    result = marc("tag", "--create", "x", "--prune")
    assert result.exit_code == 1


def test_tag_empty(marc):
    result = marc("tag")
    assert result.exit_code == 0
    assert "No tags yet" in result.output


def test_corrupt_store_reports_error(marc, store_path):
    store_path.parent.mkdir(parents=True)
    store_path.write_text("{broken", encoding="utf-8")

    result = marc("log")
    assert result.exit_code == 1
    assert "invalid JSON" in result.output


def test_file_from_environment(monkeypatch, tmp_path):
    path = tmp_path / "env.json"
    monkeypatch.setenv("MARC_FILE", str(path))

    assert runner.invoke(app, ["add", "from env"]).exit_code == 0
    assert repository.load(path).todos[0].content == "from env"


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"marc v{__version__}" in result.output

    result = runner.invoke(app, ["version"])
    assert f"marc v{__version__}" in result.output


def test_short_help_option():
    result = runner.invoke(app, ["log", "-h"])
    assert result.exit_code == 0
    assert "--tag" in result.output


def test_no_command_prints_overview(marc):
    result = marc()
    assert result.exit_code == 0
    assert "Commands:" in result.output


def test_unknown_command_is_usage_error(marc):
    result = marc("frobnicate")
    assert result.exit_code == 2


def test_short_version_flag():
    result = runner.invoke(app, ["-V"])
    assert result.exit_code == 0
    assert f"marc v{__version__}" in result.output


def test_short_verbose_flag_is_not_version(marc):
    result = marc("-v", "log", "--raw")
    assert result.exit_code == 0
    assert "marc v" not in result.output
