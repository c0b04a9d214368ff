"""
Tests for the interactive editor: session commands and the loop.
"""

import io

import pytest
from rich.console import Console

from marc.core import repository, service
from marc.core.models import Store, TodoRecord
from marc.editor import run_editor, EditorSession
from marc.editor.parser import parse_command


def make_console():
    return Console(file=io.StringIO(), width=120, color_system=None)


def output(console):
    return console.file.getvalue()


def scripted(*lines):
    """Line reader that replays lines, then behaves like Ctrl+D."""
    remaining = list(lines)

    def read_line(prompt):
        if not remaining:
            raise EOFError
        line = remaining.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line

    return read_line


@pytest.fixture
def session():
    store = Store(todos=[
        TodoRecord("buy milk", tag="errand"),
        TodoRecord("write report"),
        TodoRecord("call mom", tag="home"),
    ])
    return EditorSession(store, make_console())


def run(session, line):
    return session.execute(parse_command(line))


# --- parser ---


def test_parse_command_quotes_and_case():
    result = parse_command('TEXT 2 "buy oat milk"')
    assert result.command == "text"
    assert result.args == ["2", "buy oat milk"]
    assert result.rest(1) == "buy oat milk"


def test_parse_command_unclosed_quote_and_empty():
    assert parse_command('text 1 "oops').args == ["1", '"oops']
    assert parse_command("   ").command == ""


# --- session ---


def test_drop(session):
    assert run(session, "drop 2") is True
    assert [t.content for t in session.store.todos] == ["buy milk", "call mom"]
    assert session.dirty
    assert "Dropped: write report" in output(session.console)


def test_drop_by_unquoted_text(session):
    run(session, "rm call mom")
    assert [t.content for t in session.store.todos] == ["buy milk", "write report"]


def test_done_and_undone(session):
    run(session, "done milk")
    assert session.store.todos[0].done
    run(session, "undone 1")
    assert not session.store.todos[0].done


def test_text_tag_untag(session):
    run(session, "text 2 write the report")
    run(session, "tag 2 work")
    run(session, "untag 1")

    todos = session.store.todos
    assert todos[1].content == "write the report"
    assert todos[1].tag == "work"
    assert todos[0].tag is None


def test_errors_keep_session_alive(session):
    assert run(session, "drop 9") is True
    assert run(session, "drop") is True
    assert run(session, "text 1") is True
    assert run(session, "bogus") is True

    text = output(session.console)
    assert "Todo '9' not found" in text
    assert "Usage: drop" in text
    assert "Unknown command" in text
    assert not session.dirty
    assert len(session.store.todos) == 3


def test_ls_filters_by_tag(session):
    run(session, "ls home")
    text = output(session.console)
    assert "call mom" in text
    assert "buy milk" not in text


def test_prompt_marks_unsaved_changes(session):
    assert session.get_prompt() == "marc> "
    run(session, "done 1")
    assert session.get_prompt() == "marc*> "


def test_exit_and_abort(session):
    assert run(session, "quit") is False
    assert not session.discard
    assert run(session, "abort") is False
    assert session.discard


# --- loop ---


def test_run_editor_saves_on_exit(config):
    service.add_todos(config, ["a", "b", "c"])

    session = run_editor(config, make_console(), scripted("drop 1", "done b", "exit"))

    assert session.dirty
    todos = repository.load(config.store_path).todos
    assert [(t.content, t.done) for t in todos] == [("b", True), ("c", False)]


def test_run_editor_saves_on_eof(config):
    service.add_todos(config, ["a"])
    run_editor(config, make_console(), scripted("tag 1 work"))
    assert repository.load(config.store_path).todos[0].tag == "work"


def test_run_editor_abort_discards(config):
    service.add_todos(config, ["a"])
    before = config.store_path.read_bytes()

    console = make_console()
    run_editor(config, console, scripted("drop 1", "abort"))

    assert config.store_path.read_bytes() == before
    assert "Changes discarded" in output(console)


def test_run_editor_without_changes_does_not_write(config):
    console = make_console()
    run_editor(config, console, scripted("ls", "help", "exit"))

    assert not config.store_path.exists()
    assert "No changes" in output(console)


def test_run_editor_ctrl_c_continues(config):
    service.add_todos(config, ["a", "b"])
    console = make_console()

    run_editor(config, console, scripted(KeyboardInterrupt(), "drop 1", "exit"))

    assert "^C" in output(console)
    assert [t.content for t in repository.load(config.store_path).todos] == ["b"]


def test_unicode_digit_selector_keeps_session_alive(config):
    service.add_todos(config, ["a", "b"])
    console = make_console()

    run_editor(config, console, scripted("drop 1", "done ²", "exit"))

    assert "Todo '²' not found" in output(console)
    assert [t.content for t in repository.load(config.store_path).todos] == ["b"]


def test_several_positions_separated_by_spaces(session):
    run(session, "done 1 3")
    assert [t.done for t in session.store.todos] == [True, False, True]

    run(session, "drop 1 2,3")
    assert session.store.todos == []


def test_text_with_numbers_is_one_selector(session):
    session.store.todos.append(TodoRecord("call 3 people"))
    run(session, "drop call 3 people")
    assert [t.content for t in session.store.todos] == ["buy milk", "write report", "call mom"]
