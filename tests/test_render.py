import subprocess
from pathlib import Path

import pytest

from mdexec.core import Command, Commands, DelayBetweenCommands, Interactive, parse_markdown, render_script
from mdexec.core.render import PREAMBLE


def _commands(*texts: str, mode=None) -> Commands:
    commands = tuple(Command.of(text) for text in texts)
    if mode is None:
        return Commands(commands=commands)
    return Commands(commands=commands, mode=mode)


def _run(script: str, cwd: Path, stdin: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["/bin/sh", "-c", script],
        cwd=cwd,
        input=stdin,
        capture_output=True,
        text=True,
        check=False,
    )


def test_empty_commands_render_preamble_only() -> None:
    assert render_script(Commands()) == "#!/bin/sh\n\nset -e\n\n"


def test_default_mode_renders_commands_verbatim() -> None:
    assert render_script(_commands("echo A", "echo B")) == PREAMBLE + "echo A\necho B\n"


def test_default_mode_keeps_multi_line_shape() -> None:
    commands = Commands(
        commands=(
            Command.of('echo "Before"'),
            Command.of("java", "-jar target/app-1.jar"),
            Command.of('echo "After"'),
        )
    )
    assert render_script(commands) == PREAMBLE + 'echo "Before"\njava \\\n -jar target/app-1.jar\necho "After"\n'


def test_delay_between_commands() -> None:
    script = render_script(_commands("echo A", "echo B", "echo C", mode=DelayBetweenCommands(100)))
    assert script == PREAMBLE + "echo A\nsleep 100\necho B\nsleep 100\necho C\n"
    assert script.count("sleep 100") == 2


def test_delay_with_single_command_never_sleeps() -> None:
    script = render_script(_commands("echo A", mode=DelayBetweenCommands(250)))
    assert "sleep" not in script


def test_negative_delay_is_rejected() -> None:
    with pytest.raises(ValueError):
        DelayBetweenCommands(-1)


def test_interactive_defines_and_calls_one_function_per_command() -> None:
    script = render_script(_commands("echo A", "echo B", mode=Interactive()))
    assert script.startswith(PREAMBLE + "EXECUTE_ALL=0\n")
    for name in ("command_1", "command_2"):
        assert f"{name}() {{\n" in script
        assert f"}}\n{name}\n" in script
    assert "echo A\n}\ncommand_1\n" in script


def test_interactive_quotes_command_text() -> None:
    script = render_script(_commands("echo 'hi'", mode=Interactive()))
    assert "printf '%s\\n' '$ echo '\"'\"'hi'\"'\"''" in script


def test_interactive_skip_and_continue(tmp_path: Path) -> None:
    script = render_script(_commands("touch first", "touch second", mode=Interactive()))
    result = _run(script, tmp_path, stdin="s\n\n")
    assert result.returncode == 0
    assert not (tmp_path / "first").exists()
    assert (tmp_path / "second").exists()
    assert "$ touch first" in result.stdout


def test_interactive_all_stops_asking(tmp_path: Path) -> None:
    script = render_script(_commands("touch one", "touch two", "touch three", mode=Interactive()))
    result = _run(script, tmp_path, stdin="a\n")
    assert result.returncode == 0
    assert all((tmp_path / name).exists() for name in ("one", "two", "three"))
    assert result.stdout.splitlines().count("---") == 1


def test_interactive_quit_exits_successfully(tmp_path: Path) -> None:
    script = render_script(_commands("touch one", "touch two", mode=Interactive()))
    result = _run(script, tmp_path, stdin="q\n")
    assert result.returncode == 0
    assert not (tmp_path / "one").exists()
    assert not (tmp_path / "two").exists()


def test_interactive_end_of_input_continues(tmp_path: Path) -> None:
    script = render_script(_commands("touch one", "touch two", mode=Interactive()))
    result = _run(script, tmp_path)
    assert result.returncode == 0
    assert (tmp_path / "one").exists()
    assert (tmp_path / "two").exists()


def test_interactive_heredoc_runs(tmp_path: Path) -> None:
    content = "```shell\n$ cat <<EOF > out.txt\nhello\nEOF\n```\n"
    commands = parse_markdown(content)
    script = render_script(Commands(commands=commands.commands, mode=Interactive()))
    result = _run(script, tmp_path, stdin="y\n")
    assert result.returncode == 0
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "hello\n"


def test_default_script_stops_on_first_failure(tmp_path: Path) -> None:
    result = _run(render_script(_commands("false", "touch after")), tmp_path)
    assert result.returncode != 0
    assert not (tmp_path / "after").exists()
