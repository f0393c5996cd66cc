from pathlib import Path

from rich.console import Console

from srtf_scheduler.cli import build_parser, config_from_args, main


def test_parser_builds_config():
    args = build_parser().parse_args(["run", "-w", "x.json", "-vv", "--tick-period", "0.1"])
    config = config_from_args(args)
    assert config.verbose == 2
    assert config.tick_period == 0.1
    assert config.tick_increment == 0.5


def test_run_prints_statistics(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text('[{"name":"P1","arrival_time":0,"burst_time":2},'
                 '{"name":"P2","arrival_time":0,"burst_time":1}]')

    code = main(["run", "-w", str(p), "--tick-period", "0.002", "--tick-increment", "1"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Avg waiting" in out
    assert "P1" in out


def _scripted_input(monkeypatch, lines):
    pending = list(lines)

    def fake_input(self, prompt="", **kwargs):
        if not pending:
            raise EOFError
        return pending.pop(0)

    monkeypatch.setattr(Console, "input", fake_input)


def test_interactive_console_commands(monkeypatch, capsys):
    _scripted_input(
        monkeypatch,
        ["add P1 1", "processes", "close", "add X abc", "add Y nan", "stat", "bogus", "quit"],
    )

    code = main(["interactive"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Process P1 remains 1s" in out
    assert "Some processes are still executing" in out
    assert "Invalid burst time: 'abc'" in out
    assert "positive finite number" in out
    assert "No process has executed yet" in out
    assert "Invalid command" in out


def test_interactive_close_when_idle_exits(monkeypatch, capsys):
    _scripted_input(monkeypatch, ["processes", "close"])

    code = main(["interactive"])

    out = capsys.readouterr().out
    assert code == 0
    assert "No process waiting." in out


def test_interactive_ends_on_eof(monkeypatch):
    _scripted_input(monkeypatch, [])
    assert main(["interactive"]) == 0
