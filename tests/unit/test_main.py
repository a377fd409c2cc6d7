from __future__ import annotations

import runpy
import sys

import pytest

from linecacher import __version__


def test_main_forwards_to_cli_run(monkeypatch):
    import linecacher.__main__ as linecacher_main

    calls = []
    monkeypatch.setattr(linecacher_main, "run", lambda argv=None: calls.append(argv))

    linecacher_main.main()

    assert calls == [None]


def test_run_accepts_explicit_argv(capsys):
    from linecacher.cli import run

    with pytest.raises(SystemExit) as exc:
        run(["--version"])

    assert exc.value.code == 0
    assert f"linecacher v{__version__}" in capsys.readouterr().out


def test_python_dash_m_reads_sys_argv(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["linecacher", "--version"])
    sys.modules.pop("linecacher.__main__", None)

    with pytest.raises(SystemExit) as exc:
        runpy.run_module("linecacher.__main__", run_name="__main__")

    assert exc.value.code == 0
    assert f"linecacher v{__version__}" in capsys.readouterr().out
