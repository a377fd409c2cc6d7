from __future__ import annotations

from linecacher.services import tracelines_service as tracelines

SAMPLE = """\
x = 1

def f():
    return 2

class C:
    attr = 3
"""


def test_lnums_for_str_collects_nested_code():
    numbers = tracelines.lnums_for_str(SAMPLE)
    assert numbers is not None
    assert {1, 3, 4, 6, 7} <= set(numbers)
    assert 2 not in numbers
    assert 5 not in numbers
    assert list(numbers) == sorted(numbers)


def test_lnums_for_str_syntax_error_is_unavailable():
    assert tracelines.lnums_for_str("def (:\n") is None
    assert tracelines.lnums_for_str("x = 1\0\n") is None


def test_lnums_for_str_empty_source():
    assert tracelines.lnums_for_str("") == ()


def test_lnums_for_str_array_joins_lines():
    assert tracelines.lnums_for_str_array(["a = 1", "b = 2"]) == (1, 2)
    assert tracelines.lnums_for_str_array(["a = 1\n", "b = 2\n"], newline="") == (1, 2)
    assert tracelines.lnums_for_str_array([]) == ()


def test_lnums_for_file(tmp_path):
    path = tmp_path / "mod.py"
    path.write_text(SAMPLE, encoding="utf-8")

    assert tracelines.lnums_for_file(path) == tracelines.lnums_for_str(SAMPLE)
    assert tracelines.lnums_for_file(tmp_path / "missing.py") is None
