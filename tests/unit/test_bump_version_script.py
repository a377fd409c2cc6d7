import importlib.util
from pathlib import Path

import pytest


def _load_bump_version_module():
    script_path = Path(__file__).resolve().parents[2] / "scripts" / "bump_version.py"
    spec = importlib.util.spec_from_file_location("bump_version", script_path)
    assert spec is not None
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module


def test_bump_version_updates_package_init(tmp_path: Path):
    bump = _load_bump_version_module()

    (tmp_path / "linecacher").mkdir(parents=True)
    package_init = tmp_path / "linecacher" / "__init__.py"
    package_init.write_text(
        '"""linecacher."""\n\n__version__ = "0.1.0"\n',
        encoding="utf-8",
    )

    updated = bump._run(version="1.2.3", repo_root=tmp_path)

    assert updated == package_init
    assert package_init.read_text(encoding="utf-8") == '"""linecacher."""\n\n__version__ = "1.2.3"\n'


def test_bump_version_requires_version_assignment(tmp_path: Path):
    bump = _load_bump_version_module()

    (tmp_path / "linecacher").mkdir(parents=True)
    (tmp_path / "linecacher" / "__init__.py").write_text("VERSION = 1\n", encoding="utf-8")

    with pytest.raises(RuntimeError):
        bump._run(version="1.2.3", repo_root=tmp_path)


def test_bump_version_rejects_invalid_version():
    bump = _load_bump_version_module()

    with pytest.raises(SystemExit):
        bump.main(["bump_version.py", "not-a-version"])


def test_bump_version_prints_usage(capsys):
    bump = _load_bump_version_module()

    assert bump.main(["bump_version.py"]) == 2
    assert "Usage" in capsys.readouterr().out
