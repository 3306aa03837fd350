import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "export_file.py"


@pytest.fixture(scope="module")
def export_script():
    spec = importlib.util.spec_from_file_location("export_file", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_exports_file_with_stem_title(export_script, tmp_path: Path, sample_html, capsys):
    source = tmp_path / "notes.html"
    source.write_text(sample_html, encoding="utf-8")
    out_dir = tmp_path / "out"

    assert export_script.main([str(source), "--format", "md", "--output-dir", str(out_dir)]) == 0

    written = out_dir / "notes.md"
    assert written.read_text(encoding="utf-8").startswith("# notes\n")
    assert "Words: 3" in capsys.readouterr().out


def test_missing_input(export_script, tmp_path: Path):
    assert export_script.main([str(tmp_path / "missing.html")]) == 1
