"""Tests for the command line interface."""

import json
import os
import tempfile
from pathlib import Path

import pytest

from cli import main, parse_args, EXIT_ERROR, EXIT_FOUND, EXIT_NOT_FOUND


FILES = {
    "/src/App.jsx": "import List from './components/List'",
    "/src/components/List.jsx": "import { env } from '../config'\nimport Gone from './Gone'",
    "/src/config.js": "export const env = process.env.NODE_ENV",
}


@pytest.fixture
def project():
    """A project directory on disk mirroring FILES."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        for name, text in FILES.items():
            path = root / name.lstrip("/")
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        yield root


@pytest.fixture
def snapshot():
    """A JSON snapshot of FILES."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "project.json"
        path.write_text(json.dumps({"files": FILES}), encoding="utf-8")
        yield path


class TestArguments:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default values."""
        parsed = parse_args(["--start", "/App.js", "--pattern", "x"])

        assert parsed.source == "."
        assert parsed.max_depth == 5
        assert parsed.format == "ascii"
        assert parsed.map is False

    @pytest.mark.parametrize("args", [
        ["--start", "/App.js"],
        ["--pattern", "x"],
        ["--start", "/App.js", "--pattern", "x", "--error", "boom"],
        ["--start", "/App.js", "--pattern", "x", "--max-depth", "-1"],
        ["--start", "/App.js", "--pattern", "x", "-v", "-q"],
    ])
    def test_invalid_combinations(self, args):
        """Test rejected argument combinations."""
        with pytest.raises(SystemExit):
            parse_args(args)


class TestScanCommand:
    """Tests for searching from the command line."""

    def test_found_ascii(self, project, capsys):
        """Test a match reported as text."""
        code = main([str(project), "--start", "/src/App.jsx", "--pattern", "process.", "-q"])

        out = capsys.readouterr().out
        assert code == EXIT_FOUND
        assert 'FOUND "process." in /src/config.js' in out

    def test_found_json(self, snapshot, capsys):
        """Test a match reported as JSON from a snapshot."""
        code = main([str(snapshot), "-s", "/src/App.jsx", "-p", "process.", "-f", "json", "-q"])

        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_FOUND
        assert data["filename"] == "/src/config.js"
        assert data["importPath"] == ["/src/App.jsx", "/src/components/List.jsx", "/src/config.js"]

    def test_start_without_leading_slash(self, project, capsys):
        """Test that a start file can be given relative to the project."""
        code = main([str(project), "--start", "src/App.jsx", "--pattern", "process.", "-f", "json", "-q"])

        assert code == EXIT_FOUND
        assert json.loads(capsys.readouterr().out)["importPath"][0] == "/src/App.jsx"

    def test_not_found(self, project, capsys):
        """Test the exit code when nothing matches."""
        code = main([str(project), "--start", "/src/App.jsx", "--pattern", "__dirname", "-q"])

        assert code == EXIT_NOT_FOUND
        assert 'NOT FOUND "__dirname"' in capsys.readouterr().out

    def test_depth_limit(self, project, capsys):
        """Test --max-depth."""
        code = main([str(project), "--start", "/src/App.jsx", "--pattern", "process.", "--max-depth", "1", "-q"])

        assert code == EXIT_NOT_FOUND

    def test_unknown_start(self, project, capsys):
        """Test an unknown start file."""
        code = main([str(project), "--start", "/Nope.js", "--pattern", "process.", "-q"])

        assert code == EXIT_ERROR
        assert "Start file not found: /Nope.js" in capsys.readouterr().err

    def test_error_message(self, project, capsys):
        """Test deriving start file and pattern from an error message."""
        code = main([
            str(project),
            "--error", "ReferenceError: process is not defined at List.jsx:1",
            "-f", "json", "-q",
        ])

        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_FOUND
        assert data["importPath"] == ["/src/components/List.jsx", "/src/config.js"]

    def test_mermaid_highlights_path(self, project, capsys):
        """Test Mermaid output for a scan."""
        code = main([str(project), "--start", "/src/App.jsx", "--pattern", "process.", "-f", "mermaid", "-q"])

        out = capsys.readouterr().out
        assert code == EXIT_FOUND
        assert out.startswith("flowchart LR")
        assert "src_components_List_jsx ==> src_config_js" in out

    def test_output_file(self, project, capsys):
        """Test writing output to a file."""
        target = project / "result.json"

        code = main([str(project), "--start", "/src/App.jsx", "--pattern", "process.", "-f", "json", "-o", str(target), "-q"])

        assert code == EXIT_FOUND
        assert json.loads(target.read_text(encoding="utf-8"))["found"] is True
        assert "Output written to" in capsys.readouterr().err


class TestMapCommand:
    """Tests for mapping the import graph."""

    def test_ascii_tree(self, project, capsys):
        """Test the import tree with missing imports."""
        code = main([str(project), "--start", "/src/App.jsx", "--map", "-q"])

        out = capsys.readouterr().out
        assert code == EXIT_FOUND
        assert out.splitlines() == [
            "/src/App.jsx",
            "└── /src/components/List.jsx",
            "    ├── /src/config.js",
            "    └── ./Gone [MISSING]",
        ]

    def test_ignore_missing(self, project, capsys):
        """Test hiding missing imports."""
        main([str(project), "--start", "/src/App.jsx", "--map", "--ignore-missing", "-q"])

        assert "MISSING" not in capsys.readouterr().out

    def test_json_graph(self, project, capsys):
        """Test the graph as JSON."""
        main([str(project), "--start", "/src/App.jsx", "--map", "-f", "json", "-q"])

        data = json.loads(capsys.readouterr().out)
        assert data["start"] == "/src/App.jsx"
        assert {"source": "/src/components/List.jsx", "target": "/src/config.js"} in data["edges"]


class TestInputErrors:
    """Tests for unusable input."""

    def test_missing_source(self, capsys):
        """Test a source path that does not exist."""
        code = main(["/definitely/not/here", "--start", "/App.js", "--pattern", "x", "-q"])

        assert code == EXIT_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_empty_directory(self, capsys):
        """Test a directory without source files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            code = main([tmpdir, "--start", "/App.js", "--pattern", "x", "-q"])

        assert code == EXIT_ERROR
        assert "no source files found" in capsys.readouterr().err

    def test_linked_directory_outside_root(self, capsys):
        """Test a project with a symlinked directory pointing elsewhere."""
        with tempfile.TemporaryDirectory() as tmpdir, tempfile.TemporaryDirectory() as elsewhere:
            (Path(tmpdir) / "App.js").write_text("import shared from './lib/shared'", encoding="utf-8")
            (Path(elsewhere) / "shared.js").write_text("process.env.X", encoding="utf-8")
            os.symlink(elsewhere, Path(tmpdir) / "lib", target_is_directory=True)

            code = main([tmpdir, "--start", "/App.js", "--pattern", "process.", "-f", "json", "-q"])

        assert code == EXIT_FOUND
        assert json.loads(capsys.readouterr().out)["filename"] == "/lib/shared.js"
