"""Tests for import extraction, path resolution and extension probing."""

import pytest

from scanner.parser import extract_imports
from scanner.resolver import (
    PROBE_EXTENSIONS,
    find_file_with_extension,
    resolve_import_path,
)


class TestImportExtraction:
    """Tests for extracting relative imports from source text."""

    def test_default_import(self):
        """Test a default import from a sibling file."""
        assert extract_imports("import Foo from './Foo'") == ["./Foo"]

    def test_named_and_namespace_imports(self):
        """Test named, namespace and mixed import clauses."""
        code = "\n".join([
            "import { a, b } from \"../utils/helpers\";",
            "import * as api from './api';",
            "import React, { useState } from './react-shim';",
        ])

        assert extract_imports(code) == ["../utils/helpers", "./api", "./react-shim"]

    def test_package_imports_ignored(self):
        """Test that package specifiers are not returned."""
        code = "import React from 'react'\nimport Foo from './Foo'\nimport x from '@scope/pkg'"

        assert extract_imports(code) == ["./Foo"]

    def test_order_and_duplicates_preserved(self):
        """Test that results follow the text and keep duplicates."""
        code = "import B from './B'\nimport A from './A'\nimport B2 from './B'"

        assert extract_imports(code) == ["./B", "./A", "./B"]

    def test_several_imports_on_one_line(self):
        """Test two statements sharing a line."""
        code = "import React from 'react'; import Foo from './Foo'; import Bar from '../Bar'"

        assert extract_imports(code) == ["./Foo", "../Bar"]

    def test_keyword_inside_identifier_ignored(self):
        """Test that 'import' at the end of a longer word is not a statement."""
        code = "\n".join([
            "reimport x from './y'",
            "myimport foo from './z'",
            "$import bar from './w'",
            "import real from './real'",
        ])

        assert extract_imports(code) == ["./real"]

    def test_multiline_import_not_recognized(self):
        """Test that an import clause spanning lines is skipped."""
        code = "import {\n  a,\n  b,\n} from './multi'\nimport c from './single'"

        assert extract_imports(code) == ["./single"]

    def test_dynamic_and_side_effect_imports_not_recognized(self):
        """Test dynamic import(), side-effect imports and re-exports."""
        code = "\n".join([
            "const Lazy = import('./Lazy')",
            "import './styles.css'",
            "export { x } from './x'",
        ])

        assert extract_imports(code) == []

    @pytest.mark.parametrize("value", [None, 42, b"import a from './a'", ["./a"], ""])
    def test_non_string_input(self, value):
        """Test that non-string or empty input yields no imports."""
        assert extract_imports(value) == []


class TestPathResolution:
    """Tests for resolving import specifiers against the importing file."""

    def test_sibling_of_root_file(self):
        """Test ./ from a file at the virtual root."""
        assert resolve_import_path("/App.js", "./Foo") == "/Foo"

    def test_sibling_in_directory(self):
        """Test ./ from a nested file."""
        assert resolve_import_path("/src/App.jsx", "./hooks/useTodos") == "/src/hooks/useTodos"

    def test_unrooted_paths(self):
        """Test paths without a leading slash."""
        assert resolve_import_path("src/App.jsx", "./hooks/useTodos") == "src/hooks/useTodos"
        assert resolve_import_path("App.jsx", "./Foo") == "Foo"

    def test_parent_directory(self):
        """Test a single ../ segment."""
        assert resolve_import_path("/src/components/List.jsx", "../hooks/useTodos") == "/src/hooks/useTodos"

    def test_multiple_parent_segments(self):
        """Test several leading ../ segments."""
        assert resolve_import_path("/src/components/ui/Button.jsx", "../../utils/format") == "/src/utils/format"
        assert resolve_import_path("src/a/b/C.js", "../../../D") == "D"

    def test_parent_underflow_keeps_suffix(self):
        """Test that extra ../ segments are appended verbatim."""
        assert resolve_import_path("App.js", "../x") == "../x"
        assert resolve_import_path("src/App.js", "../../x") == "../x"
        assert resolve_import_path("/src/App.js", "../../x") == "/../x"
        assert resolve_import_path("/App.js", "../x") == "/../x"

    def test_inner_segments_not_normalized(self):
        """Test that only leading segments are interpreted."""
        assert resolve_import_path("/src/App.js", "./a/../b") == "/src/a/../b"

    def test_non_relative_spec_unchanged(self):
        """Test that a non-relative spec is returned as-is."""
        assert resolve_import_path("/src/App.js", "react") == "react"


class TestExtensionProbing:
    """Tests for finding the file an extensionless path refers to."""

    def test_probe_order(self):
        """Test the fixed extension priority."""
        assert PROBE_EXTENSIONS == ("", ".js", ".jsx", ".ts", ".tsx")

    def test_exact_match_wins(self):
        """Test that the path itself is tried first."""
        files = {"/Foo": "", "/Foo.js": ""}

        assert find_file_with_extension(files, "/Foo") == "/Foo"

    def test_js_before_jsx(self):
        """Test that .js is preferred over .jsx and .ts."""
        files = {"/Foo.jsx": "x", "/Foo.js": "y", "/Foo.ts": "z"}

        assert find_file_with_extension(files, "/Foo") == "/Foo.js"

    def test_typescript(self):
        """Test .ts and .tsx candidates."""
        assert find_file_with_extension({"/a.tsx": "x"}, "/a") == "/a.tsx"
        assert find_file_with_extension({"/a.ts": "x", "/a.tsx": "y"}, "/a") == "/a.ts"

    def test_empty_file_is_present(self):
        """Test that an empty source still counts as a file."""
        assert find_file_with_extension({"/Empty.js": ""}, "/Empty") == "/Empty.js"

    def test_no_match(self):
        """Test that None is returned when nothing matches."""
        assert find_file_with_extension({"/Foo.css": ""}, "/Foo") is None
        assert find_file_with_extension({}, "/Foo") is None
