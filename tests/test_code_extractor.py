"""
Tests for response sanitization.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from codegenie.autocomplete.code_extractor import extract_only_code, is_non_code_line


class TestExtractOnlyCode:
    def test_drops_comments_and_blank_lines(self):
        assert extract_only_code("# explain\ncode1\n\n// note\ncode2") == "code1\ncode2"

    def test_drops_block_comment_and_docstring_lines(self):
        raw = '/* header\n * body\n */\n"""doc"""\n\'\'\'more\'\'\'\nx = 1'
        assert extract_only_code(raw) == "x = 1"

    def test_keeps_interior_indentation(self):
        raw = "def f():\n    # inner\n    return 1"
        assert extract_only_code(raw) == "def f():\n    return 1"

    def test_trims_whole_result(self):
        assert extract_only_code("   x = 1\ny = 2   ") == "x = 1\ny = 2"

    def test_drops_leading_star_code_lines(self):
        # Heuristic limitation: multiplication continuations are lost
        assert extract_only_code("total = a\n* b") == "total = a"

    def test_only_commentary_gives_empty(self):
        assert extract_only_code("# just words\n// and more\n\n") == ""
        assert extract_only_code("") == ""

    def test_idempotent(self):
        samples = [
            "# explain\ncode1\n\n// note\ncode2",
            "  leading\n\ttabbed\n# c",
            "for i in range(3):\n    print(i)\n",
        ]
        for raw in samples:
            once = extract_only_code(raw)
            assert extract_only_code(once) == once

    def test_inline_trailing_comment_kept(self):
        assert extract_only_code("x = 1  # set x") == "x = 1  # set x"


class TestIsNonCodeLine:
    def test_markers(self):
        for line in ["#", "  // x", "/* y", " * z", "'''", '"""', "", "   "]:
            assert is_non_code_line(line)

    def test_code(self):
        for line in ["x = 1", "return a", "print('#')", "/ 2"]:
            assert not is_non_code_line(line)
