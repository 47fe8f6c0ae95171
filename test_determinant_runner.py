"""
Tests for the command-line runner.
"""

import json

import pytest

from integer_matrix import INT64_MAX
from determinant_runner import _parse_rows, main


class TestParsing:
    def test_parse_rows(self):
        assert _parse_rows("1,2;3,4") == [[1, 2], [3, 4]]
        assert _parse_rows(" 1, -2 ; 3,4 ;") == [[1, -2], [3, 4]]

    def test_parse_rows_empty(self):
        with pytest.raises(ValueError, match="no rows"):
            _parse_rows(" ; ")


class TestMain:
    """End-to-end runs of main()"""

    def test_explicit_rows(self, capsys):
        assert main(["--rows", "1,2,3;4,5,6;7,8,10"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("1 | 2 | 3\n4 | 5 | 6\n7 | 8 | 10\n")
        assert "Determinant is: -3" in out

    def test_random_dimension(self, capsys):
        assert main(["--dimension", "5", "--seed", "3"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 6
        assert lines[0].startswith("0 | ")
        assert lines[-1].startswith("Determinant is: ")

    def test_random_row_selection(self, capsys):
        assert main(["--rows", "1,2,3;4,5,6;7,8,10", "--row-selection", "random", "--seed", "1"]) == 0
        assert "Determinant is: -3" in capsys.readouterr().out

    def test_dimension_out_of_range(self):
        with pytest.raises(SystemExit):
            main(["--dimension", "2"])
        with pytest.raises(SystemExit):
            main(["--dimension", "10"])

    def test_any_dimension(self, capsys):
        assert main(["--dimension", "2", "--any-dimension", "--seed", "0"]) == 0
        assert "Determinant is:" in capsys.readouterr().out

    def test_requires_a_source(self):
        with pytest.raises(SystemExit):
            main([])

    def test_malformed_rows(self):
        with pytest.raises(SystemExit):
            main(["--rows", "1,2;3"])
        with pytest.raises(SystemExit):
            main(["--rows", "a,b;c,d"])

    def test_overflow_reported(self, capsys):
        assert main(["--rows", f"{INT64_MAX},0;0,2"]) == 1
        assert "Error computing determinant" in capsys.readouterr().err

    def test_unchecked(self, capsys):
        assert main(["--rows", f"{INT64_MAX},0;0,2", "--unchecked"]) == 0
        assert f"Determinant is: {2 * INT64_MAX}" in capsys.readouterr().out

    def test_verify(self, capsys):
        assert main(["--rows", "2,0,1,3;1,1,0,2;0,4,1,1;3,2,2,0", "--verify"]) == 0
        assert "(match)" in capsys.readouterr().out

    def test_report_and_latex(self, capsys):
        assert main(["--dimension", "4", "--seed", "9", "--report", "--latex"]) == 0
        out = capsys.readouterr().out
        assert "PERFORMANCE REPORT" in out
        assert "$$\\det" in out

    def test_out_prefix(self, tmp_path, capsys):
        prefix = tmp_path / "results" / "run1"
        assert main(["--rows", "1,2,3;4,5,6;7,8,10", "--out-prefix", str(prefix), "--latex"]) == 0
        meta = json.loads((tmp_path / "results" / "run1.meta.json").read_text(encoding="utf-8"))
        assert meta["determinant"] == -3
        assert meta["dimension"] == 3
        assert meta["checked"] is True
        text = (tmp_path / "results" / "run1.matrix.txt").read_text(encoding="utf-8")
        assert text.endswith("Determinant is: -3\n")
        assert (tmp_path / "results" / "run1.matrix.tex").exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
