"""Tests for the formatters package."""

import csv
import io
import json

import pytest

from codecomplexity.formatters import (
    CsvFormatter,
    JsonFormatter,
    RichFormatter,
    get_formatter,
)
from codecomplexity.metrics.duplication import Occurrence
from codecomplexity.models import AnalysisResult, DuplicateGroup, FileMetrics, SkippedFile


def _make_result():
    files = (
        FileMetrics("src/A.java", 12, 3, 85.3333, 61.2, ("src/B.java",), 2),
        FileMetrics("src/B.java", 40, 15, 912.0, 8.5, ("src/A.java",), 4),
    )
    return AnalysisResult(
        files=files,
        total_files=2,
        total_lines=52,
        average_cyclomatic=9.0,
        average_maintainability=34.85,
        skipped_files=(SkippedFile("src/Bad.java", "syntax error at line 3, column 1"),),
        duplicate_groups=(
            DuplicateGroup(
                "f" * 40, (Occurrence("src/A.java", "total"), Occurrence("src/B.java", "total"))
            ),
        ),
    )


class TestGetFormatter:
    """Formatter lookup."""

    @pytest.mark.parametrize(
        "name, cls", [("rich", RichFormatter), ("json", JsonFormatter), ("csv", CsvFormatter)]
    )
    def test_known(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestJsonFormatter:
    """Wire-format JSON."""

    def test_round_trips_to_dict(self):
        result = _make_result()
        assert json.loads(JsonFormatter().format(result)) == result.to_dict()

    def test_render_prints(self, capsys):
        JsonFormatter().render(_make_result())
        assert json.loads(capsys.readouterr().out)["totalFiles"] == 2


class TestCsvFormatter:
    """One row per file."""

    def test_rows(self):
        rows = list(csv.reader(io.StringIO(CsvFormatter().format(_make_result()))))
        assert rows[0] == [
            "path",
            "lines",
            "cyclomatic_complexity",
            "halstead_volume",
            "maintainability_index",
            "duplicated_with",
        ]
        assert rows[1] == ["src/A.java", "12", "3", "85.33", "61.20", "src/B.java"]
        assert len(rows) == 3

    def test_empty_result(self):
        assert CsvFormatter().format(AnalysisResult()).count("\n") == 1


class TestRichFormatter:
    """Terminal report."""

    def test_sections(self):
        text = RichFormatter().format(_make_result())
        assert "Summary" in text
        assert "Analyzed 2 files" in text
        assert "src/B.java" in text
        assert "Duplicated methods" in text
        assert "src/A.java#total" in text
        assert "Skipped files" in text
        assert "src/Bad.java" in text

    def test_worst_file_listed_first(self):
        text = RichFormatter().format(_make_result())
        table = text.split("Least Maintainable Files", 1)[1]
        assert table.index("src/B.java") < table.index("src/A.java")

    def test_empty_result(self):
        text = RichFormatter().format(AnalysisResult())
        assert "Analyzed 0 files" in text
        assert "Skipped files" not in text
