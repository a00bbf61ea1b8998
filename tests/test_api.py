"""Tests for the public analyze() entry point."""

import pytest

import codecomplexity
from codecomplexity import analyze
from codecomplexity.config import AnalysisConfig
from codecomplexity.exceptions import InvalidPathError

BODY = """
String describe(int code) {
    return code > 0 ? "positive" : "other";
}
"""


@pytest.fixture
def project(java_class, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    root = tmp_path / "project"
    (root / "a").mkdir(parents=True)
    (root / "a" / "One.java").write_text(java_class(BODY, name="One"))
    (root / "Two.java").write_text(java_class(BODY, name="Two"))
    return root


class TestAnalyze:
    """Directory analysis through the public API."""

    def test_directory(self, project):
        result = analyze(project)
        assert [f.path for f in result.files] == ["Two.java", "a/One.java"]
        assert result.get("Two.java").duplicated_with == ("a/One.java",)
        assert result.get("a/One.java").cyclomatic_complexity == 2

    def test_string_target_and_overrides(self, project):
        result = analyze(str(project), workers=2, parallel_threshold=1)
        assert result.total_files == 2

    def test_prebuilt_config(self, project):
        result = analyze(project, config=AnalysisConfig(language="python"))
        assert result.total_files == 0

    def test_missing_target(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        with pytest.raises(InvalidPathError):
            analyze(tmp_path / "missing")

    def test_version(self):
        assert codecomplexity.__version__ == "0.1.0"
