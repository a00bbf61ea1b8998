"""CSV formatter for analysis results."""

import csv
import io

from ..models import AnalysisResult
from .base import BaseFormatter


class CsvFormatter(BaseFormatter):
    """Render one row per file."""

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result), end="")

    def format(self, result: AnalysisResult) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow([
            "path", "lines", "cyclomatic_complexity", "halstead_volume",
            "maintainability_index", "duplicated_with",
        ])
        for f in result.files:
            writer.writerow([
                f.path, f.lines, f.cyclomatic_complexity, f"{f.halstead_volume:.2f}",
                f"{f.maintainability_index:.2f}", ";".join(f.duplicated_with),
            ])
        return output.getvalue()
