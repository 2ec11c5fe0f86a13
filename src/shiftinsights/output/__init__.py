"""Output generation for insight bundles (text, PDF)."""

from shiftinsights.output.pdf_generator import InsightsPDFGenerator
from shiftinsights.output.text_report import InsightsTextReport

__all__ = [
    "InsightsPDFGenerator",
    "InsightsTextReport",
]
