"""
Rendering Context

Responsibilities:
- Wraps rendered documents in standalone printable pages
- Writes pages to disk and reports the outcome
- Hands pages to the system browser for print-to-PDF

Owns: Output files, print export
Never: Modifies template content or resume data
"""

from hireme.contexts.rendering.exporter import (
    ExportResult,
    export_analysis_report,
    export_resume,
    open_for_print,
)

__all__ = ["ExportResult", "export_resume", "export_analysis_report", "open_for_print"]
