"""
Reporting module for cbac.

Renders resolved decision matrices for people and for programs.

Output formats:
    - Console: Rich table, one row per content, one column per access
    - JSON: Structured output for programmatic consumption

Example:
    from cbac.report import generate_console_report, generate_json_report

    matrix = engine.resolve(["doc-1", "doc-2"], "alice")
    generate_console_report(matrix, subject="alice")
    print(generate_json_report(matrix, subject="alice"))
"""

from cbac.report.console import generate_console_report
from cbac.report.json import build_report_dict, generate_json_report

__all__ = [
    "generate_console_report",
    "generate_json_report",
    "build_report_dict",
]
