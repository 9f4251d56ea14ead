"""
JSON report generator for cbac.

Generates structured JSON output for a resolved matrix. Identifiers are
opaque, so content and access keys are rendered with str().
"""

import json
from datetime import UTC, datetime
from typing import Any

from cbac.report.console import count_allowed


def generate_json_report(
    matrix: dict[Any, dict[Any, bool]],
    subject: Any = None,
    indent: int = 2,
) -> str:
    """
    Generate a JSON report for a resolved matrix.

    Args:
        matrix: Resolved matrix (content -> access -> allowed)
        subject: Subject the matrix was resolved for
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string with the full report
    """
    report = build_report_dict(matrix, subject)
    return json.dumps(report, indent=indent)


def build_report_dict(
    matrix: dict[Any, dict[Any, bool]],
    subject: Any = None,
) -> dict[str, Any]:
    """
    Build a report dictionary for a resolved matrix.

    Returns:
        Dictionary with the matrix and summary counts
    """
    allowed, total = count_allowed(matrix)
    return {
        "report_version": "1.0",
        "generated_at": datetime.now(UTC).isoformat(),
        "subject": None if subject is None else str(subject),
        "matrix": {
            str(content): {str(access): value for access, value in policy.items()}
            for content, policy in matrix.items()
        },
        "summary": {
            "contents": len(matrix),
            "cells": total,
            "allowed": allowed,
            "denied": total - allowed,
        },
    }
