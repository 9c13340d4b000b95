from typing import List

from postrecord.schemas.report import BatchReport, PostIssue


def _format_issue(issue: PostIssue) -> str:
    location = f"line {issue.line}: " if issue.line is not None else ""
    return f"    [{issue.severity}] {issue.code}: {location}{issue.message}"


def format_report(report: BatchReport) -> str:
    """Render a batch report as plain text grouped by file."""
    lines: List[str] = [
        "=" * 60,
        "POST INGESTION REPORT",
        "=" * 60,
        f"Files checked: {report.files_checked}",
        f"Files with errors: {report.files_with_errors}",
        f"Files with warnings: {report.files_with_warnings}",
        f"Total errors: {report.error_count}",
        f"Total warnings: {report.warning_count}",
        "",
    ]

    for post_report in report.reports:
        if not post_report.issues:
            continue
        lines.append(post_report.path)
        lines.extend(_format_issue(issue) for issue in post_report.issues)
        lines.append("")

    lines.append("ALL POSTS VALID" if report.is_healthy else "INGESTION FAILED")
    return "\n".join(lines)
