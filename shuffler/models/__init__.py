"""
Data models for sql-shuffle.

This package contains Pydantic models for:
- Client-tagged SQL statements
- Task and run execution reports
"""

from shuffler.models.statement import (
    Statement,
    build_script,
)

from shuffler.models.reports import (
    StatementFailure,
    TaskReport,
    RunSummary,
)

__all__ = [
    # statement
    "Statement",
    "build_script",
    # reports
    "StatementFailure",
    "TaskReport",
    "RunSummary",
]
