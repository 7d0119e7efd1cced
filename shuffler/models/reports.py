"""
Run Report Models

Per-task and per-run execution summaries produced by the executor.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class StatementFailure(BaseModel):
    """A statement that failed while its task kept running."""

    task_id: int = Field(..., description="Task (interleaving) id")
    index: int = Field(..., description="Position of the statement in the task")
    client_id: int = Field(..., description="Client that executed the statement")
    text: str = Field(..., description="SQL text")
    error: str = Field(..., description="Database error message")
    sqlstate: Optional[str] = Field(None, description="SQLSTATE, when reported")


class TaskReport(BaseModel):
    """Outcome of running one task to completion."""

    task_id: int
    executed: int = Field(0, description="Statements sent to the database")
    failures: List[StatementFailure] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return self.executed - len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures


class RunSummary(BaseModel):
    """Aggregate of every task attempted in a run."""

    tasks_run: int = 0
    statements_executed: int = 0
    failures: List[StatementFailure] = Field(default_factory=list)

    def add(self, report: TaskReport) -> None:
        self.tasks_run += 1
        self.statements_executed += report.executed
        self.failures.extend(report.failures)

    @property
    def failed_tasks(self) -> int:
        return len({f.task_id for f in self.failures})
