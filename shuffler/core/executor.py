"""
Task Executor

Replays interleavings against the client pool, one statement at a time.

Policy:
- ConnectError and InsufficientClientsError always propagate.
- StatementError propagates when exit_on_fail is set; otherwise it is logged
  with its task/statement/client context and the task carries on.
"""

from __future__ import annotations

import logging
from typing import Iterable

from shuffler.connectors.client_pool import ClientPool
from shuffler.core.errors import StatementError
from shuffler.core.task import Task
from shuffler.models import RunSummary, StatementFailure, TaskReport

logger = logging.getLogger(__name__)


class TaskExecutor:
    """Runs tasks on a ClientPool it owns for the lifetime of a run."""

    def __init__(self, pool: ClientPool, exit_on_fail: bool = True):
        self.pool = pool
        self.exit_on_fail = exit_on_fail

    async def run_task(self, task: Task) -> TaskReport:
        """
        Execute every statement of ``task`` in order.

        Returns:
            TaskReport with the number of executed statements and any
            failures tolerated under exit_on_fail=False.
        """
        # Auto scaling when clients are not enough.
        await self.pool.reserve(task.required_client_count)

        tid = task.id
        report = TaskReport(task_id=tid)
        for i, stmt in enumerate(task):
            client = self.pool.get(stmt.client_id)

            log_tag = f"[Task {tid},{i}][Cli {stmt.client_id}]"
            logger.debug(f"{log_tag} executing: {stmt.text}")

            report.executed += 1
            try:
                outcome = await client.execute(stmt.text)
            except StatementError as e:
                logger.error(f"{log_tag} error while executing {stmt.text!r}, err: {e}")
                if self.exit_on_fail:
                    raise
                report.failures.append(
                    StatementFailure(
                        task_id=tid,
                        index=i,
                        client_id=stmt.client_id,
                        text=stmt.text,
                        error=e.message,
                        sqlstate=e.sqlstate,
                    )
                )
                continue

            logger.debug(f"{log_tag} done: {outcome}")

        return report


async def run_tasks(executor: TaskExecutor, tasks: Iterable[Task]) -> RunSummary:
    """
    Run ``tasks`` sequentially in the given order.

    Any error raised by the executor stops the run and propagates; later
    tasks are never attempted.
    """
    summary = RunSummary()
    for task in tasks:
        report = await executor.run_task(task)
        summary.add(report)
        if not report.ok:
            logger.warning(
                f"[Task {task.id}] finished with {len(report.failures)} failed "
                f"of {report.executed} statements"
            )
    logger.info(
        f"Ran {summary.tasks_run} tasks, {summary.statements_executed} statements, "
        f"{len(summary.failures)} failures"
    )
    return summary
