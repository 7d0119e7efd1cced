"""
Interleaving Generator

Builds every order-preserving merge of k statement scripts. For scripts of
lengths n1..nk the result holds N! / (n1! * ... * nk!) tasks, N = sum(ni).

Tasks are emitted depth-first, trying scripts in ascending index at every
step, so the order (and the task ids) is reproducible for the same input.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Sequence

from shuffler.core.task import Task
from shuffler.models import Statement

logger = logging.getLogger(__name__)


def count_interleavings(lengths: Iterable[int]) -> int:
    """Multinomial coefficient for scripts of the given lengths."""
    total = 0
    result = 1
    for n in lengths:
        total += n
        result *= math.comb(total, n)
    return result


def generate(scripts: Sequence[Sequence[Statement]]) -> List[Task]:
    """
    Generate all order-preserving interleavings of ``scripts``.

    Args:
        scripts: One ordered statement list per client. Empty scripts are
            allowed and contribute nothing.

    Returns:
        Tasks with ids 0..count-1 in emission order. Every task needs
        ``len(scripts)`` clients, whether or not each script is non-empty.
    """
    nb_clients = len(scripts)
    if nb_clients == 0:
        return []

    nb_stmts = sum(len(script) for script in scripts)
    tasks: List[Task] = []
    cursors = [0] * nb_clients
    stmts: List[Statement] = []
    # frames[d]: next script index to try at depth d; chosen[d]: script taken there
    chosen: List[int] = []
    frames: List[int] = [0]

    def backtrack() -> None:
        if chosen:
            i = chosen.pop()
            cursors[i] -= 1
            stmts.pop()

    while frames:
        if len(stmts) == nb_stmts:
            tasks.append(Task(len(tasks), nb_clients, stmts))
            frames.pop()
            backtrack()
            continue

        i = frames[-1]
        while i < nb_clients and cursors[i] >= len(scripts[i]):
            i += 1
        if i == nb_clients:
            frames.pop()
            backtrack()
            continue

        frames[-1] = i + 1
        stmts.append(scripts[i][cursors[i]])
        cursors[i] += 1
        chosen.append(i)
        frames.append(0)

    logger.debug(
        f"Generated {len(tasks)} interleavings of {nb_stmts} statements "
        f"from {nb_clients} scripts"
    )
    return tasks
