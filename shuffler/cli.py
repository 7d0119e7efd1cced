#!/usr/bin/env python3
"""Execute SQL statements in all possible interleavings."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from shuffler.config import Settings, resolve_database_url, settings
from shuffler.connectors.client_pool import ClientPool
from shuffler.core.errors import InsufficientClientsError, ShufflerError
from shuffler.core.executor import TaskExecutor, run_tasks
from shuffler.core.interleave import count_interleavings, generate
from shuffler.core.script_loader import load_scripts

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sql-shuffle",
        description="Execute SQL statements in all possible permutations.",
    )
    parser.add_argument(
        "sql_scripts",
        nargs="+",
        metavar="SCRIPT",
        help="Path to a SQL script. One script corresponds to one client.",
    )
    parser.add_argument(
        "-c",
        "--connect",
        default=None,
        help="Connect to the database URL (default: $DATABASE_URL).",
    )
    parser.add_argument(
        "--continue-on-fail",
        action="store_true",
        help="Log failed statements and keep going instead of aborting the run.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print every interleaving as JSON lines without connecting.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL (e.g. INFO, DEBUG).",
    )
    return parser


def _configure_logging(cfg: Settings, level: Optional[str]) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or cfg.LOG_LEVEL).upper(), logging.DEBUG),
        format=cfg.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(cfg.LOG_FILE) if cfg.LOG_FILE else logging.NullHandler(),
        ],
    )
    # Keep driver internals out of the statement trace
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


async def _run(args: argparse.Namespace, cfg: Settings) -> int:
    scripts = load_scripts(args.sql_scripts)
    expected = count_interleavings(len(script) for script in scripts)
    logger.info(
        f"{len(scripts)} clients, {sum(len(s) for s in scripts)} statements, "
        f"{expected} interleavings"
    )
    tasks = generate(scripts)

    if args.dry_run:
        for task in tasks:
            print(json.dumps(task.to_dict()))
        return 0

    db_url = resolve_database_url(args.connect, cfg)
    exit_on_fail = cfg.EXIT_ON_FAIL and not args.continue_on_fail

    pool = ClientPool(db_url, connect_timeout=cfg.CONNECT_TIMEOUT)
    executor = TaskExecutor(pool, exit_on_fail=exit_on_fail)
    try:
        summary = await run_tasks(executor, tasks)
    finally:
        await pool.close_all()

    if summary.failures:
        logger.warning(
            f"{len(summary.failures)} statements failed across "
            f"{summary.failed_tasks} tasks (continue-on-fail)"
        )
    return 0


def main(argv: Optional[List[str]] = None, cfg: Optional[Settings] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    cfg = cfg if cfg is not None else settings
    _configure_logging(cfg, args.log_level)
    try:
        return asyncio.run(_run(args, cfg))
    except KeyboardInterrupt:
        print("[sql-shuffle] interrupted", file=sys.stderr)
        return 130
    except (ShufflerError, InsufficientClientsError) as e:
        logger.error(f"Aborted: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
