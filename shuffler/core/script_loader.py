"""
SQL Script Loader

Reads one SQL script per client and splits it into statements.

The splitter only needs to find statement boundaries; statement text is sent
to the database unchanged apart from stripped comments and whitespace.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Sequence, Union

from shuffler.core.errors import ScriptError
from shuffler.models import Statement, build_script

logger = logging.getLogger(__name__)

_DOLLAR_TAG = re.compile(r"\$(?:[A-Za-z_][A-Za-z0-9_]*)?\$")


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in ("_", "$")


def _is_escape_string(sql_content: str, quote_pos: int) -> bool:
    """True when the quote at ``quote_pos`` opens an E'...' string."""
    if quote_pos == 0 or sql_content[quote_pos - 1] not in ("e", "E"):
        return False
    return quote_pos == 1 or not _is_ident_char(sql_content[quote_pos - 2])


def split_statements(sql_content: str) -> List[str]:
    """
    Split SQL text into statements on top-level semicolons.

    Semicolons inside quoted literals ('...', E'...', "...", `...`),
    dollar-quoted bodies ($tag$...$tag$) and comments do not end a statement.
    Quoting follows Postgres with standard_conforming_strings: a backslash
    escapes only inside E'...' strings. ``--`` and
    ``/* */`` comments are dropped. A final statement without a trailing
    semicolon is kept.
    """
    statements: List[str] = []
    current: List[str] = []
    i = 0
    n = len(sql_content)

    def flush() -> None:
        statement = "".join(current).strip()
        if statement:
            statements.append(statement)
        current.clear()

    while i < n:
        ch = sql_content[i]

        # Line comment
        if ch == "-" and sql_content.startswith("--", i):
            end = sql_content.find("\n", i)
            if end == -1:
                break
            current.append("\n")
            i = end + 1
            continue

        # Block comment
        if ch == "/" and sql_content.startswith("/*", i):
            end = sql_content.find("*/", i + 2)
            if end == -1:
                break
            current.append(" ")
            i = end + 2
            continue

        # Quoted literal or identifier; doubled quotes escape, backslashes
        # only inside E'...' strings
        if ch in ("'", '"', "`"):
            backslash_escapes = ch == "'" and _is_escape_string(sql_content, i)
            j = i + 1
            while j < n:
                if backslash_escapes and sql_content[j] == "\\":
                    j += 2
                    continue
                if sql_content[j] == ch:
                    if j + 1 < n and sql_content[j + 1] == ch:
                        j += 2
                        continue
                    break
                j += 1
            current.append(sql_content[i : j + 1])
            i = j + 1
            continue

        if ch == "$" and not (i > 0 and _is_ident_char(sql_content[i - 1])):
            match = _DOLLAR_TAG.match(sql_content, i)
            if match:
                tag = match.group(0)
                end = sql_content.find(tag, match.end())
                stop = n if end == -1 else end + len(tag)
                current.append(sql_content[i:stop])
                i = stop
                continue

        if ch == ";":
            flush()
            i += 1
            continue

        current.append(ch)
        i += 1

    flush()
    return statements


def load_script(path: Union[str, Path], client_id: int) -> List[Statement]:
    """
    Read a SQL script file and tag its statements with ``client_id``.

    Raises:
        ScriptError: the file is missing or unreadable.
    """
    script_path = Path(path)
    logger.info(f"Reading SQLs from {script_path}...")
    try:
        sql_content = script_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ScriptError(f"Cannot read SQL script {script_path}: {e}") from e

    statements = build_script(client_id, split_statements(sql_content))
    if not statements:
        logger.warning(f"[Cli {client_id}] {script_path} contains no statements")
    else:
        logger.debug(f"[Cli {client_id}] {len(statements)} statements from {script_path}")
    return statements


def load_scripts(paths: Sequence[Union[str, Path]]) -> List[List[Statement]]:
    """
    Load one script per path. Client ids follow argument order (0..k-1).

    Raises:
        ScriptError: no paths were given, or a file could not be read.
    """
    if not paths:
        raise ScriptError("Expect at least one SQL script")
    return [load_script(path, client_id) for client_id, path in enumerate(paths)]
