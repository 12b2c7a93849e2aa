"""Applies ``database/schema.sql`` and ``database/seed.sql`` to the configured server."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Union

import mysql.connector

from ..common.logging_config import get_logger
from .connection import DBConfig

logger = get_logger("database")

PathLike = Union[str, Path]

_DB_SELECTION = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def split_statements(sql: str) -> Iterator[str]:
    """Yield the statements of a script; ``;`` inside quoted literals does not split."""
    sql = _LINE_COMMENT.sub("", sql)
    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def _run_script(config: DBConfig, path: PathLike) -> int:
    # The target database comes from settings, never from the script.
    sql = _DB_SELECTION.sub("", Path(path).read_text(encoding="utf-8"))

    conn = mysql.connector.connect(**config.connect_kwargs())
    try:
        cur = conn.cursor()
        count = 0
        for stmt in split_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()

    logger.info("Applied %s statements from %s to %s", count, Path(path).name, config.describe())
    return count


def ensure_database_exists(db_config: Mapping[str, Any]) -> None:
    config = DBConfig.from_settings(db_config)
    conn = mysql.connector.connect(**config.connect_kwargs(with_database=False))
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping[str, Any], *, schema_path: PathLike) -> int:
    ensure_database_exists(db_config)
    return _run_script(DBConfig.from_settings(db_config), schema_path)


def apply_seed_sql(db_config: Mapping[str, Any], *, seed_path: PathLike) -> int:
    return _run_script(DBConfig.from_settings(db_config), seed_path)


def list_tables(db_config: Mapping[str, Any]) -> List[str]:
    conn = mysql.connector.connect(**DBConfig.from_settings(db_config).connect_kwargs())
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
