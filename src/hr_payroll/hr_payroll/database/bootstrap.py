"""Schema/seed helpers used by ``create_app`` and ``scripts/``."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_DEPARTMENTS = ("Human Resources", "Engineering", "Finance")


def _as_target(db_config: dict) -> DBConfig:
    return DBConfig.from_settings(db_config)


@contextmanager
def _connect(db_config: dict, *, with_database: bool = True) -> Iterator:
    conn = mysql.connector.connect(**_as_target(db_config).connect_kwargs(with_database=with_database))
    try:
        yield conn
    finally:
        conn.close()


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql stays usable whatever the configured database name is.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ``;`` outside quoted strings. ``--`` comment lines are dropped."""

    sql = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    buf: list[str] = []
    quote = None
    escape = False

    for ch in sql:
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    with _connect(db_config) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    with _connect(db_config, with_database=False) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)


def ensure_demo_accounts(db_config: dict) -> None:
    """Create (or reset) the demo admin and one demo employee.

    Passwords are hashed here rather than in seed.sql so they always match
    werkzeug's current default method.
    """

    with _connect(db_config) as conn:
        cur = conn.cursor(dictionary=True)

        for name in DEMO_DEPARTMENTS:
            cur.execute("INSERT IGNORE INTO departments(name, is_active) VALUES(%s, 1)", (name,))

        cur.execute("SELECT department_id FROM departments WHERE name=%s", ("Engineering",))
        row = cur.fetchone()
        engineering_id = int(row["department_id"]) if row else None

        accounts = [
            # emp_code, username, password, role, first, last, email, department, basic, hra, allowance
            ("EMPADM0001", "admin", "admin123", "admin", "Admin", "User", "admin@example.com", None, 0, 0, 0),
            ("EMPJOH0001", "john", "john1234", "employee", "John", "Doe", "john@example.com", engineering_id, 20000, 8000, 3000),
        ]
        for code, username, password, role, first, last, email, dept_id, basic, hra, allowance in accounts:
            password_hash = generate_password_hash(password)
            cur.execute(
                """
                INSERT INTO employees(
                    emp_code, username, password_hash, role, first_name, last_name, email,
                    department_id, designation, is_active, basic_salary, hra, allowance
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,1,%s,%s,%s)
                ON DUPLICATE KEY UPDATE password_hash=VALUES(password_hash), role=VALUES(role), is_active=1
                """,
                (code, username, password_hash, role, first, last, email, dept_id,
                 "Administrator" if role == "admin" else "Software Engineer", basic, hra, allowance),
            )
        conn.commit()
        logger.info("Demo accounts ready: %s", ", ".join(a[1] for a in accounts))


def list_tables(db_config: dict) -> list[str]:
    with _connect(db_config) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
