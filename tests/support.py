import re
import sqlite3
import unittest
from contextlib import asynccontextmanager
from datetime import date, time

import asyncpg
from fastapi.testclient import TestClient

from core import db
from main import app

sqlite3.register_adapter(date, lambda value: value.isoformat())
sqlite3.register_adapter(time, lambda value: value.isoformat())

_PLACEHOLDER = re.compile(r"\$(\d+)")

SCHEMA = """
CREATE TABLE defendants (
    defendant_id INTEGER PRIMARY KEY,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    age INTEGER,
    plea TEXT
);
CREATE TABLE prosecutors (
    prosecutor_id INTEGER PRIMARY KEY,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    age INTEGER,
    specialization TEXT
);
CREATE TABLE judges (
    judge_id INTEGER PRIMARY KEY,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    age INTEGER,
    court TEXT
);
CREATE TABLE crime_scenes (
    crime_scene_id INTEGER PRIMARY KEY,
    building_number INTEGER,
    street TEXT NOT NULL,
    city TEXT NOT NULL,
    crime_date TEXT
);
CREATE TABLE cases (
    case_id INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    severity TEXT,
    date_reported TEXT,
    crime_scene_id INTEGER REFERENCES crime_scenes (crime_scene_id),
    judge_id INTEGER REFERENCES judges (judge_id),
    prosecutor_id INTEGER REFERENCES prosecutors (prosecutor_id)
);
CREATE TABLE verdicts (
    verdict_id INTEGER PRIMARY KEY,
    case_id INTEGER NOT NULL REFERENCES cases (case_id),
    name TEXT NOT NULL,
    description TEXT,
    verdict_date TEXT,
    sentence_years INTEGER
);
CREATE TABLE offenders (
    offender_id INTEGER PRIMARY KEY,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    age INTEGER NOT NULL,
    marital_status TEXT,
    arrest_date TEXT,
    arrest_time TEXT,
    defendant_id INTEGER NOT NULL REFERENCES defendants (defendant_id),
    case_id INTEGER REFERENCES cases (case_id)
);
CREATE TABLE victims (
    victim_id INTEGER PRIMARY KEY,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    age INTEGER,
    marital_status TEXT,
    prosecutor_id INTEGER REFERENCES prosecutors (prosecutor_id)
);
"""

SEED = """
INSERT INTO defendants VALUES
    (1, 'John', 'Smith', 34, 'guilty'),
    (2, 'Jane', 'Doe', 28, 'not guilty'),
    (3, 'Jack', 'Brown', 41, 'no contest');
INSERT INTO prosecutors VALUES
    (1, 'Ana', 'Petrov', 45, 'homicide'),
    (2, 'Marc', 'Dubois', 38, 'fraud'),
    (3, 'Lina', 'Chen', 52, 'narcotics');
INSERT INTO judges VALUES
    (1, 'Helen', 'Moreau', 60, 'Superior Court'),
    (2, 'Omar', 'Haddad', 55, 'Court of Appeal');
INSERT INTO crime_scenes VALUES
    (1, 120, 'Rue Sherbrooke', 'Montreal', '2020-03-14'),
    (2, 45, 'Main Street', 'Toronto', '2021-07-02'),
    (3, 9, 'Rue Saint-Denis', 'Montreal', '2019-11-30');
INSERT INTO cases VALUES
    (1, 'Armed robbery downtown', 'felony', '2020-03-15', 1, 1, 1),
    (2, 'Credit card fraud ring', 'felony', '2021-07-05', 2, 2, 2),
    (3, 'Shoplifting', 'misdemeanor', '2019-12-01', 3, 1, 3);
INSERT INTO verdicts VALUES
    (1, 1, 'Guilty', 'Convicted on all counts', '2021-01-10', 8),
    (2, 2, 'Not guilty', 'Acquitted', '2022-02-01', 0);
INSERT INTO offenders VALUES
    (1, 'John', 'Smith', 34, 'single', '2019-05-10', '08:30:00', 1, 1),
    (2, 'Jane', 'Doe', 28, 'single', '2020-02-11', '13:15:00', 2, 2),
    (3, 'Jack', 'Brown', 41, 'single', '2020-06-21', '22:45:00', 3, 3),
    (4, 'Jill', 'White', 25, 'single', '2021-01-03', '10:00:00', 1, 1),
    (5, 'Jim', 'Green', 52, 'single', '2021-08-17', '17:20:00', 2, NULL),
    (6, 'Joan', 'Black', 30, 'single', '2022-04-09', '06:05:00', 3, 2),
    (7, 'Jake', 'Gray', 47, 'single', '2023-10-30', '19:40:00', 1, 3),
    (8, 'Mary', 'Jones', 39, 'married', '2018-12-24', '23:59:00', 2, 1);
INSERT INTO victims VALUES
    (1, 'Paul', 'Martin', 33, 'single', 1),
    (2, 'Sara', 'Lee', 27, 'married', 2),
    (3, 'Tom', 'King', 61, 'widowed', NULL);
"""


class SqliteConnection:
    """
    The slice of the asyncpg connection/pool API that core.db uses, backed by
    an in-memory SQLite database. `$n` placeholders become `?n`.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _run(self, sql, args):
        try:
            return self.conn.execute(_PLACEHOLDER.sub(r"?\1", sql), args).fetchall()
        except sqlite3.Error as exc:
            raise asyncpg.PostgresError(str(exc)) from exc

    async def fetch(self, sql, *args):
        return self._run(sql, args)

    async def fetchrow(self, sql, *args):
        rows = self._run(sql, args)
        return rows[0] if rows else None

    async def execute(self, sql, *args):
        self._run(sql, args)
        return "OK"

    @asynccontextmanager
    async def transaction(self):
        self.conn.execute("BEGIN")
        try:
            yield
        except BaseException:
            self.conn.execute("ROLLBACK")
            raise
        self.conn.execute("COMMIT")


class SqlitePool(SqliteConnection):
    @classmethod
    def create(cls, *, seed=True):
        conn = sqlite3.connect(":memory:", check_same_thread=False, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.executescript(SCHEMA)
        if seed:
            conn.executescript(SEED)
        return cls(conn)

    @asynccontextmanager
    async def acquire(self):
        yield self

    async def close(self):
        self.conn.close()


class FailingPool:
    """
    Pool double whose every call raises `error`.
    """

    def __init__(self, error: BaseException):
        self.error = error

    async def fetch(self, sql, *args):
        raise self.error

    async def fetchrow(self, sql, *args):
        raise self.error

    async def execute(self, sql, *args):
        raise self.error


class StorageTestCase(unittest.TestCase):
    def setUp(self):
        self.pool = SqlitePool.create()
        db._pool = self.pool

    def tearDown(self):
        db._pool = None
        self.pool.conn.close()

    def query(self, sql, *args):
        return [dict(row) for row in self.pool.conn.execute(sql, args).fetchall()]


class ApiTestCase(StorageTestCase):
    def setUp(self):
        super().setUp()
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        super().tearDown()
