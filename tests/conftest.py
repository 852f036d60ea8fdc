"""Pytest configuration and shared fixtures"""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from sqlalchemy import create_engine, text

from sqlgen.catalog import CatalogMetadata, open_catalog

DatabaseFactory = Callable[..., str]

SHOP_SCHEMA = [
    """
    CREATE TABLE Customers (
        CustomerID INTEGER PRIMARY KEY,
        Name NVARCHAR(100) NOT NULL
    )
    """,
    """
    CREATE TABLE Orders (
        OrderID INTEGER PRIMARY KEY,
        CustomerID INTEGER NOT NULL REFERENCES Customers(CustomerID),
        Amount DECIMAL(10, 2)
    )
    """,
]

CHAIN_SCHEMA = [
    "CREATE TABLE A (AID INTEGER PRIMARY KEY, Label TEXT)",
    "CREATE TABLE B (BID INTEGER PRIMARY KEY, AID INTEGER REFERENCES A(AID))",
    "CREATE TABLE C (CID INTEGER PRIMARY KEY, BID INTEGER REFERENCES B(BID))",
]

SELF_REFERENCE_SCHEMA = [
    "CREATE TABLE T (ID INTEGER PRIMARY KEY, ParentID INTEGER REFERENCES T(ID), Name TEXT)",
]


@pytest.fixture
def make_database(tmp_path: Path) -> DatabaseFactory:
    """Return a factory creating a SQLite database from DDL statements"""
    counter = iter(range(1_000))

    def factory(*statements: str) -> str:
        db_path = tmp_path / f"catalog_{next(counter)}.db"
        connection_string = f"sqlite:///{db_path}"

        engine = create_engine(connection_string)
        with engine.connect() as conn:
            for statement in statements:
                conn.execute(text(statement))
            conn.commit()
        engine.dispose()

        return connection_string

    return factory


@pytest.fixture
def shop_db(make_database: DatabaseFactory) -> str:
    """Customers <- Orders"""
    return make_database(*SHOP_SCHEMA)


@pytest.fixture
def chain_db(make_database: DatabaseFactory) -> str:
    """A <- B <- C"""
    return make_database(*CHAIN_SCHEMA)


@pytest.fixture
def self_reference_db(make_database: DatabaseFactory) -> str:
    """T <- T"""
    return make_database(*SELF_REFERENCE_SCHEMA)


@pytest.fixture
def shop_catalog(shop_db: str) -> Iterator[CatalogMetadata]:
    """Open catalog session over the shop database"""
    with open_catalog(shop_db) as catalog:
        yield catalog
