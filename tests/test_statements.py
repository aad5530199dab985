"""Tests for CQL statement records."""

import pytest
from cqlgen.generation.statements import (
    CreateKeyspaceStatement,
    CreateTableStatement,
    CreateTypeStatement,
    DropStatement,
    InsertStatement,
    SelectStatement,
    TruncateStatement,
    UpdateStatement,
)


def test_create_table_text():
    """Create table lists columns, the compound primary key and clustering order."""
    statement = CreateTableStatement(
        keyspace="ks",
        table="t",
        columns=(("a", "int"), ("b", "text"), ("c", "timeuuid")),
        partition_keys=("a", "b"),
        clustering_columns=("c",),
        clustering_orders=("desc",),
    )
    assert statement.render() == (
        "create table if not exists ks.t (\n"
        "  a int,\n"
        "  b text,\n"
        "  c timeuuid,\n"
        "  primary key ((a, b), c)\n"
        ") with clustering order by (c desc);\n"
    )


def test_create_keyspace_text():
    """Durable writes are only mentioned when disabled."""
    durable = CreateKeyspaceStatement(keyspace="ks", replication="'class': 'SimpleStrategy'")
    assert durable.render() == (
        "create keyspace ks\nwith replication = {'class': 'SimpleStrategy'};\n"
    )
    not_durable = CreateKeyspaceStatement(
        keyspace="ks", replication="'class': 'SimpleStrategy'", durable_writes=False
    )
    assert not_durable.render().endswith("\nand durable_writes = false;\n")


def test_simple_statements():
    """Type, drop and truncate statements."""
    assert CreateTypeStatement(keyspace="ks", name="u", fields=(("x", "int"),)).render() == (
        "create type ks.u (\n  x int\n);\n"
    )
    assert DropStatement(kind="table", target="ks.t").render() == "drop table ks.t;\n"
    assert TruncateStatement(target="ks.t").render() == "truncate ks.t;\n"


def test_dml_text():
    """Insert, select and update statements."""
    insert = InsertStatement(keyspace="ks", table="t", columns=("a", "b"), placeholders=("{x}", "{y}"))
    assert insert.render() == "insert into ks.t\n( a, b )\nvalues\n( {x}, {y} );\n"
    select = SelectStatement(keyspace="ks", table="t", predicate="a={x}")
    assert select.render() == "select * from ks.t\nwhere a={x}\nlimit 10;\n"
    update = UpdateStatement(keyspace="ks", table="t", assignments="b={y}", predicate="a={x}")
    assert update.render() == "update ks.t\nset b={y}\nwhere a={x};\n"


@pytest.mark.parametrize(
    "build",
    [
        lambda: SelectStatement(keyspace="ks", table="t", predicate=""),
        lambda: UpdateStatement(keyspace="ks", table="t", assignments="", predicate="a={x}"),
        lambda: CreateTableStatement(keyspace="ks", table="t", columns=(("a", "int"),), partition_keys=()),
        lambda: DropStatement(kind="table", target=""),
    ],
)
def test_missing_slot_fails_at_construction(build):
    """A statement record cannot be built with an empty slot."""
    with pytest.raises(ValueError, match="is empty"):
        build()


def test_insert_placeholder_count_must_match():
    """Every inserted column needs exactly one placeholder."""
    with pytest.raises(ValueError, match="placeholders"):
        InsertStatement(keyspace="ks", table="t", columns=("a", "b"), placeholders=("{x}",))
