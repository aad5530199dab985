"""Shared fixtures for cqlgen tests."""

import pytest
from cqlgen.config.exporter import ExporterConfig
from cqlgen.generation.context import CompileContext
from cqlgen.ir.schema import ColumnDef, Keyspace, SchemaModel, Table, TableStats, UserType


@pytest.fixture
def simple_model():
    """One keyspace with one single-column table: ks.t(id int, primary key (id))."""
    return SchemaModel(
        keyspaces=[Keyspace(name="ks")],
        tables=[
            Table(
                keyspace="ks",
                name="t",
                columns=[ColumnDef(name="id", type_def="int")],
                partition_keys=["id"],
            )
        ],
    )


@pytest.fixture
def shop_model():
    """Keyspace with a user type, a clustered table, a counter table and a key-only table."""
    return SchemaModel(
        keyspaces=[
            Keyspace(
                name="shop",
                replication={"class": "NetworkTopologyStrategy", "dc1": "3"},
                durable_writes=False,
            )
        ],
        types=[UserType(keyspace="shop", name="address", fields={"street": "text", "zip": "int"})],
        tables=[
            Table(
                keyspace="shop",
                name="orders",
                columns=[
                    ColumnDef(name="customer_id", type_def="uuid"),
                    ColumnDef(name="order_day", type_def="date"),
                    ColumnDef(name="order_id", type_def="timeuuid"),
                    ColumnDef(name="total", type_def="decimal"),
                    ColumnDef(name="items", type_def="list<text>"),
                ],
                partition_keys=["customer_id", "order_day"],
                clustering_columns=["order_id"],
                clustering_orders=["DESC"],
            ),
            Table(
                keyspace="shop",
                name="page_views",
                columns=[
                    ColumnDef(name="page", type_def="text"),
                    ColumnDef(name="views", type_def="counter"),
                ],
                partition_keys=["page"],
            ),
            Table(
                keyspace="shop",
                name="tags",
                columns=[ColumnDef(name="tag", type_def="ascii")],
                partition_keys=["tag"],
            ),
        ],
    )


@pytest.fixture
def stats_table():
    """Table with workload statistics attached."""
    return Table(
        keyspace="ks",
        name="events",
        columns=[
            ColumnDef(name="id", type_def="bigint"),
            ColumnDef(name="payload", type_def="blob"),
        ],
        partition_keys=["id"],
        stats=TableStats(
            attributes={
                "Number of partitions (estimate)": 8734219,
                "weighted_reads": 0.3,
                "weighted_writes": 0.7,
            }
        ),
    )


@pytest.fixture
def make_config():
    """Factory for exporter configurations; the block plan defaults to one main block."""

    def _make(blockplan=None, **options):
        data = {"blockplan": blockplan or {"main": "schema-tables, insert, select"}}
        data.update(options)
        return ExporterConfig.from_mapping(data)

    return _make


@pytest.fixture
def make_context(make_config):
    """Factory for a fresh compile context."""

    def _make(**options):
        return CompileContext.create(make_config(**options))

    return _make
