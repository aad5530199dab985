"""Tests for schema model transformers."""

import pytest
from cqlgen.config.exporter import TransformerSpec
from cqlgen.errors import ConfigurationError
from cqlgen.ir.schema import SchemaModel, Table, TableStats
from cqlgen.transformers import (
    KeyspaceFilter,
    RatioCalculator,
    ReplicationOverride,
    apply_transformers,
    build_transformers,
    get_transformer,
    register_transformer,
)
from cqlgen.transformers.registry import TRANSFORMERS, list_transformers


def _counted(name, reads, writes):
    return Table.model_validate(
        {
            "keyspace": "ks",
            "name": name,
            "columns": [{"name": "id", "type_def": "int"}],
            "partition_keys": ["id"],
            "stats": {"attributes": {"Local read count": reads, "Local write count": writes}},
        }
    )


def test_keyspace_filter(shop_model, simple_model):
    """Only selected keyspaces, with their types and tables, are kept."""
    model = SchemaModel(
        keyspaces=shop_model.keyspaces + simple_model.keyspaces,
        types=shop_model.types,
        tables=shop_model.tables + simple_model.tables,
    )
    kept = KeyspaceFilter(exclude=["sh.*"]).apply(model)
    assert [k.name for k in kept.keyspaces] == ["ks"]
    assert kept.types == []
    assert [t.full_name for t in kept.tables] == ["ks.t"]
    # The input model is untouched
    assert len(model.tables) == 4


def test_replication_override(shop_model):
    """Replication is replaced on the named keyspaces."""
    model = ReplicationOverride(
        replication={"class": "SimpleStrategy", "replication_factor": 1}
    ).apply(shop_model)
    assert model.keyspaces[0].replication_data == "'class': 'SimpleStrategy', 'replication_factor': '1'"
    untouched = ReplicationOverride(replication="'class': 'X'", keyspaces=["other"]).apply(shop_model)
    assert untouched.keyspaces[0].replication == shop_model.keyspaces[0].replication


def test_ratio_calculator():
    """Weights are each table's share of all reads and writes."""
    model = SchemaModel(tables=[_counted("a", 30, 10), _counted("b", 0, 60)])
    model = RatioCalculator().apply(model)
    a, b = model.tables
    assert a.stats.attributes["weighted_reads"] == pytest.approx(0.3)
    assert a.stats.attributes["weighted_writes"] == pytest.approx(0.1)
    assert b.stats.attributes["weighted_reads"] == 0.0
    assert b.stats.attributes["weighted_writes"] == pytest.approx(0.6)
    assert a.stats.attributes["Local read count"] == 30


def test_ratio_calculator_skips_tables_without_stats(simple_model):
    """Tables without statistics are left alone."""
    model = RatioCalculator().apply(simple_model)
    assert model.tables[0].stats is None


def test_build_transformers_in_order():
    """Transformers are built from configuration in the order given."""
    transformers = build_transformers(
        [
            TransformerSpec(name="keyspace_filter", config={"include": ["ks"]}),
            TransformerSpec(name="ratio_calculator"),
        ]
    )
    assert [t.name for t in transformers] == ["keyspace_filter", "ratio_calculator"]


@pytest.mark.parametrize(
    "name, config, message",
    [
        ("shuffle", {}, "not found"),
        ("keyspace_filter", {"colour": "blue"}, "Invalid configuration"),
        ("keyspace_filter", {"include": ["("]}, "Invalid configuration"),
        ("replication", {}, "Invalid configuration"),
    ],
)
def test_bad_transformer_config(name, config, message):
    """Unknown names and unusable settings are configuration errors."""
    with pytest.raises(ConfigurationError, match=message):
        get_transformer(name, config)


def test_register_transformer(simple_model):
    """Custom transformers can be registered and built by name."""

    class Empty:
        name = "empty"

        def apply(self, model):
            return SchemaModel()

    register_transformer("empty", lambda cfg: Empty())
    try:
        assert "empty" in list_transformers()
        model = apply_transformers(simple_model, [get_transformer("empty")])
        assert model.tables == []
    finally:
        TRANSFORMERS.pop("empty")
