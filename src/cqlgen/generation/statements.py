"""CQL statement records.

Each statement kind is a frozen record holding exactly the slots its text
needs. Records refuse to be built with an empty slot, so a statement can never
be rendered with a silently missing piece.
"""

from dataclasses import dataclass, fields as dataclass_fields
from typing import Tuple

PREDICATE_JOINER = "\n  AND "
DEFAULT_LIMIT = 10


class _Statement:
    """Shared slot validation for statement records."""

    # Slots that may legitimately be empty
    optional_slots: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for f in dataclass_fields(self):
            if f.name in self.optional_slots:
                continue
            value = getattr(self, f.name)
            if isinstance(value, (str, tuple)) and len(value) == 0:
                raise ValueError(f"{type(self).__name__}: slot '{f.name}' is empty")

    def render(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class CreateKeyspaceStatement(_Statement):
    keyspace: str
    replication: str
    durable_writes: bool = True

    def render(self) -> str:
        text = f"create keyspace {self.keyspace}\nwith replication = {{{self.replication}}}"
        if not self.durable_writes:
            text += "\nand durable_writes = false"
        return text + ";\n"


@dataclass(frozen=True)
class CreateTypeStatement(_Statement):
    keyspace: str
    name: str
    fields: Tuple[Tuple[str, str], ...]

    def render(self) -> str:
        body = ",\n".join(f"  {name} {type_def}" for name, type_def in self.fields)
        return f"create type {self.keyspace}.{self.name} (\n{body}\n);\n"


@dataclass(frozen=True)
class CreateTableStatement(_Statement):
    keyspace: str
    table: str
    columns: Tuple[Tuple[str, str], ...]
    partition_keys: Tuple[str, ...]
    clustering_columns: Tuple[str, ...] = ()
    clustering_orders: Tuple[str, ...] = ()

    optional_slots = ("clustering_columns", "clustering_orders")

    def primary_key(self) -> str:
        parts = ["(" + ", ".join(self.partition_keys) + ")", *self.clustering_columns]
        return ", ".join(parts)

    def clustering_order(self) -> str:
        if not self.clustering_orders:
            return ""
        orders = ", ".join(
            f"{column} {order}"
            for column, order in zip(self.clustering_columns, self.clustering_orders)
        )
        return f" with clustering order by ({orders})"

    def render(self) -> str:
        column_defs = "".join(f"  {name} {type_def},\n" for name, type_def in self.columns)
        return (
            f"create table if not exists {self.keyspace}.{self.table} (\n"
            f"{column_defs}"
            f"  primary key ({self.primary_key()})\n"
            f"){self.clustering_order()};\n"
        )


@dataclass(frozen=True)
class DropStatement(_Statement):
    kind: str  # "table", "type" or "keyspace"
    target: str

    def render(self) -> str:
        return f"drop {self.kind} {self.target};\n"


@dataclass(frozen=True)
class TruncateStatement(_Statement):
    target: str

    def render(self) -> str:
        return f"truncate {self.target};\n"


@dataclass(frozen=True)
class InsertStatement(_Statement):
    keyspace: str
    table: str
    columns: Tuple[str, ...]
    placeholders: Tuple[str, ...]

    def __post_init__(self) -> None:
        super().__post_init__()
        if len(self.columns) != len(self.placeholders):
            raise ValueError(
                f"InsertStatement: {len(self.columns)} columns but "
                f"{len(self.placeholders)} placeholders"
            )

    def render(self) -> str:
        return (
            f"insert into {self.keyspace}.{self.table}\n"
            f"( {', '.join(self.columns)} )\n"
            f"values\n"
            f"( {', '.join(self.placeholders)} );\n"
        )


@dataclass(frozen=True)
class SelectStatement(_Statement):
    keyspace: str
    table: str
    predicate: str
    limit: int = DEFAULT_LIMIT

    def render(self) -> str:
        return (
            f"select * from {self.keyspace}.{self.table}\n"
            f"where {self.predicate}\n"
            f"limit {self.limit};\n"
        )


@dataclass(frozen=True)
class UpdateStatement(_Statement):
    keyspace: str
    table: str
    assignments: str
    predicate: str

    def render(self) -> str:
        return (
            f"update {self.keyspace}.{self.table}\n"
            f"set {self.assignments}\n"
            f"where {self.predicate};\n"
        )
