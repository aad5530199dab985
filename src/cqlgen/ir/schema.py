"""Schema model for parsed CQL keyspaces, types and tables."""

from typing import Any, Dict, List, Optional, Literal, Union
from pydantic import BaseModel, Field, field_validator, model_validator
from cqlgen.errors import StatisticError

ColumnRole = Literal["partition_key", "clustering_key", "regular", "counter"]
ClusteringOrder = Literal["asc", "desc"]

KEY_ROLES = ("partition_key", "clustering_key")


class Keyspace(BaseModel):
    """Specification for a keyspace."""

    name: str
    # Either the text between the braces of a replication map, or the map itself
    replication: Union[str, Dict[str, Any]] = (
        "'class': 'SimpleStrategy', 'replication_factor': '1'"
    )
    durable_writes: bool = True

    @model_validator(mode="after")
    def check_replication(self) -> "Keyspace":
        if not self.replication_data:
            raise ValueError(f"keyspace '{self.name}': replication settings are empty")
        return self

    @property
    def replication_data(self) -> str:
        """Replication settings as the body of a CQL map literal."""
        if isinstance(self.replication, str):
            return self.replication.strip().removeprefix("{").removesuffix("}").strip()
        return ", ".join(f"'{k}': '{v}'" for k, v in self.replication.items())


class UserType(BaseModel):
    """Specification for a user-defined type."""

    keyspace: str
    name: str
    fields: Dict[str, str]

    @model_validator(mode="after")
    def check_fields(self) -> "UserType":
        if not self.fields:
            raise ValueError(f"type '{self.full_name}' declares no fields")
        return self

    @property
    def full_name(self) -> str:
        return f"{self.keyspace}.{self.name}"


class ColumnDef(BaseModel):
    """Specification for a table column."""

    name: str
    type_def: str
    role: ColumnRole = "regular"
    # Filled in by the owning table
    keyspace: Optional[str] = None
    table: Optional[str] = None

    @property
    def trimmed_type_def(self) -> str:
        return " ".join(self.type_def.split())

    @property
    def is_counter(self) -> bool:
        return self.trimmed_type_def.lower() == "counter"

    @property
    def is_key(self) -> bool:
        return self.role in KEY_ROLES

    @property
    def full_name(self) -> str:
        return f"{self.keyspace}.{self.table}.{self.name}"


class TableStats(BaseModel):
    """Free-form table statistics, e.g. as reported by nodetool tablestats."""

    attributes: Dict[str, Union[float, int, str]] = Field(default_factory=dict)

    def get_attribute(self, name: str) -> Optional[str]:
        value = self.attributes.get(name)
        return None if value is None else str(value)

    def numeric(self, name: str, owner: str) -> float:
        """
        Read a statistic as a number.

        Args:
            name: Attribute name
            owner: Qualified name of the table, used in error messages

        Raises:
            StatisticError: If the attribute is missing or not numeric
        """
        value = self.get_attribute(name)
        if value is None:
            raise StatisticError(
                f"table '{owner}' has statistics but no '{name}' attribute. "
                f"Known attributes: {list(self.attributes)}"
            )
        try:
            return float(value.replace(",", ""))
        except ValueError as e:
            raise StatisticError(
                f"table '{owner}': statistic '{name}' is not numeric: '{value}'"
            ) from e

    def __len__(self) -> int:
        return len(self.attributes)


class Table(BaseModel):
    """Specification for a table and its primary key structure."""

    keyspace: str
    name: str
    columns: List[ColumnDef]
    partition_keys: List[str]
    clustering_columns: List[str] = Field(default_factory=list)
    clustering_orders: List[ClusteringOrder] = Field(default_factory=list)
    stats: Optional[TableStats] = None
    compact_storage: bool = False

    @field_validator("clustering_orders", mode="before")
    @classmethod
    def normalize_orders(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [str(o).strip().lower() for o in v]
        return v

    @model_validator(mode="after")
    def bind_columns(self) -> "Table":
        """Attach columns to this table and derive their roles from the key lists."""
        names = [c.name for c in self.columns]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"{self.full_name}: duplicate columns {duplicates}")
        if not self.partition_keys:
            raise ValueError(f"{self.full_name}: at least one partition key is required")
        keys = self.partition_keys + self.clustering_columns
        repeated = sorted({k for k in keys if keys.count(k) > 1})
        if repeated:
            raise ValueError(
                f"{self.full_name}: key columns {repeated} appear more than once "
                f"in partition_keys and clustering_columns"
            )
        for key in keys:
            if key not in names:
                raise ValueError(f"{self.full_name}: key column '{key}' is not defined")
        if len(self.clustering_orders) > len(self.clustering_columns):
            raise ValueError(
                f"{self.full_name}: {len(self.clustering_orders)} clustering orders "
                f"for {len(self.clustering_columns)} clustering columns"
            )

        # Bind copies; column instances may be shared with other tables
        self.columns = [c.model_copy() for c in self.columns]
        for column in self.columns:
            if column.is_key and column.name not in keys:
                raise ValueError(
                    f"{self.full_name}: column '{column.name}' declared as {column.role} "
                    f"but missing from the key lists"
                )
            column.keyspace = self.keyspace
            column.table = self.name
            if column.name in self.partition_keys:
                column.role = "partition_key"
            elif column.name in self.clustering_columns:
                column.role = "clustering_key"
            elif column.is_counter:
                column.role = "counter"
        return self

    @property
    def full_name(self) -> str:
        return f"{self.keyspace}.{self.name}"

    @property
    def has_stats(self) -> bool:
        return self.stats is not None and len(self.stats) > 0

    def column(self, name: str) -> ColumnDef:
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(f"{self.full_name}: no column named '{name}'")

    @property
    def partition_key_columns(self) -> List[ColumnDef]:
        return [self.column(n) for n in self.partition_keys]

    @property
    def clustering_key_columns(self) -> List[ColumnDef]:
        return [self.column(n) for n in self.clustering_columns]

    @property
    def non_key_columns(self) -> List[ColumnDef]:
        return [c for c in self.columns if not c.is_key]

    def is_last_partition_key(self, column: ColumnDef) -> bool:
        return column.name == self.partition_keys[-1]

    @property
    def is_counter_table(self) -> bool:
        return any(c.is_counter for c in self.columns)


class SchemaModel(BaseModel):
    """Parsed schema: keyspaces, user types and tables in declaration order."""

    keyspaces: List[Keyspace] = Field(default_factory=list)
    types: List[UserType] = Field(default_factory=list)
    tables: List[Table] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_names(self) -> "SchemaModel":
        for kind, names in (
            ("keyspace", [k.name for k in self.keyspaces]),
            ("type", [t.full_name for t in self.types]),
            ("table", [t.full_name for t in self.tables]),
        ):
            seen = set()
            for name in names:
                if name in seen:
                    raise ValueError(f"{kind} '{name}' is defined more than once")
                seen.add(name)
        return self

    def tables_by_keyspace(self) -> Dict[str, List[Table]]:
        """Tables grouped by keyspace, keyspaces in order of first appearance."""
        grouped: Dict[str, List[Table]] = {}
        for table in self.tables:
            grouped.setdefault(table.keyspace, []).append(table)
        return grouped

    def types_by_keyspace(self) -> Dict[str, List[UserType]]:
        """User types grouped by keyspace, keyspaces in order of first appearance."""
        grouped: Dict[str, List[UserType]] = {}
        for user_type in self.types:
            grouped.setdefault(user_type.keyspace, []).append(user_type)
        return grouped
