"""Statement generators, one per block component.

Every generator has the signature ``(ctx, model, blockname) -> BlockFragment``
and walks the schema in declaration order, so the ops it returns are ordered
deterministically.
"""

from typing import Callable, Dict, List
from cqlgen.config.logging import get_logger
from cqlgen.errors import BlockPlanError
from cqlgen.ir.schema import ColumnDef, SchemaModel, Table
from cqlgen.ir.workload import BlockComponent, BlockFragment
from .context import CompileContext
from .ratios import divided_binding, read_ratio_for, total_ratio_for, write_ratio_for
from .statements import (
    PREDICATE_JOINER,
    CreateKeyspaceStatement,
    CreateTableStatement,
    CreateTypeStatement,
    DropStatement,
    InsertStatement,
    SelectStatement,
    TruncateStatement,
    UpdateStatement,
)

logger = get_logger(__name__)

Generator = Callable[[CompileContext, SchemaModel, str], BlockFragment]


def predicate_columns(table: Table, keycount: int) -> List[ColumnDef]:
    """
    Select the key columns a predicate qualifies.

    Key columns are the partition keys followed by the clustering columns.
    If keycount is 0, all of them are used. If keycount is positive, only that
    many are kept; if negative, that many are removed. Columns are removed from
    the innermost (rightmost) end first, and never below the full partition key.
    """
    keys = table.partition_key_columns + table.clustering_key_columns
    if keycount > 0:
        keep = min(keycount, len(keys))
    elif keycount < 0:
        keep = len(keys) + keycount
    else:
        keep = len(keys)

    minimum = len(table.partition_keys)
    if keep < minimum:
        logger.debug(
            f"minimum keycount for {table.full_name} adjusted from {keep} to {minimum}"
        )
        keep = minimum
    return keys[:keep]


def gen_predicate(ctx: CompileContext, table: Table, keycount: int) -> str:
    return PREDICATE_JOINER.join(
        f"{column.name}={ctx.bindings.for_column(column).placeholder}"
        for column in predicate_columns(table, keycount)
    )


def gen_assignments(ctx: CompileContext, table: Table) -> str:
    assignments = []
    for column in table.non_key_columns:
        placeholder = ctx.bindings.for_column(column).placeholder
        if column.is_counter:
            assignments.append(f"{column.name}={column.name}+{placeholder}")
        else:
            assignments.append(f"{column.name}={placeholder}")
    return ", ".join(assignments)


def gen_create_keyspaces(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for keyspace in model.keyspaces:
        statement = CreateKeyspaceStatement(
            keyspace=keyspace.name,
            replication=keyspace.replication_data,
            durable_writes=keyspace.durable_writes,
        )
        ops[ctx.namer.name_for(keyspace, optype="create-keyspace", blockname=blockname)] = {
            "simple": statement.render(),
            "timeout": ctx.timeout("create"),
        }
    return ops


def gen_create_types(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for user_types in model.types_by_keyspace().values():
        for user_type in user_types:
            statement = CreateTypeStatement(
                keyspace=user_type.keyspace,
                name=user_type.name,
                fields=tuple(user_type.fields.items()),
            )
            ops[ctx.namer.name_for(user_type, optype="create-type", blockname=blockname)] = {
                "simple": statement.render(),
                "timeout": ctx.timeout("create"),
            }
    return ops


def gen_create_tables(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for tables in model.tables_by_keyspace().values():
        for table in tables:
            # Only this generator elides; the DML generators still emit ops for the table
            if ctx.config.elide_unused_tables and total_ratio_for(table) == 0:
                logger.warning(
                    f"eliding table {table.full_name} from block '{blockname}' since its "
                    f"total op ratio was 0; other ops in the workload may still reference it"
                )
                continue
            if table.compact_storage:
                logger.warning(
                    f"COMPACT STORAGE is not supported, eliding this option for table "
                    f"'{table.full_name}'"
                )
            statement = CreateTableStatement(
                keyspace=table.keyspace,
                table=table.name,
                columns=tuple((c.name, c.trimmed_type_def) for c in table.columns),
                partition_keys=tuple(table.partition_keys),
                clustering_columns=tuple(table.clustering_columns),
                clustering_orders=tuple(table.clustering_orders),
            )
            ops[ctx.namer.name_for(table, optype="create-table", blockname=blockname)] = {
                "simple": statement.render(),
                "timeout": ctx.timeout("create"),
            }
    return ops


def gen_drop_types(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for user_type in model.types:
        ops[ctx.namer.name_for(user_type, optype="drop-type", blockname=blockname)] = {
            "simple": DropStatement(kind="type", target=user_type.full_name).render(),
            "timeout": ctx.timeout("drop"),
        }
    return ops


def gen_drop_tables(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for table in model.tables:
        ops[ctx.namer.name_for(table, optype="drop-table", blockname=blockname)] = {
            "simple": DropStatement(kind="table", target=table.full_name).render(),
            "timeout": ctx.timeout("drop"),
        }
    return ops


def gen_drop_keyspaces(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for keyspace in model.keyspaces:
        ops[ctx.namer.name_for(keyspace, optype="drop-keyspace", blockname=blockname)] = {
            "simple": DropStatement(kind="keyspace", target=keyspace.name).render(),
            "timeout": ctx.timeout("drop"),
        }
    return ops


def gen_truncate_tables(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for table in model.tables:
        ops[ctx.namer.name_for(table, optype="truncate", blockname=blockname)] = {
            "simple": TruncateStatement(target=table.full_name).render(),
            "timeout": ctx.timeout("truncate"),
        }
    return ops


def gen_inserts(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for table in model.tables:
        if table.is_counter_table:
            logger.warning(
                f"counter table '{table.full_name}' cannot be written with insert; "
                f"emitting the insert op anyway"
            )
        placeholders = []
        for column in table.columns:
            if table.is_last_partition_key(column):
                binding = divided_binding(ctx, table, column)
            else:
                binding = ctx.bindings.for_column(column)
            placeholders.append(binding.placeholder)
        statement = InsertStatement(
            keyspace=table.keyspace,
            table=table.name,
            columns=tuple(c.name for c in table.columns),
            placeholders=tuple(placeholders),
        )
        ops[ctx.namer.name_for(table, optype="insert", blockname=blockname)] = {
            "prepared": statement.render(),
            "timeout": ctx.timeout("insert"),
            "ratio": write_ratio_for(table),
        }
    return ops


def gen_selects(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for table in model.tables:
        statement = SelectStatement(
            keyspace=table.keyspace,
            table=table.name,
            predicate=gen_predicate(ctx, table, 0),
        )
        ops[ctx.namer.name_for(table, optype="select", blockname=blockname)] = {
            "prepared": statement.render(),
            "timeout": ctx.timeout("select"),
            "ratio": read_ratio_for(table),
        }
    return ops


def gen_scans(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for table in model.tables:
        # Partition keys only: a scan reads the head of one partition
        statement = SelectStatement(
            keyspace=table.keyspace,
            table=table.name,
            predicate=gen_predicate(ctx, table, len(table.partition_keys)),
        )
        ops[ctx.namer.name_for(table, optype="scan", blockname=blockname)] = {
            "prepared": statement.render(),
            "timeout": ctx.timeout("scan"),
            "ratio": read_ratio_for(table),
        }
    return ops


def gen_updates(ctx: CompileContext, model: SchemaModel, blockname: str) -> BlockFragment:
    ops: BlockFragment = {}
    for table in model.tables:
        if not table.non_key_columns:
            logger.warning(
                f"table '{table.full_name}' has no non-key columns to update; "
                f"no update op generated"
            )
            continue
        statement = UpdateStatement(
            keyspace=table.keyspace,
            table=table.name,
            assignments=gen_assignments(ctx, table),
            predicate=gen_predicate(ctx, table, 0),
        )
        ops[ctx.namer.name_for(table, optype="update", blockname=blockname)] = {
            "prepared": statement.render(),
            "timeout": ctx.timeout("update"),
            "ratio": write_ratio_for(table),
        }
    return ops


GENERATORS: Dict[BlockComponent, Generator] = {
    BlockComponent.SCHEMA_KEYSPACES: gen_create_keyspaces,
    BlockComponent.SCHEMA_TYPES: gen_create_types,
    BlockComponent.SCHEMA_TABLES: gen_create_tables,
    BlockComponent.DROP_TYPES: gen_drop_types,
    BlockComponent.DROP_TABLES: gen_drop_tables,
    BlockComponent.DROP_KEYSPACES: gen_drop_keyspaces,
    BlockComponent.TRUNCATE_TABLES: gen_truncate_tables,
    BlockComponent.INSERT: gen_inserts,
    BlockComponent.SELECT: gen_selects,
    BlockComponent.SCAN_10: gen_scans,
    BlockComponent.UPDATE: gen_updates,
}


def generator_for(component: BlockComponent) -> Generator:
    """
    Look up the generator of a block component.

    Raises:
        BlockPlanError: If the component has no generator
    """
    try:
        return GENERATORS[BlockComponent(component)]
    except (KeyError, ValueError) as e:
        raise BlockPlanError(
            f"Unable to create block entries for '{component}'. "
            f"Known components: {BlockComponent.known_tags()}"
        ) from e
