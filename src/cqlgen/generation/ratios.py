"""Op mixing ratios and partition moduli derived from table statistics."""

import math
from typing import TYPE_CHECKING
from cqlgen.config.logging import get_logger
from cqlgen.ir.schema import ColumnDef, Table

if TYPE_CHECKING:
    from cqlgen.generation.bindings import Binding
    from cqlgen.generation.context import CompileContext

logger = get_logger(__name__)

# Scale for turning fractional weights into integer ratios
RESOLUTION = 10000

READS_ATTRIBUTE = "weighted_reads"
WRITES_ATTRIBUTE = "weighted_writes"
PARTITIONS_ATTRIBUTE = "Number of partitions (estimate)"


def read_ratio_for(table: Table) -> int:
    """Read weight of a table; 1 when the table has no statistics."""
    if not table.has_stats:
        return 1
    return int(table.stats.numeric(READS_ATTRIBUTE, table.full_name) * RESOLUTION)


def write_ratio_for(table: Table) -> int:
    """Write weight of a table; 1 when the table has no statistics."""
    if not table.has_stats:
        return 1
    return int(table.stats.numeric(WRITES_ATTRIBUTE, table.full_name) * RESOLUTION)


def total_ratio_for(table: Table) -> int:
    if not table.has_stats:
        return 1
    return read_ratio_for(table) + write_ratio_for(table)


def quantize_modulo_by_magnitude(modulo: int, significand: int = 1) -> int:
    """
    Round a modulus to a nearby round number.

    The bucket width is 10^z with z = max(1, digits(modulo) - 1 - significand),
    so 8734219 becomes 8700000 and 15 becomes 20. Values equidistant from both
    neighbours go to the upper one; a modulus never quantizes to zero.

    Note that the width keeps two significant digits for significand=1 and ties
    round up. The alternative reading, z = floor(log10(modulo)) - (significand - 1)
    with ties going down, maps 8734219 to 9000000 and 15 to 10, breaking the
    required results 8734219 -> 8700000, 15 -> 20 and 50 -> 50 pinned in
    test_quantize_modulo_by_magnitude. Keep this formula.

    Args:
        modulo: Positive modulus to quantize
        significand: Precision control; larger keeps more leading digits

    Returns:
        Quantized modulus
    """
    if modulo <= 0:
        raise ValueError(f"modulo must be positive, got {modulo}")
    zeroes = max(1, len(str(modulo)) - 1 - significand)
    step = 10 ** zeroes
    lower = (modulo // step) * step
    upper = lower + step
    if lower == 0 or upper - modulo <= modulo - lower:
        return upper
    return lower


def partition_modulo_for(table: Table, partition_multiplier: float) -> int:
    """Scaled partition estimate for a table with statistics, before quantization."""
    estimated = table.stats.numeric(PARTITIONS_ATTRIBUTE, table.full_name)
    return int(math.floor(estimated * partition_multiplier + 0.5))


def divided_binding(ctx: "CompileContext", table: Table, column: ColumnDef) -> "Binding":
    """
    Binding for the last partition key, limited to the table's partition count.

    Tables without statistics, or whose scaled estimate rounds to zero, get the
    plain column binding.
    """
    if not table.has_stats:
        return ctx.bindings.for_column(column)
    modulo = partition_modulo_for(table, ctx.config.partition_multiplier)
    if modulo <= 0:
        logger.info(
            f"Partition modulo for {table.full_name} is 0 after multiplier "
            f"{ctx.config.partition_multiplier}; using an unmodified binding"
        )
        return ctx.bindings.for_column(column)
    modulo = quantize_modulo_by_magnitude(modulo, 1)
    logger.info(f"Set partition modulo for {table.full_name} to {modulo}")
    return ctx.bindings.for_column(column, f"Mod({modulo}L)", modulo=modulo)
