"""Derive weighted read/write shares from raw table operation counts."""

from cqlgen.generation.ratios import READS_ATTRIBUTE, WRITES_ATTRIBUTE
from cqlgen.ir.schema import SchemaModel, TableStats
from cqlgen.config.logging import get_logger

logger = get_logger(__name__)

READ_COUNT_ATTRIBUTE = "Local read count"
WRITE_COUNT_ATTRIBUTE = "Local write count"


class RatioCalculator:
    """
    Sets ``weighted_reads`` and ``weighted_writes`` on every table with statistics.

    Each weight is the table's read (or write) count divided by the total number
    of reads and writes over all tables with statistics, so the weights of the
    whole schema add up to 1.
    """

    name = "ratio_calculator"

    def apply(self, model: SchemaModel) -> SchemaModel:
        counts = {}
        for table in model.tables:
            if table.has_stats:
                counts[table.full_name] = (
                    table.stats.numeric(READ_COUNT_ATTRIBUTE, table.full_name),
                    table.stats.numeric(WRITE_COUNT_ATTRIBUTE, table.full_name),
                )
        total = sum(reads + writes for reads, writes in counts.values())
        if counts and total == 0:
            logger.warning("No reads or writes recorded for any table; all weights will be 0")

        tables = []
        for table in model.tables:
            if table.full_name in counts:
                reads, writes = counts[table.full_name]
                attributes = dict(table.stats.attributes)
                attributes[READS_ATTRIBUTE] = reads / total if total else 0.0
                attributes[WRITES_ATTRIBUTE] = writes / total if total else 0.0
                table = table.model_copy(update={"stats": TableStats(attributes=attributes)})
            tables.append(table)
        return model.model_copy(update={"tables": tables})
