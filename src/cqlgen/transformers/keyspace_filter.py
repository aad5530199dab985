"""Keep only the keyspaces selected by include/exclude patterns."""

import re
from typing import List, Optional
from cqlgen.ir.schema import SchemaModel
from cqlgen.config.logging import get_logger

logger = get_logger(__name__)


class KeyspaceFilter:
    """Drops keyspaces, and their types and tables, outside the selection."""

    name = "keyspace_filter"

    def __init__(self, include: Optional[List[str]] = None, exclude: Optional[List[str]] = None):
        """
        Initialize the filter.

        Args:
            include: Patterns a keyspace name must fully match (all keyspaces if empty)
            exclude: Patterns that remove a keyspace even if it is included
        """
        self.include = [re.compile(p) for p in include or []]
        self.exclude = [re.compile(p) for p in exclude or []]

    def selects(self, keyspace: str) -> bool:
        if self.include and not any(p.fullmatch(keyspace) for p in self.include):
            return False
        return not any(p.fullmatch(keyspace) for p in self.exclude)

    def apply(self, model: SchemaModel) -> SchemaModel:
        keyspaces = [k for k in model.keyspaces if self.selects(k.name)]
        types = [t for t in model.types if self.selects(t.keyspace)]
        tables = [t for t in model.tables if self.selects(t.keyspace)]
        dropped = len(model.tables) - len(tables)
        if dropped:
            logger.info(f"Keyspace filter removed {dropped} tables")
        return model.model_copy(update={"keyspaces": keyspaces, "types": types, "tables": tables})
