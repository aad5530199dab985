"""Replace keyspace replication settings."""

from typing import Any, Dict, List, Optional, Union
from cqlgen.ir.schema import SchemaModel
from cqlgen.config.logging import get_logger

logger = get_logger(__name__)


class ReplicationOverride:
    """Sets the replication of every keyspace, or of the listed ones."""

    name = "replication"

    def __init__(
        self,
        replication: Union[str, Dict[str, Any]],
        keyspaces: Optional[List[str]] = None,
    ):
        self.replication = replication
        self.keyspaces = keyspaces

    def apply(self, model: SchemaModel) -> SchemaModel:
        keyspaces = []
        for keyspace in model.keyspaces:
            if self.keyspaces is None or keyspace.name in self.keyspaces:
                keyspace = keyspace.model_copy(update={"replication": self.replication})
                logger.debug(f"Replication of keyspace '{keyspace.name}' set to {keyspace.replication_data}")
            keyspaces.append(keyspace)
        return model.model_copy(update={"keyspaces": keyspaces})
