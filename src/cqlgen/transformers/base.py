"""Base protocol for schema model transformers."""

from typing import Iterable, Protocol
from cqlgen.ir.schema import SchemaModel
from cqlgen.config.logging import get_logger

logger = get_logger(__name__)


class ModelTransformer(Protocol):
    """
    Protocol for transformers applied to the schema model before compiling.

    Transformers never modify the model they receive; they return a new one.
    """

    name: str

    def apply(self, model: SchemaModel) -> SchemaModel:
        """
        Transform a schema model.

        Args:
            model: Model to transform

        Returns:
            Transformed model
        """
        ...


def apply_transformers(model: SchemaModel, transformers: Iterable[ModelTransformer]) -> SchemaModel:
    """Run transformers in order, each one on the previous one's output."""
    for transformer in transformers:
        model = transformer.apply(model)
        logger.debug(
            f"Applied transformer '{transformer.name}': {len(model.keyspaces)} keyspaces, "
            f"{len(model.types)} types, {len(model.tables)} tables"
        )
    return model
