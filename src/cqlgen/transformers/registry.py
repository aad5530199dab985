"""Transformer registry for schema model transformers."""

import re
from typing import Any, Callable, Dict, List
from cqlgen.config.exporter import TransformerSpec
from cqlgen.errors import ConfigurationError
from .base import ModelTransformer
from .keyspace_filter import KeyspaceFilter
from .ratio_calculator import RatioCalculator
from .replication import ReplicationOverride
from cqlgen.config.logging import get_logger

logger = get_logger(__name__)

# Registry of transformer factories
TRANSFORMERS: Dict[str, Callable[[Dict[str, Any]], ModelTransformer]] = {
    "keyspace_filter": lambda cfg: KeyspaceFilter(**cfg),
    "replication": lambda cfg: ReplicationOverride(**cfg),
    "ratio_calculator": lambda cfg: RatioCalculator(**cfg),
}


def get_transformer(name: str, config: Dict[str, Any] | None = None) -> ModelTransformer:
    """
    Get a transformer instance by name.

    Args:
        name: Transformer name (e.g., "keyspace_filter", "replication")
        config: Optional configuration dict

    Returns:
        ModelTransformer instance

    Raises:
        ConfigurationError: If the name is unknown or the configuration does
            not fit the transformer
    """
    if config is None:
        config = {}

    if name not in TRANSFORMERS:
        available = ", ".join(sorted(TRANSFORMERS.keys()))
        raise ConfigurationError(
            f"Model transformer '{name}' not found. Available transformers: {available}"
        )

    factory = TRANSFORMERS[name]
    try:
        return factory(config)
    except (TypeError, re.error) as e:
        raise ConfigurationError(f"Invalid configuration for model transformer '{name}': {e}") from e


def build_transformers(specs: List[TransformerSpec]) -> List[ModelTransformer]:
    """Instantiate the configured transformers, in order."""
    return [get_transformer(spec.name, spec.config) for spec in specs]


def register_transformer(name: str, factory: Callable[[Dict[str, Any]], ModelTransformer]):
    """
    Register a new transformer factory.

    Args:
        name: Transformer name
        factory: Factory function that takes config dict and returns ModelTransformer
    """
    TRANSFORMERS[name] = factory
    logger.info(f"Registered model transformer: {name}")


def list_transformers() -> list[str]:
    return sorted(TRANSFORMERS.keys())
