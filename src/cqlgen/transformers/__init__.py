"""Schema model transformers applied before compiling."""

from .base import ModelTransformer, apply_transformers
from .keyspace_filter import KeyspaceFilter
from .ratio_calculator import RatioCalculator
from .replication import ReplicationOverride
from .registry import TRANSFORMERS, build_transformers, get_transformer, register_transformer

__all__ = [
    "ModelTransformer",
    "apply_transformers",
    "KeyspaceFilter",
    "RatioCalculator",
    "ReplicationOverride",
    "TRANSFORMERS",
    "build_transformers",
    "get_transformer",
    "register_transformer",
]
