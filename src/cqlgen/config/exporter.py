"""Exporter configuration: naming, timeouts, block plan and model transformers."""

from typing import Any, Dict, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from cqlgen.errors import ConfigurationError
from cqlgen.ir.workload import BlockComponent

DEFAULT_NAMING_TEMPLATE = "[BLOCKNAME--][OPTYPE--][KEYSPACE__][TABLE__][NAME][__MODULO]"

# Seconds, per statement kind
DEFAULT_TIMEOUTS: Dict[str, float] = {
    "create": 60.0,
    "truncate": 900.0,
    "drop": 900.0,
    "scan": 30.0,
    "select": 10.0,
    "insert": 10.0,
    "delete": 10.0,
    "update": 10.0,
}


class TransformerSpec(BaseModel):
    """Reference to a model transformer and its settings."""

    name: str  # e.g., "keyspace_filter", "replication", "ratio_calculator"
    config: Dict[str, Any] = Field(default_factory=dict)


class ExporterConfig(BaseModel):
    """Options recognized by the workload exporter."""

    naming_template: str = DEFAULT_NAMING_TEMPLATE
    partition_multiplier: float = 1.0
    timeouts: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_TIMEOUTS))
    elide_unused_tables: bool = False
    blockplan: Dict[str, List[BlockComponent]]
    model_transformers: List[TransformerSpec] = Field(default_factory=list)
    # Type pattern -> binding recipe, consulted before the built-in CQL bindings
    type_bindings: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore", protected_namespaces=())

    @field_validator("partition_multiplier")
    @classmethod
    def check_multiplier(cls, v: float) -> float:
        if v < 0:
            raise ValueError("partition_multiplier must not be negative")
        return v

    @field_validator("timeouts", mode="before")
    @classmethod
    def merge_timeouts(cls, v: Any) -> Any:
        """Overlay configured timeouts on the defaults; unknown kinds are rejected."""
        if v is None:
            return dict(DEFAULT_TIMEOUTS)
        if not isinstance(v, Mapping):
            raise ValueError(f"Unrecognized type '{type(v).__name__}' for 'timeouts' config")
        merged: Dict[str, Any] = dict(DEFAULT_TIMEOUTS)
        for key, value in v.items():
            if str(key) not in DEFAULT_TIMEOUTS:
                raise ValueError(
                    f"timeout type '{key}' unknown. Known types: {list(DEFAULT_TIMEOUTS)}"
                )
            merged[str(key)] = value
        return merged

    @field_validator("blockplan", mode="before")
    @classmethod
    def split_blockplan(cls, v: Any) -> Any:
        """Accept 'tag, tag' strings or lists of tags for every block."""
        if v is None:
            raise ValueError("required parameter 'blockplan' is missing")
        if not isinstance(v, Mapping):
            raise ValueError(f"Unrecognized type '{type(v).__name__}' for 'blockplan' config")
        plan: Dict[str, List[str]] = {}
        for blockname, components in v.items():
            if isinstance(components, str):
                tags = [t.strip() for t in components.split(",") if t.strip()]
            elif isinstance(components, list):
                tags = [str(t).strip() for t in components]
            else:
                raise ValueError(
                    f"block '{blockname}': expected a list of components, "
                    f"got '{type(components).__name__}'"
                )
            for tag in tags:
                if tag not in BlockComponent.known_tags():
                    raise ValueError(
                        f"Unable to create block entries for '{tag}' in block '{blockname}'. "
                        f"Known components: {BlockComponent.known_tags()}"
                    )
            plan[str(blockname)] = tags
        return plan

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ExporterConfig":
        """
        Build a configuration from a loaded key/value document.

        Raises:
            ConfigurationError: If the document is missing required options or
                carries malformed values
        """
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"exporter configuration must be a mapping, got '{type(data).__name__}'"
            )
        if data.get("blockplan") is None:
            raise ConfigurationError(
                "Error with generate blocks, required parameter 'blockplan' is missing"
            )
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid exporter configuration: {e}") from e
