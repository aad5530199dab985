"""Per-compile state handed to every statement generator."""

import re
from dataclasses import dataclass
from cqlgen.config.exporter import ExporterConfig
from cqlgen.errors import ConfigurationError
from cqlgen.generation.bindings import (
    BindingsAccumulator,
    CQL_DEFAULT_BINDINGS,
    library_from_mapping,
)
from cqlgen.generation.naming import NamingRegistry


@dataclass
class CompileContext:
    """Naming registry, bindings and configuration owned by a single compile."""

    config: ExporterConfig
    namer: NamingRegistry
    bindings: BindingsAccumulator

    @classmethod
    def create(cls, config: ExporterConfig) -> "CompileContext":
        """Build fresh registries for one compile run."""
        namer = NamingRegistry(config.naming_template)
        libraries = []
        if config.type_bindings:
            try:
                libraries.append(library_from_mapping("type_bindings", config.type_bindings))
            except re.error as e:
                raise ConfigurationError(f"Invalid pattern in 'type_bindings': {e}") from e
        libraries.append(CQL_DEFAULT_BINDINGS)
        return cls(config=config, namer=namer, bindings=BindingsAccumulator(namer, libraries))

    def timeout(self, kind: str) -> float:
        return self.config.timeouts[kind]
