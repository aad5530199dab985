"""Workload assembly: schema model + exporter config -> workload document."""

import time
from typing import Any, Dict, List, Optional
from cqlgen.config.exporter import ExporterConfig
from cqlgen.config.logging import get_logger
from cqlgen.ir.schema import SchemaModel
from cqlgen.ir.workload import DESCRIPTION, default_scenarios
from cqlgen.transformers import ModelTransformer, apply_transformers, build_transformers
from .context import CompileContext
from .planner import plan_blocks

logger = get_logger(__name__)


class WorkloadExporter:
    """
    Compiles one schema model into workload documents.

    The unit of generation is everything in the model: a model holding a single
    table yields a workload for that table only, a full schema yields ops for
    every keyspace, type and table it declares.
    """

    def __init__(
        self,
        model: SchemaModel,
        config: ExporterConfig,
        transformers: Optional[List[ModelTransformer]] = None,
    ):
        """
        Initialize the exporter.

        Args:
            model: Parsed schema model
            config: Exporter configuration
            transformers: Model transformers to apply first; defaults to the
                ones named in the configuration
        """
        if transformers is None:
            transformers = build_transformers(config.model_transformers)
        self.model = apply_transformers(model, transformers)
        self.config = config

    def generate_blocks(self) -> Dict[str, Any]:
        """
        Build the workload document.

        Each call compiles with fresh naming and binding registries, so repeated
        calls return equal documents.

        Returns:
            Mapping with keys description, scenarios, bindings and blocks, in
            generation order

        Raises:
            WorkloadCompileError: On any fatal naming, binding, statistic or
                block plan problem; no document is produced
        """
        start = time.time()
        ctx = CompileContext.create(self.config)
        ctx.namer.inform_of_all_known_names(self.model)

        blocks = plan_blocks(ctx, self.model)

        workload: Dict[str, Any] = {
            "description": DESCRIPTION,
            "scenarios": default_scenarios(),
            "bindings": ctx.bindings.accumulated_bindings(),
            "blocks": blocks,
        }
        op_count = sum(len(block["ops"]) for block in blocks.values())
        logger.info(
            f"Generated {len(blocks)} blocks with {op_count} ops and "
            f"{len(workload['bindings'])} bindings in {time.time() - start:.3f} seconds"
        )
        return workload


def compile_workload(
    model: SchemaModel,
    config: ExporterConfig,
    transformers: Optional[List[ModelTransformer]] = None,
) -> Dict[str, Any]:
    """Compile a schema model into a workload document in one call."""
    return WorkloadExporter(model, config, transformers).generate_blocks()
