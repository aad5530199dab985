"""Block planning and per-block timeout normalization."""

from typing import Any, Dict, List
from cqlgen.config.logging import get_logger
from cqlgen.errors import BlockPlanError
from cqlgen.ir.schema import SchemaModel
from cqlgen.ir.workload import BlockComponent
from .context import CompileContext
from .generators import generator_for

logger = get_logger(__name__)


def simplify_timeouts(block: Dict[str, Any]) -> Dict[str, Any]:
    """
    Hoist a timeout shared by every op of a block into the block params.

    When all ops carry the same timeout it becomes ``params.timeout`` and is
    removed from the ops. With differing timeouts, or no ops, the block is left
    unchanged.
    """
    ops: Dict[str, Dict[str, Any]] = block.get("ops", {})
    by_timeout: Dict[float, List[str]] = {}
    for opname, op in ops.items():
        by_timeout.setdefault(op.get("timeout"), []).append(opname)

    if len(by_timeout) != 1:
        return block
    timeout = next(iter(by_timeout))
    if timeout is None:
        return block

    block.setdefault("params", {})["timeout"] = timeout
    block["ops"] = {
        opname: {k: v for k, v in op.items() if k != "timeout"} for opname, op in ops.items()
    }
    return block


def plan_block(
    ctx: CompileContext, model: SchemaModel, blockname: str, components: List[BlockComponent]
) -> Dict[str, Any]:
    """
    Assemble one block from its components, in order.

    Raises:
        BlockPlanError: If two components produce ops with the same name
    """
    ops: Dict[str, Dict[str, Any]] = {}
    for component in components:
        fragment = generator_for(component)(ctx, model, blockname)
        for opname, op in fragment.items():
            if opname in ops:
                raise BlockPlanError(
                    f"block '{blockname}': op '{opname}' from component "
                    f"'{BlockComponent(component).value}' is already defined in this block"
                )
            ops[opname] = op
    logger.debug(f"Block '{blockname}' assembled with {len(ops)} ops from {len(components)} components")
    return simplify_timeouts({"params": {}, "ops": ops})


def plan_blocks(ctx: CompileContext, model: SchemaModel) -> Dict[str, Dict[str, Any]]:
    """Assemble every block of the configured plan, in plan order."""
    return {
        blockname: plan_block(ctx, model, blockname, components)
        for blockname, components in ctx.config.blockplan.items()
    }
