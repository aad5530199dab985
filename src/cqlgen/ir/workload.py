"""Workload document vocabulary: block components and op templates."""

from enum import Enum
from typing import Any, Dict


class BlockComponent(str, Enum):
    """Component tags accepted in a block plan, one per statement generator."""

    SCHEMA_KEYSPACES = "schema-keyspaces"
    SCHEMA_TYPES = "schema-types"
    SCHEMA_TABLES = "schema-tables"
    DROP_TYPES = "drop-types"
    DROP_TABLES = "drop-tables"
    DROP_KEYSPACES = "drop-keyspaces"
    TRUNCATE_TABLES = "truncate-tables"
    INSERT = "insert"
    SELECT = "select"
    SCAN_10 = "scan-10"
    UPDATE = "update"

    @classmethod
    def known_tags(cls) -> list[str]:
        return [c.value for c in cls]


# Op name -> op template ({"simple"|"prepared": text, "timeout": s, "ratio": n})
OpTemplate = Dict[str, Any]
BlockFragment = Dict[str, OpTemplate]

DESCRIPTION = "Auto-generated workload from source schema."


def _run(tags: str, threads: str = "threads===UNDEF", cycles: str = "cycles===UNDEF") -> str:
    return f"run driver=cql tags=block:'{tags}' {threads} {cycles}"


def default_scenarios() -> Dict[str, Any]:
    """Static scenario shortcuts; they reference block-name patterns only."""
    return {
        "default": {
            "schema": _run("schema-.*"),
            "rampup": _run(
                "rampup-.*", "threads=auto", "cycles===TEMPLATE(rampup-cycles,10000)"
            ),
            "main": _run("main-.*", "threads=auto", "cycles===TEMPLATE(main-cycles,10000)"),
        },
        "truncate": _run("truncate-.*"),
        "schema-keyspaces": _run("schema-keyspaces"),
        "schema-types": _run("schema-types"),
        "schema-tables": _run("schema-tables"),
        "drop": _run("drop-.*"),
        "drop-tables": _run("drop-tables"),
        "drop-types": _run("drop-types"),
        "drop-keyspaces": _run("drop-keyspaces"),
    }
