"""Exceptions raised while compiling a schema model into a workload.

Every one of these aborts the compile; no partial workload is produced.
"""


class WorkloadCompileError(Exception):
    """Base class for fatal compile errors."""

    pass


class ConfigurationError(WorkloadCompileError):
    """Raised when the exporter configuration is missing, malformed or unknown."""

    pass


class BlockPlanError(ConfigurationError):
    """Raised when a block plan cannot be assembled into a block."""

    pass


class NameCollisionError(WorkloadCompileError):
    """Raised when two different elements would receive the same generated name."""

    pass


class BindingResolutionError(WorkloadCompileError):
    """Raised when no binding library can produce a recipe for a column type."""

    pass


class StatisticError(WorkloadCompileError):
    """Raised when a table statistic needed for a calculation is missing or not numeric."""

    pass
