"""cqlgen: compile CQL schema models into benchmark workload definitions."""

__version__ = "0.1.0"
