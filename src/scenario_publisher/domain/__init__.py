"""Domain layer: errors, node graph, constants."""

from .errors import (
    ConfigError,
    EnrichmentWarning,
    ErrorCodes,
    GraphInvariantError,
    ParseError,
    PublisherError,
    SerializationError,
    SnapshotLoadError,
    WarningCodes,
)
from .nodes import (
    ActionWord,
    Argument,
    Call,
    Dataset,
    Node,
    NodeGraph,
    NodeKind,
    Parameter,
    Project,
    Scenario,
    Step,
    Value,
    ValueKind,
)

__all__ = [
    # errors
    "PublisherError",
    "ParseError",
    "SnapshotLoadError",
    "SerializationError",
    "GraphInvariantError",
    "ConfigError",
    "EnrichmentWarning",
    "ErrorCodes",
    "WarningCodes",
    # nodes
    "Node",
    "NodeKind",
    "NodeGraph",
    "Project",
    "Scenario",
    "ActionWord",
    "Parameter",
    "Call",
    "Argument",
    "Step",
    "Value",
    "ValueKind",
    "Dataset",
]
