"""Orchestration core for the gog client.

Key Components:
    - CommandOrchestrator: Façade called by command handlers; signs
      authored text and applies repository defaults
    - LabelResolver: Label name to repository-scoped id resolution
    - RepoAggregator: Bounded-concurrency, order-preserving issue fan-out
    - commands: One frozen dataclass per client operation
"""

from gogs_cli.engine.aggregator import RepoAggregator
from gogs_cli.engine.labels import LabelResolver
from gogs_cli.engine.orchestrator import CommandOrchestrator

__all__ = ["CommandOrchestrator", "LabelResolver", "RepoAggregator"]
