"""Sprint board: plan tracker-exported issues into sprints.

Modules:
- config: load and validate configuration (YAML or JSON)
- io.csv_codec: export text parsing and serialization
- io.record_adapter: export rows <-> Issue objects, lossless for unknown columns
- io.store: load/save of the board state
- io.payload: JSON-shaped state exchanged with callers
- domain: Issue, BoardState, vocabularies, settings models and repositories
- engine: dependency-aware, capacity-constrained sprint planner
- services: capacity bookkeeping and sprint calendar
- validator: post-plan checks and summaries
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "io",
    "domain",
    "engine",
    "services",
    "validator",
    "cli",
]
