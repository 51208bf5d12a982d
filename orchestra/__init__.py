"""Multi-Agent Deliverable Orchestration.

Turns a free-text request into a phased plan of specialist agent calls,
runs it with phase-scoped concurrency, and merges the outputs into one
deliverable with a cost breakdown.
"""

__version__ = "1.0.0"
