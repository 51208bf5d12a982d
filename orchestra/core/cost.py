"""Cost accounting across a run's agent executions."""

from typing import Iterable

from orchestra.core.schemas import AgentExecution, CostBreakdown


def calculate_costs(executions: Iterable[AgentExecution]) -> CostBreakdown:
    """Aggregate execution costs by agent, model and phase.

    Failed executions carry zero cost and still appear in every grouping.
    ``total`` is accumulated in trace order, so it equals ``sum()`` over the
    same list exactly.
    """
    breakdown = CostBreakdown()

    for execution in executions:
        cost = execution.cost
        breakdown.by_agent[execution.agent_id] = breakdown.by_agent.get(execution.agent_id, 0.0) + cost
        breakdown.by_model[execution.model] = breakdown.by_model.get(execution.model, 0.0) + cost
        phase = execution.phase or "unknown"
        breakdown.by_phase[phase] = breakdown.by_phase.get(phase, 0.0) + cost
        breakdown.total += cost

    return breakdown
