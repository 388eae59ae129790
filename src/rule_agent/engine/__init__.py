from rule_agent.engine.orchestrator import (
    RuleAgent,
    create_agent,
    create_context,
    create_file_info,
    create_route_info,
    run_rule_agent,
)
from rule_agent.engine.scoring import aggregate, collect_recommendations, gate_verdict, summarize, weighted_score

__all__ = [
    "RuleAgent",
    "aggregate",
    "collect_recommendations",
    "create_agent",
    "create_context",
    "create_file_info",
    "create_route_info",
    "gate_verdict",
    "run_rule_agent",
    "summarize",
    "weighted_score",
]
