"""Policy evaluation for data product access."""

from restohub.governance.evaluator import AccessDecision, evaluate_access

__all__ = ["AccessDecision", "evaluate_access"]
