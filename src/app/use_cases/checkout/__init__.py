"""Use case de checkout de investimento na DealMaker."""

from app.use_cases.checkout.orchestrator import CheckoutConfig, CheckoutOrchestrator
from app.use_cases.checkout.policy import STEP_POLICIES, is_best_effort, policy_for

__all__ = [
    "STEP_POLICIES",
    "CheckoutConfig",
    "CheckoutOrchestrator",
    "is_best_effort",
    "policy_for",
]
