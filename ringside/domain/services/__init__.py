"""Pure domain services: status projection, ledger rules, transition rules."""

from ringside.domain.services.period_ledger import LedgerPlan, verify_history
from ringside.domain.services.status_projector import (
    project_activation_status,
    project_employment_status,
    project_status,
)
from ringside.domain.services.transition_rules import (
    TRANSITION_RULES,
    TransitionFamily,
    ensure_tag_team_partners_allow,
    ensure_transition_allowed,
    legal_source_statuses,
)

__all__ = [
    "TRANSITION_RULES",
    "LedgerPlan",
    "TransitionFamily",
    "ensure_tag_team_partners_allow",
    "ensure_transition_allowed",
    "legal_source_statuses",
    "project_activation_status",
    "project_employment_status",
    "project_status",
    "verify_history",
]
