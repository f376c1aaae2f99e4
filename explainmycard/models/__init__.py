from explainmycard.models.badge import Role, RoleBadge, Speed
from explainmycard.models.card import CardFacts, lookup_key
from explainmycard.models.document import DocumentSection, ExplainDocument
from explainmycard.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    create_success,
    create_unknown_failure,
    finalize_response,
)
from explainmycard.models.mechanics import MECHANIC_NAMES, MechanicSet
from explainmycard.models.tags import TAG_VOCABULARY, TagSet

__all__ = [
    "MECHANIC_NAMES",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "TAG_VOCABULARY",
    "ApiResponse",
    "CardFacts",
    "DocumentSection",
    "ExplainDocument",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "MechanicSet",
    "OutcomeType",
    "Role",
    "RoleBadge",
    "Speed",
    "TagSet",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "lookup_key",
]
