"""Application lifecycle transition policy.

Implements the state machine that decides which event type may follow an
application's current derived status:
- Submitted → InReview, PhoneScreen
- InReview → PhoneScreen, TechnicalInterview
- PhoneScreen → TechnicalInterview
- TechnicalInterview → OnsiteInterview
- OnsiteInterview → OfferReceived
- OfferReceived → OfferAccepted, OfferDeclined
- Any non-terminal state → Rejected, Withdrawn
- OfferAccepted, OfferDeclined, Rejected, Withdrawn → (terminal, no transitions)

Pure functions over EventType values; no aggregate is needed to ask a
question. Application.add_event() never calls this module. The calling
service validates first, then appends.
"""

from enum import Enum

from career_ledger.core.errors import CareerLedgerError, InvalidArgumentError
from career_ledger.models.event_type import TERMINAL_EVENT_TYPES, EventType

# =============================================================================
# Exceptions
# =============================================================================


class TransitionRejection(Enum):
    """Why a proposed transition was refused."""

    TERMINAL_STATE = "terminal_state"
    NO_SUCH_EDGE = "no_such_edge"


class InvalidTransitionError(CareerLedgerError):
    """Raised when a proposed event type cannot follow the current status."""

    def __init__(
        self,
        current_status: EventType,
        target_status: EventType,
        valid_transitions: list[EventType],
    ) -> None:
        """Initialize with transition details.

        Args:
            current_status: The application's current derived status.
            target_status: The attempted next status.
            valid_transitions: List of valid target statuses from current.
        """
        self.current_status = current_status
        self.target_status = target_status
        self.valid_transitions = valid_transitions
        self.reason = (
            TransitionRejection.TERMINAL_STATE
            if current_status in TERMINAL_EVENT_TYPES
            else TransitionRejection.NO_SUCH_EDGE
        )
        if self.reason is TransitionRejection.TERMINAL_STATE:
            explanation = f"{current_status.value} is a terminal state"
        else:
            valid_names = [s.value for s in valid_transitions]
            explanation = f"Valid transitions: {valid_names}"
        super().__init__(
            code="INVALID_STATUS_TRANSITION",
            message=(
                f"Cannot transition from {current_status.value} to "
                f"{target_status.value}. {explanation}"
            ),
            status_code=422,
            details=[
                {
                    "current_status": current_status.value,
                    "target_status": target_status.value,
                    "reason": self.reason.value,
                }
            ],
        )


# =============================================================================
# State Machine Definition
# =============================================================================

TERMINAL_STATUSES: frozenset[EventType] = TERMINAL_EVENT_TYPES

# Exits available from every non-terminal state: the company rejects or
# the candidate withdraws.
_EXIT_TRANSITIONS: list[EventType] = [EventType.REJECTED, EventType.WITHDRAWN]

# Forward moves through the interview pipeline, keyed by current status.
_PIPELINE_TRANSITIONS: dict[EventType, list[EventType]] = {
    EventType.SUBMITTED: [EventType.IN_REVIEW, EventType.PHONE_SCREEN],
    EventType.IN_REVIEW: [EventType.PHONE_SCREEN, EventType.TECHNICAL_INTERVIEW],
    EventType.PHONE_SCREEN: [EventType.TECHNICAL_INTERVIEW],
    EventType.TECHNICAL_INTERVIEW: [EventType.ONSITE_INTERVIEW],
    EventType.ONSITE_INTERVIEW: [EventType.OFFER_RECEIVED],
    EventType.OFFER_RECEIVED: [EventType.OFFER_ACCEPTED, EventType.OFFER_DECLINED],
}

_VALID_TRANSITIONS: dict[EventType, list[EventType]] = {
    status: (
        []
        if status in TERMINAL_STATUSES
        else _PIPELINE_TRANSITIONS[status] + _EXIT_TRANSITIONS
    )
    for status in EventType
}


# =============================================================================
# Public Functions
# =============================================================================


def is_terminal(status: EventType) -> bool:
    """Check if no transition may leave a status."""
    return status in TERMINAL_STATUSES


def get_valid_transitions(status: EventType) -> list[EventType]:
    """Get valid target statuses from current status.

    Args:
        status: The current status.

    Returns:
        List of statuses that can be transitioned to. Empty for terminal
        states. A fresh list; callers may mutate it.
    """
    return list(_VALID_TRANSITIONS.get(status, []))


def is_valid_transition(current: EventType, target: EventType) -> bool:
    """Check if a status transition is valid.

    Args:
        current: The application's current derived status.
        target: The proposed next status.

    Returns:
        True if the transition is allowed, False otherwise.
    """
    return target in _VALID_TRANSITIONS.get(current, [])


def validate_transition(current: EventType, target: EventType) -> None:
    """Raise unless ``target`` may follow ``current``.

    Call before constructing the ApplicationEvent for ``target``.

    Args:
        current: The application's current derived status.
        target: The proposed next status.

    Raises:
        InvalidArgumentError: If either argument is not an EventType.
        InvalidTransitionError: If current is terminal or no edge leads
            from current to target.
    """
    for field, value in (("current_status", current), ("event_type", target)):
        if not isinstance(value, EventType):
            raise InvalidArgumentError(field, "Event type must be an EventType", value)

    if not is_valid_transition(current, target):
        raise InvalidTransitionError(
            current_status=current,
            target_status=target,
            valid_transitions=get_valid_transitions(current),
        )
