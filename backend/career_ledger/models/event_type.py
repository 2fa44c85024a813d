"""Application lifecycle event types.

A closed enumeration: the set of states an application can enter. Values
match the check constraint on application_events.event_type.
"""

from enum import Enum


class EventType(Enum):
    """Lifecycle state entered by an application event."""

    SUBMITTED = "Submitted"
    IN_REVIEW = "InReview"
    PHONE_SCREEN = "PhoneScreen"
    TECHNICAL_INTERVIEW = "TechnicalInterview"
    ONSITE_INTERVIEW = "OnsiteInterview"
    OFFER_RECEIVED = "OfferReceived"
    OFFER_ACCEPTED = "OfferAccepted"
    OFFER_DECLINED = "OfferDeclined"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"

    @property
    def ordinal(self) -> int:
        """Declaration index, stable for storage layers using integer codes."""
        return list(EventType).index(self)

    @property
    def is_terminal(self) -> bool:
        """True if no transition may leave this state."""
        return self in TERMINAL_EVENT_TYPES

    @classmethod
    def from_string(cls, value: str) -> "EventType":
        """Convert a stored string to enum.

        Args:
            value: Event type string from database or caller input.

        Returns:
            The corresponding EventType enum value.

        Raises:
            ValueError: If the string doesn't match any event type.
        """
        for event_type in cls:
            if event_type.value == value:
                return event_type
        valid = [t.value for t in cls]
        raise ValueError(f"Invalid event type: '{value}'. Valid: {valid}")


TERMINAL_EVENT_TYPES: frozenset[EventType] = frozenset(
    {
        EventType.OFFER_ACCEPTED,
        EventType.OFFER_DECLINED,
        EventType.REJECTED,
        EventType.WITHDRAWN,
    }
)
