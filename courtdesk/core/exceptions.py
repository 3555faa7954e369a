"""Domain exceptions raised by the service layer."""


class CourtDeskError(Exception):
    """Base class for domain errors."""


class NotFoundError(CourtDeskError, ValueError):
    """A referenced record does not exist."""


class SlotUnavailableError(CourtDeskError):
    """The (court, date, time) slot is closed or already taken."""


class InvalidTransitionError(CourtDeskError):
    """A booking status change is not allowed from its current state."""


class InsufficientStockError(CourtDeskError):
    """A sale asks for more units than are in stock."""


class CashboxStateError(CourtDeskError):
    """The cash register is not in the state the operation needs."""


class CompactionError(CourtDeskError):
    """A maintenance run aborted before committing."""


class PaymentLinkError(CourtDeskError):
    """The payment provider did not return a payment link."""


class CourtInUseError(CourtDeskError):
    """A court still has bookings and cannot be removed."""
