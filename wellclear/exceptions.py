class WellClearError(Exception):
    """Base class for well-clear monitor errors."""


class IdentifierRoundTripError(WellClearError):
    """Engine-side aircraft id did not map back to a stored aircraft."""

    def __init__(self, engine_id: str, reason: str = "") -> None:
        self.engine_id = engine_id
        msg = f"Engine id {engine_id!r} does not round-trip to a known aircraft"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class ReportFormatError(WellClearError):
    """A state report row could not be parsed."""
