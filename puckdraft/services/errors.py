"""Errors raised by the draft engine."""


class DraftError(Exception):
    """Base class for draft engine errors."""


class DraftConfigError(DraftError):
    """League settings are invalid; the league was not initialized."""


class InsufficientPlayersError(DraftError):
    """Not enough draftable players to fill every roster slot."""


class PlayerNotAvailableError(DraftError):
    """The requested player is unknown or already drafted."""


class RosterFullError(DraftError):
    """
    No roster slot can absorb a pick.

    Unreachable in a well-formed draft (picks per team equal roster size),
    so this signals a configuration/state inconsistency.
    """
