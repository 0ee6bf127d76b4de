"""League setup validation and draftable player filtering."""
import logging
from typing import List
from puckdraft.models.player import DraftPlayer, FORWARD_POSITIONS, PRIMARY_POSITIONS, Position, ROSTER_POSITIONS
from puckdraft.models.draft import LeagueSettings
from puckdraft.services import draft_config
from puckdraft.services.errors import DraftConfigError, InsufficientPlayersError

logger = logging.getLogger(__name__)


def validate_league_settings(settings: LeagueSettings) -> None:
    """
    Check league settings before a league is initialized.

    Raises:
        DraftConfigError: with a message describing the first problem found
    """
    if settings.draft_format != 'snake':
        raise DraftConfigError(f"Unsupported draft format: {settings.draft_format}")

    if not draft_config.MIN_TEAMS <= settings.num_teams <= draft_config.MAX_TEAMS:
        raise DraftConfigError(
            f"Number of teams must be between {draft_config.MIN_TEAMS} and {draft_config.MAX_TEAMS}"
        )

    if not 1 <= settings.user_draft_position <= settings.num_teams:
        raise DraftConfigError(f"Draft position must be between 1 and {settings.num_teams}")

    if settings.draft_timer_seconds < 0:
        raise DraftConfigError("Pick timer cannot be negative")

    roster_config = settings.roster_config
    for pos in ROSTER_POSITIONS:
        if roster_config.capacity(pos) < 0:
            raise DraftConfigError(f"Roster slots for {pos.value} cannot be negative")

    total_rounds = roster_config.total_slots()
    if total_rounds < draft_config.MIN_ROUNDS:
        raise DraftConfigError("Roster must have at least 1 position")
    if total_rounds > draft_config.MAX_ROUNDS:
        raise DraftConfigError(f"Roster size is too large (max {draft_config.MAX_ROUNDS} rounds)")


def filter_draftable_players(
    players: List[DraftPlayer],
    max_adp: float = draft_config.MAX_DRAFTABLE_ADP
) -> List[DraftPlayer]:
    """Keep only ranked players (0 < ADP <= max_adp)."""
    draftable = [p for p in players if p.adp and 0 < p.adp <= max_adp]
    dropped = len(players) - len(draftable)
    if dropped:
        logger.info("Excluded %d unranked players (ADP missing, zero or above %s)", dropped, max_adp)
    return draftable


def ensure_enough_players(players: List[DraftPlayer], settings: LeagueSettings) -> None:
    """
    Raises:
        InsufficientPlayersError: fewer players than roster slots across all
            teams, or too few eligible players for some position
    """
    required = settings.roster_config.total_slots() * settings.num_teams
    if len(players) < required:
        raise InsufficientPlayersError(
            f"Not enough players with ADP data for this draft size "
            f"({len(players)} available, {required} needed)"
        )

    roster_config = settings.roster_config
    for pos in PRIMARY_POSITIONS:
        needed = roster_config.capacity(pos) * settings.num_teams
        eligible = sum(1 for p in players if p.holds(pos))
        if eligible < needed:
            raise InsufficientPlayersError(
                f"Not enough {pos.value} players for this draft size ({eligible} available, {needed} needed)"
            )

    # Forward flex slots only take forwards
    forward_slots = sum(roster_config.capacity(pos) for pos in FORWARD_POSITIONS + (Position.F,))
    needed = forward_slots * settings.num_teams
    forwards = sum(1 for p in players if p.is_forward())
    if forwards < needed:
        raise InsufficientPlayersError(
            f"Not enough forwards for this draft size ({forwards} available, {needed} needed)"
        )
