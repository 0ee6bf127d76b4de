"""Actions accepted by the draft state machine."""
from dataclasses import dataclass
from typing import List, Union
from puckdraft.models.draft import DraftTab, LeagueSettings
from puckdraft.models.player import DraftPlayer


@dataclass(frozen=True)
class InitializeLeague:
    settings: LeagueSettings
    players: List[DraftPlayer]


@dataclass(frozen=True)
class StartDraft:
    pass


@dataclass(frozen=True)
class MakePick:
    player: DraftPlayer


@dataclass(frozen=True)
class AutoPick:
    """Best-available pick for whoever is on the clock (timer expiry)."""


@dataclass(frozen=True)
class CPUPick:
    """Scored pick for a computer-controlled team."""


@dataclass(frozen=True)
class UpdateTimer:
    seconds: int


@dataclass(frozen=True)
class TimerTick:
    """One second of wall time elapsed."""


@dataclass(frozen=True)
class StartTimer:
    pass


@dataclass(frozen=True)
class StopTimer:
    pass


@dataclass(frozen=True)
class ChangeTab:
    tab: DraftTab


@dataclass(frozen=True)
class ResetDraft:
    pass


DraftAction = Union[
    InitializeLeague,
    StartDraft,
    MakePick,
    AutoPick,
    CPUPick,
    UpdateTimer,
    TimerTick,
    StartTimer,
    StopTimer,
    ChangeTab,
    ResetDraft,
]
