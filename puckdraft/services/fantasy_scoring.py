"""
Fantasy points scoring model.

Fantasy points are a weighted sum of box-score stats. Weights are
configurable per league; defaults live in draft_config.DEFAULT_SCORING_WEIGHTS.

Custom rank orders players by fantasy points. Value score compares that rank
with market ADP: positive means undervalued (ADP 100, custom rank 50 -> +50).
"""
from dataclasses import dataclass, fields, replace
from typing import Dict, Iterable, List, Optional
import numpy as np
import pandas as pd
from puckdraft.models.player import DraftPlayer
from puckdraft.services.draft_config import DEFAULT_SCORING_WEIGHTS


@dataclass(frozen=True)
class ScoringWeights:
    goals: float = DEFAULT_SCORING_WEIGHTS['goals']
    assists: float = DEFAULT_SCORING_WEIGHTS['assists']
    plus_minus: float = DEFAULT_SCORING_WEIGHTS['plus_minus']
    hits: float = DEFAULT_SCORING_WEIGHTS['hits']
    blocked_shots: float = DEFAULT_SCORING_WEIGHTS['blocked_shots']
    shots: float = DEFAULT_SCORING_WEIGHTS['shots']
    pp_points: float = DEFAULT_SCORING_WEIGHTS['pp_points']

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'ScoringWeights':
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{key: float(value) for key, value in data.items() if key in known})


SCORED_STATS = [f.name for f in fields(ScoringWeights)]


def score_players(players: Iterable[DraftPlayer], weights: Optional[ScoringWeights] = None) -> pd.DataFrame:
    """
    Build a scored player table.

    Columns: player_id, name, team, position_code, adp, games_played, the
    scored stats, fantasy_points, fantasy_points_per_game, custom_rank,
    value_score. Sorted by fantasy points, highest first.
    """
    weights = weights or ScoringWeights()
    columns = ['player_id', 'name', 'team', 'position_code', 'adp', 'games_played'] + SCORED_STATS
    df = pd.DataFrame([{col: getattr(p, col) for col in columns} for p in players], columns=columns)
    if df.empty:
        return df.assign(
            fantasy_points=pd.Series(dtype=float),
            fantasy_points_per_game=pd.Series(dtype=float),
            custom_rank=pd.Series(dtype=int),
            value_score=pd.Series(dtype=float),
        )

    stats = df[SCORED_STATS].apply(pd.to_numeric, errors='coerce').fillna(0.0)
    weight_vector = pd.Series(weights.as_dict())[SCORED_STATS]
    df['fantasy_points'] = stats.mul(weight_vector, axis=1).sum(axis=1)

    games = pd.to_numeric(df['games_played'], errors='coerce').fillna(0)
    df['fantasy_points_per_game'] = np.where(games > 0, df['fantasy_points'] / games.where(games > 0, 1), 0.0)

    df = df.sort_values('fantasy_points', ascending=False, kind='mergesort').reset_index(drop=True)
    df['custom_rank'] = np.arange(1, len(df) + 1)

    adp = pd.to_numeric(df['adp'], errors='coerce')
    df['value_score'] = (adp - df['custom_rank']).where(adp > 0)
    return df


def apply_fantasy_points(players: List[DraftPlayer], weights: Optional[ScoringWeights] = None) -> List[DraftPlayer]:
    """Return copies of the players with fantasy point fields filled in (input order kept)."""
    if not players:
        return []
    scored = score_players(players, weights).set_index('player_id')
    result = []
    for player in players:
        row = scored.loc[player.player_id]
        result.append(replace(
            player,
            fantasy_points=float(row['fantasy_points']),
            fantasy_points_per_game=float(row['fantasy_points_per_game']),
        ))
    return result
