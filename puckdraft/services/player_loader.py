"""Service for loading stats provider exports into draft players."""
import csv
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional
from puckdraft.models.player import DraftPlayer

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = {
    'adp', 'percent_owned', 'total_ranking', 'positional_ranking', 'games_played',
    'goals', 'assists', 'points', 'plus_minus', 'shots', 'hits', 'blocked_shots',
    'pp_points', 'sh_points', 'fantasy_points', 'fantasy_points_per_game',
}


class PlayerLoader:
    """Loads skater records exported from the stats provider (JSON or CSV)."""

    def __init__(self, data_dir: str = None):
        if data_dir is None:
            # Default to project root/data
            project_root = Path(__file__).parent.parent.parent
            data_dir = project_root / "data"
        self.data_dir = Path(data_dir)

    def load_records(self, filename: str) -> List[Dict]:
        """
        Read raw provider records.

        JSON files may hold a list of records or the provider response shape
        {"total": n, "data": [...]}. CSV files need a header row.
        """
        filepath = self.data_dir / filename
        if not filepath.exists():
            raise FileNotFoundError(f"Player file not found: {filepath}")

        if filepath.suffix.lower() == '.csv':
            records = []
            with open(filepath, 'r', encoding='utf-8', newline='') as f:
                # Header is line 1
                for line_number, row in enumerate(csv.DictReader(f), start=2):
                    try:
                        records.append(self._parse_csv_row(row))
                    except ValueError as e:
                        logger.warning("Skipping %s line %d: %s", filepath.name, line_number, e)
            return records

        with open(filepath, 'r', encoding='utf-8') as f:
            payload = json.load(f)
        if isinstance(payload, dict):
            payload = payload.get('data', [])
        return list(payload)

    def load_players(self, filename: str) -> List[DraftPlayer]:
        """Load records and convert them; records without id or position are skipped."""
        return self.players_from_records(self.load_records(filename))

    @staticmethod
    def players_from_records(records: List[Dict]) -> List[DraftPlayer]:
        players = []
        skipped = 0
        seen_ids = set()
        for record in records:
            try:
                player = DraftPlayer.from_record(record)
            except (AttributeError, TypeError, ValueError) as e:
                logger.debug("Bad player record %r: %s", record, e)
                skipped += 1
                continue
            if not player.player_id or not player.positions or player.player_id in seen_ids:
                skipped += 1
                continue
            seen_ids.add(player.player_id)
            players.append(player)
        if skipped:
            logger.warning("Skipped %d player records (bad values, missing id/position or duplicate id)", skipped)
        logger.info("Loaded %d players", len(players))
        return players

    @staticmethod
    def _parse_csv_row(row: Dict[str, str]) -> Dict:
        """CSV values are strings; convert numeric stat columns."""
        parsed = {}
        for key, value in row.items():
            if key is None:
                continue
            key = key.strip()
            field_name = DraftPlayer.field_name_for(key)
            parsed[key] = _to_number(value) if field_name in NUMERIC_FIELDS else value
        return parsed


def _to_number(value: Optional[str]):
    if value is None or str(value).strip() == '':
        return None
    number = float(value)
    return int(number) if number.is_integer() else number
