"""Load player pools and schedule data from local files"""
import csv
import json
import logging
from pathlib import Path
from typing import Dict, List, Union

from src.core.models import Player, parse_position
from src.utils.validation import InputValidator, ValidationError


logger = logging.getLogger(__name__)


def player_from_record(record: Dict, index: int = 0) -> Player:
    """Build a Player from a validated record dict"""
    record = InputValidator.validate_player_record(record)
    projected = record.get("projected_points")
    return Player(
        player_id=str(record.get("id") or record.get("player_id") or f"player-{index}"),
        name=record["name"],
        position=parse_position(record["position"]),
        adp=record["adp"],
        projected_points=float(projected) if projected not in (None, "") else None,
        team=record.get("team") or None
    )


def load_players(path: Union[str, Path]) -> List[Player]:
    """
    Read a player pool from CSV or JSON.

    Rows that fail validation are skipped and logged.
    """
    path = InputValidator.validate_file_path(path, must_exist=True)

    if path.suffix.lower() == ".json":
        with open(path, "r") as f:
            records = json.load(f)
        if isinstance(records, dict):
            records = records.get("players", [])
    elif path.suffix.lower() == ".csv":
        with open(path, "r", newline="") as f:
            records = list(csv.DictReader(f))
    else:
        raise ValidationError(f"Unsupported player file type: {path.suffix}")

    players = []
    for i, record in enumerate(records):
        try:
            players.append(player_from_record(record, i))
        except ValidationError as e:
            logger.warning(f"Skipping player row {i}: {e}")

    logger.info(f"Loaded {len(players)} players from {path}")
    return players


def load_schedule(path: Union[str, Path]) -> Dict[str, float]:
    """Read a JSON object mapping position code to SOS rank (1-32)"""
    path = InputValidator.validate_file_path(path, must_exist=True)
    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValidationError("Schedule file must contain a JSON object")
    return InputValidator.validate_schedule(data)
