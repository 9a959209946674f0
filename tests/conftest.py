"""Shared fixtures"""
import pytest

from src.core.models import Player, Position


@pytest.fixture
def pool():
    """A league-sized pool with every position, ADP increasing by position rank"""
    players = []
    layout = [
        (Position.QB, 20, 20.0, 8.0),
        (Position.RB, 40, 1.0, 3.0),
        (Position.WR, 50, 2.0, 3.0),
        (Position.TE, 15, 30.0, 9.0),
        (Position.K, 5, 150.0, 1.0),
        (Position.DST, 5, 160.0, 1.0),
    ]
    for position, count, first_adp, step in layout:
        for i in range(count):
            players.append(Player(
                player_id=f"{position.value.lower()}{i + 1}",
                name=f"{position.value} Player {i + 1}",
                position=position,
                adp=first_adp + i * step
            ))
    return players
