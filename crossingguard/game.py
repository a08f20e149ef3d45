"""Game state for one round: score, counters, kids, traffic and the guard."""

from __future__ import annotations

import random
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Tuple

from .car import Traffic
from .kid import KID_SCORE, Kid, generate_kids, update_kids
from .player import PLAYER_START_X, Player

WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 750
FRAME_MS = 50
GOAL = 800
DEAD_LIMIT = 5
TOTAL_KIDS = 10
SCORE_DECAY_PERIOD = 10

SCORE_POS = (50, 20)
GOAL_POS = (275, 20)
DEATH_POS = (550, 20)
PASS_POS = (320, 452)
WAIT_POS = (850, 452)


class Screen(IntEnum):
    """Which screen the application shows."""

    OVER = -1
    MENU = 0
    SETTING = 1
    GAME = 2
    LOSE = 3
    WIN = 4
    PAUSE = 5
    HELP = 6
    ABOUT = 7


class Game:
    """One round of the crossing game."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.player = Player()
        self.traffic = Traffic(rng)
        self.kids: List[Kid] = []
        self.score = 0
        self.waiting = TOTAL_KIDS
        self.passed = 0
        self.dead = 0
        self.frames = 0
        self.reset()

    def reset(self) -> None:
        """Start a fresh round."""
        self.score = 0
        self.waiting = TOTAL_KIDS
        self.passed = 0
        self.dead = 0
        self.frames = 0
        self.kids.clear()
        self.traffic.clear()
        self.player.x = PLAYER_START_X

    def outcome(self) -> Optional[Screen]:
        """LOSE or WIN once the round is decided, otherwise None."""
        if self.dead >= DEAD_LIMIT:
            return Screen.LOSE
        if not self.kids and not self.waiting:
            return Screen.LOSE if self.score < GOAL else Screen.WIN
        return None

    def tick(self, keys: Iterable[str], now: float) -> Screen:
        """Play one frame with the given pressed keys; return the next screen."""
        self.waiting = generate_kids(self.kids, self.waiting)
        self.player.set_flag_from_keys(keys)
        self.dead += self.traffic.update(self.player, self.kids, now)
        self.player.step(self.kids, now)

        self.frames += 1
        if self.score > 0 and self.frames % SCORE_DECAY_PERIOD == 1:
            self.score -= 1

        result = self.outcome()
        if result is not None:
            return result

        arrived = update_kids(self.kids, self.player.x, now)
        self.passed += arrived
        self.score += KID_SCORE * arrived
        return Screen.GAME

    def labels(self) -> Dict[str, Tuple[str, Tuple[int, int]]]:
        """Texts of the on-screen counters with their positions."""
        return {
            "score": (f"Score: {self.score}", SCORE_POS),
            "goal": (f"Goal: {GOAL}", GOAL_POS),
            "deaths": (f"Deaths: {self.dead}", DEATH_POS),
            "passed": (f"{self.passed:02d}", PASS_POS),
            "waiting": (f"{self.waiting:02d}", WAIT_POS),
        }