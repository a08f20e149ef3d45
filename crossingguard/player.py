"""The crossing guard controlled by the player."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence

from .kid import NEVER, WIDTH, Kid, KidFlag, select_kid

PLAYER_START_X = 850
PLAYER_SPEED = 10
LEFT_LIMIT = 50
RIGHT_LIMIT = 1080
HIT_KNOCKBACK = 20
HIT_FRAMES = 4
WALK_FRAMES = 8

_KEY_FLAGS = (("j", 1), ("k", 2), ("a", 3), ("d", 4))


class PlayerFlag(IntEnum):
    """What the guard is doing."""

    STAND = 0
    GO = 1
    STOP = 2
    LEFT = 3
    RIGHT = 4
    HIT_LEFT = 5
    HIT_RIGHT = 6


@dataclass
class Player:
    """The guard: position, current action and animation frames."""

    x: int = PLAYER_START_X
    flag: PlayerFlag = PlayerFlag.STAND
    speed: int = PLAYER_SPEED
    width: int = WIDTH
    left_frame: int = 0
    right_frame: int = 0
    hit_left_frame: int = 0
    hit_right_frame: int = 0

    def command_move(self, kids: Sequence[Kid]) -> None:
        """Wave the child in reach across the road."""
        if not kids:
            return
        chosen = select_kid(kids, self.x)
        if chosen is None:
            return
        kid = kids[chosen]
        kid.flag = KidFlag.MOVE
        kid.forced = False
        kid.stop_since = NEVER
        kid.fuss_since = NEVER

    def command_stop(self, kids: Sequence[Kid], now: float) -> None:
        """Hold the child in reach back and restart its patience clock."""
        if not kids:
            return
        chosen = select_kid(kids, self.x)
        if chosen is None:
            return
        kid = kids[chosen]
        kid.flag = KidFlag.STOP
        kid.forced = True
        kid.stop_since = now

    def walk(self) -> None:
        """Take one step left or right, staying inside the walkway."""
        if self.flag == PlayerFlag.LEFT:
            if self.x >= LEFT_LIMIT:
                self.x -= self.speed
            self.left_frame += 1
            if self.left_frame == WALK_FRAMES:
                self.left_frame = 0
        else:
            if self.x <= RIGHT_LIMIT:
                self.x += self.speed
            self.right_frame += 1
            if self.right_frame == WALK_FRAMES:
                self.right_frame = 0

    def take_hit(self) -> None:
        """Get knocked aside by a car, recovering after the last hit frame."""
        if self.flag == PlayerFlag.HIT_LEFT:
            self.x -= HIT_KNOCKBACK
            self.hit_left_frame += 1
            if self.hit_left_frame == HIT_FRAMES:
                self.hit_left_frame = 0
                self.flag = PlayerFlag.STAND
        else:
            self.x += HIT_KNOCKBACK
            self.hit_right_frame += 1
            if self.hit_right_frame == HIT_FRAMES:
                self.hit_right_frame = 0
                self.flag = PlayerFlag.STAND

    def set_flag_from_keys(self, keys: Iterable[str]) -> None:
        """Choose the action from the pressed keys: J go, K stop, A left, D right."""
        pressed = {key.lower() for key in keys}
        for key, flag in _KEY_FLAGS:
            if key in pressed:
                self.flag = PlayerFlag(flag)
                return
        self.flag = PlayerFlag.STAND

    def step(self, kids: Sequence[Kid], now: float) -> None:
        """Carry out the current action for one frame."""
        if self.flag == PlayerFlag.GO:
            self.command_move(kids)
        elif self.flag == PlayerFlag.STOP:
            self.command_stop(kids, now)
        elif self.flag in (PlayerFlag.LEFT, PlayerFlag.RIGHT):
            self.walk()
        elif self.flag in (PlayerFlag.HIT_LEFT, PlayerFlag.HIT_RIGHT):
            self.take_hit()