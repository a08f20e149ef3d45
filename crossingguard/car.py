"""Cars driving down the three lanes and hitting whoever is on the crossing."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Sequence

from .kid import WIDTH, Kid, KidFlag, KidState
from .player import Player, PlayerFlag

CAR_SPEED = 3
CAR_HIT_WIDTH = WIDTH * 3
CAR_BODY_WIDTH = 93
CAR_HEIGHT = 40
CAR_TIME_MIN = 8000
CAR_TIME_MAX = 12000
CAR_START_Y = 300
CAR_BEND_END_Y = 550
CAR_BEND_OFFSET = 200
CAR_BEND_SLOPE = 5
CAR_END = 900
ROAD_TOP = 590
ROAD_BOT = 640
KID_HIT_BACK = 15
KID_HIT_FRONT = 20

_LANE_SHIFT = int((100 - WIDTH * 3) / 2)


class Lane(IntEnum):
    """The three lanes a car can come down."""

    LEFT = -1
    MID = 0
    RIGHT = 1


CAR_START_X: Dict[Lane, int] = {
    Lane.LEFT: _LANE_SHIFT + 450,
    Lane.MID: _LANE_SHIFT + 550,
    Lane.RIGHT: _LANE_SHIFT + 650,
}


@dataclass
class Car:
    """A single car; it starts at the top of its lane."""

    lane: Lane
    x: int = field(init=False)
    y: int = CAR_START_Y
    active: bool = True
    width: int = CAR_BODY_WIDTH

    def __post_init__(self) -> None:
        self.lane = Lane(self.lane)
        self.x = CAR_START_X[self.lane]

    def follow_route(self) -> None:
        """Bend the outer lanes outwards while the car is on the slope."""
        if self.lane == Lane.MID:
            return
        if not CAR_START_Y <= self.y <= CAR_BEND_END_Y:
            return
        shift = (self.y - CAR_BEND_OFFSET) // CAR_BEND_SLOPE
        if self.lane == Lane.LEFT:
            self.x = CAR_START_X[Lane.LEFT] - shift
        else:
            self.x = CAR_START_X[Lane.RIGHT] + shift

    def is_at_crossing(self) -> bool:
        """True while the front of the car is over the crossing."""
        front = self.y + CAR_HEIGHT
        return ROAD_TOP <= front <= ROAD_BOT

    def check_player(self, player: Player) -> None:
        """Knock the guard aside if the car overlaps him."""
        reach = self.width // 2 + player.width // 2
        gap = self.x - player.x
        if 0 < gap < reach:
            player.flag = PlayerFlag.HIT_LEFT
        elif 0 < -gap < reach:
            player.flag = PlayerFlag.HIT_RIGHT

    def check_kids(self, kids: Sequence[Kid], now: float) -> int:
        """Hit every living child under the car; return how many newly died."""
        low = self.x - CAR_HIT_WIDTH // 2 + KID_HIT_BACK
        high = self.x + CAR_HIT_WIDTH // 2 + KID_HIT_FRONT
        deaths = 0
        for kid in kids:
            if kid.state == KidState.LIVE and low < kid.x < high:
                if kid.flag != KidFlag.DEAD:
                    deaths += 1
                    kid.flag = KidFlag.DEAD
                kid.hit_time = now
        return deaths

    def advance(self) -> None:
        """Drive one frame down the road."""
        self.y += CAR_SPEED


class LaneTimer:
    """Decides when the next car may enter a lane, at random intervals."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.last_fire: float = 0
        self.last_seen: float = 0
        self.interval = self._draw()

    def _draw(self) -> int:
        return self._rng.randint(CAR_TIME_MIN, CAR_TIME_MAX)

    def poll(self, now: float) -> bool:
        """True once the interval has passed since the previous car."""
        if self.last_seen - self.last_fire > self.interval:
            self.last_fire = self.last_seen
            self.interval = self._draw()
            return True
        self.last_seen = now
        return False


class Traffic:
    """All cars on the road and the timers that spawn them."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        rng = rng if rng is not None else random.Random()
        self.timers: Dict[Lane, LaneTimer] = {lane: LaneTimer(rng) for lane in Lane}
        self.cars: List[Car] = []

    def update(self, player: Player, kids: Sequence[Kid], now: float) -> int:
        """Spawn, move and collide cars for one frame; return new child deaths."""
        for lane, timer in self.timers.items():
            if timer.poll(now):
                self.cars.append(Car(lane))
        deaths = 0
        remaining: List[Car] = []
        for car in self.cars:
            if car.y > CAR_END:
                car.active = False
            if not car.active:
                continue
            car.advance()
            car.follow_route()
            if car.is_at_crossing():
                car.check_player(player)
                deaths += car.check_kids(kids, now)
            remaining.append(car)
        self.cars[:] = remaining
        return deaths

    def clear(self) -> None:
        """Remove every car from the road."""
        self.cars.clear()