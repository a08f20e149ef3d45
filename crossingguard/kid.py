"""Children waiting to cross the road and the rules that drive their queue."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import List, MutableSequence, Optional, Sequence

WIDTH = 45
KID_Y = 560
KID_START_X = 1200
KID_SPACING = 50
KID_END_X = 150
KID_SCORE = 200
KID_STEP = 3
KID_PATIENCE = 3000
BATCH_SIZE = 5
DEATH_DURATION = 3000
DEATH_DRIFT = 3 - 1.3
SELECT_BEHIND = 10
SELECT_AHEAD = 30
NEVER = math.inf


class KidFlag(IntEnum):
    """What a child is doing."""

    MOVE = 1
    STOP = 2
    FUSS = 3
    DEAD = 4


class KidState(IntEnum):
    """Whether a child is still on the field."""

    LIVE = 0
    DEAD = 1
    ARRIVED = 2


@dataclass
class Kid:
    """One child in the crossing queue. Times are in milliseconds."""

    x: int
    flag: KidFlag = KidFlag.MOVE
    state: KidState = KidState.LIVE
    patience: int = KID_PATIENCE
    y: float = float(KID_Y)
    selected: bool = False
    forced: bool = False
    hit_time: float = 0
    stop_since: float = NEVER
    fuss_since: float = NEVER
    frame: int = 0

    def patience_expired(self, now: float) -> bool:
        """True when the child has been stopped for longer than its patience."""
        return self.flag == KidFlag.STOP and now - self.stop_since > self.patience

    def trouble(self, now: float) -> None:
        """Start fussing once a stopped child runs out of patience."""
        if self.flag == KidFlag.STOP and self.patience_expired(now):
            self.flag = KidFlag.FUSS
            self.forced = False
            self.stop_since = NEVER
            self.fuss_since = now

    def advance(self) -> None:
        """Walk one step towards the far side and flip the walking frame."""
        self.frame = 1 - self.frame
        self.x -= KID_STEP

    def is_blocked_by(self, other: "Kid") -> bool:
        """True when ``other`` stands within one body width ahead."""
        return self.x - other.x <= WIDTH

    def dead_timer_running(self, now: float) -> bool:
        """True while the child is still lying on the road after a hit."""
        return now - self.hit_time < DEATH_DURATION

    def update_death(self, now: float) -> None:
        """Drift a hit child along with traffic, then take it off the field."""
        if self.dead_timer_running(now):
            self.y += DEATH_DRIFT
            self.y += DEATH_DRIFT
        else:
            self.state = KidState.DEAD

    def step(self, now: float) -> None:
        """Advance the child by one frame according to its flag."""
        if self.flag == KidFlag.MOVE:
            self.advance()
        elif self.flag == KidFlag.DEAD:
            self.update_death(now)


def select_kid(kids: Sequence[Kid], player_x: int) -> Optional[int]:
    """Index of the first living child in reach of the guard, or None.

    Children passed over on the way lose their selection mark.
    """
    for index, kid in enumerate(kids):
        if (
            player_x - SELECT_BEHIND <= kid.x <= player_x + SELECT_AHEAD
            and kid.flag != KidFlag.DEAD
        ):
            return index
        kid.selected = False
    return None


def update_queue(kids: Sequence[Kid], now: float) -> None:
    """Apply the queue rules: following, blocking, fussing and giving up."""
    previous: Optional[Kid] = None
    for kid in kids:
        ahead = previous
        previous = kid
        if ahead is not None:
            both_live = ahead.state == KidState.LIVE and kid.state == KidState.LIVE
            if (
                not kid.forced
                and kid.flag == KidFlag.STOP
                and kid.is_blocked_by(ahead)
                and ahead.flag == KidFlag.MOVE
                and both_live
            ):
                kid.flag = KidFlag.MOVE
            if (
                kid.flag == KidFlag.MOVE
                and kid.is_blocked_by(ahead)
                and ahead.flag not in (KidFlag.MOVE, KidFlag.DEAD)
                and both_live
            ):
                kid.flag = KidFlag.STOP
                kid.stop_since = now

        kid.trouble(now)

        if kid.flag == KidFlag.FUSS:
            if now - kid.fuss_since <= kid.patience:
                continue
            kid.fuss_since = NEVER
            kid.forced = False
            kid.flag = KidFlag.MOVE


def generate_kids(kids: MutableSequence[Kid], waiting: int) -> int:
    """Send the next batch onto the pavement when it is empty.

    Returns how many children are still waiting afterwards.
    """
    if kids or not waiting:
        return waiting
    for i in range(BATCH_SIZE):
        kids.append(Kid(KID_START_X + KID_SPACING * i, KidFlag.MOVE, KidState.LIVE, KID_PATIENCE))
        waiting -= 1
    return waiting


def update_kids(kids: List[Kid], player_x: int, now: float) -> int:
    """Run one frame for every child and drop those off the field.

    Returns the number of children that reached the far side.
    """
    if kids:
        update_queue(kids, now)
    arrived = 0
    i = 0
    while i < len(kids):
        kid = kids[i]
        if kid.x <= KID_END_X:
            kid.state = KidState.ARRIVED
            arrived += 1
        if kid.state == KidState.LIVE:
            chosen = select_kid(kids, player_x)
            if chosen is not None:
                kids[chosen].selected = True
            kid.step(now)
            i += 1
        else:
            del kids[i]
    return arrived