import pytest

from crossingguard.kid import NEVER, Kid, KidFlag
from crossingguard.player import (
    HIT_FRAMES,
    HIT_KNOCKBACK,
    LEFT_LIMIT,
    PLAYER_SPEED,
    PLAYER_START_X,
    RIGHT_LIMIT,
    WALK_FRAMES,
    Player,
    PlayerFlag,
)


@pytest.mark.parametrize(
    "keys, expected",
    [
        ({"j"}, PlayerFlag.GO),
        ({"k", "a"}, PlayerFlag.STOP),
        ({"a", "d"}, PlayerFlag.LEFT),
        ({"d"}, PlayerFlag.RIGHT),
        ({"J"}, PlayerFlag.GO),
        (set(), PlayerFlag.STAND),
    ],
)
def test_set_flag_from_keys(keys, expected):
    player = Player(flag=PlayerFlag.HIT_LEFT)
    player.set_flag_from_keys(keys)
    assert player.flag == expected


def test_default_player_position():
    player = Player()
    assert player.x == PLAYER_START_X
    assert player.speed == PLAYER_SPEED


def test_walk_left_moves_and_wraps_frames():
    player = Player(x=500, flag=PlayerFlag.LEFT)
    player.walk()
    assert player.x == 500 - PLAYER_SPEED
    assert player.left_frame == 1
    for _ in range(WALK_FRAMES - 1):
        player.walk()
    assert player.left_frame == 0


def test_walk_left_stops_at_edge():
    player = Player(x=LEFT_LIMIT - 1, flag=PlayerFlag.LEFT)
    player.walk()
    assert player.x == LEFT_LIMIT - 1


def test_walk_right_stops_at_edge():
    player = Player(x=RIGHT_LIMIT, flag=PlayerFlag.RIGHT)
    player.walk()
    assert player.x == RIGHT_LIMIT + PLAYER_SPEED
    player.walk()
    assert player.x == RIGHT_LIMIT + PLAYER_SPEED
    assert player.right_frame == 2


def test_take_hit_left_recovers_after_all_frames():
    player = Player(x=600, flag=PlayerFlag.HIT_LEFT)
    for _ in range(HIT_FRAMES):
        player.take_hit()
    assert player.x == 600 - HIT_KNOCKBACK * HIT_FRAMES
    assert player.flag == PlayerFlag.STAND
    assert player.hit_left_frame == 0


def test_take_hit_right_pushes_right():
    player = Player(x=600, flag=PlayerFlag.HIT_RIGHT)
    player.take_hit()
    assert player.x == 600 + HIT_KNOCKBACK
    assert player.flag == PlayerFlag.HIT_RIGHT


def test_command_move_releases_kid_in_reach():
    kid = Kid(855, KidFlag.STOP, forced=True, stop_since=5, fuss_since=7)
    player = Player(x=850)
    player.command_move([kid])
    assert kid.flag == KidFlag.MOVE
    assert kid.forced is False
    assert kid.stop_since == NEVER
    assert kid.fuss_since == NEVER


def test_command_stop_holds_kid_in_reach():
    kid = Kid(855)
    player = Player(x=850)
    player.command_stop([kid], 1234)
    assert kid.flag == KidFlag.STOP
    assert kid.forced is True
    assert kid.stop_since == 1234


def test_command_ignores_kid_out_of_reach():
    kid = Kid(300)
    Player(x=850).command_stop([kid], 50)
    assert kid.flag == KidFlag.MOVE
    assert kid.stop_since == NEVER


def test_step_dispatches_on_flag():
    kid = Kid(855, KidFlag.STOP)
    player = Player(x=850, flag=PlayerFlag.GO)
    player.step([kid], 0)
    assert kid.flag == KidFlag.MOVE
    walker = Player(x=500, flag=PlayerFlag.RIGHT)
    walker.step([], 0)
    assert walker.x == 500 + PLAYER_SPEED