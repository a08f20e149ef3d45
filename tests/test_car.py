import random

from crossingguard.car import (
    CAR_END,
    CAR_HEIGHT,
    CAR_SPEED,
    CAR_START_X,
    CAR_START_Y,
    CAR_TIME_MAX,
    CAR_TIME_MIN,
    ROAD_BOT,
    ROAD_TOP,
    Car,
    Lane,
    LaneTimer,
    Traffic,
)
from crossingguard.kid import Kid, KidFlag, KidState
from crossingguard.player import Player, PlayerFlag


def test_new_car_starts_at_top_of_its_lane():
    for lane in Lane:
        car = Car(lane)
        assert car.x == CAR_START_X[lane]
        assert car.y == CAR_START_Y
        assert car.active


def test_new_cars_are_ordered_left_to_right_by_lane():
    left, mid, right = Car(Lane.LEFT), Car(Lane.MID), Car(Lane.RIGHT)
    assert left.x < mid.x < right.x
    assert left.x == 433


def test_advance_moves_down_by_speed():
    car = Car(Lane.MID)
    car.advance()
    assert car.y == CAR_START_Y + CAR_SPEED


def test_mid_lane_route_is_straight():
    car = Car(Lane.MID)
    for _ in range(50):
        car.advance()
        car.follow_route()
    assert car.x == CAR_START_X[Lane.MID]


def test_outer_lanes_bend_outwards_then_straighten():
    left, right = Car(Lane.LEFT), Car(Lane.RIGHT)
    left.follow_route()
    right.follow_route()
    assert left.x < CAR_START_X[Lane.LEFT]
    assert right.x > CAR_START_X[Lane.RIGHT]
    prev_left, prev_right = left.x, right.x
    for _ in range(100):
        left.advance()
        right.advance()
        left.follow_route()
        right.follow_route()
        assert left.x <= prev_left
        assert right.x >= prev_right
        prev_left, prev_right = left.x, right.x
    frozen = (left.x, right.x)
    for _ in range(20):
        left.advance()
        right.advance()
        left.follow_route()
        right.follow_route()
    assert (left.x, right.x) == frozen


def test_crossing_window_bounds():
    car = Car(Lane.MID)
    car.y = ROAD_TOP - CAR_HEIGHT
    assert car.is_at_crossing()
    car.y -= 1
    assert not car.is_at_crossing()
    car.y = ROAD_BOT - CAR_HEIGHT
    assert car.is_at_crossing()
    car.y += 1
    assert not car.is_at_crossing()


def test_player_left_of_car_is_knocked_left():
    car = Car(Lane.MID)
    player = Player(x=car.x - 1)
    car.check_player(player)
    assert player.flag == PlayerFlag.HIT_LEFT


def test_player_right_of_car_is_knocked_right():
    car = Car(Lane.MID)
    player = Player(x=car.x + 1)
    car.check_player(player)
    assert player.flag == PlayerFlag.HIT_RIGHT


def test_player_exactly_under_or_far_away_is_untouched():
    car = Car(Lane.MID)
    same = Player(x=car.x)
    far = Player(x=car.x + 500)
    car.check_player(same)
    car.check_player(far)
    assert same.flag == PlayerFlag.STAND
    assert far.flag == PlayerFlag.STAND


def test_kid_under_car_dies_once_but_hit_time_refreshes():
    car = Car(Lane.MID)
    kid = Kid(car.x)
    assert car.check_kids([kid], 100) == 1
    assert kid.flag == KidFlag.DEAD
    assert kid.hit_time == 100
    assert car.check_kids([kid], 200) == 0
    assert kid.hit_time == 200


def test_kids_far_away_or_off_field_are_safe():
    car = Car(Lane.MID)
    far = Kid(car.x + 500)
    gone = Kid(car.x, state=KidState.ARRIVED)
    assert car.check_kids([far, gone], 100) == 0
    assert far.flag == KidFlag.MOVE
    assert gone.flag == KidFlag.MOVE


def test_lane_timer_interval_in_range():
    rng = random.Random(7)
    for _ in range(20):
        timer = LaneTimer(rng)
        assert CAR_TIME_MIN <= timer.interval <= CAR_TIME_MAX


def test_lane_timer_fires_after_interval():
    timer = LaneTimer(random.Random(1))
    assert not timer.poll(timer.interval)
    late = timer.interval + 1
    assert not timer.poll(late)
    assert timer.poll(late + 5)
    assert timer.last_fire == late
    assert CAR_TIME_MIN <= timer.interval <= CAR_TIME_MAX
    assert not timer.poll(late + 10)


def test_traffic_spawns_one_car_per_lane():
    traffic = Traffic(random.Random(3))
    player = Player()
    late = CAR_TIME_MAX * 2
    traffic.update(player, [], late)
    assert traffic.cars == []
    traffic.update(player, [], late)
    assert sorted(car.lane for car in traffic.cars) == sorted(Lane)
    assert all(car.y == CAR_START_Y + CAR_SPEED for car in traffic.cars)


def test_traffic_removes_cars_past_the_end():
    traffic = Traffic(random.Random(3))
    car = Car(Lane.MID)
    car.y = CAR_END + 1
    keep = Car(Lane.LEFT)
    traffic.cars.extend([car, keep])
    traffic.update(Player(), [], 0)
    assert traffic.cars == [keep]
    assert not car.active


def test_traffic_reports_deaths_and_clear():
    traffic = Traffic(random.Random(3))
    car = Car(Lane.MID)
    car.y = ROAD_TOP - CAR_HEIGHT - CAR_SPEED
    traffic.cars.append(car)
    kid = Kid(car.x)
    assert traffic.update(Player(x=0), [kid], 0) == 1
    assert kid.flag == KidFlag.DEAD
    traffic.clear()
    assert traffic.cars == []