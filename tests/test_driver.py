import random

from driver import TickDriver
from game_logic import Phase, SnakeConfig, SnakeGame


def _driver(game, scheduler, **kwargs):
    snapshots = []
    final_scores = []
    driver = TickDriver(
        game,
        scheduler,
        on_snapshot=snapshots.append,
        on_game_over=final_scores.append,
        **kwargs,
    )
    return driver, snapshots, final_scores


def test_start_ticks_and_reschedules(make_game, scheduler) -> None:
    game = make_game(speed_ms=150)
    driver, snapshots, _ = _driver(game, scheduler)
    driver.start()

    assert driver.running
    assert len(snapshots) == 1
    assert snapshots[0].head == (3, 2)
    assert [ms for ms, _ in scheduler.pending.values()] == [150]

    scheduler.fire()
    assert len(snapshots) == 2
    assert snapshots[1].head == (4, 2)
    assert len(scheduler.pending) == 1


def test_game_over_stops_loop_and_reports_once(make_game, scheduler) -> None:
    game = make_game(origin=(4, 2))
    driver, snapshots, final_scores = _driver(game, scheduler)
    driver.start()

    assert snapshots[-1].phase is Phase.GAME_OVER
    assert final_scores == [0]
    assert not driver.running
    assert scheduler.pending == {}

    driver.advance()
    assert final_scores == [0]


def test_manual_input_applies_on_next_tick(make_game, scheduler) -> None:
    game = make_game()
    game.set_state([(2, 2)], food=(4, 4), direction="right")
    driver, _, _ = _driver(game, scheduler)

    driver.press_direction("up")
    assert game.direction == "right"
    snapshot = driver.advance()
    assert snapshot.head == (2, 1)
    assert snapshot.direction == "up"


def test_manual_reversal_is_rejected(make_game, scheduler) -> None:
    game = make_game()
    game.set_state([(2, 2)], food=(0, 0), direction="right")
    driver, _, _ = _driver(game, scheduler)

    driver.press_direction("left")
    assert driver.advance().head == (3, 2)


def test_autopilot_ignores_manual_input(make_game, scheduler) -> None:
    game = make_game()
    game.set_state([(2, 2)], food=(2, 0), direction="right")
    driver, _, _ = _driver(game, scheduler, autopilot=True)

    driver.press_direction("down")
    assert driver.advance().head == (2, 1)


def test_autopilot_toggle_takes_effect_next_tick(make_game, scheduler) -> None:
    game = make_game()
    game.set_state([(2, 2)], food=(0, 2), direction="right")
    driver, _, _ = _driver(game, scheduler)

    assert driver.advance().head == (3, 2)
    assert driver.toggle_autopilot() is True
    # A one-cell snake may turn straight back towards the food.
    assert driver.advance().head == (2, 2)


def test_autopilot_eats_food(make_game, scheduler) -> None:
    game = make_game()
    game.set_state([(2, 2)], food=(4, 4), direction="right")
    driver, _, _ = _driver(game, scheduler, autopilot=True)

    for _ in range(4):
        snapshot = driver.advance()
    assert snapshot.score == 1
    assert snapshot.length == 2
    assert snapshot.food not in snapshot.body


def test_pause_and_resume(make_game, scheduler) -> None:
    game = make_game()
    driver, snapshots, _ = _driver(game, scheduler)
    driver.start()

    driver.toggle_pause()
    assert driver.paused
    assert scheduler.pending == {}

    driver.toggle_pause()
    assert not driver.paused
    assert len(snapshots) == 2
    assert snapshots[-1].head == (4, 2)
    assert len(scheduler.pending) == 1


def test_reset_stops_loop_and_emits_fresh_state(make_game, scheduler) -> None:
    game = make_game()
    driver, snapshots, _ = _driver(game, scheduler)
    driver.start()
    driver.reset()

    assert not driver.running
    assert scheduler.pending == {}
    assert snapshots[-1].body == ((2, 2),)
    assert snapshots[-1].score == 0


def test_start_after_game_over_begins_new_session(make_game, scheduler) -> None:
    game = make_game(origin=(4, 2))
    driver, _, final_scores = _driver(game, scheduler)
    driver.start()
    driver.start()
    assert final_scores == [0, 0]


def test_tick_does_nothing_when_stopped(make_game, scheduler) -> None:
    game = make_game()
    driver, snapshots, _ = _driver(game, scheduler)
    driver.tick()
    assert snapshots == []
    assert scheduler.pending == {}


def test_set_autopilot_and_interval_default(make_game, scheduler) -> None:
    game = make_game(autopilot=True, speed_ms=80)
    driver, _, _ = _driver(game, scheduler)
    assert driver.autopilot
    assert driver.interval_ms == 80
    driver.set_autopilot(False)
    driver.press_direction("down")
    assert game.pending_direction == "down"


def test_full_board_reports_game_over(scheduler) -> None:
    config = SnakeConfig(board_width=2, board_height=1, cell_size=1, origin=(0, 0))
    game = SnakeGame(config, rng=random.Random(0))
    driver, snapshots, final_scores = _driver(game, scheduler)
    driver.start()

    assert snapshots[-1].game_over
    assert snapshots[-1].food not in snapshots[-1].body
    assert final_scores == [0]
    assert not driver.running
    assert scheduler.pending == {}
