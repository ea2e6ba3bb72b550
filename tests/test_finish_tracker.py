import itertools
import random

from pinball_race.models.finish_tracker import FinishTracker


def _tracker():
    ticks = itertools.count(100, 10)
    return FinishTracker(lambda: next(ticks))


def test_ignores_pairs_without_finish_sensor():
    tracker = _tracker()
    assert tracker.on_collision("ball_0", "peg") is None
    assert tracker.on_collision("ball_1", "ball_2") is None
    assert tracker.records == []


def test_ignores_non_ball_bodies_touching_the_sensor():
    tracker = _tracker()
    assert tracker.on_collision("finish", "ground") is None
    assert tracker.on_collision("finish", None) is None
    assert tracker.on_collision("finish", "ball_x") is None
    assert tracker.on_collision("finish", "ball_9") is None
    assert len(tracker) == 0


def test_records_first_touch_with_timestamp():
    tracker = _tracker()
    record = tracker.on_collision("finish", "ball_3")
    assert record.racer_id == 3
    assert record.timestamp_ms == 100
    assert tracker.ranking == [3]


def test_finish_label_can_be_either_side():
    tracker = _tracker()
    tracker.on_collision("ball_1", "finish")
    tracker.on_collision("finish", "ball_4")
    assert tracker.ranking == [1, 4]


def test_duplicate_overlap_keeps_first_position():
    tracker = _tracker()
    tracker.on_collision("finish", "ball_0")
    tracker.on_collision("finish", "ball_2")
    assert tracker.on_collision("finish", "ball_0") is None
    assert tracker.on_collision("ball_0", "finish") is None
    assert tracker.ranking == [0, 2]


def test_append_order_is_ranking_and_timestamps_are_monotonic():
    tracker = _tracker()
    for racer_id in [2, 0, 4, 1, 3]:
        tracker.on_collision("finish", f"ball_{racer_id}")
    assert tracker.ranking == [2, 0, 4, 1, 3]
    stamps = [r.timestamp_ms for r in tracker.records]
    assert stamps == sorted(stamps)


def test_same_step_batch_keeps_engine_order():
    tracker = _tracker()
    new = tracker.process_pairs([
        ("ball_3", "finish"),
        ("ball_1", "peg"),
        ("finish", "ball_1"),
        ("finish", "ball_3"),
    ])
    assert [r.racer_id for r in new] == [3, 1]
    assert tracker.ranking == [3, 1]


def test_never_two_records_for_one_racer_under_random_streams():
    rng = random.Random(7)
    labels = ["finish", "peg", "bumper", "ground"] + [f"ball_{i}" for i in range(5)]
    for _ in range(50):
        tracker = _tracker()
        for _ in range(200):
            tracker.on_collision(rng.choice(labels), rng.choice(labels))
        ids = tracker.ranking
        assert len(ids) == len(set(ids))
        assert len(ids) <= 5


def test_reset_empties_the_ranking():
    tracker = _tracker()
    tracker.on_collision("finish", "ball_0")
    tracker.reset()
    assert tracker.ranking == []
    assert not tracker.has_finished(0)
    assert tracker.on_collision("finish", "ball_0") is not None
