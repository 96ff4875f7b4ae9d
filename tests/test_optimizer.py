import random
from datetime import timedelta, timezone, datetime

import pytest

from meeting_optimizer import optimize
from meeting_optimizer.scheduler.availability import remaining_windows
from meeting_optimizer.scheduler.optimizer import ScheduleOptimizer
from meeting_optimizer.scheduler.scheduling_validator import SchedulingValidator
from tests.helpers import NOW, at, make_meeting, make_window


@pytest.fixture
def optimizer():
    return ScheduleOptimizer()


def test_single_meeting_lands_on_grid_inside_window(optimizer):
    window = make_window(at(9), at(10))
    meeting = make_meeting("standup", priority=5, duration=30)

    result = optimizer.optimize([meeting], [window], NOW)

    assert len(result) == 1
    placed = result[0]
    assert at(9) <= placed.scheduled_start <= at(9, 30)
    assert (placed.scheduled_start - window.start_time) % timedelta(minutes=15) == timedelta(0)
    assert placed.scheduled_end - placed.scheduled_start == timedelta(minutes=30)
    # later slots sit closer to the deadline and score higher
    assert placed.scheduled_start == at(9, 30)


def test_higher_priority_wins_the_only_slot(optimizer):
    window = make_window(at(9), at(9, 30))
    low = make_meeting("low", priority=2)
    high = make_meeting("high", priority=9)

    result = optimizer.optimize([low, high], [window], NOW)

    assert [sm.meeting.id for sm in result] == ["high"]


def test_meeting_longer_than_window_is_omitted(optimizer):
    window = make_window(at(9), at(9, 30))
    assert optimizer.optimize([make_meeting("long", duration=60)], [window], NOW) == []


def test_window_ending_after_deadline_is_skipped(optimizer):
    # 09:00-09:30 would finish before 11:00, but the window itself runs past it
    window = make_window(at(9), at(12))
    meeting = make_meeting("gated", duration=30, deadline=at(11))

    assert optimizer.optimize([meeting], [window], NOW) == []


def test_window_ending_exactly_at_deadline_is_usable(optimizer):
    window = make_window(at(9), at(11))
    meeting = make_meeting("tight", duration=30, deadline=at(11))

    result = optimizer.optimize([meeting], [window], NOW)

    assert result[0].scheduled_end == at(11)


def test_empty_inputs(optimizer):
    assert optimizer.optimize([], [make_window(at(9), at(10))], NOW) == []
    assert optimizer.optimize([make_meeting("a")], [], NOW) == []


def test_best_scoring_window_is_chosen(optimizer):
    morning = make_window(at(9), at(10))
    afternoon = make_window(at(14), at(15))

    result = optimizer.optimize([make_meeting("a")], [morning, afternoon], NOW)

    assert result[0].scheduled_start == at(14, 30)


def test_equal_scores_keep_window_list_order(optimizer):
    # With the deadline beyond the urgency horizon every slot scores the same
    far_deadline = NOW + timedelta(days=60)
    afternoon = make_window(at(14), at(15))
    morning = make_window(at(9), at(10))

    result = optimizer.optimize([make_meeting("a", deadline=far_deadline)], [afternoon, morning], NOW)

    assert result[0].scheduled_start == at(14)


def test_output_follows_rank_order_not_input_order(optimizer):
    window = make_window(at(9), at(12))
    meetings = [
        make_meeting("low", priority=2),
        make_meeting("mid", priority=5),
        make_meeting("high", priority=9),
    ]

    result = optimizer.optimize(meetings, [window], NOW)

    assert [sm.meeting.id for sm in result] == ["high", "mid", "low"]


def test_rank_ties_keep_input_order(optimizer):
    window = make_window(at(9), at(12))
    meetings = [make_meeting("first"), make_meeting("second"), make_meeting("third")]

    result = optimizer.optimize(meetings, [window], NOW)

    assert [sm.meeting.id for sm in result] == ["first", "second", "third"]


def test_later_meetings_fill_around_earlier_placements(optimizer):
    window = make_window(at(9), at(10))
    high = make_meeting("high", priority=9)
    low = make_meeting("low", priority=2)

    result = optimizer.optimize([high, low], [window], NOW)

    by_id = {sm.meeting.id: sm for sm in result}
    assert by_id["high"].scheduled_start == at(9, 30)
    # touching intervals do not conflict
    assert by_id["low"].scheduled_start == at(9)
    assert by_id["low"].scheduled_end == by_id["high"].scheduled_start


def test_overlapping_windows_do_not_double_book(optimizer):
    windows = [make_window(at(9), at(11)), make_window(at(10), at(12))]
    meetings = [make_meeting(f"m{i}", duration=60) for i in range(4)]

    result = optimizer.optimize(meetings, windows, NOW)

    assert len(result) == 3
    assert SchedulingValidator().validate_schedule(result, windows)["valid"]


def test_non_positive_duration_is_omitted(optimizer):
    window = make_window(at(9), at(10))
    result = optimizer.optimize_schedule([make_meeting("zero", duration=0)], [window], NOW)

    assert result.scheduled == []
    assert [m.id for m in result.unscheduled] == ["zero"]


def test_input_list_is_not_reordered(optimizer):
    meetings = [make_meeting("low", priority=1), make_meeting("high", priority=10)]
    snapshot = list(meetings)

    optimizer.optimize(meetings, [make_window(at(9), at(12))], NOW)

    assert meetings == snapshot


def test_runs_are_deterministic(optimizer):
    windows = [make_window(at(9), at(12)), make_window(at(13), at(17))]
    meetings = [make_meeting(f"m{i}", priority=i % 10 + 1, duration=15 * (i % 4 + 1)) for i in range(10)]

    assert optimizer.optimize(meetings, windows, NOW) == optimizer.optimize(meetings, windows, NOW)


def test_optimize_schedule_reports_misses_and_mean_score(optimizer):
    window = make_window(at(9), at(9, 30))
    high = make_meeting("high", priority=9)
    low = make_meeting("low", priority=2)

    result = optimizer.optimize_schedule([low, high], [window], NOW)

    assert result.scheduled_count == 1
    assert [m.id for m in result.unscheduled] == ["low"]
    assert result.optimization_score == pytest.approx(result.scheduled[0].score)


def test_empty_result_scores_zero(optimizer):
    assert optimizer.optimize_schedule([], [], NOW).optimization_score == 0.0


def test_fully_placed_set_leaves_nothing_to_reoptimize(optimizer):
    windows = [make_window(at(9), at(10))]
    meetings = [make_meeting("a", priority=8), make_meeting("b", priority=4)]

    first = optimizer.optimize(meetings, windows, NOW)
    assert len(first) == 2

    leftover = remaining_windows(windows, first)
    assert leftover == []
    assert optimizer.optimize(meetings, leftover, NOW) == []


def test_timezone_aware_inputs_use_utc_now():
    tz = timezone(timedelta(hours=5, minutes=30))
    start = datetime(2030, 1, 7, 9, 0, tzinfo=tz)
    meeting = make_meeting("aware", deadline=start + timedelta(hours=9))

    result = optimize([meeting], [make_window(start, start + timedelta(hours=1))])

    assert result[0].scheduled_start.tzinfo is not None


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_random_inputs_satisfy_placement_rules(optimizer, seed):
    rng = random.Random(seed)

    windows = []
    for _ in range(6):
        start = at(8, day_offset=rng.randint(0, 4)) + timedelta(minutes=15 * rng.randint(0, 30))
        windows.append(make_window(start, start + timedelta(minutes=15 * rng.randint(2, 16))))

    meetings = [
        make_meeting(
            f"m{i}",
            priority=rng.randint(1, 10),
            duration=rng.choice([15, 30, 45, 60, 90, 120]),
            deadline=at(18, day_offset=rng.randint(0, 6)),
        )
        for i in range(12)
    ]

    result = optimizer.optimize(meetings, windows, NOW)
    validation = SchedulingValidator().validate_schedule(result, windows)

    assert validation["valid"], validation["errors"]
    assert len(result) <= len(meetings)
