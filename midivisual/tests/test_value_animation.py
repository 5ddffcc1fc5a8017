"""
Tests for the single-value animation helper.
"""

import pytest

from midivisual.timeline.value_animation import AnimationOptions, get_animated_value


class TestSingleAnimation:
    def test_interpolates(self):
        options = {"from": 10, "to": 40, "duration": 300}

        assert get_animated_value(0, options) == 10
        assert get_animated_value(150, options) == pytest.approx(25)
        assert get_animated_value(300, options) == pytest.approx(40)
        assert get_animated_value(1000, options) == pytest.approx(40)

    def test_before_start_returns_from(self):
        options = {"from": 10, "to": 40, "start_time": 1000, "duration": 300}

        assert get_animated_value(500, options) == 10

    def test_missing_start_time_returns_from(self):
        assert get_animated_value(500, AnimationOptions(from_value=3, to=9, start_time=None, duration=100)) == 3

    def test_mapping_without_start_time_starts_at_zero(self):
        assert get_animated_value(50, {"from": 0, "to": 10, "duration": 100}) == pytest.approx(5)

    def test_delay(self):
        options = {"from": 0, "to": 100, "start_time": 100, "delay": 100, "duration": 200}

        assert get_animated_value(200, options) == 0
        assert get_animated_value(300, options) == pytest.approx(50)

    def test_end_time(self):
        options = {"from": 0, "to": 100, "startTime": 1000, "endTime": 2000}

        assert get_animated_value(1500, options) == pytest.approx(50)

    def test_zero_duration_is_near_instant(self):
        options = {"from": 0, "to": 100, "duration": 0}

        assert get_animated_value(1, options) == pytest.approx(100)

    def test_easing_and_reverse(self):
        eased = {"from": 0, "to": 100, "duration": 1000, "easing": "ease_in"}
        reversed_ = {"from": 0, "to": 100, "duration": 1000, "reverse": True}

        assert get_animated_value(500, eased) == pytest.approx(25)
        assert get_animated_value(250, reversed_) == pytest.approx(75)
        assert get_animated_value(2000, reversed_) == pytest.approx(0)

    def test_time_expression_duration(self):
        options = {"from": 0, "to": 10, "duration": "0:02"}

        assert get_animated_value(1000, options) == pytest.approx(5)

    def test_defaults_to_zero(self):
        assert get_animated_value(100, {"duration": 100}) == 0

    def test_from_dict_ignores_unknown_keys(self):
        options = AnimationOptions.from_dict({"from": 1, "to": 2, "color": "red"})

        assert options.from_value == 1
        assert options.to == 2


class TestStepAnimation:
    def test_later_step_takes_over_mid_flight(self):
        steps = [
            {"from": 0, "to": 100, "start_time": 0, "duration": 1000},
            {"to": 0, "start_time": 500, "duration": 500},
        ]

        assert get_animated_value(250, steps) == pytest.approx(25)
        assert get_animated_value(500, steps) == pytest.approx(50)
        assert get_animated_value(750, steps) == pytest.approx(25)
        assert get_animated_value(1000, steps) == pytest.approx(0)
        assert get_animated_value(5000, steps) == 0

    def test_steps_inherit_unset_options(self):
        steps = [
            {"from": 10, "to": 20, "start_time": 0, "duration": 100},
            {"to": 30, "start_time": 200},
        ]

        # Second step inherits from=10 and duration=100
        assert get_animated_value(250, steps) == pytest.approx(20)

    def test_sequential_steps_do_not_overlap(self):
        steps = [
            {"from": 0, "to": 10, "start_time": 0, "duration": 100},
            {"from": 10, "to": 20, "start_time": 100, "duration": 100},
        ]

        assert get_animated_value(50, steps) == pytest.approx(5)
        assert get_animated_value(150, steps) == pytest.approx(15)

    def test_unscheduled_steps_return_first_from(self):
        steps = [{"from": 5, "to": 10}, {"to": 20}]

        assert get_animated_value(1000, steps) == 5

    def test_before_first_step(self):
        steps = [{"from": 7, "to": 10, "start_time": 500, "duration": 100}]

        assert get_animated_value(0, steps) == 7

    def test_empty_list(self):
        assert get_animated_value(100, []) == 0

    def test_accepts_option_objects(self):
        steps = [
            AnimationOptions(from_value=0, to=100, start_time=0, duration=1000),
            AnimationOptions(from_value=0, to=0, start_time=500, duration=500),
        ]

        assert get_animated_value(750, steps) == pytest.approx(25)

    def test_option_object_without_start_time_is_unscheduled(self):
        as_object = [AnimationOptions(from_value=5, to=10, duration=100)]
        as_mapping = [{"from": 5, "to": 10, "duration": 100}]

        assert get_animated_value(50, as_object) == 5
        assert get_animated_value(50, as_object) == get_animated_value(50, as_mapping)

    def test_option_objects_inherit_unset_fields(self):
        steps = [
            AnimationOptions(from_value=10, to=20, start_time=0, duration=100),
            AnimationOptions(to=30, start_time=200),
        ]

        assert get_animated_value(250, steps) == pytest.approx(20)
