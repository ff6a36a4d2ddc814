# -*- coding: utf-8 -*-
########################
# difficulty.py
########################
# Purpose:
# - Convert chart difficulty settings into the integer window parameters the engine uses.
#
# Design notes:
# - No Qt usage. Pure arithmetic.
# - Fractional milliseconds round up so the derived windows never undershoot the engine's.
#
########################
# Interfaces:
# Public functions:
# - approach_time_for(approach_rate: float) -> int
# - hit_window_50_for(overall_difficulty: float) -> int
# - window_parameters_for(*, approach_rate: float, overall_difficulty: float, physics_margin: int) -> WindowParameters
#
# Inputs:
# - approach_rate and overall_difficulty in [0, 10] (values above 10 are accepted as-is).
#
# Outputs:
# - WindowParameters for window_oracle.py.
#
########################

from __future__ import annotations

import math

from window_oracle import WindowParameters


def approach_time_for(approach_rate: float) -> int:
    rate = float(approach_rate)
    if rate < 5.0:
        return int(math.ceil(1800.0 - 120.0 * rate))
    return int(math.ceil(1950.0 - 150.0 * rate))


def hit_window_50_for(overall_difficulty: float) -> int:
    return int(math.ceil(199.5 - 10.0 * float(overall_difficulty)))


def window_parameters_for(*, approach_rate: float, overall_difficulty: float, physics_margin: int) -> WindowParameters:
    return WindowParameters(
        approach_time=approach_time_for(approach_rate),
        hit_window_50=hit_window_50_for(overall_difficulty),
        physics_margin=int(physics_margin),
    )


def _run_unit_tests() -> None:
    assert approach_time_for(5) == 1200
    assert approach_time_for(9) == 600
    assert approach_time_for(0) == 1800
    assert hit_window_50_for(8) == 120
    assert hit_window_50_for(7.5) == 125
    assert hit_window_50_for(7.55) == 124

    params = window_parameters_for(approach_rate=10, overall_difficulty=10, physics_margin=9)
    assert params == WindowParameters(approach_time=450, hit_window_50=100, physics_margin=9)


if __name__ == "__main__":
    _run_unit_tests()
    print("difficulty.py: ok")
