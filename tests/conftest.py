from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure(config: pytest.Config) -> None:
    # Modules live flat at the project root.
    root_dir = Path(__file__).resolve().parents[1]
    root_str = str(root_dir)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


@pytest.fixture
def params():
    from window_oracle import WindowParameters

    return WindowParameters(approach_time=1000, hit_window_50=50, physics_margin=10)


@pytest.fixture
def spinner_hit_objects():
    from hit_object_models import HitObject, HitObjectKind, make_point

    # End times in timeline order are [5000, 200, 300]: the first search probe lands past the spinner.
    return [
        HitObject(start_time=100, end_time=5000, kind=HitObjectKind.CHANNELED_RANGE),
        make_point(200),
        make_point(300),
    ]


@pytest.fixture
def two_spinner_hit_objects():
    from hit_object_models import HitObject, HitObjectKind, make_point

    return [
        HitObject(start_time=100, end_time=5000, kind=HitObjectKind.CHANNELED_RANGE),
        make_point(200),
        make_point(300),
        HitObject(start_time=10000, end_time=15000, kind=HitObjectKind.CHANNELED_RANGE),
        make_point(10100),
        make_point(10200),
    ]
