# -*- coding: utf-8 -*-
########################
# hit_object_models.py
########################
# Purpose:
# - Core data models shared by the timeline, window oracle, detector and solver.
# - Defines the decoded hit object record and its kind.
#
# Design notes:
# - Keep these models stable. Prefer extending with new optional fields rather than breaking changes.
# - No Qt usage. These are plain dataclasses.
# - Kind decoding from file type flags happens before these models are built.
#
########################
# Interfaces:
# Public enums:
# - class HitObjectKind(enum.Enum): POINT | HELD_RANGE | CHANNELED_RANGE | HOLD_NOTE
#
# Public dataclasses:
# - HitObject(start_time: int, end_time: int, kind: HitObjectKind, position: tuple[float, float])
#   - is_point / is_ranged
#
# Public functions:
# - make_point(time: int) -> HitObject
# - make_filler(time: int) -> HitObject
#
# Inputs/Outputs:
# - Produced by chart_store.py (or any external decoder) and owned by timeline.Timeline.
#
########################

from __future__ import annotations

from dataclasses import dataclass
import enum
from typing import Tuple


class HitObjectKind(enum.Enum):
    POINT = "point"
    HELD_RANGE = "held_range"
    CHANNELED_RANGE = "channeled_range"
    # Neither point nor range for unload purposes. Uses the combined end time margin.
    HOLD_NOTE = "hold_note"


@dataclass(frozen=True)
class HitObject:
    start_time: int
    end_time: int
    kind: HitObjectKind = HitObjectKind.POINT
    position: Tuple[float, float] = (0.0, 0.0)

    @property
    def is_point(self) -> bool:
        return self.kind is HitObjectKind.POINT

    @property
    def is_ranged(self) -> bool:
        return self.kind in (HitObjectKind.HELD_RANGE, HitObjectKind.CHANNELED_RANGE)


def make_point(time: int, position: Tuple[float, float] = (0.0, 0.0)) -> HitObject:
    return HitObject(start_time=int(time), end_time=int(time), kind=HitObjectKind.POINT, position=position)


def make_filler(time: int) -> HitObject:
    """Zero-length channeled range used only to shift loading window bounds."""
    return HitObject(start_time=int(time), end_time=int(time), kind=HitObjectKind.CHANNELED_RANGE, position=(0.0, 0.0))
