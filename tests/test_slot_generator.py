"""Slot grid generation from weekly rules."""
from datetime import date, time, timedelta

import pytest

from appointment_scheduler.core.exceptions import ValidationError
from appointment_scheduler.models import AvailabilityRule
from appointment_scheduler.services.availability.slot_generator import CandidateSlots, iter_rule_slots
from appointment_scheduler.utils.timeutils import day_of_week

from conftest import MONDAY, at


def make_rule(day=1, start=time(9, 0), end=time(10, 0), minutes=30, active=True):
    return AvailabilityRule(
        day_of_week=day,
        start_time=start,
        end_time=end,
        slot_duration_minutes=minutes,
        is_active=active,
    )


def test_monday_rule_yields_back_to_back_slots():
    slots = list(iter_rule_slots(make_rule(), MONDAY))

    assert [s.start for s in slots] == [at(MONDAY, 9, 0), at(MONDAY, 9, 30)]
    assert slots[-1].end == at(MONDAY, 10, 0)


def test_slot_grid_law_holds_for_uneven_windows():
    rule = make_rule(start=time(9, 0), end=time(11, 10), minutes=45)
    slots = list(iter_rule_slots(rule, MONDAY))

    assert [s.start.time() for s in slots] == [time(9, 0), time(9, 45)]
    for slot in slots:
        assert slot.end - slot.start == timedelta(minutes=45)
        assert slot.end <= at(MONDAY, 11, 10)


def test_window_shorter_than_one_slot_yields_nothing():
    assert list(iter_rule_slots(make_rule(end=time(9, 20)), MONDAY)) == []


def test_non_positive_duration_is_rejected():
    with pytest.raises(ValidationError):
        list(iter_rule_slots(make_rule(minutes=0), MONDAY))


def test_candidates_only_use_matching_weekday_and_active_rules():
    rules = [
        make_rule(day=1),
        make_rule(day=2, start=time(14, 0), end=time(15, 0)),
        make_rule(day=1, start=time(12, 0), end=time(13, 0), active=False),
    ]
    slots = list(CandidateSlots(rules, MONDAY, MONDAY + timedelta(days=1)))

    assert [s.start for s in slots] == [
        at(MONDAY, 9, 0),
        at(MONDAY, 9, 30),
        at(MONDAY + timedelta(days=1), 14, 0),
        at(MONDAY + timedelta(days=1), 14, 30),
    ]


def test_overlapping_rules_are_not_merged():
    rules = [make_rule(), make_rule()]
    starts = [s.start for s in CandidateSlots(rules, MONDAY, MONDAY)]

    assert starts.count(at(MONDAY, 9, 0)) == 2
    assert len(starts) == 4


def test_candidates_are_restartable():
    candidates = CandidateSlots([make_rule()], MONDAY, MONDAY + timedelta(days=7))

    assert list(candidates) == list(candidates)
    assert len(list(candidates)) == 4


def test_end_before_start_is_empty():
    assert list(CandidateSlots([make_rule()], MONDAY, MONDAY - timedelta(days=1))) == []


def test_sunday_is_zero():
    assert day_of_week(date(2023, 12, 31)) == 0
    assert day_of_week(MONDAY) == 1
    assert day_of_week(date(2024, 1, 6)) == 6
