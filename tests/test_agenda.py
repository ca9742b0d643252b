"""Tests für die Monatsansicht (geometry/agenda.py) und Vorlesungstermine."""

from datetime import date

import pytest

from geometry.agenda import (
    build_month_events,
    calendar_year_for_month,
    entries_for_season,
    offering_overlaps_season,
)
from geometry.radial import DisplayEntry
from geometry.zoom import Season
from models.course import CourseCategory, CourseDefinition
from models.offering import (
    CourseOffering,
    ExamOption,
    ExamType,
    LectureSession,
    SemesterType,
)


def _offering(off_id: str, start: str, end: str, **kwargs) -> CourseOffering:
    kwargs.setdefault("semester_type", SemesterType.SUMMER)
    return CourseOffering(
        id=off_id, course_definition_id="d", academic_year=2026,
        start_date=start, end_date=end, **kwargs,
    )


def _entry(offering: CourseOffering, option: ExamOption = None) -> DisplayEntry:
    definition = CourseDefinition(
        id="d", name="Modul", short_code="MOD", category=CourseCategory.SE,
        credits=6, color="#4A90D9",
    )
    return DisplayEntry(offering=offering, definition=definition,
                        exam_option=option, display_order=0)


def _kinds(events: dict, kind: str) -> list[int]:
    return sorted(day for day, items in events.items()
                  for e in items if e.kind == kind)


# ─── Vorlesungstermine am Angebot ─────────────────────────────────────────────

class TestLectureSessions:
    def test_none_by_default(self):
        assert _offering("o1", "2026-04-20", "2026-05-20").get_lecture_sessions() == []

    def test_sessions_win_over_dates(self):
        off = _offering(
            "o1", "2026-04-20", "2026-05-20",
            lecture_sessions=[LectureSession(id="s1", date="2026-05-06")],
            lecture_dates=["2026-05-13"],
        )
        assert [s.id for s in off.get_lecture_sessions()] == ["s1"]

    def test_dates_get_generated_ids(self):
        off = _offering("o1", "2026-04-20", "2026-05-20",
                        lecture_dates=["2026-05-06", "", "2026-05-13"])
        sessions = off.get_lecture_sessions()
        assert [s.id for s in sessions] == ["o1-lecture-20260506", "o1-lecture-20260513"]

    def test_session_without_id_gets_generated_id(self):
        off = _offering("o1", "2026-04-20", "2026-05-20",
                        lecture_sessions=[LectureSession(date="2026-05-06")])
        assert off.get_lecture_sessions()[0].id == "o1-lecture-20260506"

    @pytest.mark.parametrize("start,end,expected", [
        ("10:15", "11:45", "10:15 - 11:45"),
        ("10:15", None, "10:15"),
        (None, "11:45", "11:45"),
        (None, None, None),
    ])
    def test_time_range(self, start, end, expected):
        session = LectureSession(date="2026-05-06", start_time=start, end_time=end)
        assert session.time_range() == expected


# ─── Monatsansicht ────────────────────────────────────────────────────────────

class TestCalendarYear:
    def test_january_and_february_belong_to_next_year(self):
        assert calendar_year_for_month(2026, 0) == 2027
        assert calendar_year_for_month(2026, 1) == 2027

    def test_march_to_december_stay(self):
        assert calendar_year_for_month(2026, 2) == 2026
        assert calendar_year_for_month(2026, 11) == 2026


class TestBuildMonthEvents:
    def test_weekly_fallback_on_start_weekday(self):
        # 2026-04-20 ist ein Montag
        off = _offering("o1", "2026-04-20", "2026-05-20")
        events = build_month_events([_entry(off)], 2026, 4)
        assert _kinds(events, "lecture") == [4, 11, 18]
        first = events[4][0]
        assert first.id == "o1-lecture-2026-05-04"
        assert first.label == "MOD lecture"
        assert first.day.weekday() == 0
        assert first.time_range is None

    def test_weekly_fallback_starts_at_offering_start(self):
        off = _offering("o1", "2026-05-13", "2026-06-30")
        events = build_month_events([_entry(off)], 2026, 4)
        assert _kinds(events, "lecture") == [13, 20, 27]

    def test_explicit_sessions_replace_weekly_schedule(self):
        off = _offering(
            "o1", "2026-04-20", "2026-05-20",
            lecture_sessions=[
                LectureSession(id="s1", date="2026-05-06",
                               start_time="10:15", end_time="11:45"),
                LectureSession(id="s2", date="2026-06-03"),
            ],
        )
        events = build_month_events([_entry(off)], 2026, 4)
        assert _kinds(events, "lecture") == [6]
        event = events[6][0]
        assert event.id == "o1-lecture-s1-2026-05-06"
        assert event.time_range == "10:15 - 11:45"

    def test_lecture_dates_use_generated_session_ids(self):
        off = _offering("o1", "2026-04-20", "2026-05-20",
                        lecture_dates=["2026-05-06"])
        events = build_month_events([_entry(off)], 2026, 4)
        assert events[6][0].id == "o1-lecture-o1-lecture-20260506-2026-05-06"

    def test_exam_and_reexam_events(self):
        option = ExamOption(id="e1", type=ExamType.WRITTEN, date="2026-05-27",
                            reexam_date="2026-05-29", is_default=True)
        off = _offering("o1", "2026-04-20", "2026-05-20", exam_options=[option])
        events = build_month_events([_entry(off, option)], 2026, 4)

        exam = events[27][0]
        assert exam.kind == "exam"
        assert exam.label == "MOD written"
        assert exam.id == "o1-exam-0-2026-05-27"
        assert not exam.is_reexam

        reexam = events[29][0]
        assert reexam.is_reexam
        assert reexam.label == "MOD reexam written"
        assert reexam.id == "o1-reexam-0-2026-05-29"

    def test_all_exam_options_listed(self):
        options = [
            ExamOption(id="e1", type=ExamType.WRITTEN, date="2026-05-27", is_default=True),
            ExamOption(id="e2", type=ExamType.PROJECT, date="2026-05-15"),
        ]
        off = _offering("o1", "2026-04-20", "2026-05-20", exam_options=options)
        events = build_month_events([_entry(off, options[0])], 2026, 4)
        assert _kinds(events, "exam") == [27]
        assert _kinds(events, "project") == [15]
        assert events[15][-1].exam_type == ExamType.PROJECT

    def test_selected_option_used_without_offering_options(self):
        option = ExamOption(id="e1", type=ExamType.ORAL, date="2026-05-27")
        off = _offering("o1", "2026-04-20", "2026-05-20")
        events = build_month_events([_entry(off, option)], 2026, 4)
        assert events[27][0].label == "MOD oral"

    def test_offering_outside_month_has_no_events(self):
        option = ExamOption(id="e1", type=ExamType.WRITTEN, date="2026-07-10")
        off = _offering("o1", "2026-04-20", "2026-05-20", exam_options=[option])
        assert build_month_events([_entry(off, option)], 2026, 6) == {}

    def test_january_uses_following_calendar_year(self):
        off = _offering("w1", "2026-10-12", "2027-02-05",
                        semester_type=SemesterType.WINTER)
        events = build_month_events([_entry(off)], 2026, 0)
        days = [e.day for items in events.values() for e in items]
        assert days
        assert all(d.year == 2027 and d.month == 1 for d in days)
        assert min(days) == date(2027, 1, 4)

    def test_unreadable_dates_skipped(self):
        broken = _offering("x", "kaputt", "2026-05-20")
        ok = _offering("o1", "2026-04-20", "2026-05-20")
        events = build_month_events([_entry(broken), _entry(ok)], 2026, 4)
        assert {e.id.split("-")[0] for items in events.values() for e in items} == {"o1"}

    def test_events_keep_entry_order_per_day(self):
        first = _offering("a", "2026-05-04", "2026-05-20")
        second = _offering("b", "2026-05-04", "2026-05-20")
        events = build_month_events([_entry(first), _entry(second)], 2026, 4)
        assert [e.id for e in events[4]] == ["a-lecture-2026-05-04", "b-lecture-2026-05-04"]


class TestSeasonOverlap:
    @pytest.mark.parametrize("season,expected", [
        (Season.SPRING, True),
        (Season.SUMMER, False),
        (Season.AUTUMN, False),
        (Season.WINTER, False),
    ])
    def test_summer_term_in_spring(self, season, expected):
        off = _offering("o1", "2026-04-20", "2026-05-20")
        assert offering_overlaps_season(off, season) is expected

    @pytest.mark.parametrize("season,expected", [
        (Season.AUTUMN, True),
        (Season.WINTER, True),
        (Season.SPRING, False),
        (Season.SUMMER, False),
    ])
    def test_winter_term_across_new_year(self, season, expected):
        off = _offering("w1", "2026-10-12", "2027-02-05",
                        semester_type=SemesterType.WINTER)
        assert offering_overlaps_season(off, season) is expected

    def test_accepts_season_value(self):
        off = _offering("o1", "2026-06-01", "2026-06-30")
        assert offering_overlaps_season(off, "summer")

    def test_unreadable_dates_never_overlap(self):
        off = _offering("x", "kaputt", "2026-05-20")
        assert not offering_overlaps_season(off, Season.SPRING)

    def test_entries_for_season_filters(self):
        spring = _entry(_offering("a", "2026-04-20", "2026-05-20"))
        summer = _entry(_offering("b", "2026-06-01", "2026-07-20"))
        assert entries_for_season([spring, summer], Season.SUMMER) == [summer]
