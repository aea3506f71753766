"""
Tests for leave aggregation and cell colors.
"""

import itertools

import pendulum
import pytest

from talent_leave.domain.calendar_grid import generate_date_range, mark_holidays
from talent_leave.domain.leave_aggregator import (
    calculate_day_count,
    cell_color_for_member,
    find_status_conflicts,
    get_cell_color_class,
    group_by_team,
    transform_to_row_data,
)
from talent_leave.domain.models import (
    CellColor,
    Holiday,
    LeaveDateRange,
    LeaveRecord,
    LeaveStatus,
)


def _range(date_from: str, date_to: str, status: LeaveStatus = LeaveStatus.CONFIRMED) -> LeaveDateRange:
    return LeaveDateRange(
        date_from=pendulum.parse(date_from).date(),
        date_to=pendulum.parse(date_to).date(),
        status=status,
    )


def _record(record_id: str, team: str, *ranges: LeaveDateRange, name: str = "") -> LeaveRecord:
    return LeaveRecord(
        id=record_id,
        name=name or f"Talent {record_id}",
        team=team,
        role="Engineer",
        leave_ranges=tuple(ranges),
    )


class TestCalculateDayCount:
    """Tests for business-day counting."""

    def test_single_weekday(self):
        """Test a one-day leave on a Monday."""
        assert calculate_day_count("2024-01-15", "2024-01-15") == 1

    def test_range_across_weekend(self):
        """Test Tuesday to Friday across a month boundary."""
        assert calculate_day_count("2024-01-30", "2024-02-02") == 4

    def test_full_week_skips_weekend(self):
        """Test Monday to Sunday counts five days."""
        assert calculate_day_count("2024-01-15", "2024-01-21") == 5

    def test_weekend_only(self):
        """Test a Saturday-Sunday range counts nothing."""
        assert calculate_day_count("2024-01-13", "2024-01-14") == 0

    def test_holiday_excluded(self):
        """Test holidays in the list are skipped."""
        assert calculate_day_count("2024-01-15", "2024-01-17", ["2024-01-16"]) == 2

    def test_holiday_on_weekend_counted_once(self):
        """Test a weekend holiday does not reduce the count further."""
        assert calculate_day_count("2024-01-15", "2024-01-21", ["2024-01-20"]) == 5

    def test_holiday_as_date(self):
        """Test holidays can be given as dates."""
        assert calculate_day_count("2024-01-15", "2024-01-17", [pendulum.date(2024, 1, 17)]) == 2

    def test_timestamps(self):
        """Test ISO timestamps count their stored calendar days."""
        assert calculate_day_count("2024-01-15T00:00:00.000Z", "2024-01-19T23:00:00.000Z") == 5

    def test_inverted_range(self):
        """Test a range ending before it starts counts nothing."""
        assert calculate_day_count("2024-01-19", "2024-01-15") == 0

    def test_bounded_by_calendar_days(self):
        """Test the count never exceeds the number of calendar days."""
        start = pendulum.date(2024, 1, 1)
        for length in range(0, 20):
            end = start.add(days=length)
            assert 0 <= calculate_day_count(start, end) <= length + 1


class TestTransformToRowData:
    """Tests for transform_to_row_data."""

    def test_basic_row(self):
        """Test counts, dates and display strings for one range."""
        record = _record("t-1", "Mobile", _range("2024-01-15", "2024-01-17", LeaveStatus.DRAFT), name="Budi")

        row = transform_to_row_data(record)

        assert (row.id, row.name, row.team, row.role) == ("t-1", "Budi", "Mobile", "Engineer")
        assert row.leave_count == 3
        assert row.leave_dates == ["2024-01-15", "2024-01-16", "2024-01-17"]
        assert row.leave_dates_with_status == {
            "2024-01-15": LeaveStatus.DRAFT,
            "2024-01-16": LeaveStatus.DRAFT,
            "2024-01-17": LeaveStatus.DRAFT,
        }
        assert row.date_range == "15/01/2024 - 17/01/2024"
        assert row.status == "Draft"
        assert row.date_ranges[0].display == "15/01/2024 - 17/01/2024"

    def test_leave_dates_include_weekends(self):
        """Test weekends are listed even though they are not counted."""
        record = _record("t-1", "Mobile", _range("2024-01-12", "2024-01-15"))

        row = transform_to_row_data(record)

        assert row.leave_count == 2
        assert row.leave_dates == ["2024-01-12", "2024-01-13", "2024-01-14", "2024-01-15"]

    def test_holidays_reduce_count(self):
        """Test holidays are excluded from the count but not from the dates."""
        record = _record("t-1", "Mobile", _range("2024-01-15", "2024-01-17"))

        row = transform_to_row_data(record, holiday_dates=["2024-01-16"])

        assert row.leave_count == 2
        assert "2024-01-16" in row.leave_dates

    def test_no_ranges(self):
        """Test a record without leave."""
        row = transform_to_row_data(_record("t-1", "Mobile"))

        assert row.leave_count == 0
        assert row.date_ranges == []
        assert row.leave_dates == []
        assert row.leave_dates_with_status == {}
        assert row.date_range == ""
        assert row.status == ""

    def test_clipped_to_visible_window(self):
        """Test only business days inside the visible window are counted."""
        record = _record("t-1", "Mobile", _range("2024-01-29", "2024-02-09"))

        row = transform_to_row_data(record, visible_start="2024-02-01", visible_end="2024-02-29")

        assert row.leave_count == 7
        # Dates and display are not clipped
        assert row.leave_dates[0] == "2024-01-29"
        assert row.date_range == "29/01/2024 - 09/02/2024"

    def test_range_outside_window(self):
        """Test a range outside the window contributes nothing to the count."""
        record = _record(
            "t-1",
            "Mobile",
            _range("2024-01-15", "2024-01-19"),
            _range("2024-02-05", "2024-02-06"),
        )

        row = transform_to_row_data(record, visible_start="2024-02-01", visible_end="2024-02-29")

        assert row.leave_count == 2
        assert len(row.leave_dates) == 7

    def test_single_bound_does_not_clip(self):
        """Test clipping requires both bounds."""
        record = _record("t-1", "Mobile", _range("2024-01-29", "2024-02-09"))

        row = transform_to_row_data(record, visible_start="2024-02-01")

        assert row.leave_count == 10

    def test_overlapping_ranges_later_status_wins(self):
        """Test a day in two ranges takes the status of the later range."""
        record = _record(
            "t-1",
            "Mobile",
            _range("2024-01-15", "2024-01-17", LeaveStatus.CONFIRMED),
            _range("2024-01-17", "2024-01-18", LeaveStatus.DRAFT),
        )

        row = transform_to_row_data(record)

        assert row.leave_dates.count("2024-01-17") == 2
        assert row.leave_dates_with_status["2024-01-17"] is LeaveStatus.DRAFT
        assert row.leave_dates_with_status["2024-01-15"] is LeaveStatus.CONFIRMED
        assert row.date_range == "15/01/2024 - 17/01/2024, 17/01/2024 - 18/01/2024"
        assert row.status == "Confirmed, Draft"

    def test_status_deduplicated_in_order(self):
        """Test distinct statuses in order of first appearance."""
        record = _record(
            "t-1",
            "Mobile",
            _range("2024-01-08", "2024-01-08", LeaveStatus.SICK),
            _range("2024-01-15", "2024-01-15", LeaveStatus.CONFIRMED),
            _range("2024-01-22", "2024-01-22", LeaveStatus.SICK),
        )

        assert transform_to_row_data(record).status == "Sick, Confirmed"

    def test_display_from_hides_past_ranges(self):
        """Test only ranges ending on or after display_from are summarized."""
        record = _record(
            "t-1",
            "Mobile",
            _range("2024-01-08", "2024-01-09", LeaveStatus.SICK),
            _range("2024-01-22", "2024-01-23", LeaveStatus.DRAFT),
        )

        row = transform_to_row_data(record, display_from="2024-01-15")

        assert row.date_range == "22/01/2024 - 23/01/2024"
        assert row.status == "Draft"
        # Past days are still counted and colored
        assert row.leave_count == 4
        assert row.status_on("2024-01-08") is LeaveStatus.SICK

    def test_idempotent(self):
        """Test equal inputs give equal rows."""
        record = _record("t-1", "Mobile", _range("2024-01-15", "2024-01-19"))

        first = transform_to_row_data(record, ["2024-01-16"], "2024-01-01", "2024-01-31")
        second = transform_to_row_data(record, ["2024-01-16"], "2024-01-01", "2024-01-31")

        assert first == second


class TestGroupByTeam:
    """Tests for group_by_team."""

    def test_empty(self):
        """Test no records give no teams."""
        assert group_by_team([]) == []

    def test_groups_and_sorts(self):
        """Test teams are sorted case-insensitively and members keep input order."""
        records = [
            _record("1", "mobile"),
            _record("2", "Backend"),
            _record("3", "design"),
            _record("4", "Backend"),
        ]

        teams = group_by_team(records)

        assert [team.team_name for team in teams] == ["Backend", "design", "mobile"]
        assert [member.id for member in teams[0].members] == ["2", "4"]
        assert teams[0].member_count == 2

    def test_team_name_is_case_sensitive(self):
        """Test teams differing only in case stay separate."""
        teams = group_by_team([_record("1", "Mobile"), _record("2", "mobile")])

        assert [team.team_name for team in teams] == ["Mobile", "mobile"]

    def test_member_count_matches_input(self):
        """Test every record appears exactly once."""
        records = [_record(str(i), team) for i, team in enumerate(["A", "B", "A", "C", "B", "A"])]

        teams = group_by_team(records)

        assert sum(team.member_count for team in teams) == len(records)

    def test_holiday_generator_applies_to_all_records(self):
        """Test holidays given as a generator reach every member."""
        records = [
            _record("1", "Mobile", _range("2024-01-15", "2024-01-17")),
            _record("2", "Mobile", _range("2024-01-15", "2024-01-17")),
        ]

        teams = group_by_team(records, holiday_dates=(day for day in ["2024-01-16"]))

        assert [member.leave_count for member in teams[0].members] == [2, 2]

    def test_repeated_calls_give_equal_output(self):
        """Test grouping is deterministic for mixed-case teams and overlapping ranges."""
        records = [
            _record("1", "mobile", _range("2024-01-15", "2024-01-17"), _range("2024-01-17", "2024-01-18", LeaveStatus.SICK)),
            _record("2", "Backend", _range("2024-01-29", "2024-02-09", LeaveStatus.DRAFT)),
            _record("3", "Mobile"),
            _record("4", "backend", _range("2024-01-22", "2024-01-22")),
        ]
        kwargs = dict(
            holiday_dates=["2024-01-16", "2024-02-08"],
            visible_start="2024-01-01",
            visible_end="2024-01-31",
            display_from="2024-01-16",
        )

        first = group_by_team(records, **kwargs)
        second = group_by_team(records, **kwargs)

        assert first == second
        assert repr(first) == repr(second)
        assert [team.team_name for team in first] == ["Backend", "backend", "Mobile", "mobile"]


class TestFindStatusConflicts:
    """Tests for find_status_conflicts."""

    def test_conflicting_overlap(self):
        """Test overlapping days with different statuses are reported."""
        record = _record(
            "t-1",
            "Mobile",
            _range("2024-01-15", "2024-01-17", LeaveStatus.CONFIRMED),
            _range("2024-01-17", "2024-01-18", LeaveStatus.SICK),
        )

        assert find_status_conflicts(record) == ["2024-01-17"]

    def test_same_status_overlap(self):
        """Test overlaps with equal statuses are not conflicts."""
        record = _record(
            "t-1",
            "Mobile",
            _range("2024-01-15", "2024-01-17"),
            _range("2024-01-16", "2024-01-18"),
        )

        assert find_status_conflicts(record) == []


class TestCellColors:
    """Tests for cell color priority."""

    def test_national_holiday_beats_everything(self):
        """Test national holidays win over every other flag."""
        for weekend, regional, leave in itertools.product([False, True], repeat=3):
            color = get_cell_color_class(weekend, regional, True, leave, LeaveStatus.DRAFT)
            assert color is CellColor.NATIONAL_HOLIDAY

    def test_weekend_beats_regional_and_leave(self):
        """Test weekends win over regional holidays and leave."""
        for regional, leave in itertools.product([False, True], repeat=2):
            assert get_cell_color_class(True, regional, False, leave, LeaveStatus.SICK) is CellColor.WEEKEND

    def test_regional_holiday_beats_leave(self):
        """Test regional holidays win over leave."""
        assert get_cell_color_class(False, True, False, True, LeaveStatus.CONFIRMED) is CellColor.REGIONAL_HOLIDAY

    @pytest.mark.parametrize(
        "status,expected",
        [
            (LeaveStatus.DRAFT, CellColor.LEAVE_DRAFT),
            (LeaveStatus.SICK, CellColor.LEAVE_SICK),
            (LeaveStatus.CONFIRMED, CellColor.LEAVE_CONFIRMED),
            ("Draft", CellColor.LEAVE_DRAFT),
            (None, CellColor.LEAVE_CONFIRMED),
        ],
    )
    def test_leave_by_status(self, status, expected):
        """Test leave colors by status."""
        assert get_cell_color_class(False, False, False, True, status) is expected

    def test_default(self):
        """Test a plain working day."""
        assert get_cell_color_class(False, False, False) is CellColor.DEFAULT
        assert get_cell_color_class(False, False, False, False, LeaveStatus.DRAFT) is CellColor.DEFAULT

    def test_tokens(self):
        """Test the color tokens used by renderers."""
        assert CellColor.NATIONAL_HOLIDAY.value == "bg-red-100"
        assert CellColor.WEEKEND.value == "bg-slate-100"
        assert CellColor.DEFAULT.value == "bg-white"

    def test_cell_color_for_member(self):
        """Test colors for a member across a marked grid."""
        record = _record(
            "t-1",
            "Mobile",
            _range("2024-01-10", "2024-01-16", LeaveStatus.SICK),
        )
        row = transform_to_row_data(record)
        cells = mark_holidays(
            generate_date_range("2024-01-09", "2024-01-17"),
            [
                Holiday(date=pendulum.date(2024, 1, 11), name="Libur Nasional"),
                Holiday(date=pendulum.date(2024, 1, 12), name="Libur Daerah", is_national=False),
            ],
        )

        colors = [cell_color_for_member(cell, row) for cell in cells]

        assert colors == [
            CellColor.DEFAULT,            # Tue 9, no leave
            CellColor.LEAVE_SICK,         # Wed 10
            CellColor.NATIONAL_HOLIDAY,   # Thu 11
            CellColor.REGIONAL_HOLIDAY,   # Fri 12
            CellColor.WEEKEND,            # Sat 13
            CellColor.WEEKEND,            # Sun 14
            CellColor.LEAVE_SICK,         # Mon 15
            CellColor.LEAVE_SICK,         # Tue 16
            CellColor.DEFAULT,            # Wed 17
        ]
