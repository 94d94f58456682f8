import pytest

from app.core.exceptions import ValidationError
from app.scheduling.entry import ScheduleKey, TimetableDraft
from app.scheduling.interval import TimeInterval


def make_draft(**overrides):
    values = {
        "section_id": "sec-1",
        "day_of_week": 1,
        "start_time": "09:00",
        "end_time": "10:30",
        "room_id": "R1",
        "faculty_id": "F1",
        "semester": "S1",
    }
    values.update(overrides)
    return TimetableDraft(**values)


def test_validate_builds_entry_with_key_and_interval():
    entry = make_draft().validate()
    assert entry.id is None
    assert entry.key == ScheduleKey("S1", 1)
    assert entry.interval == TimeInterval(540, 630)
    assert entry.has_resources


@pytest.mark.parametrize("field", ["section_id", "day_of_week", "start_time", "end_time", "semester"])
def test_missing_required_field_is_rejected(field):
    with pytest.raises(ValidationError) as exc_info:
        make_draft(**{field: None}).validate()
    assert exc_info.value.status_code == 422
    assert "required" in exc_info.value.message


def test_blank_strings_count_as_missing():
    with pytest.raises(ValidationError) as exc_info:
        make_draft(section_id="  ", semester="").validate()
    assert exc_info.value.details["missing"] == ["sectionId", "semester"]


@pytest.mark.parametrize("day", [0, 8, -1, True, "1"])
def test_day_of_week_must_be_between_one_and_seven(day):
    with pytest.raises(ValidationError, match="Day of week"):
        make_draft(day_of_week=day).validate()


def test_start_must_precede_end():
    with pytest.raises(ValidationError, match="End time must be after start time"):
        make_draft(start_time="10:00", end_time="10:00").validate()


@pytest.mark.parametrize("value", ["9am", "09:00\n", "09:00 "])
def test_malformed_time_is_rejected(value):
    with pytest.raises(ValidationError, match="HH:MM"):
        make_draft(start_time=value).validate()


def test_blank_resource_references_become_absent():
    entry = make_draft(room_id="", faculty_id="   ").validate()
    assert entry.room_id is None
    assert entry.faculty_id is None
    assert not entry.has_resources


def test_merged_overlays_changes_and_rejects_unknown_fields():
    draft = make_draft().merged({"room_id": "R3", "start_time": "08:00"})
    assert draft.room_id == "R3"
    assert draft.start_time == "08:00"
    assert draft.faculty_id == "F1"

    with pytest.raises(ValidationError, match="Unknown timetable field"):
        make_draft().merged({"description": "Lab"})


def test_same_placement_ignores_section_but_not_resources():
    entry = make_draft().validate(entry_id="e1")
    assert entry.same_placement(make_draft(section_id="sec-2").validate(entry_id="e1"))
    assert not entry.same_placement(make_draft(room_id="R2").validate())
    assert not entry.same_placement(make_draft(faculty_id=None).validate())
    assert not entry.same_placement(make_draft(end_time="10:00").validate())
    assert not entry.same_placement(make_draft(semester="S2").validate())
    assert not entry.same_placement(make_draft(day_of_week=2).validate())


def test_to_draft_round_trips_through_validate():
    entry = make_draft(end_time="24:00").validate(entry_id="e1")
    assert entry.to_draft().validate(entry_id="e1") == entry
