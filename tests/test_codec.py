"""Tests for the front-matter codec."""

from datetime import date, datetime, time

from notecal.codec.frontmatter import (
    decode,
    derive_basename,
    encode,
    encode_from_calendar_event,
    join_document,
    merge_metadata,
    parse_date,
    parse_time,
    split_document,
)
from notecal.models.event import CalendarEvent


def test_split_document_without_front_matter():
    """Test plain notes have no metadata."""
    metadata, body = split_document("# Just a note\n")
    assert metadata is None
    assert body == "# Just a note\n"


def test_split_document_unterminated_block():
    """Test an unclosed front-matter block is not metadata."""
    text = "---\ntitle: Open\nno closing line\n"
    assert split_document(text) == (None, text)


def test_split_document_invalid_yaml():
    """Test broken YAML is treated as no metadata."""
    metadata, body = split_document("---\ntitle: [unclosed\n---\nbody\n")
    assert metadata is None
    assert body == "body\n"


def test_split_document_non_mapping():
    """Test a YAML list is not metadata."""
    metadata, _ = split_document("---\n- a\n- b\n---\n")
    assert metadata is None


def test_split_document_empty_block():
    """Test an empty block yields empty metadata."""
    metadata, body = split_document("---\n---\nbody")
    assert metadata == {}
    assert body == "body"


def test_join_document_keeps_body_and_key_order():
    """Test joined documents split back to the same metadata and body."""
    text = join_document({"title": "Standup", "date": date(2024, 1, 5), "tags": ["work"]}, "Notes\n")
    assert text.startswith("---\ntitle: Standup\n")
    metadata, body = split_document(text)
    assert list(metadata) == ["title", "date", "tags"]
    assert metadata["date"] == date(2024, 1, 5)
    assert body == "Notes\n"


def test_parse_date():
    """Test date coercion from YAML values."""
    assert parse_date("2024-01-05") == date(2024, 1, 5)
    assert parse_date(date(2024, 1, 5)) == date(2024, 1, 5)
    assert parse_date(datetime(2024, 1, 5, 9, 0)) == date(2024, 1, 5)
    assert parse_date("next tuesday") is None
    assert parse_date(None) is None


def test_parse_time():
    """Test time coercion from YAML values."""
    assert parse_time("09:30") == time(9, 30)
    assert parse_time("9:05:10") == time(9, 5, 10)
    assert parse_time("25:00") is None
    assert parse_time("noon") is None
    assert parse_time(True) is None


def test_parse_time_sexagesimal_integer():
    """Test unquoted YAML times (read as base-60 integers) are minutes past midnight."""
    metadata, _ = split_document("---\nstartTime: 10:30\n---\n")
    assert metadata["startTime"] == 630
    assert parse_time(metadata["startTime"]) == time(10, 30)
    assert parse_time(24 * 60) is None


def test_decode_all_day():
    """Test decoding a single-day all-day event."""
    record = decode({"title": "Holiday", "date": "2024-01-05", "allDay": True}, path="events/holiday.md")
    assert record.id == "events/holiday.md"
    assert record.title == "Holiday"
    assert record.start == date(2024, 1, 5)
    assert record.end is None
    assert record.all_day is True


def test_decode_all_day_end_is_exclusive():
    """Test the inclusive endDate becomes an exclusive end."""
    record = decode(
        {"title": "Trip", "date": "2024-01-05", "endDate": "2024-01-07", "allDay": True},
        path="events/trip.md",
    )
    assert record.end == date(2024, 1, 8)


def test_decode_timed():
    """Test decoding a timed event."""
    record = decode(
        {"title": "Standup", "date": "2024-01-05", "allDay": False, "startTime": "09:00", "endTime": "09:30"},
        path="events/standup.md",
    )
    assert record.all_day is False
    assert record.start == datetime(2024, 1, 5, 9, 0)
    assert record.end == datetime(2024, 1, 5, 9, 30)


def test_decode_title_falls_back_to_file_name():
    """Test a missing title uses the document name."""
    record = decode({"date": "2024-01-05"}, path="events/2024-01-05 Dentist.md")
    assert record.title == "2024-01-05 Dentist"


def test_decode_all_day_defaults_from_start_time():
    """Test allDay is inferred when absent."""
    assert decode({"date": "2024-01-05"}, path="a.md").all_day is True
    assert decode({"date": "2024-01-05", "startTime": "14:00"}, path="a.md").all_day is False


def test_decode_color():
    """Test the document colour is kept on the record."""
    record = decode({"date": "2024-01-05", "color": "#00ff00"}, path="a.md")
    assert record.color == "#00ff00"


def test_decode_not_an_event():
    """Test metadata that does not describe an event decodes to None."""
    assert decode(None, path="a.md") is None
    assert decode({}, path="a.md") is None
    assert decode({"title": "No date"}, path="a.md") is None
    assert decode({"date": "someday"}, path="a.md") is None
    assert decode({"date": "2024-01-05", "endDate": "2024-01-04"}, path="a.md") is None
    assert decode({"date": "2024-01-05", "allDay": False}, path="a.md") is None
    assert (
        decode({"date": "2024-01-05", "startTime": "10:00", "endTime": "09:00"}, path="a.md")
        is None
    )


def test_encode_decode_all_day_round_trip():
    """Test encoding a decoded all-day event gives back the same date and flag."""
    metadata = {"date": "2024-01-05", "allDay": True}
    record = decode(metadata, path="events/a.md")
    encoded = encode(record.start, record.end, record.all_day)
    assert encoded == {"date": date(2024, 1, 5), "allDay": True}


def test_encode_multi_day_all_day():
    """Test an exclusive all-day end is written as an inclusive endDate."""
    encoded = encode(date(2024, 1, 5), date(2024, 1, 8), True)
    assert encoded == {"date": date(2024, 1, 5), "endDate": date(2024, 1, 7), "allDay": True}


def test_encode_timed():
    """Test a timed range is written as date plus times."""
    encoded = encode(datetime(2024, 1, 5, 9, 0), datetime(2024, 1, 5, 10, 15), False)
    assert encoded == {
        "date": date(2024, 1, 5),
        "allDay": False,
        "startTime": "09:00",
        "endTime": "10:15",
    }


def test_encode_timed_overnight():
    """Test a timed range ending the next day records endDate."""
    encoded = encode(datetime(2024, 1, 5, 22, 0), datetime(2024, 1, 6, 2, 0), False)
    assert encoded["endDate"] == date(2024, 1, 6)
    assert encoded["endTime"] == "02:00"

    record = decode(encoded, path="night.md")
    assert record.end == datetime(2024, 1, 6, 2, 0)


def test_encode_from_calendar_event():
    """Test edited events keep their title and document colour."""
    event = CalendarEvent(
        id="events/a.md",
        title="Review",
        start=date(2024, 2, 1),
        all_day=True,
        color="#ff0000",
        event_color="#123456",
    )
    encoded = encode_from_calendar_event(event)
    assert encoded == {
        "title": "Review",
        "date": date(2024, 2, 1),
        "allDay": True,
        "color": "#123456",
    }


def test_merge_metadata_drops_stale_range_keys():
    """Test switching to all-day removes times but keeps unrelated keys."""
    existing = {
        "title": "Standup",
        "date": date(2024, 1, 5),
        "allDay": False,
        "startTime": "09:00",
        "endTime": "09:30",
        "tags": ["work"],
    }
    merged = merge_metadata(existing, encode(date(2024, 1, 6), None, True))
    assert merged == {
        "title": "Standup",
        "tags": ["work"],
        "date": date(2024, 1, 6),
        "allDay": True,
    }


def test_derive_basename():
    """Test document names from date and title."""
    assert derive_basename(date(2024, 1, 5), "Standup") == "2024-01-05 Standup"
    assert derive_basename(datetime(2024, 1, 5, 9, 0), "Q1: plan/review?") == "2024-01-05 Q1 planreview"


def test_decode_timed_multi_day_without_end_time():
    """Test a timed event with endDate but no endTime runs through its last day."""
    metadata = {"date": "2024-01-05", "endDate": "2024-01-07", "startTime": "22:00"}
    record = decode(metadata, path="events/retreat.md")
    assert record.start == datetime(2024, 1, 5, 22, 0)
    assert record.end == datetime(2024, 1, 8, 0, 0)

    again = decode(encode(record.start, record.end, record.all_day), path="events/retreat.md")
    assert again.end == record.end
