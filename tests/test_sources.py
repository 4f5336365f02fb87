"""Tests for building event sources."""

from datetime import date

from notecal.models.settings import ViewSettings
from notecal.models.source import ICSSource, LocalSource, RemoteSource
from notecal.sources import build_event_sources, owning_source, resolve_color
from notecal.sources.local import build_local_source, source_owns


async def test_build_local_source(vault, config, note):
    """Test every event document becomes an event; other notes are skipped."""
    note("events/a.md", {"title": "A", "date": "2024-01-05"})
    note("events/b.md", {"title": "B", "date": "2024-01-06", "color": "#00ff00"})
    note("events/plain.md", None, "just text")
    note("events/no-date.md", {"title": "Draft"})
    source = LocalSource(directory="events", color="#ff0000")

    built = await build_local_source(vault, source, False, config)

    assert {e.id for e in built.events} == {"events/a.md", "events/b.md"}
    colors = {e.id: e.color for e in built.events}
    assert colors == {"events/a.md": "#ff0000", "events/b.md": "#00ff00"}
    assert built.editable is True
    assert built.color == "#ff0000"


async def test_build_local_source_missing_directory(vault, config):
    """Test a missing directory yields None instead of raising."""
    source = LocalSource(directory="nowhere")
    assert await build_local_source(vault, source, False, config) is None


async def test_directory_scope_filter(vault, config, note):
    """Test documents outside the source directory are never included."""
    note("events/a.md", {"date": "2024-01-05"})
    note("events/sub/nested.md", {"date": "2024-01-05"})
    note("events2/other.md", {"date": "2024-01-05"})
    note("elsewhere.md", {"date": "2024-01-05"})
    source = LocalSource(directory="events")

    flat = await build_local_source(vault, source, False, config)
    deep = await build_local_source(vault, source, True, config)

    assert [e.id for e in flat.events] == ["events/a.md"]
    assert sorted(e.id for e in deep.events) == ["events/a.md", "events/sub/nested.md"]


def test_source_owns():
    """Test scope is compared per path component."""
    source = LocalSource(directory="events")
    assert source_owns(source, "events/a.md", recursive=False)
    assert not source_owns(source, "events/sub/a.md", recursive=False)
    assert source_owns(source, "events/sub/a.md", recursive=True)
    assert not source_owns(source, "events2/a.md", recursive=True)


def test_owning_source_first_in_order():
    """Test the first matching local source owns a document."""
    outer = LocalSource(directory="")
    inner = LocalSource(directory="events")
    settings = ViewSettings(calendar_sources=[inner, outer], recursive_local=True)
    assert owning_source(settings, "events/a.md") == inner
    assert owning_source(settings, "notes/b.md") == outer

    flat = ViewSettings(calendar_sources=[inner])
    assert owning_source(flat, "notes/b.md") is None


async def test_overlapping_sources_keep_one_event_per_document(vault, config, note):
    """Test overlapping directories do not duplicate events."""
    note("events/a.md", {"date": "2024-01-05"})
    note("b.md", {"date": "2024-01-06"})
    settings = ViewSettings(
        calendar_sources=[LocalSource(directory="events"), LocalSource(directory="")],
        recursive_local=True,
    )

    result = await build_event_sources(vault, settings, config)

    ids = [e.id for source in result.sources for e in source.events]
    assert sorted(ids) == ["b.md", "events/a.md"]
    assert [e.id for e in result.sources[0].events] == ["events/a.md"]


async def test_build_event_sources_mixed(vault, config, note):
    """Test remote sources pass through and ICS sources are skipped."""
    note("events/a.md", {"date": "2024-01-05"})
    settings = ViewSettings(
        calendar_sources=[
            LocalSource(directory="events"),
            RemoteSource(url="team@example.com", color="#0000ff"),
            ICSSource(url="https://example.com/cal.ics"),
        ]
    )

    result = await build_event_sources(vault, settings, config)

    assert result.ok
    assert len(result.sources) == 2
    remote = result.sources[1]
    assert remote.is_remote
    assert remote.editable is False
    assert remote.to_input() == {
        "editable": False,
        "color": "#0000ff",
        "textColor": config.text_on_accent,
        "googleCalendarId": "team@example.com",
    }
    assert result.skipped == ["https://example.com/cal.ics"]


async def test_build_event_sources_reports_missing(vault, config):
    """Test missing directories are collected, not raised."""
    settings = ViewSettings(calendar_sources=[LocalSource(directory="gone")])
    result = await build_event_sources(vault, settings, config)
    assert not result.ok
    assert result.missing == ["gone"]
    assert result.sources == []


def test_resolve_color(config):
    """Test colour resolution order: event, source, accent."""
    colored = LocalSource(directory="events", color="#ff0000")
    plain = RemoteSource(url="x@example.com")
    assert resolve_color(colored, "#00ff00", config) == "#00ff00"
    assert resolve_color(colored, None, config) == "#ff0000"
    assert resolve_color(plain, None, config) == config.accent_color
    assert resolve_color(ICSSource(url="u"), None, config) == "#7f6df2"


async def test_event_dates_survive_build(vault, config, note):
    """Test built events carry decoded ranges."""
    note("events/trip.md", {"date": "2024-03-01", "endDate": "2024-03-03"})
    built = await build_local_source(vault, LocalSource(directory="events"), False, config)
    event = built.events[0]
    assert event.all_day is True
    assert event.start == date(2024, 3, 1)
    assert event.end == date(2024, 3, 4)


async def test_build_local_source_outside_vault(vault, config):
    """Test a directory outside the vault is treated as missing."""
    source = LocalSource(directory="../elsewhere")
    assert await build_local_source(vault, source, False, config) is None

    settings = ViewSettings(calendar_sources=[source])
    result = await build_event_sources(vault, settings, config)
    assert result.missing == ["../elsewhere"]
