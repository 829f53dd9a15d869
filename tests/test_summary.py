from __future__ import annotations

from fireline.casualties import parse_casualties
from fireline.models import TimelineDocument, TimelineEvent
from fireline.parser import TimelineParser
from fireline.summary import summarize


def test_summarize_incident(incident_md):
    s = summarize(TimelineParser().parse_document(incident_md))
    assert s.title == "大埔宏福苑五級火"
    assert (s.start_date, s.end_date) == ("2025-11-26", "2025-11-28")
    assert s.description == "2025-11-26/2025-11-28"
    assert s.total_events == 4
    assert s.total_deaths == 128
    assert s.total_injured == 2 + 7 + 79
    assert s.total_missing == 279


def test_summarize_fold_switch():
    event = TimelineEvent(
        id="x", date="2025-11-26", time="10:00", date_time="2025-11-26T10:00:00",
        casualties=parse_casualties("INJURED:2,FIREFIGHTER_INJURED:3"),
    )
    doc = TimelineDocument(events=[event])
    assert summarize(doc).total_injured == 5
    assert summarize(doc, fold_firefighters=False).total_injured == 2


def test_summary_to_dict():
    d = summarize(TimelineDocument()).to_dict()
    assert d["totalEvents"] == 0
    assert set(d) == {
        "title", "startDate", "endDate", "description",
        "totalEvents", "totalDeaths", "totalInjured", "totalMissing",
    }
