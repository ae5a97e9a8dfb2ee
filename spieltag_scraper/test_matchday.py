"""Tests for locating fixture nodes and extracting one matchday page."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from spieltag_scraper.scraper import locator, matchday, probe
from spieltag_scraper.scraper.models import PageContent

TODAY = date(2025, 8, 1)
URL = "https://www.bundesliga.com/de/bundesliga/spieltag/2025-2026/4"


def page(body: str, url: str = URL) -> PageContent:
    return PageContent(url=url, html=f"<html><head><title>Spieltag</title></head><body>{body}</body></html>")


def test_locator_uses_first_matching_selector_only():
    content = page(
        '<nav><a href="/de/bundesliga/tabelle">Tabelle</a></nav>'
        '<div class="match-item">Bayern München vs Borussia Dortmund</div>'
        '<div class="match-item">RB Leipzig vs VfB Stuttgart</div>'
        '<div class="fixture">SC Freiburg vs FC Augsburg</div>'
    )

    strategy, nodes = locator.locate_with_strategy(content)

    assert strategy == "match_item"
    assert len(nodes) == 2
    assert all("match-item" in node["class"] for node in nodes)


def test_locator_prefers_liveticker_links():
    content = page(
        '<a href="/de/bundesliga/spieltag/2025-2026/4/bayern-vs-bvb/liveticker">Bayern München BVB</a>'
        '<div class="match-item">RB Leipzig vs VfB Stuttgart</div>'
    )

    strategy, nodes = locator.locate_with_strategy(content)

    assert strategy == "liveticker_link"
    assert [node.name for node in nodes] == ["a"]


def test_locator_returns_empty_list_without_matches():
    content = page("<p>Die Ansetzungen folgen in Kürze.</p>")

    assert locator.locate(content) == []
    assert locator.locate_with_strategy(content) == (None, [])


def test_selector_counts_cover_every_selector():
    content = page('<div class="fixture">x</div>')

    counts = dict(locator.selector_counts(content))

    assert counts["fixture"] == 1
    assert counts["liveticker_link"] == 0
    assert len(counts) == 7


def test_end_to_end_single_fixture():
    content = page(
        '<div class="match-item">Bayern München vs Borussia Dortmund 18:30'
        '<img alt="DAZN" src="/broadcaster.png"></div>'
    )

    fixtures = matchday.extract(content, 4, season="2025-2026", today=TODAY)

    assert len(fixtures) == 1
    fixture = fixtures[0]
    assert fixture.home_team == "Bayern München"
    assert fixture.away_team == "Borussia Dortmund"
    assert f"{fixture.kickoff:%H:%M}" == "18:30"
    assert fixture.broadcaster == "DAZN"
    assert fixture.season == "2025-2026"
    assert fixture.source_url == URL
    assert fixture.matchday_index == 4
    assert fixture.to_dict()["kickoff"] == "18:30"


def test_synthetic_dates_spread_by_matchday_and_position():
    content = page(
        '<div class="match-item">Hamburger SV vs FC St. Pauli 20:30</div>'
        '<div class="match-item">VfL Wolfsburg vs 1. FC Heidenheim</div>'
    )

    first, second = matchday.extract(content, 2, today=TODAY)

    assert first.date.date() == TODAY + timedelta(days=14)
    assert second.date.date() == TODAY + timedelta(days=15)
    assert (first.date.hour, first.date.minute) == (20, 30)
    assert second.kickoff == time(15, 30)
    assert (second.date.hour, second.date.minute) == (15, 30)
    assert first.date.tzinfo is not None
    assert first.date < second.date


def test_explicit_date_wins_over_synthetic_date():
    content = page('<div class="match-item">Sa. 13.09.2025 Eintracht Frankfurt - Union Berlin 15:30</div>')

    (fixture,) = matchday.extract(content, 3, today=TODAY)

    assert fixture.date.date() == date(2025, 9, 13)
    assert fixture.away_team == "1. FC Union Berlin"


def test_invalid_candidates_are_dropped_silently():
    content = page(
        '<div class="match-item">Werbung</div>'
        '<div class="match-item">BVB vs Dortmund</div>'
        '<div class="match-item">TSG Hoffenheim vs Bayer 04 Leverkusen 17:30</div>'
    )

    fixtures = matchday.extract(content, 5, today=TODAY)

    assert [(f.home_team, f.away_team) for f in fixtures] == [("TSG Hoffenheim", "Bayer 04 Leverkusen")]
    # ordinal position still counts the dropped nodes
    assert fixtures[0].date.date() == TODAY + timedelta(days=5 * 7 + 2)


def test_duplicate_nodes_collapse_to_one_fixture():
    content = page(
        '<div class="match-item">SV Werder Bremen vs VfB Stuttgart 15:30</div>'
        '<div class="match-item">Werder Bremen - Stuttgart</div>'
    )

    fixtures = matchday.extract(content, 1, today=TODAY)

    assert len(fixtures) == 1


def test_page_without_fixtures_yields_empty_list():
    assert matchday.extract(page("<main>Keine Spiele</main>"), 9, today=TODAY) == []


def test_every_fixture_has_two_distinct_teams():
    content = page(
        "".join(
            f'<div class="match-item">{home} vs {away}</div>'
            for home, away in [
                ("FC Augsburg", "FC Augsburg"),
                ("RB Leipzig", "Borussia Mönchengladbach"),
                ("", "SC Freiburg"),
                ("1. FSV Mainz 05", "Mainz"),
            ]
        )
    )

    fixtures = matchday.extract(content, 1, today=TODAY)

    assert fixtures
    for fixture in fixtures:
        assert fixture.home_team and fixture.away_team
        assert fixture.home_team != fixture.away_team


def test_detect_matchday_from_heading():
    content = page('<h1 class="heading">7. Spieltag</h1>', url="https://www.bundesliga.com/de/bundesliga/spieltag")

    assert matchday.detect_matchday(content) == 7


def test_detect_matchday_from_url():
    content = page("<h1>Bundesliga</h1>", url="https://www.bundesliga.com/de/bundesliga/spieltag/2025-2026/12")

    assert matchday.detect_matchday(content) == 12


def test_detect_matchday_unknown():
    content = page("<h1>Bundesliga</h1>", url="https://www.bundesliga.com/de/bundesliga/spieltag")

    assert matchday.detect_matchday(content) is None


def test_datetime_is_consistent_with_kickoff():
    content = page('<div class="match-item">FC Augsburg vs SC Freiburg 21:45</div>')

    (fixture,) = matchday.extract(content, 1, today=TODAY)

    assert isinstance(fixture.date, datetime)
    assert fixture.date.time() == fixture.kickoff


def test_probe_describes_page():
    content = page(
        '<h1 class="heading">4. Spieltag</h1>'
        '<div class="match-item">Bayern München vs Borussia Dortmund 18:30</div>'
    )

    info = probe.describe_page(content)

    assert info["title"] == "Spieltag"
    assert info["detected_matchday"] == 4
    assert info["winning_selector"] == "match_item"
    assert info["node_samples"] == ["Bayern München vs Borussia Dortmund 18:30"]
    assert info["selector_counts"]["match_item"] == 1


def test_time_only_markup_keeps_synthetic_dates():
    content = page(
        '<div class="match-item">Bayern München vs Borussia Dortmund <time datetime="18:30">18:30</time></div>'
        '<div class="match-item">RB Leipzig vs VfB Stuttgart <time datetime="15:30">15:30</time></div>'
    )

    first, second = matchday.extract(content, 4, today=TODAY)

    assert first.date.date() == date(2025, 8, 29)
    assert second.date.date() == date(2025, 8, 30)
    assert first.kickoff == time(18, 30)
