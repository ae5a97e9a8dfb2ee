"""Tests for team, kickoff and broadcaster heuristics."""

from __future__ import annotations

from datetime import date, time

from bs4 import BeautifulSoup

from spieltag_scraper.filters import broadcasters, teams
from spieltag_scraper.scraper import heuristics


def node(html: str, selector: str = ".match-item"):
    soup = BeautifulSoup(f"<html><body>{html}</body></html>", "lxml")
    return soup.select_one(selector)


def test_longer_team_name_shadows_alias():
    mentions = teams.distinct_teams(teams.find_mentions("1. FSV Mainz 05 spielt heute in Mainz"))

    assert [m.team for m in mentions] == ["1. FSV Mainz 05"]
    assert mentions[0].literal == "1. FSV Mainz 05"
    assert teams.resolve_pair("1. FSV Mainz 05 spielt heute in Mainz") is None


def test_pair_is_ordered_by_position_in_text():
    assert teams.resolve_pair("Bayern München vs Borussia Dortmund 18:30") == (
        "Bayern München",
        "Borussia Dortmund",
    )
    assert teams.resolve_pair("BVB - Hamburger SV") == ("Borussia Dortmund", "Hamburger SV")


def test_aliases_of_one_club_do_not_make_a_pair():
    assert teams.resolve_pair("BVB vs Dortmund") is None


def test_alias_must_stand_alone():
    assert teams.find_mentions("Bayernliga Süd") == []


def test_teams_from_side_by_side_containers():
    el = node(
        '<div class="match-item">'
        '<div class="teams"><span class="team-name">BVB</span>'
        '<span class="team-name">FC Bayern</span></div>'
        "<span>2:1</span></div>"
    )

    result = heuristics.extract_teams(el)

    assert result.value == ("Borussia Dortmund", "Bayern München")
    assert result.strategy == "team_containers"
    assert result.confidence == 1.0


def test_teams_fall_back_to_dictionary_text():
    el = node('<div class="match-item">SC Freiburg gegen 1. FC Köln</div>')

    result = heuristics.extract_teams(el)

    assert result.value == ("SC Freiburg", "1. FC Köln")
    assert result.strategy == "team_dictionary"


def test_teams_missing_yields_none_value():
    el = node('<div class="match-item">Spielfrei</div>')

    assert heuristics.extract_teams(el).value is None


def test_kickoff_takes_first_valid_time():
    el = node('<div class="match-item">Ergebnis 25:99, Anstoß 20:30, Einlass 18:00</div>')

    result = heuristics.extract_kickoff(el)

    assert result.value == time(20, 30)
    assert result.confidence == 1.0


def test_kickoff_defaults_when_missing():
    el = node('<div class="match-item">VfB Stuttgart - FC Augsburg</div>')

    result = heuristics.extract_kickoff(el)

    assert result.value == time(15, 30)
    assert result.strategy == "default"


def test_broadcaster_from_image_alt():
    el = node('<div class="match-item">A vs B <img alt="DAZN" src="/logo.svg"></div>')

    result = heuristics.extract_broadcaster(el)

    assert result.value == "DAZN"
    assert result.strategy == "image"


def test_broadcaster_from_image_src_token():
    el = node('<div class="match-item"><img src="/img/logo-sky-de.png"></div>')

    assert heuristics.extract_broadcaster(el).value == "Sky Deutschland"


def test_broadcaster_from_text_keyword():
    el = node('<div class="match-item">Live bei RTL+ ab 20:15</div>')

    result = heuristics.extract_broadcaster(el)

    assert result.value == "RTL+"
    assert result.strategy == "keyword"


def test_broadcaster_found_on_ancestor():
    el = node(
        '<section><img alt="Sky"><div><div class="match-item">Bremen vs Köln</div></div></section>'
    )

    result = heuristics.extract_broadcaster(el)

    assert result.value == "Sky Deutschland"
    assert result.strategy == "ancestor_image_2"


def test_broadcaster_ancestor_walk_is_bounded():
    el = node(
        '<section><img alt="DAZN"><div><div><div>'
        '<div class="match-item">Bremen vs Köln</div>'
        "</div></div></div></section>"
    )

    assert heuristics.extract_broadcaster(el).value == "unknown"


def test_broadcaster_unknown_without_signals():
    el = node('<div class="match-item">Werder Bremen vs 1. FC Köln</div>')

    result = heuristics.extract_broadcaster(el)

    assert result.value == "unknown"
    assert result.confidence == 0.0


def test_keywords_match_whole_words_in_text():
    assert broadcasters.match_text("Standard Eduard") is None
    assert broadcasters.match_text("im Ersten (ARD)") == "Das Erste"


def test_explicit_date_from_time_element():
    el = node(
        '<div class="match-item"><time datetime="2025-09-13T15:30:00+02:00">Sa.</time></div>'
    )

    assert heuristics.extract_date(el).value == date(2025, 9, 13)


def test_explicit_date_from_text():
    el = node('<div class="match-item">Sa. 13.09.2025 18:30 1. FSV Mainz 05</div>')

    assert heuristics.extract_date(el).value == date(2025, 9, 13)


def test_no_explicit_date():
    el = node('<div class="match-item">1. FSV Mainz 05 - VfL Wolfsburg 15:30</div>')

    assert heuristics.extract_date(el).value is None


def test_first_success_skips_failing_strategy():
    def broken(_node):
        raise AttributeError("markup changed")

    def fallback(_node):
        return heuristics.FieldResult("ok", 0.5, "fallback")

    el = node('<div class="match-item"></div>')

    assert heuristics.first_success([broken, fallback], el).value == "ok"


def test_time_only_datetime_is_not_an_explicit_date():
    el = node('<div class="match-item"><time datetime="18:30">18:30</time> RB Leipzig - SC Freiburg</div>')

    assert heuristics.extract_date(el).value is None


def test_asset_urls_do_not_match_short_keywords():
    el = node(
        '<a class="match-item" href="/liveticker">'
        '<img src="/assets/matchcard/crest-fcb.png" alt="FC Bayern"> live auf DAZN</a>'
    )

    result = heuristics.extract_broadcaster(el)

    assert result.value == "DAZN"
    assert result.strategy == "keyword"
    assert broadcasters.match_token("/img/standard-board.svg") is None
    assert broadcasters.match_token("/img/logo-ard.svg") == "Das Erste"


def test_stat_labels_are_not_teams():
    el = node(
        '<div class="match-item">RB Leipzig vs VfB Stuttgart'
        '<span class="team-stats">3 Siege</span><span class="team-stats">5 Niederlagen</span></div>'
    )

    result = heuristics.extract_teams(el)

    assert result.value == ("RB Leipzig", "VfB Stuttgart")
    assert result.strategy == "team_dictionary"


def test_known_club_pairs_with_unlisted_label_in_page_order():
    el = node(
        '<div class="match-item"><span class="team-name">Hannover Sechsundneunzig</span>'
        '<span class="team-name">Hamburger SV</span></div>'
    )

    result = heuristics.extract_teams(el)

    assert result.value == ("Hannover Sechsundneunzig", "Hamburger SV")
    assert result.confidence == 0.8
