"""Tests for the per-game score sheet and its cache."""

import pytest

from wonders_scoring import (
    Category,
    CitySnapshot,
    MilitaryInput,
    NavalInput,
    ScoreCache,
    ScoreSheet,
    ScoreSource,
    ScoringValidationError,
)


def make_sheet(**kwargs):
    return ScoreSheet(["ann", "bob", "cid"], **kwargs)


def test_empty_sheet_scores_zero():
    sheet = make_sheet()
    breakdown = sheet.breakdown_for("ann")
    assert breakdown.total == 0
    assert set(breakdown.categories) == set(Category)
    assert all(score.source == ScoreSource.EMPTY for score in breakdown.categories.values())
    assert not breakdown.incomplete


def test_direct_entries_are_summed():
    sheet = make_sheet()
    sheet.set_direct_points("ann", Category.WONDER, 10)
    sheet.set_direct_points("ann", "civil", 12)
    sheet.set_direct_points("ann", Category.ISLANDS, 3)
    assert sheet.total_for("ann") == 25
    assert sheet.category_score("ann", Category.CIVIL).source == ScoreSource.DIRECT


def test_direct_entry_overrides_detailed_score():
    sheet = make_sheet(snapshots={"ann": CitySnapshot(coins=9)})
    assert sheet.category_score("ann", Category.TREASURY).points == 3
    sheet.set_direct_points("ann", Category.TREASURY, 5)
    assert sheet.category_score("ann", Category.TREASURY).points == 5
    sheet.set_direct_points("ann", Category.TREASURY, None)
    assert sheet.category_score("ann", Category.TREASURY).points == 3


def test_detailed_categories():
    snapshots = {
        "ann": CitySnapshot(coins=10, compass=2, tablet=2, gear=1, wild_science=1,
                            selected_leaders=("midas",), selected_guilds=("traders_guild",)),
        "bob": CitySnapshot(yellow=2),
        "cid": CitySnapshot(yellow=1),
    }
    sheet = make_sheet(
        snapshots=snapshots,
        military={"ann": MilitaryInput(strengths=(3, 3, 3))},
        naval={"ann": NavalInput(strengths=(1, 1, 1))},
    )
    assert sheet.category_score("ann", Category.TREASURY).points == 3
    assert sheet.category_score("ann", Category.SCIENCE).points == 26
    assert sheet.category_score("ann", Category.LEADERS).points == 3
    assert sheet.category_score("ann", Category.GUILD).points == 3
    assert sheet.category_score("ann", Category.MILITARY).points == 2 + 6 + 10
    assert sheet.category_score("ann", Category.NAVY).points == 3 + 5 + 7
    assert sheet.total_for("ann") == 3 + 26 + 3 + 3 + 18 + 15
    assert sheet.category_score("bob", Category.MILITARY).points == -3


def test_military_from_tokens_on_the_score_pad():
    city = CitySnapshot(victory_tokens_age1=2, victory_tokens_age2=1, victory_tokens_age3=1, defeat_tokens=1)
    sheet = make_sheet(snapshots={"ann": city})
    score = sheet.category_score("ann", Category.MILITARY)
    assert score.points == 2 * 1 + 3 + 5 - 1
    assert score.source == ScoreSource.DETAILED
    assert score.missing_fields == ()


def test_military_tokens_report_fields_left_blank():
    sheet = make_sheet(snapshots={"ann": CitySnapshot(victory_tokens_age3=2)})
    score = sheet.category_score("ann", Category.MILITARY)
    assert score.points == 10
    assert [str(ref) for ref in score.missing_fields] == [
        "self.victory_tokens_age1", "self.victory_tokens_age2", "self.defeat_tokens",
    ]
    assert sheet.breakdown_for("ann").incomplete


def test_city_without_tokens_has_no_military_score():
    sheet = make_sheet(snapshots={"ann": CitySnapshot(coins=4)})
    assert sheet.category_score("ann", Category.MILITARY).source == ScoreSource.EMPTY


def test_conflict_inputs_take_over_from_tokens():
    city = CitySnapshot(victory_tokens_age1=2, victory_tokens_age2=2, victory_tokens_age3=2, defeat_tokens=0)
    sheet = make_sheet(snapshots={"ann": city})
    assert sheet.category_score("ann", Category.MILITARY).points == 18
    sheet.set_military("bob", MilitaryInput(strengths=(1, 1, 1)))
    assert sheet.category_score("ann", Category.MILITARY).points == -3


def test_edifice_category_includes_token_points():
    sheet = make_sheet(snapshots={"ann": CitySnapshot(edifice_pawns=(True, True, False), blue=4)})
    sheet.set_edifice_project(1, "outpost", completed=True)
    sheet.set_edifice_project(2, "amphitheater", completed=True)
    score = sheet.category_score("ann", Category.EDIFICE)
    assert score.points == 3 + 4
    assert score.source == ScoreSource.DETAILED


def test_missing_fields_mark_breakdown_incomplete():
    sheet = make_sheet(snapshots={"ann": CitySnapshot(compass=1, selected_leaders=("phidias",))})
    breakdown = sheet.breakdown_for("ann")
    assert breakdown.incomplete
    assert breakdown.categories[Category.LEADERS].missing_fields
    assert breakdown.categories[Category.SCIENCE].missing_fields


def test_changing_science_leaves_other_categories_alone():
    sheet = make_sheet(snapshots={"ann": CitySnapshot(coins=6, compass=1, tablet=1, gear=1)})
    sheet.set_direct_points("ann", Category.WONDER, 7)
    before = sheet.breakdown_for("ann")
    assert before.categories[Category.SCIENCE].points == 10

    sheet.set_snapshot("ann", CitySnapshot(coins=6, compass=2, tablet=2, gear=2))
    after = sheet.breakdown_for("ann")
    assert after.categories[Category.SCIENCE].points == 26
    assert after.total == before.total + 16
    for category in Category:
        if category != Category.SCIENCE:
            assert after.categories[category] == before.categories[category]


def test_cache_serves_repeated_reads():
    sheet = make_sheet(snapshots={"ann": CitySnapshot(coins=3)})
    cache = sheet.cache
    sheet.total_for("ann")
    misses = cache.misses
    sheet.total_for("ann")
    assert cache.misses == misses
    assert cache.hits >= len(Category)
    assert ("ann", Category.TREASURY) in cache


def test_explicit_invalidation_recomputes():
    sheet = make_sheet(snapshots={"ann": CitySnapshot(compass=1)})
    sheet.category_score("ann", Category.SCIENCE)
    sheet.snapshots["ann"] = CitySnapshot(compass=3)
    assert sheet.category_score("ann", Category.SCIENCE).points == 1
    sheet.cache.invalidate("ann", Category.SCIENCE)
    assert sheet.category_score("ann", Category.SCIENCE).points == 9


def test_neighbor_snapshot_change_updates_guilds():
    sheet = make_sheet(snapshots={"ann": CitySnapshot(selected_guilds=("workers_guild",)), "bob": CitySnapshot(brown=1)})
    assert sheet.category_score("ann", Category.GUILD).points == 1
    sheet.set_snapshot("bob", CitySnapshot(brown=4))
    assert sheet.category_score("ann", Category.GUILD).points == 4


def test_conflict_change_updates_every_player():
    sheet = make_sheet(military={"ann": MilitaryInput(strengths=(1, 0, 0))})
    assert sheet.category_score("bob", Category.MILITARY).points == -1
    sheet.set_military("bob", MilitaryInput(strengths=(2, 0, 0)))
    assert sheet.category_score("bob", Category.MILITARY).points == 2
    assert sheet.category_score("ann", Category.MILITARY).points == 0


def test_sheets_do_not_share_state():
    first = make_sheet()
    second = make_sheet()
    assert first.cache is not second.cache
    assert isinstance(first.cache, ScoreCache)
    first.set_direct_points("ann", Category.WONDER, 5)
    assert second.total_for("ann") == 0


def test_leaderboard_and_coin_tiebreak():
    sheet = make_sheet(snapshots={"ann": CitySnapshot(coins=2), "bob": CitySnapshot(coins=5)})
    sheet.set_direct_points("ann", Category.CIVIL, 20)
    sheet.set_direct_points("bob", Category.CIVIL, 19)
    sheet.set_direct_points("cid", Category.CIVIL, 30)
    standings = sheet.leaderboard()
    assert [s.player_id for s in standings] == ["cid", "bob", "ann"]
    assert [s.rank for s in standings] == [1, 2, 3]
    assert [s.total for s in standings] == [30, 20, 20]
    assert sheet.winner() == "cid"


def test_winner_falls_back_to_seating_order():
    sheet = make_sheet()
    assert sheet.winner() == "ann"


def test_unseated_player_is_rejected():
    sheet = make_sheet()
    with pytest.raises(ScoringValidationError):
        sheet.total_for("zed")
    with pytest.raises(ScoringValidationError):
        sheet.set_snapshot("zed", CitySnapshot())


def test_unknown_category_is_rejected():
    with pytest.raises(ScoringValidationError):
        make_sheet().set_direct_points("ann", "wonderz", 3)
