"""Tests for Edifice project rewards and penalties."""

from dataclasses import FrozenInstanceError

import pytest

from wonders_scoring import CardColor, CitySnapshot, FieldRef, ScoringValidationError, Seat
from wonders_scoring.edifice import (
    evaluate_player_projects,
    evaluate_project,
    projects_for_age,
    summarize,
    victory_token_points,
)


def test_every_age_offers_five_projects():
    for age in (1, 2, 3):
        projects = projects_for_age(age)
        assert len(projects) == 5
        assert all(p.age == age for p in projects)


def test_reward_for_contributing_to_completed_project():
    outcome = evaluate_project("money_changer", completed=True, contributed=True)
    assert outcome.coins_delta == 4
    assert outcome.notes == ("Reward: +4 coins",)


def test_penalty_for_ignoring_failed_project():
    outcome = evaluate_project("money_changer", completed=False, contributed=False)
    assert outcome.coins_delta == -2
    assert len(outcome.notes) == 1


@pytest.mark.parametrize("completed,contributed", [(True, False), (False, True)])
def test_remaining_combinations_change_nothing(completed, contributed):
    for project in projects_for_age(1) + projects_for_age(2) + projects_for_age(3):
        outcome = evaluate_project(project.project_id, completed, contributed)
        assert outcome.is_empty
        assert not outcome.missing_fields


def test_victory_token_reward():
    outcome = evaluate_project("outpost", completed=True, contributed=True)
    assert outcome.victory_tokens == {1: 0, 2: 1, 3: 0}
    assert victory_token_points(outcome) == 3


def test_card_removal_penalty():
    outcome = evaluate_project("curtain_wall", completed=False, contributed=False)
    assert outcome.remove_card_colors == (CardColor.GREY,)
    assert outcome.points == 0


def test_lose_victory_tokens_penalty():
    outcome = evaluate_project("concentric_castle", completed=False, contributed=False)
    assert outcome.lose_victory_tokens == 2


def test_strength_and_resource_rewards():
    assert evaluate_project("concentric_castle", True, True).strength_delta == 2
    assert evaluate_project("river_port", True, True).resource_generation


def test_special_reward_is_described():
    outcome = evaluate_project("agora", True, True)
    assert outcome.specials == ("Apply the effect of one purple card in your city a second time",)


@pytest.mark.parametrize("project_id,counts,points", [
    ("belvedere", {"wonder_stages": 3}, 3),
    ("amphitheater", {"blue": 5}, 5),
    ("artisan_district", {"brown": 4, "grey": 2}, 6),
    ("archives", {"brown": 1, "grey": 0, "blue": 2, "yellow": 1, "red": 0, "green": 3, "purple": 0, "black": 1}, 5),
])
def test_end_game_vp_rewards(project_id, counts, points):
    outcome = evaluate_project(project_id, True, True, CitySnapshot(**counts))
    assert outcome.points == points
    assert not outcome.missing_fields


def test_archives_without_cities_is_complete():
    counts = {"brown": 1, "grey": 1, "blue": 0, "yellow": 2, "red": 1, "green": 0, "purple": 1}
    outcome = evaluate_project("archives", True, True, CitySnapshot(**counts))
    assert outcome.points == 5
    assert outcome.missing_fields == ()


def test_archives_reports_missing_base_colors_only():
    outcome = evaluate_project("archives", True, True, CitySnapshot(brown=2, black=1))
    assert outcome.points == 2
    assert FieldRef(Seat.SELF, "black") not in outcome.missing_fields
    assert len(outcome.missing_fields) == 6


def test_outcomes_are_immutable():
    outcome = evaluate_project("money_changer", True, True)
    with pytest.raises(FrozenInstanceError):
        outcome.coins_delta = 10


def test_end_game_vp_reports_missing_counts():
    outcome = evaluate_project("amphitheater", True, True, CitySnapshot())
    assert outcome.points == 0
    assert outcome.missing_fields == (FieldRef(Seat.SELF, "blue"),)


def test_unknown_project_is_a_noted_noop():
    outcome = evaluate_project("sky_bridge", True, True)
    assert outcome.is_empty
    assert outcome.notes == ("Unknown project: sky_bridge",)


def test_player_projects_use_participation_pawns():
    selected = {1: "money_changer", 2: "auction_house", 3: "gold_reserves"}
    completed = {1: True, 2: False, 3: True}
    city = CitySnapshot(edifice_pawns=(True, False, False))
    outcomes = evaluate_player_projects(selected, completed, city)
    assert outcomes[1].coins_delta == 4
    assert outcomes[2].coins_delta == -5
    assert outcomes[3].is_empty

    summary = summarize(outcomes)
    assert summary.coins_delta == -1
    assert summary.notes[0].startswith("Age 1: ")


def test_player_projects_without_pawns_report_them_missing():
    outcomes = evaluate_player_projects({2: "staging_camp"}, {2: False}, CitySnapshot())
    assert outcomes[2].remove_card_colors == (CardColor.RED,)
    assert FieldRef(Seat.SELF, "edifice_pawns") in outcomes[2].missing_fields


def test_summary_adds_token_points_per_age():
    selected = {1: "outpost", 2: "staging_camp"}
    outcomes = evaluate_player_projects(selected, {1: True, 2: True}, CitySnapshot(edifice_pawns=(True, True, False)))
    summary = summarize(outcomes)
    assert summary.victory_tokens == {1: 0, 2: 1, 3: 1}
    assert victory_token_points(summary) == 3 + 5


def test_projects_reject_unknown_age():
    with pytest.raises(ScoringValidationError):
        evaluate_player_projects({4: "outpost"}, {}, CitySnapshot())
