import pytest

from kusayakyu.constants import (
    CAMP_A,
    CAMP_B,
    DEFAULT_CAMP_NAMES,
    PHASE_FINAL,
    PHASE_PRELIMINARY,
    PHASE_SETUP,
    ROLE_CAPTAIN,
    ROLE_VICE_CAPTAIN,
    WINNER_DRAW,
)
from kusayakyu.controllers import FinalStage, PreliminaryStage, SetupStage
from kusayakyu.exceptions import (
    BlankNameError,
    DuplicateTeamNameError,
    IncompleteMatchesError,
    InsufficientTeamsError,
    PhaseError,
    PreconditionError,
    UnknownCampError,
)
from kusayakyu.models import CampResult


def _ids(controller, camp_key):
    return {t.name: t.id for t in controller.camp(camp_key).teams}


def _play_camps(controller):
    """X beats Y 3-1 in camp A, Q beats P 2-0 in camp B."""
    controller.record_camp_score(CAMP_A, 0, 3, 1)
    controller.record_camp_score(CAMP_B, 0, 0, 2)


def test_new_taiko_tournament_starts_in_setup(taiko):
    assert taiko.phase == PHASE_SETUP
    assert isinstance(taiko.stage, SetupStage)
    assert taiko.camp(CAMP_A).name == DEFAULT_CAMP_NAMES[CAMP_A]
    assert taiko.camp(CAMP_B).name == DEFAULT_CAMP_NAMES[CAMP_B]
    assert taiko.camp_result() is None


def test_team_names_are_unique_across_camps(taiko):
    taiko.add_team_to_camp(CAMP_A, "Hawks")
    with pytest.raises(DuplicateTeamNameError):
        taiko.add_team_to_camp(CAMP_B, "Hawks")
    assert taiko.camp(CAMP_B).teams == []


def test_unknown_camp_key(taiko):
    with pytest.raises(UnknownCampError):
        taiko.add_team_to_camp("C", "Hawks")
    with pytest.raises(KeyError):
        taiko.camp("C")


def test_rename_and_remove_in_setup(taiko):
    team = taiko.add_team_to_camp(CAMP_A, "Hawks")
    taiko.rename_camp(CAMP_A, "  Red  ")
    assert taiko.camp(CAMP_A).name == "Red"

    with pytest.raises(BlankNameError):
        taiko.rename_camp(CAMP_B, " ")

    assert taiko.remove_team_from_camp(CAMP_B, team.id) is False
    assert taiko.remove_team_from_camp(CAMP_A, team.id) is True
    assert taiko.camp(CAMP_A).teams == []


def test_each_camp_needs_two_teams(taiko):
    taiko.add_team_to_camp(CAMP_A, "X")
    taiko.add_team_to_camp(CAMP_A, "Y")
    taiko.add_team_to_camp(CAMP_B, "P")

    with pytest.raises(InsufficientTeamsError):
        taiko.generate_preliminaries()
    assert taiko.phase == PHASE_SETUP
    assert taiko.camp(CAMP_A).matches == []


def test_preliminaries_pair_only_within_camps(xy_pq):
    assert xy_pq.phase == PHASE_PRELIMINARY
    a_ids = set(_ids(xy_pq, CAMP_A).values())
    b_ids = set(_ids(xy_pq, CAMP_B).values())

    (match_a,) = xy_pq.camp(CAMP_A).matches
    (match_b,) = xy_pq.camp(CAMP_B).matches
    assert {match_a.home_team_id, match_a.away_team_id} == a_ids
    assert {match_b.home_team_id, match_b.away_team_id} == b_ids


def test_setup_operations_rejected_after_setup(xy_pq):
    with pytest.raises(PhaseError):
        xy_pq.add_team_to_camp(CAMP_A, "Z")
    with pytest.raises(PhaseError):
        xy_pq.rename_camp(CAMP_A, "Red")
    x_id = _ids(xy_pq, CAMP_A)["X"]
    with pytest.raises(PreconditionError):
        xy_pq.remove_team_from_camp(CAMP_A, x_id)


def test_final_operations_rejected_before_final(xy_pq):
    with pytest.raises(PhaseError):
        xy_pq.record_final_score(0, 1, 0)
    with pytest.raises(PhaseError):
        xy_pq.clear_final_score(0)


def test_finalize_requires_every_camp_match(xy_pq):
    xy_pq.record_camp_score(CAMP_A, 0, 3, 1)
    with pytest.raises(IncompleteMatchesError):
        xy_pq.finalize_preliminary()
    assert xy_pq.phase == PHASE_PRELIMINARY
    assert all(t.role is None for t in xy_pq.tournament.all_teams)


def test_regenerating_preliminaries_discards_camp_scores(xy_pq):
    _play_camps(xy_pq)
    assert xy_pq.has_results

    stage = xy_pq.generate_preliminaries()
    assert isinstance(stage, PreliminaryStage)
    assert not xy_pq.has_results


def test_preview_matches_finalized_roles(xy_pq):
    _play_camps(xy_pq)
    a = _ids(xy_pq, CAMP_A)
    b = _ids(xy_pq, CAMP_B)

    preview = xy_pq.preview_roles()
    assert preview == xy_pq.preview_roles()
    assert preview[CAMP_A] == {a["X"]: ROLE_CAPTAIN, a["Y"]: ROLE_VICE_CAPTAIN}
    assert preview[CAMP_B] == {b["Q"]: ROLE_CAPTAIN, b["P"]: ROLE_VICE_CAPTAIN}

    stage = xy_pq.finalize_preliminary()
    assert isinstance(stage, FinalStage)
    for key in (CAMP_A, CAMP_B):
        for team in xy_pq.camp(key).teams:
            assert team.role == preview[key][team.id]


def test_two_team_camps_finalize(xy_pq):
    _play_camps(xy_pq)
    xy_pq.finalize_preliminary()

    assert xy_pq.phase == PHASE_FINAL
    assert xy_pq.final_pairing_names() == [
        (ROLE_CAPTAIN, "X", "Q"),
        (ROLE_VICE_CAPTAIN, "Y", "P"),
    ]
    assert [m.completed for m in xy_pq.final_matches] == [False, False]
    assert xy_pq.camp_result() is None

    xy_pq.record_final_score(0, 4, 2)
    assert xy_pq.camp_result() is None
    xy_pq.record_final_score(1, 1, 1)
    assert xy_pq.camp_result() == CampResult(
        winner=CAMP_A, camp_a_points=4, camp_b_points=1
    )


def test_final_can_end_in_a_draw(xy_pq):
    _play_camps(xy_pq)
    xy_pq.finalize_preliminary()

    xy_pq.record_final_score(0, 0, 5)
    xy_pq.record_final_score(1, 6, 2)
    result = xy_pq.camp_result()
    assert result.winner == WINNER_DRAW
    assert result.camp_a_points == result.camp_b_points == 3


def test_clearing_a_final_score_reopens_the_result(xy_pq):
    _play_camps(xy_pq)
    xy_pq.finalize_preliminary()
    xy_pq.record_final_score(0, 1, 0)
    xy_pq.record_final_score(1, 1, 0)
    assert xy_pq.camp_result().winner == CAMP_A

    xy_pq.clear_final_score(1)
    assert xy_pq.camp_result() is None


def test_finalize_is_one_way(xy_pq):
    _play_camps(xy_pq)
    xy_pq.finalize_preliminary()

    with pytest.raises(PhaseError):
        xy_pq.finalize_preliminary()
    with pytest.raises(PhaseError):
        xy_pq.generate_preliminaries()
    with pytest.raises(PhaseError):
        xy_pq.record_camp_score(CAMP_A, 0, 9, 9)
    with pytest.raises(PhaseError):
        xy_pq.clear_camp_score(CAMP_A, 0)


def test_stale_stage_object_cannot_mutate(xy_pq):
    stage = xy_pq.stage
    _play_camps(xy_pq)
    stage.finalize()

    with pytest.raises(PhaseError):
        stage.record_score(CAMP_A, 0, 0, 0)
    with pytest.raises(PhaseError):
        stage.finalize()


def test_uneven_camps_pair_only_shared_roles(taiko):
    for name in ("A1", "A2", "A3", "A4", "A5"):
        taiko.add_team_to_camp(CAMP_A, name)
    for name in ("B1", "B2"):
        taiko.add_team_to_camp(CAMP_B, name)
    taiko.generate_preliminaries()

    # Home side wins every camp match: registration order becomes rank order
    for key in (CAMP_A, CAMP_B):
        for index in range(len(taiko.camp(key).matches)):
            taiko.record_camp_score(key, index, 1, 0)
    taiko.finalize_preliminary()

    roles = [t.role for t in taiko.camp(CAMP_A).teams]
    assert roles == ["captain", "vice_captain", "second", "lead", None]
    assert [m.role for m in taiko.final_matches] == ["captain", "vice_captain"]
    assert taiko.final_pairing_names() == [
        ("captain", "A1", "B1"),
        ("vice_captain", "A2", "B2"),
    ]


def test_camp_standings_available_in_every_phase(xy_pq):
    assert [r.played for r in xy_pq.camp_standings(CAMP_A)] == [0, 0]
    _play_camps(xy_pq)
    xy_pq.finalize_preliminary()
    rows = xy_pq.camp_standings(CAMP_B)
    assert [r.name for r in rows] == ["Q", "P"]


def test_home_winners_become_captains(xy_pq):
    # X beats Y 5-2, P beats Q 1-0
    xy_pq.record_camp_score(CAMP_A, 0, 5, 2)
    assert xy_pq.camp(CAMP_A).all_matches_completed
    assert xy_pq.camp(CAMP_B).all_matches_completed is False
    xy_pq.record_camp_score(CAMP_B, 0, 1, 0)
    assert xy_pq.camp(CAMP_B).all_matches_completed

    xy_pq.finalize_preliminary()

    assert xy_pq.final_pairing_names() == [
        (ROLE_CAPTAIN, "X", "P"),
        (ROLE_VICE_CAPTAIN, "Y", "Q"),
    ]
    assert [t.role_name for t in xy_pq.camp(CAMP_A).teams] == ["大将", "副将"]
    assert [t.role_name for t in xy_pq.camp(CAMP_B).teams] == ["大将", "副将"]
