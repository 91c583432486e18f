import json

import pytest

from kusayakyu.collection import TournamentCollection, deserialize, serialize
from kusayakyu.constants import (
    CAMP_A,
    CAMP_B,
    DEFAULT_TOURNAMENT_NAME,
    FORMAT_NORMAL,
    FORMAT_TAIKO,
    PHASE_FINAL,
    SNAPSHOT_VERSION,
)
from kusayakyu.controllers import NormalController, TaikoController
from kusayakyu.exceptions import (
    BlankNameError,
    InvalidDateError,
    NoActiveTournamentError,
    TournamentNotFoundError,
    ValidationError,
)
from kusayakyu.models import NormalTournament, TaikoTournament

LEGACY_DOCUMENT = {
    "tournamentName": "Old Cup",
    "tournamentDate": "2024-05-01",
    "teams": [
        {"id": 1700000000000, "name": "Bears"},
        {"id": 1700000000001, "name": "Owls"},
    ],
    "matches": [
        {
            "id": 1700000000002,
            "matchNumber": 1,
            "homeTeamId": 1700000000000,
            "awayTeamId": 1700000000001,
            "homeScore": 3,
            "awayScore": 1,
            "completed": True,
        }
    ],
}


def _round_trip(collection):
    return deserialize(json.loads(json.dumps(serialize(collection))))


# ========== Management ==========


def test_create_makes_tournament_active(collection):
    first = collection.create("Spring Cup", "2025/4/20")
    second = collection.create("Autumn Taiko", format=FORMAT_TAIKO)

    assert isinstance(first, NormalTournament)
    assert isinstance(second, TaikoTournament)
    assert first.date == "2025-04-20"
    assert second.date == ""
    assert collection.active is second
    assert len(collection) == 2


def test_create_validates_input(collection):
    with pytest.raises(BlankNameError):
        collection.create("   ")
    with pytest.raises(InvalidDateError):
        collection.create("Cup", "someday")
    with pytest.raises(ValidationError):
        collection.create("Cup", format="knockout")
    assert len(collection) == 0


def test_tournament_ids_are_unique(collection):
    ids = [collection.create(f"Cup {i}").id for i in range(5)]
    assert len(set(ids)) == 5


def test_deleting_active_falls_back_to_first(collection):
    a = collection.create("A")
    b = collection.create("B")
    c = collection.create("C")

    assert collection.delete(c.id) is True
    assert collection.active_tournament_id == a.id
    assert [t.id for t in collection.tournaments] == [a.id, b.id]


def test_deleting_inactive_keeps_selection(collection):
    a = collection.create("A")
    b = collection.create("B")
    collection.delete(a.id)
    assert collection.active_tournament_id == b.id


def test_deleting_only_tournament_clears_selection(collection):
    only = collection.create("Only")
    collection.delete(only.id)
    assert collection.active is None
    assert collection.active_tournament_id is None
    with pytest.raises(NoActiveTournamentError):
        collection.controller()


def test_delete_unknown_is_a_no_op(collection):
    a = collection.create("A")
    assert collection.delete(a.id + 100) is False
    assert collection.active is a


def test_select(collection):
    a = collection.create("A")
    collection.create("B")
    assert collection.select(a.id) is a
    assert collection.active is a
    with pytest.raises(TournamentNotFoundError):
        collection.select(9999)
    assert collection.active is a


def test_rename_keeps_date_unless_given(collection):
    collection.create("Cup", "2025-04-20")
    tournament = collection.rename("  Big Cup ")
    assert (tournament.name, tournament.date) == ("Big Cup", "2025-04-20")

    collection.rename("Big Cup", "2025-05-03")
    assert collection.active.date == "2025-05-03"


def test_controller_matches_format(collection):
    normal = collection.create("N")
    taiko = collection.create("T", format=FORMAT_TAIKO)

    assert isinstance(collection.controller(), TaikoController)
    assert isinstance(collection.controller(normal.id), NormalController)
    assert collection.controller(taiko.id).tournament is taiko
    with pytest.raises(TournamentNotFoundError):
        collection.controller(424242)


def test_clear(collection):
    collection.create("A")
    collection.create("B")
    collection.clear()
    assert len(collection) == 0
    assert collection.active_tournament_id is None


def test_entity_ids_unique_across_tournaments(collection):
    collection.create("N")
    normal = collection.controller()
    normal.add_team("A")
    normal.add_team("B")
    normal.generate_schedule()

    collection.create("T", format=FORMAT_TAIKO)
    taiko = collection.controller()
    taiko.add_team_to_camp(CAMP_A, "X")
    taiko.add_team_to_camp(CAMP_A, "Y")
    taiko.add_team_to_camp(CAMP_B, "P")
    taiko.add_team_to_camp(CAMP_B, "Q")
    taiko.generate_preliminaries()

    ids = [i for t in collection.tournaments for i in t.iter_ids()]
    assert len(ids) == len(set(ids))


# ========== Serialization ==========


def test_document_shape(collection):
    collection.create("Spring Cup", "2025-04-20")
    normal = collection.controller()
    normal.add_team("A")
    normal.add_team("B")
    normal.generate_schedule()

    document = serialize(collection)
    assert document["version"] == SNAPSHOT_VERSION
    assert document["activeTournamentId"] == collection.active_tournament_id
    (tournament,) = document["tournaments"]
    assert tournament["format"] == FORMAT_NORMAL
    assert tournament["matches"][0] == {
        "id": normal.matches[0].id,
        "matchNumber": 1,
        "homeTeamId": normal.teams[0].id,
        "awayTeamId": normal.teams[1].id,
        "homeScore": None,
        "awayScore": None,
        "completed": False,
    }


def test_round_trip_preserves_every_field(collection):
    collection.create("N", "2025-04-20")
    normal = collection.controller()
    for name in ("A", "B", "C"):
        normal.add_team(name)
    normal.generate_schedule()
    normal.record_score(0, 5, 3)

    collection.create("T", format=FORMAT_TAIKO)
    taiko = collection.controller()
    taiko.rename_camp(CAMP_A, "Red")
    for key, names in ((CAMP_A, ("X", "Y")), (CAMP_B, ("P", "Q"))):
        for name in names:
            taiko.add_team_to_camp(key, name)
    taiko.generate_preliminaries()
    taiko.record_camp_score(CAMP_A, 0, 3, 1)
    taiko.record_camp_score(CAMP_B, 0, 0, 2)
    taiko.finalize_preliminary()
    taiko.record_final_score(0, 2, 1)

    restored = _round_trip(collection)

    assert restored == collection
    assert serialize(restored) == serialize(collection)
    restored_taiko = restored.controller()
    assert restored_taiko.phase == PHASE_FINAL
    assert restored_taiko.camp(CAMP_A).name == "Red"
    assert [t.role for t in restored_taiko.camp(CAMP_B).teams] == [
        "vice_captain",
        "captain",
    ]


def test_allocator_continues_past_loaded_ids(collection):
    collection.create("N")
    normal = collection.controller()
    normal.add_team("A")
    normal.add_team("B")
    normal.generate_schedule()

    restored = _round_trip(collection)
    highest = max(i for t in restored.tournaments for i in t.iter_ids())
    new_team = restored.controller().add_team("C")
    assert new_team.id > highest


def test_dangling_active_id_is_dropped():
    document = {
        "version": SNAPSHOT_VERSION,
        "tournaments": [
            {"id": 1, "name": "A", "date": "", "format": "normal", "teams": [], "matches": []}
        ],
        "activeTournamentId": 99,
    }
    collection = TournamentCollection.from_dict(document)
    assert collection.active_tournament_id is None
    assert len(collection) == 1


def test_tournament_without_format_is_normal():
    document = {
        "tournaments": [{"id": 3, "name": "A", "teams": [], "matches": []}],
        "activeTournamentId": 3,
    }
    collection = TournamentCollection.from_dict(document)
    assert isinstance(collection.active, NormalTournament)


def test_unknown_format_is_rejected():
    document = {"tournaments": [{"id": 3, "name": "A", "format": "knockout"}]}
    with pytest.raises(ValueError):
        TournamentCollection.from_dict(document)


def test_empty_document_gives_empty_collection():
    collection = TournamentCollection.from_dict({})
    assert len(collection) == 0
    assert collection.active is None


# ========== Legacy Upgrade ==========


def test_legacy_document_is_upgraded():
    collection = deserialize(LEGACY_DOCUMENT)

    assert len(collection) == 1
    tournament = collection.active
    assert isinstance(tournament, NormalTournament)
    assert tournament.name == "Old Cup"
    assert tournament.date == "2024-05-01"
    assert [t.name for t in tournament.teams] == ["Bears", "Owls"]
    assert tournament.matches[0].completed

    rows = collection.controller().standings()
    assert [(r.name, r.points) for r in rows] == [("Bears", 3), ("Owls", 0)]


def test_legacy_upgrade_allocates_past_timestamp_ids():
    collection = deserialize(LEGACY_DOCUMENT)
    assert collection.active_tournament_id > 1700000000002

    team = collection.controller().add_team("Cranes")
    assert team.id > collection.active_tournament_id


def test_legacy_document_without_name():
    collection = deserialize({"teams": [], "matches": []})
    assert collection.active.name == DEFAULT_TOURNAMENT_NAME


def test_legacy_incomplete_scores_load_as_unplayed():
    document = dict(LEGACY_DOCUMENT)
    document["matches"] = [
        dict(LEGACY_DOCUMENT["matches"][0], awayScore=None, completed=True)
    ]
    match = deserialize(document).active.matches[0]
    assert match.completed is False


def test_tournament_without_id_is_malformed():
    document = {
        "version": SNAPSHOT_VERSION,
        "tournaments": [
            {"id": 1, "name": "A", "format": "normal"},
            {"id": None, "name": "B", "format": "normal"},
        ],
        "activeTournamentId": 1,
    }
    with pytest.raises(ValueError):
        TournamentCollection.from_dict(document)
