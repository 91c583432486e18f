import pytest

from kusayakyu.controllers import generate_round_robin, number_of_matches
from kusayakyu.exceptions import InsufficientTeamsError, ValidationError
from kusayakyu.models import Team


def _roster(n, first_id=100):
    return [Team(id=first_id + i, name=f"Team {i}") for i in range(n)]


@pytest.mark.parametrize("n", [2, 3, 4, 5, 8, 11])
def test_every_pair_meets_exactly_once(n, allocator):
    teams = _roster(n)
    matches = generate_round_robin(teams, allocator)

    assert len(matches) == n * (n - 1) // 2 == number_of_matches(n)
    pairs = [frozenset({m.home_team_id, m.away_team_id}) for m in matches]
    assert len(set(pairs)) == len(pairs)
    assert all(len(p) == 2 for p in pairs)


def test_home_team_is_lower_roster_index_and_numbers_follow_generation(allocator):
    a, b, c = _roster(3)
    matches = generate_round_robin([a, b, c], allocator)

    assert [(m.match_number, m.home_team_id, m.away_team_id) for m in matches] == [
        (1, a.id, b.id),
        (2, a.id, c.id),
        (3, b.id, c.id),
    ]


def test_generated_matches_are_unplayed(allocator):
    for match in generate_round_robin(_roster(4), allocator):
        assert match.home_score is None
        assert match.away_score is None
        assert match.completed is False


def test_roster_order_decides_home_side(allocator):
    a, b = _roster(2)
    match = generate_round_robin([b, a], allocator)[0]
    assert (match.home_team_id, match.away_team_id) == (b.id, a.id)


def test_roster_is_not_modified(allocator):
    teams = _roster(4)
    snapshot = [(t.id, t.name, t.role) for t in teams]
    generate_round_robin(teams, allocator)
    assert [(t.id, t.name, t.role) for t in teams] == snapshot


def test_match_ids_are_unique_across_calls(allocator):
    teams = _roster(4)
    first = generate_round_robin(teams, allocator)
    second = generate_round_robin(teams, allocator)
    ids = [m.id for m in first + second]
    assert len(set(ids)) == len(ids)


@pytest.mark.parametrize("n", [0, 1])
def test_fewer_than_two_teams_is_a_validation_error(n, allocator):
    with pytest.raises(InsufficientTeamsError) as excinfo:
        generate_round_robin(_roster(n), allocator)
    assert isinstance(excinfo.value, ValidationError)
