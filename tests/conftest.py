import os
import tempfile

# Keep log files and stores out of the user's data folder during tests
os.environ.setdefault("KUSAYAKYU_DATA_DIR", tempfile.mkdtemp(prefix="kusayakyu-test-"))

import pytest

from kusayakyu.collection import TournamentCollection
from kusayakyu.constants import CAMP_A, CAMP_B, FORMAT_NORMAL, FORMAT_TAIKO
from kusayakyu.utils import IdAllocator


@pytest.fixture
def allocator():
    return IdAllocator()


@pytest.fixture
def collection():
    return TournamentCollection()


@pytest.fixture
def normal(collection):
    """Controller of an empty normal tournament."""
    collection.create("Spring Cup", "2025-04-20", FORMAT_NORMAL)
    return collection.controller()


@pytest.fixture
def abc(normal):
    """Normal tournament with teams A, B, C and a generated schedule."""
    for name in ("A", "B", "C"):
        normal.add_team(name)
    normal.generate_schedule()
    return normal


@pytest.fixture
def taiko(collection):
    """Controller of an empty taiko tournament."""
    collection.create("Autumn Taiko", "2025-10-12", FORMAT_TAIKO)
    return collection.controller()


@pytest.fixture
def xy_pq(taiko):
    """Taiko tournament: camp A = X, Y; camp B = P, Q; preliminaries generated."""
    taiko.add_team_to_camp(CAMP_A, "X")
    taiko.add_team_to_camp(CAMP_A, "Y")
    taiko.add_team_to_camp(CAMP_B, "P")
    taiko.add_team_to_camp(CAMP_B, "Q")
    taiko.generate_preliminaries()
    return taiko
