import pytest

from algorithms import linked_list
from algorithms.step import OutcomeStatus, StepKind
from structures import LinkedList, ValidationError


@pytest.fixture
def lst():
    return LinkedList.from_values([10, 20, 30])


def test_insert_walks_to_position(run, lst):
    steps, outcome = run(linked_list.insert, lst, value=15, position=1)

    assert outcome.status is OutcomeStatus.INSERTED
    assert outcome.structure.values() == [10, 15, 20, 30]
    assert outcome.summary == "Added node with value 15 at position 1"
    assert [s.kind for s in steps] == [StepKind.VISIT, StepKind.INSERT]
    assert lst.values() == [10, 20, 30]


def test_ids_survive_insertion(run, lst):
    before = lst.ids()
    _, outcome = run(linked_list.insert, lst, value=5, position=0)
    after = outcome.structure.ids()

    assert after[1:] == before
    assert after[0] not in before
    assert outcome.structure.position_of(before[0]) == 1


def test_remove(run, lst):
    steps, outcome = run(linked_list.remove, lst, position=2)

    assert outcome.structure.values() == [10, 20]
    assert outcome.summary == "Removed node at position 2"
    assert sum(1 for s in steps if s.kind is StepKind.VISIT) == 2
    assert steps[-1].payload["id"] == lst.ids()[2]


def test_remove_from_empty_list(run):
    with pytest.raises(ValidationError) as info:
        run(linked_list.remove, LinkedList(), position=0)
    assert info.value.reason == "Linked list is empty"


def test_bad_position_rejected(run, lst):
    with pytest.raises(ValidationError) as info:
        run(linked_list.insert, lst, value=1, position=9)
    assert info.value.field == "position"


def test_search(run, lst):
    steps, outcome = run(linked_list.search, lst, value=30)
    assert outcome.summary == "Found value 30 at position 2"
    assert outcome.structure is lst
    assert steps[-1].kind is StepKind.FOUND

    steps, outcome = run(linked_list.search, lst, value=99)
    assert outcome.status is OutcomeStatus.NOT_FOUND
    assert outcome.summary == "Value 99 not found in the linked list"
    assert steps[-1].kind is StepKind.NOT_FOUND


def test_generate_random_bounds():
    for seed in range(20):
        lst = LinkedList.generate_random(seed=seed)
        assert 3 <= len(lst) <= 8
        assert len(set(lst.ids())) == len(lst)
