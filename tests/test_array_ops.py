import pytest

from algorithms import array_ops
from algorithms.step import OutcomeStatus, StepKind
from structures import ArrayModel, ValidationError


def test_insert_at_index(run):
    original = ArrayModel([1, 2, 3])
    steps, outcome = run(array_ops.insert, original, value=9, index=1)

    assert outcome.status is OutcomeStatus.INSERTED
    assert outcome.structure.values == [1, 9, 2, 3]
    assert outcome.summary == "Added 9 at index 1"
    assert original.values == [1, 2, 3]
    assert steps[0].kind is StepKind.INSERT
    assert steps[0].payload["values"] == (1, 9, 2, 3)


def test_insert_defaults_to_append(run):
    _, outcome = run(array_ops.insert, ArrayModel([1]), value="4")
    assert outcome.structure.values == [1, 4]
    assert outcome.data["index"] == 1


def test_remove(run):
    _, outcome = run(array_ops.remove, ArrayModel([5, 6, 7]), index=2)
    assert outcome.structure.values == [5, 6]
    assert outcome.summary == "Removed element at index 2"
    assert outcome.data["value"] == 7


@pytest.mark.parametrize("params, field", [
    ({"value": "abc"}, "value"),
    ({"value": 1, "index": 4}, "index"),
    ({"value": 1, "index": -1}, "index"),
])
def test_insert_rejects_bad_params(run, params, field):
    original = ArrayModel([1, 2, 3])
    with pytest.raises(ValidationError) as info:
        run(array_ops.insert, original, **params)
    assert info.value.field == field
    assert original.values == [1, 2, 3]


def test_remove_out_of_range(run):
    with pytest.raises(ValidationError):
        run(array_ops.remove, ArrayModel([1]), index=1)


def test_remove_from_empty_array(run):
    with pytest.raises(ValidationError) as info:
        run(array_ops.remove, ArrayModel([]), index=0)
    assert info.value.reason == "Array is empty"


def test_search_found(run):
    original = ArrayModel([4, 8, 7, 1])
    steps, outcome = run(array_ops.search, original, value=7)

    assert outcome.status is OutcomeStatus.FOUND
    assert outcome.summary == "Found 7 at index 2"
    assert outcome.structure is original
    assert [s.payload["index"] for s in steps if s.kind is StepKind.VISIT] == [0, 1, 2]
    assert steps[-1].kind is StepKind.FOUND


def test_search_miss_is_an_outcome(run):
    original = ArrayModel([4, 8])
    steps, outcome = run(array_ops.search, original, value=3)

    assert outcome.status is OutcomeStatus.NOT_FOUND
    assert outcome.summary == "Element 3 not found"
    assert outcome.structure is original
    assert steps[-1].kind is StepKind.NOT_FOUND


def test_generate_random_bounds():
    for seed in range(20):
        a = ArrayModel.generate_random(seed=seed)
        assert 5 <= len(a) <= 14
        assert all(0 <= v <= 99 for v in a)
    assert ArrayModel.generate_random(seed=3) == ArrayModel.generate_random(seed=3)
