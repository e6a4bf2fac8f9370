import random

import pytest

from algorithms.sorting import bubble_sort, insertion_sort, selection_sort
from algorithms.step import OutcomeStatus, StepKind
from structures import ArrayModel, ValidationError


def kinds(steps):
    return [s.kind for s in steps]


def count(steps, kind):
    return sum(1 for s in steps if s.kind is kind)


# ---------------------------------------------------------------------------
# Reference comparison counts
# ---------------------------------------------------------------------------
def bubble_comparisons(values):
    n = len(values)
    return n * (n - 1) // 2


def insertion_comparisons(values, desc=False):
    a = list(values)
    total = 0
    for i in range(1, len(a)):
        key = a[i]
        j = i - 1
        while j >= 0:
            total += 1
            if not (a[j] < key if desc else a[j] > key):
                break
            a[j + 1] = a[j]
            j -= 1
        a[j + 1] = key
    return total


def selection_comparisons(values):
    n = len(values)
    return n * (n - 1) // 2


SORTS = [
    (bubble_sort, bubble_comparisons),
    (insertion_sort, insertion_comparisons),
    (selection_sort, selection_comparisons),
]


@pytest.mark.parametrize("sort, reference", SORTS)
@pytest.mark.parametrize("seed", [1, 7, 42, 99])
def test_sort_yields_ordered_permutation(run, sort, reference, seed):
    original = ArrayModel.generate_random(seed=seed)
    steps, outcome = run(sort, original)

    assert outcome.status is OutcomeStatus.COMPLETED
    assert outcome.structure.values == sorted(original.values)
    assert count(steps, StepKind.COMPARE) == reference(original.values)


@pytest.mark.parametrize("sort", [bubble_sort, insertion_sort, selection_sort])
def test_descending_direction(run, sort):
    original = ArrayModel([4, 9, 1, 9, 3])
    _, outcome = run(sort, original, direction="desc")
    assert outcome.structure.values == [9, 9, 4, 3, 1]


@pytest.mark.parametrize("sort", [bubble_sort, insertion_sort, selection_sort])
def test_caller_array_untouched(run, sort):
    original = ArrayModel([3, 1, 2])
    run(sort, original)
    assert original.values == [3, 1, 2]


def test_insertion_sort_scenario(run):
    steps, outcome = run(insertion_sort, ArrayModel([5, 3, 8, 1]))

    assert outcome.structure.values == [1, 3, 5, 8]
    assert outcome.summary == "Sorting complete"
    assert count(steps, StepKind.PASS) == 3
    # 3 moves right once, 1 moves past 8, 5 and 3
    assert count(steps, StepKind.SHIFT) == 4
    assert count(steps, StepKind.SWAP) == 0
    assert steps[-1].kind is StepKind.SORTED


def test_bubble_sort_first_pass_order(run):
    steps, _ = run(bubble_sort, ArrayModel([5, 3, 8, 1]))
    assert kinds(steps)[:4] == [StepKind.PASS, StepKind.COMPARE, StepKind.SWAP, StepKind.COMPARE]
    assert steps[2].payload["values"] == (3, 5, 8, 1)


def test_equal_keys_never_swapped(run):
    for sort in (bubble_sort, insertion_sort):
        steps, _ = run(sort, ArrayModel([2, 2, 2, 2]))
        assert count(steps, StepKind.SWAP) == 0
        assert count(steps, StepKind.SHIFT) == 0


def test_selection_sort_keeps_first_of_equal_minimums(run):
    steps, _ = run(selection_sort, ArrayModel([3, 1, 1]))
    picks = [s.payload["index"] for s in steps if s.kind is StepKind.SELECT_MIN]
    assert picks[0] == 1


def test_every_index_settles_once(run):
    steps, _ = run(bubble_sort, ArrayModel([4, 3, 2, 1]))
    settled = [s.payload["index"] for s in steps if s.kind is StepKind.SETTLE]
    assert sorted(settled) == [1, 2, 3]
    assert len(settled) == len(set(settled))


def test_trivial_arrays(run):
    for values in ([], [7]):
        steps, outcome = run(insertion_sort, ArrayModel(values))
        assert outcome.structure.values == values
        assert kinds(steps) == [StepKind.SORTED]


def test_unknown_direction_rejected(run):
    with pytest.raises(ValidationError) as info:
        run(bubble_sort, ArrayModel([2, 1]), direction="sideways")
    assert info.value.field == "direction"


def test_random_inputs_match_python_sorted(run):
    rng = random.Random(5)
    for _ in range(20):
        values = [rng.randint(0, 20) for _ in range(rng.randint(0, 12))]
        for sort in (bubble_sort, insertion_sort, selection_sort):
            _, outcome = run(sort, ArrayModel(values), direction="desc")
            assert outcome.structure.values == sorted(values, reverse=True)
