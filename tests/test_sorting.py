import random

import pytest

from graphwork.sorting import insertion_sort, median, quick_sort


def random_list(seed, size, low=-1000, high=1000):
    rng = random.Random(seed)
    return [rng.randint(low, high) for _ in range(size)]


@pytest.mark.parametrize("size", [0, 1, 2, 10, 24, 25, 26, 100, 1000, 5000])
def test_quick_sort_matches_sorted(size):
    data = random_list(size, size)
    expected = sorted(data)
    quick_sort(data)
    assert data == expected


@pytest.mark.parametrize("size", [0, 1, 5, 30, 200])
def test_insertion_sort_matches_sorted(size):
    data = random_list(size + 7, size)
    expected = sorted(data)
    insertion_sort(data)
    assert data == expected


def test_quick_sort_with_many_duplicates():
    data = random_list(3, 2000, 0, 4)
    expected = sorted(data)
    quick_sort(data)
    assert data == expected


def test_quick_sort_all_equal():
    data = [7] * 300
    quick_sort(data)
    assert data == [7] * 300


def test_quick_sort_already_sorted_and_reversed():
    ascending = list(range(500))
    descending = list(range(499, -1, -1))
    quick_sort(ascending)
    quick_sort(descending)
    assert ascending == list(range(500))
    assert descending == list(range(500))


def test_quick_sort_custom_descending_order():
    data = random_list(11, 400)
    quick_sort(data, lambda a, b: a > b)
    assert data == sorted(data, reverse=True)


def test_insertion_sort_custom_descending_order():
    data = random_list(12, 40)
    insertion_sort(data, lambda a, b: a > b)
    assert data == sorted(data, reverse=True)


def test_insertion_sort_is_stable():
    pairs = [(k, i) for i, k in enumerate(random_list(5, 60, 0, 5))]
    insertion_sort(pairs, lambda a, b: a[0] < b[0])
    assert pairs == sorted(pairs, key=lambda p: p[0])


def test_quick_sort_preserves_multiset():
    data = random_list(21, 777)
    original = list(data)
    quick_sort(data)
    assert sorted(original) == data
    assert all(a <= b for a, b in zip(data, data[1:]))


@pytest.mark.parametrize(
    "triple",
    [(1, 2, 3), (1, 3, 2), (2, 1, 3), (2, 3, 1), (3, 1, 2), (3, 2, 1), (2, 2, 1)],
)
def test_median_of_three(triple):
    assert median(*triple) == sorted(triple)[1]


def test_median_with_custom_order():
    assert median(1, 5, 3, lambda a, b: a > b) == 3