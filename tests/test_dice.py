import random

import pytest

from promotion.core.dice import DiceBag


@pytest.mark.parametrize("faces", [(6,), (20,), (6, 6), (4, 8, 12), (1, 1, 1)])
def test_roll_stays_within_bounds(faces):
    bag = DiceBag(*faces, rng=random.Random(7))
    for _ in range(500):
        total = bag.roll()
        assert len(faces) <= total <= sum(faces)


def test_last_roll_reflects_most_recent_roll():
    bag = DiceBag(6, 10, rng=random.Random(42))
    assert bag.get_last_roll() == []

    total = bag.roll()
    last = bag.get_last_roll()
    assert len(last) == 2
    assert sum(last) == total
    assert 1 <= last[0] <= 6
    assert 1 <= last[1] <= 10

    second_total = bag.roll()
    assert sum(bag.last_roll) == second_total


def test_last_roll_is_a_copy():
    bag = DiceBag(6, rng=random.Random(1))
    bag.roll()
    bag.get_last_roll().append(99)
    assert len(bag.get_last_roll()) == 1


def test_single_faced_dice_always_roll_one():
    assert DiceBag(1, 1, 1).roll() == 3


def test_invalid_bags_are_rejected():
    with pytest.raises(ValueError):
        DiceBag()
    with pytest.raises(ValueError):
        DiceBag(6, 0)


def test_minimum_and_maximum():
    bag = DiceBag(6, 6)
    assert bag.minimum == 2
    assert bag.maximum == 12
