import pytest

from viewmap.models import InvariantViolation
from viewmap.services.levels import LevelClassifier
from viewmap.services.levels import classifier_for
from viewmap.services.levels import classify


def test_zero_count_is_level_zero() -> None:
    assert classify(0) == 0
    assert LevelClassifier((1, 4, 6, 8)).classify(0) == 0


@pytest.mark.parametrize(
    ("count", "level"),
    [(1, 1), (2, 1), (3, 2), (4, 2), (5, 3), (7, 3), (8, 4), (9, 4), (500, 4)],
)
def test_default_thresholds_assign_bands(count: int, level: int) -> None:
    assert classify(count) == level


def test_classification_is_monotonic() -> None:
    levels = [classify(count) for count in range(0, 40)]

    assert levels == sorted(levels)
    assert set(levels) == {0, 1, 2, 3, 4}


def test_negative_count_is_rejected() -> None:
    with pytest.raises(InvariantViolation):
        classify(-1)


@pytest.mark.parametrize(
    "thresholds",
    [(1, 2, 3), (0, 2, 3, 4), (2, 4, 6, 8), (1, 5, 3, 8), (1, 2, 3, 4, 5)],
)
def test_invalid_thresholds_are_rejected(thresholds: tuple[int, ...]) -> None:
    with pytest.raises(ValueError):
        LevelClassifier(thresholds)


def test_relative_scale_uses_twenty_percent_steps() -> None:
    classifier = LevelClassifier.relative_to(10)

    assert classifier.thresholds == (1, 5, 7, 9)
    assert classifier.classify(2) == 1
    assert classifier.classify(5) == 2
    assert classifier.classify(8) == 3
    assert classifier.classify(10) == 4


def test_relative_scale_with_single_view_peak() -> None:
    classifier = LevelClassifier.relative_to(1)

    assert classifier.classify(0) == 0
    assert classifier.classify(1) == 4


def test_legend_lists_minimum_count_per_level() -> None:
    assert LevelClassifier().legend() == [(0, 0), (1, 1), (2, 3), (3, 5), (4, 8)]


def test_classifier_for_selects_scale() -> None:
    fixed = LevelClassifier((1, 4, 6, 8))

    assert classifier_for("fixed", fixed, [1, 100]) is fixed
    assert classifier_for("relative", fixed, [5, 0]).thresholds == (1, 3, 4, 5)

    with pytest.raises(ValueError):
        classifier_for("log", fixed, [])


@pytest.mark.parametrize("max_count", [0, 1, 4, 10, 37, 1000])
def test_every_viewed_day_reaches_level_one(max_count: int) -> None:
    classifiers = [LevelClassifier(), LevelClassifier.relative_to(max_count)]

    for classifier in classifiers:
        assert classifier.classify(1) >= 1
        assert classifier.classify(max(max_count, 1)) >= 1
