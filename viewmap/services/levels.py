from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass

from viewmap.models import InvariantViolation


MAX_LEVEL = 4
DEFAULT_THRESHOLDS: tuple[int, int, int, int] = (1, 3, 5, 8)


@dataclass(frozen=True)
class LevelClassifier:
    """Map daily view counts to a heatmap level in range 0..4.

    `thresholds[i]` is the smallest count that reaches level `i + 1`. The
    first threshold is always 1, so any viewed day shows up as level 1 or
    higher.
    """

    thresholds: tuple[int, ...] = DEFAULT_THRESHOLDS

    def __post_init__(self) -> None:
        thresholds = tuple(self.thresholds)
        if len(thresholds) != MAX_LEVEL:
            raise ValueError(f"expected {MAX_LEVEL} level thresholds")
        if thresholds[0] != 1:
            raise ValueError("the first level threshold must be 1")
        if any(low > high for low, high in zip(thresholds, thresholds[1:])):
            raise ValueError("level thresholds must be ascending")
        object.__setattr__(self, "thresholds", thresholds)

    @classmethod
    def relative_to(cls, max_count: int) -> "LevelClassifier":
        """Build thresholds at 20% steps of the busiest day in a window.

        Level 1 covers every viewed day; above that a count reaches level k
        when `count / max_count > k / 5`.
        """

        if max_count < 0:
            raise InvariantViolation("max_count must be non-negative")
        upper = tuple(k * max_count // 5 + 1 for k in range(2, MAX_LEVEL + 1))
        return cls((1,) + upper)

    def classify(self, count: int) -> int:
        if count < 0:
            raise InvariantViolation(f"count must be non-negative, got {count}")
        return bisect_right(self.thresholds, count)

    def legend(self) -> list[tuple[int, int]]:
        """Return `(level, minimum count)` for every level, lowest first."""

        return [(0, 0)] + [
            (level, threshold)
            for level, threshold in enumerate(self.thresholds, start=1)
        ]


default_classifier = LevelClassifier()


def classify(count: int) -> int:
    """Classify a count with the default fixed thresholds."""

    return default_classifier.classify(count)


def classifier_for(
    scale: str, fixed: LevelClassifier, counts: Sequence[int]
) -> LevelClassifier:
    if scale == "relative":
        return LevelClassifier.relative_to(max(counts, default=0))
    if scale == "fixed":
        return fixed
    raise ValueError(f"unknown level scale: {scale}")
