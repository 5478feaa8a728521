"""Interpretation of network outputs as habit predictions.

Output unit i of the network is the probability for ``PredictionType``
member i: completion likelihood, streak continuation, optimal time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import torch

from ..utils.ops import as_vector


class PredictionType(Enum):
    COMPLETION_LIKELIHOOD = "completion_likelihood"
    STREAK_CONTINUATION = "streak_continuation"
    OPTIMAL_TIME = "optimal_time"


# Output unit order
OUTPUT_TYPES: tuple[PredictionType, ...] = tuple(PredictionType)


def prediction_confidence(probability: float) -> float:
    """``clamp(0.5 + 2 * |p - 0.5|, 0, 1)``: 0.5 at p=0.5, 1.0 at p<=0.25 or p>=0.75."""
    return min(max(0.5 + 2.0 * abs(probability - 0.5), 0.0), 1.0)


@dataclass(frozen=True)
class HabitPrediction:
    """One interpreted output unit."""
    prediction_type: PredictionType
    probability: float
    confidence: float
    habit_id: int | str | None = None


def interpret_output(
    output: torch.Tensor | list[float],
    habit_id: int | str | None = None,
) -> list[HabitPrediction]:
    """Turn a network output vector into named predictions.

    Units beyond the known prediction types are ignored; a shorter output
    yields fewer predictions.
    """
    values = as_vector(output).tolist()
    return [
        HabitPrediction(
            prediction_type=ptype,
            probability=p,
            confidence=prediction_confidence(p),
            habit_id=habit_id,
        )
        for ptype, p in zip(OUTPUT_TYPES, values)
    ]
