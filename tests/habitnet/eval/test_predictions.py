"""Tests for habitnet/eval/predictions.py."""

import pytest
import torch

from habitnet.eval.predictions import (
    PredictionType, prediction_confidence, interpret_output,
)


class TestConfidence:

    @pytest.mark.parametrize("p,expected", [
        (0.5, 0.5), (0.6, 0.7), (0.4, 0.7), (0.75, 1.0), (0.0, 1.0), (1.0, 1.0),
    ])
    def test_values(self, p, expected):
        assert prediction_confidence(p) == pytest.approx(expected)


class TestInterpretOutput:

    def test_one_prediction_per_unit(self):
        preds = interpret_output(torch.tensor([0.9, 0.5, 0.2]), habit_id="h1")
        assert [p.prediction_type for p in preds] == [
            PredictionType.COMPLETION_LIKELIHOOD,
            PredictionType.STREAK_CONTINUATION,
            PredictionType.OPTIMAL_TIME,
        ]
        assert preds[0].probability == pytest.approx(0.9)
        assert preds[1].confidence == pytest.approx(0.5)
        assert all(p.habit_id == "h1" for p in preds)

    def test_extra_units_ignored(self):
        assert len(interpret_output([0.1, 0.2, 0.3, 0.4])) == 3

    def test_short_output(self):
        preds = interpret_output([0.7])
        assert len(preds) == 1
        assert preds[0].prediction_type is PredictionType.COMPLETION_LIKELIHOOD
        assert preds[0].probability == pytest.approx(0.7)
        assert preds[0].confidence == pytest.approx(0.9)
