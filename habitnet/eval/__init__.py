"""Prediction interpretation."""

from .predictions import (
    PredictionType, OUTPUT_TYPES, HabitPrediction,
    prediction_confidence, interpret_output,
)

__all__ = [
    'PredictionType', 'OUTPUT_TYPES', 'HabitPrediction',
    'prediction_confidence', 'interpret_output',
]
