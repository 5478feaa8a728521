"""Learning-rate control."""

from .adaptive_lr import AdaptiveLearningRateController

__all__ = ['AdaptiveLearningRateController']
