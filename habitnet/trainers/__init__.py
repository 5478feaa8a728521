"""Per-habit network training."""

from .network_trainer import NetworkTrainer, TrainResult, EpochResult

__all__ = ['NetworkTrainer', 'TrainResult', 'EpochResult']
