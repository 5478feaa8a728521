"""On-device habit prediction networks: training, meta-learning and persistence.

Subpackages:
- models: network parameters and closed-form gradients
- optim: adaptive learning-rate controller
- strategies: meta-learning
- trainers: per-habit epoch training
- checkpoints: binary model format and model store
- data: tasks, examples and host-application interfaces
- eval: prediction interpretation
- sinks: metric output
"""

from .config import NetworkConfig, OptimizerConfig, MetaLearningConfig, TrainerConfig
from .errors import HabitNetError, MalformedModelError
from .models import NetworkParameters, GradientComputer
from .optim import AdaptiveLearningRateController
from .strategies import MetaLearner
from .checkpoints import ParameterCodec, ModelStore
from .data import Example, Task
from .trainers import NetworkTrainer

__all__ = [
    'NetworkConfig', 'OptimizerConfig', 'MetaLearningConfig', 'TrainerConfig',
    'HabitNetError', 'MalformedModelError',
    'NetworkParameters', 'GradientComputer',
    'AdaptiveLearningRateController',
    'MetaLearner',
    'ParameterCodec', 'ModelStore',
    'Example', 'Task',
    'NetworkTrainer',
]
