"""Training strategies built on the shared network."""

from .meta_learning import MetaLearner

__all__ = ['MetaLearner']
