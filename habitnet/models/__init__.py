"""Network parameters and closed-form gradients."""

from .network import NetworkParameters
from .backprop import GradientComputer, GradientBuffers, create_gradient_buffers, batch_gradients

__all__ = [
    'NetworkParameters',
    'GradientComputer', 'GradientBuffers', 'create_gradient_buffers', 'batch_gradients',
]
