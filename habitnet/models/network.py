"""Two-layer sigmoid network parameters.

Architecture:
    NetworkParameters
    ├── input_to_hidden: Tensor[H, F]
    └── hidden_to_output: Tensor[O, H]

    hidden = sigmoid(input_to_hidden @ pad(features))
    output = sigmoid(hidden_to_output @ hidden)

There are no biases and no autograd: gradients are produced in closed form
by ``habitnet.models.backprop`` and applied with ``apply_update``.
"""

from __future__ import annotations

import torch

from ..config import NetworkConfig
from ..utils.ops import VectorLike, sigmoid, pad_features, all_finite


class NetworkParameters:
    """Weight matrices of the feature -> hidden -> output network.

    Instances are mutable; ``clone()`` returns a copy that shares no storage
    with the original. Feature vectors shorter than ``feature_size`` are
    zero-padded and extra entries are ignored.

    Args:
        input_to_hidden: Matrix of shape (hidden_size, feature_size).
        hidden_to_output: Matrix of shape (output_size, hidden_size).
    """

    def __init__(self, input_to_hidden: torch.Tensor, hidden_to_output: torch.Tensor) -> None:
        input_to_hidden = torch.as_tensor(input_to_hidden, dtype=torch.float32)
        hidden_to_output = torch.as_tensor(hidden_to_output, dtype=torch.float32)
        if input_to_hidden.dim() != 2 or hidden_to_output.dim() != 2:
            raise ValueError(
                f"weight matrices must be 2-D, got {input_to_hidden.dim()}-D and "
                f"{hidden_to_output.dim()}-D"
            )
        if hidden_to_output.shape[1] != input_to_hidden.shape[0]:
            raise ValueError(
                f"hidden_to_output has {hidden_to_output.shape[1]} columns but "
                f"input_to_hidden has {input_to_hidden.shape[0]} rows"
            )
        if min(input_to_hidden.shape) == 0 or hidden_to_output.shape[0] == 0:
            raise ValueError("network dimensions must be > 0")
        self.input_to_hidden = input_to_hidden.clone()
        self.hidden_to_output = hidden_to_output.clone()

    @classmethod
    def random(
        cls,
        feature_size: int = 10,
        hidden_size: int = 8,
        output_size: int = 3,
        init_scale: float = 0.1,
        generator: torch.Generator | None = None,
    ) -> NetworkParameters:
        """Uniform random weights in [-init_scale, init_scale)."""
        def _uniform(*shape: int) -> torch.Tensor:
            return torch.rand(shape, generator=generator) * (2 * init_scale) - init_scale

        return cls(_uniform(hidden_size, feature_size), _uniform(output_size, hidden_size))

    @classmethod
    def from_config(
        cls, config: NetworkConfig, generator: torch.Generator | None = None,
    ) -> NetworkParameters:
        return cls.random(
            config.feature_size, config.hidden_size, config.output_size,
            init_scale=config.init_scale, generator=generator,
        )

    @property
    def feature_size(self) -> int:
        return self.input_to_hidden.shape[1]

    @property
    def hidden_size(self) -> int:
        return self.input_to_hidden.shape[0]

    @property
    def output_size(self) -> int:
        return self.hidden_to_output.shape[0]

    def hidden_activations(self, features: VectorLike) -> torch.Tensor:
        x = pad_features(features, self.feature_size)
        return sigmoid(self.input_to_hidden @ x)

    def forward_with_hidden(self, features: VectorLike) -> tuple[torch.Tensor, torch.Tensor]:
        """Forward pass returning (hidden, output)."""
        hidden = self.hidden_activations(features)
        return hidden, sigmoid(self.hidden_to_output @ hidden)

    def forward(self, features: VectorLike) -> torch.Tensor:
        """Output activations, each strictly inside (0, 1)."""
        return self.forward_with_hidden(features)[1]

    __call__ = forward

    def clone(self) -> NetworkParameters:
        return NetworkParameters(self.input_to_hidden, self.hidden_to_output)

    def apply_update(
        self,
        grad_input_to_hidden: torch.Tensor,
        grad_hidden_to_output: torch.Tensor,
        lr: float,
    ) -> None:
        """In-place gradient step: ``W -= lr * grad`` for both layers."""
        self.input_to_hidden.sub_(grad_input_to_hidden, alpha=lr)
        self.hidden_to_output.sub_(grad_hidden_to_output, alpha=lr)

    def clamp_(self, limit: float) -> NetworkParameters:
        """Clamp every weight to [-limit, limit] in place."""
        self.input_to_hidden.clamp_(-limit, limit)
        self.hidden_to_output.clamp_(-limit, limit)
        return self

    def is_finite(self) -> bool:
        return all_finite(self.input_to_hidden, self.hidden_to_output)

    def equal(self, other: NetworkParameters) -> bool:
        """Bit-identical comparison of shapes and weights."""
        return (
            torch.equal(self.input_to_hidden, other.input_to_hidden)
            and torch.equal(self.hidden_to_output, other.hidden_to_output)
        )

    def state_dict(self) -> dict[str, torch.Tensor]:
        return {
            'input_to_hidden': self.input_to_hidden.clone(),
            'hidden_to_output': self.hidden_to_output.clone(),
        }

    def __repr__(self) -> str:
        return (
            f"NetworkParameters(feature_size={self.feature_size}, "
            f"hidden_size={self.hidden_size}, output_size={self.output_size})"
        )
