"""Binary model format.

Layout (all little-endian):

    offset  size        field
    0       4           int32 feature_size  (F)
    4       4           int32 hidden_size   (H)
    8       4           int32 output_size   (O)
    12      4*H*F       float32 input_to_hidden, row-major
    12+4HF  4*O*H       float32 hidden_to_output, row-major

The total length is always ``12 + 4 * (H*F + O*H)``.
"""

from __future__ import annotations

import os
import struct

import numpy as np
import torch

from ..errors import MalformedModelError
from ..models.network import NetworkParameters

HEADER = struct.Struct('<iii')
HEADER_SIZE = HEADER.size
_FLOAT = np.dtype('<f4')


def serialized_size(feature_size: int, hidden_size: int, output_size: int) -> int:
    return HEADER_SIZE + _FLOAT.itemsize * (hidden_size * feature_size + output_size * hidden_size)


def serialize(params: NetworkParameters) -> bytes:
    """Encode ``params`` in the binary model format."""
    header = HEADER.pack(params.feature_size, params.hidden_size, params.output_size)
    body = b''.join(
        np.ascontiguousarray(weights.numpy(), dtype=_FLOAT).tobytes()
        for weights in (params.input_to_hidden, params.hidden_to_output)
    )
    return header + body


def deserialize(data: bytes) -> NetworkParameters:
    """Decode a buffer produced by ``serialize``.

    Raises:
        MalformedModelError: If the buffer is shorter than the header, a
            header dimension is not positive, or the length does not match
            the dimensions in the header.
    """
    data = bytes(data)
    if len(data) < HEADER_SIZE:
        raise MalformedModelError(
            f"model buffer is {len(data)} bytes, shorter than the {HEADER_SIZE}-byte header"
        )
    feature_size, hidden_size, output_size = HEADER.unpack_from(data, 0)
    if feature_size <= 0 or hidden_size <= 0 or output_size <= 0:
        raise MalformedModelError(
            f"invalid model dimensions F={feature_size}, H={hidden_size}, O={output_size}"
        )
    expected = serialized_size(feature_size, hidden_size, output_size)
    if len(data) != expected:
        raise MalformedModelError(
            f"model buffer is {len(data)} bytes, expected {expected} for "
            f"F={feature_size}, H={hidden_size}, O={output_size}"
        )

    n_ih = hidden_size * feature_size
    n_ho = output_size * hidden_size
    values = np.frombuffer(data, dtype=_FLOAT, count=n_ih + n_ho, offset=HEADER_SIZE)
    values = values.astype(np.float32)
    input_to_hidden = torch.from_numpy(values[:n_ih].reshape(hidden_size, feature_size))
    hidden_to_output = torch.from_numpy(values[n_ih:].reshape(output_size, hidden_size))
    return NetworkParameters(input_to_hidden, hidden_to_output)


def save(params: NetworkParameters, path: str) -> None:
    """Write ``params`` to ``path``, creating parent directories."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, 'wb') as f:
        f.write(serialize(params))


def load(path: str) -> NetworkParameters:
    with open(path, 'rb') as f:
        return deserialize(f.read())


class ParameterCodec:
    """Namespace for the binary model format functions."""
    serialize = staticmethod(serialize)
    deserialize = staticmethod(deserialize)
    save = staticmethod(save)
    load = staticmethod(load)
