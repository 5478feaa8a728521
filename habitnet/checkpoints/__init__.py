"""Model persistence: the binary parameter format and the model store."""

from .codec import (
    ParameterCodec, HEADER_SIZE,
    serialize, deserialize, serialized_size, save, load,
)
from .model_store import ModelStore, CATEGORY_GROUPS, category_group

__all__ = [
    'ParameterCodec', 'HEADER_SIZE',
    'serialize', 'deserialize', 'serialized_size', 'save', 'load',
    'ModelStore', 'CATEGORY_GROUPS', 'category_group',
]
