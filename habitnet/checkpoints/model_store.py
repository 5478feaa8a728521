"""Directory-backed store of serialized models.

Files (all in the binary model format of ``codec``):

    habit_<habit_id>.bin       per-habit models
    category_<group>.bin       per category group (exercise/health/productivity)
    frequency_<frequency>.bin  per habit frequency (daily, weekly, ...)
    base_model.bin             shared base model

``best_model_for_habit`` resolves the most specific available model, in the
order habit -> category group -> frequency -> base -> fresh random weights.
"""

from __future__ import annotations

import os
from enum import Enum

import torch
from rich.markup import escape

from console import HNConsole, path as style_path

from ..config import NetworkConfig
from ..errors import MalformedModelError
from ..models.network import NetworkParameters
from . import codec

CATEGORY_GROUPS: dict[str, frozenset[str]] = {
    'exercise': frozenset({'exercise', 'fitness', 'workout', 'running', 'gym', 'sports'}),
    'health': frozenset({'health', 'nutrition', 'diet', 'meditation', 'sleep', 'wellness'}),
    'productivity': frozenset({'productivity', 'work', 'study', 'reading', 'learning', 'career'}),
}

BASE_MODEL_NAME = 'base_model'


def category_group(category: str) -> str | None:
    """Group name for a habit category (case-insensitive), or None if ungrouped."""
    key = category.lower()
    for group, members in CATEGORY_GROUPS.items():
        if key in members:
            return group
    return None


def _frequency_key(frequency: str | Enum) -> str:
    name = frequency.name if isinstance(frequency, Enum) else str(frequency)
    return name.lower()


class ModelStore:
    """Saves and resolves serialized models under ``root``.

    Args:
        root: Directory holding the ``.bin`` files. Created on first save.
        network_config: Shape of the fresh model returned when nothing is
            stored. Defaults to ``NetworkConfig()``.
    """

    def __init__(self, root: str, network_config: NetworkConfig | None = None) -> None:
        self.root = root
        self.network_config = network_config or NetworkConfig()

    def path_for(self, name: str) -> str:
        return os.path.join(self.root, f"{name}.bin")

    def _save(self, name: str, params: NetworkParameters) -> str:
        path = self.path_for(name)
        codec.save(params, path)
        HNConsole().print(f"[detail]Saved model to {style_path(escape(str(path)))}[/detail]")
        return path

    def _load(self, name: str) -> NetworkParameters | None:
        path = self.path_for(name)
        if not os.path.exists(path):
            return None
        return codec.load(path)

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save_habit_model(self, habit_id: int | str, params: NetworkParameters) -> str:
        return self._save(f"habit_{habit_id}", params)

    def save_category_model(self, category: str, params: NetworkParameters) -> str:
        """Save under the category's group, or its lower-cased name if ungrouped."""
        group = category_group(category) or category.lower()
        return self._save(f"category_{group}", params)

    def save_frequency_model(self, frequency: str | Enum, params: NetworkParameters) -> str:
        return self._save(f"frequency_{_frequency_key(frequency)}", params)

    def save_base_model(self, params: NetworkParameters) -> str:
        return self._save(BASE_MODEL_NAME, params)

    # ------------------------------------------------------------------
    # Load (None when absent, MalformedModelError when corrupt)
    # ------------------------------------------------------------------

    def load_habit_model(self, habit_id: int | str) -> NetworkParameters | None:
        return self._load(f"habit_{habit_id}")

    def load_category_model(self, category: str) -> NetworkParameters | None:
        """Load the model of the category's group; ungrouped categories have none."""
        group = category_group(category)
        if group is None:
            return None
        return self._load(f"category_{group}")

    def load_frequency_model(self, frequency: str | Enum) -> NetworkParameters | None:
        return self._load(f"frequency_{_frequency_key(frequency)}")

    def load_base_model(self) -> NetworkParameters | None:
        return self._load(BASE_MODEL_NAME)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def best_model_for_habit(
        self,
        habit_id: int | str,
        category: str | None = None,
        frequency: str | Enum | None = None,
        generator: torch.Generator | None = None,
    ) -> NetworkParameters:
        """Most specific stored model for a habit.

        Corrupt files are reported and skipped. When nothing usable is
        stored, fresh random parameters are returned.
        """
        console = HNConsole()
        candidates = [('habit', lambda: self.load_habit_model(habit_id))]
        if category is not None:
            candidates.append(('category', lambda: self.load_category_model(category)))
        if frequency is not None:
            candidates.append(('frequency', lambda: self.load_frequency_model(frequency)))
        candidates.append(('base', self.load_base_model))

        for source, loader in candidates:
            try:
                params = loader()
            except MalformedModelError as e:
                console.print_warning(f"Skipping corrupt {source} model for habit {escape(str(habit_id))}: {escape(str(e))}")
                continue
            if params is not None:
                console.print(f"[detail]Using {source} model for habit {escape(str(habit_id))}[/detail]")
                return params

        console.print(f"[detail]No stored model for habit {escape(str(habit_id))}, using fresh weights[/detail]")
        return NetworkParameters.from_config(self.network_config, generator=generator)
