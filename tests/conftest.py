"""Shared fixtures for habitnet unit tests."""

import pytest
import torch

from habitnet.config import NetworkConfig
from habitnet.data.task import Example, Task
from habitnet.models.network import NetworkParameters
from habitnet.utils.reproducibility import make_generator


# ---- Console singleton: force NULL mode before any test touches it ----

@pytest.fixture(autouse=True, scope="session")
def _silence_console():
    """Initialize HNConsole in NULL mode to suppress all output during tests.

    Session-scoped so the singleton is set once and stays NULL for the
    entire test run. Tests that exercise other modes re-initialize it and
    restore NULL mode afterwards.
    """
    from console.config import ConsoleConfig, ConsoleMode
    from console.hnconsole import HNConsole
    HNConsole(ConsoleConfig(mode=ConsoleMode.NULL))


# ---- Randomness ----

@pytest.fixture
def generator():
    """Seeded CPU generator."""
    return make_generator(42)


# ---- Network fixtures ----

@pytest.fixture
def tiny_params():
    """2 -> 2 -> 1 network with hand-picked weights."""
    return NetworkParameters(
        torch.tensor([[0.1, 0.2], [0.3, 0.4]]),
        torch.tensor([[0.5, 0.6]]),
    )


@pytest.fixture
def params(generator):
    """Reference-size 10 -> 8 -> 3 network with seeded random weights."""
    return NetworkParameters.from_config(NetworkConfig(), generator=generator)


# ---- Task fixtures ----

def _make_examples(n, seed, feature_size=10, output_size=3):
    gen = make_generator(seed)
    features = torch.rand(n, feature_size, generator=gen)
    targets = (torch.rand(n, output_size, generator=gen) > 0.5).float()
    return [Example(features[i], targets[i]) for i in range(n)]


@pytest.fixture
def make_task():
    """Factory: make_task(n_examples, seed=0, task_id=None) -> Task."""
    def _make(n_examples, seed=0, task_id=None):
        return Task(_make_examples(n_examples, seed), task_id=task_id)
    return _make


@pytest.fixture
def tasks(make_task):
    """Ten tasks of 10 examples each."""
    return [make_task(10, seed=i, task_id=f"habit_{i}") for i in range(10)]


@pytest.fixture
def log_console(tmp_path):
    """HNConsole writing plain text to a log file; NULL mode restored after.

    Yields the log file path.
    """
    from console.config import ConsoleConfig, ConsoleMode
    from console.hnconsole import HNConsole
    log_file = tmp_path / "habitnet.log"
    HNConsole(ConsoleConfig(mode=ConsoleMode.LOGGING, show_time=False, log_file=str(log_file)))
    yield log_file
    HNConsole(ConsoleConfig(mode=ConsoleMode.NULL))
