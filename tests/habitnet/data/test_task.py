"""Tests for habitnet/data/task.py."""

import dataclasses

import pytest
import torch

from habitnet.data.task import Example, Task, split_support_query
from habitnet.utils.reproducibility import make_generator


class TestExample:

    def test_stores_float32_vectors(self):
        ex = Example([1, 2, 3], [0, 1])
        assert ex.features.dtype == torch.float32
        assert ex.target.shape == (2,)

    def test_copies_inputs(self):
        features = torch.zeros(3)
        ex = Example(features, [1.0])
        features.fill_(5.0)
        assert not ex.features.any()

    def test_frozen(self):
        ex = Example([1.0], [1.0])
        with pytest.raises(dataclasses.FrozenInstanceError):
            ex.features = torch.ones(1)

    def test_equal_by_value(self):
        a = Example([0.1] * 10, [1, 0, 1])
        b = Example(torch.full((10,), 0.1), [1.0, 0.0, 1.0])
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_not_equal(self):
        a = Example([0.1] * 10, [1, 0, 1])
        assert a != Example([0.1] * 10, [1, 0, 0])
        assert a != Example([0.1] * 9, [1, 0, 1])
        assert a != "example"

    def test_tasks_compare_by_examples(self):
        examples = [Example([float(i)] * 3, [1.0]) for i in range(3)]
        assert Task(list(examples), task_id=1) == Task(list(examples), task_id=1)


class TestTask:

    def test_len(self, make_task):
        assert len(make_task(7)) == 7

    def test_missing_task(self):
        task = Task(examples=None, task_id="x")
        assert task.is_missing
        with pytest.raises(TypeError):
            len(task)


class TestSplitSupportQuery:

    @pytest.mark.parametrize("n,support", [(10, 7), (5, 3), (6, 4), (7, 4)])
    def test_floor_split_sizes(self, make_task, n, support):
        split = split_support_query(make_task(n), 0.7, generator=make_generator(0))
        assert len(split.support) == support
        assert len(split.query) == n - support

    def test_split_is_a_permutation(self, make_task):
        task = make_task(10)
        split = split_support_query(task, generator=make_generator(1))
        ids = sorted(id(ex) for ex in split.support + split.query)
        assert ids == sorted(id(ex) for ex in task.examples)

    def test_task_not_modified(self, make_task):
        task = make_task(10)
        order = list(task.examples)
        split_support_query(task, generator=make_generator(2))
        assert task.examples == order

    def test_seeded_split_reproducible(self, make_task):
        task = make_task(10)
        a = split_support_query(task, generator=make_generator(3))
        b = split_support_query(task, generator=make_generator(3))
        assert [id(e) for e in a.support] == [id(e) for e in b.support]

    def test_task_id_carried(self, make_task):
        split = split_support_query(make_task(5, task_id="h9"), generator=make_generator(0))
        assert split.task_id == "h9"
