# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the synthetic classification data generator."""

import numpy as np
import pytest

from kustom.data.synthetic import make_classification_data


class TestShapesAndTypes:
    def test_default_shapes(self) -> None:
        dataset = make_classification_data(seed=0)
        assert dataset.x.shape == (1000, 100)
        assert dataset.y.shape == (1000, 10)
        assert dataset.labels.shape == (1000,)
        assert (dataset.n_samples, dataset.n_features, dataset.num_classes) == (1000, 100, 10)

    def test_dtypes(self) -> None:
        dataset = make_classification_data(n_samples=5, n_features=3, num_classes=2, seed=0)
        assert dataset.x.dtype == np.float32
        assert dataset.y.dtype == np.float32
        assert dataset.labels.dtype == np.int64


class TestValues:
    def test_features_in_unit_interval(self) -> None:
        x = make_classification_data(n_samples=200, n_features=20, seed=1).x
        assert x.min() >= 0.0
        assert x.max() <= 1.0

    def test_labels_in_range_and_one_hot(self) -> None:
        dataset = make_classification_data(n_samples=500, n_features=2, num_classes=10, seed=2)
        assert dataset.labels.min() >= 0
        assert dataset.labels.max() <= 9
        np.testing.assert_array_equal(dataset.y.sum(axis=1), np.ones(500))
        np.testing.assert_array_equal(dataset.y.argmax(axis=1), dataset.labels)

    def test_edge_classes_are_drawn_less_often(self) -> None:
        labels = make_classification_data(
            n_samples=20000, n_features=1, num_classes=10, seed=3
        ).labels
        counts = np.bincount(labels, minlength=10)
        assert counts[0] < counts[1:9].min()
        assert counts[9] < counts[1:9].min()


class TestDeterminism:
    def test_same_seed_same_data(self) -> None:
        a = make_classification_data(n_samples=50, n_features=4, seed=11)
        b = make_classification_data(n_samples=50, n_features=4, seed=11)
        np.testing.assert_array_equal(a.x, b.x)
        np.testing.assert_array_equal(a.labels, b.labels)

    def test_different_seed_different_data(self) -> None:
        a = make_classification_data(n_samples=50, n_features=4, seed=11)
        b = make_classification_data(n_samples=50, n_features=4, seed=12)
        assert not np.array_equal(a.x, b.x)

    def test_global_numpy_state_untouched(self) -> None:
        np.random.seed(123)
        expected = np.random.random()
        np.random.seed(123)
        make_classification_data(n_samples=10, n_features=2, seed=0)
        assert np.random.random() == expected


class TestInvalidArguments:
    @pytest.mark.parametrize(
        "kwargs",
        [{"n_samples": 0}, {"n_features": 0}, {"num_classes": 1}],
    )
    def test_rejects_bad_sizes(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            make_classification_data(**kwargs)
