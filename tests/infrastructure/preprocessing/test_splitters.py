import unittest
from unittest import TestCase

import numpy as np

from keyml.infrastructure.preprocessing import KFold, train_test_split


class TestTrainTestSplit(TestCase):
    def test_no_shuffle_preserves_order(self):
        x = list(range(100))
        y = [v * 2 for v in x]
        x_tr, x_te, y_tr, y_te = train_test_split(x, y, test_size=0.2, shuffle=False)
        self.assertEqual(x_tr, list(range(80)))
        self.assertEqual(x_te, list(range(80, 100)))
        self.assertEqual(y_tr, [v * 2 for v in range(80)])
        self.assertEqual(y_te, [v * 2 for v in range(80, 100)])

    def test_shuffle_keeps_pairs_and_partitions(self):
        x = np.arange(50)
        y = np.arange(50) * 10
        x_tr, x_te, y_tr, y_te = train_test_split(x, y, test_size=0.3, random_state=0)
        self.assertIsInstance(x_tr, np.ndarray)
        self.assertEqual(len(x_tr), 35)
        self.assertEqual(len(x_te), 15)
        np.testing.assert_array_equal(y_tr, x_tr * 10)
        np.testing.assert_array_equal(y_te, x_te * 10)
        np.testing.assert_array_equal(np.sort(np.concatenate([x_tr, x_te])), x)

    def test_random_state_is_reproducible(self):
        x = list(range(20))
        a = train_test_split(x, x, random_state=3)
        b = train_test_split(x, x, random_state=3)
        self.assertEqual(a[0], b[0])

    def test_rows_of_2d_array(self):
        x = np.arange(20).reshape(10, 2)
        y = np.arange(10)
        x_tr, x_te, _, _ = train_test_split(x, y, test_size=0.5, shuffle=False)
        self.assertEqual(x_tr.shape, (5, 2))
        np.testing.assert_array_equal(x_te[0], [10, 11])

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            train_test_split([1, 2], [1], test_size=0.5)
        with self.assertRaises(ValueError):
            train_test_split([1, 2], [1, 2], test_size=1.0)
        with self.assertRaises(ValueError):
            train_test_split([1, 2], [1, 2], random_state=0, generator=np.random.default_rng(0))


class TestKFold(TestCase):
    def test_even_folds(self):
        folds = KFold(n_splits=5).split(100)
        self.assertEqual(len(folds), 5)
        for i, (train, test) in enumerate(folds):
            self.assertEqual(len(test), 20)
            self.assertEqual(len(train), 80)
            np.testing.assert_array_equal(test, np.arange(i * 20, (i + 1) * 20))

    def test_test_folds_partition_indices(self):
        folds = KFold(n_splits=3, shuffle=True, random_state=1).split(11)
        all_test = np.concatenate([test for _, test in folds])
        np.testing.assert_array_equal(np.sort(all_test), np.arange(11))
        for train, test in folds:
            self.assertEqual(len(np.intersect1d(train, test)), 0)
            self.assertEqual(len(train) + len(test), 11)

    def test_last_fold_takes_remainder(self):
        sizes = [len(test) for _, test in KFold(n_splits=3).split(11)]
        self.assertEqual(sizes, [3, 3, 5])

    def test_invalid(self):
        with self.assertRaises(ValueError):
            KFold(n_splits=1)
        with self.assertRaises(ValueError):
            KFold(n_splits=5).split(4)

    def test_get_n_splits(self):
        self.assertEqual(KFold(n_splits=4).get_n_splits(), 4)


if __name__ == "__main__":
    unittest.main()
