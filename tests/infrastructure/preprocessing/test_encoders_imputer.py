import unittest
import warnings
from unittest import TestCase

import numpy as np

from keyml.domain import NotFittedError
from keyml.infrastructure.preprocessing import LabelEncoder, OneHotEncoder, SimpleImputer


class TestLabelEncoder(TestCase):
    def test_codes_follow_sorted_classes(self):
        enc = LabelEncoder()
        codes = enc.fit_transform([5, 3, 1, 5, 3, 1, 5])
        np.testing.assert_array_equal(enc.classes_, [1, 3, 5])
        np.testing.assert_array_equal(codes, [2, 1, 0, 2, 1, 0, 2])

    def test_string_labels_and_inverse(self):
        enc = LabelEncoder().fit(["cat", "dog", "ant", "dog"])
        codes = enc.transform(["dog", "ant"])
        np.testing.assert_array_equal(codes, [2, 0])
        np.testing.assert_array_equal(enc.inverse_transform(codes), ["dog", "ant"])

    def test_unseen_label_raises(self):
        enc = LabelEncoder().fit([1, 2])
        with self.assertRaises(ValueError):
            enc.transform([3])
        with self.assertRaises(ValueError):
            enc.transform([0])

    def test_inverse_out_of_range(self):
        enc = LabelEncoder().fit([1, 2])
        with self.assertRaises(ValueError):
            enc.inverse_transform([2])

    def test_not_fitted(self):
        with self.assertRaises(NotFittedError):
            LabelEncoder().transform([1])


class TestOneHotEncoder(TestCase):
    def test_each_row_has_one_hot_per_column(self):
        x = [[0, "a"], [1, "b"], [2, "a"]]
        enc = OneHotEncoder()
        out = enc.fit_transform(np.array(x, dtype=object))
        self.assertEqual(out.shape, (3, 5))
        np.testing.assert_array_equal(out.sum(axis=1), [2.0, 2.0, 2.0])
        np.testing.assert_array_equal(out[0], [1, 0, 0, 1, 0])
        np.testing.assert_array_equal(out[1], [0, 1, 0, 0, 1])

    def test_numeric_single_column(self):
        out = OneHotEncoder().fit_transform([[3], [1], [2], [1]])
        np.testing.assert_array_equal(
            out, [[0, 0, 1], [1, 0, 0], [0, 1, 0], [1, 0, 0]]
        )

    def test_unseen_value_encodes_as_zeros(self):
        enc = OneHotEncoder().fit([[1], [2]])
        np.testing.assert_array_equal(enc.transform([[3]]), [[0.0, 0.0]])

    def test_feature_names(self):
        enc = OneHotEncoder().fit([[1, 10], [2, 10]])
        self.assertEqual(enc.get_feature_names(), ["x0_1", "x0_2", "x1_10"])

    def test_feature_count_checked(self):
        enc = OneHotEncoder().fit([[1, 2]])
        with self.assertRaises(ValueError):
            enc.transform([[1]])


class TestSimpleImputer(TestCase):
    def setUp(self) -> None:
        self.x = np.array(
            [
                [1.0, np.nan],
                [np.nan, 4.0],
                [3.0, 4.0],
                [4.0, 10.0],
            ]
        )

    def test_mean(self):
        out = SimpleImputer().fit_transform(self.x)
        self.assertAlmostEqual(out[1, 0], 8.0 / 3.0)
        self.assertAlmostEqual(out[0, 1], 6.0)
        self.assertFalse(np.any(np.isnan(out)))

    def test_median_is_upper_median(self):
        imp = SimpleImputer(strategy="median").fit([[1.0], [2.0], [3.0], [4.0], [np.nan]])
        self.assertEqual(imp.statistics_[0], 3.0)

    def test_most_frequent_tie_prefers_smallest(self):
        imp = SimpleImputer(strategy="most_frequent").fit([[5.0], [2.0], [5.0], [2.0], [np.nan]])
        self.assertEqual(imp.statistics_[0], 2.0)
        out = SimpleImputer(strategy="most_frequent").fit_transform(self.x)
        self.assertEqual(out[0, 1], 4.0)

    def test_constant(self):
        out = SimpleImputer(strategy="constant", fill_value=-1.0).fit_transform(self.x)
        self.assertEqual(out[1, 0], -1.0)
        self.assertEqual(out[0, 1], -1.0)
        self.assertEqual(out[2, 0], 3.0)

    def test_custom_missing_marker(self):
        out = SimpleImputer(missing_values=-999.0).fit_transform([[1.0], [-999.0], [3.0]])
        np.testing.assert_array_equal(out[:, 0], [1.0, 2.0, 3.0])

    def test_all_missing_column_warns(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            imp = SimpleImputer().fit([[np.nan, 1.0], [np.nan, 2.0]])
        self.assertTrue(any(issubclass(w.category, RuntimeWarning) for w in caught))
        self.assertEqual(imp.statistics_[0], 0.0)

    def test_invalid_strategy(self):
        with self.assertRaises(ValueError):
            SimpleImputer(strategy="mode")


if __name__ == "__main__":
    unittest.main()
