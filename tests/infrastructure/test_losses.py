import unittest
from unittest import TestCase

import numpy as np

from keyml.domain import ILoss, ShapeMismatchError
from keyml.infrastructure.losses import (
    BCELoss,
    BCEWithLogitsLoss,
    CosineEmbeddingLoss,
    CrossEntropyLoss,
    HingeLoss,
    HuberLoss,
    MAELoss,
    MSELoss,
    NLLLoss,
    available_losses,
    get_loss,
)
from keyml.infrastructure.tensor import Tensor


def tensor_from_np(arr, dtype="float64") -> Tensor:
    return Tensor.from_numpy(np.asarray(arr), dtype=dtype)


def numeric_grad(loss, p_np: np.ndarray, t_np: np.ndarray, eps: float = 1e-6):
    out = np.zeros_like(p_np)
    t = tensor_from_np(t_np)
    it = np.nditer(p_np, flags=["multi_index"])
    for _ in it:
        idx = it.multi_index
        pp = p_np.copy()
        pm = p_np.copy()
        pp[idx] += eps
        pm[idx] -= eps
        out[idx] = (loss.forward(tensor_from_np(pp), t) - loss.forward(tensor_from_np(pm), t)) / (2 * eps)
    return out


class TestLossValues(TestCase):
    def test_mse(self):
        p = tensor_from_np([1.0, 2.0, 3.0])
        t = tensor_from_np([1.0, 1.0, 1.0])
        self.assertAlmostEqual(MSELoss().forward(p, t), 5.0 / 3.0)
        np.testing.assert_allclose(MSELoss().backward(p, t).to_numpy(), [0.0, 2.0 / 3.0, 4.0 / 3.0])

    def test_mse_of_identical_tensors_is_zero(self):
        p = Tensor.randn((3, 4), dtype="float64", random_state=0)
        self.assertEqual(MSELoss()(p, p.copy()), 0.0)
        self.assertTrue(np.all(MSELoss().backward(p, p.copy()).to_numpy() == 0.0))

    def test_mae(self):
        p = tensor_from_np([1.0, -1.0, 3.0, 0.0])
        t = tensor_from_np([0.0, 0.0, 0.0, 0.0])
        self.assertAlmostEqual(MAELoss().forward(p, t), 5.0 / 4.0)
        np.testing.assert_allclose(MAELoss().backward(p, t).to_numpy(), [0.25, -0.25, 0.25, 0.0])

    def test_huber_zones(self):
        p = tensor_from_np([0.5, 3.0])
        t = tensor_from_np([0.0, 0.0])
        expected = (0.5 * 0.25 + 1.0 * (3.0 - 0.5)) / 2
        self.assertAlmostEqual(HuberLoss(delta=1.0).forward(p, t), expected)
        np.testing.assert_allclose(HuberLoss().backward(p, t).to_numpy(), [0.25, 0.5])

    def test_huber_invalid_delta(self):
        with self.assertRaises(ValueError):
            HuberLoss(delta=0.0)

    def test_bce_clamps_extremes(self):
        p = tensor_from_np([0.0, 1.0])
        t = tensor_from_np([1.0, 0.0])
        value = BCELoss().forward(p, t)
        self.assertTrue(np.isfinite(value))
        self.assertAlmostEqual(value, -np.log(1e-7), places=5)
        self.assertTrue(np.all(np.isfinite(BCELoss().backward(p, t).to_numpy())))

    def test_bce_with_logits_matches_bce_on_sigmoid(self):
        x_np = np.array([-2.0, -0.5, 0.3, 4.0])
        t_np = np.array([0.0, 1.0, 1.0, 0.0])
        sig = 1.0 / (1.0 + np.exp(-x_np))
        a = BCEWithLogitsLoss().forward(tensor_from_np(x_np), tensor_from_np(t_np))
        b = BCELoss().forward(tensor_from_np(sig), tensor_from_np(t_np))
        self.assertAlmostEqual(a, b, places=6)

    def test_bce_with_logits_large_logits_are_finite(self):
        x = tensor_from_np([-1000.0, 1000.0])
        t = tensor_from_np([1.0, 0.0])
        self.assertAlmostEqual(BCEWithLogitsLoss().forward(x, t), 1000.0)

    def test_cross_entropy_single_sample(self):
        x_np = np.array([2.0, 1.0, 0.1])
        t_np = np.array([1.0, 0.0, 0.0])
        p = np.exp(x_np) / np.exp(x_np).sum()
        loss = CrossEntropyLoss().forward(tensor_from_np(x_np), tensor_from_np(t_np))
        self.assertAlmostEqual(loss, -np.log(p[0]))
        np.testing.assert_allclose(
            CrossEntropyLoss().backward(tensor_from_np(x_np), tensor_from_np(t_np)).to_numpy(),
            p - t_np,
        )

    def test_cross_entropy_batch_averages_rows(self):
        x_np = np.array([[2.0, 1.0, 0.1], [0.0, 0.0, 3.0]])
        t_np = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        batch = CrossEntropyLoss().forward(tensor_from_np(x_np), tensor_from_np(t_np))
        rows = [
            CrossEntropyLoss().forward(tensor_from_np(x_np[i]), tensor_from_np(t_np[i]))
            for i in range(2)
        ]
        self.assertAlmostEqual(batch, np.mean(rows))

    def test_cross_entropy_rejects_rank_three(self):
        with self.assertRaises(ValueError):
            CrossEntropyLoss().forward(Tensor((1, 2, 3)), Tensor((1, 2, 3)))

    def test_nll(self):
        logp = tensor_from_np([[-0.1, -2.0], [-3.0, -0.05]])
        t = tensor_from_np([[1.0, 0.0], [0.0, 1.0]])
        self.assertAlmostEqual(NLLLoss().forward(logp, t), (0.1 + 0.05) / 2)
        np.testing.assert_allclose(NLLLoss().backward(logp, t).to_numpy(), [[-0.5, 0.0], [0.0, -0.5]])

    def test_hinge(self):
        p = tensor_from_np([2.0, 0.5, -1.0])
        t = tensor_from_np([1.0, 1.0, 1.0])
        self.assertAlmostEqual(HingeLoss().forward(p, t), (0.0 + 0.5 + 2.0) / 3)
        np.testing.assert_allclose(HingeLoss().backward(p, t).to_numpy(), [0.0, -1 / 3, -1 / 3])

    def test_cosine_embedding(self):
        p = tensor_from_np([1.0, 0.0])
        self.assertAlmostEqual(CosineEmbeddingLoss().forward(p, tensor_from_np([2.0, 0.0])), 0.0, places=7)
        self.assertAlmostEqual(CosineEmbeddingLoss().forward(p, tensor_from_np([0.0, 1.0])), 1.0, places=7)
        self.assertAlmostEqual(CosineEmbeddingLoss().forward(p, tensor_from_np([-1.0, 0.0])), 2.0, places=7)

    def test_cosine_embedding_zero_prediction(self):
        p = tensor_from_np([0.0, 0.0])
        t = tensor_from_np([1.0, 1.0])
        self.assertAlmostEqual(CosineEmbeddingLoss().forward(p, t), 1.0)
        self.assertTrue(np.all(np.isfinite(CosineEmbeddingLoss().backward(p, t).to_numpy())))


class TestLossGradients(TestCase):
    def test_finite_differences(self):
        rng = np.random.default_rng(0)
        p_reg = np.array([[0.3, -1.2, 2.5], [1.1, 0.4, -0.6]])
        t_reg = np.array([[0.0, 0.0, 1.0], [2.0, -1.0, 0.5]])
        probs = np.array([[0.2, 0.7, 0.4], [0.9, 0.15, 0.6]])
        bin_t = np.array([[0.0, 1.0, 1.0], [1.0, 0.0, 0.0]])
        logits = rng.standard_normal((2, 3))
        one_hot = np.array([[0.0, 1.0, 0.0], [1.0, 0.0, 0.0]])
        signs = np.array([[1.0, -1.0, 1.0], [-1.0, 1.0, 1.0]])
        margins = np.array([[0.2, 0.5, 1.7], [-0.4, -0.8, 0.3]])

        cases = [
            (MSELoss(), p_reg, t_reg),
            (MAELoss(), p_reg, t_reg),
            (HuberLoss(delta=1.0), p_reg, t_reg),
            (BCELoss(), probs, bin_t),
            (BCEWithLogitsLoss(), logits, bin_t),
            (CrossEntropyLoss(), logits, one_hot),
            (CrossEntropyLoss(), logits[0], one_hot[0]),
            (NLLLoss(), np.log(probs), one_hot),
            (HingeLoss(), margins, signs),
            (CosineEmbeddingLoss(), p_reg, t_reg),
        ]
        for loss, p_np, t_np in cases:
            with self.subTest(loss=repr(loss), shape=p_np.shape):
                analytic = loss.backward(tensor_from_np(p_np), tensor_from_np(t_np)).to_numpy()
                numeric = numeric_grad(loss, p_np, t_np)
                self.assertEqual(analytic.shape, p_np.shape)
                np.testing.assert_allclose(analytic, numeric, rtol=1e-4, atol=1e-6)


class TestLossContracts(TestCase):
    def test_shape_mismatch_raises(self):
        for loss in (MSELoss(), MAELoss(), BCELoss(), CrossEntropyLoss(), CosineEmbeddingLoss()):
            with self.subTest(loss=repr(loss)):
                with self.assertRaises(ShapeMismatchError):
                    loss.forward(Tensor((2, 3)), Tensor((3, 2)))
                with self.assertRaises(ShapeMismatchError):
                    loss.backward(Tensor((4,)), Tensor((2, 2)))

    def test_gradient_keeps_prediction_dtype(self):
        p = Tensor((3,), [0.2, 0.5, 0.9], dtype="float32")
        t = Tensor((3,), [0.0, 1.0, 1.0], dtype="float32")
        for loss in (MSELoss(), BCELoss(), HingeLoss()):
            with self.subTest(loss=repr(loss)):
                self.assertEqual(loss.backward(p, t).to_numpy().dtype, np.float32)

    def test_inputs_not_mutated(self):
        p = tensor_from_np([0.2, 0.8])
        t = tensor_from_np([0.0, 1.0])
        BCELoss().backward(p, t)
        np.testing.assert_array_equal(p.to_numpy(), [0.2, 0.8])

    def test_registry(self):
        self.assertIsInstance(get_loss("mse"), MSELoss)
        self.assertIsInstance(get_loss("CROSS_ENTROPY"), CrossEntropyLoss)
        self.assertEqual(get_loss("huber", delta=2.0).delta, 2.0)
        self.assertIn("cosine_embedding", available_losses())
        with self.assertRaises(ValueError):
            get_loss("nope")

    def test_satisfies_domain_protocol(self):
        self.assertIsInstance(MSELoss(), ILoss)
        self.assertEqual(MSELoss().name, "MSE")


if __name__ == "__main__":
    unittest.main()
