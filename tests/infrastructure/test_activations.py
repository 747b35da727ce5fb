import unittest
from unittest import TestCase

import numpy as np

from keyml.domain import IActivation, ShapeMismatchError
from keyml.infrastructure.activations import (
    ELU,
    GELU,
    LeakyReLU,
    Linear,
    ReLU,
    SELU,
    Sigmoid,
    Softmax,
    Softplus,
    Swish,
    Tanh,
    available_activations,
    get_activation,
    register_activation,
)
from keyml.infrastructure._constants import SELU_ALPHA, SELU_LAMBDA
from keyml.infrastructure.activations._base import ACTIVATIONS, Activation
from keyml.infrastructure.tensor import Tensor


def tensor_from_np(arr, dtype="float64") -> Tensor:
    return Tensor.from_numpy(np.asarray(arr), dtype=dtype)


def numeric_input_grad(act, x_np: np.ndarray, g_np: np.ndarray, eps: float = 1e-6):
    """Central-difference gradient of ``sum(g * act(x))`` w.r.t. ``x``."""
    out = np.zeros_like(x_np)
    it = np.nditer(x_np, flags=["multi_index"])
    for _ in it:
        idx = it.multi_index
        xp = x_np.copy()
        xm = x_np.copy()
        xp[idx] += eps
        xm[idx] -= eps
        fp = np.sum(g_np * act.forward(tensor_from_np(xp)).to_numpy())
        fm = np.sum(g_np * act.forward(tensor_from_np(xm)).to_numpy())
        out[idx] = (fp - fm) / (2 * eps)
    return out


# inputs kept away from 0 so piecewise activations stay differentiable
X_NP = np.array([[-2.0, -0.7, -0.1, 0.3], [0.05, 0.9, 1.6, -1.3]])
G_NP = np.array([[0.5, -1.0, 2.0, 0.25], [1.5, -0.3, 0.7, 1.0]])


class TestActivationForward(TestCase):
    def test_relu(self):
        out = ReLU().forward(tensor_from_np([-1.0, 0.0, 2.0]))
        np.testing.assert_array_equal(out.to_numpy(), [0.0, 0.0, 2.0])

    def test_relu_is_idempotent(self):
        x = Tensor.randn((4, 5), dtype="float64", random_state=0)
        once = ReLU()(x)
        np.testing.assert_array_equal(ReLU()(once).to_numpy(), once.to_numpy())

    def test_leaky_relu(self):
        out = LeakyReLU(alpha=0.1).forward(tensor_from_np([-2.0, 3.0]))
        np.testing.assert_allclose(out.to_numpy(), [-0.2, 3.0])

    def test_elu(self):
        out = ELU(alpha=2.0).forward(tensor_from_np([-1.0, 1.0]))
        np.testing.assert_allclose(out.to_numpy(), [2.0 * np.expm1(-1.0), 1.0])

    def test_selu_constants(self):
        out = SELU().forward(tensor_from_np([1.0, -1.0])).to_numpy()
        self.assertAlmostEqual(out[0], SELU_LAMBDA, places=12)
        self.assertAlmostEqual(out[1], SELU_LAMBDA * SELU_ALPHA * np.expm1(-1.0), places=12)

    def test_sigmoid_range_and_stability(self):
        out = Sigmoid().forward(tensor_from_np([-1000.0, 0.0, 1000.0])).to_numpy()
        self.assertTrue(np.all(np.isfinite(out)))
        np.testing.assert_allclose(out, [0.0, 0.5, 1.0], atol=1e-12)

    def test_tanh_and_linear(self):
        x = tensor_from_np([-0.5, 0.0, 0.5])
        np.testing.assert_allclose(Tanh()(x).to_numpy(), np.tanh([-0.5, 0.0, 0.5]))
        np.testing.assert_array_equal(Linear()(x).to_numpy(), x.to_numpy())

    def test_swish_and_softplus(self):
        x_np = np.array([-3.0, 0.0, 2.0])
        x = tensor_from_np(x_np)
        np.testing.assert_allclose(Swish()(x).to_numpy(), x_np / (1 + np.exp(-x_np)))
        np.testing.assert_allclose(Softplus()(x).to_numpy(), np.log1p(np.exp(x_np)))

    def test_softplus_large_input_is_finite(self):
        out = Softplus()(tensor_from_np([1000.0])).to_numpy()
        np.testing.assert_allclose(out, [1000.0])

    def test_gelu_tanh_approximation(self):
        x_np = np.array([-1.0, 0.0, 1.0])
        expected = 0.5 * x_np * (1 + np.tanh(np.sqrt(2 / np.pi) * (x_np + 0.044715 * x_np**3)))
        np.testing.assert_allclose(GELU()(tensor_from_np(x_np)).to_numpy(), expected, rtol=1e-7)

    def test_output_keeps_dtype(self):
        x = Tensor((3,), [1, 2, 3], dtype="float32")
        self.assertEqual(Sigmoid()(x).to_numpy().dtype, np.float32)


class TestSoftmax(TestCase):
    def test_sums_to_one_and_positive(self):
        x = Tensor.randn((10,), dtype="float64", random_state=2)
        out = Softmax()(x).to_numpy()
        self.assertTrue(np.all(out > 0))
        self.assertAlmostEqual(out.sum(), 1.0, places=12)

    def test_batch_rows_sum_to_one(self):
        x = Tensor.randn((4, 6), dtype="float64", random_state=3)
        out = Softmax()(x).to_numpy()
        np.testing.assert_allclose(out.sum(axis=1), np.ones(4), rtol=1e-12)

    def test_large_logits_are_stable(self):
        out = Softmax()(tensor_from_np([1000.0, 1000.0])).to_numpy()
        np.testing.assert_allclose(out, [0.5, 0.5])

    def test_axis_zero(self):
        x = Tensor.randn((3, 2), dtype="float64", random_state=4)
        out = Softmax(axis=0)(x).to_numpy()
        np.testing.assert_allclose(out.sum(axis=0), np.ones(2), rtol=1e-12)

    def test_invalid_axis(self):
        with self.assertRaises(ValueError):
            Softmax(axis=2)(Tensor((3,)))

    def test_backward_equals_dense_jacobian_per_row(self):
        x_np = np.random.default_rng(0).standard_normal((3, 4))
        g_np = np.random.default_rng(1).standard_normal((3, 4))
        dx = Softmax().backward(tensor_from_np(x_np), tensor_from_np(g_np)).to_numpy()
        for r in range(3):
            e = np.exp(x_np[r] - x_np[r].max())
            s = e / e.sum()
            jac = np.diag(s) - np.outer(s, s)
            np.testing.assert_allclose(dx[r], jac.T @ g_np[r], rtol=1e-10, atol=1e-12)


class TestActivationBackward(TestCase):
    def test_finite_differences(self):
        acts = [
            ReLU(),
            LeakyReLU(alpha=0.05),
            ELU(alpha=1.5),
            SELU(),
            Sigmoid(),
            Tanh(),
            Softmax(),
            Swish(),
            GELU(),
            Softplus(),
            Linear(),
        ]
        for act in acts:
            with self.subTest(act=repr(act)):
                analytic = act.backward(tensor_from_np(X_NP), tensor_from_np(G_NP)).to_numpy()
                numeric = numeric_input_grad(act, X_NP, G_NP)
                np.testing.assert_allclose(analytic, numeric, rtol=1e-5, atol=1e-7)

    def test_relu_derivative_at_zero_is_zero(self):
        dx = ReLU().backward(tensor_from_np([0.0]), tensor_from_np([1.0]))
        self.assertEqual(dx.item(), 0.0)

    def test_shape_mismatch(self):
        with self.assertRaises(ShapeMismatchError):
            Sigmoid().backward(Tensor((2, 2)), Tensor((4,)))

    def test_inputs_not_mutated(self):
        x = tensor_from_np(X_NP)
        g = tensor_from_np(G_NP)
        Softmax().backward(x, g)
        np.testing.assert_array_equal(x.to_numpy(), X_NP)
        np.testing.assert_array_equal(g.to_numpy(), G_NP)


class TestActivationRegistry(TestCase):
    def test_get_by_name(self):
        self.assertIsInstance(get_activation("relu"), ReLU)
        self.assertIsInstance(get_activation("ReLU"), ReLU)
        leaky = get_activation("leaky_relu", alpha=0.2)
        self.assertIsInstance(leaky, LeakyReLU)
        self.assertEqual(leaky.alpha, 0.2)

    def test_unknown_name_raises(self):
        with self.assertRaises(ValueError):
            get_activation("does_not_exist")

    def test_available_lists_builtins(self):
        names = available_activations()
        for n in ("relu", "leaky_relu", "elu", "selu", "sigmoid", "tanh",
                  "softmax", "swish", "gelu", "softplus", "linear"):
            self.assertIn(n, names)

    def test_register_custom_activation(self):
        try:
            @register_activation("square_test")
            class Square(Activation):
                name = "square_test"

                def _forward(self, x):
                    return x * x

                def _backward(self, x, grad):
                    return 2 * x * grad

            out = get_activation("square_test")(tensor_from_np([3.0]))
            self.assertEqual(out.item(), 9.0)
            with self.assertRaises(ValueError):
                register_activation("square_test")(Square)
        finally:
            ACTIVATIONS._entries.pop("square_test", None)

    def test_satisfies_domain_protocol(self):
        self.assertIsInstance(ReLU(), IActivation)


if __name__ == "__main__":
    unittest.main()
