"""
Numeric constants shared across KeyML infrastructure.

These values are part of the numerical contract of the library: changing
them changes results. They are grouped here so activations, losses and
optimizers agree on them.
"""

# Probability clamp used by BCE / CrossEntropy to avoid log(0).
PROB_EPS: float = 1e-7

# Added to the cosine-similarity denominator.
COSINE_EPS: float = 1e-8

# GELU tanh approximation.
GELU_SQRT_2_OVER_PI: float = 0.7978845608
GELU_COEFF: float = 0.044715

# SELU constants (rounded as in the reference formulation).
SELU_LAMBDA: float = 1.0507
SELU_ALPHA: float = 1.6733

# Optimizer defaults.
ADAM_EPS: float = 1e-8
RMSPROP_EPS: float = 1e-8
ADAGRAD_EPS: float = 1e-10
