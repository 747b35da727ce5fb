"""
Dataset preparation transforms operating on raw NumPy-compatible arrays.
"""

from ._base import Transform
from ._scalers import StandardScaler, MinMaxScaler, RobustScaler, Normalizer
from ._encoders import LabelEncoder, OneHotEncoder
from ._imputer import SimpleImputer
from ._power import PowerTransformer
from ._splitters import train_test_split, KFold

__all__ = [
    Transform.__name__,
    StandardScaler.__name__,
    MinMaxScaler.__name__,
    RobustScaler.__name__,
    Normalizer.__name__,
    LabelEncoder.__name__,
    OneHotEncoder.__name__,
    SimpleImputer.__name__,
    PowerTransformer.__name__,
    train_test_split.__name__,
    KFold.__name__,
]
