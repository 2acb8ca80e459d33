import math
import mpmath
import numpy as np
import pytest


def logfactorial_reference(k, dps=50):
    with mpmath.workdps(dps):
        return mpmath.loggamma(mpmath.mpf(k) + 1)


@pytest.fixture
def reference():
    """log(k!) correctly rounded to a double"""
    def _reference(k):
        return float(logfactorial_reference(k))
    return _reference


@pytest.fixture
def ulp_error():
    """distance from the exact log(k!) in ULP of the correctly rounded value"""
    def _ulp_error(value, k):
        exact = logfactorial_reference(k)
        with mpmath.workdps(50):
            return float(abs(mpmath.mpf(value) - exact)) / math.ulp(float(exact))
    return _ulp_error


@pytest.fixture
def random_arguments():
    """integers above the lookup table, log-uniform in magnitude up to 2^63 - 1"""
    rng = np.random.default_rng(20261019)
    bits = rng.integers(8, 64, size=2000)
    return [int(rng.integers(126, (1 << int(b)) - 1, dtype=np.int64)) for b in bits]
