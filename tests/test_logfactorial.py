import math
import numpy as np
import pytest

import LogFactorial
from LogFactorial import logfactorial, logfactorial_array
from LogFactorial.special.lookup_table import TABLE_MAX, LOGFACT_TABLE


def test_zero_and_one_are_exact():
    assert logfactorial(0) == 0.0
    assert logfactorial(1) == 0.0


def test_five():
    value = logfactorial(5)
    assert abs(value - math.log(120)) <= math.ulp(math.log(120))
    assert value == pytest.approx(4.787491742782046, abs=math.ulp(4.787491742782046))


def test_small_values_match_log_of_factorial():
    for k in range(2, 25):
        assert logfactorial(k) == pytest.approx(math.log(math.factorial(k)), rel=1e-15), f"for k={k}"


def test_monotonic():
    values = [logfactorial(k) for k in range(0, 3000)]
    assert all(b >= a for a, b in zip(values, values[1:]))

    ks = sorted(set(np.geomspace(1, 1e15, 400).astype(np.int64).tolist()))
    values = [logfactorial(k) for k in ks]
    assert all(b >= a for a, b in zip(values, values[1:]))


def test_boundary_continuity():
    upper = logfactorial(TABLE_MAX + 1)
    step = upper - logfactorial(TABLE_MAX)
    assert abs(step - math.log(TABLE_MAX + 1)) <= 2 * math.ulp(upper)


def test_dispatch_to_table():
    for k in range(TABLE_MAX + 1):
        assert logfactorial(k) == LOGFACT_TABLE[k]


@pytest.mark.parametrize('k', [-1, -1000, -2 ** 63, np.int64(-5)])
def test_negative_is_nan(k):
    assert math.isnan(logfactorial(k))


def test_nan_propagates():
    log_pmf = logfactorial(10) - logfactorial(-1) - logfactorial(11)
    assert math.isnan(log_pmf)


@pytest.mark.parametrize('k, expected', [
    (10 ** 6, '12815518.38465816962425107589296584125987'),
    (10 ** 9, '19723265848.22698260792313474535390248423'),
])
def test_large_input_accuracy(k, expected, ulp_error):
    value = logfactorial(k)
    assert ulp_error(value, k) <= 2
    assert abs(value - float(expected)) <= 2 * math.ulp(float(expected))


def test_accepts_numpy_integers():
    assert logfactorial(np.int64(5)) == logfactorial(5)
    assert logfactorial(np.uint8(200)) == logfactorial(200)
    assert logfactorial(np.int64(2 ** 40)) == logfactorial(2 ** 40)


@pytest.mark.parametrize('k', [5.0, 2.5, '5', None, np.float64(3.0)])
def test_rejects_non_integers(k):
    with pytest.raises(TypeError):
        logfactorial(k)


def test_accepts_bool():
    assert logfactorial(True) == 0.0
    assert logfactorial(False) == 0.0


def test_beyond_int64(ulp_error):
    k = 2 ** 70
    value = logfactorial(k)
    assert math.isfinite(value)
    assert ulp_error(value, k) <= 2


def test_overflows_to_inf():
    assert logfactorial(10 ** 306) == math.inf


def test_beyond_double_range_raises():
    with pytest.raises(OverflowError):
        logfactorial(10 ** 400)


def test_returns_python_float():
    assert type(logfactorial(3)) is float
    assert type(logfactorial(10 ** 6)) is float
    assert type(logfactorial(-3)) is float


def test_deterministic():
    for k in [0, 7, TABLE_MAX, TABLE_MAX + 1, 10 ** 9, -4]:
        first = logfactorial(k)
        for _ in range(5):
            logfactorial(k + 1)
            again = logfactorial(k)
            if math.isnan(first):
                assert math.isnan(again)
            else:
                assert again == first


def test_package_exports():
    assert LogFactorial.logfactorial is logfactorial
    assert LogFactorial.special.logfactorial is logfactorial


def test_array_matches_scalar():
    ks = np.concatenate([np.arange(-3, 400), np.geomspace(400, 1e12, 200).astype(np.int64)])
    expected = np.array([logfactorial(int(k)) for k in ks])
    result = logfactorial_array(ks)
    assert result.dtype == np.float64
    assert result.shape == ks.shape
    assert np.all(np.isnan(result[ks < 0]))
    np.testing.assert_array_equal(result[(ks >= 0) & (ks <= TABLE_MAX)], LOGFACT_TABLE[:TABLE_MAX + 1])
    np.testing.assert_array_max_ulp(result[ks >= 0], expected[ks >= 0], maxulp=2)


def test_array_keeps_shape():
    ks = np.array([[0, 5], [130, -2]])
    result = logfactorial_array(ks)
    assert result.shape == (2, 2)
    assert result[0, 0] == 0.0
    assert result[0, 1] == logfactorial(5)
    assert math.isnan(result[1, 1])


def test_array_scalar_and_list_input():
    assert logfactorial_array(5).shape == ()
    assert float(logfactorial_array(5)) == logfactorial(5)
    np.testing.assert_array_equal(logfactorial_array([0, 1, 2]), LOGFACT_TABLE[:3])


def test_array_rejects_floats():
    with pytest.raises(TypeError):
        logfactorial_array(np.array([1.0, 2.0]))


def test_array_rejects_unsigned_64_bit():
    with pytest.raises(TypeError):
        logfactorial_array(np.array([1, 2], dtype=np.uint64))


def test_array_accepts_small_integer_dtypes():
    ks = np.array([0, 5, 200], dtype=np.uint8)
    expected = [logfactorial(0), logfactorial(5), logfactorial(200)]
    np.testing.assert_array_max_ulp(logfactorial_array(ks), expected, maxulp=2)


def test_array_accuracy(random_arguments, ulp_error):
    ks = np.array(list(range(0, 20001)) + random_arguments, dtype=np.int64)
    values = logfactorial_array(ks)
    for k, value in zip(ks.tolist(), values.tolist()):
        if k <= 1:
            assert value == 0.0
        else:
            assert ulp_error(value, k) <= 2, f"for k={k}"


def test_agrees_with_gammaln():
    from scipy import special

    for k in np.linspace(0, 10 ** 7, 1000).astype(np.int64):
        assert logfactorial(k) == pytest.approx(special.gammaln(k + 1.), rel=1e-13), f"for k={k}"
