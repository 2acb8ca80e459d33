"""
Stirling's asymptotic expansion of log(k!) for arguments beyond the lookup table.

    log(k!) ~ (k + 1/2) log(k) - k + log(2 pi)/2 + sum_i c_i / k^(2i - 1)

With four correction terms the truncation error for k > 125 is far below double precision. The leading part
(k + 1/2) log(k) - k multiplies any error in log(k) by k, so it is carried in double-double arithmetic (an unevaluated
sum hi + lo of two floats) and rounded once at the end, keeping the result within 2 ULP of the true value.
"""
import math
import numpy as np

__all__ = ['STIRLING_COEFFICIENTS', 'HALF_LN_2PI', 'stirling_series', 'stirling_logfactorial']

# B_2i / (2i (2i - 1))
STIRLING_COEFFICIENTS = (1 / 12, -1 / 360, 1 / 1260, -1 / 1680)

HALF_LN_2PI = 0.91893853320467274178                # log(2 pi) / 2

# log(2) = LN2_HI + LN2_LO, LN2_HI has 21 trailing zero bits so e * LN2_HI is exact
LN2_HI = 6.93147180369123816490e-01
LN2_LO = 1.90821492927058770002e-10
SQRT_HALF = 0.70710678118654752440
_SPLITTER = 134217729.0                             # 2^27 + 1


def _two_sum(a, b):
    """ s + e == a + b exactly """
    s = a + b
    bb = s - a
    return s, (a - (s - bb)) + (b - bb)


def _split(a):
    c = _SPLITTER * a
    hi = c - (c - a)
    return hi, a - hi


def _two_prod(a, b):
    """ p + e == a * b exactly """
    p = a * b
    ah, al = _split(a)
    bh, bl = _split(b)
    return p, ((ah * bh - p) + ah * bl + al * bh) + al * bl


def stirling_series(x):
    """
    Sum of the correction terms c_1/x + c_2/x^3 + ..., evaluated by Horner's rule in 1/x^2.
    Works element-wise when x is a float64 ndarray.
    """
    r = 1.0 / (x * x)
    s = STIRLING_COEFFICIENTS[-1]
    for c in reversed(STIRLING_COEFFICIENTS[:-1]):
        s = c + r * s
    return s / x


def stirling_logfactorial(k):
    """
    Approximate log(k!) for k beyond the lookup table. The factorial itself is never formed.

    :param k:       positive integer(s) larger than TABLE_MAX
        :type       int, or int64 ndarray for element-wise evaluation
    :return:        log(k!) to within 2 ULP
        :type       float, or float64 ndarray
    """
    if isinstance(k, np.ndarray):
        frexp, ldexp, log, expm1 = np.frexp, np.ldexp, np.log, np.expm1
        x = k.astype(np.float64)
        # k - x is exact in 64-bit unsigned arithmetic, x never exceeds 2^63
        dk = (k.astype(np.uint64) - x.astype(np.uint64)).view(np.int64).astype(np.float64)
    else:
        frexp, ldexp, log, expm1 = math.frexp, math.ldexp, math.log, math.expm1
        x = float(k)
        dk = float(k - int(x))
        if math.isinf(x * math.log(x)):
            return math.inf

    # x = m * 2^e with m in [sqrt(1/2), sqrt(2))
    m, e = frexp(x)
    low = m < SQRT_HALF
    m = m + m * low
    e = e - low

    # log(x) = lh + ll; one Newton step through expm1 recovers the rounding error of log(m)
    lm = log(m)
    em = expm1(lm)
    delta = ((m - 1.0) - em) / (1.0 + em)
    lh, ll = _two_sum(e * LN2_HI, lm)
    lh, ll = _two_sum(lh, ll + (e * LN2_LO + delta))

    # x * log(x), exact in lh then scaled by 2^e
    ph, pl = _two_prod(m, lh)
    ph, pl = ldexp(ph, e), ldexp(pl, e)
    pl = pl + x * ll + dk * lh

    hi, lo = _two_sum(ph, -x)
    lo = lo + pl
    hi, lo2 = _two_sum(hi, 0.5 * lh)
    # correction series is the smallest term, add it last
    return hi + (lo + lo2 + (0.5 * ll + HALF_LN_2PI + stirling_series(x)))
