"""
Natural logarithm of k factorial.

Small arguments are read from a table of correctly rounded values, larger ones use Stirling's series, so log(k!) is
available in O(1) long after k! itself has overflowed a double. A negative argument is a domain error and gives NaN,
which propagates through any log-probability built from it.
"""
import math
import operator
import numpy as np
import logging
logger = logging.getLogger(__name__)

from .lookup_table import TABLE_MAX, LOGFACT_ARRAY, table_lookup
from .stirling import stirling_logfactorial

__all__ = ['logfactorial', 'logfactorial_array']


def logfactorial(k):
    """
    Compute log(k!).

    :param k:       non-negative integer (anything implementing __index__)
    :return:        log(k!) as a float, NaN if k is negative
    """
    k = operator.index(k)
    if k < 0:
        return math.nan
    if k <= TABLE_MAX:
        return table_lookup(k)
    return stirling_logfactorial(k)


def logfactorial_array(k):
    """
    Element-wise log(k!) over an array of integers.

    :param k:       integers
        :type       array_like of int, any integer dtype that casts safely to int64
    :return:        log(k!) of the same shape, NaN where k is negative
        :type       float64 ndarray
    """
    k = np.asarray(k)
    if not np.issubdtype(k.dtype, np.integer):
        raise TypeError('logfactorial_array(): integer input required, got dtype {0}'.format(k.dtype))
    k = k.astype(np.int64, casting='safe', copy=False)

    out = np.full(k.shape, np.nan)

    small = (k >= 0) & (k <= TABLE_MAX)
    out[small] = LOGFACT_ARRAY[k[small]]

    large = k > TABLE_MAX
    if np.any(large):
        out[large] = stirling_logfactorial(k[large])

    if np.any(k < 0):
        logger.debug('logfactorial_array(): {0} negative arguments, returning NaN there'.format(np.sum(k < 0)))

    return out
