import math
import operator
import logging
logger = logging.getLogger(__name__)

from ..special.logfactorial import logfactorial

__all__ = ['log_binomial', 'log_multinomial']


def log_binomial(n, k):
    """
    Log of the binomial coefficient, log(n choose k) = log(n!) - log(k!) - log((n-k)!).

    :param n:       number of trials
    :param k:       number of successes
    :return:        log(n choose k); -inf when k lies outside {0,...,n}, NaN when n is negative
    """
    n, k = operator.index(n), operator.index(k)
    if n >= 0 and (k < 0 or k > n):
        logger.debug('log_binomial(): k={0} outside support of n={1}, setting coefficient to zero'.format(k, n))
        return -math.inf
    return logfactorial(n) - logfactorial(k) - logfactorial(n - k)


def log_multinomial(counts):
    """
    Log of the multinomial coefficient, log((sum_i n_i)! / prod_i n_i!).

    :param counts:  the category counts n_i
        :type       iterable of int
    :return:        the log coefficient, NaN if any count is negative
    """
    counts = [operator.index(c) for c in counts]
    return logfactorial(sum(counts)) - math.fsum(logfactorial(c) for c in counts)
