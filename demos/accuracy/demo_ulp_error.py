import logging, os, sys
import numpy as np
import mpmath
from scipy.special import gammaln

import LogFactorial


def ulp_error(values, ks, dps=50):
    """
    Error of each value in units of the last place of the correctly rounded log(k!).
    """
    errors = np.zeros(len(ks))
    with mpmath.workdps(dps):
        for i, (value, k) in enumerate(zip(values, ks)):
            exact = mpmath.loggamma(mpmath.mpf(int(k)) + 1)
            errors[i] = float(abs(mpmath.mpf(value) - exact)) / np.spacing(float(exact))
    return errors


def demo_ulp_error(kmin, kmax, points=500):
    """
    Evaluate log(k!) on a log-spaced grid and measure ULP error for our evaluation and for scipy's gammaln(k+1).
    """
    ks = np.unique(np.geomspace(kmin, kmax, points).astype(np.int64))

    ours = LogFactorial.logfactorial_array(ks)
    scalar = np.array([LogFactorial.logfactorial(int(k)) for k in ks])
    np.testing.assert_array_max_ulp(ours, scalar, maxulp=2)

    err_ours = ulp_error(ours, ks)
    err_scipy = ulp_error(gammaln(ks + 1.), ks)

    logging.info('max ULP error: logfactorial {0:.3f}, gammaln {1:.3f}'.format(np.max(err_ours), np.max(err_scipy)))
    above = ks[err_ours > 2]
    if len(above) > 0:
        logging.warning('{0} arguments above 2 ULP, first k={1}'.format(len(above), above[0]))

    return ks, err_ours, err_scipy


def plot_ulp_error(ks, err_ours, err_scipy, path=None):
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError('cannot import matplotlib')

    fig = plt.figure()
    ax = plt.subplot(111)
    ax.semilogx(ks, err_ours, 'k.', label='logfactorial')
    ax.semilogx(ks, err_scipy, 'r.', alpha=0.4, label='gammaln(k+1)')
    ax.axhline(2, color='b', linestyle='--', label='2 ULP')
    ax.axvline(LogFactorial.special.lookup_table.TABLE_MAX, color='g', linestyle=':', label='table bound')
    plt.xlabel('k')
    plt.ylabel('error (ULP)')
    ax.legend(loc='upper left')
    plt.title('log(k!) error against a {0} digit reference'.format(50))
    if path is not None:
        plt.savefig(os.path.join(path, 'ulp_error.png'))
    else:
        plt.show()


if __name__ == "__main__":
    """
    Demo of the accuracy of both evaluation paths, e.g. `python demo_ulp_error.py 1 1000000000 [save_dir]`
    """
    logging.basicConfig(format='%(asctime)s: %(levelname)s: %(module)s: %(message)s', datefmt='%m/%d/%Y %I:%M:%S %p',
                        level=logging.INFO)

    kmin = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    kmax = int(sys.argv[2]) if len(sys.argv) > 2 else 10 ** 9
    path = sys.argv[3] if len(sys.argv) > 3 else None

    ks, err_ours, err_scipy = demo_ulp_error(kmin, kmax)
    plot_ulp_error(ks, err_ours, err_scipy, path=path)
