import logging, sys
import mpmath

import LogFactorial


def logfactorial_reference(k, dps=50):
    """
    log(k!) to dps significant digits, rounded once to the nearest double.
    """
    with mpmath.workdps(dps):
        return float(mpmath.loggamma(mpmath.mpf(k) + 1))


def make_table(kmax):
    return [logfactorial_reference(k) for k in range(kmax + 1)]


def check_table(table):
    """
    Compare a freshly computed table against the one shipped with the package, logging any entry that differs.
    """
    mismatches = 0
    for k, value in enumerate(table):
        if k > LogFactorial.special.lookup_table.TABLE_MAX:
            break
        shipped = LogFactorial.special.lookup_table.LOGFACT_TABLE[k]
        if shipped != value:
            logging.warning('log({0}!) differs: shipped {1!r}, reference {2!r}'.format(k, shipped, value))
            mismatches += 1
    logging.info('{0} mismatching table entries'.format(mismatches))
    return mismatches


if __name__ == "__main__":
    """
    Print the lookup table as Python source, e.g. `python regenerate_table.py 125 > table.txt`
    """
    logging.basicConfig(format='%(asctime)s: %(levelname)s: %(module)s: %(message)s', datefmt='%m/%d/%Y %I:%M:%S %p',
                        level=logging.INFO)

    kmax = int(sys.argv[1]) if len(sys.argv) > 1 else LogFactorial.special.lookup_table.TABLE_MAX
    table = make_table(kmax)
    check_table(table)

    print('LOGFACT_TABLE = (')
    for value in table:
        print('    {0!r},'.format(value))
    print(')')
