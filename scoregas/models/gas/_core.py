import math

from numba import jit, float64


"""
Numba-accelerated kernels for the conditional densities of score-driven models.

The filtering loop in :mod:`scoregas.models.gas.base` calls these scalar
kernels once per observation. They evaluate the log-density of an observation
given the time-varying log-scale and the score of that log-density with
respect to the log-scale.

Both supported densities depend on the observation only through

    x = |y|^upsilon * exp(-upsilon * lam) / nu

which is handled in log space, ``z = log(x)``, so that extreme log-scales do
not overflow. The Student's t density is the ``upsilon = 2`` member of the
generalized t family.
"""


@jit(float64(float64), nopython=True, cache=True)
def log1p_exp(z):
    """Compute log(1 + exp(z)) without overflow.

    Args:
        z: Argument

    Returns:
        float: log(1 + exp(z))
    """
    if z > 0.0:
        return z + math.log1p(math.exp(-z))
    return math.log1p(math.exp(z))


@jit(float64(float64), nopython=True, cache=True)
def logistic(z):
    """Compute exp(z) / (1 + exp(z)) without overflow.

    Args:
        z: Argument

    Returns:
        float: Logistic function of z, in [0, 1]
    """
    if z >= 0.0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


@jit(float64(float64, float64, float64, float64), nopython=True, cache=True)
def log_scaled_ratio(y, lam, nu, upsilon):
    """Compute log(|y|^upsilon * exp(-upsilon * lam) / nu) for y != 0.

    Args:
        y: Observation (must be non-zero)
        lam: Log-scale
        nu: Tail parameter
        upsilon: Power parameter

    Returns:
        float: Logarithm of the scaled ratio
    """
    return upsilon * (math.log(abs(y)) - lam) - math.log(nu)


@jit(float64(float64, float64, float64), nopython=True, cache=True)
def beta_t_log_density(y, lam, nu):
    """Log-density of y = exp(lam) * eps with eps ~ Student's t(nu).

    log f = lnG((nu+1)/2) - lnG(nu/2) - log(pi*nu)/2 - lam
            - (nu+1)/2 * log(1 + y^2 exp(-2 lam) / nu)

    Args:
        y: Observation
        lam: Log-scale
        nu: Degrees of freedom

    Returns:
        float: Log-density
    """
    const = math.lgamma(0.5 * (nu + 1.0)) - math.lgamma(0.5 * nu) - 0.5 * math.log(math.pi * nu)
    if y == 0.0:
        return const - lam
    return const - lam - 0.5 * (nu + 1.0) * log1p_exp(log_scaled_ratio(y, lam, nu, 2.0))


@jit(float64(float64, float64, float64), nopython=True, cache=True)
def beta_t_score(y, lam, nu):
    """Score of the Student's t log-density with respect to the log-scale.

    u = (nu+1) y^2 / (nu exp(2 lam) + y^2) - 1, bounded in [-1, nu].

    Args:
        y: Observation
        lam: Log-scale
        nu: Degrees of freedom

    Returns:
        float: Score
    """
    if y == 0.0:
        return -1.0
    return (nu + 1.0) * logistic(log_scaled_ratio(y, lam, nu, 2.0)) - 1.0


@jit(float64(float64, float64, float64, float64), nopython=True, cache=True)
def gen_t_log_density(y, lam, nu, upsilon):
    """Log-density of y = exp(lam) * eps with eps ~ generalized t(nu, upsilon).

    log f = log(upsilon) - log(2) - log(nu)/upsilon - lnB(1/upsilon, nu/upsilon)
            - lam - (nu+1)/upsilon * log(1 + |y|^upsilon exp(-upsilon lam) / nu)

    Args:
        y: Observation
        lam: Log-scale
        nu: Tail parameter
        upsilon: Power parameter

    Returns:
        float: Log-density
    """
    a = 1.0 / upsilon
    b = nu / upsilon
    log_beta = math.lgamma(a) + math.lgamma(b) - math.lgamma(a + b)
    const = math.log(upsilon) - math.log(2.0) - math.log(nu) / upsilon - log_beta
    if y == 0.0:
        return const - lam
    return const - lam - (nu + 1.0) / upsilon * log1p_exp(log_scaled_ratio(y, lam, nu, upsilon))


@jit(float64(float64, float64, float64, float64), nopython=True, cache=True)
def gen_t_score(y, lam, nu, upsilon):
    """Score of the generalized t log-density with respect to the log-scale.

    u = (nu+1) * x / (1 + x) - 1 with x = |y|^upsilon exp(-upsilon lam) / nu.

    Args:
        y: Observation
        lam: Log-scale
        nu: Tail parameter
        upsilon: Power parameter

    Returns:
        float: Score
    """
    if y == 0.0:
        return -1.0
    return (nu + 1.0) * logistic(log_scaled_ratio(y, lam, nu, upsilon)) - 1.0
