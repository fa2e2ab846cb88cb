"""
Parameter Transforms between Natural Space (theta) and Sampling Space (phi)

Each TransformKind has one Transform implementation providing:
    forward(theta, lo, hi)       -> phi
    inverse(phi, lo, hi)         -> theta
    log_jacobian(theta, lo, hi)  -> log |d theta / d phi|

The three must stay mutually consistent: the Metropolis acceptance ratio is
only correct if log_jacobian is the derivative of inverse, and inverse is the
exact inverse of forward.

Vectorised entry points apply the transforms to a full parameter vector,
grouping indices by kind (the grouping is static per ParameterSpace, so the
kernels are jitted with the space as a static argument):
    theta_to_phi(space, theta)
    phi_to_theta(space, phi)
    log_jacobian(space, theta)
    adjustment(space, theta, theta_prop)

To add a new transform:
1. Add enum value to TransformKind in param_spec.py
2. Implement a Transform subclass here
3. Add it to TRANSFORM_REGISTRY
"""

import jax
import jax.numpy as jnp
from functools import partial

from .param_spec import TransformKind
from .error_handling import ConfigurationError


class Transform:
    """
    Base class for a scalar bijection applied elementwise.

    lo/hi are the bounds of the parameters being transformed; transforms
    ignore the bounds they do not use.
    """
    kind = None

    def forward(self, theta, lo, hi):
        raise NotImplementedError

    def inverse(self, phi, lo, hi):
        raise NotImplementedError

    def log_jacobian(self, theta, lo, hi):
        raise NotImplementedError


class IdentityTransform(Transform):
    """phi = theta. Exact in both directions."""
    kind = TransformKind.IDENTITY

    def forward(self, theta, lo, hi):
        return theta

    def inverse(self, phi, lo, hi):
        return phi

    def log_jacobian(self, theta, lo, hi):
        return jnp.zeros_like(theta)


class UpperBoundedTransform(Transform):
    """
    phi = log(max - theta), theta = max - exp(phi).

    d theta / d phi = -(max - theta), so log|J| = log(max - theta).
    """
    kind = TransformKind.UPPER_BOUNDED

    def forward(self, theta, lo, hi):
        return jnp.log(hi - theta)

    def inverse(self, phi, lo, hi):
        return hi - jnp.exp(phi)

    def log_jacobian(self, theta, lo, hi):
        return jnp.log(hi - theta)


class LowerBoundedTransform(Transform):
    """
    phi = log(theta - min), theta = exp(phi) + min.

    d theta / d phi = theta - min.
    """
    kind = TransformKind.LOWER_BOUNDED

    def forward(self, theta, lo, hi):
        return jnp.log(theta - lo)

    def inverse(self, phi, lo, hi):
        return jnp.exp(phi) + lo

    def log_jacobian(self, theta, lo, hi):
        return jnp.log(theta - lo)


class DoubleBoundedTransform(Transform):
    """
    phi = log(theta - min) - log(max - theta).

    The inverse (max * exp(phi) + min) / (1 + exp(phi)) is evaluated with
    exp(-|phi|) so it cannot overflow; for phi > 0 numerator and denominator
    are divided by exp(phi). The result is clipped to [min, max], so extreme
    proposals land on the bound rather than past it.

    d theta / d phi = (theta - min)(max - theta) / (max - min).
    """
    kind = TransformKind.DOUBLE_BOUNDED

    def forward(self, theta, lo, hi):
        return jnp.log(theta - lo) - jnp.log(hi - theta)

    def inverse(self, phi, lo, hi):
        e = jnp.exp(-jnp.abs(phi))
        pos = (hi + lo * e) / (1.0 + e)
        neg = (hi * e + lo) / (1.0 + e)
        return jnp.clip(jnp.where(phi > 0, pos, neg), lo, hi)

    def log_jacobian(self, theta, lo, hi):
        return jnp.log(theta - lo) + jnp.log(hi - theta) - jnp.log(hi - lo)


# Map from TransformKind value to its implementation
TRANSFORM_REGISTRY = {
    int(TransformKind.IDENTITY): IdentityTransform(),
    int(TransformKind.UPPER_BOUNDED): UpperBoundedTransform(),
    int(TransformKind.LOWER_BOUNDED): LowerBoundedTransform(),
    int(TransformKind.DOUBLE_BOUNDED): DoubleBoundedTransform(),
}


def get_transform(kind) -> Transform:
    """
    Look up the Transform for a kind.

    Raises:
        ConfigurationError: If no transform is registered for the kind
    """
    kind = TransformKind.coerce(kind)
    try:
        return TRANSFORM_REGISTRY[int(kind)]
    except KeyError:
        raise ConfigurationError(f"No transform registered for {kind}") from None


def _as_float_array(values):
    return jnp.asarray(values, dtype=jnp.result_type(float))


def _apply_by_kind(space, values, method, fill_with_input):
    """
    Apply Transform.<method> to each group of same-kind parameters.

    Index groups come from the static space, so each group is a fixed-size
    gather/scatter under jit.
    """
    values = _as_float_array(values)
    if values.shape != (space.d,):
        raise ConfigurationError(
            f"Expected a vector of length {space.d}, got shape {values.shape}"
        )
    out = values if fill_with_input else jnp.zeros_like(values)
    mins = jnp.asarray(space.mins, dtype=values.dtype)
    maxs = jnp.asarray(space.maxs, dtype=values.dtype)

    for kind in sorted(set(int(k) for k in space.kinds)):
        transform = get_transform(kind)
        if transform.kind == TransformKind.IDENTITY and method != 'log_jacobian':
            # values are already in place
            continue
        idx = space.indices_of(kind)
        result = getattr(transform, method)(values[idx], mins[idx], maxs[idx])
        out = out.at[idx].set(result)

    return out


@partial(jax.jit, static_argnums=0)
def theta_to_phi(space, theta):
    """
    Forward transform theta -> phi for every parameter.

    Values on or beyond a bound give non-finite phi; staying inside the
    domain is the caller's responsibility (see error_handling.check_domain).
    """
    return _apply_by_kind(space, theta, 'forward', fill_with_input=True)


@partial(jax.jit, static_argnums=0)
def phi_to_theta(space, phi):
    """Inverse transform phi -> theta for every parameter."""
    return _apply_by_kind(space, phi, 'inverse', fill_with_input=True)


@partial(jax.jit, static_argnums=0)
def log_jacobian(space, theta):
    """Per-parameter log |d theta / d phi| evaluated at theta."""
    return _apply_by_kind(space, theta, 'log_jacobian', fill_with_input=False)


@partial(jax.jit, static_argnums=0)
def adjustment(space, theta, theta_prop):
    """
    Log-Jacobian correction for a proposal made in phi space.

    A symmetric random walk in phi targets pi(theta) only if the
    log-acceptance ratio includes

        sum_i log|J_i(theta_prop)| - log|J_i(theta)|

    The per-parameter differences are formed before summing, so swapping
    theta and theta_prop negates the result exactly, and an identity-only
    space always gives exactly 0.
    """
    diff = log_jacobian(space, theta_prop) - log_jacobian(space, theta)
    return jnp.sum(diff)
