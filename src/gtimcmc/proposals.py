"""
Random Walk Proposal in Transformed Space

Independent Gaussian random walk on phi:

    phi_prop[i] ~ N(phi[i], prop_sd[i]^2)

Each coordinate is drawn independently; correlations between parameters
are ignored. The proposal is symmetric, q(phi'|phi) = q(phi|phi'), so the
only correction the acceptance ratio needs is the Jacobian adjustment of
the transform (see transforms.adjustment).

Any callable with the signature

    proposal_fn(key, phi, prop_sd) -> (phi_prop, new_key)

can replace rand_walk_proposal in a Particle, e.g. a covariance-aware
multivariate proposal.
"""

import jax.numpy as jnp
import jax.random as random


def rand_walk_proposal(key, phi, prop_sd):
    """
    Independent random walk proposal centred on the current phi.

    Args:
        key: JAX random key (owned by the caller)
        phi: Current transformed values (d,)
        prop_sd: Per-parameter proposal standard deviations (d,) or scalar.
                 A zero entry leaves that coordinate unchanged.

    Returns:
        phi_prop: Proposed transformed values (d,)
        new_key: Updated random key
    """
    new_key, proposal_key = random.split(key)

    phi = jnp.asarray(phi)
    noise = random.normal(proposal_key, shape=phi.shape, dtype=phi.dtype)
    phi_prop = phi + noise * jnp.asarray(prop_sd, dtype=phi.dtype)

    return phi_prop, new_key
