"""
Particle - per-chain state of a tempered Metropolis-Hastings sampler.

One Particle exists per chain/temperature rung for the duration of a run.
Each iteration the driver calls:

    key = particle.propose_phi(key)      # phi_prop ~ N(phi, prop_sd)
    particle.phi_prop_to_theta_prop()    # theta_prop = inverse(phi_prop)
    ... evaluate loglike_prop / logprior_prop at theta_prop ...
    adj = particle.get_adjustment()      # log-Jacobian correction
    ... accept/reject using beta_raised, loglike, logprior and adj ...
    particle.accept_proposal()           # on accept only

The Particle only reads its ParameterSpace; the space is shared by
reference between all particles of a run.
"""

import numpy as np
import jax.numpy as jnp

import logging

from .param_spec import ParameterSpace
from .proposals import rand_walk_proposal
from .transforms import theta_to_phi, phi_to_theta, adjustment
from .error_handling import ConfigurationError, check_domain, DomainViolation

logger = logging.getLogger('gtimcmc')


class Particle:
    """
    Mutable per-chain state container.

    Attributes:
        space: Shared ParameterSpace (read-only)
        d: Number of parameters
        beta_raised: Thermodynamic power of this chain, raised to GTI_pow
        theta, phi: Current state in natural / transformed space
        theta_prop, phi_prop: Pending proposal (scratch, per iteration)
        prop_sd: Proposal standard deviation per parameter (adapted externally)
        loglike, loglike_prop, logprior, logprior_prop: Written by the driver
        accept: Number of accepted proposals
        adj: Adjustment from the last get_adjustment() call
    """

    def __init__(self, space: ParameterSpace, beta_raised: float, theta_init,
                 prop_sd=0.1, proposal_fn=rand_walk_proposal, debug: bool = False):
        """
        Initialise a particle at theta_init.

        Args:
            space: ParameterSpace shared by the run
            beta_raised: Tempering power applied to the likelihood
            theta_init: Initial natural-space values, length space.d
            prop_sd: Scalar or length-d proposal standard deviations
            proposal_fn: fn(key, phi, prop_sd) -> (phi_prop, new_key)
            debug: Validate theta_prop against the domain after every inverse
                   transform, raising DomainViolation instead of producing a
                   non-finite adjustment

        Raises:
            ConfigurationError: If theta_init has the wrong length or lies
                                outside the domain, or prop_sd is invalid
        """
        self.space = space
        self.d = space.d
        self.beta_raised = float(beta_raised)
        self.proposal_fn = proposal_fn
        self.debug = debug

        theta_init = np.asarray(theta_init, dtype=np.float64)
        if theta_init.shape != (self.d,):
            raise ConfigurationError(
                f"theta_init has shape {theta_init.shape}, expected ({self.d},)"
            )
        try:
            check_domain(space, theta_init, what="theta_init")
        except DomainViolation as e:
            raise ConfigurationError(str(e)) from e

        self.prop_sd = self._validate_prop_sd(prop_sd)

        # theta is the parameter vector in natural space
        self.theta = jnp.asarray(theta_init, dtype=jnp.result_type(float))
        self.theta_prop = jnp.zeros_like(self.theta)

        # phi is the vector of transformed parameters
        self.theta_to_phi()
        self.phi_prop = jnp.zeros_like(self.phi)

        self.adj = 0.0

        # likelihoods and priors
        self.loglike = 0.0
        self.loglike_prop = 0.0
        self.logprior = 0.0
        self.logprior_prop = 0.0

        self.accept = 0

        logger.debug(f"Particle initialised: d={self.d}, beta_raised={self.beta_raised}")

    def _validate_prop_sd(self, prop_sd):
        prop_sd = np.asarray(prop_sd, dtype=np.float64)
        if prop_sd.ndim == 0:
            prop_sd = np.full(self.d, float(prop_sd))
        if prop_sd.shape != (self.d,):
            raise ConfigurationError(
                f"prop_sd has shape {prop_sd.shape}, expected a scalar or ({self.d},)"
            )
        if np.any(prop_sd < 0) or not np.all(np.isfinite(prop_sd)):
            raise ConfigurationError(f"prop_sd must be finite and >= 0, got {prop_sd}")
        return jnp.asarray(prop_sd, dtype=jnp.result_type(float))

    def theta_to_phi(self):
        """Recompute phi from the current theta."""
        self.phi = theta_to_phi(self.space, self.theta)

    def propose_phi(self, key):
        """
        Draw phi_prop around the current phi.

        Args:
            key: JAX random key supplied by the driver

        Returns:
            new_key: The advanced key, to be used for the next draw
        """
        self.phi_prop, new_key = self.proposal_fn(key, self.phi, self.prop_sd)
        return new_key

    def phi_prop_to_theta_prop(self):
        """Map the pending proposal back to natural space."""
        self.theta_prop = phi_to_theta(self.space, self.phi_prop)
        if self.debug:
            check_domain(self.space, np.asarray(self.theta_prop), what="theta_prop")

    def get_adjustment(self) -> float:
        """
        Compute the log-Jacobian adjustment of the pending proposal.

        Stores the value in self.adj and returns it; theta and phi are
        not modified.
        """
        self.adj = float(adjustment(self.space, self.theta, self.theta_prop))
        return self.adj

    def accept_proposal(self):
        """Copy the pending proposal into the current state."""
        self.theta = self.theta_prop
        self.phi = self.phi_prop
        self.loglike = self.loglike_prop
        self.logprior = self.logprior_prop
        self.accept += 1

    def __repr__(self):
        return (f"Particle(d={self.d}, beta_raised={self.beta_raised}, "
                f"loglike={self.loglike}, accept={self.accept})")
