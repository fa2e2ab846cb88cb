"""
gtimcmc - Reparameterised Particle Kernel for Tempered MCMC

Public API:
    Parameter space:
        TransformKind - IntEnum of per-parameter transforms (IDENTITY, UPPER_BOUNDED, ...)
        ParamSpec - Kind and bounds of one parameter
        ParameterSpace - Immutable ordered collection of ParamSpecs

    Transforms:
        theta_to_phi - Natural space -> unconstrained sampling space
        phi_to_theta - Unconstrained sampling space -> natural space
        log_jacobian - Per-parameter log |d theta / d phi|
        adjustment - Log-Jacobian correction for the acceptance ratio

    Particle:
        Particle - Per-chain state: propose_phi, phi_prop_to_theta_prop, get_adjustment
        rand_walk_proposal - Independent Gaussian random walk in phi space

    Configuration:
        load_system - Validate a run config dict and build a System
        init_particles - One Particle per temperature rung
        make_beta_raised - Thermodynamic powers of the rungs

    Errors:
        ConfigurationError - Invalid configuration (fatal)
        DomainViolation - Value outside its parameter domain (caller bug)

Example:
    import jax
    from gtimcmc import load_system, init_particles

    system = load_system({
        'theta_init': [0.5, 2.0],
        'theta_min': [0.0, 0.0],
        'theta_max': [1.0, float('inf')],
        'rungs': 4,
    })
    particles = init_particles(system)

    key = jax.random.PRNGKey(0)
    p = particles[-1]
    key = p.propose_phi(key)
    p.phi_prop_to_theta_prop()
    # ... evaluate p.loglike_prop and p.logprior_prop at p.theta_prop ...
    adj = p.get_adjustment()
"""
# CRITICAL: Import jax_config FIRST to set environment variables before JAX loads
from . import jax_config  # noqa: F401

from .param_spec import TransformKind, ParamSpec, ParameterSpace
from .transforms import (
    TRANSFORM_REGISTRY,
    get_transform,
    theta_to_phi,
    phi_to_theta,
    log_jacobian,
    adjustment,
)
from .proposals import rand_walk_proposal
from .particle import Particle
from .config import (
    System,
    clean_config,
    configure_precision,
    load_system,
    make_beta_raised,
    init_particles,
)
from .error_handling import (
    ConfigurationError,
    DomainViolation,
    check_domain,
    validate_run_config,
)

__all__ = [
    # Parameter space
    'TransformKind',
    'ParamSpec',
    'ParameterSpace',
    # Transforms
    'TRANSFORM_REGISTRY',
    'get_transform',
    'theta_to_phi',
    'phi_to_theta',
    'log_jacobian',
    'adjustment',
    # Particle
    'Particle',
    'rand_walk_proposal',
    # Configuration
    'System',
    'clean_config',
    'configure_precision',
    'load_system',
    'make_beta_raised',
    'init_particles',
    # Errors
    'ConfigurationError',
    'DomainViolation',
    'check_domain',
    'validate_run_config',
]
