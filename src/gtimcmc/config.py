"""
Run Configuration and Initialization.

This module turns a plain run configuration dict into the immutable objects
the particle kernel consumes:
- clean_config: Fill defaults
- load_system: Validate and build a System (parameter space, initial values,
  run settings)
- configure_precision: Select JAX float precision
- make_beta_raised: Thermodynamic powers of the temperature rungs
- init_particles: One Particle per rung, sharing the System's ParameterSpace

All config keys use lowercase with underscores (e.g. 'theta_init', 'gti_pow').

Example:
    system = load_system({
        'theta_init': [0.0, 1.0, 0.5],
        'theta_min': [-np.inf, 0.0, 0.0],
        'theta_max': [np.inf, np.inf, 1.0],
        'rungs': 10,
        'gti_pow': 3.0,
    })
    particles = init_particles(system)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

import jax
import jax.numpy as jnp
import numpy as np

import logging

from .param_spec import ParameterSpace, TransformKind
from .particle import Particle
from .error_handling import (
    ConfigurationError,
    DomainViolation,
    check_domain,
    validate_run_config,
)

logger = logging.getLogger('gtimcmc')


@dataclass(frozen=True)
class System:
    """
    Immutable run-scoped configuration.

    Built once at run start by load_system and shared by every particle.
    """
    space: ParameterSpace
    theta_init: Tuple[float, ...]
    x: np.ndarray = field(default_factory=lambda: np.zeros(0), compare=False)
    burnin: Tuple[int, ...] = (1000,)
    samples: int = 1000
    rungs: int = 1
    gti_pow: float = 1.0
    chain: int = 1
    prop_sd: Union[float, Tuple[float, ...]] = 0.1
    silent: bool = False

    @property
    def d(self) -> int:
        return self.space.d

    @property
    def burnin_phases(self) -> int:
        return len(self.burnin)


def clean_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Cleans the config dict and sets defaults.

    Missing bounds default to unbounded; a missing 'trans_type' is inferred
    from which bounds are finite. A scalar 'burnin' becomes a single phase.
    """
    config = dict(config)

    config.setdefault('x', [])
    config.setdefault('rungs', 1)
    config.setdefault('gti_pow', 1.0)
    config.setdefault('samples', 1000)
    config.setdefault('burnin', [1000])
    config.setdefault('chain', 1)
    config.setdefault('prop_sd', 0.1)
    config.setdefault('use_double', True)
    config.setdefault('silent', False)

    if np.ndim(config['burnin']) == 0:
        config['burnin'] = [config['burnin']]

    # Malformed (non-sequence) values are left for validate_run_config to report
    if 'theta_init' in config and np.ndim(config['theta_init']) == 1:
        d = len(config['theta_init'])
        config.setdefault('theta_min', [-np.inf] * d)
        config.setdefault('theta_max', [np.inf] * d)
        bounds_ok = np.ndim(config['theta_min']) == 1 and np.ndim(config['theta_max']) == 1
        if ('trans_type' not in config and bounds_ok
                and len(config['theta_min']) == len(config['theta_max'])):
            config['trans_type'] = [
                int(TransformKind.from_bounds(lo, hi))
                for lo, hi in zip(config['theta_min'], config['theta_max'])
            ]

    return config


def configure_precision(use_double: bool = True):
    """
    Configure JAX precision.

    Returns:
        The JAX float dtype in effect
    """
    if use_double:
        jax.config.update("jax_enable_x64", True)
        return jnp.float64
    jax.config.update("jax_enable_x64", False)
    return jnp.float32


def load_system(config: Dict[str, Any]) -> System:
    """
    Validate a run configuration and build the System.

    Args:
        config: Configuration dict; see clean_config for defaults

    Returns:
        System

    Raises:
        ConfigurationError: If the configuration is invalid, listing every
                            problem found
    """
    config = clean_config(config)
    validate_run_config(config)

    configure_precision(config['use_double'])

    names = config.get('param_names')
    space = ParameterSpace.from_arrays(
        config['trans_type'], config['theta_min'], config['theta_max'], names=names
    )

    try:
        check_domain(space, config['theta_init'], what="theta_init")
    except DomainViolation as e:
        raise ConfigurationError(str(e)) from e

    prop_sd = config['prop_sd']
    prop_sd = float(prop_sd) if np.ndim(prop_sd) == 0 else tuple(float(s) for s in prop_sd)

    system = System(
        space=space,
        theta_init=tuple(float(t) for t in config['theta_init']),
        x=np.asarray(config['x'], dtype=np.float64),
        burnin=tuple(int(b) for b in config['burnin']),
        samples=int(config['samples']),
        rungs=int(config['rungs']),
        gti_pow=float(config['gti_pow']),
        chain=int(config['chain']),
        prop_sd=prop_sd,
        silent=bool(config['silent']),
    )

    if not system.silent:
        logger.info(
            f"Loaded system: d={system.d}, rungs={system.rungs}, "
            f"GTI_pow={system.gti_pow}, samples={system.samples}, "
            f"burnin phases={system.burnin_phases}"
        )
        for name, p in zip(space.names, space.params):
            logger.info(f"  {name}: {p.kind} ({p.lower}, {p.upper})")

    return system


def make_beta_raised(rungs: int, gti_pow: float) -> List[float]:
    """
    Thermodynamic powers of the rungs, raised to gti_pow.

    Rungs are evenly spaced in [0, 1] before raising; a single rung is the
    untempered posterior (beta = 1).

    Example:
        make_beta_raised(3, 2.0)  # [0.0, 0.25, 1.0]
    """
    if rungs < 1:
        raise ConfigurationError(f"rungs must be >= 1, got {rungs}")
    if not np.isfinite(gti_pow) or gti_pow <= 0:
        raise ConfigurationError(f"gti_pow must be finite and > 0, got {gti_pow}")
    if rungs == 1:
        return [1.0]
    beta = np.arange(rungs) / (rungs - 1)
    return [float(b) for b in beta ** gti_pow]


def init_particles(system: System) -> List[Particle]:
    """Create one Particle per rung, all sharing system.space."""
    beta_raised = make_beta_raised(system.rungs, system.gti_pow)
    logger.debug(f"beta_raised ladder: {beta_raised}")

    return [
        Particle(system.space, b, system.theta_init, prop_sd=system.prop_sd)
        for b in beta_raised
    ]
