"""
Error Handling and Validation Utilities for the Particle Kernel

This module defines the two failure classes of the package and the
validation helpers that raise them:

- ConfigurationError: the run cannot proceed (bad transform code, bad
  bounds, mismatched lengths). Raised at construction time.
- DomainViolation: a natural-space value lies outside the domain implied by
  its transform kind. This is a caller bug, not a data error; it is only
  checked where validation is requested.
"""

from typing import Any, Dict

import numpy as np

import logging
logger = logging.getLogger('gtimcmc')


class ConfigurationError(ValueError):
    """Invalid run configuration or parameter space. Fatal."""


class DomainViolation(ValueError):
    """A theta value lies outside the open domain of its transform kind."""


def check_domain(space, theta, what: str = "theta") -> None:
    """
    Raise DomainViolation if any entry of theta is outside its domain.

    Args:
        space: ParameterSpace describing kinds and bounds
        theta: Natural-space values, length space.d
        what: Name used in the error message (e.g. 'theta_prop')

    Raises:
        DomainViolation: listing every offending index
    """
    theta = np.asarray(theta, dtype=np.float64)
    inside = space.contains(theta)
    if np.all(inside):
        return

    bad = np.flatnonzero(~inside)
    lines = [
        f"{space.names[i]} (index {i}, {space.kind(i)}): {what}={theta[i]!r} "
        f"not in ({space.min_bound(i)}, {space.max_bound(i)})"
        for i in bad
    ]
    msg = f"{what} outside parameter domain:\n  " + "\n  ".join(lines)
    logger.error(msg)
    raise DomainViolation(msg)


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validates that a cleaned run configuration is sensible.

    All problems are collected and reported together.

    Args:
        config: Configuration dictionary (after clean_config)

    Raises:
        ConfigurationError: If configuration is invalid
    """
    errors = []

    # Per-parameter keys must be flat sequences
    vector_keys = [k for k in ('theta_init', 'theta_min', 'theta_max', 'trans_type', 'burnin')
                   if k in config]
    not_vectors = {k for k in vector_keys if np.ndim(config[k]) != 1}
    for key in sorted(not_vectors):
        errors.append(f"{key} must be a 1-d sequence, got {config[key]!r}")

    if 'theta_init' not in config:
        errors.append("Missing required config key: 'theta_init'")
    elif 'theta_init' not in not_vectors:
        d = len(config['theta_init'])
        if d < 1:
            errors.append("theta_init must contain at least one parameter")
        for key in ('theta_min', 'theta_max', 'trans_type'):
            if key in config and key not in not_vectors and len(config[key]) != d:
                errors.append(
                    f"{key} has length {len(config[key])}, expected {d} (length of theta_init)"
                )

    for key in ('rungs', 'samples', 'chain'):
        if key in config and config[key] < 1:
            errors.append(f"{key} must be >= 1")

    if 'burnin' in config and 'burnin' not in not_vectors:
        if any(b < 0 for b in config['burnin']):
            errors.append("burnin phases must be >= 0")

    # gti_pow = 0 would make every rung beta = 1 (0 ** 0 == 1)
    if 'gti_pow' in config:
        if not np.isfinite(config['gti_pow']) or config['gti_pow'] <= 0:
            errors.append(f"gti_pow must be finite and > 0, got {config['gti_pow']}")

    if 'prop_sd' in config:
        prop_sd = np.atleast_1d(np.asarray(config['prop_sd'], dtype=np.float64))
        if np.any(prop_sd < 0) or not np.all(np.isfinite(prop_sd)):
            errors.append("prop_sd must be finite and >= 0")

    if errors:
        raise ConfigurationError("Invalid run configuration:\n  " + "\n  ".join(errors))
