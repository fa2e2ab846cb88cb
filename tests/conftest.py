"""
Pytest configuration and shared fixtures for gtimcmc tests.
"""

import pytest
import numpy as np
import jax

jax.config.update("jax_enable_x64", True)

from gtimcmc.param_spec import ParamSpec, ParameterSpace, TransformKind


@pytest.fixture
def rng_seed():
    """Default RNG seed for reproducible tests."""
    return 42


@pytest.fixture
def key(rng_seed):
    return jax.random.PRNGKey(rng_seed)


@pytest.fixture
def mixed_space():
    """One parameter of every transform kind."""
    return ParameterSpace((
        ParamSpec(TransformKind.IDENTITY, name='mu'),
        ParamSpec(TransformKind.UPPER_BOUNDED, max_bound=10.0, name='upper'),
        ParamSpec(TransformKind.LOWER_BOUNDED, min_bound=0.0, name='sigma'),
        ParamSpec(TransformKind.DOUBLE_BOUNDED, min_bound=0.0, max_bound=1.0, name='p'),
    ))


@pytest.fixture
def mixed_theta():
    """Valid theta for mixed_space."""
    return np.array([-1.5, 5.0, 2.0, 0.25])


@pytest.fixture
def identity_space():
    return ParameterSpace.from_arrays([0, 0, 0], [-np.inf] * 3, [np.inf] * 3)


@pytest.fixture
def basic_run_config():
    """Run configuration for config tests."""
    return {
        'theta_init': [0.0, 5.0, 2.0, 0.25],
        'theta_min': [-np.inf, -np.inf, 0.0, 0.0],
        'theta_max': [np.inf, 10.0, np.inf, 1.0],
        'rungs': 4,
        'gti_pow': 2.0,
        'samples': 100,
        'burnin': [50, 50],
        'silent': True,
    }


def single_param_space(kind, min_bound=-np.inf, max_bound=np.inf):
    """ParameterSpace with one parameter."""
    return ParameterSpace((ParamSpec(kind, min_bound=min_bound, max_bound=max_bound),))
