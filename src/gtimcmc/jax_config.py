"""
JAX Configuration - MUST be imported before any JAX imports.

This module sets environment variable defaults for JAX:
- Double precision, needed for transforms to round-trip near the bounds
- Quieter XLA C++ logging

Both are defaults only; values already set in the environment win. Use
config.configure_precision to change precision after JAX is loaded.
"""
import os

os.environ.setdefault("JAX_ENABLE_X64", "True")

# Suppress CUDA/XLA C++ warnings
os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "2")
