"""Complex <-> parallel real/imag arrays at the split-array call boundary.

Pure JAX implementations compatible with jit, grad, vmap.
"""

import jax.numpy as jnp
from jax import Array


def merge_parts(real: Array, imag: Array) -> Array:
    """Combine parallel real and imaginary arrays into one complex array."""
    return jnp.asarray(real) + 1j * jnp.asarray(imag)


def split_parts(x: Array) -> tuple[Array, Array]:
    """Split a complex array into fresh real and imaginary arrays."""
    return jnp.real(x), jnp.imag(x)
