"""
Benchmark: Pure JAX vs Pallas GPU kernel for 3D Gaussian-gridding interpolation.

Compares the interpolation primitive across knot counts, grid sizes and
truncation half-widths.

Usage:
    python benchmarks/bench_pallas_vs_jax.py
"""

import os
import sys


sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import time
from functools import partial

import jax
import jax.numpy as jnp

from fggrid.core.interp import interp_3d_impl
from fggrid.core.params import GridParams
from fggrid.utils.grid import kernel_table


try:
    from fggrid.core.pallas_interp import interp_3d_pallas

    HAS_PALLAS = True
except ImportError as e:
    print(f"WARNING: Pallas not available: {e}")
    HAS_PALLAS = False


def _params(n, m_sp, R=2.0):
    # Greengard & Lee's suggested spreading width for oversampling ratio R.
    nr = tuple(int(R * v) for v in n)
    tau = tuple(float(jnp.pi * m_sp / (v * v * R * (R - 0.5))) for v in n)
    return GridParams(m_sp=m_sp, tau=tau, n=nr)


def check_gpu():
    devices = jax.devices()
    print(f"JAX version: {jax.__version__}")
    print(f"Devices: {devices}")
    for d in devices:
        if d.platform == "gpu":
            print(f"GPU: {d.device_kind}")
    return any(d.platform == "gpu" for d in devices)


def benchmark_fn(fn, *args, n_warmup=3, n_runs=20):
    for _ in range(n_warmup):
        result = fn(*args)
        jax.block_until_ready(result)
    times = []
    for _ in range(n_runs):
        start = time.perf_counter()
        result = fn(*args)
        jax.block_until_ready(result)
        times.append(time.perf_counter() - start)
    times_ms = [t * 1000 for t in times]
    median = sorted(times_ms)[len(times_ms) // 2]
    return median, result


def check_correctness(result_jax, result_pallas, label, rtol=1e-3):
    err = jnp.max(jnp.abs(result_jax - result_pallas))
    rel = err / (jnp.max(jnp.abs(result_jax)) + 1e-10)
    ok = float(rel) < rtol
    status = "PASS" if ok else "FAIL"
    print(f"  [{status}] {label}: rel_err={float(rel):.2e}")
    return ok


def print_row(label, t_jax, t_pallas):
    speedup = t_jax / t_pallas
    print(f"  {label}: JAX={t_jax:7.3f}ms  Pallas={t_pallas:7.3f}ms  speedup={speedup:.1f}x")
    return {"jax_ms": t_jax, "pallas_ms": t_pallas, "speedup": speedup}


def bench_interp_3d(M, N, m_sp=4, n_runs=20):
    params = _params((N, N, N), m_sp)
    nx, ny, nz = params.n
    tables = tuple(kernel_table(m_sp, t, n, dtype=jnp.float32) for t, n in zip(params.tau, params.n))
    x = jax.random.uniform(jax.random.PRNGKey(42), (M,), minval=0.0, maxval=2 * jnp.pi)
    y = jax.random.uniform(jax.random.PRNGKey(43), (M,), minval=0.0, maxval=2 * jnp.pi)
    z = jax.random.uniform(jax.random.PRNGKey(44), (M,), minval=0.0, maxval=2 * jnp.pi)
    fw = jax.random.normal(jax.random.PRNGKey(45), (nz, ny, nx), dtype=jnp.complex64)
    jax_fn = partial(interp_3d_impl, tables=tables, params=params)
    pallas_fn = jax.jit(partial(interp_3d_pallas, tables=tables, params=params))
    t_jax, res_jax = benchmark_fn(jax_fn, x, y, z, fw, n_runs=n_runs)
    t_pallas, res_pallas = benchmark_fn(pallas_fn, x, y, z, fw, n_runs=n_runs)
    r = print_row(f"Interp 3D (M={M:>8,}, N={N}^3, M_sp={m_sp:>2})", t_jax, t_pallas)
    check_correctness(res_jax, res_pallas.astype(res_jax.dtype), "interp_3d")
    return r


def run_benchmarks():
    print("=" * 75)
    print("FGGRID: Pure JAX vs Pallas (Triton) GPU Kernel")
    print("=" * 75)

    is_gpu = check_gpu()
    if not HAS_PALLAS:
        print("\nPallas kernels not available. Exiting.")
        sys.exit(1)
    if not is_gpu:
        print("\nNo GPU available. Exiting.")
        sys.exit(1)

    results = {}

    print("\n" + "-" * 75)
    print("3D INTERPOLATION (varying M, N=32^3, M_sp=4)")
    print("-" * 75)
    for M in [10_000, 100_000, 1_000_000]:
        try:
            results[f"interp_3d_M{M}"] = bench_interp_3d(M, N=32)
        except Exception as e:
            print(f"  ERROR M={M}: {e}")

    print("\n" + "-" * 75)
    print("3D INTERPOLATION (varying M_sp, M=100,000, N=32^3)")
    print("-" * 75)
    for m_sp in [2, 3, 6]:
        try:
            results[f"interp_3d_msp{m_sp}"] = bench_interp_3d(100_000, N=32, m_sp=m_sp)
        except Exception as e:
            print(f"  ERROR M_sp={m_sp}: {e}")

    print("\n" + "=" * 75)
    print("SUMMARY")
    print("=" * 75)
    print(f"\n{'Test':<40} {'JAX (ms)':>10} {'Pallas (ms)':>12} {'Speedup':>10}")
    print("-" * 75)
    for name, r in results.items():
        print(f"  {name:<38} {r['jax_ms']:>10.3f} {r['pallas_ms']:>12.3f} {r['speedup']:>9.1f}x")

    speedups = [r["speedup"] for r in results.values()]
    if speedups:
        geo = 1.0
        for s in speedups:
            geo *= s
        geo = geo ** (1.0 / len(speedups))
        print(f"\n  Geometric mean speedup: {geo:.1f}x")


if __name__ == "__main__":
    run_benchmarks()
