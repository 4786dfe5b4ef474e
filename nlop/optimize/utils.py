"""Finite differences and linear algebra helpers.

Pure NumPy implementations suitable for small to medium scale problems.
"""

from __future__ import annotations

import numpy as np

from .core import Array, Objective, SingularHessianError


def approx_grad(
    fun: Objective, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    return_evals:
        Also return the number of objective evaluations spent.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    evals = 0
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei.flat[i] = eps
        grad.flat[i] = (fun(x + ei) - fun(x - ei)) / (2.0 * eps)
        evals += 2
    if return_evals:
        return grad, evals
    return grad


def approx_hessian(
    fun: Objective, x: Array, eps: float = 1e-4, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Approximate the Hessian using second-order central differences."""
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).ravel()
    n = x.size
    hess = np.zeros((n, n), dtype=float)
    fx = fun(x)
    evals = 1
    for i in range(n):
        ei = np.zeros_like(x)
        ei[i] = eps
        f_ip = fun(x + ei)
        f_im = fun(x - ei)
        evals += 2
        hess[i, i] = (f_ip - 2 * fx + f_im) / (eps**2)
        for j in range(i + 1, n):
            ej = np.zeros_like(x)
            ej[j] = eps
            f_pp = fun(x + ei + ej)
            f_pm = fun(x + ei - ej)
            f_mp = fun(x - ei + ej)
            f_mm = fun(x - ei - ej)
            evals += 4
            value = (f_pp - f_pm - f_mp + f_mm) / (4 * eps**2)
            hess[i, j] = value
            hess[j, i] = value
    if return_evals:
        return hess, evals
    return hess


def as_square_matrix(mat: Array | float, n: int) -> Array:
    """Coerce a Hessian (scalar for 1-D problems) to an ``(n, n)`` array."""
    mat = np.asarray(mat, dtype=float)
    if mat.ndim == 0:
        mat = mat.reshape(1, 1)
    if mat.shape != (n, n):
        raise ValueError(f"Hessian must have shape {(n, n)}, got {mat.shape}.")
    return mat


def solve_newton_step(
    hess: Array,
    grad: Array,
    lambda_reg: float = 0.0,
    max_condition: float = 1e12,
) -> Array:
    """Return ``delta_x = H^{-1} g`` for the Newton update ``x - delta_x``.

    Raises
    ------
    SingularHessianError
        If ``H + lambda_reg * I`` is not finite, singular, or has a condition
        number above ``max_condition``.
    """
    grad = np.asarray(grad, dtype=float)
    hess = as_square_matrix(hess, grad.size)
    if lambda_reg > 0.0:
        hess = hess + lambda_reg * np.eye(grad.size)
    if not np.all(np.isfinite(hess)):
        raise SingularHessianError("Hessian contains NaN or infinite entries.")
    cond = np.linalg.cond(hess)
    if not np.isfinite(cond) or cond > max_condition:
        raise SingularHessianError(
            f"Hessian is singular or ill-conditioned (condition number {cond:.3e})."
        )
    try:
        step = np.linalg.solve(hess, grad.ravel())
    except np.linalg.LinAlgError as exc:
        raise SingularHessianError(str(exc)) from exc
    return step.reshape(grad.shape)


__all__ = [
    "approx_grad",
    "approx_hessian",
    "as_square_matrix",
    "solve_newton_step",
]
