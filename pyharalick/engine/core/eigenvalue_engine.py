# -*- coding: utf-8 -*-
# core/eigenvalue_engine.py
"""
Eigenvalues of a general real square matrix.

Three stages, each usable on its own:

    balance               diagonal similarity by powers of 2 that equalises
                          row and column norms
    reduce_to_hessenberg  elimination with partial pivoting down to upper
                          Hessenberg form
    hqr                   implicit double-shift QR iteration on the
                          Hessenberg matrix

``eigenvalues`` chains them on a private float64 copy of the input. None of
the stages change the eigenvalues, so a diagonal (or already Hessenberg)
matrix passes the first two stages untouched.

Reference:
    Wilkinson, J.H. and C. Reinsch. 1971. Handbook for Automatic Computation,
    Vol. II, Linear Algebra. Springer (balance, elmhes and hqr procedures).
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

import numpy as np

from pyharalick.config.settings import (
    BALANCE_RADIX,
    BALANCE_TOLERANCE,
    EXCEPTIONAL_SHIFT_ITERATIONS,
    EXCEPTIONAL_SHIFT_PRODUCT,
    EXCEPTIONAL_SHIFT_SCALE,
    MAX_QR_ITERATIONS,
)
from pyharalick.utils.exceptions import CooccurrenceMatrixError, EigenvalueConvergenceError

logger = logging.getLogger("Dev_logger")


def _check_square(matrix: np.ndarray) -> None:
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise CooccurrenceMatrixError(f"Expected a square 2D matrix, got shape {matrix.shape}")
    if not np.all(np.isfinite(matrix)):
        raise CooccurrenceMatrixError("Matrix contains non-finite values")


def _sign(magnitude: float, reference: float) -> float:
    return abs(magnitude) if reference >= 0.0 else -abs(magnitude)


# ---------------- Stage 1: balancing ----------------

def balance(a: np.ndarray) -> np.ndarray:
    """
    Balance ``a`` in place and return it.

    For every index i the off-diagonal column norm c and row norm r are brought
    within a factor RADIX of each other by scaling row i by 1/f and column i by
    f, where f is a power of RADIX. A scaling is applied only when it reduces
    c + r below BALANCE_TOLERANCE of its previous value. Sweeps repeat until a
    full sweep applies no scaling.

    Args:
        a (np.ndarray): Square float64 matrix, modified in place.

    Returns:
        np.ndarray: The same array, balanced.
    """
    _check_square(a)
    n = a.shape[0]
    sqrdx = BALANCE_RADIX * BALANCE_RADIX

    converged = False
    while not converged:
        converged = True
        for i in range(n):
            off_diagonal = np.arange(n) != i
            c = float(np.abs(a[off_diagonal, i]).sum())
            r = float(np.abs(a[i, off_diagonal]).sum())

            if c == 0.0 or r == 0.0:
                continue

            g = r / BALANCE_RADIX
            f = 1.0
            s = c + r
            while c < g:
                f *= BALANCE_RADIX
                c *= sqrdx
            g = r * BALANCE_RADIX
            while c > g:
                f /= BALANCE_RADIX
                c /= sqrdx

            if (c + r) / f < BALANCE_TOLERANCE * s:
                converged = False
                a[i, :] *= 1.0 / f
                a[:, i] *= f

    return a


# ---------------- Stage 2: Hessenberg reduction ----------------

def reduce_to_hessenberg(a: np.ndarray) -> np.ndarray:
    """
    Reduce ``a`` in place to upper Hessenberg form by stabilised elementary
    similarity transforms (Gaussian elimination with partial pivoting).

    The eliminated positions below the first subdiagonal keep the multipliers
    used to zero them; take ``hessenberg_part`` of the result for the clean
    Hessenberg matrix.
    """
    _check_square(a)
    n = a.shape[0]

    for m in range(1, n - 1):
        # pivot: largest element of column m-1 on or below row m
        pivot_row = m + int(np.argmax(np.abs(a[m:, m - 1])))
        x = float(a[pivot_row, m - 1])

        if pivot_row != m:
            a[[pivot_row, m], m - 1:] = a[[m, pivot_row], m - 1:]
            a[:, [pivot_row, m]] = a[:, [m, pivot_row]]

        if x == 0.0:
            continue

        for i in range(m + 1, n):
            y = float(a[i, m - 1])
            if y == 0.0:
                continue
            y /= x
            a[i, m - 1] = y
            a[i, m:] -= y * a[m, m:]
            a[:, m] += y * a[:, i]

    return a


def hessenberg_part(a: np.ndarray) -> np.ndarray:
    """Copy of ``a`` with everything below the first subdiagonal set to zero."""
    return np.triu(a, k=-1)


# ---------------- Stage 3: shifted QR iteration ----------------

def _matrix_norm(a: np.ndarray) -> float:
    return float(np.abs(hessenberg_part(a)).sum())


def hqr(a: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    All eigenvalues of an upper Hessenberg matrix by the implicit double-shift
    QR algorithm. ``a`` is destroyed.

    The active block shrinks from the bottom: once the subdiagonal entry above
    the last row (or the last two rows) is negligible next to its diagonal
    neighbours, one real eigenvalue or a 2x2 pair is read off. A 2x2 pair is
    real when its discriminant is non-negative and complex conjugate
    otherwise. Exceptional shifts are used at iterations 10 and 20 of a block.

    Returns:
        (wr, wi): real and imaginary parts, in the order blocks deflated
        (stored from the bottom row upward). Not sorted.

    Raises:
        EigenvalueConvergenceError: A block did not deflate within
            MAX_QR_ITERATIONS iterations.
    """
    _check_square(a)
    n = a.shape[0]
    wr = np.zeros(n, dtype=np.float64)
    wi = np.zeros(n, dtype=np.float64)

    anorm = _matrix_norm(a)
    nn = n - 1
    t = 0.0
    p = q = r = 0.0
    x = y = z = 0.0

    while nn >= 0:
        its = 0
        while True:
            # look for a single small subdiagonal element
            l = nn
            while l >= 1:
                s = abs(a[l - 1, l - 1]) + abs(a[l, l])
                if s == 0.0:
                    s = anorm
                if abs(a[l, l - 1]) + s == s:
                    a[l, l - 1] = 0.0
                    break
                l -= 1

            x = float(a[nn, nn])
            if l == nn:
                # one root found
                wr[nn] = x + t
                wi[nn] = 0.0
                nn -= 1
            else:
                y = float(a[nn - 1, nn - 1])
                w = float(a[nn, nn - 1] * a[nn - 1, nn])
                if l == nn - 1:
                    # two roots found
                    p = 0.5 * (y - x)
                    q = p * p + w
                    z = math.sqrt(abs(q))
                    x += t
                    if q >= 0.0:
                        z = p + _sign(z, p)
                        wr[nn - 1] = wr[nn] = x + z
                        if z:
                            wr[nn] = x - w / z
                        wi[nn - 1] = wi[nn] = 0.0
                    else:
                        wr[nn - 1] = wr[nn] = x + p
                        wi[nn] = z
                        wi[nn - 1] = -z
                    nn -= 2
                else:
                    if its == MAX_QR_ITERATIONS:
                        logger.debug("QR iteration stalled on a %d x %d block", nn - l + 1, nn - l + 1)
                        raise EigenvalueConvergenceError(
                            f"No convergence after {MAX_QR_ITERATIONS} QR iterations "
                            f"on a block of order {nn - l + 1}",
                            block_order=nn - l + 1,
                            iterations=its,
                        )
                    if its in EXCEPTIONAL_SHIFT_ITERATIONS:
                        t += x
                        a[np.arange(nn + 1), np.arange(nn + 1)] -= x
                        s = abs(a[nn, nn - 1]) + abs(a[nn - 1, nn - 2])
                        y = x = EXCEPTIONAL_SHIFT_SCALE * s
                        w = EXCEPTIONAL_SHIFT_PRODUCT * s * s
                    its += 1

                    # form shift, look for two consecutive small subdiagonal elements
                    m = nn - 2
                    while m >= l:
                        z = float(a[m, m])
                        r = x - z
                        s = y - z
                        p = (r * s - w) / a[m + 1, m] + a[m, m + 1]
                        q = a[m + 1, m + 1] - z - r - s
                        r = float(a[m + 2, m + 1])
                        s = abs(p) + abs(q) + abs(r)
                        p /= s
                        q /= s
                        r /= s
                        if m == l:
                            break
                        u = abs(a[m, m - 1]) * (abs(q) + abs(r))
                        v = abs(p) * (abs(a[m - 1, m - 1]) + abs(z) + abs(a[m + 1, m + 1]))
                        if u + v == v:
                            break
                        m -= 1

                    for i in range(m + 2, nn + 1):
                        a[i, i - 2] = 0.0
                        if i != m + 2:
                            a[i, i - 3] = 0.0

                    # double QR step on rows l..nn, columns m..nn
                    for k in range(m, nn):
                        if k != m:
                            p = float(a[k, k - 1])
                            q = float(a[k + 1, k - 1])
                            r = 0.0
                            if k != nn - 1:
                                r = float(a[k + 2, k - 1])
                            x = abs(p) + abs(q) + abs(r)
                            if x != 0.0:
                                p /= x
                                q /= x
                                r /= x
                        s = _sign(math.sqrt(p * p + q * q + r * r), p)
                        if s == 0.0:
                            continue

                        if k == m:
                            if l != m:
                                a[k, k - 1] = -a[k, k - 1]
                        else:
                            a[k, k - 1] = -s * x
                        p += s
                        x = p / s
                        y = q / s
                        z = r / s
                        q /= p
                        r /= p

                        # row modification
                        cols = slice(k, nn + 1)
                        row_p = a[k, cols] + q * a[k + 1, cols]
                        if k != nn - 1:
                            row_p = row_p + r * a[k + 2, cols]
                            a[k + 2, cols] -= row_p * z
                        a[k + 1, cols] -= row_p * y
                        a[k, cols] -= row_p * x

                        # column modification
                        rows = slice(l, min(nn, k + 3) + 1)
                        col_p = x * a[rows, k] + y * a[rows, k + 1]
                        if k != nn - 1:
                            col_p = col_p + z * a[rows, k + 2]
                            a[rows, k + 2] -= col_p * r
                        a[rows, k + 1] -= col_p * q
                        a[rows, k] -= col_p

            if not l < nn - 1:
                break

    return wr, wi


# ---------------- Entry point ----------------

def eigenvalues(matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute every eigenvalue of a real square matrix.

    Args:
        matrix (np.ndarray): Square real matrix. Not modified.

    Returns:
        (wr, wi): real and imaginary parts in deflation order.

    Raises:
        CooccurrenceMatrixError: ``matrix`` is not square or not finite.
        EigenvalueConvergenceError: The QR iteration did not converge.
    """
    work = np.array(matrix, dtype=np.float64, copy=True)
    _check_square(work)
    if work.shape[0] == 0:
        return np.zeros(0, dtype=np.float64), np.zeros(0, dtype=np.float64)

    balance(work)
    reduce_to_hessenberg(work)
    return hqr(hessenberg_part(work))


def sorted_real_parts(wr: np.ndarray) -> np.ndarray:
    """Real parts sorted ascending, so rank-based picks do not depend on deflation order."""
    return np.sort(np.asarray(wr, dtype=np.float64), kind="stable")
