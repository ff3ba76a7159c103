"""Smooth transition functions that decide birth and death of SmoothLife cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

Number = Union[float, np.ndarray]


def _unwrap(value: np.ndarray) -> Number:
    """Return a plain float for scalar results and the array otherwise."""
    return float(value) if np.ndim(value) == 0 else value


@dataclass
class Rules:
    """Neighbourhood radii, sigmoid steepness and birth/death intervals."""

    radius_outer: float = 21.0
    radius_inner: float | None = None
    alpha: float = 0.0028
    birth1: float = 0.278
    birth2: float = 0.365
    death1: float = 0.267
    death2: float = 0.445

    def __post_init__(self) -> None:
        if self.radius_inner is None:
            self.radius_inner = self.radius_outer / 3
        if self.alpha <= 0:
            raise ValueError(f"alpha must be positive, got {self.alpha}")

    def sigma1(self, x: Number, a: float) -> Number:
        """Logistic step from 0 to 1 centred on ``a``."""
        exponent = -(np.asarray(x, dtype=float) - a) * 4 / self.alpha
        with np.errstate(over="ignore"):
            value = 1.0 / (1.0 + np.exp(exponent))
        return _unwrap(value)

    def sigma2(self, x: Number, a: Number, b: Number) -> Number:
        """Smooth indicator of ``x`` lying between ``a`` and ``b``."""
        value = np.asarray(self.sigma1(x, a)) * (1 - np.asarray(self.sigma1(x, b)))
        return _unwrap(value)

    def sigma_m(self, x: Number, y: Number, m: Number) -> Number:
        """Blend from ``x`` to ``y`` as ``m`` passes one half."""
        s = np.asarray(self.sigma1(m, 0.5))
        return _unwrap(np.asarray(x) * (1 - s) + np.asarray(y) * s)

    def transition(self, n: Number, m: Number) -> Number:
        """New state for outer-ring filling ``n`` and inner-disc filling ``m``."""
        low = self.sigma_m(self.birth1, self.death1, m)
        high = self.sigma_m(self.birth2, self.death2, m)
        return self.sigma2(n, low, high)