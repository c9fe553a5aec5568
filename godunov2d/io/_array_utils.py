"""
Array utility functions for safe handling of NaN/Inf values.
"""

import numpy as np


def sanitize_array(arr: np.ndarray, fill_value: float = 0.0) -> np.ndarray:
    """Replace NaN and Inf values with a finite fill value.

    Parameters
    ----------
    arr : np.ndarray
        Input array that may contain NaN/Inf values.
    fill_value : float
        Value to replace NaN/Inf with (default: 0.0).

    Returns
    -------
    np.ndarray
        Array with all NaN/Inf values replaced.
    """
    result = np.array(arr, dtype=np.float64)
    mask = ~np.isfinite(result)
    if np.any(mask):
        result[mask] = fill_value
    return result


def safe_minmax(arr: np.ndarray, default_min: float = -1.0, default_max: float = 1.0) -> tuple:
    """Get min/max of array, handling NaN/Inf gracefully.

    Returns
    -------
    tuple
        (min_val, max_val) with finite values; the defaults if none are finite.
    """
    finite_vals = arr[np.isfinite(arr)]
    if len(finite_vals) == 0:
        return default_min, default_max
    return float(finite_vals.min()), float(finite_vals.max())
