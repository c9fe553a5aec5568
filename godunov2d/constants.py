"""
Global constants for the Godunov solver.

This module defines constants used throughout the codebase to ensure
consistency in array shapes and indexing.
"""

# Number of ghost cell layers on each end of a primitive strip
# Required by the slope stencil of the tracing step (cells i-1, i, i+1
# are needed for every padded cell 1..np+2)
NGHOST = 2

# Conserved variables (mesh planes)
RHO_IDX = 0  # Density
MX_IDX = 1   # x-momentum
MY_IDX = 2   # y-momentum
E_IDX = 3    # Total energy density

# Primitive variables (strip planes, in the frame of the sweep)
Q_RHO = 0    # Density
Q_UN = 1     # Normal velocity
Q_UT = 2     # Transverse velocity
Q_P = 3      # Pressure

N_VARS = 4   # Total number of state variables

# Riemann iteration stops once |dp / p*| falls below this
RIEMANN_TOL = 1.0e-6


def get_interior_slice():
    """
    Return the slice for interior cells along the pass dimension of a strip.

    With NGHOST ghost cells on each end:
    - strip.shape = (N_VARS, nt, np + 2*NGHOST)
    - Interior cells: strip[:, :, NGHOST:-NGHOST]

    Returns
    -------
    slice
        slice(NGHOST, -NGHOST)
    """
    return slice(NGHOST, -NGHOST)


def get_strip_shape(np_: int, nt: int) -> tuple:
    """
    Get the shape of a padded primitive strip.

    Parameters
    ----------
    np_ : int
        Number of interior cells along the pass direction.
    nt : int
        Number of transverse rows.

    Returns
    -------
    tuple
        Shape (N_VARS, nt, np_ + 2*NGHOST)
    """
    return (N_VARS, nt, np_ + 2 * NGHOST)
