from typing import NamedTuple


class HydroParams(NamedTuple):
    """
    Immutable bundle of the scalars every sweep stage needs.

    Built once from the run configuration and passed down to the
    EOS, tracing and Riemann stages.
    """
    gamma: float
    small_r: float            # Density floor
    small_c: float            # Sound-speed floor
    riemann_iterations: int   # Newton iteration cap
