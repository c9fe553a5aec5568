"""
Configuration schema for the Godunov hydro solver.

Dataclass-based configuration that can be loaded from YAML or constructed programmatically.
"""

from dataclasses import dataclass, field, asdict
from typing import Tuple

from ..solvers.boundary_conditions import BoundaryKind
from ..solvers.params import HydroParams
from ..solvers.time_stepping import TimeStepConfig


PROBLEM_NAMES = ('sod', 'blast', 'uniform')


class ConfigurationError(ValueError):
    """Invalid run configuration, detected before the time loop starts."""


@dataclass
class GridConfig:
    """Uniform rectangular grid."""

    nx: int = 100              # Cells in x
    ny: int = 100              # Cells in y
    dx: float = 0.01           # Cell width
    dy: float = 0.01           # Cell height


@dataclass
class PhysicsConfig:
    """Gas properties and numerical floors."""

    gamma: float = 1.4
    density_floor: float = 1.0e-10      # small_r
    sound_speed_floor: float = 1.0e-10  # small_c, pressure floor is small_c²/γ


@dataclass
class SolverSettings:
    """Scheme settings."""

    sigma: float = 0.8             # CFL safety factor
    riemann_iterations: int = 10   # Newton iteration cap of the Riemann solver


@dataclass
class BoundaryConfig:
    """Boundary kind on each edge: reflective, outflow or periodic."""

    x_low: str = "reflective"
    x_high: str = "reflective"
    y_low: str = "reflective"
    y_high: str = "reflective"

    def kinds(self) -> Tuple[BoundaryKind, BoundaryKind, BoundaryKind, BoundaryKind]:
        """Parsed kinds as (x_low, x_high, y_low, y_high)."""
        return tuple(BoundaryKind.from_name(k)
                     for k in (self.x_low, self.x_high, self.y_low, self.y_high))


@dataclass
class RunConfig:
    """Termination bounds. A negative value disables a bound."""

    max_steps: int = 1000
    t_end: float = 0.2


@dataclass
class OutputConfig:
    """Output configuration."""

    directory: str = "output/hydro"
    prefix: str = "hydro_"
    dt_output: float = -1.0    # Snapshot interval in simulation time (<= 0 disables)
    n_output: int = -1         # Snapshot interval in steps (<= 0 disables)
    print_freq: int = 10       # Progress line interval in steps (<= 0 disables)
    write_vtk: bool = True
    plot: bool = False         # Also render PNG snapshots with matplotlib


@dataclass
class ProblemConfig:
    """Initial condition.

    sod:     two states split by a plane normal to `axis` at fraction `interface`
    blast:   over-pressured disc of `radius` centred in the domain
    uniform: constant state (rho_left, u, v, p_left)
    """

    name: str = "sod"
    axis: str = "x"
    interface: float = 0.5

    rho_left: float = 1.0
    p_left: float = 1.0
    rho_right: float = 0.125
    p_right: float = 0.1
    u: float = 0.0
    v: float = 0.0

    # Blast
    rho_ambient: float = 1.0
    p_ambient: float = 0.1
    p_blast: float = 10.0
    radius: float = 0.1


@dataclass
class SimulationConfig:
    """Complete simulation configuration."""

    grid: GridConfig = field(default_factory=GridConfig)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    solver: SolverSettings = field(default_factory=SolverSettings)
    boundaries: BoundaryConfig = field(default_factory=BoundaryConfig)
    run: RunConfig = field(default_factory=RunConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    problem: ProblemConfig = field(default_factory=ProblemConfig)

    def validate(self) -> 'SimulationConfig':
        """
        Check preconditions of a run.

        Raises
        ------
        ConfigurationError
            If any grid, physics or boundary setting is invalid.
        """
        g = self.grid
        if g.nx <= 0 or g.ny <= 0:
            raise ConfigurationError(f"Grid dimensions must be positive, got {g.nx} x {g.ny}")
        if g.dx <= 0.0 or g.dy <= 0.0:
            raise ConfigurationError(f"Cell sizes must be positive, got dx={g.dx}, dy={g.dy}")

        ph = self.physics
        if ph.gamma <= 1.0:
            raise ConfigurationError(f"gamma must be > 1, got {ph.gamma}")
        if ph.density_floor <= 0.0 or ph.sound_speed_floor <= 0.0:
            raise ConfigurationError("Density and sound-speed floors must be positive")

        if self.solver.sigma <= 0.0:
            raise ConfigurationError(f"CFL safety factor must be positive, got {self.solver.sigma}")
        if self.solver.riemann_iterations < 1:
            raise ConfigurationError("riemann_iterations must be at least 1")

        try:
            x_low, x_high, y_low, y_high = self.boundaries.kinds()
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        for axis, low, high in (('x', x_low, x_high), ('y', y_low, y_high)):
            if (low is BoundaryKind.PERIODIC) != (high is BoundaryKind.PERIODIC):
                raise ConfigurationError(f"Periodic boundary on {axis} must be set on both ends")

        if self.problem.name not in PROBLEM_NAMES:
            raise ConfigurationError(f"Unknown problem '{self.problem.name}'. "
                                     f"Use one of: {list(PROBLEM_NAMES)}")
        if self.problem.axis not in ('x', 'y'):
            raise ConfigurationError(f"Problem axis must be 'x' or 'y', got '{self.problem.axis}'")
        return self

    def hydro_params(self) -> HydroParams:
        return HydroParams(
            gamma=self.physics.gamma,
            small_r=self.physics.density_floor,
            small_c=self.physics.sound_speed_floor,
            riemann_iterations=self.solver.riemann_iterations,
        )

    def timestep_config(self) -> TimeStepConfig:
        return TimeStepConfig(
            sigma=self.solver.sigma,
            small_r=self.physics.density_floor,
            small_c=self.physics.sound_speed_floor,
        )

    def to_dict(self) -> dict:
        """Convert to nested dictionary."""
        return asdict(self)


# Preset configurations
def sod_preset() -> SimulationConfig:
    """Sod shock tube along x on a thin strip."""
    return SimulationConfig(
        grid=GridConfig(nx=200, ny=4, dx=1.0 / 200, dy=1.0 / 200),
        boundaries=BoundaryConfig(x_low="outflow", x_high="outflow",
                                  y_low="reflective", y_high="reflective"),
        run=RunConfig(max_steps=-1, t_end=0.2),
        problem=ProblemConfig(name="sod"),
    )


def blast_preset() -> SimulationConfig:
    """Centred blast wave in a closed box."""
    return SimulationConfig(
        grid=GridConfig(nx=128, ny=128, dx=1.0 / 128, dy=1.0 / 128),
        boundaries=BoundaryConfig(),
        run=RunConfig(max_steps=-1, t_end=0.1),
        output=OutputConfig(dt_output=0.02),
        problem=ProblemConfig(name="blast"),
    )
