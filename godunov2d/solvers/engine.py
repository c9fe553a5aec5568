"""
Time loop of the 2D Godunov solver.

Each step computes a CFL-limited Δt for the whole mesh, clamps it to land on
the next scheduled output (or end) time and applies the two directional
sweeps. Even steps sweep x then y, odd steps y then x.

Termination:
    step limit (max_steps) or end time (t_end). A negative value disables a
    bound; with both disabled the run returns immediately with zero steps.

Snapshots go to an optional sink, any object with
    write(label, mesh, dx, dy, nvar, nx, ny, time=None)
at step 0, on every output cadence boundary and at termination.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Union

from loguru import logger

from ..constants import N_VARS, RIEMANN_TOL
from ..grid.mesh import Mesh, XPassAccessor, YPassAccessor
from ..io.output import SnapshotSink
from ..numerics.diagnostics import (
    ConservedTotals, FloorHits, compute_totals, conservation_tolerance,
    count_floor_hits, relative_drift,
)
from .sweep import Axis, SweepWorkspace, run_sweep
from .time_stepping import compute_timestep

if TYPE_CHECKING:
    from ..config.schema import SimulationConfig


class EngineState(Enum):
    INITIALIZING = "initializing"
    STEPPING = "stepping"
    OUTPUTTING = "outputting"
    TERMINATED = "terminated"


@dataclass
class RunSummary:
    """Outcome and timing of one run."""
    steps: int
    time: float
    wall_time: float
    n_cells: int
    initial_totals: ConservedTotals
    final_totals: ConservedTotals
    max_riemann_correction: float = 0.0
    floor_hits: FloorHits = field(default_factory=lambda: FloorHits(0, 0))
    snapshots: List[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def mass_drift(self) -> float:
        return relative_drift(self.final_totals.mass, self.initial_totals.mass)

    @property
    def energy_drift(self) -> float:
        return relative_drift(self.final_totals.energy, self.initial_totals.energy)

    @property
    def cell_updates_per_second(self) -> float:
        if self.wall_time <= 0.0:
            return 0.0
        return self.steps * self.n_cells / self.wall_time

    def timing_line(self) -> str:
        """CSV-friendly timing record: steps, cells, wall seconds, cell updates/s."""
        return (f"TIME: {self.steps},{self.n_cells},{self.wall_time:.6f},"
                f"{self.cell_updates_per_second:.6e}")


class HydroEngine:
    """
    Adaptive time loop over a conserved mesh.

    Parameters
    ----------
    config : SimulationConfig
        Run configuration; validated on construction.
    sink : SnapshotSink or sequence of SnapshotSink, optional
        Snapshot sink(s). Sinks with a `finalize()` method get it called
        once the run terminates.
    """

    def __init__(self, config: 'SimulationConfig',
                 sink: Union[SnapshotSink, Sequence[SnapshotSink], None] = None):
        self.config = config.validate()
        self.params = config.hydro_params()
        self.ts_config = config.timestep_config()
        if sink is None:
            self.sinks: List[SnapshotSink] = []
        elif isinstance(sink, (list, tuple)):
            self.sinks = list(sink)
        else:
            self.sinks = [sink]

        self.state = EngineState.INITIALIZING
        self.step = 0
        self.time = 0.0
        self._next_output = -1.0
        self._last_snapshot_step = -1
        self._snapshots: List[str] = []

    def _print_banner(self) -> None:
        cfg = self.config
        g = cfg.grid
        b = cfg.boundaries
        logger.info(f"{'='*60}")
        logger.info("Godunov Hydro Engine")
        logger.info(f"{'='*60}")
        logger.info(f"Grid: {g.nx} x {g.ny} cells, dx={g.dx:.4e}, dy={g.dy:.4e}")
        logger.info(f"Gamma: {cfg.physics.gamma}")
        logger.info(f"CFL factor: {cfg.solver.sigma}")
        logger.info(f"Boundaries: x=({b.x_low}, {b.x_high}) y=({b.y_low}, {b.y_high})")
        logger.info(f"Max steps: {cfg.run.max_steps}, end time: {cfg.run.t_end}")
        logger.info(f"{'='*60}")

    def _first_output_time(self) -> float:
        t_end = self.config.run.t_end
        dt_output = self.config.output.dt_output
        nxt = t_end if t_end > 0.0 else -1.0
        if dt_output > 0.0 and (nxt < 0.0 or nxt > dt_output):
            nxt = dt_output
        return nxt

    def _advance_output_time(self) -> None:
        t_end = self.config.run.t_end
        dt_output = self.config.output.dt_output
        if dt_output <= 0.0:
            self._next_output = -1.0
            return
        nxt = self._next_output + dt_output
        if t_end > 0.0 and nxt > t_end:
            nxt = t_end
        self._next_output = nxt

    def _snapshot(self, mesh: Mesh) -> None:
        if self._last_snapshot_step == self.step:
            return
        self._last_snapshot_step = self.step
        if not self.sinks:
            return

        previous = self.state
        self.state = EngineState.OUTPUTTING
        label = f"{self.config.output.prefix}{self.step:05d}"
        for sink in self.sinks:
            sink.write(label, mesh.data, self.config.grid.dx, self.config.grid.dy,
                       N_VARS, mesh.nx, mesh.ny, time=self.time)
        self._snapshots.append(label)
        logger.info(f"  Snapshot {label} at t={self.time:.6e}")
        self.state = previous

    def _finalize_sinks(self) -> None:
        for sink in self.sinks:
            finalize = getattr(sink, 'finalize', None)
            if callable(finalize):
                finalize()

    def run(self, mesh: Mesh, cancel: Optional[Callable[[], bool]] = None) -> RunSummary:
        """
        Integrate the mesh in place until a termination bound is reached.

        Parameters
        ----------
        mesh : Mesh
            Conserved state matching the configured grid; advanced in place.
        cancel : callable, optional
            Polled between steps; a true result stops the run.

        Returns
        -------
        RunSummary
            Step count, final time, conservation drift and timing.
        """
        cfg = self.config
        g = cfg.grid
        if (mesh.nx, mesh.ny) != (g.nx, g.ny):
            raise ValueError(f"Mesh is {mesh.nx} x {mesh.ny}, configured grid is {g.nx} x {g.ny}")

        self.state = EngineState.INITIALIZING
        self.step = 0
        self.time = 0.0
        self._last_snapshot_step = -1
        self._snapshots = []

        initial = compute_totals(mesh.data, g.dx, g.dy)
        max_steps = cfg.run.max_steps
        t_end = cfg.run.t_end

        if max_steps < 0 and t_end < 0.0:
            logger.warning("Both max_steps and t_end are disabled, nothing to do")
            self.state = EngineState.TERMINATED
            return RunSummary(steps=0, time=0.0, wall_time=0.0, n_cells=mesh.n_cells,
                              initial_totals=initial, final_totals=initial)

        self._print_banner()

        x_low, x_high, y_low, y_high = cfg.boundaries.kinds()
        x_axis = Axis(XPassAccessor(), g.dx, x_low, x_high)
        y_axis = Axis(YPassAccessor(), g.dy, y_low, y_high)
        work = {
            x_axis.name: SweepWorkspace.for_axis(mesh, x_axis),
            y_axis.name: SweepWorkspace.for_axis(mesh, y_axis),
        }

        self._next_output = self._first_output_time()
        logger.info(f"INIT mass={initial.mass:.15e} energy={initial.energy:.15e} "
                    f"(precision {conservation_tolerance(initial.mass):.3e}, "
                    f"{conservation_tolerance(initial.energy):.3e})")
        self._snapshot(mesh)

        self.state = EngineState.STEPPING
        print_freq = cfg.output.print_freq
        n_output = cfg.output.n_output
        max_corr = 0.0
        cancelled = False
        t_start = time.perf_counter()

        while (self.step < max_steps or max_steps < 0) and (self.time < t_end or t_end < 0.0):
            if cancel is not None and cancel():
                logger.info(f"Run cancelled at step {self.step}")
                cancelled = True
                break

            dt = compute_timestep(mesh.data, self.params.gamma, g.dx, g.dy, self.ts_config)
            landed = False
            if self._next_output > 0.0 and self.time + dt >= self._next_output:
                logger.debug(f"Clamping dt={dt:.6e} to reach t={self._next_output:.6e}")
                dt = self._next_output - self.time
                landed = True

            order = (x_axis, y_axis) if self.step % 2 == 0 else (y_axis, x_axis)
            for axis in order:
                corr = run_sweep(mesh, axis, dt, self.params, work[axis.name])
                max_corr = max(max_corr, corr)

            self.step += 1
            self.time = self._next_output if landed else self.time + dt

            if print_freq > 0 and self.step % print_freq == 0:
                totals = compute_totals(mesh.data, g.dx, g.dy)
                logger.info(f"Step {self.step:6d}  t={self.time:.6e}  dt={dt:.6e}  "
                            f"mass={totals.mass:.15e}  energy={totals.energy:.15e}")
                hits = count_floor_hits(mesh.data, self.params.gamma,
                                        self.params.small_r, self.params.small_c)
                if hits.density or hits.pressure:
                    logger.debug(f"  Floor hits: density={hits.density} pressure={hits.pressure}")

            if landed or (n_output > 0 and self.step % n_output == 0):
                self._snapshot(mesh)
            if landed:
                self._advance_output_time()

        wall = time.perf_counter() - t_start

        self._snapshot(mesh)
        self.state = EngineState.TERMINATED
        self._finalize_sinks()

        final = compute_totals(mesh.data, g.dx, g.dy)
        summary = RunSummary(
            steps=self.step,
            time=self.time,
            wall_time=wall,
            n_cells=mesh.n_cells,
            initial_totals=initial,
            final_totals=final,
            max_riemann_correction=max_corr,
            floor_hits=count_floor_hits(mesh.data, self.params.gamma,
                                        self.params.small_r, self.params.small_c),
            snapshots=list(self._snapshots),
            cancelled=cancelled,
        )

        if max_corr > RIEMANN_TOL:
            logger.warning(f"Riemann iteration left a relative correction of {max_corr:.3e}")
        else:
            logger.debug(f"Max Riemann correction: {max_corr:.3e}")

        logger.info(f"Finished: {summary.steps} steps, t={summary.time:.6e}, "
                    f"wall={summary.wall_time:.3f}s")
        logger.info(f"  Mass drift: {summary.mass_drift:.3e}, "
                    f"energy drift: {summary.energy_drift:.3e}")
        logger.info(summary.timing_line())
        return summary
