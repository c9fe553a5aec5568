#!/usr/bin/env python3
"""
Run a 2D Euler problem with the Godunov solver.

Configuration comes from a YAML file or a preset; command-line flags
override individual values.

Usage:
    python scripts/run_hydro.py --preset sod
    python scripts/run_hydro.py --config config/examples/blast.yaml --t-end 0.05
    python scripts/run_hydro.py --preset blast --nx 64 --ny 64 --plot
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger

from godunov2d.config import load_yaml, from_dict, apply_cli_overrides, save_yaml
from godunov2d.config.loader import PRESETS
from godunov2d.io import VTKWriter, PlotWriter
from godunov2d.solvers import HydroEngine, initialize_mesh
from godunov2d.utils import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a 2D Euler simulation with the Godunov solver"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--config", "-c", type=str,
                        help="YAML configuration file")
    source.add_argument("--preset", choices=sorted(PRESETS),
                        help="Start from a built-in problem preset")

    # Grid
    parser.add_argument("--nx", type=int, help="Cells in x")
    parser.add_argument("--ny", type=int, help="Cells in y")
    parser.add_argument("--dx", type=float, help="Cell width")
    parser.add_argument("--dy", type=float, help="Cell height")

    # Physics and scheme
    parser.add_argument("--gamma", type=float, help="Ratio of specific heats")
    parser.add_argument("--sigma", type=float, help="CFL safety factor")
    parser.add_argument("--riemann-iterations", type=int,
                        help="Newton iteration cap of the Riemann solver")

    # Run control
    parser.add_argument("--max-steps", "-n", type=int,
                        help="Step limit (negative disables)")
    parser.add_argument("--t-end", type=float,
                        help="End time (negative disables)")
    parser.add_argument("--problem", type=str,
                        help="Initial condition: sod, blast or uniform")

    # Output
    parser.add_argument("--output-dir", "-o", type=str, help="Output directory")
    parser.add_argument("--prefix", type=str, help="Snapshot file prefix")
    parser.add_argument("--dt-output", type=float,
                        help="Snapshot interval in simulation time")
    parser.add_argument("--n-output", type=int, help="Snapshot interval in steps")
    parser.add_argument("--print-freq", type=int, help="Progress line interval")
    parser.add_argument("--plot", action="store_true",
                        help="Also render PNG snapshots")
    parser.add_argument("--no-vtk", action="store_true",
                        help="Do not write VTK snapshots")
    parser.add_argument("--save-config", type=str,
                        help="Write the effective configuration to this YAML file")

    # Logging
    parser.add_argument("--log-level", default="INFO",
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-file", type=str, help="Also log to this file")
    return parser


def main():
    """Main entry point."""
    args = build_parser().parse_args()
    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.config:
        config = load_yaml(args.config)
    else:
        config = from_dict({'preset': args.preset or 'sod'})
    config = apply_cli_overrides(config, args)
    if args.plot:
        config.output.plot = True
    if args.no_vtk:
        config.output.write_vtk = False
    config.validate()

    if args.save_config:
        save_yaml(config, args.save_config)
        logger.info(f"Configuration saved to {args.save_config}")

    physics = config.physics
    sinks = []
    if config.output.write_vtk:
        sinks.append(VTKWriter(config.output.directory, physics.gamma,
                               physics.density_floor, physics.sound_speed_floor,
                               series_name=config.output.prefix.rstrip('_') or "solution"))
    if config.output.plot:
        sinks.append(PlotWriter(config.output.directory, physics.gamma,
                                physics.density_floor, physics.sound_speed_floor))

    mesh = initialize_mesh(config)
    engine = HydroEngine(config, sink=sinks)
    summary = engine.run(mesh)

    logger.info(f"Output directory: {config.output.directory}")
    logger.info(f"Snapshots written: {len(summary.snapshots)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
