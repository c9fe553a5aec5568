"""
Tests for the configuration schema and YAML loader.
"""

import argparse

import pytest
import yaml

from godunov2d.config import (
    ConfigurationError, SimulationConfig, GridConfig, PhysicsConfig, SolverSettings,
    BoundaryConfig, load_yaml, from_dict, apply_cli_overrides, save_yaml,
    sod_preset, blast_preset,
)
from godunov2d.solvers import BoundaryKind


class TestValidation:

    def test_defaults_are_valid(self):
        assert SimulationConfig().validate() is not None

    @pytest.mark.parametrize("config", [
        SimulationConfig(grid=GridConfig(nx=0)),
        SimulationConfig(grid=GridConfig(dy=-0.1)),
        SimulationConfig(physics=PhysicsConfig(gamma=1.0)),
        SimulationConfig(physics=PhysicsConfig(density_floor=0.0)),
        SimulationConfig(solver=SolverSettings(sigma=0.0)),
        SimulationConfig(solver=SolverSettings(riemann_iterations=0)),
        SimulationConfig(boundaries=BoundaryConfig(x_low="periodic", x_high="outflow")),
        SimulationConfig(boundaries=BoundaryConfig(y_high="inflow")),
    ])
    def test_invalid(self, config):
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_boundary_kinds(self):
        b = BoundaryConfig(x_low="outflow", x_high="outflow", y_low="periodic", y_high="periodic")
        assert b.kinds() == (BoundaryKind.OUTFLOW, BoundaryKind.OUTFLOW,
                             BoundaryKind.PERIODIC, BoundaryKind.PERIODIC)

    def test_hydro_params(self):
        params = SimulationConfig(physics=PhysicsConfig(gamma=5.0 / 3.0)).hydro_params()
        assert params.gamma == pytest.approx(5.0 / 3.0)
        assert params.riemann_iterations == 10


class TestPresets:

    def test_sod(self):
        config = sod_preset().validate()
        assert config.grid.nx == 200
        assert config.boundaries.x_low == "outflow"
        assert config.problem.name == "sod"

    def test_blast(self):
        config = blast_preset().validate()
        assert config.problem.name == "blast"
        assert config.output.dt_output > 0.0


class TestLoader:

    def test_from_dict_partial(self):
        config = from_dict({'grid': {'nx': 32}, 'run': {'t_end': 0.5}})
        assert config.grid.nx == 32
        assert config.grid.ny == 100
        assert config.run.t_end == 0.5

    def test_string_numbers_coerced(self):
        config = from_dict({'physics': {'density_floor': "1.0e-12"}, 'grid': {'nx': "12"}})
        assert config.physics.density_floor == 1.0e-12
        assert config.grid.nx == 12

    def test_preset_with_override(self):
        config = from_dict({'preset': 'blast', 'grid': {'nx': 64, 'ny': 64}})
        assert config.problem.name == "blast"
        assert config.grid.nx == 64
        assert config.grid.dx == pytest.approx(1.0 / 128)

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            from_dict({'preset': 'kelvin'})

    def test_unknown_keys_ignored(self):
        config = from_dict({'grid': {'nx': 8, 'nz': 4}})
        assert config.grid.nx == 8

    def test_yaml_round_trip(self, tmp_path):
        path = tmp_path / "sub" / "run.yaml"
        original = sod_preset()
        save_yaml(original, path)
        assert path.exists()
        assert load_yaml(path) == original

    def test_load_yaml_file(self, tmp_path):
        path = tmp_path / "case.yaml"
        path.write_text(yaml.dump({
            'grid': {'nx': 10, 'ny': 5, 'dx': 0.1, 'dy': 0.1},
            'boundaries': {'x_low': 'periodic', 'x_high': 'periodic'},
            'problem': {'name': 'uniform', 'u': 1.0},
        }))
        config = load_yaml(path).validate()
        assert config.boundaries.kinds()[0] is BoundaryKind.PERIODIC
        assert config.problem.u == 1.0

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml(path) == SimulationConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "nope.yaml")

    def test_cli_overrides(self):
        args = argparse.Namespace(nx=40, ny=None, t_end=0.3, output_dir="out/x", problem="blast")
        config = apply_cli_overrides(sod_preset(), args)
        assert config.grid.nx == 40
        assert config.grid.ny == 4
        assert config.run.t_end == 0.3
        assert config.output.directory == "out/x"
        assert config.problem.name == "blast"
