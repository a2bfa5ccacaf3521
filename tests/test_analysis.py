"""Tests for causality and stability analysis of stars and sequences."""

import numpy as np
import pytest
import jax.numpy as jnp

from starTOV import analysis, eos
from starTOV.config import SequenceConfig, TOVConfig
from starTOV.exceptions import InvalidInput
from starTOV.tov import GRTOVSolver, Sequence


class SofteningEOS(eos.EquationOfState):
    """Matter whose energy density falls as it is compressed, dp/deps = -1/2."""

    def pressure_from_density(self, rho):
        return 0.5 * (1.0 - rho)

    def energy_density_from_density(self, rho):
        return rho

    def density_from_pressure(self, p):
        return 1.0 - 2.0 * p

    def energy_density_from_pressure(self, p):
        return 1.0 - 2.0 * p


@pytest.fixture(scope="module")
def polytrope_sequence():
    """Ten stars of the K = 100, Gamma = 2 polytrope across the mass maximum."""
    solver = GRTOVSolver(TOVConfig(sequence=SequenceConfig(show_progress=False)))
    return solver.construct_sequence(
        eos.Polytrope(100.0, 2.0), central_densities=np.geomspace(1e-4, 5e-3, 10)
    )


class TestCausality:
    """Test sound-speed checks on stellar profiles."""

    def test_polytrope_star_is_causal(self, polytrope_star):
        """Test a realistic star is causal with a subluminal sound speed."""
        is_causal, max_cs = analysis.check_causality(polytrope_star)
        assert is_causal
        # dp/deps = 2 K rho / (1 + 2 K rho) at the centre
        assert 0.5 < max_cs < 0.7

    def test_sound_speed_samples(self, model_factory):
        """Test finite differences and midpoints of a linear profile."""
        model = model_factory(r=[0.0, 1.0, 2.0], p=[0.3, 0.2, 0.1], epsilon=[1.0, 0.5, 0.0])
        r_mid, cs2 = analysis.sound_speed_squared(model)
        assert jnp.allclose(r_mid, jnp.array([0.5, 1.5]))
        assert jnp.allclose(cs2, 0.2)

    def test_negative_sound_speed_squared(self, model_factory):
        """Test dp/deps < 0 is reported as not causal."""
        model = model_factory(r=[0.0, 1.0, 2.0], p=[0.3, 0.2, 0.1], epsilon=[0.5, 1.0, 1.5])
        is_causal, _ = analysis.check_causality(model)
        assert not is_causal

    def test_softening_eos_star_not_causal(self, solver):
        """Test a star built from an EOS with dp/deps < 0 is reported as not causal."""
        star = solver.solve(SofteningEOS(), 0.05)
        assert star.radius > 0 and star.mass > 0

        _, cs2 = analysis.sound_speed_squared(star)
        assert jnp.allclose(cs2, -0.5)
        is_causal, max_cs = analysis.check_causality(star)
        assert not is_causal
        assert max_cs == 0.0

    def test_superluminal(self, model_factory):
        """Test dp/deps > 1 is reported as not causal."""
        model = model_factory(r=[0.0, 1.0, 2.0], p=[1.0, 0.5, 0.0], epsilon=[0.4, 0.2, 0.0])
        is_causal, max_cs = analysis.check_causality(model)
        assert not is_causal
        assert jnp.isclose(max_cs, jnp.sqrt(2.5))

    def test_constant_energy_density(self, model_factory):
        """Test a profile without usable sample pairs is causal with zero speed."""
        model = model_factory(r=[0.0, 1.0, 2.0], p=[0.2, 0.1, 0.0], epsilon=[1.0, 1.0, 1.0])
        assert analysis.check_causality(model) == (True, 0.0)

    def test_threshold_skips_small_differences(self, model_factory):
        """Test pairs below the threshold are ignored."""
        model = model_factory(
            r=[0.0, 1.0, 2.0], p=[1.0, 0.9, 0.0], epsilon=[1.0, 0.99, 0.0]
        )
        is_causal, _ = analysis.check_causality(model, threshold=0.1)
        assert is_causal


class TestStability:
    """Test stability classification at the mass maximum."""

    def test_labels_split_at_maximum(self, model_factory):
        """Test models up to the heaviest are stable, later ones unstable."""
        models = [
            model_factory(r=[0.0, 1.0], p=[0.1, 0.0], epsilon=[1.0, 0.0], mass=mass)
            for mass in (1.0, 1.5, 2.0, 1.8, 1.6)
        ]
        status, max_idx = analysis.find_stability_branch(models)
        assert max_idx == 2
        assert status == ["stable", "stable", "stable", "unstable", "unstable"]
        stable = analysis.stable_branch(models)
        assert len(stable) == 3
        assert all(a is b for a, b in zip(stable, models))

    def test_monotonic_sequence_all_stable(self, model_factory):
        """Test a sequence below the turning point is entirely stable."""
        models = [
            model_factory(r=[0.0, 1.0], p=[0.1, 0.0], epsilon=[1.0, 0.0], mass=mass)
            for mass in (0.5, 1.0, 1.5)
        ]
        status, max_idx = analysis.find_stability_branch(models)
        assert max_idx == 2
        assert set(status) == {"stable"}

    def test_empty_sequence(self):
        """Test classification of an empty sequence is rejected."""
        with pytest.raises(ValueError):
            analysis.find_stability_branch([])


class TestSequence:
    """Test sequence construction."""

    def test_all_models_solved(self, polytrope_sequence):
        """Test every density gives a model, in input order."""
        seq = polytrope_sequence
        assert isinstance(seq, Sequence)
        assert len(seq.models) == 10
        assert jnp.allclose(seq.central_densities, jnp.geomspace(1e-4, 5e-3, 10))
        assert jnp.all(jnp.diff(seq.central_pressures) > 0)
        assert jnp.all(seq.baryonic_masses > seq.masses)
        assert jnp.all(seq.radii > 2.0 * seq.masses)

    def test_stability_labels_contiguous(self, polytrope_sequence):
        """Test labels form one stable block followed by one unstable block."""
        seq = polytrope_sequence
        idx = seq.max_mass_index
        assert seq.masses[idx] == jnp.max(seq.masses)
        assert seq.stability == tuple(
            ["stable"] * (idx + 1) + ["unstable"] * (len(seq.models) - idx - 1)
        )
        # the K = 100, Gamma = 2 maximum lies near rho_c = 3.2e-3
        assert 0 < idx < len(seq.models) - 1
        assert 1.6 < seq.masses[idx] < 1.7

    def test_causality_recorded(self, polytrope_sequence):
        """Test each model carries its causality verdict."""
        seq = polytrope_sequence
        assert len(seq.causality) == len(seq.models)
        assert all(is_causal for is_causal, _ in seq.causality)

    def test_by_central_pressure(self, solver, polytrope):
        """Test sequences built from central pressures recover the densities."""
        pressures = np.array([1e-5, 1e-4, 1e-3])
        seq = solver.construct_sequence(polytrope, central_pressures=pressures)
        assert jnp.allclose(seq.central_pressures, pressures)
        assert jnp.allclose(seq.central_densities, jnp.sqrt(pressures / 100.0))

    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"central_densities": [1e-3, 2e-3], "central_pressures": [1e-4, 2e-4]},
            {"central_densities": [2e-3, 1e-3]},
            {"central_densities": [1e-3, 1e-3]},
            {"central_pressures": []},
        ],
    )
    def test_invalid_grids(self, solver, polytrope, kwargs):
        """Test ambiguous, empty or unordered grids are rejected."""
        with pytest.raises(InvalidInput):
            solver.construct_sequence(polytrope, **kwargs)

    def test_failed_stars_are_skipped(self, solver, tabulated_polytrope):
        """Test a failing star is left out while the rest are kept."""
        seq = solver.construct_sequence(
            tabulated_polytrope, central_pressures=[1e-4, 1e-3, 10.0]
        )
        assert len(seq.models) == 2
        assert jnp.allclose(seq.central_pressures, jnp.array([1e-4, 1e-3]))

    def test_undefined_pressure_gives_empty_sequence(self, solver, constant_density):
        """Test densities without a defined pressure produce no models."""
        seq = solver.construct_sequence(constant_density, central_densities=[1.0, 2.0])
        assert seq.models == ()
        assert seq.stability == ()
        assert seq.max_mass_index == -1

    def test_from_models_length_mismatch(self, polytrope_star):
        """Test densities and models must pair up."""
        with pytest.raises(ValueError):
            Sequence.from_models(None, [1e-3, 2e-3], [polytrope_star])
