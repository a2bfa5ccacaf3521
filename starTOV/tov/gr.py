r"""
General Relativity TOV equation solver.

This module integrates the Tolman-Oppenheimer-Volkoff equations in
Schwarzschild radius from a point just off the centre to the stellar surface.

**Units:** All calculations are performed in geometric units where
:math:`G = c = M_\odot = 1`.

**Surface:** The integration stops at the first radius where the pressure
crosses zero. The crossing is located by a root find on the dense
interpolant of the step in which it happens, not by snapping to the nearest
accepted step.
"""

import math
import warnings

import jax.numpy as jnp
import optimistix as optx
from diffrax import diffeqsolve, ODETerm, Tsit5, SaveAt, PIDController, Event, RESULTS

from starTOV.exceptions import DegenerateSurface, IntegrationFailure, InvalidInput
from starTOV.logging_config import get_logger
from starTOV.tov.base import TOVSolverBase
from starTOV.tov.data_classes import StellarModel, StellarState
from starTOV.tov.integrand import central_series, tov_rhs

logger = get_logger(__name__)


def _surface_condition(t, y, args, **kwargs):
    """Event condition: the pressure, crossing zero at the surface."""
    return y.p


def _failure_reason(result, max_steps: int) -> str:
    """Describe why a solve ended without reaching the surface."""
    if bool(result == RESULTS.max_steps_reached):
        return f"step budget of {max_steps} exhausted"
    if bool(result == RESULTS.successful):
        return "no surface crossing before r_max"
    return f"integration stopped early: {RESULTS[result]}"


def shift_metric_potential(nu, M, R):
    r"""
    Shift :math:`\nu` to match the exterior Schwarzschild metric at the surface.

    The TOV equations fix :math:`\nu` only up to a constant. Adding
    :math:`\frac{1}{2}\ln(1 - 2M/R) - \nu(R)` to the whole profile makes
    :math:`e^{2\nu(R)} = 1 - 2M/R`.

    If :math:`R \le 2M` there is no exterior to match: a
    :class:`~starTOV.exceptions.DegenerateSurface` warning is emitted and the
    profile is returned unchanged.

    Parameters
    ----------
    nu : Array
        Unnormalised metric potential profile, last entry at the surface
    M : float
        Gravitational mass
    R : float
        Surface radius

    Returns
    -------
    tuple
        The (possibly) shifted profile and whether the shift was applied
    """
    if R > 2.0 * M:
        nu_surface = 0.5 * jnp.log(1.0 - 2.0 * M / R)
        return nu + (nu_surface - nu[-1]), True

    message = (
        f"Surface radius is not larger than the Schwarzschild radius "
        f"(R={R}, 2M={2.0 * M}); returning the unshifted metric potential"
    )
    logger.warning(message)
    warnings.warn(message, DegenerateSurface, stacklevel=2)
    return nu, False


class GRTOVSolver(TOVSolverBase):
    """
    Standard General Relativity TOV solver.

    Integrates pressure, mass, metric potential and baryonic mass with the
    Tsitouras 5(4) method under PID step control, terminating on the surface
    event.
    """

    def solve(self, eos, pc: float, r_init=None, r_max=None) -> StellarModel:
        r"""
        Solve TOV equations for given central pressure.

        Args:
            eos: Equation of state
            pc: Central pressure [geometric units]
            r_init: Seed radius, overrides the configured value
            r_max: Outer integration bound, overrides the configured value

        Returns:
            StellarModel: Mass, radius and radial profiles.

        Raises:
            InvalidInput: If ``pc`` is not a positive finite number or is
                rejected by the EOS.
            IntegrationFailure: If seeding fails, the solver exhausts its step
                budget, no surface is reached before ``r_max`` or the solution
                is not finite.
        """
        settings = self.config.solver
        r_init = settings.r_init if r_init is None else float(r_init)
        r_max = settings.r_max if r_max is None else float(r_max)

        pc = float(pc)
        if not math.isfinite(pc) or pc <= 0.0:
            raise InvalidInput(f"Central pressure must be positive, got {pc}")
        if not 0.0 < r_init < r_max:
            raise InvalidInput(
                f"Need 0 < r_init < r_max, got r_init={r_init}, r_max={r_max}"
            )
        eos.validate_central_pressure(pc)

        parameters = dict(eos=eos, pc=pc, r_init=r_init, r_max=r_max)
        logger.debug(f"Solving TOV for pc={pc} with {type(eos).__name__}")

        # Seed off-centre to avoid the 0/0 at r = 0
        y0 = central_series(eos, pc, r_init)
        if not all(bool(jnp.isfinite(v)) for v in y0) or float(y0.p) <= 0.0:
            raise IntegrationFailure(
                f"Central expansion gave an invalid seed state {tuple(float(v) for v in y0)}",
                stage="seeding",
                parameters=parameters,
            )

        sol = diffeqsolve(
            ODETerm(tov_rhs),
            Tsit5(),
            t0=r_init,
            t1=r_max,
            dt0=None,
            y0=y0,
            args=eos,
            saveat=SaveAt(t0=True, steps=True, t1=True),
            stepsize_controller=PIDController(rtol=settings.rtol, atol=settings.atol),
            event=Event(
                _surface_condition,
                root_finder=optx.Newton(rtol=settings.root_rtol, atol=settings.root_atol),
            ),
            max_steps=settings.max_steps,
            throw=False,
        )

        num_steps = int(sol.stats["num_steps"])
        surface_found = sol.event_mask is not None and bool(jnp.any(sol.event_mask))
        if not surface_found:
            raise IntegrationFailure(
                _failure_reason(sol.result, settings.max_steps),
                stage="integration",
                parameters=parameters,
            )

        # The step buffer is padded with inf after the last save, and the
        # surface appears twice: as the final step and as the t1 save
        finite = jnp.isfinite(sol.ts)
        ts = sol.ts[finite]
        inside = ts < ts[-1]
        r = jnp.concatenate([ts[inside], ts[-1:]])
        ys = StellarState(
            *(jnp.concatenate([y[finite][inside], y[finite][-1:]]) for y in sol.ys)
        )
        p = jnp.maximum(ys.p, 0.0)

        # eps is derived, not integrated: take it from the EOS
        epsilon = eos.energy_density_from_pressure(p)

        if not all(bool(jnp.all(jnp.isfinite(v))) for v in (r, epsilon, *ys)):
            raise IntegrationFailure(
                "Non-finite values in the integrated profiles",
                stage="integration",
                parameters=parameters,
            )

        R = float(r[-1])
        M = float(ys.m[-1])
        if not (R > 0.0 and M > 0.0):
            raise IntegrationFailure(
                f"Surface reached with non-physical R={R}, M={M}",
                stage="integration",
                parameters=parameters,
            )

        nu, shifted = shift_metric_potential(ys.nu, M, R)

        logger.debug(f"pc={pc}: M={M}, R={R} after {num_steps} steps ({len(r)} samples)")

        return StellarModel(
            central_pressure=pc,
            mass=M,
            radius=R,
            r=r,
            p=p,
            epsilon=epsilon,
            m=ys.m,
            mb=ys.mb,
            nu=nu,
            metric_shifted=shifted,
        )
