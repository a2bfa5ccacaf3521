r"""
Right-hand side of the TOV equations in Schwarzschild radius.

The state is :math:`(p, m, \nu, m_b)` and the system reads

.. math::
    \frac{dp}{dr} &= -\frac{(\varepsilon + p)(m + 4\pi r^3 p)}{r(r - 2m)} \\
    \frac{dm}{dr} &= 4\pi r^2 \varepsilon \\
    \frac{d\nu}{dr} &= -\frac{1}{\varepsilon + p}\frac{dp}{dr} \\
    \frac{dm_b}{dr} &= \frac{4\pi r^2 \rho_0}{\sqrt{1 - 2m/r}}

The pressure equation is 0/0 at :math:`r = 0`, so integrations start at a
small radius seeded with the leading-order central expansion.
"""

import jax.numpy as jnp

from starTOV.tov.data_classes import StellarState


def tov_rhs(r, y: StellarState, eos) -> StellarState:
    r"""
    TOV derivatives at radius ``r``.

    Outside the star (:math:`p \le 0`) all derivatives vanish, freezing the
    state once the surface has been crossed. The baryonic mass derivative is
    set to zero if :math:`1 - 2m/r \le 0`.

    Parameters
    ----------
    r : float
        Radius (independent variable), positive
    y : StellarState
        Current state (p, m, nu, mb)
    eos : EquationOfState
        Thermodynamic closure

    Returns
    -------
    StellarState
        Derivatives (dp/dr, dm/dr, dnu/dr, dmb/dr)
    """
    p, m, nu, mb = y
    inside = p > 0.0
    # keep EOS calls in their domain, the zero branch is selected below
    p_safe = jnp.where(inside, p, 0.0)

    e = eos.energy_density_from_pressure(p_safe)
    rho0 = eos.rest_mass_density_from_pressure(p_safe)

    enthalpy = e + p_safe
    dpdr = -enthalpy * (m + 4.0 * jnp.pi * r**3 * p_safe) / (r * (r - 2.0 * m))
    dmdr = 4.0 * jnp.pi * r**2 * e
    dnudr = -dpdr / jnp.where(inside, enthalpy, 1.0)

    metric_factor = jnp.sqrt(jnp.maximum(0.0, 1.0 - 2.0 * m / r))
    bound = metric_factor > 0.0
    dmbdr = jnp.where(
        bound,
        4.0 * jnp.pi * r**2 * rho0 / jnp.where(bound, metric_factor, 1.0),
        0.0,
    )

    zero = jnp.zeros_like(dpdr)
    return StellarState(
        p=jnp.where(inside, dpdr, zero),
        m=jnp.where(inside, dmdr, zero),
        nu=jnp.where(inside, dnudr, zero),
        mb=jnp.where(inside, dmbdr, zero),
    )


def central_series(eos, pc, r_init) -> StellarState:
    r"""
    State at ``r_init`` from the expansion about the centre.

    .. math::
        p &\approx p_c - \tfrac{2}{3}\pi(\varepsilon_c + p_c)(\varepsilon_c + 3p_c) r^2 \\
        m &\approx \tfrac{4}{3}\pi\varepsilon_c r^3 \\
        \nu &\approx 0 \\
        m_b &\approx \tfrac{4}{3}\pi\rho_{0,c} r^3

    The origin of :math:`\nu` is arbitrary; the solver shifts it afterwards.
    """
    ec = eos.energy_density_from_pressure(pc)
    rho0c = eos.rest_mass_density_from_pressure(pc)

    p0 = pc - (2.0 / 3.0) * jnp.pi * (ec + pc) * (ec + 3.0 * pc) * r_init**2
    m0 = (4.0 / 3.0) * jnp.pi * ec * r_init**3
    mb0 = (4.0 / 3.0) * jnp.pi * rho0c * r_init**3
    return StellarState(
        p=jnp.asarray(p0, dtype=float),
        m=jnp.asarray(m0, dtype=float),
        nu=jnp.zeros_like(jnp.asarray(p0, dtype=float)),
        mb=jnp.asarray(mb0, dtype=float),
    )


def central_series_derivative(eos, pc, r) -> StellarState:
    """Leading-order derivatives near the centre, the ``r -> 0`` limit of :func:`tov_rhs`."""
    ec = eos.energy_density_from_pressure(pc)
    rho0c = eos.rest_mass_density_from_pressure(pc)

    dpdr = -(4.0 / 3.0) * jnp.pi * (ec + pc) * (ec + 3.0 * pc) * r
    return StellarState(
        p=dpdr,
        m=4.0 * jnp.pi * r**2 * ec,
        nu=-dpdr / (ec + pc),
        mb=4.0 * jnp.pi * r**2 * rho0c,
    )
