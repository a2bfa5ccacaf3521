r"""
Causality and stability analysis of stellar models and sequences.

**Causality:** the adiabatic sound speed :math:`c_s^2 = dp/d\varepsilon` must
satisfy :math:`0 \le c_s^2 \le 1`. A negative value signals a thermodynamic
instability, a value above one a superluminal sound speed.

**Stability:** along a sequence ordered by central density, configurations
with :math:`dM/d\rho_c > 0` are stable. The turning point is approximated by
the global mass maximum, which is only correct for families with a single
turning point; sequences with several branches (e.g. twin stars) must be split
by the caller before classification.
"""

import jax.numpy as jnp
from jaxtyping import Array, Float

DEFAULT_CAUSALITY_THRESHOLD = 1e-16


def sound_speed_squared(
    model, threshold: float = DEFAULT_CAUSALITY_THRESHOLD
) -> tuple[Float[Array, "n"], Float[Array, "n"]]:
    r"""
    Finite-difference sound speed squared along a stellar profile.

    Computes :math:`\Delta p / \Delta\varepsilon` between adjacent samples,
    discarding pairs with :math:`|\Delta\varepsilon| \le` ``threshold`` (near
    the surface both differences vanish and the ratio is meaningless).

    Args:
        model: StellarModel with ``r``, ``p`` and ``epsilon`` profiles.
        threshold: Minimum :math:`|\Delta\varepsilon|` for a usable pair.

    Returns:
        tuple: Midpoint radii of the kept pairs and :math:`c_s^2` there.
    """
    dp = jnp.diff(model.p)
    de = jnp.diff(model.epsilon)
    r_mid = 0.5 * (model.r[1:] + model.r[:-1])
    mask = jnp.abs(de) > threshold
    return r_mid[mask], dp[mask] / de[mask]


def check_causality(
    model, threshold: float = DEFAULT_CAUSALITY_THRESHOLD
) -> tuple[bool, float]:
    r"""
    Check that the sound speed stays within :math:`[0, 1]` inside the star.

    Args:
        model: StellarModel to check.
        threshold: See :func:`sound_speed_squared`.

    Returns:
        tuple: ``(is_causal, max_cs)``. ``is_causal`` is False if
        :math:`\max c_s > 1` or :math:`\min c_s^2 < 0`. A profile without
        usable sample pairs is reported causal with ``max_cs = 0``.
    """
    _, cs2 = sound_speed_squared(model, threshold=threshold)
    if cs2.size == 0:
        return True, 0.0

    max_cs2 = float(jnp.max(cs2))
    min_cs2 = float(jnp.min(cs2))
    max_cs = float(jnp.sqrt(max(0.0, max_cs2)))

    is_causal = (max_cs <= 1.0) and (min_cs2 >= 0.0)
    return is_causal, max_cs


def find_stability_branch(sequence) -> tuple[list[str], int]:
    r"""
    Split a sequence into stable and unstable configurations.

    Models up to and including the maximum-mass model are labelled
    ``"stable"``, all later ones ``"unstable"``. Assumes increasing central
    density and a single turning point.

    Args:
        sequence: A Sequence, or any ordered iterable of StellarModels.

    Returns:
        tuple: Labels per model and the index of the maximum mass.

    Raises:
        ValueError: If the sequence holds no models.
    """
    models = list(getattr(sequence, "models", sequence))
    if not models:
        raise ValueError("Cannot classify stability of an empty sequence")

    masses = jnp.array([model.mass for model in models])
    max_idx = int(jnp.argmax(masses))

    status = ["stable"] * (max_idx + 1) + ["unstable"] * (len(models) - max_idx - 1)
    return status, max_idx


def stable_branch(sequence) -> list:
    """Models of ``sequence`` on the stable branch, in order."""
    models = list(getattr(sequence, "models", sequence))
    _, max_idx = find_stability_branch(models)
    return models[: max_idx + 1]
