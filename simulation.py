"""Double pendulum physics engine.

Evaluates the equations of motion for a double pendulum and advances a
:class:`model.DoublePendulum` in place, one elapsed-time step at a time.

State vector throughout: [theta1, theta2, omega1, omega2].

Two acceleration formulas are available (see :class:`Formula`):

- STANDARD: the Lagrangian result, written in the compact
  ``cos(2*(theta1 - theta2))`` form. Algebraically identical to
  :func:`derivatives`, which the SciPy reference solver integrates.
- LITERAL: the first-generation transcription. Angular velocities enter
  unsquared and the top denominator carries ``cos(2*a1 - 2*a1)``, which is
  ``cos(0) == 1`` for every angle. Kept for side-by-side comparison.

Two integrators are available (see :class:`Integrator`):

- RK4: classical fourth-order Runge-Kutta over the coupled 4-component state.
- EULER: semi-implicit Euler in the legacy order of operations
  (velocity first, then the angle advanced by the updated velocity,
  not rescaled by dt).

Numerical blow-up is not handled: NaN and inf propagate through later steps.
"""

import enum

import numpy as np
from scipy.integrate import solve_ivp


class Formula(enum.Enum):
    STANDARD = "standard"
    LITERAL = "literal"


class Integrator(enum.Enum):
    RK4 = "rk4"
    EULER = "euler"


# ---------------------------------------------------------------------------
# Equations of motion
# ---------------------------------------------------------------------------

def _standard_accelerations(theta1, theta2, omega1, omega2, params):
    m1, m2, l1, l2, g = params.m1, params.m2, params.l1, params.l2, params.g

    delta = theta1 - theta2
    denom = 2 * m1 + m2 - m2 * np.cos(2 * delta)

    alpha1 = (
        -g * (2 * m1 + m2) * np.sin(theta1)
        - m2 * g * np.sin(theta1 - 2 * theta2)
        - 2 * np.sin(delta) * m2
        * (omega2**2 * l2 + omega1**2 * l1 * np.cos(delta))
    ) / (l1 * denom)

    alpha2 = (
        2 * np.sin(delta)
        * (
            omega1**2 * l1 * (m1 + m2)
            + g * (m1 + m2) * np.cos(theta1)
            + omega2**2 * l2 * m2 * np.cos(delta)
        )
    ) / (l2 * denom)

    return alpha1, alpha2


def _literal_accelerations(theta1, theta2, omega1, omega2, params):
    m1, m2, l1, l2, g = params.m1, params.m2, params.l1, params.l2, params.g

    delta = theta1 - theta2

    a = (
        -g * (2 * m1 + m2) * np.sin(theta1)
        - m2 * g * np.sin(theta1 - 2 * theta2)
        - 2 * np.sin(delta) * m2
        * (omega2 * l2 + omega1 * l1 * np.cos(delta))
    )
    # Top denominator: cos(2*a1 - 2*a1) is identically 1.
    b = l1 * (2 * m1 + m2 - m2 * np.cos(2 * theta1 - 2 * theta1))

    c = (
        2 * np.sin(delta)
        * (
            omega1 * l1 * (m1 + m2)
            + g * (m1 + m2) * np.cos(theta1)
            + omega2 * l2 * m2 * np.cos(delta)
        )
    )
    d = l2 * (2 * m1 + m2 - m2 * np.cos(2 * theta1 - 2 * theta2))

    return a / b, c / d


_FORMULAS = {
    Formula.STANDARD: _standard_accelerations,
    Formula.LITERAL: _literal_accelerations,
}


def accelerations(state, params, formula=Formula.STANDARD):
    """Angular accelerations (alpha1, alpha2) for one state snapshot.

    Both values are computed from the same snapshot. Works elementwise
    when the state components are NumPy arrays.
    """
    theta1, theta2, omega1, omega2 = state
    return _FORMULAS[Formula(formula)](theta1, theta2, omega1, omega2, params)


def state_derivative(state, params, formula=Formula.STANDARD):
    """Return d/dt [theta1, theta2, omega1, omega2] as a new array."""
    alpha1, alpha2 = accelerations(state, params, formula)
    return np.array([state[2], state[3], alpha1, alpha2], dtype=np.float64)


def derivatives(t, state, params):
    """Compute the four first-order ODEs for the double pendulum.

    Lagrangian form, used as the reference right-hand side for solve_ivp.

    State vector: [theta1, theta2, omega1, omega2]
    Returns: [d_theta1/dt, d_theta2/dt, d_omega1/dt, d_omega2/dt]
    """
    theta1, theta2, omega1, omega2 = state
    m1, m2, l1, l2, g = params.m1, params.m2, params.l1, params.l2, params.g

    delta = theta1 - theta2
    sin_delta = np.sin(delta)
    cos_delta = np.cos(delta)
    denom = m1 + m2 - m2 * cos_delta**2

    alpha1 = (
        -m2 * l1 * omega1**2 * sin_delta * cos_delta
        - m2 * l2 * omega2**2 * sin_delta
        - (m1 + m2) * g * np.sin(theta1)
        + m2 * g * np.sin(theta2) * cos_delta
    ) / (l1 * denom)

    alpha2 = (
        (m1 + m2) * l1 * omega1**2 * sin_delta
        + (m1 + m2) * g * np.sin(theta1) * cos_delta
        + m2 * l2 * omega2**2 * sin_delta * cos_delta
        - (m1 + m2) * g * np.sin(theta2)
    ) / (l2 * denom)

    return [omega1, omega2, alpha1, alpha2]


# ---------------------------------------------------------------------------
# Integrators
# ---------------------------------------------------------------------------

def euler_step(state, params, dt, formula=Formula.STANDARD):
    """Semi-implicit Euler step.

    Velocity is advanced by ``alpha * dt`` first, then each angle by the
    *updated* velocity as-is (no second dt factor).

    Returns:
        (new_state, (alpha1, alpha2)) where the accelerations are those of
        the pre-step snapshot.
    """
    theta1, theta2, omega1, omega2 = state
    alpha1, alpha2 = accelerations(state, params, formula)

    omega1 = omega1 + alpha1 * dt
    omega2 = omega2 + alpha2 * dt

    theta1 = theta1 + omega1
    theta2 = theta2 + omega2

    new_state = np.array([theta1, theta2, omega1, omega2], dtype=np.float64)
    return new_state, (alpha1, alpha2)


def rk4_step(state, params, dt, formula=Formula.STANDARD):
    """Classical RK4 step over the coupled four-component state.

    Every stage evaluates both bobs from one shared intermediate snapshot.
    No in-place mutation: each stage builds a new array.

    Returns:
        (new_state, (alpha1, alpha2)) where the accelerations are those of
        the pre-step snapshot (k1).
    """
    state = np.asarray(state, dtype=np.float64)

    k1 = state_derivative(state, params, formula)
    k2 = state_derivative(state + 0.5 * dt * k1, params, formula)
    k3 = state_derivative(state + 0.5 * dt * k2, params, formula)
    k4 = state_derivative(state + dt * k3, params, formula)

    new_state = state + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)
    return new_state, (k1[2], k1[3])


_INTEGRATORS = {
    Integrator.RK4: rk4_step,
    Integrator.EULER: euler_step,
}


def step(pendulum, elapsed_time, integrator=Integrator.RK4,
         formula=Formula.STANDARD):
    """Advance ``pendulum`` in place by ``elapsed_time`` seconds.

    Reads one snapshot, integrates it, then writes angles, velocities,
    accelerations and positions back in a single call.

    Raises:
        ValueError: if ``integrator`` or ``formula`` is not a known name.
    """
    integrate = _INTEGRATORS[Integrator(integrator)]
    formula = Formula(formula)

    new_state, alphas = integrate(
        pendulum.state, pendulum.params, elapsed_time, formula,
    )
    pendulum.set_dynamics(new_state, alphas)


def run(pendulum, elapsed_times, integrator=Integrator.RK4,
        formula=Formula.STANDARD):
    """Step ``pendulum`` once per elapsed time, recording positions.

    Returns:
        (len(elapsed_times), 4) array of (x1, y1, x2, y2) after each step.
    """
    elapsed_times = list(elapsed_times)
    out = np.empty((len(elapsed_times), 4), dtype=np.float64)
    for i, dt in enumerate(elapsed_times):
        step(pendulum, dt, integrator, formula)
        out[i] = pendulum.positions()
    return out


# ---------------------------------------------------------------------------
# Reference solver and diagnostics
# ---------------------------------------------------------------------------

def simulate(params, theta1_0, theta2_0, omega1_0=0.0, omega2_0=0.0,
             t_end=30.0, dt=0.005):
    """Run a full high-accuracy reference simulation.

    Returns:
        t_array: 1D array of time values at uniform dt spacing
        state_array: 2D array of shape (len(t_array), 4)
    """
    t_eval = np.arange(0, t_end, dt)
    y0 = [theta1_0, theta2_0, omega1_0, omega2_0]

    sol = solve_ivp(
        fun=lambda t, y: derivatives(t, y, params),
        t_span=(0, t_end),
        y0=y0,
        method="DOP853",
        t_eval=t_eval,
        rtol=1e-12,
        atol=1e-12,
    )

    return sol.t, sol.y.T  # shape: (n_steps, 4)


def total_energy(state, params):
    """Compute total mechanical energy (T + V) for a single state.

    Potential energy is measured from the pivot point (y=0).
    """
    theta1, theta2, omega1, omega2 = state
    m1, m2, l1, l2, g = params.m1, params.m2, params.l1, params.l2, params.g

    # Kinetic energy
    T = (
        0.5 * (m1 + m2) * l1**2 * omega1**2
        + 0.5 * m2 * l2**2 * omega2**2
        + m2 * l1 * l2 * omega1 * omega2 * np.cos(theta1 - theta2)
    )

    # Potential energy (from pivot)
    V = -(m1 + m2) * g * l1 * np.cos(theta1) - m2 * g * l2 * np.cos(theta2)

    return T + V
