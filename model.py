"""Double pendulum state model.

Holds the structural parameters (origin, gravity, masses, lengths) and the
dynamic state (angles, angular velocities, angular accelerations) of both
bobs, plus the Cartesian positions derived from them.

Angles are measured from the downward vertical through each bob's pivot.
Positions use a y-up convention: a bob hanging straight down sits at
``pivot + (0, -length)``.
"""

import logging
import math
from dataclasses import dataclass, replace

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendulumParams:
    """Physical parameters of the double pendulum system."""

    m1: float = 1.0
    m2: float = 1.0
    l1: float = 1.0
    l2: float = 1.0
    g: float = 9.81


def polar_to_cartesian(pivot_x, pivot_y, length, angle):
    """Map (pivot, length, angle) to the bob's (x, y)."""
    x = pivot_x + length * np.sin(angle)
    y = pivot_y - length * np.cos(angle)
    return float(x), float(y)


@dataclass(frozen=True)
class Bob:
    """One point mass on the end of a massless rod.

    Immutable: a pendulum swaps in new Bob values on every write, so an
    angle can never change without its position following.
    """

    mass: float
    length: float
    angle: float
    angular_velocity: float = 0.0
    angular_acceleration: float = 0.0
    x: float = 0.0
    y: float = 0.0

    @property
    def position(self):
        return self.x, self.y


class DoublePendulum:
    """Two bobs: ``top`` pivots at the origin, ``bottom`` at ``top``.

    Only the constructor and :meth:`set_dynamics` write state. The dynamics
    engine in ``simulation.py`` calls ``set_dynamics`` once per step, so
    positions are never observed out of sync with the angles.
    """

    def __init__(self, origin_x, origin_y, gravity,
                 top_mass, top_length, top_angle,
                 bottom_mass, bottom_length, bottom_angle):
        self._origin = (origin_x, origin_y)
        self._gravity = gravity
        self._top = Bob(mass=top_mass, length=top_length, angle=top_angle)
        self._bottom = Bob(
            mass=bottom_mass, length=bottom_length, angle=bottom_angle,
        )
        self.update_positions()
        logger.debug(
            "DoublePendulum created: origin=%s g=%s top=(m=%s, l=%s, a=%s) "
            "bottom=(m=%s, l=%s, a=%s)",
            self._origin, gravity, top_mass, top_length, top_angle,
            bottom_mass, bottom_length, bottom_angle,
        )

    @classmethod
    def from_params(cls, params, theta1, theta2, origin=(0.0, 0.0)):
        """Build a pendulum at rest from a PendulumParams."""
        return cls(
            origin[0], origin[1], params.g,
            params.m1, params.l1, theta1,
            params.m2, params.l2, theta2,
        )

    # -- read accessors --

    @property
    def origin(self):
        return self._origin

    @property
    def origin_x(self):
        return self._origin[0]

    @property
    def origin_y(self):
        return self._origin[1]

    @property
    def gravity(self):
        return self._gravity

    @property
    def top(self):
        return self._top

    @property
    def bottom(self):
        return self._bottom

    @property
    def params(self):
        return PendulumParams(
            m1=self.top.mass, m2=self.bottom.mass,
            l1=self.top.length, l2=self.bottom.length,
            g=self._gravity,
        )

    @property
    def state(self):
        """Snapshot as a new array [theta1, theta2, omega1, omega2]."""
        return np.array([
            self.top.angle,
            self.bottom.angle,
            self.top.angular_velocity,
            self.bottom.angular_velocity,
        ], dtype=np.float64)

    def positions(self):
        """Return (x1, y1, x2, y2) in world coordinates."""
        return self.top.x, self.top.y, self.bottom.x, self.bottom.y

    def is_finite(self):
        values = (
            self.top.angle, self.bottom.angle,
            self.top.angular_velocity, self.bottom.angular_velocity,
            self.top.x, self.top.y, self.bottom.x, self.bottom.y,
        )
        return all(math.isfinite(v) for v in values)

    # -- writers --

    def update_positions(self):
        """Recompute both positions; bottom is anchored on the new top."""
        x1, y1 = polar_to_cartesian(
            self._origin[0], self._origin[1], self._top.length, self._top.angle,
        )
        x2, y2 = polar_to_cartesian(
            x1, y1, self._bottom.length, self._bottom.angle,
        )
        self._top = replace(self._top, x=x1, y=y1)
        self._bottom = replace(self._bottom, x=x2, y=y2)

    def set_dynamics(self, state, accelerations):
        """Write a full [theta1, theta2, omega1, omega2] state and the
        matching angular accelerations, then refresh positions."""
        theta1, theta2, omega1, omega2 = state
        alpha1, alpha2 = accelerations

        self._top = replace(
            self._top, angle=float(theta1),
            angular_velocity=float(omega1), angular_acceleration=float(alpha1),
        )
        self._bottom = replace(
            self._bottom, angle=float(theta2),
            angular_velocity=float(omega2), angular_acceleration=float(alpha2),
        )

        self.update_positions()

    def __repr__(self):
        return (
            f"DoublePendulum(origin={self._origin}, g={self._gravity}, "
            f"theta=({self.top.angle:.4f}, {self.bottom.angle:.4f}), "
            f"omega=({self.top.angular_velocity:.4f}, "
            f"{self.bottom.angular_velocity:.4f}))"
        )
