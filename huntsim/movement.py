"""Motion control: turn the chosen direction into heading and velocity."""

from huntsim.config.agents import HEADING_SLERP_FACTOR
from huntsim.math_utils import Vector3, slerp_heading
from huntsim.world import Body


class MotionController:
    """Applies a chosen direction to a body.

    The heading eases toward the direction by a fixed fraction every tick.
    The fraction is per tick, not per second, so turning speed follows the
    host's tick rate.
    """

    def __init__(self, turn_factor: float = HEADING_SLERP_FACTOR) -> None:
        self.turn_factor = turn_factor

    def apply(self, body: Body, direction: Vector3, movement_speed: float) -> None:
        body.set_forward(slerp_heading(body.forward, direction, self.turn_factor))

        # Vertical velocity belongs to the host integrator; pass it through.
        vertical = body.velocity.y
        body.set_velocity(
            Vector3(direction.x * movement_speed, vertical, direction.z * movement_speed)
        )

    def halt(self, body: Body) -> None:
        """Zero the horizontal velocity, keeping the vertical component."""
        body.set_velocity(Vector3(0.0, body.velocity.y, 0.0))
