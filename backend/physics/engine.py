import logging
from typing import List, Optional

import numpy as np

from shape.classifier import classify
from shape.models import ShotCategory
from .models import BallState, FlightStatus, ShotInputs, ShotResult, TrajectoryPoint

logger = logging.getLogger(__name__)


def heading_vector(angle_deg: float) -> np.ndarray:
    """
    Unit xz direction for a face or path angle.

    Angles are negated before use, so a positive angle points toward -x,
    which is the right-hand side for a camera behind the tee looking downrange.
    """
    angle_rad = -np.radians(angle_deg)
    return np.array([np.sin(angle_rad), 0.0, np.cos(angle_rad)])


class FlightEngine:
    # Empirical tuning knobs, not derived physics
    SPEED_TRANSFER = 1.4  # club -> ball speed
    SIDE_SPIN_SCALE = 10.0  # (path - face) * mph -> rpm
    MAGNUS_COEFF = 0.0003

    MPH_TO_MS = 0.4704
    YARDS_TO_METERS = 0.9144
    GRAVITY = -9.81
    TEE_HEIGHT = 0.1  # meters
    DT = 0.002
    MAX_TIME = 8.0

    def __init__(self, dt: float = DT, max_time: float = MAX_TIME):
        self.dt = dt
        self.max_time = max_time

    def side_spin(self, inputs: ShotInputs) -> float:
        return (inputs.club_path_deg - inputs.club_face_deg) * inputs.swing_speed_mph * self.SIDE_SPIN_SCALE

    def initial_state(self, inputs: ShotInputs) -> BallState:
        """Ball on the tee with launch velocity and a purely vertical spin axis"""
        # Negated so + face sends the ball right
        face_rad = -np.radians(inputs.club_face_deg)
        launch_rad = np.radians(inputs.launch_angle_deg)
        ball_speed = self._compute_ball_speed(inputs.swing_speed_mph)

        velocity = np.array([
            ball_speed * np.cos(launch_rad) * np.sin(face_rad),
            ball_speed * np.sin(launch_rad),
            ball_speed * np.cos(launch_rad) * np.cos(face_rad),
        ])
        spin_rad_sec = self.side_spin(inputs) * 2 * np.pi / 60

        return BallState(
            position=np.array([0.0, self.TEE_HEIGHT, 0.0]),
            velocity=velocity,
            spin=np.array([0.0, spin_rad_sec, 0.0]),
        )

    def simulate(self, inputs: ShotInputs) -> ShotResult:
        """
        Fly one shot from the tee to first ground contact.

        Semi-implicit Euler: each step moves the ball with the previous
        velocity, then applies gravity and the Magnus term
        k * (spin x velocity) to the velocity. The sample that reaches the
        ground is not kept in the trajectory; it is reported as the
        landing point with y clamped to 0.
        """
        trajectory: List[TrajectoryPoint] = []
        landing: Optional[np.ndarray] = None
        status = FlightStatus.INCOMPLETE

        # Non-finite values are detected explicitly, so numpy warnings are noise here
        with np.errstate(over="ignore", invalid="ignore"):
            side_spin = self.side_spin(inputs)
            category = classify(inputs.club_face_deg, inputs.club_path_deg, side_spin)
            state = self.initial_state(inputs)

            if not (state.is_finite and np.all(np.isfinite(state.spin))):
                status = FlightStatus.UNSTABLE
            elif not np.any(state.velocity):
                # Never leaves the tee
                landing = np.zeros(3)
                status = FlightStatus.LANDED
            else:
                n_steps = int(round(self.max_time / self.dt))
                for _ in range(n_steps):
                    state.position = state.position + state.velocity * self.dt
                    state.t += self.dt

                    if not np.all(np.isfinite(state.position)):
                        status = FlightStatus.UNSTABLE
                        break

                    if state.position[1] <= 0:
                        landing = state.position.copy()
                        landing[1] = 0.0
                        status = FlightStatus.LANDED
                        break

                    state.velocity = self._step_velocity(state)
                    trajectory.append(TrajectoryPoint(
                        time=state.t,
                        x=float(state.position[0]),
                        y=float(state.position[1]),
                        z=float(state.position[2]),
                    ))

                    if not state.is_finite:
                        status = FlightStatus.UNSTABLE
                        break

        result = self._build_result(trajectory, landing, state.t, status, category, side_spin)

        if status == FlightStatus.UNSTABLE:
            logger.warning("Flight diverged after %d samples (%s)", len(trajectory), inputs)
        elif status == FlightStatus.INCOMPLETE:
            logger.warning("Ball still airborne after %.1fs (%s)", self.max_time, inputs)
        else:
            logger.debug(
                "%s: carry %.1f yds, apex %.1f m, %d samples",
                category.value, result.carry_yards, result.apex_height, len(trajectory),
            )
        return result

    def _step_velocity(self, state: BallState) -> np.ndarray:
        velocity = state.velocity.copy()
        velocity[1] += self.GRAVITY * self.dt
        # Magnus uses the post-gravity velocity
        magnus = self.MAGNUS_COEFF * np.cross(state.spin, velocity)
        return velocity + magnus * self.dt

    def _build_result(
        self,
        trajectory: List[TrajectoryPoint],
        landing: Optional[np.ndarray],
        elapsed: float,
        status: FlightStatus,
        category: ShotCategory,
        side_spin: float,
    ) -> ShotResult:
        carry = 0.0
        landing_point = None
        lateral_x = trajectory[-1].x if trajectory else 0.0
        flight_time = trajectory[-1].time if trajectory else 0.0

        if landing is not None:
            carry = float(np.hypot(landing[0], landing[2])) / self.YARDS_TO_METERS
            landing_point = (float(landing[0]), float(landing[1]), float(landing[2]))
            lateral_x = landing_point[0]
            flight_time = elapsed

        apex = max((p.y for p in trajectory), default=0.0)

        return ShotResult(
            trajectory=trajectory,
            carry_yards=carry,
            shot_category=category,
            side_spin_rpm=side_spin,
            status=status,
            landing_point=landing_point,
            apex_height=apex,
            flight_time=flight_time,
            # world -x is the golfer's right
            lateral_deviation=-lateral_x / self.YARDS_TO_METERS,
        )

    def _compute_ball_speed(self, swing_speed_mph: float) -> float:
        """Ball speed in m/s from clubhead speed in mph"""
        return swing_speed_mph * self.SPEED_TRANSFER * self.MPH_TO_MS
