from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from shape.models import ShotCategory


class ShotInputs(BaseModel):
    """Club delivery for one shot. The core enforces no ranges."""

    model_config = ConfigDict(frozen=True)

    club_face_deg: float = Field(0.0, description="Face angle at impact, + = open/right")
    club_path_deg: float = Field(0.0, description="Swing path in degrees")
    swing_speed_mph: float = Field(75.0, description="Clubhead speed in mph")
    launch_angle_deg: float = Field(19.0, description="Launch angle in degrees")
    target_yards: float = Field(150.0, description="Pin distance, used for placement only")


@dataclass
class BallState:
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    spin: np.ndarray = field(default_factory=lambda: np.zeros(3))  # rad/s about each axis
    t: float = 0.0

    @property
    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.position)) and np.all(np.isfinite(self.velocity)))


class TrajectoryPoint(BaseModel):
    time: float
    x: float  # lateral (m)
    y: float  # height (m)
    z: float  # downrange (m)


class FlightStatus(str, Enum):
    LANDED = "landed"
    INCOMPLETE = "incomplete"  # time cap hit before ground contact
    UNSTABLE = "unstable"  # position or velocity went non-finite


class ShotResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    trajectory: List[TrajectoryPoint]
    carry_yards: float = Field(0.0, ge=0)
    shot_category: ShotCategory
    side_spin_rpm: float
    status: FlightStatus
    landing_point: Optional[Tuple[float, float, float]] = None
    apex_height: float = 0.0  # meters
    flight_time: float = 0.0
    lateral_deviation: float = 0.0  # yards, + = right of target seen from the tee

    @property
    def landed(self) -> bool:
        return self.status == FlightStatus.LANDED

    def positions(self) -> np.ndarray:
        """Trajectory as an (N, 3) array of x, y, z"""
        if not self.trajectory:
            return np.empty((0, 3))
        return np.array([[p.x, p.y, p.z] for p in self.trajectory])

    @field_serializer("side_spin_rpm", when_used="json")
    def _finite_spin(self, value: float) -> Optional[float]:
        # JSON has no inf/nan
        return value if np.isfinite(value) else None
