import logging
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from physics.engine import FlightEngine
from physics.models import ShotInputs, ShotResult

logger = logging.getLogger(__name__)

COLUMNS = [
    'face_angle', 'path_angle', 'swing_speed', 'launch_angle',
    'side_spin', 'shot_category', 'status',
    'carry_distance', 'lateral_deviation', 'apex_height', 'flight_time',
]


class DispersionGenerator:
    """Tabulates shot outcomes over many deliveries"""

    def __init__(self, engine: Optional[FlightEngine] = None):
        self.engine = engine or FlightEngine()

    def sweep(
            self,
            face_angles: Iterable[float],
            path_angles: Iterable[float],
            swing_speed: float = 75.0,
            launch_angle: float = 19.0
    ) -> pd.DataFrame:
        """One row per (face, path) pair, face-major order"""
        face_angles = list(face_angles)
        path_angles = list(path_angles)
        logger.info("Sweeping %d faces x %d paths at %s mph", len(face_angles), len(path_angles), swing_speed)

        rows = []
        for face in face_angles:
            for path in path_angles:
                inputs = ShotInputs(
                    club_face_deg=float(face),
                    club_path_deg=float(path),
                    swing_speed_mph=float(swing_speed),
                    launch_angle_deg=float(launch_angle)
                )
                rows.append(self._row(inputs, self.engine.simulate(inputs)))

        return pd.DataFrame(rows, columns=COLUMNS)

    def generate_dataset(
            self,
            n_samples: int = 1000,
            seed: Optional[int] = None
    ) -> pd.DataFrame:
        """Outcomes for swings sampled from typical amateur distributions"""
        rng = np.random.default_rng(seed)
        logger.info("Generating %d sampled shots...", n_samples)

        rows = []
        for i in range(n_samples):
            if i and i % 1000 == 0:
                logger.info("Progress: %d/%d", i, n_samples)

            inputs = self._sample_shot_inputs(rng)
            rows.append(self._row(inputs, self.engine.simulate(inputs)))

        df = pd.DataFrame(rows, columns=COLUMNS)
        logger.info("Generated %d samples", len(df))
        return df

    def _sample_shot_inputs(self, rng: np.random.Generator) -> ShotInputs:
        speed = np.clip(rng.normal(85, 10), 50, 115)
        launch = np.clip(rng.normal(16, 4), 8, 26)
        path = rng.normal(0, 2.5)
        face = np.clip(rng.normal(0, 1.5), -5.0, 5.0)

        return ShotInputs(
            club_face_deg=float(face),
            club_path_deg=float(path),
            swing_speed_mph=float(speed),
            launch_angle_deg=float(launch)
        )

    def _row(self, inputs: ShotInputs, result: ShotResult) -> Dict:
        return {
            'face_angle': inputs.club_face_deg,
            'path_angle': inputs.club_path_deg,
            'swing_speed': inputs.swing_speed_mph,
            'launch_angle': inputs.launch_angle_deg,

            'side_spin': result.side_spin_rpm,
            'shot_category': result.shot_category.value,
            'status': result.status.value,

            'carry_distance': result.carry_yards,
            'lateral_deviation': result.lateral_deviation,
            'apex_height': result.apex_height,
            'flight_time': result.flight_time
        }


def category_counts(df: pd.DataFrame) -> Dict[str, int]:
    """Number of shots per shape label, most common first"""
    counts = df['shot_category'].value_counts()
    return {str(label): int(n) for label, n in counts.items()}
