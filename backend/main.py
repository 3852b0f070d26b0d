import logging
import math
import os
import re
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field, field_validator

from analysis.dispersion import DispersionGenerator
from physics.engine import FlightEngine, heading_vector
from physics.models import ShotInputs, ShotResult
from shape.classifier import classify
from shape.models import ShotCategory

HOST = os.getenv("GOLF_SIM_HOST", "0.0.0.0")
PORT = int(os.getenv("GOLF_SIM_PORT", "8000"))
LOG_LEVEL = os.getenv("GOLF_SIM_LOG_LEVEL", "INFO").upper()

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

YARDS_TO_METERS = FlightEngine.YARDS_TO_METERS
MAX_SWEEP_SHOTS = 2500

app = FastAPI(title="Golf Shot Simulator API", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# REQUEST / RESPONSE MODELS
# ============================================================================

_NUMERIC_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _lenient_float(value: Any) -> float:
    """
    Form-style parsing: the leading number of the text is used, so "12abc"
    reads as 12 and "1.5.2" as 1.5. Blanks, junk and non-finite numbers become 0.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
    else:
        match = _NUMERIC_PREFIX.match(value) if isinstance(value, str) else None
        if match is None:
            return 0.0
        number = float(match.group())
    return number if math.isfinite(number) else 0.0


class ShotRequest(BaseModel):
    club_face: float = Field(0, description="Face angle in degrees, + = open")
    club_path: float = Field(0, description="Swing path in degrees")
    swing_speed: float = Field(75, description="Clubhead speed in mph")
    launch_angle: float = Field(19, description="Launch angle in degrees")
    pin_yards: float = Field(150, description="Pin distance in yards")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return _lenient_float(value)

    def to_inputs(self) -> ShotInputs:
        return ShotInputs(
            club_face_deg=self.club_face,
            club_path_deg=self.club_path,
            swing_speed_mph=self.swing_speed,
            launch_angle_deg=self.launch_angle,
            target_yards=self.pin_yards,
        )


class ShotResponse(ShotResult):
    pin_meters: float
    face_heading: List[float]
    path_heading: List[float]


class ClassifyRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    face_angle: float
    path_angle: float
    side_spin: float = 0


class ClassifyResponse(BaseModel):
    shot_category: ShotCategory


class DispersionRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    face_angles: List[float]
    path_angles: List[float]
    swing_speed: float = Field(75, ge=0)
    launch_angle: float = 19


# ============================================================================
# API ENDPOINTS
# ============================================================================

flight_engine = FlightEngine()
dispersion_generator = DispersionGenerator(flight_engine)


@app.get("/")
async def root():
    return {
        "message": "Golf Shot Simulator API",
        "version": "1.0.0",
        "endpoints": ["/simulate", "/classify", "/dispersion", "/health"]
    }


@app.post("/simulate", response_model=ShotResponse)
def simulate_shot(request: ShotRequest):
    """Fly one shot and return everything the renderer needs"""
    inputs = request.to_inputs()
    try:
        result = flight_engine.simulate(inputs)
    except Exception as e:
        logger.exception("Simulation failed for %s", inputs)
        raise HTTPException(status_code=500, detail=str(e))

    return ShotResponse(
        **dict(result),
        pin_meters=inputs.target_yards * YARDS_TO_METERS,
        face_heading=heading_vector(inputs.club_face_deg).tolist(),
        path_heading=heading_vector(inputs.club_path_deg).tolist(),
    )


@app.post("/classify", response_model=ClassifyResponse)
async def classify_shot(request: ClassifyRequest):
    return ClassifyResponse(
        shot_category=classify(request.face_angle, request.path_angle, request.side_spin)
    )


@app.post("/dispersion")
def dispersion(request: DispersionRequest) -> List[Dict[str, Any]]:
    """Outcome table for every face/path pair"""
    if not request.face_angles or not request.path_angles:
        raise HTTPException(status_code=400, detail="face_angles and path_angles must be non-empty")
    if len(request.face_angles) * len(request.path_angles) > MAX_SWEEP_SHOTS:
        raise HTTPException(status_code=400, detail=f"Sweep limited to {MAX_SWEEP_SHOTS} shots")
    try:
        df = dispersion_generator.sweep(
            request.face_angles,
            request.path_angles,
            swing_speed=request.swing_speed,
            launch_angle=request.launch_angle,
        )
    except Exception as e:
        logger.exception("Dispersion sweep failed")
        raise HTTPException(status_code=500, detail=str(e))
    return df.to_dict(orient="records")


@app.get("/health")
async def health_check():
    return {"status": "healthy", "physics_engine": "operational"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
