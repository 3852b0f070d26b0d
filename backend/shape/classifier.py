from .models import ShotCategory

# Degrees either side of zero that still count as square
FACE_THRESHOLD = 0.5
DIFF_THRESHOLD = 0.5

# Side spin above which a draw becomes a hook and a fade becomes a slice
BIG_SPIN = 2400


def start_direction(face_deg: float) -> str:
    """Where the ball starts, decided by the face alone"""
    if face_deg > FACE_THRESHOLD:
        return "Push"  # starts right
    if face_deg < -FACE_THRESHOLD:
        return "Pull"  # starts left
    return "Straight"


def curve_direction(face_deg: float, path_deg: float, side_spin: float) -> str:
    """
    Curvature from path relative to face.

    path - face > 0 curves left (Draw/Hook), < 0 curves right (Fade/Slice).
    Spin magnitude above BIG_SPIN escalates the curve.
    """
    diff = path_deg - face_deg
    if diff > DIFF_THRESHOLD:
        return "Hook" if abs(side_spin) > BIG_SPIN else "Draw"
    if diff < -DIFF_THRESHOLD:
        return "Slice" if abs(side_spin) > BIG_SPIN else "Fade"
    return "Straight"


def classify(face_deg: float, path_deg: float, side_spin: float) -> ShotCategory:
    start = start_direction(face_deg)
    curve = curve_direction(face_deg, path_deg, side_spin)

    if start == "Straight" and curve == "Straight":
        return ShotCategory.STRAIGHT
    if start == "Straight":
        return ShotCategory(curve)
    if curve == "Straight":
        return ShotCategory(start)
    return ShotCategory(f"{start}-{curve}")
