from enum import Enum


class ShotCategory(str, Enum):
    """Shot shape labels: start direction, curvature, or both combined"""

    STRAIGHT = "Straight"
    PUSH = "Push"
    PULL = "Pull"
    DRAW = "Draw"
    FADE = "Fade"
    HOOK = "Hook"
    SLICE = "Slice"
    PUSH_DRAW = "Push-Draw"
    PUSH_FADE = "Push-Fade"
    PUSH_HOOK = "Push-Hook"
    PUSH_SLICE = "Push-Slice"
    PULL_DRAW = "Pull-Draw"
    PULL_FADE = "Pull-Fade"
    PULL_HOOK = "Pull-Hook"
    PULL_SLICE = "Pull-Slice"

    def __str__(self) -> str:
        return self.value
