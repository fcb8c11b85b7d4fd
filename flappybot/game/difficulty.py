# flappybot/game/difficulty.py
from __future__ import annotations
from .config import Tuning, DEFAULT_TUNING, JUMP_REFRESH_EXPONENT


def difficulty_multiplier(score: int, tuning: Tuning = DEFAULT_TUNING) -> float:
    """
    Scalar applied to gravity and scroll speed.
    - score=0 -> 1.0
    - grows by `difficulty_step` per point, never above `difficulty_cap`
    """
    return min(1.0 + score * tuning.difficulty_step, tuning.difficulty_cap)


def jump_difficulty(score: int, tuning: Tuning = DEFAULT_TUNING) -> float:
    """Flap impulse multiplier, linear in score up to `jump_difficulty_cap`."""
    return min(1.0 + score * tuning.jump_difficulty_step, tuning.jump_difficulty_cap)


def _above_threshold(refresh_rate: float, tuning: Tuning) -> bool:
    return refresh_rate > tuning.high_refresh_threshold_hz


def refresh_scale(refresh_rate: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    """
    Per-tick scale for gravity and scroll speed.
    Above the high-refresh threshold the engine ticks more often per second,
    so each tick must move proportionally less: ref / rate. Otherwise 1.0.
    """
    if not _above_threshold(refresh_rate, tuning):
        return 1.0
    return tuning.reference_refresh_hz / refresh_rate


def jump_refresh_scale(refresh_rate: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    """Flap impulse scale: (rate / ref) ** JUMP_REFRESH_EXPONENT above the threshold, else 1.0."""
    if not _above_threshold(refresh_rate, tuning):
        return 1.0
    return (refresh_rate / tuning.reference_refresh_hz) ** JUMP_REFRESH_EXPONENT


def effective_gravity(score: int, refresh_rate: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    return tuning.gravity * difficulty_multiplier(score, tuning) * refresh_scale(refresh_rate, tuning)


def effective_speed(score: int, refresh_rate: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    return tuning.pipe_speed * difficulty_multiplier(score, tuning) * refresh_scale(refresh_rate, tuning)


def effective_jump(score: int, refresh_rate: float, tuning: Tuning = DEFAULT_TUNING) -> float:
    return tuning.jump_force * jump_difficulty(score, tuning) * jump_refresh_scale(refresh_rate, tuning)
