"""Incident marker opacity oscillator.

Each incident marker bounces its opacity between ``AnimationConfig.lower``
and ``AnimationConfig.upper`` in linear steps, one step per frame. The
direction flips when the value reaches a bound; the value itself is never
clamped, so it can overshoot a bound by less than one step.
"""

from enum import StrEnum, auto
from typing import Iterable, Tuple

from location_tracking.config import DEFAULT_ANIMATION_CONFIG, AnimationConfig
from location_tracking.stage import Graphics
from location_tracking.types import AlphaDirection


class OscillatorPhase(StrEnum):
    RISING = auto()
    FALLING = auto()


def phase_of(direction: AlphaDirection) -> OscillatorPhase:
    if direction == AlphaDirection.RISING:
        return OscillatorPhase.RISING
    return OscillatorPhase.FALLING


def next_direction(
    alpha: float,
    direction: AlphaDirection,
    config: AnimationConfig = DEFAULT_ANIMATION_CONFIG,
) -> AlphaDirection:
    """Direction to apply for this step, given the current opacity."""
    if alpha >= config.upper:
        direction = AlphaDirection.FALLING
    if alpha <= config.lower:
        direction = AlphaDirection.RISING
    return direction


def step_alpha(
    alpha: float,
    direction: AlphaDirection,
    config: AnimationConfig = DEFAULT_ANIMATION_CONFIG,
) -> Tuple[float, AlphaDirection]:
    """Advance one frame. Returns the new ``(alpha, direction)``."""
    direction = next_direction(alpha, direction, config)
    return alpha + config.step * direction, direction


def animate(
    markers: Iterable[Graphics], config: AnimationConfig = DEFAULT_ANIMATION_CONFIG
) -> None:
    """Apply one oscillator step to every marker, in place."""
    for graphics in markers:
        graphics.alpha, graphics.alpha_direction = step_alpha(
            graphics.alpha, graphics.alpha_direction, config
        )
