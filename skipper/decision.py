"""
Silence Decision Engine.

Decides, for one playback position, whether playback should currently be
sped up. The position must already include the subtitle delay.
"""

from typing import Optional

from .loader import DialogueInterval


def decide(position: float, next_interval: Optional[DialogueInterval], config) -> bool:
    """
    Return True when the player should be in silent (sped-up) mode.

    Rules, in order:
    1. No dialogue left ahead -> silent.
    2. Inside a dialogue interval (inclusive) -> not silent.
    3. In a gap: silent only if the time until the next line exceeds
       ``margin_before + min_silence_duration``, so there is room to speed
       up and still be back at normal speed before the line starts.
    """
    if next_interval is None:
        return True
    if next_interval.contains(position):
        return False
    gap = next_interval.start - position
    return gap > config.margin_before + config.min_silence_duration
