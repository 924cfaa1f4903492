"""Winner selection."""

from luckydraw.mechanics.draw.draw_engine import DrawEngine, DrawResult
from luckydraw.mechanics.draw.random_source import PseudoRandomSource, RandomSource

__all__ = ["DrawEngine", "DrawResult", "PseudoRandomSource", "RandomSource"]
