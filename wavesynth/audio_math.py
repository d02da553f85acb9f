"""Saturation curves and a volume-to-gain mapping."""


def saturate_soft(x: float) -> float:
    return x / (1.0 + abs(x))


def saturate_hard(x: float) -> float:
    """Rational tanh approximation; reaches 1 at x = 3."""
    return x * (27.0 + x * x) / (27.0 + 9.0 * x * x)


def volume_to_gain(volume: float) -> float:
    """Map a linear volume in [0, 1] to a perceptual gain (cubic curve)."""
    return volume * volume * volume