"""Bundled example problems for quick experiments from the CLI."""

from dataclasses import dataclass

from roots_lab.data.methods import Method


@dataclass(frozen=True, slots=True)
class Preset:
    """A ready-to-run root-finding problem."""

    name: str
    expression: str
    derivative: str | None
    lower: float
    upper: float
    method: Method
    description: str


_PRESETS: dict[str, Preset] = {
    "cubic": Preset(
        name="cubic",
        expression="4*x**3 - 6*x**2 + 7*x - 2.3",
        derivative="12*x**2 - 12*x + 7",
        lower=0.0,
        upper=1.0,
        method=Method.BISECTION,
        description="Cubic with a single real root in [0, 1]",
    ),
    "cosine": Preset(
        name="cosine",
        expression="x**2*sqrt(Abs(cos(x))) - 5",
        derivative=None,
        lower=2.0,
        upper=3.0,
        method=Method.FALSE_POSITION,
        description="Damped cosine curve, numeric derivative",
    ),
}


def get_preset(name: str) -> Preset:
    """
    Look up a preset by name (case-insensitive).

    Raises:
        ValueError: If no preset has that name
    """
    key = name.strip().lower()
    if key not in _PRESETS:
        valid = sorted(_PRESETS)
        msg = f"Unknown preset: '{name}'. Valid: {valid}"
        raise ValueError(msg)
    return _PRESETS[key]


def list_presets() -> list[Preset]:
    """All bundled presets in definition order."""
    return list(_PRESETS.values())
