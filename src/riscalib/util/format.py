"""Human-readable formatting of labelled numeric values."""

from __future__ import annotations

from collections.abc import Sequence


def format_value_vector(
    descriptions: Sequence[str],
    values: Sequence[float],
    value_format: str = "{:+011.6f}",
) -> str:
    """Format labelled values as ``'label': value`` pairs.

    Example:
        >>> format_value_vector(["ax", "ay"], [0.5, -9.81])
        "'ax': +000.500000, 'ay': -009.810000"

    Args:
        descriptions: One label per value
        values: Values to format
        value_format: ``str.format`` pattern applied to every value

    Returns:
        Comma separated ``'label': value`` pairs

    Raises:
        ValueError: If the number of labels and values differ
    """
    if len(descriptions) != len(values):
        raise ValueError(
            f"Got {len(descriptions)} descriptions for {len(values)} values"
        )
    return ", ".join(
        f"'{desc}': " + value_format.format(float(val))
        for desc, val in zip(descriptions, values)
    )
