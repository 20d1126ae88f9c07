"""Named number formats for {id, number, <style>} arguments.

A style name either refers to a builtin ICU style ("integer", "percent")
or to an application-registered format. Unknown style names format with
the default options.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

__all__ = [
    "DEFAULT_NUMBER_FORMAT",
    "NUMBER_FORMATS",
    "NumberFormatOptions",
    "resolve_number_format",
]


@dataclass(frozen=True, slots=True)
class NumberFormatOptions:
    """Options of one named number format (Intl.NumberFormat subset).

    Attributes:
        minimum_fraction_digits: Minimum decimal places
        maximum_fraction_digits: Maximum decimal places
        use_grouping: Use the locale's grouping separator
        percent: Multiply by 100 and append the locale's percent sign
    """

    minimum_fraction_digits: int = 0
    maximum_fraction_digits: int = 3
    use_grouping: bool = True
    percent: bool = False

    def __post_init__(self) -> None:
        """Validate digit counts."""
        if self.minimum_fraction_digits < 0 or self.maximum_fraction_digits < 0:
            msg = "fraction digits must be non-negative"
            raise ValueError(msg)
        if self.maximum_fraction_digits < self.minimum_fraction_digits:
            msg = "maximum_fraction_digits must be >= minimum_fraction_digits"
            raise ValueError(msg)


DEFAULT_NUMBER_FORMAT = NumberFormatOptions()

NUMBER_FORMATS: Mapping[str, NumberFormatOptions] = MappingProxyType({
    # ICU builtins
    "integer": NumberFormatOptions(maximum_fraction_digits=0),
    "percent": NumberFormatOptions(maximum_fraction_digits=0, percent=True),
    # Report units; values are converted to the unit before rendering
    "bytes": NumberFormatOptions(maximum_fraction_digits=0),
    "milliseconds": NumberFormatOptions(maximum_fraction_digits=0),
    "seconds": NumberFormatOptions(minimum_fraction_digits=1, maximum_fraction_digits=1),
    "extendedPercent": NumberFormatOptions(maximum_fraction_digits=2, percent=True),
})


def resolve_number_format(
    style: str | None, formats: Mapping[str, NumberFormatOptions] = NUMBER_FORMATS
) -> NumberFormatOptions:
    """Return the options for a number style, falling back to the default.

    Example:
        >>> resolve_number_format("seconds").minimum_fraction_digits
        1
        >>> resolve_number_format("no-such-style") == DEFAULT_NUMBER_FORMAT
        True
    """
    if style is None:
        return DEFAULT_NUMBER_FORMAT
    return formats.get(style, DEFAULT_NUMBER_FORMAT)
