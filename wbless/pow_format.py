"""Human readable numbers with SI or binary prefixes."""

from dataclasses import dataclass

_PREFIXES = ("", "k", "M", "G", "T", "P")


@dataclass(frozen=True)
class PowFormat:
    """A quantity rendered with a scaled prefix when formatted.

    Format specs: empty for the compact form, ``>`` or ``<`` to pad to a
    fixed width, ``=`` to pad the number column.  A trailing width is
    accepted and ignored.
    """

    val: int
    unit: str
    binary: bool = False

    def _scaled(self) -> tuple[float, int]:
        base = 1024 if self.binary else 1000
        fraction = float(self.val)
        power = 0
        while power + 1 < len(_PREFIXES) and fraction / base >= 1:
            fraction /= base
            power += 1
        return fraction, power

    def __format__(self, spec: str) -> str:
        rest = spec[1:] if spec.startswith(":") else spec
        align = ""
        if rest and rest[0] in "<>=":
            align, rest = rest[0], rest[1:]
        rest = rest.lstrip("0123456789")
        if rest:
            raise ValueError(f"invalid format specification {spec!r}")

        fraction, power = self._scaled()
        number_width = 5 + int(self.binary)
        max_width = number_width + 1 + int(self.binary) + len(self.unit)
        prefix = _PREFIXES[power] + ("i" if self.binary and power else "")

        if align == ">":
            return format(str(self), f">{max_width}")
        if align == "<":
            return format(str(self), f"<{max_width}")
        if align == "=":
            padding = "" if power else ("  " if self.binary else " ")
            return f"{fraction:<{number_width}.1f}{padding}{prefix}{self.unit}"
        return f"{fraction:.1f}{prefix}{self.unit}"

    def __str__(self) -> str:
        return format(self, "")