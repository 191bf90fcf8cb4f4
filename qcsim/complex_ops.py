# qcsim/complex_ops.py
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Complex:
    real: float = 0.0
    imag: float = 0.0

    @staticmethod
    def from_builtin(z) -> "Complex":
        z = complex(z)
        return Complex(float(z.real), float(z.imag))

    @staticmethod
    def from_dict(d) -> "Complex":
        return Complex(float(d["real"]), float(d["imag"]))

    def to_builtin(self) -> complex:
        return complex(self.real, self.imag)

    def to_dict(self) -> dict:
        return {"real": self.real, "imag": self.imag}


def add(a: Complex, b: Complex) -> Complex:
    return Complex(a.real + b.real, a.imag + b.imag)


def multiply(a: Complex, b: Complex) -> Complex:
    return Complex(a.real * b.real - a.imag * b.imag,
                   a.real * b.imag + a.imag * b.real)


def magnitude(c: Complex) -> float:
    return math.sqrt(c.real * c.real + c.imag * c.imag)


def phase(c: Complex) -> float:
    """Angle in (-pi, pi]; atan2 gives 0 at the origin."""
    return math.atan2(c.imag, c.real)
