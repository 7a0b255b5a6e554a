from dataclasses import dataclass

import numpy as np

MAXIMIZE = "max"
MINIMIZE = "min"
SENSES = ("<=", "=", ">=")


@dataclass(frozen=True)
class Constraint:
    coefficients: tuple
    sense: str
    rhs: float

    def __post_init__(self):
        object.__setattr__(self, "coefficients", tuple(float(v) for v in self.coefficients))
        object.__setattr__(self, "rhs", float(self.rhs))
        if self.sense not in SENSES:
            raise ValueError("sense entries must be <=, >=, =")


@dataclass(frozen=True)
class LinearProgram:
    """
    max/min  c^T x
    s.t.     A x (<=, =, >=) b
             x >= 0

    Shapes are not checked here so a program can be held while it is being
    edited; the tableau builder and the dual transform check them.
    """
    objective: str
    c: tuple
    constraints: tuple

    def __post_init__(self):
        if self.objective not in (MAXIMIZE, MINIMIZE):
            raise ValueError("objective must be 'max' or 'min'")
        object.__setattr__(self, "c", tuple(float(v) for v in self.c))
        object.__setattr__(self, "constraints", tuple(self.constraints))

    @classmethod
    def from_arrays(cls, c, A, b, sense=None, objective=MAXIMIZE):
        if sense is None:
            sense = ["<="] * len(b)
        if not (len(A) == len(b) == len(sense)):
            raise ValueError("A, b and sense must have one entry per constraint")
        constraints = [Constraint(tuple(row), s, rhs) for row, s, rhs in zip(A, sense, b)]
        return cls(objective, tuple(c), tuple(constraints))

    @property
    def n_vars(self):
        return len(self.c)

    @property
    def n_constraints(self):
        return len(self.constraints)

    @property
    def is_max(self):
        return self.objective == MAXIMIZE

    @property
    def A(self):
        return np.array([con.coefficients for con in self.constraints], dtype=float)

    @property
    def b(self):
        return np.array([con.rhs for con in self.constraints], dtype=float)

    @property
    def sense(self):
        return [con.sense for con in self.constraints]


def _fterm(coef, name, first):
    if coef == 0:
        return ""
    sign = "-" if coef < 0 else ("" if first else "+")
    mag = abs(coef)
    mag_txt = "" if mag == 1 else f"{mag:.6g}"
    txt = f"{sign}{mag_txt}{name}"
    return txt if first else f" {sign} {mag_txt}{name}"


def _linear_expr(coeffs, prefix):
    parts = []
    for j, coef in enumerate(coeffs):
        part = _fterm(coef, f"{prefix}{j+1}", first=not parts)
        if part:
            parts.append(part)
    return "".join(parts) if parts else "0"


def program_to_text(program, var_prefix="x", var_sign=">= 0"):
    lines = [f"{program.objective} z = {_linear_expr(program.c, var_prefix)}", "s.t."]
    for con in program.constraints:
        lines.append(f"    {_linear_expr(con.coefficients, var_prefix)} {con.sense} {con.rhs:.6g}")
    names = ", ".join(f"{var_prefix}{j+1}" for j in range(program.n_vars))
    lines.append(f"    {names} {var_sign}")
    return "\n".join(lines)
