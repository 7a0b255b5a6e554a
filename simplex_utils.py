import warnings
from dataclasses import dataclass
from typing import Optional

import numpy as np

from linear_program import MAXIMIZE

OPTIMAL = "optimal"
UNBOUNDED = "unbounded"


class ShapeMismatch(ValueError):
    """A constraint's coefficient count differs from the number of variables."""


class DidNotConverge(RuntimeError):
    """The pivot loop hit its iteration cap."""


@dataclass(frozen=True)
class Solution:
    status: str
    x: Optional[tuple] = None
    z: Optional[float] = None


def check_shape(program):
    n = program.n_vars
    if n < 1:
        raise ShapeMismatch("LP needs at least one decision variable.")
    if program.n_constraints < 1:
        raise ShapeMismatch("LP needs at least one constraint.")
    for i, con in enumerate(program.constraints):
        if len(con.coefficients) != n:
            raise ShapeMismatch(
                f"Constraint {i+1} has {len(con.coefficients)} coefficients, expected {n}."
            )


def variable_names(program):
    return [f"x{k+1}" for k in range(program.n_vars)] + [f"s{i+1}" for i in range(program.n_constraints)]


def to_reduced_cost_row(c, objective):
    # max is solved as min of -c so "any negative entry" is the single improvement test
    c = np.asarray(c, dtype=float).reshape(-1)
    return -c if objective == MAXIMIZE else c.copy()


def build_tableau(program):
    check_shape(program)
    n = program.n_vars
    m = program.n_constraints

    for i, con in enumerate(program.constraints):
        if con.sense != "<=":
            warnings.warn(
                f"Constraint {i+1} uses '{con.sense}' and is treated as '<=' in the tableau.",
                UserWarning,
                stacklevel=2,
            )

    T = np.zeros((m + 1, n + m + 1))
    T[0, :n] = to_reduced_cost_row(program.c, program.objective)
    T[1:, :n] = program.A
    T[1:, n:n + m] = np.eye(m)
    T[1:, -1] = program.b
    return T


def can_improve(T, tol=0.0):
    return bool(np.any(T[0, :-1] < -tol))


def find_pivot_column(T, tol=0.0, rule="bland"):
    reduced_costs = T[0, :-1]
    eligible = np.where(reduced_costs < -tol)[0]
    if eligible.size == 0:
        return None
    if rule == "bland":
        return int(np.min(eligible))
    # argmin returns the first index among equal minima
    return int(np.argmin(reduced_costs))


def pivot_ratios(T, col, tol=0.0):
    ratios = np.full(T.shape[0] - 1, np.inf)
    column = T[1:, col]
    rhs = T[1:, -1]
    mask = column > tol
    ratios[mask] = rhs[mask] / column[mask]
    return ratios


def find_pivot_row(T, col, tol=0.0):
    ratios = pivot_ratios(T, col, tol)
    leave = int(np.argmin(ratios))
    if not np.isfinite(ratios[leave]):
        return None
    return leave + 1


def pivot(T, row, col):
    piv = T[row, col]
    if piv == 0:
        raise ValueError(f"Pivot element at ({row}, {col}) is zero.")
    T[row, :] /= piv
    for r in range(T.shape[0]):
        if r != row:
            T[r, :] -= T[r, col] * T[row, :]
    return T


def initial_basis(program):
    # every slack starts basic in its own row
    return np.arange(program.n_vars, program.n_vars + program.n_constraints)


def basic_row(T, col, tol=0.0):
    if abs(T[0, col]) > tol:
        return None
    column = T[1:, col]
    ones = np.where(np.abs(column - 1.0) <= tol)[0]
    if ones.size != 1:
        return None
    others = np.delete(column, ones[0])
    if np.any(np.abs(others) > tol):
        return None
    return int(ones[0]) + 1


def basis_from_tableau(T, tol=0.0):
    """Read a basis off a tableau when none was tracked.

    Each row goes to at most one unit column with zero reduced cost. Slack
    columns are tried first, so identical columns resolve to the slack. Rows
    with no such column get -1.
    """
    m = T.shape[0] - 1
    n_cols = T.shape[1] - 1
    n_vars = n_cols - m
    basis = np.full(m, -1, dtype=int)
    for j in list(range(n_vars, n_cols)) + list(range(n_vars)):
        r = basic_row(T, j, tol)
        if r is not None and basis[r - 1] < 0:
            basis[r - 1] = j
    return basis


def objective_from_tableau(T, objective):
    # row 0 built from -c (max) accumulates +z, from +c (min) it accumulates -z
    z = float(T[0, -1])
    z = z if objective == MAXIMIZE else -z
    return z + 0.0  # no -0.0


def extract_solution(T, program, tol=0.0, basis=None):
    if basis is None:
        basis = basis_from_tableau(T, tol)
    x = np.zeros(program.n_vars)
    for i, bi in enumerate(basis):
        if 0 <= bi < program.n_vars:
            x[bi] = T[i + 1, -1]
    return Solution(OPTIMAL, tuple(float(v) for v in x), objective_from_tableau(T, program.objective))


def _simplex_core(T, basis, names, history, program, opts):
    tol = opts["tol"]
    max_iter = opts["max_iter"]
    step = 0

    while can_improve(T, tol):
        enter_col = find_pivot_column(T, tol, opts["pivot_rule"])
        ratios = pivot_ratios(T, enter_col, tol)
        leave_row = find_pivot_row(T, enter_col, tol)

        if leave_row is None:
            _record(history, T, basis, names, opts,
                    f"Unbounded: no positive entry in column {names[enter_col]}, objective can grow without limit",
                    "unbounded", iteration=step + 1,
                    info={"entering": names[enter_col], "ratios": ratios})
            return T, basis, step, UNBOUNDED

        if step >= max_iter:
            raise DidNotConverge(f"Simplex did not converge within {max_iter} pivots.")

        step += 1
        entering = names[enter_col]
        leaving = names[basis[leave_row - 1]]
        info = {
            "entering": entering,
            "leaving": leaving,
            "ratios": ratios,
            "pivot_value": float(T[leave_row, enter_col]),
            "reduced_cost": float(T[0, enter_col]),
        }
        _record(history, T, basis, names, opts,
                f"Iteration {step}: pivot on row {leave_row}, column {enter_col} "
                f"({entering} enters, {leaving} leaves)",
                "pivot", pivot=(leave_row, enter_col), iteration=step, info=info)

        pivot(T, leave_row, enter_col)
        basis[leave_row - 1] = enter_col

        _record(history, T, basis, names, opts, f"Iteration {step}: after pivot operation",
                "after_pivot", iteration=step, info={"entering": entering, "leaving": leaving})

    return T, basis, step, OPTIMAL


def _record(history, T, basis, names, opts, description, kind, pivot=None, iteration=0, info=None):
    step = history.record(T, description, kind, pivot=pivot, iteration=iteration, info=info, basis=basis)
    if opts.get("verbose"):
        print(description)
        print(_tableau_to_text(step.tableau, names, step.basis, step.info.get("ratios"), opts["tol"]))
        print()
    return step


def _tableau_to_text(T, names, basis=None, ratios=None, tol=1e-10):
    m = T.shape[0] - 1
    n = T.shape[1] - 1

    def fnum(v):
        if not np.isfinite(v):
            return "inf"
        if abs(v) < 1e-12:
            v = 0.0
        return f"{v:.6g}"

    if basis is None:
        basis = basis_from_tableau(T, tol)

    rows = []
    header = ["row"] + list(names) + ["rhs", "ratio"]
    rows.append(header)
    rows.append(["Rz"] + [fnum(T[0, j]) for j in range(n)] + [fnum(T[0, -1]), "-"])

    for i in range(1, m + 1):
        bi = basis[i - 1]
        label = names[bi] if 0 <= bi < len(names) else "?"
        ratio_txt = "-" if (ratios is None or len(ratios) == 0 or not np.isfinite(ratios[i - 1])) else fnum(ratios[i - 1])
        row = [f"R{i}({label})"] + [fnum(T[i, j]) for j in range(n)] + [fnum(T[i, -1]), ratio_txt]
        rows.append(row)

    widths = [max(len(str(rows[r][c])) for r in range(len(rows))) for c in range(len(rows[0]))]

    out = []
    out.append(" | ".join(str(rows[0][c]).rjust(widths[c]) for c in range(len(widths))))
    out.append("-+-".join("-" * widths[c] for c in range(len(widths))))
    for r in range(1, len(rows)):
        out.append(" | ".join(str(rows[r][c]).rjust(widths[c]) for c in range(len(widths))))
    return "\n".join(out)


def _defaults(opts, program=None):
    out = dict(opts)
    out.setdefault("tol", 1e-10)
    out.setdefault("pivot_rule", "bland")
    out.setdefault("max_iter", None)
    out.setdefault("verbose", False)
    out.setdefault("launch_viewer", False)
    out.setdefault("report_pdf_path", None)

    tol = out["tol"]
    if isinstance(tol, bool) or not isinstance(tol, (int, float)) or not np.isfinite(tol) or tol < 0:
        raise ValueError("opts['tol'] must be a non-negative finite number.")
    out["tol"] = float(tol)

    pivot_rule = str(out["pivot_rule"]).strip().lower()
    if pivot_rule not in {"dantzig", "bland"}:
        raise ValueError("opts['pivot_rule'] must be 'dantzig' or 'bland'.")
    out["pivot_rule"] = pivot_rule

    max_iter = out["max_iter"]
    if max_iter is None:
        if program is not None:
            out["max_iter"] = 10 * (program.n_vars + program.n_constraints)
    elif isinstance(max_iter, bool) or not isinstance(max_iter, int) or max_iter < 0:
        raise ValueError("opts['max_iter'] must be None or a non-negative integer.")

    report_pdf_path = out["report_pdf_path"]
    if isinstance(report_pdf_path, bool):
        out["report_pdf_path"] = "simplex_report.pdf" if report_pdf_path else None
    elif report_pdf_path is None:
        pass
    elif isinstance(report_pdf_path, str) and report_pdf_path.strip():
        out["report_pdf_path"] = report_pdf_path.strip()
    else:
        raise ValueError("opts['report_pdf_path'] must be None, True/False, or a non-empty path string.")
    return out
