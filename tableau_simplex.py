from linear_program import LinearProgram
from simplex_utils import (
    OPTIMAL,
    Solution,
    UNBOUNDED,
    _defaults,
    _record,
    _simplex_core,
    build_tableau,
    extract_solution,
    initial_basis,
    variable_names,
)
from simplex_viewer import export_states_pdf_report, simplex_viewer
from step_history import StepHistory


def tableau_simplex(program, opts=None):
    if opts is None:
        opts = {}
    opts = _defaults(opts, program)

    T = build_tableau(program)
    names = variable_names(program)
    basis = initial_basis(program)
    history = StepHistory()

    _record(history, T, basis, names, opts, "Initial tableau", "initial")
    T, basis, iterations, status = _simplex_core(T, basis, names, history, program, opts)

    if status == OPTIMAL:
        solution = extract_solution(T, program, opts["tol"], basis)
        _record(history, T, basis, names, opts, "Optimal solution found", "optimal", iteration=iterations,
                info={"x": solution.x, "z": solution.z})
    else:
        solution = Solution(UNBOUNDED)
    history.close()

    out = {
        "solution": solution,
        "status": solution.status,
        "x": solution.x,
        "z": solution.z,
        "tableau": T.copy(),
        "basis": basis.copy(),
        "var_names": names[:],
        "states": history,
        "iterations": iterations,
    }

    if opts["report_pdf_path"] is not None:
        export_states_pdf_report(history, program, opts["report_pdf_path"], names)

    if opts["launch_viewer"]:
        simplex_viewer(history, program, names)

    return out


def demo():
    """Small demo run. Safe to import this module from other files."""
    # Maximize:
    #   z = 3x1 + 5x2
    #
    # Subject to:
    #   1x1        <= 4
    #          2x2 <= 12
    #   3x1 +  2x2 <= 18
    #   x1, x2 >= 0

    program = LinearProgram.from_arrays(
        c=[3, 5],
        A=[
            [1, 0],
            [0, 2],
            [3, 2],
        ],
        b=[4, 12, 18],
    )

    res = tableau_simplex(program, opts={"verbose": True})
    print("x* =", res["x"], "z* =", res["z"])
    return res


if __name__ == "__main__":
    demo()
