from linear_program import MAXIMIZE, MINIMIZE, Constraint, LinearProgram, program_to_text
from simplex_utils import check_shape


def dual_of(program):
    """Dual of a canonical LP (max with <= rows, or min with >= rows, x >= 0).

    Mixed-relation duality rules are not applied: the dual relation depends
    only on the primal objective direction.
    """
    check_shape(program)
    objective = MINIMIZE if program.objective == MAXIMIZE else MAXIMIZE
    sense = ">=" if program.objective == MAXIMIZE else "<="

    c_dual = [con.rhs for con in program.constraints]
    constraints = []
    for k in range(program.n_vars):
        column = [con.coefficients[k] for con in program.constraints]
        constraints.append(Constraint(tuple(column), sense, program.c[k]))
    return LinearProgram(objective, tuple(c_dual), tuple(constraints))


def dual_variable_sign(program):
    return ">= 0" if program.objective == MAXIMIZE else "<= 0"


def primal_dual_text(program):
    dual = dual_of(program)
    return "\n".join([
        "PRIMAL",
        program_to_text(program, var_prefix="x"),
        "",
        "DUAL",
        program_to_text(dual, var_prefix="y", var_sign=dual_variable_sign(program)),
    ])
