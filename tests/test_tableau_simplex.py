import math

import numpy as np
import pytest

from linear_program import LinearProgram
from simplex_utils import DidNotConverge, ShapeMismatch, build_tableau
from tableau_simplex import tableau_simplex


def test_textbook_optimum(textbook):
    res = tableau_simplex(textbook)
    assert res["status"] == "optimal"
    assert res["solution"].status == "optimal"
    assert res["x"] == pytest.approx((4.0, 0.0))
    assert res["z"] == pytest.approx(12.0)
    assert res["iterations"] == 1
    assert res["var_names"] == ["x1", "x2", "s1", "s2"]


def test_textbook_steps(textbook):
    states = tableau_simplex(textbook)["states"]
    assert len(states) == 1 + 2 * 1 + 1
    assert [s.kind for s in states] == ["initial", "pivot", "after_pivot", "optimal"]
    assert [s.pivot for s in states] == [None, (1, 0), None, None]
    assert states[0].description == "Initial tableau"
    assert states[1].description == "Iteration 1: pivot on row 1, column 0 (x1 enters, s1 leaves)"
    assert states[2].description == "Iteration 1: after pivot operation"
    assert states[3].description == "Optimal solution found"
    assert states[1].info["entering"] == "x1"
    assert states[1].info["leaving"] == "s1"
    assert states[1].info["pivot_value"] == 1.0


def test_snapshots_are_frozen_copies(textbook):
    res = tableau_simplex(textbook)
    first = res["states"][0].tableau
    np.testing.assert_array_equal(first, build_tableau(textbook))
    assert not first.flags.writeable
    with pytest.raises(ValueError):
        first[0, 0] = 1.0
    np.testing.assert_array_equal(res["states"][1].tableau, first)
    np.testing.assert_allclose(res["states"][2].tableau, res["tableau"])


def test_production_mix_three_pivots(production):
    res = tableau_simplex(production)
    assert res["x"] == pytest.approx((2.0, 6.0))
    assert res["z"] == pytest.approx(36.0)
    assert res["iterations"] == 3
    assert len(res["states"]) == 1 + 2 * 3 + 1
    pivots = [s.pivot for s in res["states"] if s.kind == "pivot"]
    assert pivots == [(1, 0), (3, 1), (2, 2)]


def test_dantzig_rule_takes_fewer_pivots(production):
    res = tableau_simplex(production, opts={"pivot_rule": "dantzig"})
    assert res["x"] == pytest.approx((2.0, 6.0))
    assert res["z"] == pytest.approx(36.0)
    assert res["iterations"] == 2
    assert len(res["states"]) == 6


def test_unbounded(unbounded):
    res = tableau_simplex(unbounded)
    assert res["status"] == "unbounded"
    assert res["x"] is None
    assert res["z"] is None
    assert res["iterations"] == 1
    states = res["states"]
    assert len(states) == 1 + 2 * 1 + 1
    assert states[-1].kind == "unbounded"
    assert states[-1].description.startswith("Unbounded")
    assert states[-1].info["entering"] == "x2"


def test_minimize():
    program = LinearProgram.from_arrays(
        [-2, -3, 1],
        [[1, 1, 1], [2, 1, 0], [0, 1, 3]],
        [10, 12, 9],
        objective="min",
    )
    res = tableau_simplex(program)
    assert res["status"] == "optimal"
    assert res["x"] == pytest.approx((1.0, 9.0, 0.0))
    assert res["z"] == pytest.approx(-29.0)
    assert res["iterations"] == 3


def test_minimize_already_optimal():
    program = LinearProgram.from_arrays([1, 2], [[1, 1]], [5], objective="min")
    res = tableau_simplex(program)
    assert res["x"] == (0.0, 0.0)
    assert res["z"] == 0.0
    assert math.copysign(1.0, res["z"]) == 1.0
    assert res["basis"].tolist() == [2]
    assert [s.kind for s in res["states"]] == ["initial", "optimal"]


def test_shape_mismatch_before_solving():
    program = LinearProgram.from_arrays([1, 2], [[1, 2, 3]], [4])
    with pytest.raises(ShapeMismatch):
        tableau_simplex(program)


def test_iteration_cap(production):
    with pytest.raises(DidNotConverge, match="2 pivots"):
        tableau_simplex(production, opts={"max_iter": 2})
    assert tableau_simplex(production, opts={"max_iter": 3})["iterations"] == 3


def test_iteration_cap_zero(textbook):
    with pytest.raises(DidNotConverge):
        tableau_simplex(textbook, opts={"max_iter": 0})


def test_resolve_gives_new_closed_history(textbook):
    first = tableau_simplex(textbook)["states"]
    second = tableau_simplex(textbook)["states"]
    assert first is not second
    assert first.closed and second.closed
    with pytest.raises(RuntimeError):
        first.record(np.zeros((1, 1)), "late", "initial")
    assert len(first) == len(second) == 4


def test_verbose_prints_steps(textbook, capsys):
    tableau_simplex(textbook, opts={"verbose": True})
    out = capsys.readouterr().out
    assert "Initial tableau" in out
    assert "Iteration 1: after pivot operation" in out
    assert "Optimal solution found" in out
    assert "R1(x1)" in out


def test_quiet_by_default(textbook, capsys):
    tableau_simplex(textbook)
    assert capsys.readouterr().out == ""


def test_report_written(textbook, tmp_path):
    path = tmp_path / "report.pdf"
    tableau_simplex(textbook, opts={"report_pdf_path": str(path)})
    assert path.exists()
    assert path.read_bytes().startswith(b"%PDF")


def test_leaving_variable_is_the_tracked_basic_slack():
    # x1's column equals s1's column at the start
    program = LinearProgram.from_arrays([1, 3], [[1, 0], [0, 1]], [4, 6])
    res = tableau_simplex(program)
    pivots = [s for s in res["states"] if s.kind == "pivot"]
    assert pivots[0].description == "Iteration 1: pivot on row 1, column 0 (x1 enters, s1 leaves)"
    assert pivots[0].info["leaving"] == "s1"
    assert pivots[1].info["leaving"] == "s2"
    assert res["x"] == pytest.approx((4.0, 6.0))
    assert res["z"] == pytest.approx(22.0)
    assert res["basis"].tolist() == [0, 1]
    assert res["states"][0].basis == (2, 3)
    assert res["states"][-1].basis == (0, 1)


def test_verbose_labels_rows_with_tracked_basis(capsys):
    program = LinearProgram.from_arrays([1, 3], [[1, 0], [0, 1]], [4, 6])
    tableau_simplex(program, opts={"verbose": True})
    initial = capsys.readouterr().out.split("\n\n")[0]
    assert "R1(s1)" in initial
    assert "R2(s2)" in initial
