from linear_program import LinearProgram
from lp_dual import primal_dual_text
from tableau_simplex import tableau_simplex  # main solver

program = LinearProgram.from_arrays(
    c=[5, 4],
    A=[[2, 1],
       [1, 3]],
    b=[10, 15],
)

res = tableau_simplex(program, opts={"launch_viewer": True, "report_pdf_path": "simplex_report.pdf"})
print(res["status"], res["x"], res["z"], "states:", len(res["states"]))

print(primal_dual_text(program))
