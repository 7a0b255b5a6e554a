import numpy as np
import matplotlib.pyplot as plt
from matplotlib.widgets import Slider, Button
from matplotlib.backends.backend_pdf import PdfPages

from lp_dual import primal_dual_text
from simplex_utils import _tableau_to_text, objective_from_tableau, variable_names


def simplex_viewer(states, program, names=None, show=True):
    if names is None:
        names = variable_names(program)
    if len(states) == 0:
        raise ValueError("Nothing to show: the step history is empty.")

    fig = plt.figure(figsize=(14, 8))
    ax_txt = fig.add_axes([0.05, 0.33, 0.90, 0.62])
    ax_txt.axis("off")
    ax_prog = fig.add_axes([0.08, 0.15, 0.86, 0.14])
    ax_slider = fig.add_axes([0.10, 0.05, 0.40, 0.03])
    ax_first = fig.add_axes([0.56, 0.04, 0.08, 0.05])
    ax_prev = fig.add_axes([0.65, 0.04, 0.08, 0.05])
    ax_next = fig.add_axes([0.74, 0.04, 0.08, 0.05])
    ax_last = fig.add_axes([0.83, 0.04, 0.08, 0.05])

    slider = Slider(ax_slider, "Step", 1, max(2, len(states)), valinit=states.index + 1, valstep=1)
    btn_first = Button(ax_first, "First")
    btn_prev = Button(ax_prev, "Prev")
    btn_next = Button(ax_next, "Next")
    btn_last = Button(ax_last, "Last")

    def render(_=None):
        idx = states.index
        s = states.current
        ax_txt.clear()
        ax_txt.axis("off")
        ax_txt.text(0.0, 1.0, _step_header(states, idx, program), va="top", ha="left",
                    fontsize=11, fontweight="bold")
        ax_txt.text(0.0, 0.93, _tableau_to_text(s.tableau, names, s.basis, s.info.get("ratios")),
                    va="top", ha="left", family="monospace", fontsize=9)
        _draw_objective_progress(ax_prog, states, idx, program)
        fig.canvas.draw_idle()

    def sync():
        # the slider callback does the rendering
        slider.set_val(states.index + 1)

    def on_slider(val):
        states.jump_to(int(val) - 1)
        render()

    def on_first(_):
        states.jump_to_first()
        sync()

    def on_prev(_):
        states.retreat()
        sync()

    def on_next(_):
        states.advance()
        sync()

    def on_last(_):
        states.jump_to_last()
        sync()

    slider.on_changed(on_slider)
    btn_first.on_clicked(on_first)
    btn_prev.on_clicked(on_prev)
    btn_next.on_clicked(on_next)
    btn_last.on_clicked(on_last)

    render()
    if show:
        plt.show()

    return {
        "fig": fig,
        "text_axes": ax_txt,
        "slider": slider,
        "buttons": {"first": btn_first, "prev": btn_prev, "next": btn_next, "last": btn_last},
        "handlers": {"first": on_first, "prev": on_prev, "next": on_next, "last": on_last},
    }


def _step_header(states, idx, program):
    s = states[idx]
    header = f"{idx+1}/{len(states)} | {s.description}"
    if s.pivot is not None:
        header += f" | pivot value {s.info.get('pivot_value', float('nan')):.6g}"
    header += f" | Z={objective_from_tableau(s.tableau, program.objective):.6g}"
    return header


def _draw_objective_progress(ax, states, idx, program):
    ax.clear()
    ax.set_title("Objective Progress", fontsize=9)
    ax.set_xlabel("Step", fontsize=8)
    ax.set_ylabel("z", fontsize=8)
    ax.grid(True, alpha=0.3)
    ax.tick_params(labelsize=8)

    shown = [states[k] for k in range(idx + 1)]
    x = np.arange(1, len(shown) + 1, dtype=float)
    z = np.array([objective_from_tableau(s.tableau, program.objective) for s in shown], dtype=float)
    ax.plot(x, z, "-o", color="#2a9d8f", linewidth=1.8, markersize=4)
    ax.scatter([x[-1]], [z[-1]], c="#d62828", s=28, zorder=4)

    if len(x) >= 2:
        delta = z[-1] - z[0]
        ax.text(0.02, 0.90, f"Delta z: {delta:.6g}", transform=ax.transAxes, fontsize=8)


def export_states_pdf_report(states, program, output_path, names=None):
    if names is None:
        names = variable_names(program)
    with PdfPages(output_path) as pdf:
        fig = plt.figure(figsize=(11.69, 8.27))  # A4 landscape
        ax = fig.add_subplot(111)
        ax.axis("off")
        ax.text(0.0, 1.0, primal_dual_text(program), va="top", ha="left", family="monospace", fontsize=10)
        fig.suptitle("Linear Program and Dual", fontsize=12, fontweight="bold")
        pdf.savefig(fig, bbox_inches="tight")
        plt.close(fig)

        for idx, s in enumerate(states):
            fig = plt.figure(figsize=(11.69, 8.27))
            gs = fig.add_gridspec(2, 1, height_ratios=[0.80, 0.20], hspace=0.25)
            ax_txt = fig.add_subplot(gs[0, 0])
            ax_prog = fig.add_subplot(gs[1, 0])
            ax_txt.axis("off")

            blocks = [
                _step_header(states, idx, program),
                "",
                "TABLEAU",
                _tableau_to_text(s.tableau, names, s.basis, s.info.get("ratios")),
            ]
            ax_txt.text(0.0, 1.0, "\n".join(blocks), va="top", ha="left", family="monospace", fontsize=8)

            _draw_objective_progress(ax_prog, states, idx, program)
            fig.suptitle("Tableau Simplex Report", fontsize=12, fontweight="bold")
            pdf.savefig(fig, bbox_inches="tight")
            plt.close(fig)
