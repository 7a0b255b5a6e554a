from linear_program import LinearProgram
from lp_dual import primal_dual_text

EXAMPLES = {
    "textbook": {
        "name": "Textbook 2D LP",
        "objective": "max",
        "c": [3, 2],
        "A": [
            [1, 1],
            [1, 3],
        ],
        "b": [4, 6],
    },
    "production": {
        "name": "Production Mix (3 pivots)",
        "objective": "max",
        "c": [3, 5],
        "A": [
            [1, 0],
            [0, 2],
            [3, 2],
        ],
        "b": [4, 12, 18],
    },
    "unbounded": {
        "name": "Unbounded Direction",
        "objective": "max",
        "c": [1, 0],
        "A": [
            [1, -1],
        ],
        "b": [1],
    },
    "cost": {
        "name": "Cost Reduction (min)",
        "objective": "min",
        "c": [-2, -3, 1],
        "A": [
            [1, 1, 1],
            [2, 1, 0],
            [0, 1, 3],
        ],
        "b": [10, 12, 9],
    },
}


def build_example(key):
    ex = EXAMPLES[key]
    return LinearProgram.from_arrays(ex["c"], ex["A"], ex["b"], objective=ex["objective"])


def _normalize(raw):
    return raw.strip().lower()


def _pick_from_menu(prompt, options, default_key):
    while True:
        print(prompt)
        for i, opt in enumerate(options, start=1):
            marker = " (default)" if opt["key"] == default_key else ""
            detail = f" - {opt['detail']}" if opt.get("detail") else ""
            print(f"  {i}) {opt['label']}{detail}{marker}")
        raw = _normalize(input("> "))

        if raw in {"q", "quit", "exit"}:
            raise KeyboardInterrupt
        if raw == "":
            return default_key
        if raw.isdigit():
            idx = int(raw) - 1
            if 0 <= idx < len(options):
                return options[idx]["key"]

        for opt in options:
            if raw in opt["aliases"]:
                return opt["key"]

        valid = ", ".join(opt["label"] for opt in options)
        print(f"Invalid choice. Enter a number or one of: {valid}.")
        print("Type q to quit.")


def _pick_example():
    options = []
    for key, ex in EXAMPLES.items():
        options.append({
            "key": key,
            "label": ex["name"],
            "detail": f"{ex['objective']}, {len(ex['c'])} vars x {len(ex['b'])} constraints",
            "aliases": {key, ex["name"].lower()},
        })
    return _pick_from_menu("Choose a linear program:", options, default_key="textbook")


def _pick_pivot_rule():
    options = [
        {"key": "bland", "label": "Bland (lowest index)", "aliases": {"bland", "b"}},
        {"key": "dantzig", "label": "Dantzig (most negative)", "aliases": {"dantzig", "d"}},
    ]
    return _pick_from_menu("Choose entering rule:", options, default_key="bland")


def _confirm(question):
    while True:
        raw = _normalize(input(f"{question} [Y/n]: "))
        if raw in {"", "y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False
        if raw in {"q", "quit", "exit"}:
            raise KeyboardInterrupt
        print("Please answer y or n. Type q to quit.")


def run_showcase():
    print("Tableau Simplex Showcase")
    print("------------------------")
    print("Tip: choose with number keys. Press Enter to accept defaults. Type q to quit.")
    try:
        key = _pick_example()
        rule = _pick_pivot_rule()
        launch_viewer = _confirm("Open the step viewer?")
    except KeyboardInterrupt:
        print("\nCancelled.")
        return None

    from tableau_simplex import tableau_simplex

    program = build_example(key)
    print(f"\nRunning: {EXAMPLES[key]['name']}")
    print(primal_dual_text(program))
    print()

    res = tableau_simplex(
        program,
        opts={
            "launch_viewer": launch_viewer,
            "pivot_rule": rule,
            "report_pdf_path": None,
        },
    )

    print("\nDone.")
    print("status =", res["status"])
    if res["status"] == "optimal":
        print("x* =", res["x"])
        print("z* =", res["z"])
    print("states =", len(res["states"]))
    return res


if __name__ == "__main__":
    run_showcase()
