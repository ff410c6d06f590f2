"""CLI interface for the calculator."""
import sys
from exprcalc.graph.build_graph import run_expression
from exprcalc.config import LOG_LEVEL
from exprcalc.observability.telemetry import format_trace_summary, clear_trace
from exprcalc.observability.logging_config import configure_logging

# Configure logging
configure_logging(LOG_LEVEL)


def run_once(expression: str, show_trace: bool = False) -> int:
    """Evaluate one expression, print the outcome and return an exit code."""
    clear_trace()  # Clear trace for fresh run

    result = run_expression(expression)

    if show_trace:
        print(format_trace_summary())

    if result["is_error"]:
        print(f"Error: {result['display']}", file=sys.stderr)
        return 1
    print(result["display"])
    return 0


def repl() -> int:
    """Prompt for expressions until 'q' or end of input."""
    while True:
        try:
            expr = input("Enter expression (or 'q' to quit): ")
        except EOFError:
            print()
            return 0
        if expr.strip().lower() == "q":
            return 0
        clear_trace()  # Keep only the current expression's trace
        result = run_expression(expr)
        if result["is_error"]:
            print("Error:", result["display"])
        else:
            print(result["display"])


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)

    show_trace = "--trace" in args
    if show_trace:
        args.remove("--trace")

    if not args:
        sys.exit(repl())

    sys.exit(run_once(" ".join(args), show_trace=show_trace))


if __name__ == "__main__":
    main()
