"""Build the LangGraph calculator graph."""
from langgraph.graph import StateGraph, END, START
from exprcalc.graph.state import CalcState, build_initial_state
from exprcalc.graph.nodes import (
    NodeName,
    initialize_node, guard_node, evaluate_node,
    format_node, error_node, finalize_node,
    route_after_guard, route_after_evaluate,
)

_compiled_graph = None


def build_graph():
    """Build and return the compiled calculator graph."""
    graph = StateGraph(CalcState)

    graph.add_node(NodeName.INITIALIZE.value, initialize_node)
    graph.add_node(NodeName.GUARD.value, guard_node)
    graph.add_node(NodeName.EVALUATE.value, evaluate_node)
    graph.add_node(NodeName.FORMAT.value, format_node)
    graph.add_node(NodeName.ERROR.value, error_node)
    graph.add_node(NodeName.FINALIZE.value, finalize_node)

    graph.add_edge(START, NodeName.INITIALIZE.value)
    graph.add_edge(NodeName.INITIALIZE.value, NodeName.GUARD.value)
    graph.add_conditional_edges(
        NodeName.GUARD.value,
        route_after_guard,
        {
            NodeName.EVALUATE.value: NodeName.EVALUATE.value,
            NodeName.ERROR.value: NodeName.ERROR.value,
            NodeName.FINALIZE.value: NodeName.FINALIZE.value,
        },
    )
    graph.add_conditional_edges(
        NodeName.EVALUATE.value,
        route_after_evaluate,
        {
            NodeName.FORMAT.value: NodeName.FORMAT.value,
            NodeName.ERROR.value: NodeName.ERROR.value,
        },
    )
    graph.add_edge(NodeName.FORMAT.value, NodeName.FINALIZE.value)
    graph.add_edge(NodeName.ERROR.value, NodeName.FINALIZE.value)
    graph.add_edge(NodeName.FINALIZE.value, END)

    return graph.compile()


def run_expression(expression: str) -> CalcState:
    """Run one expression through the graph, compiling it on first use."""
    global _compiled_graph
    if _compiled_graph is None:
        _compiled_graph = build_graph()
    return _compiled_graph.invoke(build_initial_state(expression))


if __name__ == "__main__":
    graph = build_graph()
    print("Graph built successfully!")
    print(f"Nodes: {list(graph.nodes.keys())}")
