# Yard paperwork workflows
from .graph import (
    create_comex_graph,
    create_delivery_graph,
    run_comex_workflow,
    run_delivery_workflow,
    get_workflow_visualization,
)
from .state import ComexState, DeliveryState, create_initial_comex_state, create_initial_delivery_state

__all__ = [
    "create_comex_graph",
    "create_delivery_graph",
    "run_comex_workflow",
    "run_delivery_workflow",
    "get_workflow_visualization",
    "ComexState",
    "DeliveryState",
    "create_initial_comex_state",
    "create_initial_delivery_state",
]
