import functools
from inspect import isclass
from typing import Any, Optional

from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import InMemorySaver
from langgraph.checkpoint.serde.jsonplus import JsonPlusSerializer
from langgraph.graph import END, START, StateGraph

from travelnow import states
from travelnow.nodes import (
    confirm_node,
    contact_node,
    hotel_node,
    payment_node,
    pricing_node,
    room_node,
    stay_node,
)
from travelnow.states import CheckoutState, PaymentMethod
from travelnow.tools import Backend, parse_date
from travelnow.utils import adjust_check_out

CHECKOUT_STEPS = ["hotel", "stay", "room", "pricing", "contact", "payment", "confirm"]

YES_ANSWERS = {"y", "yes", "true", "1", "ok", "confirm"}

# Records and enums a checkout checkpoint may hold.
CHECKPOINT_TYPES = [
    getattr(states, name) for name in states.__all__ if isclass(getattr(states, name))
]


def checkout_serializer() -> JsonPlusSerializer:
    """Checkpoint serializer allowed to rebuild the travelnow records."""
    return JsonPlusSerializer(allowed_msgpack_modules=CHECKPOINT_TYPES)


def create_checkout_graph(
    backend: Backend, checkpointer: Optional[BaseCheckpointSaver] = None
):
    """
    Builds the checkout graph.

    Steps run in order and each one either fills in derived data or stops the
    run with a question (needs_user_input). Re-invoke with the answered state
    to continue; completed steps are cheap to re-run.

    Args:
        backend (Backend): Services used by the steps that talk to the backend.
        checkpointer: Saver keeping per-thread state. Defaults to an InMemorySaver
            using checkout_serializer().
    """

    def route_next(next_step: str):
        def route(state: CheckoutState):
            if state.needs_user_input:
                return END
            return next_step

        return route

    workflow = StateGraph(CheckoutState)

    workflow.add_node("hotel", functools.partial(hotel_node, backend=backend))
    workflow.add_node("stay", stay_node)
    workflow.add_node("room", functools.partial(room_node, backend=backend))
    workflow.add_node("pricing", functools.partial(pricing_node, backend=backend))
    workflow.add_node("contact", contact_node)
    workflow.add_node("payment", payment_node)
    workflow.add_node("confirm", functools.partial(confirm_node, backend=backend))

    workflow.add_edge(START, "hotel")
    for step, next_step in zip(CHECKOUT_STEPS, CHECKOUT_STEPS[1:]):
        workflow.add_conditional_edges(step, route_next(next_step), [next_step, END])
    workflow.add_edge("confirm", END)

    return workflow.compile(
        checkpointer=checkpointer or InMemorySaver(serde=checkout_serializer())
    )


def run_checkout(app, state: CheckoutState, thread_id: str) -> CheckoutState:
    result = app.invoke(state, config={"configurable": {"thread_id": thread_id}})
    return CheckoutState.model_validate(result)


def answer(state: CheckoutState, field: str, value: Any) -> CheckoutState:
    """Apply the user's answer to `field` and clear the pending question."""
    if isinstance(value, str):
        value = value.strip()

    updates = {
        "needs_user_input": False,
        "validation_question": None,
        "missing_field": None,
        "error": None,
    }

    if field in ("check_in", "check_out"):
        day = parse_date(value)
        if day is None:
            raise ValueError("Please enter a date (YYYY-MM-DD)")
        if field == "check_in":
            updates.update(check_in=day, check_out=adjust_check_out(day, state.check_out))
        else:
            updates.update(check_out=day)
        updates["confirmed"] = False
    elif field == "room_type_id":
        updates.update(room_type_id=value or None, room_type=None, confirmed=False)
    elif field in ("adults", "children", "rooms"):
        count = int(value)
        if count < (0 if field == "children" else 1):
            raise ValueError(f"Invalid number of {field}: {count}")
        updates.update({field: count, "confirmed": False})
    elif field == "voucher":
        # Only clearing is possible here; vouchers are chosen when checkout starts.
        updates.update(voucher=None, confirmed=False)
    elif field == "payment_method":
        updates.update(payment_method=PaymentMethod(value))
    elif field == "confirmed":
        updates.update(confirmed=str(value).lower() in YES_ANSWERS)
    elif field == "special_request":
        updates.update(special_request=value or "")
    elif field.startswith("contact.") or field.startswith("card."):
        group, name = field.split(".", 1)
        current = getattr(state, group)
        if name not in type(current).model_fields:
            raise ValueError(f"Unknown checkout field: {field}")
        updates[group] = current.model_copy(update={name: value or None})
    else:
        raise ValueError(f"Unknown checkout field: {field}")

    return state.model_copy(update=updates)
