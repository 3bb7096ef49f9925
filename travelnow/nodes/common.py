from typing import Any, Dict, Optional


def ask(node: str, field: Optional[str], question: str, **updates: Any) -> Dict[str, Any]:
    """Stop the run and hand a question back to whoever drives the flow."""
    return {
        **updates,
        "needs_user_input": True,
        "validation_question": question,
        "missing_field": field,
        "last_node": node,
    }


def proceed(**updates: Any) -> Dict[str, Any]:
    return {
        **updates,
        "needs_user_input": False,
        "validation_question": None,
        "missing_field": None,
        "last_node": None,
        "error": None,
    }
