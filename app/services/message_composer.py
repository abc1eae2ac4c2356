"""
Builds the body of the Chatwoot message for a form submission.
Every submitted field ends up in the message exactly once.
"""

from typing import Any, Optional, Sequence

from app.utils.data_extraction import format_value, render_scalar, unmapped_fields

DETAILS_HEADER = "--- Submission details ---"


def _render(value: Any) -> str:
    return render_scalar(format_value(value))


def build_message_content(
    fields: Optional[Sequence[Any]],
    message: Optional[Any] = None,
    name: Optional[Any] = None,
    email: Optional[Any] = None,
    phone: Optional[Any] = None,
) -> str:
    """
    Free-text message first, then a details section with the contact values
    and every field that was not already surfaced, in submission order.
    """
    lines = []

    if message:
        lines.append(render_scalar(message))

    lines.extend(["", DETAILS_HEADER])

    if name:
        lines.append(f"Name: {render_scalar(name)}")
    if email:
        lines.append(f"Email: {render_scalar(email)}")
    if phone:
        lines.append(f"Phone: {render_scalar(phone)}")

    for field in unmapped_fields(fields):
        lines.append(f"{_render(field.name)}: {_render(field.value)}")

    return "\n".join(lines)
