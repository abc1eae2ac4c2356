from typing import Any, Iterable, Optional, Sequence

EMAIL_ALIASES = ("email", "Email Address")
PHONE_ALIASES = ("phone", "Phone Number")
NAME_ALIASES = ("name", "Full Name", "First Name")
MESSAGE_ALIASES = ("message", "Question", "Comments")

# Field names already surfaced by the composer; never repeated in the details section.
SURFACED_FIELD_NAMES = frozenset(
    alias.lower()
    for alias in EMAIL_ALIASES + PHONE_ALIASES + NAME_ALIASES + MESSAGE_ALIASES
)


def normalize_name(name: Any) -> str:
    """Lower-cased field name; missing names compare as empty strings."""
    return str(name or "").lower()


def render_scalar(value: Any) -> str:
    """JSON-style text for a scalar: null is empty, booleans are lower-case."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_value(value: Any) -> Any:
    """Lists of scalars are joined with ', '; everything else is returned as-is."""
    if isinstance(value, (list, tuple)):
        return ", ".join(render_scalar(item) for item in value)
    return value


def extract_field(fields: Optional[Sequence[Any]], *aliases: str) -> Optional[Any]:
    """
    Return the value of the first field (in submission order) whose name
    matches one of the aliases, case-insensitively.
    Absent fields and null values both yield None.
    """
    wanted = {alias.lower() for alias in aliases}
    for field in fields or []:
        if normalize_name(field.name) in wanted:
            return format_value(field.value)
    return None


def unmapped_fields(fields: Optional[Iterable[Any]]) -> list:
    """Fields not covered by any of the email/phone/name/message aliases, in order."""
    return [
        field for field in fields or []
        if normalize_name(field.name) not in SURFACED_FIELD_NAMES
    ]
