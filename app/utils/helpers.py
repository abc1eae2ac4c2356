from typing import Any, Dict, Optional

import httpx


def get_nested_value(data: Dict[str, Any], keys: list) -> Any:
    """Walk a list of keys into nested dicts; None as soon as one is missing."""
    current = data
    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return None
    return current


def resolve_entity_id(result: Any, *paths: list) -> Optional[Any]:
    """
    Return the first truthy id found along the given key paths.
    Chatwoot wraps some responses in 'payload' and not others, so callers
    pass both shapes in the order they prefer.
    """
    for path in paths:
        value = get_nested_value(result, path)
        if value:
            return value
    return None


def safe_json(response: httpx.Response) -> Any:
    """
    Parse a response body as JSON, never raising.
    Unparsable bodies become {"error": <reason phrase>} so error messages can
    always be built from them.
    """
    try:
        return response.json()
    except ValueError:
        return {"error": response.reason_phrase}
