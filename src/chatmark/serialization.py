"""Token serialization: JSON round-trip for token lists.

Converts tokens to/from JSON-compatible dicts in the wire shape chat
clients consume: a ``type`` discriminator holding the token kind and
camelCase field names::

    {"type": "discordEmoji", "content": "<a:party:1>", "animated": true,
     "emojiId": "1", "emojiName": "party"}

Source spans are not serialized.

All output is deterministic (sorted keys).

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from chatmark.tokens import TOKEN_CLASSES, MentionType, TokenBase, TokenKind

# Python field name -> wire name, for fields whose names differ
_WIRE_NAMES: dict[str, str] = {
    "emoji_id": "emojiId",
    "emoji_name": "emojiName",
    "mention_type": "mentionType",
    "user_id": "userId",
}
_FIELD_NAMES: dict[str, str] = {wire: name for name, wire in _WIRE_NAMES.items()}

_SKIPPED_FIELDS = frozenset(("span",))


def to_dict(token: TokenBase) -> dict[str, Any]:
    """Convert a token to a JSON-compatible dict."""
    result: dict[str, Any] = {"type": str(token.kind)}
    for f in fields(token):
        if f.name in _SKIPPED_FIELDS:
            continue
        value = getattr(token, f.name)
        if isinstance(value, MentionType):
            value = str(value)
        result[_WIRE_NAMES.get(f.name, f.name)] = value
    return result


def from_dict(data: dict[str, Any]) -> TokenBase:
    """Reconstruct a token from a dict.

    Args:
        data: Dict with ``type`` and token fields (as produced by to_dict).

    Raises:
        ValueError: If ``type`` is missing or unknown, or a field is invalid.

    """
    type_name = data.get("type")
    if type_name is None:
        msg = "Missing 'type' field in serialized token"
        raise ValueError(msg)

    try:
        token_cls = TOKEN_CLASSES[TokenKind(type_name)]
    except ValueError:
        msg = f"Unknown token type: {type_name!r}"
        raise ValueError(msg) from None

    kwargs: dict[str, Any] = {}
    for key, raw in data.items():
        if key == "type":
            continue
        name = _FIELD_NAMES.get(key, key)
        if name == "mention_type":
            raw = MentionType(raw)
        kwargs[name] = raw

    try:
        return token_cls(**kwargs)
    except TypeError as e:
        msg = f"Invalid fields for {type_name!r} token: {e}"
        raise ValueError(msg) from e


def to_json(tokens: list[TokenBase], *, indent: int | None = None) -> str:
    """Serialize a token list to a JSON string."""
    return json.dumps([to_dict(t) for t in tokens], sort_keys=True, indent=indent)


def from_json(json_str: str) -> list[TokenBase]:
    """Deserialize a token list from a JSON string."""
    data = json.loads(json_str)
    if not isinstance(data, list):
        msg = "Serialized tokens must be a JSON array"
        raise ValueError(msg)
    return [from_dict(item) for item in data]


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
