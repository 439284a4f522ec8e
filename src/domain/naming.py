"""
Collection naming helpers.

Relationships are resolved by naming convention:
- a child of "posts" carries "postId"
- "_expand=user" reads "userId" and looks in "users"

Only the English rules that collection names realistically use are covered.
"""

from __future__ import annotations

_IRREGULAR = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "foot": "feet",
    "tooth": "teeth",
    "ox": "oxen",
}
_IRREGULAR_PLURALS = {v: k for k, v in _IRREGULAR.items()}

_UNCOUNTABLE = {
    "data",
    "equipment",
    "feedback",
    "info",
    "information",
    "media",
    "metadata",
    "news",
    "series",
    "sheep",
    "species",
}

_VOWELS = "aeiou"


def _match_case(original: str, result: str) -> str:
    if original.isupper():
        return result.upper()
    if original[:1].isupper():
        return result[:1].upper() + result[1:]
    return result


def pluralize(name: str) -> str:
    """Return the plural form of a singular collection name."""
    if not name:
        return name

    lower = name.lower()
    if lower in _UNCOUNTABLE or lower in _IRREGULAR_PLURALS:
        return name
    if lower in _IRREGULAR:
        return _match_case(name, _IRREGULAR[lower])

    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in _VOWELS:
        return name[:-1] + "ies"
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        if lower.endswith("ss") or not lower.endswith("s"):
            return name + "es"
        # Already plural ("posts")
        return name
    return name + "s"


def singularize(name: str) -> str:
    """Return the singular form of a plural collection name."""
    if not name:
        return name

    lower = name.lower()
    if lower in _UNCOUNTABLE or lower in _IRREGULAR:
        return name
    if lower in _IRREGULAR_PLURALS:
        return _match_case(name, _IRREGULAR_PLURALS[lower])

    if lower.endswith("ies") and len(lower) > 3:
        return name[:-3] + "y"
    if lower.endswith(("sses", "xes", "zes", "ches", "shes")):
        return name[:-2]
    if lower.endswith("ss"):
        return name
    if lower.endswith("s"):
        return name[:-1]
    return name


def foreign_key(collection: str, suffix: str = "Id") -> str:
    """Foreign key field that points at records of `collection` ("posts" -> "postId")."""
    return f"{singularize(collection)}{suffix}"
