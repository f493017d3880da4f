"""
Pokedex Backend — Request Validation
=====================================

What:  Path id parsing and Pokemon payload shape checks.
How:   Pure functions over untyped input. Payload checks collect every
       violation before failing so clients see the whole list at once.
Who:   Route dependencies in routes/pokemon.py, before PokemonService runs.
"""

import re
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional

from app.exceptions import InvalidIdError, ValidationError

# ASCII digits only: no "_" separators, no full-width or other Unicode digits
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: Any) -> Optional[int]:
    """Parse an int or an optionally signed ASCII decimal string, else None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not _INTEGER_RE.fullmatch(text):
        return None
    return int(text)


def validate_id(raw: Any) -> int:
    """
    Parse a path identifier into a positive integer.

    Accepts ints and decimal strings (surrounding whitespace ignored).

    Raises:
        InvalidIdError: not parseable as an integer, or ≤ 0
    """
    parsed = parse_int(raw)
    if parsed is None or parsed <= 0:
        raise InvalidIdError(raw_id=str(raw))
    return parsed


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is not a number
    return isinstance(value, Real) and not isinstance(value, bool)


def _check_characteristics(characteristics: Mapping[str, Any], errors: List[str]) -> None:
    height = characteristics.get("height")
    if not isinstance(height, str) or not height:
        errors.append("Characteristics.height is required and must be a string")

    weight = characteristics.get("weight")
    if not isinstance(weight, str) or not weight:
        errors.append("Characteristics.weight is required and must be a string")

    base_experience = characteristics.get("base_experience")
    if not _is_number(base_experience) or base_experience < 0:
        errors.append(
            "Characteristics.base_experience is required and must be a non-negative number"
        )

    abilities = characteristics.get("abilities")
    if not isinstance(abilities, list) or not abilities:
        errors.append("Characteristics.abilities is required and must be a non-empty array")
    elif not all(isinstance(ability, str) for ability in abilities):
        errors.append("All abilities must be strings")


def collect_pokemon_errors(payload: Any) -> List[str]:
    """
    Return every shape violation in a Pokemon creation payload.

    An empty list means the payload is acceptable. Checks never stop at the
    first failure; a missing `characteristics` object also reports each of
    its required fields.
    """
    if not isinstance(payload, Mapping):
        return ["Request body must be a JSON object"]

    errors: List[str] = []

    if not _is_non_empty_string(payload.get("name")):
        errors.append("Name is required and must be a non-empty string")

    if not _is_non_empty_string(payload.get("description")):
        errors.append("Description is required and must be a non-empty string")

    characteristics = payload.get("characteristics")
    if not isinstance(characteristics, Mapping):
        errors.append("Characteristics object is required")
        _check_characteristics({}, errors)
    else:
        _check_characteristics(characteristics, errors)

    pokemon_type = payload.get("type")
    if not isinstance(pokemon_type, list) or not pokemon_type:
        errors.append("Type is required and must be a non-empty array")
    elif not all(_is_non_empty_string(t) for t in pokemon_type):
        errors.append("All types must be non-empty strings")

    return errors


def validate_pokemon_payload(payload: Any) -> Dict[str, Any]:
    """
    Return `payload` unchanged if it is a valid creation payload.

    Raises:
        ValidationError: carrying the full list of violation messages
    """
    errors = collect_pokemon_errors(payload)
    if errors:
        raise ValidationError(errors=errors, context={"violations": len(errors)})
    return dict(payload)
