"""
Clue API Payload Validator
==========================

Structural checks on responses from the clue API before they are turned
into board data. Each check returns (errors, warnings):
  errors   = fatal issues (the response cannot be used)
  warnings = informational issues (printed, never block)
"""


def category_key(category_id):
    """Key two category ids compare equal under (1 and "1" are the same category)."""
    return str(category_id)


def validate_category_list(data):
    """
    Validate a /categories response.

    Expected: a list of objects, each carrying an 'id'.
    """
    errors = []
    warnings = []

    if not isinstance(data, list):
        errors.append(f"Expected a list of categories, got {type(data).__name__}")
        return errors, warnings

    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            errors.append(f"Category {i} is not an object")
            continue
        if "id" not in entry:
            errors.append(f"Category {i} is missing 'id'")
        elif isinstance(entry["id"], bool) or not isinstance(entry["id"], (int, str)):
            errors.append(f"Category {i} has an invalid 'id': {entry['id']!r}")

    ids = [e.get("id") for e in data if isinstance(e, dict)]
    if len(set(map(category_key, ids))) != len(ids):
        warnings.append("Category pool contains duplicate ids")

    return errors, warnings


def validate_category_detail(data, expected_clues=None):
    """
    Validate a /category response.

    Expected: {title: str, clues: [{question: str, answer: str, ...}, ...]}.
    Only the clues that will be kept (the first expected_clues) must be
    well-formed; a short clue list is a warning.
    """
    errors = []
    warnings = []

    if not isinstance(data, dict):
        errors.append(f"Expected a category object, got {type(data).__name__}")
        return errors, warnings

    if not isinstance(data.get("title"), str):
        errors.append("Missing or non-string 'title'")

    clues = data.get("clues")
    if not isinstance(clues, list):
        errors.append("Missing or non-list 'clues'")
        return errors, warnings

    kept = clues if expected_clues is None else clues[:expected_clues]
    for i, clue in enumerate(kept):
        if not isinstance(clue, dict):
            errors.append(f"Clue {i} is not an object")
            continue
        for field in ("question", "answer"):
            if not isinstance(clue.get(field), str):
                errors.append(f"Clue {i} is missing string '{field}'")

    if expected_clues is not None and len(clues) < expected_clues:
        warnings.append(f"Only {len(clues)} clues (expected {expected_clues})")

    return errors, warnings
