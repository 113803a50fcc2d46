# app/engine/errors.py

from typing import Any, Dict, Iterable, Sequence


class ProfitMatrixInputError(ValueError):
    """
    Raised before any computation when an input fails validation.
    `field` is the dotted path of the offending input, e.g. 'policy.eco_level'.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


def input_error_from_errors(
    errors: Sequence[Dict[str, Any]],
    skip_prefix: Iterable[str] = ("body",),
) -> ProfitMatrixInputError:
    """
    Collapse a pydantic/FastAPI error list into a single ProfitMatrixInputError
    for the first offending field.
    """
    if not errors:
        return ProfitMatrixInputError("input", "invalid input")

    first = errors[0]
    skip = set(skip_prefix)
    loc = [str(p) for p in first.get("loc", ()) if str(p) not in skip]
    field = ".".join(loc) or "input"

    message = str(first.get("msg", "invalid value"))
    # pydantic prefixes ValueErrors raised in validators
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]

    return ProfitMatrixInputError(field, message)
