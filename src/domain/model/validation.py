"""Declarative field validation for dataclasses.

Constraints are attached to dataclass fields via metadata and interpreted
uniformly, so format and length rules are declared once per field:

    @dataclass
    class Signup:
        email: str = field(default='', metadata=rules('required', 'email'))
        password: str = field(default='', metadata=rules('required', 'min=8'))

    validate(Signup(email='nope'))
    → [FieldError('email', 'email', ''), FieldError('password', 'required', ''),
       FieldError('password', 'min', '8')]
"""

import uuid
from dataclasses import dataclass, fields, is_dataclass
from typing import Any, Callable

from email_validator import EmailNotValidError, validate_email

RULES_KEY = 'validate'


@dataclass(frozen=True)
class FieldError:
    """A single failed constraint on a single field."""
    field: str
    tag: str
    param: str = ''

    def __str__(self) -> str:
        return f"Field: {self.field}, Tag: {self.tag}, Value: {self.param}"


# ── checks ───────────────────────────────────────────────


def _is_present(value: Any, _param: str) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _is_email(value: Any, _param: str) -> bool:
    try:
        validate_email(str(value), check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def _has_min_length(value: Any, param: str) -> bool:
    return len(value) >= int(param)


def _has_max_length(value: Any, param: str) -> bool:
    return len(value) <= int(param)


def _parse_uuid(value: Any) -> uuid.UUID | None:
    """Parse a UUID given in canonical lowercase hyphenated form only."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        parsed = uuid.UUID(str(value))
    except ValueError:
        return None
    # uuid.UUID also accepts braces, urn: prefix, uppercase and bare hex
    return parsed if str(parsed) == value else None


def _is_uuid(value: Any, _param: str) -> bool:
    return _parse_uuid(value) is not None


def _is_uuid4(value: Any, _param: str) -> bool:
    parsed = _parse_uuid(value)
    return parsed is not None and parsed.version == 4 and parsed.variant == uuid.RFC_4122


_CHECKS: dict[str, Callable[[Any, str], bool]] = {
    'required': _is_present,
    'email': _is_email,
    'min': _has_min_length,
    'max': _has_max_length,
    'uuid': _is_uuid,
    'uuid4': _is_uuid4,
}

_PARAM_TAGS = {'min', 'max'}


def _parse_rule(rule: str) -> tuple[str, str]:
    tag, _, param = rule.partition('=')
    tag, param = tag.strip(), param.strip()
    if tag not in _CHECKS:
        raise ValueError(f"Unknown validation tag: {tag!r}")
    if tag in _PARAM_TAGS and not param.isdigit():
        raise ValueError(f"Tag {tag!r} needs a numeric parameter, got {param!r}")
    return tag, param


def rules(*declared: str) -> dict[str, tuple[tuple[str, str], ...]]:
    """Build field metadata holding parsed constraints, in declaration order.

    Raises:
        ValueError: unknown tag or missing numeric parameter
    """
    return {RULES_KEY: tuple(_parse_rule(rule) for rule in declared)}


# ── engine ───────────────────────────────────────────────


def validate(value: Any, prefix: str = '') -> list[FieldError]:
    """Check every constrained field of a dataclass instance.

    Fields without constraints are ignored. Nested dataclass values are
    checked recursively and reported with a dotted field name.

    Returns:
        List of violations in field declaration order. Empty means valid.

    Raises:
        TypeError: value is not a dataclass instance
    """
    if not is_dataclass(value) or isinstance(value, type):
        raise TypeError(f"validate() expects a dataclass instance, got {type(value).__name__}")

    errors: list[FieldError] = []
    for f in fields(value):
        name = f"{prefix}{f.name}"
        field_value = getattr(value, f.name)

        for tag, param in f.metadata.get(RULES_KEY, ()):
            if tag != 'required' and field_value is None:
                continue
            if not _CHECKS[tag](field_value, param):
                errors.append(FieldError(field=name, tag=tag, param=param))

        if is_dataclass(field_value) and not isinstance(field_value, type):
            errors.extend(validate(field_value, prefix=f"{name}."))

    return errors
