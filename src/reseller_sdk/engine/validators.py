"""
Field Validator

Applies declarative per-field rules to a loosely-typed parameter mapping.
A rule set maps each field to a ``|``-separated rule string::

    {"quantity": "required", "sandbox": "optional"}

Rule tags are looked up in the ``RULES`` table. New tags are added with the
``register_rule`` decorator; a rule receives the field name and the input
mapping and returns a ``RuleOutcome``.
"""

from typing import Any, Callable, Dict, Mapping, NamedTuple, Optional

from ..schemas.bases import ValidationResult
from .exceptions import UnknownRuleError


class RuleOutcome(NamedTuple):
    """Result of one rule applied to one field.

    ``keep`` tells whether ``value`` goes into the cleaned parameters;
    a non-empty ``error`` marks the field as failed.
    """

    keep: bool = False
    value: Any = None
    error: Optional[str] = None


RuleFunc = Callable[[str, Mapping[str, Any]], RuleOutcome]

RULES: Dict[str, RuleFunc] = {}


def register_rule(tag: str) -> Callable[[RuleFunc], RuleFunc]:
    """
    Decorator registering a rule function under ``tag``.

    Example:
        @register_rule("required")
        def required_rule(field, data):
            ...
    """
    def decorator(func: RuleFunc) -> RuleFunc:
        RULES[tag] = func
        return func
    return decorator


def is_empty(value: Any) -> bool:
    """
    Loose emptiness test used by the rules.

    ``None``, ``False``, ``0``, ``0.0``, ``""``, ``"0"`` and empty
    collections are empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


@register_rule("required")
def required_rule(field: str, data: Mapping[str, Any]) -> RuleOutcome:
    value = data.get(field)
    if is_empty(value):
        return RuleOutcome(error=f"{field} field is required!")
    return RuleOutcome(keep=True, value=value)


@register_rule("optional")
def optional_rule(field: str, data: Mapping[str, Any]) -> RuleOutcome:
    value = data.get(field)
    if is_empty(value):
        return RuleOutcome()
    return RuleOutcome(keep=True, value=value)


def parse_rules(rule_string: str) -> list:
    """Split ``"required|optional"`` into its tags, dropping blanks."""
    return [tag.strip() for tag in rule_string.split("|") if tag.strip()]


def validate(data: Optional[Mapping[str, Any]], rules: Mapping[str, str]) -> ValidationResult:
    """
    Validate ``data`` against ``rules``.

    Every declared field is checked and all errors are collected; the first
    error of a field is the one reported. Fields that are not declared in
    ``rules`` never reach the cleaned parameters.

    Args:
        data: Raw parameters supplied by the caller.
        rules: Field -> rule string mapping.

    Returns:
        ValidationResult with either the cleaned parameters or the errors.

    Raises:
        UnknownRuleError: If a rule string names an unregistered tag.
    """
    data = data or {}
    cleaned: Dict[str, Any] = {}
    errors: Dict[str, str] = {}

    for field, rule_string in rules.items():
        for tag in parse_rules(rule_string):
            rule = RULES.get(tag)
            if rule is None:
                raise UnknownRuleError(f"No rule registered for tag '{tag}' (field '{field}')")

            outcome = rule(field, data)
            if outcome.error:
                errors.setdefault(field, outcome.error)
            elif outcome.keep:
                cleaned[field] = outcome.value

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(data=cleaned)
