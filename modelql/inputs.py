"""
Create/Update input types for model declarations.

For a model ``T`` two input types are derived from its fields:

- ``TCreate``: every field keeps its type, except that a non-scalar leaf is
  replaced by ``ID`` (related records are passed by identifier). Wrappers are
  kept as they are, so ``[Post!]!`` becomes ``[ID!]!``.
- ``TUpdate``: same, after dropping one outer ``!`` so every field becomes
  optional on update.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .core.declarations import Argument, Declaration
from .core.field_types import FieldType
from .core.naming import PLACEHOLDER_SCALAR, create_input_name, is_scalar, update_input_name

__all__ = [
    'InputType',
    'create_field_type',
    'update_field_type',
    'build_create_input',
    'build_update_input',
    'build_model_inputs',
    'render_model_inputs',
]

_INDENT = '    '


@dataclass(frozen=True)
class InputType:
    """A synthesized ``input`` declaration."""

    name: str
    fields: Tuple[Tuple[str, FieldType], ...] = ()

    def render(self) -> str:
        # `input X` without a body is valid SDL; `input X {}` is not
        if not self.fields:
            return f"input {self.name}"
        body = '\n'.join(f"{_INDENT}{name}: {ftype.render()}" for name, ftype in self.fields)
        return f"input {self.name} {{\n{body}\n}}"


def _substitute_leaf(ftype: FieldType) -> FieldType:
    if is_scalar(ftype.leaf_name()):
        return ftype
    return ftype.replace_leaf(PLACEHOLDER_SCALAR)


def create_field_type(arg: Argument) -> FieldType:
    return _substitute_leaf(arg.type)


def update_field_type(arg: Argument) -> FieldType:
    return _substitute_leaf(arg.type.strip_required())


def build_create_input(model: Declaration) -> InputType:
    return InputType(
        name=create_input_name(model.name),
        fields=tuple((a.name, create_field_type(a)) for a in model.arguments),
    )


def build_update_input(model: Declaration) -> InputType:
    return InputType(
        name=update_input_name(model.name),
        fields=tuple((a.name, update_field_type(a)) for a in model.arguments),
    )


def build_model_inputs(models: Iterable[Declaration]) -> List[InputType]:
    """Return ``[TCreate, TUpdate, ...]`` in model order."""
    out: List[InputType] = []
    for model in models:
        out.append(build_create_input(model))
        out.append(build_update_input(model))
    return out


def render_model_inputs(models: Iterable[Declaration]) -> str:
    return '\n'.join(i.render() for i in build_model_inputs(models))
