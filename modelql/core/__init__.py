"""Core building blocks shared by the generators: type trees, declarations, naming."""
from .declarations import (
    Argument,
    Connection,
    Declaration,
    Directive,
    DirectiveArgument,
    declarations_from_document,
    defined_directive_names,
    parse_declarations,
    parse_document,
)
from .field_types import FieldType, ListType, NamedType, RequiredType, from_type_node, parse_field_type

__all__ = [
    'Argument', 'Connection', 'Declaration', 'Directive', 'DirectiveArgument',
    'declarations_from_document', 'defined_directive_names', 'parse_declarations', 'parse_document',
    'FieldType', 'ListType', 'NamedType', 'RequiredType', 'from_type_node', 'parse_field_type',
]
