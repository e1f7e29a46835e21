from .binding_string import BindingString
from .declaration import (DeclarationError, binding_from_dict,
                          bindings_from_json, type_from_dict)
from .func import FunctionBinding, NestedTypedef, Parameter
from .type import (BroadType, EnumType, FunctionPointerType, HandleType,
                   NativeType, PointerType, StructType, SupportedNativeType,
                   TypeRef, VoidType)
from .type_renderer import TypeRenderer, UnsupportedTypeError
from .unique_namer import NameCollisionError, UniqueNamer

__all__ = [
    'BindingString',
    'BroadType',
    'DeclarationError',
    'EnumType',
    'FunctionBinding',
    'FunctionPointerType',
    'HandleType',
    'NameCollisionError',
    'NativeType',
    'NestedTypedef',
    'Parameter',
    'PointerType',
    'StructType',
    'SupportedNativeType',
    'TypeRef',
    'TypeRenderer',
    'UniqueNamer',
    'UnsupportedTypeError',
    'VoidType',
    'binding_from_dict',
    'bindings_from_json',
    'type_from_dict',
]
