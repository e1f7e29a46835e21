from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .func import FunctionBinding


class BroadType(Enum):
    VOID = auto()
    NATIVE_TYPE = auto()
    POINTER = auto()
    FUNCTION_POINTER = auto()
    STRUCT = auto()
    ENUM = auto()
    HANDLE = auto()


class SupportedNativeType(Enum):
    """Native scalar types, valued as (ffi type name, dart type name)."""

    INT8 = ("Int8", "int")
    INT16 = ("Int16", "int")
    INT32 = ("Int32", "int")
    INT64 = ("Int64", "int")
    UINT8 = ("Uint8", "int")
    UINT16 = ("Uint16", "int")
    UINT32 = ("Uint32", "int")
    UINT64 = ("Uint64", "int")
    INT_PTR = ("IntPtr", "int")
    FLOAT = ("Float", "double")
    DOUBLE = ("Double", "double")

    def __init__(self, c_name: str, dart_name: str):
        self.c_name = c_name
        self.dart_name = dart_name

    @classmethod
    def from_c_name(cls, c_name: str) -> "SupportedNativeType":
        member = cls.__members__.get(c_name.upper())
        if member is not None:
            return member
        for native in cls:
            if native.c_name == c_name:
                return native
        raise ValueError(f"unknown native type: {c_name}")


@dataclass(frozen=True)
class TypeRef:
    """Immutable description of a C type, shared between declarations."""

    kind: ClassVar[BroadType]

    def get_base_type(self) -> TypeRef:
        return self


@dataclass(frozen=True)
class VoidType(TypeRef):
    kind: ClassVar[BroadType] = BroadType.VOID


@dataclass(frozen=True)
class NativeType(TypeRef):
    kind: ClassVar[BroadType] = BroadType.NATIVE_TYPE

    native: SupportedNativeType


@dataclass(frozen=True)
class PointerType(TypeRef):
    kind: ClassVar[BroadType] = BroadType.POINTER

    child: TypeRef

    def get_base_type(self) -> TypeRef:
        return self.child.get_base_type()


@dataclass(frozen=True)
class FunctionPointerType(TypeRef):
    """Pointer to a native function with the given signature.

    The signature is never renamed in place; the finalized typedef name is
    allocated at render time and passed to the projections explicitly.
    """

    kind: ClassVar[BroadType] = BroadType.FUNCTION_POINTER

    signature: FunctionBinding


@dataclass(frozen=True)
class StructType(TypeRef):
    kind: ClassVar[BroadType] = BroadType.STRUCT

    name: str


@dataclass(frozen=True)
class EnumType(TypeRef):
    kind: ClassVar[BroadType] = BroadType.ENUM

    name: str
    native: SupportedNativeType = field(default=SupportedNativeType.INT32)


@dataclass(frozen=True)
class HandleType(TypeRef):
    kind: ClassVar[BroadType] = BroadType.HANDLE


def pointer_to(child: TypeRef, depth: int = 1) -> TypeRef:
    type_ref = child
    for _ in range(depth):
        type_ref = PointerType(type_ref)
    return type_ref


VOID = VoidType()
HANDLE = HandleType()
INT32 = NativeType(SupportedNativeType.INT32)
DOUBLE = NativeType(SupportedNativeType.DOUBLE)
