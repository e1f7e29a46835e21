from typing import Any, Dict, Optional, cast

from .type import (BroadType, EnumType, FunctionPointerType, NativeType,
                   PointerType, StructType, TypeRef)

DEFAULT_FFI_PREFIX = "ffi"
DEFAULT_DYLIB_IDENTIFIER = "_dylib"


class UnsupportedTypeError(TypeError):
    pass


class TypeRenderer:
    """Projects a TypeRef onto its foreign (native ABI) and host (Dart) shapes.

    `typedef_name` overrides the name emitted for the function pointer found
    at the base of the type, which is how a finalized nested typedef name
    reaches the parameter that uses it.
    """

    def __init__(self, ffi_prefix: str = DEFAULT_FFI_PREFIX,
                 dylib_identifier: str = DEFAULT_DYLIB_IDENTIFIER):
        self.ffi_prefix = ffi_prefix
        self.dylib_identifier = dylib_identifier

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "TypeRenderer":
        generator_cfg: Dict[str, Any] = config.get("generator", {}) if config else {}
        return cls(
            ffi_prefix=generator_cfg.get("ffi_prefix", DEFAULT_FFI_PREFIX),
            dylib_identifier=generator_cfg.get("dylib_identifier", DEFAULT_DYLIB_IDENTIFIER),
        )

    def foreign_shape(self, type_ref: TypeRef, typedef_name: Optional[str] = None) -> str:
        kind = getattr(type_ref, "kind", None)
        if kind is BroadType.VOID:
            return f"{self.ffi_prefix}.Void"
        elif kind is BroadType.NATIVE_TYPE:
            return f"{self.ffi_prefix}.{cast(NativeType, type_ref).native.c_name}"
        elif kind is BroadType.POINTER:
            child = cast(PointerType, type_ref).child
            return f"{self.ffi_prefix}.Pointer<{self.foreign_shape(child, typedef_name)}>"
        elif kind is BroadType.FUNCTION_POINTER:
            name = typedef_name or cast(FunctionPointerType, type_ref).signature.declared_name
            return f"{self.ffi_prefix}.Pointer<{self.ffi_prefix}.NativeFunction<{name}>>"
        elif kind is BroadType.STRUCT:
            return cast(StructType, type_ref).name
        elif kind is BroadType.ENUM:
            return f"{self.ffi_prefix}.{cast(EnumType, type_ref).native.c_name}"
        elif kind is BroadType.HANDLE:
            return f"{self.ffi_prefix}.Handle"
        raise UnsupportedTypeError(f"cannot render foreign shape of {type_ref!r}")

    def host_shape(self, type_ref: TypeRef, typedef_name: Optional[str] = None) -> str:
        kind = getattr(type_ref, "kind", None)
        if kind is BroadType.VOID:
            return "void"
        elif kind is BroadType.NATIVE_TYPE:
            return cast(NativeType, type_ref).native.dart_name
        elif kind in (BroadType.POINTER, BroadType.FUNCTION_POINTER, BroadType.STRUCT):
            # Dart sees pointers and structs through their ffi types.
            return self.foreign_shape(type_ref, typedef_name)
        elif kind is BroadType.ENUM:
            return cast(EnumType, type_ref).native.dart_name
        elif kind is BroadType.HANDLE:
            return "Object"
        raise UnsupportedTypeError(f"cannot render host shape of {type_ref!r}")
