import json
from typing import Any, Optional

from jsonschema import Draft202012Validator  # type: ignore
from jsonschema.exceptions import best_match

from ffibind import logging as ffibind_logging, utils

from .func import FunctionBinding, Parameter
from .type import (EnumType, FunctionPointerType, NativeType, PointerType,
                   StructType, SupportedNativeType, TypeRef, HANDLE, VOID)

logger = ffibind_logging.get_logger(__name__)

_SCHEMA_CACHE: Optional[dict] = None


class DeclarationError(ValueError):
    pass


def _load_schema() -> dict:
    global _SCHEMA_CACHE
    if _SCHEMA_CACHE is None:
        _SCHEMA_CACHE = json.loads(utils.load_declaration_schema_text())
    return _SCHEMA_CACHE


def _validate(data: Any, ref: str) -> None:
    """Validate `data` against one sub-schema of the bundled schema.

    ref selects `$defs/Function` or `$defs/Type` so a single declaration is
    not checked against the top-level oneOf.
    """
    schema = _load_schema()
    target_schema = {
        "$schema": schema.get("$schema", "https://json-schema.org/draft/2020-12/schema"),
        "$id": schema.get("$id", "ffibind://declaration.schema.json"),
        "$ref": ref,
        "$defs": schema.get("$defs", {}),
    }
    first = best_match(Draft202012Validator(target_schema).iter_errors(data))
    if first is not None:
        location = "/".join(str(p) for p in first.path) or "<root>"
        raise DeclarationError(f"invalid declaration at {location}: {first.message}")


def type_from_dict(data: dict) -> TypeRef:
    _validate(data, "#/$defs/Type")
    return _build_type(data)


def binding_from_dict(data: dict) -> FunctionBinding:
    _validate(data, "#/$defs/Function")
    return _build_function(data)


def bindings_from_json(text: str) -> list[FunctionBinding]:
    """Build bindings from a JSON document holding one declaration or a list."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DeclarationError(f"declarations are not valid JSON: {exc}") from exc
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise DeclarationError("expected a declaration object or a list of them")
    bindings = [binding_from_dict(entry) for entry in data]
    logger.info("loaded %d function declaration(s)", len(bindings))
    return bindings


def _build_function(data: dict) -> FunctionBinding:
    parameters = [
        Parameter(type=_build_type(p["type"]), name=p.get("name"))
        for p in data.get("parameters", [])
    ]
    return FunctionBinding(
        name=data["name"],
        return_type=_build_type(data["return_type"]),
        parameters=parameters,
        symbol_name=data.get("symbol"),
        doc=data.get("doc"),
    )


def _native(name: str) -> SupportedNativeType:
    try:
        return SupportedNativeType.from_c_name(name)
    except ValueError as exc:
        raise DeclarationError(str(exc)) from exc


def _build_type(data: dict) -> TypeRef:
    kind = data["kind"]
    if kind == "void":
        return VOID
    elif kind == "native":
        return NativeType(_native(data["native"]))
    elif kind == "pointer":
        return PointerType(_build_type(data["child"]))
    elif kind == "function_pointer":
        return FunctionPointerType(_build_function(data["signature"]))
    elif kind == "struct":
        return StructType(data["name"])
    elif kind == "enum":
        if "native" in data:
            return EnumType(data["name"], _native(data["native"]))
        return EnumType(data["name"])
    elif kind == "handle":
        return HANDLE
    raise DeclarationError(f"unknown type kind: {kind}")
