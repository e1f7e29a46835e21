import json

import pytest

from ffibind.code_generator import (BroadType, DeclarationError, EnumType,
                                    PointerType, StructType,
                                    SupportedNativeType, binding_from_dict,
                                    bindings_from_json, type_from_dict)

REGISTER_CB = {
    "name": "register_cb",
    "symbol": "lib_register_cb",
    "doc": "Registers a callback.",
    "return_type": {"kind": "void"},
    "parameters": [
        {
            "name": "cb",
            "type": {
                "kind": "function_pointer",
                "signature": {
                    "name": "callback",
                    "return_type": {"kind": "void"},
                    "parameters": [{"type": {"kind": "native", "native": "Int32"}}],
                },
            },
        },
        {"name": None, "type": {"kind": "pointer", "child": {"kind": "struct", "name": "Context"}}},
    ],
}


def test_binding_from_dict():
    binding = binding_from_dict(REGISTER_CB)

    assert binding.declared_name == "register_cb"
    assert binding.symbol_name == "lib_register_cb"
    assert binding.doc == "Registers a callback."
    assert binding.return_type.kind is BroadType.VOID
    assert [p.name for p in binding.parameters] == ["cb", "arg1"]
    callback = binding.parameters[0].type
    assert callback.kind is BroadType.FUNCTION_POINTER
    assert callback.signature.parameters[0].name == "arg0"
    assert binding.parameters[1].type == PointerType(StructType("Context"))


def test_bindings_from_json_renders(namer, renderer):
    bindings = bindings_from_json(json.dumps([REGISTER_CB, {"name": "tick", "return_type": {"kind": "void"}}]))
    texts = [b.render(namer, renderer).string for b in bindings]

    assert texts[0].startswith("typedef callback = ffi.Void Function(")
    assert "lookupFunction<_c_register_cb,_dart_register_cb>('lib_register_cb');" in texts[0]
    assert "  ffi.Pointer<Context> arg1,\n" in texts[0]
    assert texts[1].startswith("void tick(\n")


def test_bindings_from_json_accepts_single_object():
    bindings = bindings_from_json(json.dumps({"name": "tick", "return_type": {"kind": "void"}}))
    assert [b.declared_name for b in bindings] == ["tick"]


def test_type_from_dict_enum_with_native():
    enum = type_from_dict({"kind": "enum", "name": "Flags", "native": "uint16"})
    assert enum == EnumType("Flags", SupportedNativeType.UINT16)


@pytest.mark.parametrize(
    "data",
    [
        {"return_type": {"kind": "void"}},
        {"name": "", "return_type": {"kind": "void"}},
        {"name": "f", "return_type": {"kind": "array"}},
        {"name": "f", "return_type": {"kind": "pointer"}},
        {"name": "f", "return_type": {"kind": "void"}, "parameters": [{"name": "x"}]},
        {"name": "f", "return_type": {"kind": "void"}, "extra": 1},
    ],
)
def test_invalid_declarations_are_rejected(data):
    with pytest.raises(DeclarationError):
        binding_from_dict(data)


def test_unknown_native_type_is_rejected():
    with pytest.raises(DeclarationError):
        type_from_dict({"kind": "native", "native": "Int128"})


def test_malformed_json_is_rejected():
    with pytest.raises(DeclarationError):
        bindings_from_json("{not json")
    with pytest.raises(DeclarationError):
        bindings_from_json("42")
