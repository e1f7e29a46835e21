from dataclasses import dataclass
from typing import Optional, Sequence, cast

from ffibind import logging as ffibind_logging
from ffibind.data_types import BindingStringType

from .binding_string import BindingString
from .binding_templates import (FunctionContext, TypedefContext,
                                render_function, render_typedef)
from .type import BroadType, FunctionPointerType, TypeRef
from .type_renderer import TypeRenderer
from .unique_namer import UniqueNamer

logger = ffibind_logging.get_logger(__name__)


class Parameter:
    def __init__(self, type: TypeRef, name: Optional[str] = None):
        self.name = name
        self.type = type

    def __repr__(self):
        return f"Parameter({self.name!r}, {self.type!r})"


@dataclass(frozen=True)
class NestedTypedef:
    """A function-pointer typedef emitted ahead of the binding that uses it."""

    name: str
    binding: BindingString


class FunctionBinding:
    """A binding for a C function.

    For a C function::

        int sum(int a, int b);

    the generated Dart code is::

        int sum(
          int a,
          int b,
        ) {
          return _sum(
            a,
            b,
          );
        }

        final _dart_sum _sum = _dylib.lookupFunction<_c_sum,_dart_sum>('sum');

        typedef _c_sum = ffi.Int32 Function(
          ffi.Int32 a,
          ffi.Int32 b,
        );

        typedef _dart_sum = int Function(
          int a,
          int b,
        );

    Rendering never mutates the binding or the types it references, so the
    same binding can be rendered into several output units.
    """

    def __init__(
        self,
        name: str,
        return_type: TypeRef,
        parameters: Optional[Sequence[Parameter]] = None,
        symbol_name: Optional[str] = None,
        doc: Optional[str] = None,
    ):
        if not name or not name.strip():
            raise ValueError("function binding requires a non-empty name")
        if return_type is None:
            raise ValueError(f"function binding {name} has no return type")
        self.declared_name: str = name
        self.symbol_name: str = symbol_name if symbol_name is not None else name
        self.return_type = return_type
        self.doc = doc

        # Parameters are copied so that naming one binding never renames
        # a Parameter shared with another. Unnamed parameters are named after
        # their position among all parameters.
        self.parameters: tuple[Parameter, ...] = tuple(
            Parameter(param.type, param.name if param.name and param.name.strip() else f"arg{i}")
            for i, param in enumerate(parameters or ())
        )

    def render(self, namer: UniqueNamer, renderer: TypeRenderer) -> BindingString:
        """Render the wrapper, symbol lookup and both typedefs.

        The public wrapper keeps its declared name, so it is claimed exactly;
        NameCollisionError is raised if the unit already uses it.
        """
        namer.reserve(self.declared_name)
        nested, param_typedefs, return_typedef = self._render_nested_typedefs(namer, renderer)

        func_var = namer.allocate(f"_{self.declared_name}")
        typedef_c = namer.allocate(f"_c_{self.declared_name}")
        typedef_dart = namer.allocate(f"_dart_{self.declared_name}")

        host_params = self._params(renderer.host_shape, param_typedefs)
        host_return = renderer.host_shape(self.return_type, return_typedef)

        parts = [typedef.binding.string for typedef in nested]
        parts.append(render_function(FunctionContext.create(
            doc=self.doc,
            name=self.declared_name,
            symbol=self.symbol_name,
            return_type=host_return,
            params=host_params,
            func_var=func_var,
            typedef_c=typedef_c,
            typedef_dart=typedef_dart,
            dylib=renderer.dylib_identifier,
        )))
        parts.append(render_typedef(TypedefContext.create(
            name=typedef_c,
            return_type=renderer.foreign_shape(self.return_type, return_typedef),
            params=self._params(renderer.foreign_shape, param_typedefs),
        )))
        parts.append(render_typedef(TypedefContext.create(
            name=typedef_dart,
            return_type=host_return,
            params=host_params,
        )))

        logger.debug(
            "rendered function %s (symbol %s) with %d nested typedef(s)",
            self.declared_name, self.symbol_name, len(nested),
        )
        return BindingString(type=BindingStringType.FUNC, string="".join(parts))

    def render_typedef(self, namer: UniqueNamer, renderer: TypeRenderer) -> NestedTypedef:
        """Render only the foreign-call-shape typedef of this signature.

        Used for function pointers, which are typedef'd rather than wrapped.
        The typedef name is allocated first, then any function pointers among
        this signature's own parameters are declared ahead of it.
        """
        name = namer.allocate(self.declared_name)
        nested, param_typedefs, return_typedef = self._render_nested_typedefs(namer, renderer)
        text = render_typedef(TypedefContext.create(
            name=name,
            return_type=renderer.foreign_shape(self.return_type, return_typedef),
            params=self._params(renderer.foreign_shape, param_typedefs),
        ))
        parts = [typedef.binding.string for typedef in nested]
        parts.append(text)
        return NestedTypedef(
            name=name,
            binding=BindingString(type=BindingStringType.TYPEDEF, string="".join(parts)),
        )

    def _render_nested_typedefs(self, namer: UniqueNamer, renderer: TypeRenderer):
        nested: list[NestedTypedef] = []
        param_typedefs: dict[int, str] = {}
        for i, param in enumerate(self.parameters):
            typedef = _nested_typedef_for(param.type, namer, renderer)
            if typedef is not None:
                nested.append(typedef)
                param_typedefs[i] = typedef.name

        return_typedef = None
        typedef = _nested_typedef_for(self.return_type, namer, renderer)
        if typedef is not None:
            nested.append(typedef)
            return_typedef = typedef.name

        return nested, param_typedefs, return_typedef

    def _params(self, shape, typedef_names: dict[int, str]) -> list[tuple[str, str]]:
        return [
            (shape(param.type, typedef_names.get(i)), param.name)
            for i, param in enumerate(self.parameters)
        ]

    def __repr__(self):
        return f"FunctionBinding({self.declared_name!r}, symbol={self.symbol_name!r})"


def _nested_typedef_for(type_ref: TypeRef, namer: UniqueNamer,
                        renderer: TypeRenderer) -> Optional[NestedTypedef]:
    base = type_ref.get_base_type()
    if base.kind is not BroadType.FUNCTION_POINTER:
        return None
    return cast(FunctionPointerType, base).signature.render_typedef(namer, renderer)
