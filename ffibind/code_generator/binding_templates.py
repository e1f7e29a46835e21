from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

_TEMPLATE_DIR = Path(__file__).with_name("templates")


@lru_cache(maxsize=None)
def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(_TEMPLATE_DIR),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def _block(rendered: str) -> str:
    # Every emitted declaration is followed by exactly one blank line.
    return rendered.rstrip("\n") + "\n\n"


def _dart_string_literal_body(value: str) -> str:
    # Symbols land inside a single-quoted Dart string, where `$` interpolates.
    return value.replace("\\", "\\\\").replace("'", "\\'").replace("$", "\\$")


@dataclass(frozen=True)
class TemplateParam:
    type: str
    name: str


@dataclass(frozen=True)
class TypedefContext:
    """Template inputs for a `typedef X = R Function(...)` declaration."""

    name: str
    return_type: str
    params: tuple[TemplateParam, ...]

    @classmethod
    def create(cls, *, name: str, return_type: str,
               params: Iterable[tuple[str, str]]) -> "TypedefContext":
        return cls(
            name=name,
            return_type=return_type,
            params=tuple(TemplateParam(type=t, name=n) for t, n in params),
        )

    def as_template_args(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "return_type": self.return_type,
            "params": self.params,
        }


@dataclass(frozen=True)
class FunctionContext:
    """Template inputs for a public wrapper and its symbol lookup."""

    doc_lines: tuple[str, ...]
    name: str
    symbol: str
    return_type: str
    params: tuple[TemplateParam, ...]
    func_var: str
    typedef_c: str
    typedef_dart: str
    dylib: str

    @classmethod
    def create(
        cls,
        *,
        doc: Optional[str],
        name: str,
        symbol: str,
        return_type: str,
        params: Iterable[tuple[str, str]],
        func_var: str,
        typedef_c: str,
        typedef_dart: str,
        dylib: str,
    ) -> "FunctionContext":
        return cls(
            doc_lines=tuple(doc.split("\n")) if doc is not None else (),
            name=name,
            symbol=_dart_string_literal_body(symbol),
            return_type=return_type,
            params=tuple(TemplateParam(type=t, name=n) for t, n in params),
            func_var=func_var,
            typedef_c=typedef_c,
            typedef_dart=typedef_dart,
            dylib=dylib,
        )

    def as_template_args(self) -> dict[str, Any]:
        return {
            "doc_lines": self.doc_lines,
            "name": self.name,
            "symbol": self.symbol,
            "return_type": self.return_type,
            "params": self.params,
            "func_var": self.func_var,
            "typedef_c": self.typedef_c,
            "typedef_dart": self.typedef_dart,
            "dylib": self.dylib,
        }


def render_typedef(context: TypedefContext) -> str:
    template = _get_env().get_template("typedef.j2")
    return _block(template.render(context.as_template_args()))


def render_function(context: FunctionContext) -> str:
    template = _get_env().get_template("func.j2")
    return _block(template.render(context.as_template_args()))
