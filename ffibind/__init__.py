from .code_generator import (BindingString, FunctionBinding, Parameter,
                             TypeRenderer, UniqueNamer)
from .data_types import BindingStringType

__all__ = [
    'BindingString',
    'BindingStringType',
    'FunctionBinding',
    'Parameter',
    'TypeRenderer',
    'UniqueNamer',
]
