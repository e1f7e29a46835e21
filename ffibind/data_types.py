from enum import Enum, auto


class BindingStringType(Enum):
    FUNC = auto()
    TYPEDEF = auto()
