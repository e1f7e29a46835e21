from dataclasses import dataclass

from ffibind.data_types import BindingStringType


@dataclass(frozen=True)
class BindingString:
    """Generated source text tagged with the kind of binding it declares."""

    type: BindingStringType
    string: str

    def __str__(self) -> str:
        return self.string
