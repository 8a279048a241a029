from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional


class DialogResult(Enum):
    """Why a dialog terminated."""

    OK = "ok"
    CANCEL = "cancel"
    ABORT = "abort"
    RETRY = "retry"
    IGNORE = "ignore"
    YES = "yes"
    NO = "no"


class FormData(Mapping[str, str]):
    """Snapshot of field values keyed by field name."""

    def __init__(self, data: Optional[Mapping[str, str]] = None):
        self._data: Dict[str, str] = dict(data or {})

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FormData({self._data!r})"

    def to_dict(self) -> Dict[str, str]:
        return dict(self._data)


@dataclass
class DialogReturnValue:
    """
    Outcome of feeding one key event to a dialog or control.

    Attributes:
        should_quit: The dialog terminated; stop delivering input
        dialog_result: Outcome tag when terminated
        form_data: Field values captured at termination
    """
    should_quit: bool = False
    dialog_result: Optional[DialogResult] = None
    form_data: FormData = field(default_factory=FormData)

    @classmethod
    def quit(cls, result: DialogResult, form_data: Optional[FormData] = None) -> "DialogReturnValue":
        return cls(should_quit=True, dialog_result=result, form_data=form_data or FormData())
