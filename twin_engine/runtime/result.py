from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from twin_engine.models.errors import SubmissionError

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def ok(self) -> bool:
        return False


# sign_and_submit contract: Ok(transaction_hash) | Err(SubmissionError)
SubmitResult = Union[Ok[str], Err[SubmissionError]]
