from typing import Protocol


class TestHelper(Protocol):
    """A helper that is set up before and torn down after each test."""

    def set_up(self) -> None:
        ...

    def tear_down(self) -> None:
        ...
