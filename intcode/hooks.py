"""
Intcode VM - Ready-Made I/O Hooks

Input hooks take no arguments and return an int. Output hooks take one
int. Either may raise; the VM passes the exception through unchanged.
"""

from collections import deque
from typing import Callable, Iterable, List, Optional, Tuple

from .errors import HookFailure


class InputExhausted(HookFailure):
    def __init__(self, consumed: int):
        self.consumed = consumed
        super().__init__(f"input requested after {consumed} values consumed")


def queue_input(values: Iterable[int]) -> Callable[[], int]:
    """Input hook that hands out `values` in order.

    The returned callable also exposes `.queue` (a deque) so hosts can
    feed more values before the program asks for them (e.g. from the
    output hook of another VM). Running dry fails the VM; it cannot be
    resumed afterwards.
    """
    queue = deque(values)
    consumed = 0

    def read() -> int:
        nonlocal consumed
        if not queue:
            raise InputExhausted(consumed)
        consumed += 1
        return queue.popleft()

    read.queue = queue
    return read


def collect_output(sink: Optional[List[int]] = None
                   ) -> Tuple[Callable[[int], None], List[int]]:
    """Output hook appending to `sink`. Returns (hook, sink)."""
    if sink is None:
        sink = []
    return sink.append, sink
