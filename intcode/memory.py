"""
Intcode VM - Word-Addressable Memory

Memory is a flat, fixed-length list of Python ints (signed, unbounded).
The program image is copied into the prefix; the rest is scratch space
for programs that address beyond their own length.

The buffer never grows. Any address that is negative or >= len(memory)
raises MemoryAccessError instead of letting Python's negative indexing
silently wrap around to the end of the list.
"""

from typing import Dict, List, Optional, Sequence, Tuple, Union

from .errors import MemoryAccessError


class Memory:
    """Fixed-size signed-integer memory.

    Usage:
        mem = Memory(4096)
        mem.load([1, 0, 0, 0, 99])
        mem.write(100, 7)
        mem.read(100)   # 7
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"memory size must be >= 0, got {size}")
        self._mem: List[int] = [0] * size

    @classmethod
    def wrap(cls, buffer: List[int]) -> "Memory":
        """Use a caller-owned list as the backing store (no copy).

        Writes by the VM are visible in `buffer`, so it must be a list;
        use from_words() to copy an immutable sequence instead.
        """
        if not isinstance(buffer, list):
            raise TypeError(
                f"memory buffer must be a list, got {type(buffer).__name__}")
        mem = cls(0)
        mem._mem = buffer
        return mem

    @classmethod
    def from_words(cls, words: Sequence[int]) -> "Memory":
        """Build memory holding a copy of `words`."""
        mem = cls(0)
        mem._mem = list(words)
        return mem

    # --- Core read/write ---

    def _check(self, addr: int) -> int:
        if addr < 0 or addr >= len(self._mem):
            raise MemoryAccessError(addr, len(self._mem))
        return addr

    def read(self, addr: int) -> int:
        return self._mem[self._check(addr)]

    def write(self, addr: int, value: int):
        self._mem[self._check(addr)] = value

    def __len__(self) -> int:
        return len(self._mem)

    def __getitem__(self, key: Union[int, slice]):
        if isinstance(key, slice):
            return self._mem[key]
        return self.read(key)

    def __setitem__(self, addr: int, value: int):
        self.write(addr, value)

    def __eq__(self, other) -> bool:
        if isinstance(other, Memory):
            return self._mem == other._mem
        return NotImplemented

    def __repr__(self) -> str:
        return f"Memory(size={len(self._mem)})"

    # --- Bulk load ---

    def load(self, program: Sequence[int]):
        """Copy a program image into the start of memory.

        The caller sizes memory; a program longer than the buffer is a
        configuration error, not something to truncate.
        """
        if len(program) > len(self._mem):
            raise MemoryAccessError(len(program) - 1, len(self._mem))
        self._mem[:len(program)] = program

    def copy(self) -> "Memory":
        return Memory.from_words(self._mem)

    def to_list(self) -> List[int]:
        return list(self._mem)

    # --- Snapshots (compare state across runs) ---

    def snapshot(self, start: int = 0,
                 end: Optional[int] = None) -> Tuple[int, ...]:
        """Capture memory words [start, end) as an immutable tuple."""
        return tuple(self._mem[start:end])

    @staticmethod
    def diff(snap_a: Sequence[int], snap_b: Sequence[int],
             base_addr: int = 0) -> Dict[int, Tuple[int, int]]:
        """Compare two snapshots, return {addr: (old, new)} for changed words."""
        changes = {}
        for i in range(min(len(snap_a), len(snap_b))):
            if snap_a[i] != snap_b[i]:
                changes[base_addr + i] = (snap_a[i], snap_b[i])
        return changes
