from typing import Iterator, List, Optional, Tuple
from ocminus.errors import UnboundVariable
from ocminus.types import Value


class Environment:
    """Persistent mapping from identifiers to values.

    Each environment is one binding on top of a parent chain. `update`
    never touches the receiver; it returns a new environment whose newest
    binding shadows any older binding of the same name, so scopes that are
    still live keep seeing exactly what they saw before.
    """
    __slots__ = ('parent', 'name', 'value', '_size')

    def __init__(self, parent: Optional['Environment'] = None,
                 name: Optional[str] = None, value: Optional[Value] = None):
        self.parent = parent
        self.name = name
        self.value = value
        if name is None:
            self._size = 0
        else:
            self._size = parent._size + (0 if name in parent else 1)

    @classmethod
    def empty(cls) -> 'Environment':
        return EMPTY

    @classmethod
    def from_bindings(cls, bindings: List[Tuple[str, Value]]) -> 'Environment':
        env = EMPTY
        for name, value in bindings:
            env = env.update(name, value)
        return env

    def _frames(self) -> Iterator['Environment']:
        env = self
        while env is not None and env.name is not None:
            yield env
            env = env.parent

    def lookup(self, name: str) -> Value:
        for frame in self._frames():
            if frame.name == name:
                return frame.value
        raise UnboundVariable(name)

    def update(self, name: str, value: Value) -> 'Environment':
        return Environment(self, name, value)

    def names(self) -> List[str]:
        # Newest binding first, shadowed bindings omitted.
        seen: List[str] = []
        for frame in self._frames():
            if frame.name not in seen:
                seen.append(frame.name)
        return seen

    def __contains__(self, name: str) -> bool:
        return any(frame.name == name for frame in self._frames())

    def __iter__(self) -> Iterator[Tuple[str, Value]]:
        for name in self.names():
            yield name, self.lookup(name)

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        inner = ', '.join(f"{name} -> {value!r}" for name, value in self)
        return f"{{{inner}}}"


EMPTY = Environment()
