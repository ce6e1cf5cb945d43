"""
Event types for SemWatch

Raw events are what the watcher/debounce layer reports; semantic events are
what the classifier reduces a whole batch to.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from ..utils.path_utils import same_parent


class EventKind(Enum):
    """Top-level kind of a raw notification"""
    CREATE = 'create'
    MODIFY = 'modify'
    REMOVE = 'remove'
    OTHER = 'other'


class ModifyKind(Enum):
    DATA = 'data'
    NAME = 'name'
    ANY = 'any'
    OTHER = 'other'


class RemoveKind(Enum):
    ANY = 'any'
    OTHER = 'other'


Subkind = Union[ModifyKind, RemoveKind, None]


def _as_path(value: Union[str, Path]) -> Path:
    return value if isinstance(value, Path) else Path(value)


@dataclass(frozen=True)
class RawEvent:
    """A single low-level notification as produced by the watcher"""
    kind: EventKind
    subkind: Subkind = None
    paths: Tuple[Path, ...] = ()

    def __post_init__(self):
        if self.kind is EventKind.MODIFY and not isinstance(self.subkind, ModifyKind):
            raise ValueError(f"modify event needs a ModifyKind, got {self.subkind!r}")
        if self.kind is EventKind.REMOVE and not isinstance(self.subkind, RemoveKind):
            raise ValueError(f"remove event needs a RemoveKind, got {self.subkind!r}")
        if self.kind in (EventKind.CREATE, EventKind.OTHER) and self.subkind is not None:
            raise ValueError(f"{self.kind.value} event takes no subkind")
        if len(self.paths) > 2:
            raise ValueError(f"raw events carry at most two paths, got {len(self.paths)}")
        object.__setattr__(self, 'paths', tuple(_as_path(p) for p in self.paths))

    @classmethod
    def create(cls, path: Union[str, Path]) -> 'RawEvent':
        return cls(EventKind.CREATE, None, (path,))

    @classmethod
    def modify(cls, subkind: ModifyKind, *paths: Union[str, Path]) -> 'RawEvent':
        return cls(EventKind.MODIFY, subkind, tuple(paths))

    @classmethod
    def remove(cls, subkind: RemoveKind, *paths: Union[str, Path]) -> 'RawEvent':
        return cls(EventKind.REMOVE, subkind, tuple(paths))

    @classmethod
    def other(cls, *paths: Union[str, Path]) -> 'RawEvent':
        return cls(EventKind.OTHER, None, tuple(paths))

    @property
    def is_remove_any(self) -> bool:
        return self.kind is EventKind.REMOVE and self.subkind is RemoveKind.ANY

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON form used by batch files"""
        return {
            'kind': self.kind.value,
            'subkind': self.subkind.value if self.subkind is not None else None,
            'paths': [str(p) for p in self.paths],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawEvent':
        """Create a RawEvent from its JSON form

        Raises:
            ValueError: if the kind or subkind is not recognised
        """
        kind = EventKind(data['kind'])
        raw_subkind = data.get('subkind')
        subkind: Subkind = None
        if kind is EventKind.MODIFY:
            subkind = ModifyKind(raw_subkind or 'any')
        elif kind is EventKind.REMOVE:
            subkind = RemoveKind(raw_subkind or 'any')
        return cls(kind, subkind, tuple(data.get('paths', [])))


Batch = Sequence[RawEvent]


@dataclass(frozen=True)
class DebounceResult:
    """What the debounce layer hands over once per window"""
    events: Tuple[RawEvent, ...] = ()
    errors: Tuple[BaseException, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class SemanticEvent:
    """Base class of the closed set of classified outcomes"""

    @property
    def kind(self) -> str:
        return type(self).__name__.lower()

    @property
    def is_unknown(self) -> bool:
        return False

    @property
    def path(self) -> Optional[Path]:
        return None

    @property
    def path2(self) -> Optional[Path]:
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'type': self.kind}
        if self.path2 is not None:
            data['old_path'] = str(self.path)
            data['new_path'] = str(self.path2)
        elif self.path is not None:
            data['path'] = str(self.path)
        return data


@dataclass(frozen=True)
class _SinglePath(SemanticEvent):
    target: Path = field(default=Path())

    def __post_init__(self):
        object.__setattr__(self, 'target', _as_path(self.target))

    @property
    def path(self) -> Optional[Path]:
        return self.target


@dataclass(frozen=True)
class Create(_SinglePath):
    pass


@dataclass(frozen=True)
class Modify(_SinglePath):
    pass


@dataclass(frozen=True)
class Delete(_SinglePath):
    pass


@dataclass(frozen=True)
class _TwoPath(SemanticEvent):
    old_path: Path = field(default=Path())
    new_path: Path = field(default=Path())

    def __post_init__(self):
        object.__setattr__(self, 'old_path', _as_path(self.old_path))
        object.__setattr__(self, 'new_path', _as_path(self.new_path))

    @property
    def path(self) -> Optional[Path]:
        return self.old_path

    @property
    def path2(self) -> Optional[Path]:
        return self.new_path


@dataclass(frozen=True)
class Rename(_TwoPath):
    """Same parent directory on both sides"""

    def __post_init__(self):
        super().__post_init__()
        if not same_parent(self.old_path, self.new_path):
            raise ValueError(f"rename must stay in one directory: {self.old_path} -> {self.new_path}")


@dataclass(frozen=True)
class Move(_TwoPath):
    """Different parent directories"""

    def __post_init__(self):
        super().__post_init__()
        if same_parent(self.old_path, self.new_path):
            raise ValueError(f"move must change directory: {self.old_path} -> {self.new_path}")


@dataclass(frozen=True)
class Unknown(SemanticEvent):

    @property
    def is_unknown(self) -> bool:
        return True


def relocation(old_path: Union[str, Path], new_path: Union[str, Path]) -> SemanticEvent:
    """Build a Rename or a Move depending on whether the parent changes"""
    old_path, new_path = _as_path(old_path), _as_path(new_path)
    if same_parent(old_path, new_path):
        return Rename(old_path, new_path)
    return Move(old_path, new_path)
