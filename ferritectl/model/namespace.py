from dataclasses import dataclass, field

from ferritectl.model.key import KeyRecord


@dataclass
class NamespaceGroup:
    prefix: str
    keys: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.keys)

    @property
    def label(self) -> str:
        return f"{self.prefix}  ({self.count})"


@dataclass
class Placeholder:
    message: str


BrowseEntry = NamespaceGroup | KeyRecord | Placeholder
