#\% Public facing interface:
#\% - FileNode value type plus an abstract walker, providing all context (without implementation) for callers
#\% - Static factory method(s)

from typing import Iterable
from dataclasses import dataclass
from abc import ABC, abstractmethod


@dataclass(frozen=True)
class FileNode:
    path: str  # Absolute path
    name: str  # Entry name within its parent directory
    is_directory: bool
    children: tuple["FileNode", ...] | None = None  # Present iff is_directory

    def __post_init__(self):
        if self.is_directory and self.children is None:
            raise ValueError(f"Directory node {self.path} must have children")
        if not self.is_directory and self.children is not None:
            raise ValueError(f"File node {self.path} must not have children")


class FileTree(ABC):
    @abstractmethod
    def scan(self, directory: str) -> list[FileNode]:
        # Recursively enumerate `directory` depth-first, in the order the filesystem lists entries.
        # OSError (missing or unreadable directory) propagates to the caller.
        pass

    @abstractmethod
    def extract(self, nodes: FileNode | Iterable[FileNode]) -> list[str]:
        # Flatten a scanned tree into file paths (pre-order, directories omitted, no reordering).
        pass

    @staticmethod
    def create() -> "FileTree":
        # Factory method returning the default implementation while keeping the import local to dodge circular dependencies
        from .filetree import TheFileTree
        return TheFileTree()
