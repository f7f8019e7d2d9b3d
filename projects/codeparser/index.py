#\% Public facing interface:
#\% - Abstract class and methods only except static method(s), providing all context (without implementation) for callers
#\% - Static factory method(s)

from typing import Any
from abc import ABC, abstractmethod

# Tree-sitter backed source normalization; one concrete parser per genuine grammar.
# Extensions without a registered grammar get no enrichment rather than a mismatched one.
class Parser(ABC):
    @abstractmethod
    def language(self) -> str:
        # Return the grammar key such as 'javascript' or 'tsx'.
        pass

    @abstractmethod
    def extensions(self) -> list[str]:
        # Return supported file extensions with a leading dot, such as ['.ts', '.mts'].
        pass

    @abstractmethod
    def parse(self, source: str) -> Any:
        # Parse source text and return the syntax tree root node.
        # Raises ValueError when the tree contains syntax errors.
        pass

    @abstractmethod
    def load(self, file_path: str) -> Any | None:
        # Read a UTF-8 file and parse it; None (with a warning) when decoding or parsing fails.
        # OSError from reading the file propagates.
        pass

    @abstractmethod
    def outline(self, root: Any) -> str:
        # Summarize top-level declarations of a root node, one '<line>: <type> <name>' per line.
        pass

    # Use function-scoped imports to avoid circular dependencies.
    @staticmethod
    def parsers() -> dict[str, "Parser"]:
        from .parser import TheParser
        return TheParser.parsers()

    @staticmethod
    def ext2parser() -> dict[str, "Parser"]:
        from .parser import TheParser
        return TheParser.ext2parser()

    @staticmethod
    def create(language: str) -> "Parser":
        from .parser import TheParser
        return TheParser.create(language)

    @staticmethod
    def create_by_filename(fn: str) -> "Parser | None":
        # None when no grammar is registered for the extension.
        from .parser import TheParser
        return TheParser.create_by_filename(fn)

    @staticmethod
    def to_syntax_tree(file_path: str) -> Any | None:
        # Root node of the parsed file, or None (with a warning) for unsupported types and parse failures.
        # OSError from reading the file propagates.
        from .parser import TheParser
        return TheParser.to_syntax_tree(file_path)
