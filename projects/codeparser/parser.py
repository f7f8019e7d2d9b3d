import os
from typing import Any
from pathlib import Path
from tree_sitter import Language, Parser as TSParser
from .index import Parser

# Internal use only for grammar-specific subclasses, not part of public API
class TheParser(Parser):
    def __init__(self):
        # Subclasses supply the compiled grammar through _grammar()
        self._parser = TSParser(Language(self._grammar()))

    def _grammar(self) -> Any:
        # Must be overridden: return the language capsule of the tree-sitter grammar package
        raise NotImplementedError(f"{type(self).__name__} has no grammar")

    def parse(self, source: str) -> Any:
        tree = self._parser.parse(source.encode('utf-8'))
        root = tree.root_node
        if root.has_error:
            line = self._first_error_line(root)
            raise ValueError(f"Syntax error near line {line}")
        return root

    def _first_error_line(self, node) -> int:
        # 1-based line of the first ERROR or MISSING node in pre-order
        if node.type == 'ERROR' or node.is_missing:
            return node.start_point[0] + 1
        for child in node.children:
            if child.has_error or child.is_missing:
                return self._first_error_line(child)
        return node.start_point[0] + 1

    def outline(self, root: Any) -> str:
        lines = []
        for node in root.named_children:
            if 'comment' in node.type:
                continue
            lines.append(f"{node.start_point[0] + 1}: {node.type} {self._name(node)}".rstrip())
        return '\n'.join(lines)

    def _name(self, node) -> str:
        # Declarations expose 'name'; export statements wrap theirs in 'declaration'
        name = node.child_by_field_name('name')
        if name is None:
            inner = node.child_by_field_name('declaration')
            if inner is not None:
                name = inner.child_by_field_name('name')
        if name is None or name.text is None:
            return ''
        return name.text.decode('utf-8', errors='replace')

    @staticmethod
    def parsers() -> dict[str, Parser]:
        # Dynamically import all supported parser classes to avoid circular imports
        from ._parser.javascript import JavascriptParser
        from ._parser.typescript import TypescriptParser
        from ._parser.tsx import TsxParser

        parser_classes = [
            JavascriptParser,
            TypescriptParser,
            TsxParser,
        ]

        factory: dict[str, Parser] = {}
        for parser_class in parser_classes:
            try:
                parser = parser_class()
            except Exception as e:  # Should not occur; each subclass should ensure it can be legally instantiated
                raise ValueError(f"Failed to initialize parser for {parser_class.__name__}") from e
            lang = parser.language()
            if lang in factory:  # Should not occur; each subclass should ensure its language is unique
                raise ValueError(f"Language {lang} is shared by multiple parsers: {parser_class.__name__}")
            factory[lang] = parser

        return factory

    @staticmethod
    def ext2parser() -> dict[str, Parser]:
        # Build mapping from file extensions to parsers
        map: dict[str, Parser] = {}
        for parser in TheParser.parsers().values():
            for ext in parser.extensions():
                ext = ext.lower()
                if ext in map:  # e.g. .ts and .tsx must stay with their own grammar
                    raise ValueError(f"Extension {ext} is shared by multiple parsers: {map[ext].language()} and {parser.language()}")
                map[ext] = parser
        return map

    @staticmethod
    def create(language: str) -> Parser:
        parsers = TheParser.parsers()
        if language not in parsers:
            raise ValueError(f"Language {language} not supported")
        return parsers[language]

    @staticmethod
    def create_by_filename(fn: str) -> Parser | None:
        # Multi-segment extensions like "foo.d.ts" resolve by their last segment ".ts"
        _, ext = os.path.splitext(fn)
        return TheParser.ext2parser().get(ext.lower())

    def load(self, file_path: str) -> Any | None:
        data = Path(file_path).read_bytes()  # OSError propagates
        try:
            return self.parse(data.decode('utf-8'))
        except ValueError as e:  # UnicodeDecodeError included
            print(f"[WARNING] Failed to parse {file_path}: {e}")
            return None

    @staticmethod
    def to_syntax_tree(file_path: str) -> Any | None:
        parser = TheParser.create_by_filename(file_path)
        if parser is None:
            print(f"[WARNING] Unsupported file type: {file_path}")
            return None
        return parser.load(file_path)
