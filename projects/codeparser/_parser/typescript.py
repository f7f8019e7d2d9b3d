import tree_sitter_typescript
from ..parser import TheParser

class TypescriptParser(TheParser):
    def language(self) -> str:
        return 'typescript'

    def extensions(self) -> list[str]:
        return ['.ts', '.mts', '.cts']

    def _grammar(self):
        return tree_sitter_typescript.language_typescript()
