import tree_sitter_javascript
from ..parser import TheParser

class JavascriptParser(TheParser):
    def language(self) -> str:
        return 'javascript'

    def extensions(self) -> list[str]:
        return ['.js', '.mjs', '.cjs', '.jsx']

    def _grammar(self):
        return tree_sitter_javascript.language()
