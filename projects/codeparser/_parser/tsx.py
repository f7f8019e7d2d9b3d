import tree_sitter_typescript
from ..parser import TheParser

# JSX syntax needs the tsx dialect; the plain typescript grammar rejects it
class TsxParser(TheParser):
    def language(self) -> str:
        return 'tsx'

    def extensions(self) -> list[str]:
        return ['.tsx']

    def _grammar(self):
        return tree_sitter_typescript.language_tsx()
