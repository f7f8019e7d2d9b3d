import re
from pathlib import Path
from .architecture import Criterion, Prompt, PromptBuilder, ReviewRequest

# Template placeholders are backquoted field names, e.g. `file_path`
TOKENS = re.compile(r'`(file_path|code_file|requirements|file_tree|syntax_outline)`')


class ThePromptBuilder(PromptBuilder):
    def __init__(self, folder: str | None = None):
        # folder: directory with system.md and one <criterion>.md per criterion
        self.folder = Path(folder) if folder else Path(__file__).resolve().parent / 'prompts'

    def build(self, criterion: Criterion | str, context: list[ReviewRequest]) -> Prompt:
        criterion = Criterion.parse(criterion)
        if len(context) != 1:
            raise ValueError(f"Expected exactly one review request, got {len(context)}")
        request = context[0]

        fields = {
            'file_path': request.file_path,
            'code_file': request.code_file,
            'requirements': request.requirements,
            'file_tree': request.file_tree,
            'syntax_outline': request.syntax_outline or '(not available)',
        }
        system = self._template('system').replace('`criterion`', criterion.value)
        # One pass so substituted code is never scanned for placeholders again
        user = TOKENS.sub(lambda m: fields[m.group(1)], self._template(criterion.value))
        return Prompt(system=system, user=user)

    def _template(self, name: str) -> str:
        return (self.folder / f'{name}.md').read_text(encoding='utf-8')
