import os
import time
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor
from ..filetree.index import FileTree
from ..codeparser.index import Parser
from .architecture import (
    AssignmentLocator,
    Criterion,
    ModelInvocationError,
    PromptBuilder,
    ReviewFailure,
    ReviewRequest,
    ReviewResult,
    Reviewer,
)
from .index import Assignreview

class TheAssignreview(Assignreview):
    def __init__(
        self,
        reviewer: Reviewer,
        locator: AssignmentLocator,
        requirements: str | None = None,
        timeout: int = 0,
        parallel: bool = False,
        isolate: bool = False,
        syntax: bool = False,
    ):
        self.reviewer = reviewer
        self.locator = locator
        self.builder = PromptBuilder.create()
        self.tree = FileTree.create()
        if requirements is None:
            requirements = (Path(__file__).resolve().parent / 'prompts' / 'requirements.md').read_text(encoding='utf-8')
        self.requirements = requirements
        self.timeout = timeout
        self.parallel = parallel
        self.isolate = isolate
        self.syntax = syntax

    def generate_review(self, assignment_id: str | None, criterion: Criterion | str) -> list[ReviewResult | ReviewFailure]:
        criterion = Criterion.parse(criterion)  # Fail before touching the filesystem or the model
        print(f"Generating {criterion.value} review for assignment {assignment_id} ...")

        project = self.locator.locate(assignment_id)
        files = self.tree.extract(self.tree.scan(project))
        file_tree = '\n'.join(files)  # Shared by every prompt of this run

        if self.parallel and len(files) > 1:
            workers = os.cpu_count() or 1  # Fallback to single worker when CPU count is unavailable
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(self._review, file, criterion, file_tree) for file in files]
                try:
                    results = [future.result() for future in futures]  # Submission order, not completion order
                except BaseException:
                    for future in futures:
                        future.cancel()
                    raise
        else:
            results = [self._review(file, criterion, file_tree) for file in files]

        failed = sum(1 for r in results if isinstance(r, ReviewFailure))
        flagged = sum(1 for r in results if isinstance(r, ReviewResult) and not r.flag)
        print(f"Final {criterion.value} review: {len(results)} file(s), {flagged} flagged, {failed} failed")
        return results

    def _review(self, file_path: str, criterion: Criterion, file_tree: str) -> ReviewResult | ReviewFailure:
        if not self.isolate:
            return self.review_file(file_path, criterion, self.requirements, file_tree)
        try:
            return self.review_file(file_path, criterion, self.requirements, file_tree)
        except (OSError, UnicodeDecodeError, ModelInvocationError) as e:
            print(f"[WARNING] Failed to review {file_path}: {e}")
            return ReviewFailure(file_path=file_path, error=str(e))

    def review_file(self, file_path: str, criterion: Criterion | str, requirements: str, file_tree: str) -> ReviewResult:
        code_file = Path(file_path).read_bytes().decode('utf-8')  # Keep line endings as written
        request = ReviewRequest(
            file_path=file_path,
            code_file=code_file,
            requirements=requirements,
            file_tree=file_tree,
            syntax_outline=self._outline(file_path) if self.syntax else '',
        )
        prompt = self.builder.build(criterion, [request])

        print(f"Reviewing {file_path} ...")
        t0 = time.time()
        data = self.reviewer.review(prompt, self.timeout)
        print(f"... Reviewed in {int(time.time() - t0)}\" : {file_path}")

        if not isinstance(data.get('review'), str) or not isinstance(data.get('flag'), bool):
            raise ModelInvocationError(f"[ERR] {self.reviewer.ai()} answer lacks review/flag for {file_path}")

        # The path always comes from the walk, never from the model's answer
        result = ReviewResult(review=data['review'], flag=data['flag'], file_path=file_path, func=data.get('func') or '')
        print(f"[{Criterion.parse(criterion).value}] {file_path}: flag={result.flag} func={result.func or '-'}")
        return result

    def _outline(self, file_path: str) -> str:
        parser = Parser.create_by_filename(file_path)
        if parser is None:
            print(f"[WARNING] Unsupported file type: {file_path}")
            return ''
        root = parser.load(file_path)
        return '' if root is None else parser.outline(root)  # Unparsable: review without enrichment
