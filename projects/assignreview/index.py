#\% Public facing interface:
#\% - Abstract class and methods only except static method(s), providing all context (without implementation) for callers
#\% - Static factory method(s)

from abc import ABC, abstractmethod
from .architecture import AssignmentLocator, Criterion, ReviewFailure, ReviewResult, Reviewer


class Assignreview(ABC):
    @abstractmethod
    def generate_review(self, assignment_id: str | None, criterion: Criterion | str) -> list[ReviewResult | ReviewFailure]:
        # Review every file of the assignment under one criterion, one result per file in walk order.
        # Without isolation the first failing file aborts the whole call and nothing is returned.
        pass

    @abstractmethod
    def review_file(self, file_path: str, criterion: Criterion | str, requirements: str, file_tree: str) -> ReviewResult:
        # Review a single file given the run-wide rubric text and file list
        pass

    @staticmethod
    def create(
        reviewer: Reviewer,
        locator: AssignmentLocator,
        requirements: str | None = None,
        timeout: int = 0,
        parallel: bool = False,
        isolate: bool = False,
        syntax: bool = False,
    ) -> "Assignreview":
        # reviewer: model boundary used for every file
        # locator: resolves assignment ids to project directories
        # requirements: rubric text, the packaged prompts/requirements.md when None
        # timeout: per model call, see AI2JSON.init for the 0 / negative conventions
        # parallel: review files on a thread pool instead of one at a time (order is kept)
        # isolate: record per-file failures as ReviewFailure instead of aborting
        # syntax: add a tree-sitter outline of supported source files to each prompt
        from .assignreview import TheAssignreview
        return TheAssignreview(reviewer, locator, requirements, timeout, parallel, isolate, syntax)
