#\% Architecture breakdown of sub-modules and the values flowing between them:
#\% - Review value types (criterion, request, result, failure, prompt)
#\% - Abstract collaborators of the orchestrator: prompt builder, model reviewer, assignment locator
#\% - Static factory method(s)

from enum import Enum
from typing import Any
from dataclasses import dataclass
from abc import ABC, abstractmethod


class Criterion(str, Enum):
    # Review lens selecting the rubric template
    ACCURACY = 'accuracy'
    LOGIC = 'logic'
    EFFICIENCY = 'efficiency'
    CONSISTENCY = 'consistency'

    @staticmethod
    def parse(value: "str | Criterion") -> "Criterion":
        try:
            return Criterion(value)
        except ValueError:
            choices = ', '.join(c.value for c in Criterion)
            raise ValueError(f"Unsupported criterion [{choices}]: {value}") from None


class ModelInvocationError(RuntimeError):
    # The model boundary failed: CLI error, timeout, unparsable or incomplete answer
    pass


@dataclass(frozen=True)
class ReviewRequest:
    file_path: str
    code_file: str  # File content
    requirements: str  # Rubric text, constant across a run
    file_tree: str  # Every reviewed path, one per line, constant across a run
    syntax_outline: str = ''  # Top-level declarations, only when syntax enrichment is on


@dataclass(frozen=True)
class ReviewResult:
    review: str
    flag: bool
    file_path: str
    func: str

    def to_dict(self) -> dict[str, Any]:
        return {'review': self.review, 'flag': self.flag, 'filePath': self.file_path, 'func': self.func}


@dataclass(frozen=True)
class ReviewFailure:
    # Stands in for a ReviewResult when per-file isolation is on
    file_path: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {'filePath': self.file_path, 'error': self.error}


@dataclass(frozen=True)
class Prompt:
    system: str
    user: str


class PromptBuilder(ABC):
    @abstractmethod
    def build(self, criterion: Criterion | str, context: list[ReviewRequest]) -> Prompt:
        # Fill the criterion's template with the single request in `context`.
        # Unknown criterion or a context that is not exactly one request raises ValueError.
        pass

    @staticmethod
    def create() -> "PromptBuilder":
        from .prompt import ThePromptBuilder
        return ThePromptBuilder()


class Reviewer(ABC):
    @abstractmethod
    def ai(self) -> str:
        # Return the configured AI identifier.
        pass

    @abstractmethod
    def review(self, prompt: Prompt, timeout: int = 0) -> dict[str, Any]:
        # One blocking model call; returns a dict holding at least review (str) and flag (bool), func (str) when known.
        # Any failure raises ModelInvocationError.
        pass

    @staticmethod
    def create(ai: str, tmp: str | None = None) -> "Reviewer":
        from .reviewer import TheReviewer
        return TheReviewer(ai, tmp)


class AssignmentLocator(ABC):
    @abstractmethod
    def locate(self, assignment_id: str | None) -> str:
        # Return the absolute project directory holding the assignment's files.
        pass

    @staticmethod
    def create_fixed(directory: str) -> "AssignmentLocator":
        # Same directory for every assignment
        from .locator import FixedLocator
        return FixedLocator(directory)

    @staticmethod
    def create_folder(root: str) -> "AssignmentLocator":
        # One sub-directory of `root` per assignment id
        from .locator import FolderLocator
        return FolderLocator(root)

    @staticmethod
    def create_git(remotes: dict[str, str], cache: str, ref: str = 'HEAD') -> "AssignmentLocator":
        # Snapshot of a git repository per assignment id
        from .locator import GitLocator
        return GitLocator(remotes, cache, ref)
