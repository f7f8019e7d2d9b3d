import sys
import json
import argparse
from pathlib import Path
from .architecture import AssignmentLocator, Criterion, ReviewFailure, Reviewer
from .index import Assignreview


def _locator(args: argparse.Namespace) -> AssignmentLocator:
    # Three ways to find an assignment's files, exactly one is chosen on the command line
    if args.assignments:
        return AssignmentLocator.create_folder(args.assignments)
    if args.repos:
        remotes = json.loads(Path(args.repos).read_text(encoding='utf-8'))
        if not isinstance(remotes, dict):
            raise ValueError(f"{args.repos} must map assignment ids to repository URLs")
        return AssignmentLocator.create_git(remotes, args.cache, args.ref)
    return AssignmentLocator.create_fixed(args.project)


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(description="AI review of an assignment's source files.")
    parser.add_argument("--ai", choices=["codex", "claude"], required=True, help="AI cli to use for review.")
    parser.add_argument("--criterion", "-c", choices=[c.value for c in Criterion], required=True, help="Review criterion.")
    parser.add_argument("--assignment", "-a", type=str, default=None, help="Assignment id.")
    where = parser.add_mutually_exclusive_group()
    where.add_argument("--project", "-p", type=str, default="src/project", help="Project directory reviewed for every assignment.")
    where.add_argument("--assignments", type=str, help="Directory holding one sub-directory per assignment id.")
    where.add_argument("--repos", type=str, help="JSON file mapping assignment ids to git repository URLs.")
    parser.add_argument("--cache", type=str, default=".assignments", help="Where --repos clones and snapshots are kept.")
    parser.add_argument("--ref", type=str, default="HEAD", help="Git revision reviewed with --repos.")
    parser.add_argument("--requirements", "-r", type=str, help="Markdown file with the assignment requirements.")
    parser.add_argument("--timeout", "-t", type=int, default=0, help="Timeout per model call, 0 to derive it from the prompt size.")
    parser.add_argument("--tmp", "-d", type=str, help="Temporary directory to dump raw model output.")
    parser.add_argument("--parallel", action="store_true", help="Review files in parallel.")
    parser.add_argument("--isolate", action="store_true", help="Keep going when a file fails and report it in the output.")
    parser.add_argument("--syntax", action="store_true", help="Add a syntax outline of JavaScript/TypeScript files to prompts.")
    parser.add_argument("--output", "-o", type=str, help="Write the JSON results here instead of stdout.")
    args = parser.parse_args(argv)

    requirements = None
    if args.requirements:
        requirements = Path(args.requirements).read_text(encoding="utf-8")

    review = Assignreview.create(
        Reviewer.create(args.ai, args.tmp),
        _locator(args),
        requirements,
        args.timeout,
        args.parallel,
        args.isolate,
        args.syntax,
    )
    results = review.generate_review(args.assignment, args.criterion)

    text = json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    # Isolated failures still produce output but the run is not a success
    return -1 if any(isinstance(r, ReviewFailure) for r in results) else 0


def cli() -> None:
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
