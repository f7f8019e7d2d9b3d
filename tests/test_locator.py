"""Tests for assignment directory resolution."""

import os

import pytest
from git import Actor, Repo

from projects.assignreview.architecture import AssignmentLocator

AUTHOR = Actor("Grader", "grader@example.com")


def _commit(repo, files, message):
    for rel, content in files.items():
        path = os.path.join(repo.working_tree_dir, rel)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    repo.index.add(list(files))
    repo.index.commit(message, author=AUTHOR, committer=AUTHOR)


@pytest.fixture
def submission(tmp_path):
    repo = Repo.init(tmp_path / "submission")
    _commit(repo, {"src/app.ts": "export const app = 1;\n", "README.md": "# hw\n"}, "initial")
    return repo


class TestFixedLocator:
    """Test the single-directory locator."""

    def test_ignores_assignment_id(self, tmp_path):
        locator = AssignmentLocator.create_fixed(str(tmp_path))
        assert locator.locate("a") == str(tmp_path.resolve())
        assert locator.locate(None) == str(tmp_path.resolve())


class TestFolderLocator:
    """Test the one-folder-per-assignment locator."""

    def test_subdirectory(self, tmp_path):
        locator = AssignmentLocator.create_folder(str(tmp_path))
        assert locator.locate("hw-1") == str(tmp_path.resolve() / "hw-1")

    @pytest.mark.parametrize("assignment_id", [None, "", ".", "..", "a/b", "../x", "a\\b"])
    def test_invalid_ids(self, tmp_path, assignment_id):
        with pytest.raises(ValueError, match="Invalid assignment id"):
            AssignmentLocator.create_folder(str(tmp_path)).locate(assignment_id)


class TestGitLocator:
    """Test the git snapshot locator."""

    def test_snapshot_without_git_internals(self, tmp_path, submission):
        cache = tmp_path / "cache"
        locator = AssignmentLocator.create_git({"hw-1": submission.working_tree_dir}, str(cache))
        root = locator.locate("hw-1")
        assert root == str(cache.resolve() / "hw-1")
        found = sorted(
            os.path.relpath(os.path.join(d, f), root).replace(os.sep, "/")
            for d, _, files in os.walk(root) for f in files
        )
        assert found == ["README.md", "src/app.ts"]
        assert (cache / "hw-1.git").is_dir()

    def test_second_locate_fetches_new_commits(self, tmp_path, submission):
        locator = AssignmentLocator.create_git({"hw-1": submission.working_tree_dir}, str(tmp_path / "cache"))
        locator.locate("hw-1")
        _commit(submission, {"src/db.ts": "export const db = 2;\n"}, "add db")
        os.remove(os.path.join(submission.working_tree_dir, "README.md"))
        submission.index.remove(["README.md"])
        submission.index.commit("drop readme", author=AUTHOR, committer=AUTHOR)
        root = locator.locate("hw-1")
        assert os.path.isfile(os.path.join(root, "src", "db.ts"))
        assert not os.path.exists(os.path.join(root, "README.md"))

    def test_ref(self, tmp_path, submission):
        first = submission.head.commit.hexsha
        _commit(submission, {"src/late.ts": "1;\n"}, "late")
        locator = AssignmentLocator.create_git({"hw-1": submission.working_tree_dir}, str(tmp_path / "cache"), first)
        root = locator.locate("hw-1")
        assert not os.path.exists(os.path.join(root, "src", "late.ts"))

    def test_unknown_assignment(self, tmp_path):
        locator = AssignmentLocator.create_git({}, str(tmp_path / "cache"))
        with pytest.raises(ValueError, match="No repository"):
            locator.locate("hw-9")
