import shutil
import tarfile
import tempfile
from pathlib import Path
from git import Repo
from .architecture import AssignmentLocator


def _component(assignment_id: str | None) -> str:
    # Assignment ids become directory names; refuse anything that could escape the root
    if not assignment_id or assignment_id in ('.', '..') or Path(assignment_id).name != assignment_id or '\\' in assignment_id:
        raise ValueError(f"Invalid assignment id: {assignment_id!r}")
    return assignment_id


class FixedLocator(AssignmentLocator):
    def __init__(self, directory: str):
        self.directory = str(Path(directory).resolve())

    def locate(self, assignment_id: str | None) -> str:
        return self.directory


class FolderLocator(AssignmentLocator):
    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def locate(self, assignment_id: str | None) -> str:
        return str(self.root / _component(assignment_id))


class GitLocator(AssignmentLocator):
    def __init__(self, remotes: dict[str, str], cache: str, ref: str = 'HEAD'):
        # remotes: assignment id -> clone URL (or local repository path)
        self.remotes = dict(remotes)
        self.cache = Path(cache).resolve()
        self.ref = ref

    def locate(self, assignment_id: str | None) -> str:
        name = _component(assignment_id)
        if name not in self.remotes:
            raise ValueError(f"No repository registered for assignment {name}")

        repo = self._sync(name, self.remotes[name])
        target = self.cache / name
        if target.exists():  # Stale snapshot from an earlier run
            shutil.rmtree(target)
        target.mkdir(parents=True)
        self._export(repo, target)
        return str(target)

    def _sync(self, name: str, url: str) -> Repo:
        # Keep one bare mirror per assignment so repeated runs only fetch
        bare = self.cache / f'{name}.git'
        if bare.exists():
            repo = Repo(bare)
            print(f"Fetching {url} ...")
            repo.git.fetch('origin', '+refs/heads/*:refs/heads/*', '+refs/tags/*:refs/tags/*', '--prune')
            return repo
        print(f"Cloning {url} ...")
        self.cache.mkdir(parents=True, exist_ok=True)
        return Repo.clone_from(url, str(bare), bare=True)

    def _export(self, repo: Repo, target: Path):
        # git archive yields the tracked tree only, never .git internals
        with tempfile.TemporaryFile() as stream:
            repo.archive(stream, treeish=self.ref, format='tar')
            stream.seek(0)
            with tarfile.open(fileobj=stream) as tar:
                if hasattr(tarfile, 'data_filter'):
                    tar.extractall(target, filter='data')
                else:  # Interpreters without extraction filters
                    tar.extractall(target)
