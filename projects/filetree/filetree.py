import os
import stat
from typing import Iterable
from .index import FileNode, FileTree


class TheFileTree(FileTree):
    def scan(self, directory: str) -> list[FileNode]:
        directory = os.path.abspath(directory)
        st = os.stat(directory)
        return self._scan(directory, frozenset([(st.st_dev, st.st_ino)]))

    def _scan(self, directory: str, ancestors: frozenset[tuple[int, int]]) -> list[FileNode]:
        # ancestors: (st_dev, st_ino) of every directory on the current recursion path
        nodes: list[FileNode] = []
        for name in os.listdir(directory):  # Filesystem order, intentionally unsorted
            path = os.path.join(directory, name)
            st = os.stat(path)  # Follows symlinks; a dangling link raises FileNotFoundError
            if not stat.S_ISDIR(st.st_mode):
                nodes.append(FileNode(path=path, name=name, is_directory=False))
                continue

            identity = (st.st_dev, st.st_ino)
            if identity in ancestors:  # Symlink back to an enclosing directory
                print(f"[WARNING] Skipping symlink cycle: {path}")
                continue
            children = self._scan(path, ancestors | {identity})
            nodes.append(FileNode(path=path, name=name, is_directory=True, children=tuple(children)))
        return nodes

    def extract(self, nodes: FileNode | Iterable[FileNode]) -> list[str]:
        if isinstance(nodes, FileNode):
            nodes = [nodes]

        paths: list[str] = []
        for node in nodes:
            if node.is_directory:
                paths.extend(self.extract(node.children or ()))
            else:
                paths.append(node.path)
        return paths
