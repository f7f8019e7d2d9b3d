"""Shared fixtures for the assignment review tests."""

import os

import pytest

from projects.assignreview.architecture import ModelInvocationError, Reviewer


class StubReviewer(Reviewer):
    """Deterministic model stand-in that records every prompt it receives."""

    def __init__(self, answer=None, fail_on=None):
        self.answer = answer if answer is not None else {"review": "ok", "flag": True, "func": "main"}
        self.fail_on = fail_on  # Fail when the reviewed file's path ends with this text
        self.prompts = []
        self.timeouts = []

    def ai(self):
        return "stub"

    def review(self, prompt, timeout=0):
        self.prompts.append(prompt)
        self.timeouts.append(timeout)
        if self.fail_on is not None and reviewed_path(prompt).endswith(self.fail_on):
            raise ModelInvocationError("[ERR] stub failure")
        return dict(self.answer)


def reviewed_path(prompt):
    """Path from the 'File under review' heading; the file list mentions every path."""
    for line in prompt.user.splitlines():
        if line.startswith(REVIEWED_HEADING):
            return line[len(REVIEWED_HEADING):].strip()
    raise AssertionError("prompt has no file under review heading")


REVIEWED_HEADING = "## File under review: "


@pytest.fixture
def stub_reviewer():
    """Factory for StubReviewer instances."""
    return StubReviewer


@pytest.fixture
def sorted_listdir(monkeypatch):
    """Make directory enumeration lexical so ordering assertions are stable."""
    real = os.listdir
    monkeypatch.setattr(os, "listdir", lambda path: sorted(real(path)))


@pytest.fixture
def project(tmp_path):
    """Project with a.ts at the root and b.ts in sub/."""
    root = tmp_path / "project"
    (root / "sub").mkdir(parents=True)
    (root / "a.ts").write_text("export function main() {}\n", encoding="utf-8")
    (root / "sub" / "b.ts").write_text("export const b = 1;\n", encoding="utf-8")
    return root
