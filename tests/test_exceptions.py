"""Tests for the error taxonomy and git error classification."""

import pytest

from git_worktree_keeper.exceptions import (
    ConflictError,
    ErrorKind,
    GitOperationError,
    InvariantViolationError,
    NotARepositoryError,
    UsageError,
    classify_git_error,
)


class TestExitCodes:
    @pytest.mark.parametrize(
        "error_class, code",
        [
            (UsageError, 1),
            (GitOperationError, 2),
            (NotARepositoryError, 3),
            (InvariantViolationError, 4),
            (ConflictError, 5),
        ],
    )
    def test_exit_code_per_kind(self, error_class, code):
        error = error_class("boom")
        assert error.exit_code == code
        assert error.kind is ErrorKind(code)
        assert error.message == "boom"
        assert str(error) == "boom"


class TestClassifyGitError:
    def test_not_a_repository(self):
        error = classify_git_error("fatal: not a git repository (or any of the parent directories): .git")
        assert isinstance(error, NotARepositoryError)

    @pytest.mark.parametrize(
        "message",
        [
            "fatal: a branch named 'feature' already exists",
            "fatal: 'feature' is already checked out at '/tmp/x'",
            "fatal: '/tmp/wt' contains modified or untracked files, use --force to delete it",
            "error: The branch 'feature' is not fully merged.",
            "error: Merging is not possible because you have unmerged files.",
            "working tree is dirty",
        ],
    )
    def test_conflicts(self, message):
        error = classify_git_error(message)
        assert isinstance(error, ConflictError)
        assert error.message == message

    def test_matching_is_case_insensitive(self):
        assert isinstance(classify_git_error("FATAL: Not A Git Repository"), NotARepositoryError)
        assert isinstance(classify_git_error("Branch ALREADY EXISTS"), ConflictError)

    def test_everything_else_is_a_git_failure(self):
        error = classify_git_error("fatal: unable to access 'https://example.com/': Could not resolve host")
        assert isinstance(error, GitOperationError)
        assert error.exit_code == 2
