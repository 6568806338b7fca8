"""Git repository access via the git command line.

Only local operations are performed: nothing is fetched or pushed.
Tags are created as lightweight refs with an atomic create-if-absent
``update-ref``, annotated tags are read and peeled but never produced.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from tagbump.exceptions import (
    GitError,
    NotAGitRepositoryError,
    TagCreationFailedError,
    TagNotFoundError,
    UnbornHeadError,
)
from tagbump.vcs.base import Commit, Tag

logger = logging.getLogger(__name__)

TAGS_REF_PREFIX = "refs/tags/"

# Tells update-ref the ref must not exist yet
_MUST_NOT_EXIST = ""


class GitRepository:
    """A local git repository, driven through ``git`` subprocesses."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def discover(cls, start: Path | None = None) -> GitRepository:
        """Find the repository containing ``start`` (default: cwd).

        Raises:
            NotAGitRepositoryError: If ``start`` is not inside a repository
                or git is not installed
        """
        start = start or Path.cwd()
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--show-toplevel"],
                cwd=start,
                capture_output=True,
                text=True,
                check=False,
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            raise NotAGitRepositoryError(f"Cannot run git in {start}: {e}") from e

        if result.returncode != 0:
            raise NotAGitRepositoryError(
                f"Not a git repository: {start}", stderr=result.stderr
            )
        return cls(Path(result.stdout.strip()))

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        """Run a git command in the repository.

        Args:
            *args: Arguments after ``git``
            check: Raise GitError on non-zero exit

        Returns:
            Completed process with text output
        """
        logger.debug("git %s", " ".join(args))
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError as e:
            raise GitError("git not found. Is it installed and on PATH?") from e

        if check and result.returncode != 0:
            raise GitError(
                f"git {args[0]} failed with exit code {result.returncode}",
                stderr=result.stderr,
            )
        return result

    def tag_exists(self, name: str) -> bool:
        result = self._run(
            "show-ref", "--verify", "--quiet", f"{TAGS_REF_PREFIX}{name}", check=False
        )
        return result.returncode == 0

    def create_tag(self, name: str, target: str) -> None:
        """Create a lightweight tag pointing at ``target``.

        Raises:
            TagCreationFailedError: If the tag already exists (for example
                because a concurrent run created it first) or git rejects it
        """
        result = self._run(
            "update-ref",
            "-m",
            f"tagbump: tag {name}",
            f"{TAGS_REF_PREFIX}{name}",
            target,
            _MUST_NOT_EXIST,
            check=False,
        )
        if result.returncode != 0:
            raise TagCreationFailedError(
                f"Failed to create lightweight tag '{name}'", stderr=result.stderr
            )

    def resolve_to_commit(self, name: str) -> str:
        """Peel ``refs/tags/<name>`` to the commit it marks.

        Raises:
            TagNotFoundError: If the tag does not exist or does not mark a commit
        """
        result = self._run(
            "rev-parse", "--verify", "--quiet", f"{TAGS_REF_PREFIX}{name}^{{commit}}", check=False
        )
        if result.returncode != 0:
            raise TagNotFoundError(f"Tag '{name}' not found")
        return result.stdout.strip()

    def head_commit(self) -> str:
        """Return the commit HEAD points at.

        Raises:
            UnbornHeadError: If the repository has no commits yet
        """
        result = self._run("rev-parse", "--verify", "--quiet", "HEAD^{commit}", check=False)
        if result.returncode != 0:
            raise UnbornHeadError("Repository has no commits yet")
        return result.stdout.strip()

    def all_tags(self) -> list[Tag]:
        """List all tags with their peeled commit ids, sorted by name."""
        result = self._run(
            "for-each-ref",
            "--format=%(refname)%00%(objectname)%00%(*objectname)",
            TAGS_REF_PREFIX,
        )
        tags = []
        for line in result.stdout.splitlines():
            if not line:
                continue
            refname, object_id, peeled_id = line.split("\0")
            tags.append(
                Tag(name=refname.removeprefix(TAGS_REF_PREFIX), target=peeled_id or object_id)
            )
        return tags

    def get_commit(self, sha: str) -> Commit:
        """Read a commit.

        Parents are read through ``git log``, which honours shallow clone
        boundaries: a commit at the boundary reports no parents.

        Raises:
            GitError: If ``sha`` does not name a commit
        """
        result = self._run(
            "log", "-1", "--no-color", "--no-show-signature", "--format=%H%x00%P%x00%B", sha, "--"
        )
        full_sha, parent_ids, message = result.stdout.split("\0", 2)
        summary = message.splitlines()[0] if message else ""
        return Commit(sha=full_sha.strip(), parents=tuple(parent_ids.split()), summary=summary)
