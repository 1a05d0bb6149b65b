"""Git operations for cloned tools and the dotfiles repository."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from dotstrap.errors import GitOpsError

logger = logging.getLogger(__name__)

SSH_PREFIX = "git@github.com:"
HTTPS_PREFIX = "https://github.com/"


def to_https(url: str) -> str:
    """Rewrite a GitHub SSH remote to its HTTPS equivalent.

    Args:
        url: Git remote URL.

    Returns:
        The HTTPS URL, or ``url`` unchanged if it is not a GitHub SSH remote.
    """
    if url.startswith(SSH_PREFIX):
        return HTTPS_PREFIX + url[len(SSH_PREFIX):]
    return url


class GitOps:
    """Clones and updates repositories at fixed destinations."""

    def clone(
        self,
        url: str,
        dest: Path,
        depth: int | None = None,
        recursive: bool = False,
    ) -> Path:
        """Clone a repository.

        Args:
            url: Git repository URL.
            dest: Destination directory (must not exist).
            depth: Shallow clone depth, full history if None.
            recursive: Also clone submodules (shallowly when ``depth`` is set).

        Returns:
            Path to the clone.

        Raises:
            GitOpsError: If the clone fails.
        """
        kwargs: dict[str, object] = {}
        if depth is not None:
            kwargs["depth"] = depth
        multi_options: list[str] = []
        if recursive:
            multi_options.append("--recursive")
            if depth is not None:
                multi_options.append("--shallow-submodules")

        dest.parent.mkdir(parents=True, exist_ok=True)
        try:
            Repo.clone_from(url, dest, multi_options=multi_options or None, **kwargs)
        except GitCommandError as e:
            self._cleanup_failed_clone(dest)
            raise GitOpsError(f"Clone of {url} failed: {e}") from e
        logger.debug("Cloned %s into %s", url, dest)
        return dest

    def clone_with_fallback(self, url: str, dest: Path) -> Path:
        """Clone over SSH, retrying over HTTPS when SSH fails.

        Args:
            url: Git repository URL, typically an SSH remote.
            dest: Destination directory.

        Returns:
            Path to the clone.

        Raises:
            GitOpsError: If both attempts fail.
        """
        try:
            return self.clone(url, dest)
        except GitOpsError as e:
            https_url = to_https(url)
            if https_url == url:
                raise
            logger.warning("SSH clone failed, trying HTTPS: %s", e)
            return self.clone(https_url, dest)

    def pull(self, path: Path) -> Path:
        """Pull the current branch of an existing clone.

        Args:
            path: Path to local repository.

        Returns:
            Path to the repository.

        Raises:
            GitOpsError: If the path is not a repository or the pull fails.
        """
        try:
            repo = Repo(path)
            repo.remotes.origin.pull()
        except (GitCommandError, InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GitOpsError(f"Pull in {path} failed: {e}") from e
        return path

    def _cleanup_failed_clone(self, path: Path) -> None:
        """Remove partial clone directory after failed attempt.

        Args:
            path: Path to clean up.
        """
        if path.exists():
            shutil.rmtree(path)
