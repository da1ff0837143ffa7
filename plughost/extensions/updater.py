"""Auto-update for plugins installed as git checkouts. Runs before any plugin is imported."""

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable, Protocol

from plughost.extensions.errors import UpdateError

if TYPE_CHECKING:
    from git import Repo

logger = logging.getLogger(__name__)


class Checkout(Protocol):
    """The git operations the updater needs, nothing more."""

    def fetch(self) -> None: ...

    def current_ref(self) -> str: ...

    def upstream_ref(self) -> str: ...

    def commits_between(self, start: str, end: str) -> list[str]: ...

    def pull(self) -> None: ...


class GitCheckout:
    """Checkout backed by GitPython. Requires the git executable."""

    def __init__(self, repo: "Repo") -> None:
        self._repo = repo

    @classmethod
    def open(cls, directory: Path) -> "GitCheckout | None":
        """None when directory is not itself the root of a git work tree."""
        # GitPython refuses to import without a git executable; callers check first.
        from git import InvalidGitRepositoryError, NoSuchPathError, Repo

        try:
            repo = Repo(directory)
        except (InvalidGitRepositoryError, NoSuchPathError):
            return None
        if repo.bare or repo.working_tree_dir is None:
            return None
        if Path(repo.working_tree_dir).resolve() != directory.resolve():
            return None
        return cls(repo)

    def fetch(self) -> None:
        self._repo.git.fetch()

    def current_ref(self) -> str:
        return self._repo.git.rev_parse("HEAD")

    def upstream_ref(self) -> str:
        return self._repo.git.rev_parse("--abbrev-ref", "@{u}")

    def commits_between(self, start: str, end: str) -> list[str]:
        """Commits in (start, end], newest first."""
        return [c.hexsha for c in self._repo.iter_commits(f"{start}..{end}")]

    def pull(self) -> None:
        self._repo.git.pull("--ff-only")


def git_available() -> bool:
    return shutil.which("git") is not None


class PluginUpdater:
    """Fetch and fast-forward plugin checkouts whose upstream has new commits."""

    def __init__(
        self,
        open_checkout: Callable[[Path], Checkout | None] = GitCheckout.open,
        tool_available: Callable[[], bool] = git_available,
    ) -> None:
        self._open_checkout = open_checkout
        self._tool_available = tool_available

    def update_if_tracked(self, directory: Path) -> str | None:
        """Pull when upstream is ahead. Returns new HEAD, or None if nothing was pulled.

        Raises UpdateError for any git failure (network, no upstream, detached HEAD,
        non-fast-forward).
        """
        try:
            checkout = self._open_checkout(directory)
            if checkout is None:
                return None
            checkout.fetch()
            head = checkout.current_ref()
            upstream = checkout.upstream_ref()
            if not checkout.commits_between(head, upstream):
                return None
            checkout.pull()
            return checkout.current_ref()
        except Exception as e:
            raise UpdateError(directory, e) from e

    def update_all(self, entries: Iterable[Path]) -> dict[str, str]:
        """Update every non-hidden directory among entries, one at a time. Never raises per plugin."""
        directories = [
            entry
            for entry in entries
            if not entry.name.startswith(".") and entry.is_dir()
        ]
        if not directories:
            return {}

        logger.info(
            "Auto-updating server plugins... Set plugins.auto_update: false "
            "in config/settings.yaml to disable this feature."
        )
        if not self._tool_available():
            logger.warning(
                "Git is not installed. Please install Git to enable auto-updating of server plugins."
            )
            return {}

        updated: dict[str, str] = {}
        failed = 0
        for directory in directories:
            try:
                new_head = self.update_if_tracked(directory)
            except UpdateError as e:
                logger.error("%s", e)
                failed += 1
                continue
            if new_head is not None:
                updated[directory.name] = new_head
                logger.info("Plugin %s updated to commit %s", directory.name, new_head)

        if not updated and not failed:
            logger.info("All plugins are up to date.")
        return updated
