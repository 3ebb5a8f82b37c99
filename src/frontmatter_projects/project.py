"""Project definitions and document selection."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProjectDefinition:
    """A logical collection of documents under a vault directory."""

    path: str = ""
    """Collection root, relative to the vault. A leading "/" is ignored."""

    recursive: bool = False
    """Include documents in subdirectories of the root."""

    name: str = ""

    @property
    def root(self) -> str:
        """Root with a single leading "/" and any trailing "/" removed.

        Only one leading slash is stripped, so "//Projects" keeps "/Projects"
        as its root and matches no document.
        """
        path = self.path[1:] if self.path.startswith("/") else self.path
        return path.rstrip("/")

    def includes(self, path: str) -> bool:
        """Check if a document belongs to the project.

        Args:
            path: Vault-relative document path.

        Returns:
            True if the document is under the root (any depth when
            recursive, direct children only otherwise).
        """
        root = self.root

        # Most documents in a large vault fail here.
        if root and not path.startswith(root + "/"):
            return False

        if not self.recursive:
            parent = "/".join(path.split("/")[:-1])
            return parent == root

        return True
