class ConfigurationError(ValueError):
    """Raised when required application settings are missing or invalid."""


class NotAGitRepositoryError(RuntimeError):
    """Raised when the working directory is not inside a git work tree."""


class GitCommandError(RuntimeError):
    """Raised when a git subprocess exits with a non-zero status."""

    def __init__(self, args: list[str], returncode: int, stderr: str) -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"git command failed: {' '.join(self.command)}: {detail}")


class ClassifierRequestError(RuntimeError):
    """Raised when the classifier endpoint is unreachable or returns a non-JSON body."""
