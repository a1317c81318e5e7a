"""
Standard exit codes for repochangelog.

Following Unix/POSIX conventions for command-line tools.
"""

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # Configuration errors, git failures, help
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': GENERAL_ERROR,
    'ConfigError': GENERAL_ERROR,
    'ResolutionError': GENERAL_ERROR,
    'GitError': GENERAL_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised for conflicting flags or a tag/commit that does not exist."""
    def __init__(self, message: str):
        super().__init__(message, GENERAL_ERROR)


class ResolutionError(CommandError):
    """Raised when a start commit has no enclosing tag."""
    def __init__(self, message: str):
        super().__init__(message, GENERAL_ERROR)


class GitError(CommandError):
    """Raised when a git invocation fails."""
    def __init__(self, message: str, returncode: int = -1):
        super().__init__(message, GENERAL_ERROR)
        self.returncode = returncode
