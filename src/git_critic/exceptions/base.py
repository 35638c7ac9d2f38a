"""Root of the git-critic exception hierarchy."""


class GitCriticError(Exception):
    """Raised for every failure git-critic reports on purpose.

    Keyword arguments become ``details``: the context printed after the
    message, such as the git command line and its stderr. ``None`` values
    are left out so optional context never shows up as ``key=None``.
    """

    def __init__(self, message: str, **details: object):
        super().__init__(message)
        self.message = message
        self.details = {key: str(value) for key, value in details.items() if value is not None}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
