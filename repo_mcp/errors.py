# repo_mcp/errors.py


class ToolError(Exception):
    """Base class for failures reported back to the calling tool as text."""


class AccessDenied(ToolError):
    pass


class NotFound(ToolError):
    pass


class InvalidArguments(ToolError):
    pass


class IOFailure(ToolError):
    pass


class UnknownTool(ToolError):
    pass
