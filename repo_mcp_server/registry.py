# repo_mcp_server/registry.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type
from pydantic import BaseModel, ValidationError

from repo_mcp.di import Container, build_container
from repo_mcp.errors import InvalidArguments, IOFailure, ToolError, UnknownTool
from repo_mcp.logging import log_tool_call
from repo_mcp.services.filesystem import DirectoryEntry, FileInfo
from repo_mcp.services.search import SearchResult

# Import only the Pydantic input models from the tool module.
from repo_mcp_server.tools.files import (
    CreateDirectoryIn,
    DeleteFileIn,
    GetFileInfoIn,
    ListDirectoryIn,
    ReadFileIn,
    SearchFilesIn,
    WriteFileIn,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[[BaseModel], Any]


@dataclass(frozen=True)
class ToolResult:
    """What every transport sends back: one text block, failures included."""
    text: str
    is_error: bool = False

    def content(self) -> List[Dict[str, str]]:
        return [{"type": "text", "text": self.text}]


class ToolHandlers:
    """
    Named handlers for each tool (no lambdas).
    Each one unpacks validated args and calls a service.
    """
    def __init__(self, container: Container):
        self.container = container

    def read_file(self, args: ReadFileIn) -> str:
        return self.container.fs_service.read_text(args.path)

    def write_file(self, args: WriteFileIn) -> str:
        return self.container.fs_service.write_text(args.path, args.content)

    def list_directory(self, args: ListDirectoryIn) -> List[DirectoryEntry]:
        return self.container.fs_service.list_directory(args.path)

    def create_directory(self, args: CreateDirectoryIn) -> str:
        return self.container.fs_service.create_directory(args.path)

    def delete_file(self, args: DeleteFileIn) -> str:
        return self.container.fs_service.delete(args.path)

    def search_files(self, args: SearchFilesIn) -> List[SearchResult]:
        return self.container.search_service.search(
            args.query, file_pattern=args.file_pattern, max_results=args.max_results
        )

    def get_file_info(self, args: GetFileInfoIn) -> FileInfo:
        return self.container.fs_service.get_info(args.path)


def _schema_from_model(model: Type[BaseModel]) -> Dict[str, Any]:
    return model.model_json_schema()


def build_tool_registry(container: Optional[Container] = None) -> Dict[str, ToolSpec]:
    """
    Build a registry once at startup using DI.
    Transport layers (stdio/HTTP) read from this registry to expose tools.
    """
    handlers = ToolHandlers(container or build_container())

    specs = [
        ToolSpec("read_file", "Read the contents of a file", ReadFileIn, handlers.read_file),
        ToolSpec("write_file", "Write content to a file", WriteFileIn, handlers.write_file),
        ToolSpec(
            "list_directory",
            "List contents of a directory",
            ListDirectoryIn,
            handlers.list_directory,
        ),
        ToolSpec(
            "create_directory",
            "Create a new directory",
            CreateDirectoryIn,
            handlers.create_directory,
        ),
        ToolSpec(
            "delete_file",
            "Delete a file (directories are removed recursively)",
            DeleteFileIn,
            handlers.delete_file,
        ),
        ToolSpec(
            "search_files",
            "Search for text within files",
            SearchFilesIn,
            handlers.search_files,
        ),
        ToolSpec(
            "get_file_info",
            "Get information about a file or directory",
            GetFileInfoIn,
            handlers.get_file_info,
        ),
    ]
    return {spec.name: spec for spec in specs}


def list_tools_payload(registry: Dict[str, ToolSpec]) -> Dict[str, Any]:
    """
    Produce the `tools/list` payload body as per MCP Tools spec.
    """
    tools = []
    for spec in registry.values():
        tools.append({
            "name": spec.name,
            "description": spec.description,
            "inputSchema": _schema_from_model(spec.input_model),
        })
    return {"tools": tools}


def dispatch_tool_call(registry: Dict[str, ToolSpec], name: str, arguments: Dict[str, Any]) -> Any:
    """
    Validate args with the tool's Pydantic model, then invoke the named handler.
    """
    if name not in registry:
        raise UnknownTool(f"Unknown tool: {name}")
    spec = registry[name]
    args_obj = spec.input_model(**(arguments or {}))
    return spec.handler(args_obj)


def render_payload(result: Any) -> str:
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        data = result.model_dump(mode="json")
    elif isinstance(result, list):
        data = [r.model_dump(mode="json") if isinstance(r, BaseModel) else r for r in result]
    else:
        data = result
    return json.dumps(data, indent=2, ensure_ascii=False)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def as_tool_error(exc: Exception) -> ToolError:
    if isinstance(exc, ToolError):
        return exc
    if isinstance(exc, ValidationError):
        return InvalidArguments(f"Invalid arguments: {_format_validation_error(exc)}")
    if isinstance(exc, OSError):
        if exc.strerror and exc.filename:
            return IOFailure(f"{exc.strerror}: {exc.filename}")
        return IOFailure(str(exc))
    return ToolError(str(exc) or type(exc).__name__)


def call_tool(registry: Dict[str, ToolSpec], name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
    """
    The single error boundary: every outcome becomes a ToolResult, failures
    included, as `Error: <message>` text.
    """
    try:
        if arguments is not None and not isinstance(arguments, dict):
            raise InvalidArguments("Invalid arguments: arguments must be an object")
        arguments = arguments or {}
        log_tool_call(logger, name, arguments)
        result = dispatch_tool_call(registry, name, arguments)
    except (ToolError, ValidationError, OSError) as exc:
        err = as_tool_error(exc)
        logger.warning("tool_error %s %s: %s", name, type(err).__name__, err)
        return ToolResult(text=f"Error: {err}", is_error=True)
    except Exception as exc:
        logger.exception("tool_crash %s", name)
        return ToolResult(text=f"Error: {as_tool_error(exc)}", is_error=True)
    return ToolResult(text=render_payload(result))


def bind_runner(registry: Dict[str, ToolSpec]) -> Callable[[str, Dict[str, Any]], str]:
    """Adapter for transports that only need the rendered text."""
    def run(name: str, arguments: Dict[str, Any]) -> str:
        return call_tool(registry, name, arguments).text
    return run
