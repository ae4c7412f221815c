# repo_mcp_server/tools/files.py
from typing import Annotated, Any, Callable, Dict, Optional
from pydantic import BaseModel, Field
from fastmcp import FastMCP

from repo_mcp.services.search import DEFAULT_MAX_RESULTS

PATH_HELP = "Path relative to repository root"


class ReadFileIn(BaseModel):
    path: str = Field(..., description="Path to the file relative to repository root")


class WriteFileIn(BaseModel):
    path: str = Field(..., description="Path to the file relative to repository root")
    content: str = Field(..., description="Content to write to the file")


class ListDirectoryIn(BaseModel):
    path: str = Field("", description="Path to directory relative to repository root (empty for root)")


class CreateDirectoryIn(BaseModel):
    path: str = Field(..., description="Path to directory to create relative to repository root")


class DeleteFileIn(BaseModel):
    path: str = Field(..., description="Path to file or directory to delete relative to repository root")


class SearchFilesIn(BaseModel):
    query: str = Field(..., min_length=1, description="Text to search for (case-insensitive)")
    file_pattern: Optional[str] = Field(
        None, description='File pattern to search within (e.g., "*.js", "*.py")'
    )
    max_results: int = Field(
        DEFAULT_MAX_RESULTS, ge=0, description="Maximum number of results to return"
    )


class GetFileInfoIn(BaseModel):
    path: str = Field(..., description="Path to file or directory relative to repository root")


def register_file_tools(mcp: FastMCP, run: Callable[[str, Dict[str, Any]], str]):
    """
    Very thin stdio adapters:
    - FastMCP builds the input schema from the signature
    - `run` validates again, calls the service and renders text or `Error: ...`
    """

    @mcp.tool(name="read_file", description="Read the contents of a file")
    def read_file(path: Annotated[str, Field(description=PATH_HELP)]) -> str:
        return run("read_file", {"path": path})

    @mcp.tool(name="write_file", description="Write content to a file")
    def write_file(
        path: Annotated[str, Field(description=PATH_HELP)],
        content: Annotated[str, Field(description="Content to write to the file")],
    ) -> str:
        return run("write_file", {"path": path, "content": content})

    @mcp.tool(name="list_directory", description="List contents of a directory")
    def list_directory(
        path: Annotated[str, Field(description="Empty for repository root")] = "",
    ) -> str:
        return run("list_directory", {"path": path})

    @mcp.tool(name="create_directory", description="Create a new directory")
    def create_directory(path: Annotated[str, Field(description=PATH_HELP)]) -> str:
        return run("create_directory", {"path": path})

    @mcp.tool(name="delete_file", description="Delete a file or directory")
    def delete_file(path: Annotated[str, Field(description=PATH_HELP)]) -> str:
        return run("delete_file", {"path": path})

    @mcp.tool(name="search_files", description="Search for text within files")
    def search_files(
        query: Annotated[str, Field(description="Text to search for")],
        file_pattern: Annotated[Optional[str], Field(description='e.g. "*.py"')] = None,
        max_results: Annotated[int, Field(description="Maximum number of results")] = DEFAULT_MAX_RESULTS,
    ) -> str:
        return run(
            "search_files",
            {"query": query, "file_pattern": file_pattern, "max_results": max_results},
        )

    @mcp.tool(name="get_file_info", description="Get information about a file or directory")
    def get_file_info(path: Annotated[str, Field(description=PATH_HELP)]) -> str:
        return run("get_file_info", {"path": path})
