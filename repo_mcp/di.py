# repo_mcp/di.py
from dataclasses import dataclass
from repo_mcp.config import Settings
from repo_mcp.services.filesystem import FileSystemService
from repo_mcp.services.paths import PathResolver
from repo_mcp.services.search import TextSearchService

@dataclass
class Container:
    settings: Settings
    resolver: PathResolver
    fs_service: FileSystemService
    search_service: TextSearchService

def build_container(settings: Settings | None = None) -> Container:
    s = settings or Settings()
    resolver = PathResolver(s.REPO_PATH)
    fs = FileSystemService(resolver)
    search = TextSearchService(resolver)
    return Container(s, resolver, fs, search)
