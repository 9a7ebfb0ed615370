"""
Index build report model for homefind.

Describes the outcome of one full traversal of the home directory: how many
files ended up in the index, what was skipped, and how long it took.
"""

from typing import Dict, Any
from datetime import datetime
from pydantic import BaseModel, Field


class IndexBuildReport(BaseModel):
    """
    Statistics from a single index build.

    Attributes:
        root: Directory the walk started from
        files_indexed: Number of regular files added to the index
        directories_traversed: Number of directories descended into
        hidden_directories_skipped: Hidden directories excluded with their subtree
        symlinks_skipped: Symbolic links that were neither added nor followed
        errors: Per-entry traversal errors that were swallowed
        elapsed_seconds: Wall-clock duration of the walk
        finished_at: When the walk completed
    """

    root: str = Field(..., min_length=1, description="Directory the walk started from")
    files_indexed: int = Field(0, ge=0, description="Regular files added to the index")
    directories_traversed: int = Field(0, ge=0, description="Directories descended into")
    hidden_directories_skipped: int = Field(0, ge=0, description="Hidden directories excluded")
    symlinks_skipped: int = Field(0, ge=0, description="Symbolic links skipped")
    errors: int = Field(0, ge=0, description="Swallowed per-entry errors")
    elapsed_seconds: float = Field(0.0, ge=0.0, description="Wall-clock duration of the walk")
    finished_at: datetime = Field(default_factory=datetime.now, description="When the walk completed")

    def has_errors(self) -> bool:
        """Check if any entries could not be read during the walk."""
        return self.errors > 0

    def get_elapsed_human_readable(self) -> str:
        """Get elapsed time in a short human-readable format."""
        if self.elapsed_seconds < 1.0:
            return f"{self.elapsed_seconds * 1000:.0f}ms"
        if self.elapsed_seconds < 60.0:
            return f"{self.elapsed_seconds:.2f}s"
        minutes, seconds = divmod(self.elapsed_seconds, 60.0)
        return f"{int(minutes)}m{seconds:.0f}s"

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary representation."""
        data = self.model_dump()
        data['finished_at'] = self.finished_at.isoformat()
        data['elapsed_human'] = self.get_elapsed_human_readable()
        return data

    def __str__(self) -> str:
        """String representation of the build report."""
        parts = [f"Indexed {self.files_indexed} files"]
        parts.append(f"Took {self.get_elapsed_human_readable()}")

        if self.hidden_directories_skipped:
            parts.append(f"Hidden dirs skipped: {self.hidden_directories_skipped}")

        if self.has_errors():
            parts.append(f"Errors: {self.errors}")

        return " | ".join(parts)
