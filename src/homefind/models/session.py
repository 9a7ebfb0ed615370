"""
Interactive session data models for homefind.

The session is driven by a reducer: every input is a SessionEvent and every
step produces a new immutable SessionState. Nothing here touches a terminal,
so the whole state machine can be exercised directly in tests.
"""

from typing import Optional, Tuple
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator


class SessionStatus(Enum):
    """Lifecycle of an interactive session."""
    BROWSING = "browsing"
    TERMINATED = "terminated"


class EventType(Enum):
    """Kinds of input the session reacts to."""
    CANCEL = "cancel"
    CONFIRM = "confirm"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    APPEND_TEXT = "append_text"
    APPEND_SPACE = "append_space"
    DELETE_LAST = "delete_last"
    RESIZE = "resize"


class SessionEvent(BaseModel):
    """
    A single input event.

    Attributes:
        type: What happened
        text: Characters to append (APPEND_TEXT only)
        width: New terminal width (RESIZE only)
        height: New terminal height (RESIZE only)
    """

    model_config = ConfigDict(frozen=True)

    type: EventType = Field(..., description="Event kind")
    text: Optional[str] = Field(None, description="Characters to append")
    width: Optional[int] = Field(None, ge=0, description="Terminal width")
    height: Optional[int] = Field(None, ge=0, description="Terminal height")

    @model_validator(mode='after')
    def validate_payload(self):
        """Ensure events carry the payload their type needs."""
        if self.type == EventType.APPEND_TEXT and not self.text:
            raise ValueError("APPEND_TEXT events require text")
        if self.type == EventType.RESIZE and self.height is None:
            raise ValueError("RESIZE events require a height")
        return self

    @classmethod
    def cancel(cls) -> 'SessionEvent':
        return cls(type=EventType.CANCEL)

    @classmethod
    def confirm(cls) -> 'SessionEvent':
        return cls(type=EventType.CONFIRM)

    @classmethod
    def move_up(cls) -> 'SessionEvent':
        return cls(type=EventType.MOVE_UP)

    @classmethod
    def move_down(cls) -> 'SessionEvent':
        return cls(type=EventType.MOVE_DOWN)

    @classmethod
    def append(cls, text: str) -> 'SessionEvent':
        return cls(type=EventType.APPEND_TEXT, text=text)

    @classmethod
    def space(cls) -> 'SessionEvent':
        return cls(type=EventType.APPEND_SPACE)

    @classmethod
    def delete_last(cls) -> 'SessionEvent':
        return cls(type=EventType.DELETE_LAST)

    @classmethod
    def resize(cls, height: int, width: int = 0) -> 'SessionEvent':
        return cls(type=EventType.RESIZE, height=height, width=width)


class SessionState(BaseModel):
    """
    Complete state of an interactive session.

    Attributes:
        status: Whether the session is still browsing
        query: Query text as typed
        matches: Paths matching the current query, in index order
        cursor: Highlighted position within matches
        window_start: First visible position within matches
        window_size: Number of visible rows of matches
        width: Last known terminal width
        height: Last known terminal height
        selected_path: Chosen path once the session terminated with a selection
    """

    model_config = ConfigDict(frozen=True)

    status: SessionStatus = Field(SessionStatus.BROWSING, description="Session lifecycle status")
    query: str = Field("", description="Query text as typed")
    matches: Tuple[str, ...] = Field(default_factory=tuple, description="Current matches")
    cursor: int = Field(0, ge=0, description="Highlighted match position")
    window_start: int = Field(0, ge=0, description="First visible match position")
    window_size: int = Field(15, ge=1, description="Visible rows of matches")
    width: int = Field(0, ge=0, description="Terminal width")
    height: int = Field(0, ge=0, description="Terminal height")
    selected_path: Optional[str] = Field(None, description="Selected path, if any")

    def is_terminated(self) -> bool:
        """Check if the session has ended."""
        return self.status == SessionStatus.TERMINATED

    def has_matches(self) -> bool:
        """Check if the current query matched anything."""
        return len(self.matches) > 0

    def get_window_end(self) -> int:
        """Get the exclusive end of the visible slice, clamped to the match count."""
        return min(self.window_start + self.window_size, len(self.matches))

    def get_visible_matches(self) -> Tuple[str, ...]:
        """Get the matches currently inside the viewport."""
        return self.matches[self.window_start:self.get_window_end()]

    def get_current_match(self) -> Optional[str]:
        """Get the match under the cursor, if any."""
        if not self.matches:
            return None
        return self.matches[self.cursor]
