"""
Interactive session state machine for homefind.

reduce_event() is a pure function from (state, event) to a new state. It owns
query editing, match recomputation, cursor movement and viewport scrolling.
render_view() turns a state into the lines the terminal front-end draws.
"""

from typing import List, NamedTuple, Sequence

from .models.config import MAX_SEARCH_RESULTS
from .models.session import EventType, SessionEvent, SessionState, SessionStatus
from .tools.matcher import find_matches


DEFAULT_WINDOW_SIZE = 15
DEFAULT_RESERVED_ROWS = 5
PROMPT_CURSOR = '█'


class ViewLine(NamedTuple):
    text: str
    highlighted: bool = False


def initial_state(window_size: int = DEFAULT_WINDOW_SIZE) -> SessionState:
    """Get the state a session starts in: browsing, with nothing typed."""
    return SessionState(window_size=window_size)


def window_size_for_height(height: int, reserved_rows: int = DEFAULT_RESERVED_ROWS) -> int:
    """Rows available for matches on a terminal of the given height, never below 1."""
    return max(1, height - reserved_rows)


def reduce_event(state: SessionState, event: SessionEvent, paths: Sequence[str],
                 max_results: int = MAX_SEARCH_RESULTS,
                 reserved_rows: int = DEFAULT_RESERVED_ROWS) -> SessionState:
    """
    Apply one input event to a session.

    Args:
        state: Current session state
        event: Input to apply
        paths: The file index the query is matched against
        max_results: Match cap per query
        reserved_rows: Rows of the terminal not available for matches

    Returns:
        The next session state; ``state`` itself when nothing changes
    """
    if state.is_terminated():
        return state

    kind = event.type

    if kind == EventType.CANCEL:
        return state.model_copy(update={'status': SessionStatus.TERMINATED, 'selected_path': None})

    if kind == EventType.CONFIRM:
        if not state.matches:
            return state
        return state.model_copy(update={
            'status': SessionStatus.TERMINATED,
            'selected_path': state.matches[state.cursor],
        })

    if kind == EventType.MOVE_UP:
        return _move_up(state)

    if kind == EventType.MOVE_DOWN:
        return _move_down(state)

    if kind == EventType.APPEND_TEXT:
        return _edit_query(state, state.query + event.text, paths, max_results)

    if kind == EventType.APPEND_SPACE:
        return _edit_query(state, state.query + ' ', paths, max_results)

    if kind == EventType.DELETE_LAST:
        if not state.query:
            return state
        return _edit_query(state, state.query[:-1], paths, max_results)

    if kind == EventType.RESIZE:
        return _resize(state, event, reserved_rows)

    return state


def _move_up(state: SessionState) -> SessionState:
    if state.cursor == 0:
        return state
    cursor = state.cursor - 1
    window_start = min(state.window_start, cursor)
    return state.model_copy(update={'cursor': cursor, 'window_start': window_start})


def _move_down(state: SessionState) -> SessionState:
    if state.cursor >= len(state.matches) - 1:
        return state
    cursor = state.cursor + 1
    window_start = state.window_start
    if cursor >= window_start + state.window_size:
        window_start = cursor - state.window_size + 1
    return state.model_copy(update={'cursor': cursor, 'window_start': window_start})


def _edit_query(state: SessionState, query: str, paths: Sequence[str],
                max_results: int) -> SessionState:
    matches = find_matches(paths, query, limit=max_results)
    return state.model_copy(update={
        'query': query,
        'matches': tuple(matches),
        'cursor': 0,
        'window_start': 0,
    })


def _resize(state: SessionState, event: SessionEvent, reserved_rows: int) -> SessionState:
    window_size = window_size_for_height(event.height, reserved_rows)
    window_start = state.window_start
    # Unlike a plain size update, move the window when shrinking would leave
    # the cursor below it, so window_start <= cursor < window_start + window_size holds
    if state.matches and state.cursor >= window_start + window_size:
        window_start = state.cursor - window_size + 1
    return state.model_copy(update={
        'width': event.width or 0,
        'height': event.height,
        'window_size': window_size,
        'window_start': window_start,
    })


def render_view(state: SessionState) -> List[ViewLine]:
    """
    Build the screen contents for a session state.

    Returns:
        Lines to draw top to bottom; the cursor row is marked highlighted
    """
    lines = [
        ViewLine(''),
        ViewLine('  Search (Esc to quit)'),
        ViewLine(f'  > {state.query}{PROMPT_CURSOR}'),
        ViewLine(''),
    ]

    if not state.matches:
        if state.query:
            lines.append(ViewLine('  No matches found.'))
        return lines

    end = state.get_window_end()
    for position in range(state.window_start, end):
        path = state.matches[position]
        if position == state.cursor:
            lines.append(ViewLine(f'> {path}', highlighted=True))
        else:
            lines.append(ViewLine(f'  {path}'))

    lines.append(ViewLine(''))
    lines.append(ViewLine(f'  [Showing {state.window_start + 1}-{end} of {len(state.matches)}]'))
    return lines


class Session:
    """
    Holds the live state of one interactive session over a file index.

    Thin stateful wrapper around reduce_event() for the terminal loop.
    """

    def __init__(self, paths: Sequence[str], max_results: int = MAX_SEARCH_RESULTS,
                 window_size: int = DEFAULT_WINDOW_SIZE,
                 reserved_rows: int = DEFAULT_RESERVED_ROWS):
        self.paths = paths
        self.max_results = max_results
        self.reserved_rows = reserved_rows
        self.state = initial_state(window_size)

    def dispatch(self, event: SessionEvent) -> SessionState:
        """Apply an event and return the new state."""
        self.state = reduce_event(self.state, event, self.paths,
                                  max_results=self.max_results,
                                  reserved_rows=self.reserved_rows)
        return self.state

    def render(self) -> List[ViewLine]:
        return render_view(self.state)

    @property
    def finished(self) -> bool:
        return self.state.is_terminated()

    @property
    def selected_path(self):
        return self.state.selected_path
