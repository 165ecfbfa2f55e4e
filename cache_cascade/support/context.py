"""
Request Context
Context-aware storage for the current visitor and session (safe for async)

A host application sets these once per request, typically from middleware:

    set_current_session(request.ctx.session.id)
    set_current_visitor(lead.id)
"""
from contextvars import ContextVar
from typing import Optional

_current_visitor: ContextVar[Optional[str]] = ContextVar('cascade_current_visitor', default=None)
_current_session: ContextVar[Optional[str]] = ContextVar('cascade_current_session', default=None)


def set_current_visitor(visitor_id) -> None:
    _current_visitor.set(None if visitor_id is None else str(visitor_id))


def get_current_visitor() -> Optional[str]:
    return _current_visitor.get()


def set_current_session(session_id) -> None:
    _current_session.set(None if session_id is None else str(session_id))


def get_current_session() -> Optional[str]:
    return _current_session.get()


def clear_context() -> None:
    """Forget the visitor and session for the current context"""
    _current_visitor.set(None)
    _current_session.set(None)
