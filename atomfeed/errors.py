"""
Exceptions raised by the Atom feed library.

Construction problems surface at the builder call that breaks an
invariant; rendering problems surface when the feed is written.

Responsibility: Error taxonomy shared by models and feeds
"""

from typing import Any


class AtomFeedError(Exception):
    """Base class for all library errors"""


class ElementValidationError(AtomFeedError, ValueError):
    """Raised when a builder is given a missing mandatory field"""


class UnhandledElementError(AtomFeedError, TypeError):
    """
    Raised when the renderer meets an additional element it does not know.

    The offending value is kept on ``element`` and its string form is part
    of the message so the bad input can be located.
    """

    def __init__(self, element: Any):
        super().__init__(f"Cannot handle Additional element: {element}")
        self.element = element


class FeedRenderError(AtomFeedError):
    """
    Raised when a feed cannot be marshalled to XML.

    The underlying failure is chained as ``__cause__``.
    """
