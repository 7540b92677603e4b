"""Exception hierarchy for the digest engine.

Collaborator adapters wrap SDK exceptions into these types so the scheduler
can decide per recipient group whether to continue or abandon a cadence.
"""


class DigestError(Exception):
    """Base class for digest engine errors."""


class CollaboratorError(DigestError):
    """A collaborator (query, directory, transport) failed transiently."""


class QueryError(CollaboratorError):
    """The idea query layer failed."""


class DirectoryError(CollaboratorError):
    """The recipient directory could not produce a snapshot."""


class TransportError(CollaboratorError):
    """The chat transport could not be reached."""


class ConfigurationError(DigestError):
    """A recipient group is configured in a way that cannot be delivered."""
