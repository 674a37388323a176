"""Error types raised by the route builder."""


class RouteBuilderError(Exception):
    """Base class for all route builder errors."""


class InvalidConfiguration(RouteBuilderError):
    """Unknown bike/template, bad duration or degenerate route geometry."""


class ParseError(RouteBuilderError):
    """A track point attribute could not be read as a number."""


class MissingAnchor(RouteBuilderError):
    """The GPX text has no <metadata> tag to inject into."""


class DirectionsServiceError(RouteBuilderError):
    """The directions service could not be reached or refused the request."""


class ExportError(RouteBuilderError):
    """The finished GPX file could not be written."""
