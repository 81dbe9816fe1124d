"""Exception types raised by refviz."""


class RefvizError(Exception):
    """Base class for refviz errors."""
    pass


class IntrospectionError(RefvizError):
    """Raised when a field of a visited object cannot be read.

    A failed read aborts the whole build; no partial diagram is produced.
    """

    def __init__(self, obj_type: type, field_name: str, cause: BaseException):
        self.obj_type = obj_type
        self.field_name = field_name
        self.cause = cause
        super().__init__(
            f"Failed to read field '{field_name}' of {obj_type.__qualname__}: {cause}"
        )


class RenderError(RefvizError):
    """Raised when the external Graphviz executable fails."""
    pass
