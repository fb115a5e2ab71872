class IntmatError(Exception):
    """Base class for intmat precondition violations."""


class OutOfBoundsError(IntmatError, IndexError):
    """Raised when an index falls outside ``[0, dimension)``."""

    def __init__(self, index, size, axis="index"):
        self.index = index
        self.size = size
        self.axis = axis
        message = f"{axis} {index} out of range: [0-{size - 1}]"
        super().__init__(message)


class ShapeMismatchError(IntmatError, ValueError):
    """Raised when operand shapes are incompatible."""


class InvalidArgumentError(IntmatError, ValueError):
    """Raised for bad exponents, lengths, extents or element types."""


class SelfAliasingError(IntmatError, ValueError):
    """Raised when a destination aliases one of its inputs."""

    def __init__(self, operation):
        self.operation = operation
        message = f"{operation} self assignment not allowed: destination shares storage with an input"
        super().__init__(message)


class NilOperandError(IntmatError, TypeError):
    """Raised when a required operand is ``None``."""

    def __init__(self, operation):
        self.operation = operation
        super().__init__(f"{operation} input was found to be None")
