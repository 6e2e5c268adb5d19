# core/exceptions.py


class RayTracerError(Exception):
    """Base class for errors raised by the renderer."""


class SceneConfigurationError(RayTracerError, ValueError):
    """The scene or render parameters are unusable; raised before any sampling starts."""


class DegenerateSampleError(RayTracerError, ArithmeticError):
    """A direction was drawn from a mixture density that reports zero density for it."""
