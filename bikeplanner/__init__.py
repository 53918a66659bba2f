"""Location resolution and cycling route synthesis."""

__version__ = "1.0.0"
