"""
Errors raised by the form validation engine.

Validation failures are never exceptions: they are reported through
ValidationResult. Only broken configuration is raised to the caller.
"""


class FormConfigurationError(ValueError):
    """Raised when a form, its submit control or its configuration is unusable."""
    pass
