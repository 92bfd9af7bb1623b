"""Fatal errors raised by the normalization pipeline.

Anything raised here aborts the generation run: the API description (or the
naming source) no longer matches what the generator assumes and has to be
fixed at the source.
"""


class CodegenError(Exception):
    """Base class for every fatal generator error."""


class InvariantError(CodegenError):
    """A structural invariant of the API description does not hold."""


class FormatterError(CodegenError):
    """The external source formatter failed."""
