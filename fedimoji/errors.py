"""
Error taxonomy for the emoji pack generator.

Fatal errors propagate out of generate.run(); per-item errors (DecodeError,
ExhaustedError) are caught by the pipeline and recorded as diagnostics.
"""


class FedimojiError(Exception):
    """Base class for all generator errors"""


class ConfigError(FedimojiError):
    """Source directory, import file or config file is missing"""


class ParseError(FedimojiError, ValueError):
    """Import mapping or config file exists but is malformed"""


class DecodeError(FedimojiError):
    """A source image could not be decoded"""

    def __init__(self, path, reason):
        super().__init__(f"failed to read \"{path}\": {reason}")
        self.path = path
        self.reason = reason


class ExhaustedError(FedimojiError, OverflowError):
    """No unreserved codepoint remains in the private-use range"""


class NoValidInputError(FedimojiError):
    """Nothing survived to the composition stage"""


class LayoutError(FedimojiError):
    """Atlas layout invariant violated (a bug, not bad input)"""


class ArtifactWriteError(FedimojiError, OSError):
    """Creating the output directory or writing an artifact failed"""
