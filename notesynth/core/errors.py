"""
Error taxonomy. Every failure is fatal for the run; components raise, the
driver (cli / HTTP app) decides how to terminate.
"""


class SynthError(Exception):
    """Base class for all notesynth failures."""


class InvalidArguments(SynthError):
    pass


class InvalidFileExtension(SynthError):
    pass


class FileOpenFailure(SynthError):
    """Input or output file could not be opened."""


class MalformedScore(SynthError, ValueError):
    pass


class InvalidPitch(SynthError, ValueError):
    pass


class InvalidOctave(SynthError, ValueError):
    pass


class BufferUnderrun(SynthError):
    """Synthesized buffer is shorter than the declared song length."""


class WriteFailure(SynthError):
    pass
