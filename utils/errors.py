"""
Error taxonomy for the fit & context engine
"""


class EngineError(Exception):
    """Base class for every error raised by the engine"""


class InputError(EngineError):
    """Blank job description or chat message, rejected before any side effect"""


class MissingProfileError(EngineError):
    """No candidate profile is configured"""


class UpstreamError(EngineError):
    """Remote model unreachable or returned unusable data"""


class PersistenceError(EngineError):
    """Knowledge store read or write failed"""
