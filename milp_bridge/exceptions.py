"""Custom exceptions for the MILP solver interface"""


class MilpBridgeException(Exception):
    """Base exception for the MILP solver interface"""
    pass


class ConfigurationError(MilpBridgeException):
    """Raised when configuration is invalid or no solver can be used"""
    pass


class SolverNotFoundError(MilpBridgeException):
    """Raised when requested solver is not available"""
    pass


class SpawnError(MilpBridgeException):
    """Raised when the solver process could not be created"""
    pass


class SolverReportedFailure(MilpBridgeException):
    """Raised when a solver reports a documented non-success status"""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status


class ArtifactError(MilpBridgeException):
    """Raised when a log or solution file is missing or cannot be parsed"""
    pass
