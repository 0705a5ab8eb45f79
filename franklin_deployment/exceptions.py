"""Exceptions raised by the deployment tooling."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a precompiled contract artifact is missing."""


class InvalidArtifactError(DeploymentError, ValueError):
    """Raised when an artifact has no ABI or no bytecode."""


class MissingEnvironmentVariable(DeploymentError, KeyError):
    """Raised when a required environment variable is not set."""

    def __str__(self):
        return f"{self.args[0]} is not set."


class SourceNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a Solidity import cannot be resolved."""


class UnknownContractError(DeploymentError, ValueError):
    """Raised for contract names the deployer does not track."""
