"""Error types for Clashdeploy."""


class DeployError(Exception):
    """Base class for deployment failures."""


class ConfigurationError(DeployError):
    """Unknown network, missing credential or unusable artifact.

    Always raised before any transaction is sent.
    """


class ArtifactError(ConfigurationError):
    """Compiled contract artifact is missing or cannot be deployed."""


class TransactionError(DeployError):
    """The chain endpoint was unreachable or rejected the deployment."""
