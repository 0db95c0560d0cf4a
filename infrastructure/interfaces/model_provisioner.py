"""Abstract interface for fetching recognition models."""

from abc import ABC, abstractmethod


class ModelProvisioner(ABC):
    """Abstract base class for model download mechanisms."""

    @abstractmethod
    def provision(self, model_name: str) -> None:
        """
        Fetches the named model into the local models directory.

        Raises:
            ExternalToolError: If the download fails.
        """
        pass
