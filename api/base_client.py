from abc import ABC, abstractmethod

from models.fastgpt import FastGPTRequest, FastGPTResponse


class BaseAnswerClient(ABC):
    """
    Abstract base class for question-answering API clients.
    The orchestrator only depends on this interface.
    """

    def __init__(self, api_key: str, **kwargs):
        """
        Initialize the client.

        Args:
            api_key: API key for the answering service
            **kwargs: Additional client-specific parameters
        """
        self.api_key = api_key

    @abstractmethod
    def query(self, request: FastGPTRequest) -> FastGPTResponse:
        """
        Send a query and return the structured answer.

        Args:
            request: The request to send

        Returns:
            FastGPTResponse with the answer text and its references

        Raises:
            RemoteCallError: If the call fails for any reason
        """
