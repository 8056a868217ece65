from .base_client import BaseAnswerClient
from .kagi_client import KagiFastGPTClient

__all__ = ["BaseAnswerClient", "KagiFastGPTClient"]
