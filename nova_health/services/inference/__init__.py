from .bedrock_client import BedrockInferenceClient, InferenceClient
from .response_parser import EMPTY_REPLY, UNPARSEABLE_REPLY, parse_inference_body

__all__ = [
    "BedrockInferenceClient",
    "InferenceClient",
    "EMPTY_REPLY",
    "UNPARSEABLE_REPLY",
    "parse_inference_body",
]
