"""
AWS Bedrock text-generation client.

Wraps a single ``InvokeModel`` call against an Amazon Titan Text model and
returns the raw response body for the caller to interpret.
"""
import json
import logging
from typing import Any, Dict, Optional, Protocol

import boto3

from nova_health.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class InferenceClient(Protocol):
    """Anything that turns a prompt into a raw inference response body."""

    def generate(self, prompt: str) -> str:
        ...


class BedrockInferenceClient:
    """Client for the Bedrock runtime ``InvokeModel`` API."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        runtime_client: Any = None,
    ):
        """
        Initialize the Bedrock client.

        Args:
            settings: Application settings (defaults to the cached settings)
            runtime_client: Pre-built ``bedrock-runtime`` client; one is
                created for the configured region when omitted
        """
        self.settings = settings or get_settings()
        self.model_id = self.settings.inference_model_id
        self.runtime = runtime_client or boto3.client(
            "bedrock-runtime", region_name=self.settings.aws_region
        )

    def build_request_body(self, prompt: str) -> Dict[str, Any]:
        """Titan Text request body with the configured generation parameters."""
        return {
            "inputText": prompt,
            "textGenerationConfig": {
                "maxTokenCount": self.settings.max_token_count,
                "temperature": self.settings.temperature,
                "topP": self.settings.top_p,
                "stopSequences": list(self.settings.stop_sequences),
            },
        }

    def generate(self, prompt: str) -> str:
        """
        Invoke the model once and return the response body as text.

        Raises:
            botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError:
                on any network, credential or service failure
        """
        response = self.runtime.invoke_model(
            modelId=self.model_id,
            contentType="application/json",
            accept="application/json",
            body=json.dumps(self.build_request_body(prompt)),
        )
        raw = response["body"].read().decode("utf-8")
        logger.debug(f"Raw Bedrock response: {raw}")
        return raw
