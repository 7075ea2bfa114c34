"""Models for REST API requests."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ChatRequest(BaseModel):
    """Model representing a chat message sent by an operator.

    Attributes:
        message: Free-text operator message.
        session_id: Optional session identifier; a new one is generated when missing.

    Example:
        ```python
        chat_request = ChatRequest(message="Are there any current problems?")
        ```
    """

    message: str = Field(
        description="Free-text operator message",
        examples=["Show me recent problems", "Explain distributed tracing"],
    )

    session_id: Optional[str] = Field(
        None,
        description="Session identifier, generated by the service when not provided",
        examples=["session-1760000000000-k2j4h5g6f"],
    )

    # provides examples for /docs endpoint
    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "message": "Are there any current problems?",
                    "session_id": "ops-team-1",
                },
            ]
        },
    }

    @field_validator("message")
    @classmethod
    def check_message_is_not_blank(cls, value: str) -> str:
        """Reject messages that contain only whitespace."""
        if not value.strip():
            raise ValueError("Message is required and must be a non-empty string")
        return value
