"""
Pydantic models for the chat endpoint.
"""
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ConversationTurn(BaseModel):
    role: str                       # "user" or "assistant"
    content: str = Field(validation_alias=AliasChoices("content", "text"))


class UserIdentity(BaseModel):
    """Who the chart belongs to. Every field is optional."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    dob: Optional[str] = Field(default=None, validation_alias=AliasChoices("dob", "dateOfBirth"))
    tob: Optional[str] = Field(default=None, validation_alias=AliasChoices("tob", "timeOfBirth"))
    pob: Optional[str] = Field(default=None, validation_alias=AliasChoices("pob", "placeOfBirth"))


class ChatRequest(BaseModel):
    """Request body for POST /chat"""
    model_config = ConfigDict(populate_by_name=True)

    # History excludes the synthetic priming pair; it is rebuilt per call
    messages: List[ConversationTurn] = Field(
        validation_alias=AliasChoices("messages", "conversationHistory"),
    )
    kundali_context: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("kundaliContext", "chartContext", "kundali_context"),
    )
    user_info: Optional[UserIdentity] = Field(
        default=None,
        validation_alias=AliasChoices("userInfo", "userIdentity", "user_info"),
    )


class ChatResponse(BaseModel):
    reply: str
