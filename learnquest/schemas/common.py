"""
learnquest/schemas/common.py
Shared base for wire models.

Documents are stored and served with camelCase keys (totalXP, currentTime,
lastUpdated, ...) so the JSON files stay readable by the browser client.
Python code uses snake_case attributes; populate_by_name lets services build
models either way.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_store(self) -> dict:
        """Dump with camelCase keys, the shape written to disk."""
        return self.model_dump(by_alias=True, mode="json")


class SuccessResponse(CamelModel):
    success: bool = True
    message: Optional[str] = Field(None, description="Human-readable status message")
