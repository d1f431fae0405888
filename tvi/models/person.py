"""Cast member model."""

from pydantic import BaseModel, Field


class PersonModel(BaseModel):
    """A cast or crew member scraped from the cast page."""
    
    name: str = Field(default="", description="Person's name")
    role: str = Field(default="", description="Free text role, e.g. character played")
