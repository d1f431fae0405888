"""Run-time options built by the CLI."""

from typing import List, Optional

from pydantic import BaseModel, Field


class DisplayOptions(BaseModel):
    """Which episode attributes to print."""
    
    air: bool = Field(default=False, description="Print air dates")
    description: bool = Field(default=False, description="Print descriptions")
    rating: bool = Field(default=False, description="Print ratings")
    
    @property
    def count(self) -> int:
        """Number of attributes switched on."""
        return sum((self.air, self.description, self.rating))
    
    @property
    def any(self) -> bool:
        return self.count > 0


class QueryOptions(BaseModel):
    """What the user asked for."""
    
    seasons: List[int] = Field(default_factory=list, description="Season selection spec")
    episodes: List[int] = Field(default_factory=list, description="Episode selection spec")
    cast: Optional[str] = Field(
        default=None,
        description="Cast query; '' lists everyone, None means cast was not requested"
    )
    info: bool = Field(default=False, description="Print series overview")
    highest_rated: bool = Field(default=False, description="Find highest rated episodes")
    lowest_rated: bool = Field(default=False, description="Find lowest rated episodes")
    last: bool = Field(default=False, description="Find the most recently aired episode")
    next: bool = Field(default=False, description="Find the next episode to air")
    show_progress: bool = Field(default=True, description="Report each fetched page")
