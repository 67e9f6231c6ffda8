"""
Pydantic models shared by the score pipeline and the maintenance tools.

These schemas define the process configuration, the stored score snapshot
row, and the outcome of a single pipeline run.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Union
from datetime import datetime
from enum import Enum

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class Settings(BaseModel):
    """
    Process-wide configuration, read once at start and passed explicitly
    to every component.
    """

    model_config = ConfigDict(frozen=True)

    gemini_api_key: Optional[str] = Field(None, description="Generative API key")
    gemini_model: str = Field(DEFAULT_GEMINI_MODEL, description="Model used for generateContent")
    gemini_base_url: str = Field(DEFAULT_GEMINI_BASE_URL, description="Generative API base URL")

    supabase_url: str = Field(..., description="Hosted datastore project URL")
    supabase_anon_key: str = Field(..., description="Datastore anon key")


class ScoreSnapshot(BaseModel):
    """
    One stored text blob of scraped tournament results.

    Rows are created once per successful run and never updated.
    """

    id: int = Field(..., description="Identifier assigned by the datastore")
    content: str = Field(..., min_length=1, description="Normalized results block")
    fetched_at: datetime = Field(..., description="Capture time, ordering and retention key")


class ContentValidation(BaseModel):
    """
    Validation results for a normalized completion.
    """

    is_valid: bool
    errors: List[str] = Field(default_factory=list)

    # Specific validation checks
    has_content: bool = Field(..., description="Text is not empty or whitespace")
    has_section_marker: bool = Field(..., description="Text contains a tournament heading")
    has_match_result: bool = Field(..., description="Text contains a def./vs/score token")
    long_enough: bool = Field(..., description="Text reaches the minimum length")


class RunStatus(str, Enum):
    """Outcome of one pipeline run."""
    INSERTED = "inserted"
    SKIPPED = "skipped"
    FAILED = "failed"


class PipelineResult(BaseModel):
    """
    Result of a single fetch-and-store run.

    Skipped runs are an expected outcome and exit successfully; only
    failed runs produce a non-zero exit code.
    """

    status: RunStatus
    snapshot: Optional[ScoreSnapshot] = None
    reason: Optional[str] = Field(None, description="Skip reason or error message")
    warnings: List[str] = Field(default_factory=list)
    rows_removed: Optional[int] = Field(None, description="Rows deleted by the retention sweep")

    @property
    def exit_code(self) -> int:
        return 1 if self.status == RunStatus.FAILED else 0


class DuplicateMatch(BaseModel):
    """
    Two match rows between the same pair of players, in either order.
    """

    first_id: Union[int, str]
    first_players: str
    first_time: Optional[str] = None
    second_id: Union[int, str]
    second_players: str
    second_time: Optional[str] = None
