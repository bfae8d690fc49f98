from typing import List, Optional
from pydantic import BaseModel, Field


class WrestlerContext(BaseModel):
    name: str
    description: Optional[str] = None
    manager_name: Optional[str] = None


class RefereeContext(BaseModel):
    name: str
    description: Optional[str] = None


class NPCContext(BaseModel):
    name: str
    role: str
    description: Optional[str] = None


class SegmentTypeContext(BaseModel):
    segment_type: str
    stipulation: Optional[str] = None
    rules: List[str] = []


class TitleContext(BaseModel):
    name: str
    tier: Optional[str] = None


class SegmentNarrationContext(BaseModel):
    wrestlers: List[WrestlerContext] = Field(..., min_length=1)
    segment_type: SegmentTypeContext
    determined_outcome: str
    referee: Optional[RefereeContext] = None
    npcs: List[NPCContext] = []
    titles: List[TitleContext] = []
    show_name: Optional[str] = None
    audience: Optional[str] = None

    @property
    def commentators(self) -> List[NPCContext]:
        return [npc for npc in self.npcs if npc.role.lower() == "commentator"]


class PromptRequest(BaseModel):
    context: SegmentNarrationContext
    simplified: bool = False


class PromptRead(BaseModel):
    prompt: str


class NarrationRequest(BaseModel):
    simplified: Optional[bool] = None


class NarrationRead(BaseModel):
    segment_id: str
    narration: str
    summary: Optional[str] = None
    provider: str


class NarrationStatus(BaseModel):
    provider: str
    available: bool
    model: Optional[str] = None
