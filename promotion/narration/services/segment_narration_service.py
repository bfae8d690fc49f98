import logging
from typing import Optional
from sqlalchemy.orm import Session
from promotion.npcs.models import Npc
from promotion.segments.models import Segment
from promotion.segments.services.segment_service import SegmentService
from promotion.narration.schemas.narration_schema import (
    SegmentNarrationContext, WrestlerContext, RefereeContext, NPCContext, SegmentTypeContext, TitleContext,
)
from promotion.narration.services.narration_service import NarrationService, get_narration_service

logger = logging.getLogger(__name__)


def describe_outcome(segment: Segment) -> str:
    winners = [w.name for w in segment.winners]
    if len(winners) == 1:
        return f"{winners[0]} wins"
    if winners:
        return f"{' and '.join(winners)} win"
    if segment.segment_type.is_match:
        return "The match ends without a winner"
    return "The segment ends without a decisive result"


class SegmentNarrationService:
    def __init__(self, db: Session, narration_service: Optional[NarrationService] = None):
        self.db = db
        self.segment_service = SegmentService(db)
        self.narration_service = narration_service or get_narration_service()

    def build_context(self, segment: Segment) -> SegmentNarrationContext:
        wrestlers = [
            WrestlerContext(
                name=w.name,
                description=w.description,
                manager_name=w.manager.name if w.manager else None,
            )
            for w in segment.participants
        ]

        npcs = [
            NPCContext(name=npc.name, role=npc.npc_type, description=npc.description)
            for npc in self.db.query(Npc).filter(Npc.npc_type == "Commentator").order_by(Npc.name).all()
        ]
        seen = {npc.name for npc in npcs}
        for wrestler in segment.participants:
            if wrestler.manager and wrestler.manager.name not in seen:
                seen.add(wrestler.manager.name)
                npcs.append(NPCContext(name=wrestler.manager.name, role="Manager",
                                       description=wrestler.manager.description))

        rules = []
        if segment.match_type and segment.match_type.description:
            rules.append(segment.match_type.description)

        return SegmentNarrationContext(
            wrestlers=wrestlers,
            segment_type=SegmentTypeContext(
                segment_type=segment.match_type.name if segment.match_type else segment.segment_type.name,
                stipulation=segment.stipulation,
                rules=rules,
            ),
            determined_outcome=describe_outcome(segment),
            referee=RefereeContext(name=segment.referee.ref_name, description=segment.referee.description)
            if segment.referee else None,
            npcs=npcs,
            titles=[TitleContext(name=t.name, tier=t.tier.display_name) for t in segment.titles],
            show_name=segment.show.name if segment.show else None,
        )

    def narrate_segment(self, segment_id: str, simplified: Optional[bool] = None) -> dict:
        """Narrate a booked segment, summarize it and store both on the segment."""
        segment = self.segment_service.get_segment(segment_id)
        context = self.build_context(segment)
        narration = self.narration_service.narrate(context, simplified)
        summary = self.narration_service.summarize(narration)
        segment = self.segment_service.update_narration(segment_id, narration, summary)
        logger.info(f"Segment {segment_id} narrated by {self.narration_service.provider_name}")
        return {
            "segment_id": segment.segment_id,
            "narration": segment.narration,
            "summary": segment.summary,
            "provider": self.narration_service.provider_name,
        }
