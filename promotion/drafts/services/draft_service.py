import logging
from typing import List
from sqlalchemy.orm import Session
from promotion.drafts.models import Draft, DraftPick, DraftStatus
from promotion.drafts.schemas.draft_schema import DraftUpdate, DraftPickRead
from promotion.accounts.models import Account
from promotion.wrestlers.models import Wrestler
from promotion.core.broadcaster import Broadcaster, draft_broadcaster
from promotion.core.exceptions import EntityNotFoundError, BusinessRuleError
from promotion.core.utils import generate_custom_id, utcnow

logger = logging.getLogger(__name__)

class DraftService:
    def __init__(self, db: Session, broadcaster: Broadcaster = draft_broadcaster):
        self.db = db
        self.broadcaster = broadcaster

    def get_draft(self, draft_id: str) -> Draft:
        draft = self.db.query(Draft).filter(Draft.draft_id == draft_id).first()
        if not draft:
            raise EntityNotFoundError("Draft", draft_id)
        return draft

    def list_drafts(self):
        return self.db.query(Draft).order_by(Draft.creation_date.desc()).all()

    def start_draft(self, name: str, participant_ids: List[str], rounds: int) -> Draft:
        if not participant_ids:
            raise BusinessRuleError("A draft needs at least one participant")
        if len(set(participant_ids)) != len(participant_ids):
            raise BusinessRuleError("Each account can only appear once in the draft order")
        if rounds < 1:
            raise BusinessRuleError("A draft needs at least one round")
        for account_id in participant_ids:
            if not self.db.query(Account).filter(Account.account_id == account_id).first():
                raise EntityNotFoundError("Account", account_id)

        draft = Draft(
            draft_id=generate_custom_id(self.db, Draft, "DR", "draft_id"),
            name=name,
            participant_ids=list(participant_ids),
            rounds=rounds,
            current_round=1,
            current_pick_number=1,
            status=DraftStatus.ACTIVE,
            creation_date=utcnow(),
        )
        self.db.add(draft)
        self.db.commit()
        self.db.refresh(draft)
        logger.info(f"Draft '{name}' started with {len(participant_ids)} participants over {rounds} rounds")
        return draft

    def get_current_turn(self, draft_id: str):
        return self.get_draft(draft_id).current_turn_account_id

    def get_picks(self, draft_id: str):
        return list(self.get_draft(draft_id).picks)

    def make_pick(self, draft_id: str, account_id: str, wrestler_id: str) -> DraftPick:
        draft = self.get_draft(draft_id)
        if draft.status != DraftStatus.ACTIVE:
            raise BusinessRuleError(f"Draft {draft_id} is already completed")
        if draft.current_turn_account_id != account_id:
            raise BusinessRuleError(f"It is not {account_id}'s turn to pick")
        wrestler = self.db.query(Wrestler).filter(Wrestler.wrestler_id == wrestler_id).first()
        if not wrestler:
            raise EntityNotFoundError("Wrestler", wrestler_id)
        if any(pick.wrestler_id == wrestler_id for pick in draft.picks):
            raise BusinessRuleError(f"{wrestler.name} has already been drafted")

        pick = DraftPick(
            pick_id=generate_custom_id(self.db, DraftPick, "DP", "pick_id"),
            account_id=account_id,
            wrestler_id=wrestler_id,
            round=draft.current_round,
            pick_number=draft.current_pick_number,
            pick_date=utcnow(),
        )
        draft.picks.append(pick)
        wrestler.account_id = account_id

        participants = len(draft.participant_ids)
        draft.current_pick_number += 1
        draft.current_round = (draft.current_pick_number - 1) // participants + 1
        if draft.current_round > draft.rounds:
            draft.current_round = draft.rounds
            draft.status = DraftStatus.COMPLETED

        self.db.commit()
        self.db.refresh(draft)
        logger.info(f"Draft {draft_id}: pick #{pick.pick_number} {account_id} took {wrestler.name}")

        self.broadcaster.broadcast(DraftUpdate(
            draft_id=draft.draft_id,
            pick=DraftPickRead.model_validate(pick),
            wrestler_name=wrestler.name,
            current_round=draft.current_round,
            current_pick_number=draft.current_pick_number,
            next_account_id=draft.current_turn_account_id,
            status=draft.status,
        ))
        return pick
