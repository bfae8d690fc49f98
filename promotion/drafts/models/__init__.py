from promotion.drafts.models.draft_model import Draft, DraftPick, DraftStatus
