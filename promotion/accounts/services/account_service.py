from typing import Optional
from sqlalchemy.orm import Session
from promotion.accounts.models import Account
from promotion.wrestlers.models import Wrestler
from promotion.drafts.models import Draft, DraftPick
from promotion.core.exceptions import EntityNotFoundError, DuplicateEntityError
from promotion.core.utils import ensure_unused, generate_custom_id, paginate, utcnow

class AccountService:
    def __init__(self, db: Session):
        self.db = db

    def list_accounts(self, page: int = 0, size: Optional[int] = None):
        return paginate(self.db.query(Account).order_by(Account.username), page, size)

    def count(self) -> int:
        return self.db.query(Account).count()

    def get_account(self, account_id: str) -> Account:
        account = self.db.query(Account).filter(Account.account_id == account_id).first()
        if not account:
            raise EntityNotFoundError("Account", account_id)
        return account

    def find_by_username(self, username: str) -> Optional[Account]:
        return self.db.query(Account).filter(Account.username == username).first()

    def create_account(self, username: str) -> Account:
        if self.find_by_username(username):
            raise DuplicateEntityError("Account", username)
        account = Account(
            account_id=generate_custom_id(self.db, Account, "A", "account_id"),
            username=username,
            legacy_score=0,
            prestige=0,
            shows_booked=0,
            creation_date=utcnow(),
        )
        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        return account

    def assign_wrestler(self, account_id: str, wrestler_id: str) -> Account:
        """Put a wrestler under this account's management."""
        account = self.get_account(account_id)
        wrestler = self.db.query(Wrestler).filter(Wrestler.wrestler_id == wrestler_id).first()
        if not wrestler:
            raise EntityNotFoundError("Wrestler", wrestler_id)
        wrestler.account = account
        self.db.commit()
        self.db.refresh(account)
        return account

    def delete_account(self, account_id: str):
        account = self.get_account(account_id)
        drafts = [draft for draft in self.db.query(Draft).all() if account_id in (draft.participant_ids or [])]
        ensure_unused("Account", account_id, {
            "drafts": len(drafts),
            "draft picks": self.db.query(DraftPick).filter(DraftPick.account_id == account_id).count(),
        })
        for wrestler in account.wrestlers:
            wrestler.account = None
        self.db.delete(account)
        self.db.commit()
