"""Legacy score and achievements for player accounts.

Score = one point per thousand fans across the account's wrestlers, fifty per
title reign currently held, plus the XP of every unlocked achievement.
"""
import logging
from sqlalchemy.orm import Session
from promotion.accounts.models import Account, AccountAchievement
from promotion.titles.models import Title
from promotion.core.events import event_bus, AchievementUnlockedEvent
from promotion.core.exceptions import EntityNotFoundError
from promotion.core.utils import generate_custom_id, utcnow

logger = logging.getLogger(__name__)

POINTS_PER_TITLE = 50
FANS_PER_POINT = 1000

# key -> (name, xp)
ACHIEVEMENTS = {
    "FIRST_WRESTLER": ("First Signing", 10),
    "ROSTER_BUILDER": ("Roster Builder", 50),
    "FULL_HOUSE": ("Full House", 200),
    "CROWD_PLEASER": ("Crowd Pleaser", 25),
    "MAIN_EVENT_DRAW": ("Main Event Draw", 100),
    "GLOBAL_ICON": ("Global Icon", 500),
    "FIRST_CHAMPION": ("First Champion", 50),
    "GRAND_SLAM": ("Grand Slam", 250),
    "BOOKER_OF_THE_YEAR": ("Booker of the Year", 150),
}


class LegacyService:
    def __init__(self, db: Session):
        self.db = db

    def _account(self, account_id: str) -> Account:
        account = self.db.query(Account).filter(Account.account_id == account_id).first()
        if not account:
            raise EntityNotFoundError("Account", account_id)
        return account

    @staticmethod
    def _current_reigns(account: Account):
        return [reign for wrestler in account.wrestlers for reign in wrestler.current_reigns]

    def calculate_score(self, account: Account) -> int:
        total_fans = sum(w.fans or 0 for w in account.wrestlers)
        score = total_fans // FANS_PER_POINT
        score += len(self._current_reigns(account)) * POINTS_PER_TITLE
        score += sum(a.xp_value for a in account.achievements)
        return score

    def _finish(self, commit: bool):
        if commit:
            self.db.commit()
        else:
            self.db.flush()

    def update_legacy_score(self, account_id: str, commit: bool = True) -> Account:
        account = self._account(account_id)
        account.legacy_score = self.calculate_score(account)
        logger.info(f"Updated legacy score for {account.username}: {account.legacy_score}")
        self.check_achievements(account)
        self._finish(commit)
        return account

    def check_achievements(self, account: Account):
        wrestlers = list(account.wrestlers)
        total_fans = sum(w.fans or 0 for w in wrestlers)
        reigns = self._current_reigns(account)

        thresholds = [
            ("FIRST_WRESTLER", len(wrestlers) >= 1),
            ("ROSTER_BUILDER", len(wrestlers) >= 10),
            ("FULL_HOUSE", len(wrestlers) >= 50),
            ("CROWD_PLEASER", total_fans >= 10_000),
            ("MAIN_EVENT_DRAW", total_fans >= 100_000),
            ("GLOBAL_ICON", total_fans >= 1_000_000),
            ("FIRST_CHAMPION", len(reigns) > 0),
        ]
        active_titles = self.db.query(Title).filter(Title.is_active.is_(True)).all()
        if active_titles:
            held = {reign.title_id for reign in reigns}
            thresholds.append(("GRAND_SLAM", all(t.title_id in held for t in active_titles)))

        for key, reached in thresholds:
            if reached:
                self._unlock(account, key)

    def _unlock(self, account: Account, key: str) -> bool:
        if key not in ACHIEVEMENTS:
            raise ValueError(f"Unknown achievement: {key}")
        if any(a.achievement_key == key for a in account.achievements):
            return False
        name, xp = ACHIEVEMENTS[key]
        self.db.flush()
        account.achievements.append(AccountAchievement(
            account_achievement_id=generate_custom_id(self.db, AccountAchievement, "AA", "account_achievement_id"),
            achievement_key=key,
            xp_value=xp,
            unlocked_date=utcnow(),
        ))
        account.prestige = (account.prestige or 0) + xp
        # Recalculated without re-checking thresholds
        account.legacy_score = self.calculate_score(account)
        event_bus.publish(self.db, AchievementUnlockedEvent(account_id=account.account_id, achievement_key=key))
        logger.info(f"Unlocked achievement '{name}' for {account.username}")
        return True

    def unlock_achievement(self, account_id: str, key: str, commit: bool = True) -> bool:
        unlocked = self._unlock(self._account(account_id), key)
        self._finish(commit)
        return unlocked

    def increment_shows_booked(self, account_id: str) -> Account:
        account = self._account(account_id)
        account.shows_booked = (account.shows_booked or 0) + 1
        logger.info(f"Account {account.username} has now booked {account.shows_booked} shows")
        if account.shows_booked >= 50:
            self._unlock(account, "BOOKER_OF_THE_YEAR")
        return self.update_legacy_score(account.account_id)
