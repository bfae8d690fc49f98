from sqlalchemy import Column, String, Integer, Boolean, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from promotion.core.database import Base

DEFAULT_SHOWS_PER_PPV = 5
# Show type names marking a pay-per-view or premium live event
PREMIUM_MARKERS = ("ppv", "ple")


def is_premium_show(show) -> bool:
    type_name = (show.show_type.name if show.show_type is not None else "").lower()
    return any(marker in type_name for marker in PREMIUM_MARKERS)


class Season(Base):
    __tablename__ = "seasons"
    __table_args__ = (CheckConstraint("shows_per_ppv > 0", name="ck_season_shows_per_ppv"),)

    season_id = Column(String, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(String(1000))
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime)
    is_active = Column(Boolean, nullable=False, default=False)
    shows_per_ppv = Column(Integer, nullable=False, default=DEFAULT_SHOWS_PER_PPV)
    creation_date = Column(DateTime, nullable=False)

    shows = relationship("Show", back_populates="season", order_by="Show.creation_date")

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def total_shows(self) -> int:
        return len(self.shows)

    @property
    def premium_shows(self) -> int:
        return sum(1 for show in self.shows if is_premium_show(show))

    @property
    def regular_shows(self) -> int:
        return self.total_shows - self.premium_shows

    @property
    def expected_ppv_count(self) -> int:
        return self.total_shows // self.shows_per_ppv

    def is_current_season(self) -> bool:
        return bool(self.is_active) and self.end_date is None

    def regular_shows_since_last_ppv(self) -> int:
        count = 0
        for show in self.shows:
            count = 0 if is_premium_show(show) else count + 1
        return count

    def is_time_for_ppv(self) -> bool:
        return self.regular_shows_since_last_ppv() >= self.shows_per_ppv

    def add_show(self, show):
        if show not in self.shows:
            self.shows.append(show)

    def remove_show(self, show):
        if show in self.shows:
            self.shows.remove(show)

    def end_season(self, when):
        self.is_active = False
        self.end_date = when

    def duration_days(self, now) -> int:
        end = self.end_date or now
        return max(0, (end - self.start_date).days)
