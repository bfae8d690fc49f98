from promotion.core.database import SessionLocal
from promotion.core.scheduler import recalculate_tiers_job, recovery_round_job
from promotion.wrestlers.models import Wrestler, WrestlerTier


def test_recalculate_tiers_job_moves_stale_tiers(db, make_wrestler):
    make_wrestler("Stale Star", fans=200_000, tier=WrestlerTier.ROOKIE)
    make_wrestler("Fresh Face")

    assert recalculate_tiers_job(session_factory=SessionLocal) == 1

    db.expire_all()
    star = db.query(Wrestler).filter(Wrestler.name == "Stale Star").one()
    assert star.tier == WrestlerTier.from_fans(200_000)
    assert recalculate_tiers_job(session_factory=SessionLocal) == 0


def test_recovery_round_only_visits_hurt_wrestlers(db, make_wrestler):
    make_wrestler("Banged Up", bumps=2)
    make_wrestler("Healthy")

    assert recovery_round_job(session_factory=SessionLocal) == 1

    db.expire_all()
    banged_up = db.query(Wrestler).filter(Wrestler.name == "Banged Up").one()
    assert banged_up.bumps in (1, 2)


def test_recovery_round_with_nobody_hurt(make_wrestler):
    make_wrestler("Fit One")
    assert recovery_round_job(session_factory=SessionLocal) == 0
