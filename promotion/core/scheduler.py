import logging
from apscheduler.triggers.cron import CronTrigger
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy import or_
from promotion.core.database import SessionLocal

logger = logging.getLogger(__name__)


def recalculate_tiers_job(session_factory=SessionLocal):
    """Move every wrestler to the tier their fan count earns."""
    from promotion.wrestlers.services.wrestler_service import WrestlerService

    db = session_factory()
    try:
        changed = WrestlerService(db).recalculate_tiers()
        logger.info(f"Tier recalculation finished, {changed} wrestler(s) changed tier")
        return changed
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Error in recalculate_tiers_job: {e}")
    finally:
        db.close()


def recovery_round_job(session_factory=SessionLocal):
    """Give every banged-up wrestler one heal chance."""
    from promotion.injuries.models import Injury
    from promotion.wrestlers.models import Wrestler
    from promotion.wrestlers.services.wrestler_service import WrestlerService

    db = session_factory()
    try:
        wrestler_ids = [
            row.wrestler_id
            for row in db.query(Wrestler.wrestler_id)
            .filter(or_(Wrestler.bumps > 0, Wrestler.injuries.any(Injury.is_active.is_(True))))
            .all()
        ]
        service = WrestlerService(db)
        for wrestler_id in wrestler_ids:
            try:
                service.heal_chance(wrestler_id)
            except Exception as e:
                db.rollback()
                logger.error(f"❌ Heal chance failed for {wrestler_id}: {e}")
        logger.info(f"Recovery round finished for {len(wrestler_ids)} wrestler(s)")
        return len(wrestler_ids)
    finally:
        db.close()


def start_scheduler():
    scheduler = BackgroundScheduler()

    # Tiers follow fan counts once a day at 4:00 AM
    @scheduler.scheduled_job(CronTrigger(hour=4, minute=0))
    def tier_job():
        logger.info("🔁 Running tier recalculation")
        recalculate_tiers_job()

    @scheduler.scheduled_job(IntervalTrigger(hours=6))
    def recovery_job():
        logger.info("🔁 Running recovery round")
        recovery_round_job()

    scheduler.start()
    logger.info("✅ Scheduler started with tier + recovery jobs")
    return scheduler
