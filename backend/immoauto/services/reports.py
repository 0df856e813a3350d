import logging

from sqlalchemy.orm import Session

from immoauto.models.report import Report
from immoauto.services.refs import listing_ref, load_listing, ref_columns

logger = logging.getLogger(__name__)


def create_report(db: Session, reporter_id: int, reason: str, property_id: int | None, vehicle_id: int | None) -> Report:
    ref = listing_ref(property_id, vehicle_id)
    load_listing(db, ref)
    report = Report(reporter_id=reporter_id, reason=reason, **ref_columns(ref))
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info("report %s filed by user %s", report.id, reporter_id)
    return report
