from sqlalchemy.orm import Session

from immoauto.models.audit import AuditLog


def audit_event(
    db: Session,
    action: str,
    target_type: str,
    actor_id: int | None = None,
    target_id: int | None = None,
    ip_address: str | None = None,
    details: dict | None = None,
) -> None:
    entry = AuditLog(
        actor_id=actor_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        ip_address=ip_address,
        details=details,
    )
    db.add(entry)
    db.commit()
