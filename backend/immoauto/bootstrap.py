import os

from immoauto.core.database import Base, SessionLocal, engine
from immoauto.core.security import get_password_hash, validate_password_strength
from immoauto.models.user import User, UserRole


def create_user(email: str, name: str, password: str, role: UserRole) -> None:
    email = email.lower()
    if not validate_password_strength(password):
        print("Password must be 8-50 characters with upper case, lower case and a digit")
        return

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            if existing.role != role:
                existing.role = role
                db.commit()
                print(f"Promoted existing user to {role.value}: {email}")
            else:
                print(f"User already exists: {email}")
            return

        user = User(email=email, name=name, hashed_password=get_password_hash(password), role=role)
        db.add(user)
        db.commit()
        print(f"Created {role.value}: {email}")
    finally:
        db.close()


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    # Do not hardcode credentials in the repo. Use env vars for local bootstrap.
    admin_email = os.getenv("BOOTSTRAP_ADMIN_EMAIL")
    admin_password = os.getenv("BOOTSTRAP_ADMIN_PASSWORD")
    if admin_email and admin_password:
        create_user(admin_email, os.getenv("BOOTSTRAP_ADMIN_NAME", "Marketplace Admin"), admin_password, UserRole.admin)
    else:
        print("Bootstrap skipped. Set BOOTSTRAP_ADMIN_EMAIL and BOOTSTRAP_ADMIN_PASSWORD to create an admin user.")
