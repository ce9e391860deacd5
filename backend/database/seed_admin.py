# backend/database/seed_admin.py
"""
Create the admin account if it does not exist yet.

Run from backend/:
    python -m database.seed_admin --email admin@example.com --password secret123
or set ADMIN_NAME / ADMIN_EMAIL / ADMIN_PASSWORD in .env and run without flags.
"""
import argparse
import os
import sys
from typing import Tuple

from sqlalchemy.orm import Session

from database.session import SessionLocal, init_db
from models.user_model import User
from services.security import hash_password


def seed_admin(db: Session, name: str, email: str, password: str) -> Tuple[User, bool]:
    """Returns (user, created). An existing account with that email is left untouched."""
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        return existing, False

    user = User(name=name, email=email, password_hash=hash_password(password), role="admin")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user, True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create the directory admin account")
    parser.add_argument("--name", default=os.getenv("ADMIN_NAME", "Administrator"))
    parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL"))
    parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
    args = parser.parse_args(argv)

    if not args.email or not args.password:
        parser.error("email and password are required (flags or ADMIN_EMAIL / ADMIN_PASSWORD)")

    init_db()
    db = SessionLocal()
    try:
        user, created = seed_admin(db, args.name, args.email, args.password)
    finally:
        db.close()

    if created:
        print(f"Admin created: {user.email} (id {user.id})")
    elif user.role != "admin":
        print(f"{user.email} already exists with role {user.role}; nothing changed")
        return 1
    else:
        print(f"Admin already exists: {user.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
