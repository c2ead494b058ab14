#!/usr/bin/env python
"""
Create an admin account, or reset the password of an existing one.
Run with: cd backend; python scripts/create_admin.py <username> <email> <password>
Requires DATABASE_URL and SECRET_KEY in .env.
"""

import os
import sys

# Add app to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from khayal.auth import get_password_hash
from khayal.database import SessionLocal, init_db
from khayal.models.admin import Admin


def create_admin(username: str, email: str, password: str) -> None:
    init_db()
    db = SessionLocal()
    try:
        admin = db.query(Admin).filter(Admin.username == username).first()
        if admin:
            admin.email = email
            admin.hashed_password = get_password_hash(password)
            print(f"Updated existing admin: {username}")
        else:
            db.add(Admin(
                username=username,
                email=email,
                hashed_password=get_password_hash(password),
                is_active=True
            ))
            print(f"Created admin: {username}")
        db.commit()
    except Exception as e:
        db.rollback()
        print(f"Error creating admin: {e}")
        raise
    finally:
        db.close()


if __name__ == '__main__':
    if len(sys.argv) != 4:
        print(__doc__)
        sys.exit(1)
    create_admin(*sys.argv[1:])
