#!/usr/bin/env python3
"""
Reset a user's password from the command line

Usage: stockroom-reset-password <email> <new-password>
"""
import argparse
import sys
from typing import List, Optional

from stockroom.core.database import SessionLocal
from stockroom.core.exceptions import NotFoundError, ValidationError
from stockroom.core.logging import setup_logging
from stockroom.services.auth_service import AuthService


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Reset a user's password")
    parser.add_argument("email")
    parser.add_argument("new_password", metavar="new-password")
    args = parser.parse_args(argv)

    setup_logging(log_to_file=False)

    db = SessionLocal()
    try:
        AuthService(db).reset_password(args.email, args.new_password)
    except (NotFoundError, ValidationError) as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Password updated for {args.email}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
