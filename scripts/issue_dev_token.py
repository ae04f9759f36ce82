#!/usr/bin/env python3
"""Mint a bearer token for local development.

Production tokens come from the identity provider sharing ``SECRET_KEY``.

Usage:
    python scripts/issue_dev_token.py                # new random identity
    python scripts/issue_dev_token.py <user-uuid> --email me@example.com
"""

import argparse
import sys
import uuid
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a development access token")
    parser.add_argument("user_id", nargs="?", type=uuid.UUID, default=None)
    parser.add_argument("--email", default=None)
    args = parser.parse_args()

    user_id = args.user_id or uuid.uuid4()
    token = create_access_token(user_id, email=args.email)
    print(f"User ID: {user_id}")
    print(f"Authorization: Bearer {token}")


if __name__ == "__main__":
    main()
