"""
Generate a SECRET_KEY shared with the identity provider for token signing.

Usage:
    python scripts/generate_secret_key.py [--bytes 64]
"""

import argparse
import secrets


def generate_secret_key(length: int = 64) -> str:
    """Return a URL-safe random key built from ``length`` random bytes."""
    return secrets.token_urlsafe(length)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--bytes", type=int, default=64, dest="length")
    args = parser.parse_args()

    key = generate_secret_key(args.length)
    print(f"SECRET_KEY={key}")
    print("Add this line to .env and configure the identity provider with the same key.")
